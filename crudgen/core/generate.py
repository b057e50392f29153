"""Artifact generation and writing."""
import logging
from pathlib import Path
from typing import Iterable, Iterator, List, NamedTuple, Optional, Union

from pydantic import BaseModel

from crudgen.config.settings import GeneratorConfig
from crudgen.core.extractor import extract
from crudgen.core.naming import naming_variants
from crudgen.core.view_models import VIEW_MODEL_BUILDERS
from crudgen.errors import (
    CrudgenError,
    GenerationError,
    InputReadError,
)
from crudgen.models.schema import TableSchema
from crudgen.output.renderer import TemplateRenderer
from crudgen.sql.parser import astify

logger = logging.getLogger(__name__)

OUTPUT_SUBDIRECTORIES = (
    'config',
    'controllers',
    'data',
    'dtos',
    'exceptions',
    'handlers',
    'http/requests',
    'http/responses',
)


class ArtifactSpec(NamedTuple):
    """Where one template's output goes."""

    template: str
    view_model: str
    path: str


# Generation order; paths use {singular} / {plural} dashed file names
ARTIFACT_LAYOUT = (
    ArtifactSpec('prisma-model', 'persistence_model', '{plural}.model.prisma'),
    ArtifactSpec('dto', 'dto', 'dtos/{singular}.dto.ts'),
    ArtifactSpec('handler', 'handler', 'handlers/{plural}.handler.ts'),
    ArtifactSpec('controller', 'controller', 'controllers/{plural}.controller.ts'),
    ArtifactSpec('dbservice', 'db_service', 'data/{plural}-db.service.ts'),
    ArtifactSpec('response', 'response', 'http/responses/{singular}.response.ts'),
    ArtifactSpec('listresponse', 'list_response', 'http/responses/{plural}-list.response.ts'),
    ArtifactSpec('notfound-error', 'not_found_error', 'exceptions/{singular}-not-found-error.ts'),
    ArtifactSpec('constants', 'constants', 'config/constants.ts'),
    ArtifactSpec('module', 'module', '{plural}.module.ts'),
    ArtifactSpec('request', 'request', 'http/requests/{singular}.request.ts'),
)


class Artifact(BaseModel):
    """One rendered file, relative to the output root."""

    name: str
    path: str
    content: str


class GenerationResult(BaseModel):
    """Outcome of a complete run."""

    table_name: str
    output_dir: str
    written: List[str] = []


def artifact_paths(schema: TableSchema) -> List[str]:
    """Relative output paths for a schema, in generation order."""
    names = naming_variants(schema.table_name)
    return [
        spec.path.format(singular=names.singular_file_name, plural=names.plural_file_name)
        for spec in ARTIFACT_LAYOUT
    ]


def iter_artifacts(schema: TableSchema, renderer: TemplateRenderer) -> Iterator[Artifact]:
    """Render artifacts one at a time, in layout order.

    Raises:
        GenerationError: On the first artifact that cannot be built or rendered
    """
    for spec, path in zip(ARTIFACT_LAYOUT, artifact_paths(schema)):
        try:
            view_model = VIEW_MODEL_BUILDERS[spec.view_model](schema)
            content = renderer.render(spec.template, view_model)
        except Exception as e:  # pylint: disable=broad-except
            raise GenerationError(f"Failed to generate {path}: {e}") from e
        yield Artifact(name=spec.template, path=path, content=content)


def generate(schema: TableSchema, renderer: Optional[TemplateRenderer] = None) -> List[Artifact]:
    """Render every artifact for a schema without touching the filesystem."""
    return list(iter_artifacts(schema, renderer or TemplateRenderer()))


def read_sql_script(path: Union[str, Path]) -> str:
    """Read the source SQL script.

    Raises:
        InputReadError: If the file cannot be read
    """
    try:
        with open(path, 'r', encoding='utf-8') as f:
            return f.read()
    except (OSError, UnicodeDecodeError) as e:
        raise InputReadError(f"Error reading SQL script file: {e}") from e


def ensure_output_tree(root: Union[str, Path]) -> Path:
    """Create the output root and its sub-directories; existing ones are kept."""
    root = Path(root)
    for subdirectory in OUTPUT_SUBDIRECTORIES:
        (root / subdirectory).mkdir(parents=True, exist_ok=True)
    return root


def write_artifacts(artifacts: Iterable[Artifact], root: Union[str, Path]) -> List[Path]:
    """Write artifacts as they are produced.

    A failure stops the run; files written before it are left in place.

    Raises:
        GenerationError: If an artifact cannot be produced or written
    """
    root = Path(root)
    written = []
    for artifact in artifacts:
        target = root / artifact.path
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(artifact.content, encoding='utf-8')
        except OSError as e:
            raise GenerationError(f"Failed to write {target}: {e}") from e
        logger.info("Wrote %s", target)
        written.append(target)
    return written


def run_generation(
    sql_path: Union[str, Path],
    config: Optional[GeneratorConfig] = None,
    renderer: Optional[TemplateRenderer] = None
) -> GenerationResult:
    """Generate all CRUD artifacts for the CREATE TABLE in `sql_path`.

    Args:
        sql_path: Path to the SQL script
        config: Generator settings (defaults when omitted)
        renderer: Template renderer (built from config when omitted)

    Returns:
        GenerationResult listing the written files

    Raises:
        InputReadError: If the script cannot be read; nothing is created
        SqlParseError: If the script cannot be parsed
        NotACreateTableError: If the first statement is not CREATE TABLE
        GenerationError: If any later step fails
    """
    config = config or GeneratorConfig()
    sql_script = read_sql_script(sql_path)

    schema = extract(astify(sql_script, dialect=config.dialect))
    logger.info(
        "Extracted table %s: %d columns, %d relations, %d indexes",
        schema.table_name, len(schema.columns), len(schema.relations), len(schema.indexes)
    )

    try:
        renderer = renderer or TemplateRenderer(config.template_dir)
        root = ensure_output_tree(config.output_dir)
        written = write_artifacts(iter_artifacts(schema, renderer), root)
    except GenerationError:
        raise
    except (CrudgenError, OSError) as e:
        raise GenerationError(str(e)) from e

    return GenerationResult(
        table_name=schema.table_name,
        output_dir=str(root),
        written=[str(path) for path in written],
    )
