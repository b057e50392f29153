"""Tests for artifact generation and writing."""
from unittest.mock import MagicMock

import pytest

from crudgen.config.settings import GeneratorConfig
from crudgen.core.extractor import extract
from crudgen.core.generate import (
    ARTIFACT_LAYOUT,
    artifact_paths,
    ensure_output_tree,
    generate,
    iter_artifacts,
    read_sql_script,
    run_generation,
    write_artifacts,
)
from crudgen.errors import (
    GenerationError,
    InputReadError,
    NotACreateTableError,
    TemplateRenderError,
)
from crudgen.output.renderer import TemplateRenderer
from crudgen.sql.parser import astify

EXPECTED_PATHS = [
    "users.model.prisma",
    "dtos/user.dto.ts",
    "handlers/users.handler.ts",
    "controllers/users.controller.ts",
    "data/users-db.service.ts",
    "http/responses/user.response.ts",
    "http/responses/users-list.response.ts",
    "exceptions/user-not-found-error.ts",
    "config/constants.ts",
    "users.module.ts",
    "http/requests/user.request.ts",
]


def test_artifact_paths(table_factory):
    """Test function."""
    assert artifact_paths(table_factory(table_name="users")) == EXPECTED_PATHS


def test_artifact_paths_use_dashed_names(table_factory):
    """Test function."""
    paths = artifact_paths(table_factory(table_name="user_roles"))
    assert "user-roles.model.prisma" in paths
    assert "dtos/user-role.dto.ts" in paths
    assert "data/user-roles-db.service.ts" in paths


def test_generate_renders_every_artifact(users_sql):
    """Test function."""
    artifacts = generate(extract(astify(users_sql)))

    assert [a.path for a in artifacts] == EXPECTED_PATHS
    assert [a.name for a in artifacts] == [spec.template for spec in ARTIFACT_LAYOUT]
    assert all(a.content for a in artifacts)


def test_generate_is_deterministic(users_sql):
    """Test function."""
    schema = extract(astify(users_sql))
    assert generate(schema) == generate(schema)


def test_render_failure_stops_iteration(table_factory):
    """Test function."""
    renderer = MagicMock(spec=TemplateRenderer)
    renderer.render.side_effect = ["model", "dto", TemplateRenderError("boom")]

    artifacts = iter_artifacts(table_factory(), renderer)
    assert next(artifacts).content == "model"
    assert next(artifacts).content == "dto"
    with pytest.raises(GenerationError, match="handlers/users.handler.ts: boom"):
        next(artifacts)


def test_write_artifacts_keeps_files_written_before_failure(tmp_path, table_factory):
    """Test function."""
    renderer = MagicMock(spec=TemplateRenderer)
    renderer.render.side_effect = ["model", "dto", TemplateRenderError("boom")]

    with pytest.raises(GenerationError):
        write_artifacts(iter_artifacts(table_factory(), renderer), tmp_path)

    assert (tmp_path / "users.model.prisma").read_text(encoding="utf-8") == "model"
    assert (tmp_path / "dtos" / "user.dto.ts").read_text(encoding="utf-8") == "dto"
    assert not (tmp_path / "handlers" / "users.handler.ts").exists()


def test_ensure_output_tree_is_idempotent(tmp_path):
    """Test function."""
    root = tmp_path / "out"
    ensure_output_tree(root)
    (root / "dtos" / "keep.ts").write_text("x", encoding="utf-8")
    ensure_output_tree(root)

    for subdirectory in ("config", "controllers", "data", "dtos", "exceptions",
                         "handlers", "http/requests", "http/responses"):
        assert (root / subdirectory).is_dir()
    assert (root / "dtos" / "keep.ts").exists()


def test_read_sql_script_missing(tmp_path):
    """Test function."""
    with pytest.raises(InputReadError, match="Error reading SQL script file"):
        read_sql_script(tmp_path / "missing.sql")


def test_run_generation(tmp_path, sql_file, templates_sql):
    """Test function."""
    output_dir = tmp_path / "out"
    result = run_generation(sql_file(templates_sql), GeneratorConfig(output_dir=str(output_dir)))

    assert result.table_name == "Templates"
    assert len(result.written) == 11
    dto = (output_dir / "dtos" / "template.dto.ts").read_text(encoding="utf-8")
    assert "export class TemplateDto {" in dto
    assert "createdBy" not in dto
    model = (output_dir / "templates.model.prisma").read_text(encoding="utf-8")
    assert "model Templates {" in model
    assert "createdBy String @db.Uuid" in model
    assert "deletedOn DateTime? @db.Timestamp" in model


def test_run_generation_unreadable_input_creates_nothing(tmp_path):
    """Test function."""
    output_dir = tmp_path / "out"
    with pytest.raises(InputReadError):
        run_generation(tmp_path / "missing.sql", GeneratorConfig(output_dir=str(output_dir)))
    assert not output_dir.exists()


def test_run_generation_rejects_non_create(tmp_path, sql_file):
    """Test function."""
    output_dir = tmp_path / "out"
    with pytest.raises(NotACreateTableError):
        run_generation(
            sql_file("INSERT INTO users (id) VALUES (1)"),
            GeneratorConfig(output_dir=str(output_dir)),
        )
    assert not output_dir.exists()


def test_run_generation_render_failure(tmp_path, sql_file, users_sql):
    """Test function."""
    renderer = MagicMock(spec=TemplateRenderer)
    renderer.render.side_effect = ["model", TemplateRenderError("bad template")]
    output_dir = tmp_path / "out"

    with pytest.raises(GenerationError, match="bad template"):
        run_generation(sql_file(users_sql), GeneratorConfig(output_dir=str(output_dir)), renderer)

    assert (output_dir / "users.model.prisma").exists()
    assert not (output_dir / "dtos" / "user.dto.ts").exists()


def test_run_generation_missing_template_dir(tmp_path, sql_file, users_sql):
    """Test function."""
    config = GeneratorConfig(output_dir=str(tmp_path / "out"), template_dir=str(tmp_path / "none"))
    with pytest.raises(GenerationError, match="Template file not found"):
        run_generation(sql_file(users_sql), config)
