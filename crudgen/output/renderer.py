"""Jinja2 rendering of generated sources."""
import logging
from pathlib import Path
from typing import Any, Dict, Optional, Union

from jinja2 import (
    Environment,
    FileSystemLoader,
    StrictUndefined,
    TemplateError,
    TemplateNotFound,
)

from crudgen.core.naming import to_camel_case
from crudgen.errors import TemplateRenderError

logger = logging.getLogger(__name__)

DEFAULT_TEMPLATE_DIR = Path(__file__).resolve().parent.parent / 'templates'

# Template name -> file under the template directory
TEMPLATE_FILES: Dict[str, str] = {
    'dto': 'dto.ts.j2',
    'controller': 'controller.ts.j2',
    'handler': 'handler.ts.j2',
    'dbservice': 'dbservice.ts.j2',
    'response': 'response.ts.j2',
    'listresponse': 'listresponse.ts.j2',
    'notfound-error': 'notfound-error.ts.j2',
    'request': 'request.ts.j2',
    'prisma-model': 'prisma-model.prisma.j2',
    'constants': 'constants.ts.j2',
    'module': 'module.ts.j2',
}


class TemplateRenderer:
    """Renders named templates against view models."""

    def __init__(self, template_dir: Optional[Union[str, Path]] = None):
        """Create the Jinja2 environment over the template directory."""
        self.template_dir = Path(template_dir) if template_dir else DEFAULT_TEMPLATE_DIR
        self._env = Environment(
            loader=FileSystemLoader(str(self.template_dir)),
            autoescape=False,
            undefined=StrictUndefined,
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
        )
        self._env.filters['camel_case'] = to_camel_case
        logger.debug("Loading templates from %s", self.template_dir)

    def render(self, template_name: str, view_model: Dict[str, Any]) -> str:
        """Render one named template.

        Raises:
            TemplateRenderError: If the template is unknown, missing or fails
        """
        file_name = TEMPLATE_FILES.get(template_name)
        if not file_name:
            raise TemplateRenderError(f"Unknown template: {template_name}")

        try:
            return self._env.get_template(file_name).render(**view_model)
        except TemplateNotFound as e:
            raise TemplateRenderError(
                f"Template file not found: {self.template_dir / file_name}"
            ) from e
        except TemplateError as e:
            raise TemplateRenderError(f"Failed to render '{template_name}': {e}") from e
