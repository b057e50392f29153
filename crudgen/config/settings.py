"""Generator configuration management."""
import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from pydantic import BaseModel, ValidationError, field_validator

from crudgen.errors import CrudgenError

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_FILE = 'crudgen.yaml'

SUPPORTED_DIALECTS = ('mysql', 'postgres', 'sqlite', 'tsql', 'snowflake', 'bigquery')

# Environment variable -> config key
ENV_VARIABLES = {
    'CRUDGEN_OUTPUT_DIR': 'output_dir',
    'CRUDGEN_DIALECT': 'dialect',
    'CRUDGEN_TEMPLATE_DIR': 'template_dir',
}


class GeneratorConfigError(CrudgenError, ValueError):
    """Raised when generator configuration loading fails."""


class GeneratorConfig(BaseModel):
    """Settings for one generation run."""

    output_dir: str = 'output'
    dialect: str = 'mysql'
    template_dir: Optional[str] = None
    default_sql_file: str = 'generate-crud.sql'

    @field_validator('dialect')
    @classmethod
    def _check_dialect(cls, value: str) -> str:
        value = value.lower()
        if value not in SUPPORTED_DIALECTS:
            raise ValueError(
                f"Unsupported dialect '{value}'. Supported: {', '.join(SUPPORTED_DIALECTS)}"
            )
        return value


def load_generator_config(
    config_file: Optional[str] = None,
    overrides: Optional[Dict[str, Any]] = None
) -> GeneratorConfig:
    """Load generator configuration.

    Loads configuration with the following priority:
    1. Explicit --config path (highest priority)
    2. ./crudgen.yaml in the working directory
    3. CRUDGEN_* environment variables
    4. Defaults

    Values in `overrides` that are not None (typically CLI flags) are
    applied on top of whichever source was used.

    Args:
        config_file: Optional explicit configuration file path
        overrides: Optional explicit values for individual settings

    Returns:
        Validated GeneratorConfig

    Raises:
        GeneratorConfigError: If a configuration file or value is invalid
    """
    if config_file:
        values = _load_yaml_config(config_file)
        logger.info("Loaded generator config from: %s", config_file)
    elif Path(DEFAULT_CONFIG_FILE).exists():
        values = _load_yaml_config(DEFAULT_CONFIG_FILE)
        logger.info("Loaded generator config from: %s", DEFAULT_CONFIG_FILE)
    else:
        values = _load_from_env()
        if values:
            logger.info("Loaded generator config from environment variables")

    for key, value in (overrides or {}).items():
        if value is not None:
            values[key] = value

    try:
        return GeneratorConfig(**values)
    except ValidationError as e:
        raise GeneratorConfigError(f"Invalid generator configuration:\n{e}") from e


def _load_yaml_config(file_path: str) -> Dict[str, Any]:
    """Load a YAML configuration file.

    Raises:
        GeneratorConfigError: If the file is missing or not a YAML mapping
    """
    try:
        if not os.path.exists(file_path):
            raise GeneratorConfigError(f"Configuration file not found: {file_path}")

        with open(file_path, 'r', encoding='utf-8') as f:
            config = yaml.safe_load(f)

        if config is None:
            return {}
        if not isinstance(config, dict):
            raise GeneratorConfigError(
                f"Configuration file must contain a YAML dictionary: {file_path}"
            )
        return config

    except yaml.YAMLError as e:
        raise GeneratorConfigError(
            f"Invalid YAML configuration: {file_path}\n{e}"
        ) from e
    except OSError as e:
        raise GeneratorConfigError(
            f"Error reading configuration file: {file_path}\n{e}"
        ) from e


def _load_from_env() -> Dict[str, Any]:
    """Collect settings from CRUDGEN_* environment variables."""
    config = {}
    for env_key, config_key in ENV_VARIABLES.items():
        value = os.getenv(env_key)
        if value:
            config[config_key] = value
    return config
