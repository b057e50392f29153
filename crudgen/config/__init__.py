"""Configuration management."""
from crudgen.config.settings import (
    GeneratorConfig,
    GeneratorConfigError,
    load_generator_config,
)

__all__ = [
    'GeneratorConfig',
    'GeneratorConfigError',
    'load_generator_config',
]
