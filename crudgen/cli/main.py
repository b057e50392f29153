"""Command-line interface for crudgen - CRUD source generator for SQL tables."""
import argparse
import logging
import sys

from crudgen.config.settings import (
    SUPPORTED_DIALECTS,
    GeneratorConfigError,
    load_generator_config,
)
from crudgen.core.generate import run_generation
from crudgen.errors import CrudgenError, GenerationError

logger = logging.getLogger(__name__)


def run_generate(args):
    """Execute the generate command."""
    try:
        config = load_generator_config(
            getattr(args, 'config', None),
            overrides={
                'output_dir': getattr(args, 'output_dir', None),
                'dialect': getattr(args, 'dialect', None),
                'template_dir': getattr(args, 'template_dir', None),
            }
        )
    except GeneratorConfigError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    sql_file = args.sql_file or config.default_sql_file

    try:
        result = run_generation(sql_file, config)
    except GenerationError as e:
        print(f"Error: Failed to generate CRUD classes or Prisma model: {e}", file=sys.stderr)
        sys.exit(1)
    except CrudgenError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    print(
        f"CRUD classes and Prisma model have been generated successfully "
        f"({len(result.written)} files in {result.output_dir})."
    )
    sys.exit(0)


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def main():
    """Parse command line arguments and execute appropriate command."""
    parser = argparse.ArgumentParser(
        description="crudgen - generate CRUD sources from a SQL CREATE TABLE statement",
        epilog="Examples:\n"
               "  crudgen generate\n"
               "  crudgen generate schema/users.sql --output-dir src/users\n"
               "  crudgen generate users.sql --dialect postgres --config crudgen.yaml",
        formatter_class=argparse.RawDescriptionHelpFormatter
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true",
        help="Enable debug logging"
    )
    subparsers = parser.add_subparsers(dest="command")

    generate_parser = subparsers.add_parser(
        "generate",
        help="Generate DTOs, handlers, controllers, services and a Prisma model",
        description="Generate CRUD sources for the CREATE TABLE statement in a SQL file"
    )
    generate_parser.add_argument(
        "sql_file", nargs="?", default=None,
        help="SQL file with one CREATE TABLE statement (default: generate-crud.sql)"
    )
    generate_parser.add_argument(
        "--output-dir",
        help="Output root directory (default: output)"
    )
    generate_parser.add_argument(
        "--dialect",
        choices=SUPPORTED_DIALECTS,
        help="SQL dialect used to parse the script (default: mysql)"
    )
    generate_parser.add_argument(
        "--template-dir",
        help="Directory with custom templates (default: bundled templates)"
    )
    generate_parser.add_argument(
        "--config",
        help="Path to a YAML config file (default: ./crudgen.yaml if present)"
    )

    args = parser.parse_args()
    _configure_logging(args.verbose)

    if args.command == "generate":
        run_generate(args)
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
