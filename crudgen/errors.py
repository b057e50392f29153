"""Error types raised across the generation pipeline."""


class CrudgenError(Exception):
    """Base class for all crudgen errors."""


class InputReadError(CrudgenError):
    """Raised when the source SQL script cannot be read."""


class SqlParseError(CrudgenError):
    """Raised when the SQL text cannot be parsed."""


class NotACreateTableError(CrudgenError):
    """Raised when the statement is not a CREATE TABLE statement."""


class MissingColumnTypeError(CrudgenError):
    """Raised for a column definition without a data type.

    Recovered by the extractor: the column is skipped.
    """

    def __init__(self, column_name: str):
        super().__init__(f"Missing data type for column: {column_name}")
        self.column_name = column_name


class UnrecognizedSqlTypeError(CrudgenError):
    """Raised when a SQL type has no persistence mapping.

    Recovered by the type mapper, which falls back to String.
    """

    def __init__(self, sql_type, column_name: str):
        super().__init__(
            f'Unrecognized SQL type for column "{column_name}": {sql_type}. '
            "Defaulting to String."
        )
        self.sql_type = sql_type
        self.column_name = column_name


class TemplateRenderError(CrudgenError):
    """Raised when a template is missing or fails to render."""


class GenerationError(CrudgenError):
    """Raised when building, rendering or writing an artifact fails."""
