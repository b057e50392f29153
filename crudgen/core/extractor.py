"""Schema extraction from the generic CREATE TABLE AST."""
import logging
import re
from typing import Any, List, Set

from crudgen.core.naming import to_camel_case, to_singular_class_name
from crudgen.core.types import to_persistence_type, to_semantic_type
from crudgen.errors import MissingColumnTypeError, NotACreateTableError
from crudgen.models.schema import Column, Index, Relation, TableSchema
from crudgen.sql.definitions import (
    ColumnDefinition,
    CreateStatement,
    ForeignKeyDefinition,
    IndexDefinition,
)

logger = logging.getLogger(__name__)


def extract(ast: Any) -> TableSchema:
    """Build a TableSchema from a parsed CREATE TABLE statement.

    When given a list of statements only the first one is used; the rest
    of a multi-statement script is ignored.

    Args:
        ast: A generic statement mapping, or a list of them

    Returns:
        TableSchema with columns, relations and indexes in declaration order

    Raises:
        NotACreateTableError: If the statement is not a CREATE TABLE
    """
    if isinstance(ast, (list, tuple)):
        if not ast:
            raise NotACreateTableError("Provided SQL is not a CREATE TABLE statement.")
        if len(ast) > 1:
            logger.debug("Ignoring %d statements after the first", len(ast) - 1)
        ast = ast[0]

    statement = CreateStatement.from_ast(ast)
    if not statement.is_create_table:
        raise NotACreateTableError("Provided SQL is not a CREATE TABLE statement.")

    columns: List[Column] = []
    foreign_keys: List[ForeignKeyDefinition] = []
    indexes: List[Index] = []

    for definition in statement.definitions:
        if isinstance(definition, ColumnDefinition):
            try:
                columns.append(_extract_column(definition))
            except MissingColumnTypeError as e:
                logger.warning("%s", e)
        elif isinstance(definition, ForeignKeyDefinition):
            foreign_keys.append(definition)
        elif isinstance(definition, IndexDefinition):
            indexes.append(Index(name=definition.name, fields=', '.join(definition.columns)))

    column_names = {column.name for column in columns}
    relations = [_extract_relation(fk, column_names) for fk in foreign_keys]

    return TableSchema(
        table_name=statement.table_name or '',
        columns=columns,
        relations=relations,
        indexes=indexes,
    )


def _extract_column(definition: ColumnDefinition) -> Column:
    if not definition.data_type:
        raise MissingColumnTypeError(definition.name)

    return Column(
        name=definition.name,
        sql_type=definition.data_type,
        semantic_type=to_semantic_type(definition.data_type),
        persistence_type=to_persistence_type(definition.data_type, definition.name),
        is_optional=definition.is_optional,
        length=definition.length,
    )


def _related_model(table_name: str) -> str:
    # DEPARTMENTS and departments name the same model; mixed case such as
    # UserRoles marks word boundaries and is kept
    if table_name.isupper():
        table_name = table_name.lower()
    return to_singular_class_name(table_name)


def _relation_name(column: str, column_names: Set[str]) -> str:
    """camelCase of the key column, renamed when it would shadow a scalar field."""
    name = to_camel_case(column)
    if name not in column_names:
        return name
    trimmed = re.sub(r'Id$', '', name)
    if trimmed and trimmed not in column_names:
        return trimmed
    return f"{name}Relation"


def _extract_relation(definition: ForeignKeyDefinition, column_names: Set[str]) -> Relation:
    return Relation(
        name=_relation_name(definition.column, column_names),
        related_model=_related_model(definition.referenced_table),
        field=definition.column,
        references=definition.referenced_column,
        on_delete=definition.on_delete,
        on_update=definition.on_update,
    )
