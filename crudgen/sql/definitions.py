"""Typed definitions built from the generic CREATE TABLE AST.

The generic AST is a tree of plain mappings (or attribute objects) in the
shape produced by `crudgen.sql.parser.astify`. It is converted eagerly
into the closed set of definition variants below so that nothing past the
extractor boundary inspects raw nodes.
"""
import logging
from typing import Any, List, Literal, Optional, Union

from pydantic import BaseModel

from crudgen.models.schema import ReferentialAction

logger = logging.getLogger(__name__)

_ACTIONS = {
    'noaction': ReferentialAction.NO_ACTION,
    'cascade': ReferentialAction.CASCADE,
    'setnull': ReferentialAction.SET_NULL,
    'restrict': ReferentialAction.RESTRICT,
    'setdefault': ReferentialAction.SET_DEFAULT,
}


class ColumnDefinition(BaseModel):
    """A column definition."""

    kind: Literal['column'] = 'column'
    name: str
    data_type: Optional[str] = None
    length: Optional[int] = None
    is_optional: bool = False


class ForeignKeyDefinition(BaseModel):
    """A FOREIGN KEY table constraint."""

    kind: Literal['foreign_key'] = 'foreign_key'
    name: Optional[str] = None
    column: str
    referenced_table: str
    referenced_column: str
    on_delete: ReferentialAction = ReferentialAction.NO_ACTION
    on_update: ReferentialAction = ReferentialAction.NO_ACTION


class IndexDefinition(BaseModel):
    """An INDEX / KEY definition."""

    kind: Literal['index'] = 'index'
    name: Optional[str] = None
    columns: List[str]


class OtherDefinition(BaseModel):
    """Any definition the generator does not use (primary key, unique, check...)."""

    kind: Literal['other'] = 'other'
    label: Optional[str] = None


Definition = Union[ColumnDefinition, ForeignKeyDefinition, IndexDefinition, OtherDefinition]


class CreateStatement(BaseModel):
    """The parts of a statement the extractor needs."""

    statement_type: Optional[str] = None
    keyword: Optional[str] = None
    table_name: Optional[str] = None
    definitions: List[Definition] = []

    @property
    def is_create_table(self) -> bool:
        """True when the statement creates a table."""
        return (
            (self.statement_type or '').lower() == 'create'
            and (self.keyword or 'table').lower() == 'table'
        )

    @classmethod
    def from_ast(cls, node: Any) -> 'CreateStatement':
        """Convert one generic AST statement."""
        statement_type = field(node, 'type')
        if (statement_type or '').lower() != 'create':
            return cls(statement_type=statement_type)

        return cls(
            statement_type=statement_type,
            keyword=field(node, 'keyword'),
            table_name=_first_table_name(field(node, 'table')),
            definitions=[to_definition(d) for d in field(node, 'create_definitions') or []],
        )


def field(node: Any, key: str, default: Any = None) -> Any:
    """Read a key from a mapping or an attribute from an object."""
    if node is None:
        return default
    if isinstance(node, dict):
        return node.get(key, default)
    return getattr(node, key, default)


def _first_table_name(tables: Any) -> Optional[str]:
    if isinstance(tables, (list, tuple)):
        if not tables:
            return None
        tables = tables[0]
    if isinstance(tables, str):
        return tables
    return field(tables, 'table')


def _column_names(nodes: Any) -> List[str]:
    if not nodes:
        return []
    if not isinstance(nodes, (list, tuple)):
        nodes = [nodes]
    names = []
    for node in nodes:
        name = node if isinstance(node, str) else field(node, 'column')
        if name:
            names.append(str(name))
    return names


def _length(definition: Any) -> Optional[int]:
    length = field(definition, 'length')
    if length is not None and not isinstance(length, (int, str)):
        length = field(length, 'value')
    try:
        return int(length) if length is not None else None
    except (TypeError, ValueError):
        return None


def to_action(value: Any) -> ReferentialAction:
    """Normalize 'CASCADE', 'set null', 'NO ACTION', ... to a ReferentialAction."""
    if isinstance(value, ReferentialAction):
        return value
    if not value:
        return ReferentialAction.NO_ACTION
    key = str(value).replace(' ', '').replace('_', '').lower()
    if key not in _ACTIONS:
        logger.warning("Unsupported referential action '%s'. Using NoAction.", value)
        return ReferentialAction.NO_ACTION
    return _ACTIONS[key]


def _to_column(node: Any) -> ColumnDefinition:
    column = field(node, 'column')
    name = column if isinstance(column, str) else field(column, 'column')
    definition = field(node, 'definition')
    nullable = field(node, 'nullable')
    return ColumnDefinition(
        name=str(name or ''),
        data_type=field(definition, 'dataType') or None,
        length=_length(definition),
        is_optional=str(field(nullable, 'type') or '').lower() == 'null',
    )


def _to_foreign_key(node: Any) -> ForeignKeyDefinition:
    reference = field(node, 'reference_definition')
    local_columns = _column_names(field(node, 'definition'))
    remote_columns = _column_names(field(reference, 'definition'))
    return ForeignKeyDefinition(
        name=field(node, 'constraint'),
        column=local_columns[0] if local_columns else '',
        referenced_table=_first_table_name(field(reference, 'table')) or '',
        referenced_column=remote_columns[0] if remote_columns else '',
        on_delete=to_action(field(reference, 'on_delete')),
        on_update=to_action(field(reference, 'on_update')),
    )


def to_definition(node: Any) -> Definition:
    """Convert one entry of `create_definitions` into its typed variant."""
    resource = field(node, 'resource')
    constraint_type = field(node, 'constraint_type')

    if resource == 'column':
        return _to_column(node)
    if constraint_type and str(constraint_type).upper() == 'FOREIGN KEY':
        return _to_foreign_key(node)
    if resource == 'index':
        return IndexDefinition(
            name=field(node, 'index'),
            columns=_column_names(field(node, 'definition')),
        )

    label = constraint_type or resource
    logger.debug("Dropping unsupported definition: %s", label)
    return OtherDefinition(label=str(label) if label else None)
