"""SQL parsing into the generic statement AST."""
import logging
import re
from typing import Any, Dict, List, Optional

import sqlglot
from sqlglot import exp
from sqlglot.errors import ParseError, TokenError

from crudgen.errors import SqlParseError

logger = logging.getLogger(__name__)

_TYPE_NAME = re.compile(r'\s*([A-Za-z_][A-Za-z0-9_]*)')
_KEY_OPTION = re.compile(r'ON\s+(DELETE|UPDATE)\s+(.+)', re.IGNORECASE)


def astify(sql: str, dialect: str = 'mysql') -> List[Dict[str, Any]]:
    """Parse SQL text into a list of generic statement mappings.

    CREATE statements carry `type`, `keyword`, `table` and
    `create_definitions`; every other statement only carries its `type`.

    Args:
        sql: SQL script text
        dialect: sqlglot dialect used for parsing (default: mysql)

    Returns:
        One mapping per parsed statement, in script order.

    Raises:
        SqlParseError: If sqlglot cannot parse the script
    """
    try:
        statements = sqlglot.parse(sql, read=dialect)
    except (ParseError, TokenError) as e:
        raise SqlParseError(f"Failed to parse SQL script: {e}") from e

    ast = []
    for stmt in statements:
        if not stmt:
            continue
        if isinstance(stmt, exp.Create):
            ast.append(_create_to_ast(stmt, sql))
        else:
            logger.debug("Parsed non-CREATE statement: %s", type(stmt).__name__)
            ast.append({'type': stmt.key})
    return ast


def _create_to_ast(stmt: exp.Create, sql: str) -> Dict[str, Any]:
    """Convert a CREATE statement."""
    keyword = (stmt.args.get('kind') or '').lower()
    target = stmt.this
    table = target.this if isinstance(target, exp.Schema) else target

    definitions = []
    if isinstance(target, exp.Schema):
        for expression in target.expressions:
            definitions.extend(_definition_to_ast(expression, sql))

    return {
        'type': 'create',
        'keyword': keyword,
        'table': [_table_ref(table)] if isinstance(table, exp.Table) else [],
        'create_definitions': definitions,
    }


def _table_ref(table: exp.Table) -> Dict[str, Optional[str]]:
    return {'db': table.db or None, 'table': table.name}


def _column_ref(expression: exp.Expression) -> Dict[str, str]:
    while isinstance(expression, exp.Ordered):
        expression = expression.this
    return {'column': expression.name}


def _definition_to_ast(
    expression: exp.Expression,
    sql: str,
    constraint_name: Optional[str] = None
) -> List[Dict[str, Any]]:
    """Convert one schema entry; named constraints may wrap several entries."""
    if isinstance(expression, exp.ColumnConstraint):
        expression = expression.kind

    if isinstance(expression, exp.ColumnDef):
        return [_column_to_ast(expression, sql)]

    if isinstance(expression, exp.Constraint):
        converted = []
        for inner in expression.expressions:
            converted.extend(_definition_to_ast(inner, sql, expression.name or None))
        return converted

    if isinstance(expression, exp.ForeignKey):
        return [_foreign_key_to_ast(expression, constraint_name)]

    if isinstance(expression, exp.IndexColumnConstraint):
        return [{
            'resource': 'index',
            'index': expression.name or None,
            'definition': [_column_ref(e) for e in expression.expressions],
        }]

    if isinstance(expression, exp.PrimaryKey):
        constraint_type = 'primary key'
    elif isinstance(expression, exp.UniqueColumnConstraint):
        constraint_type = 'unique key'
    else:
        constraint_type = expression.key if expression is not None else None
    return [{'resource': 'constraint', 'constraint_type': constraint_type}]


def _column_to_ast(column: exp.ColumnDef, sql: str) -> Dict[str, Any]:
    data_type = None
    length = None
    kind = column.args.get('kind')
    if isinstance(kind, exp.DataType):
        data_type = _declared_type(column, kind, sql)
        if kind.expressions and kind.expressions[0].name.isdigit():
            length = int(kind.expressions[0].name)

    nullable = None
    for constraint in column.constraints:
        if isinstance(constraint.kind, exp.NotNullColumnConstraint):
            if constraint.kind.args.get('allow_null'):
                nullable = {'type': 'null', 'value': 'null'}
            else:
                nullable = {'type': 'not null', 'value': 'not null'}

    return {
        'resource': 'column',
        'column': {'column': column.name},
        'definition': {'dataType': data_type, 'length': length},
        'nullable': nullable,
    }


def _declared_type(column: exp.ColumnDef, kind: exp.DataType, sql: str) -> str:
    """Return the type name as written in the script, upper-cased.

    Dialect tokenizers rename some types while reading (tsql TIMESTAMP is
    ROWVERSION, postgres FLOAT is DOUBLE), so the word following the column
    name in the source text is used. The parsed type is only used when the
    column name carries no source position.
    """
    name = column.this
    end = name.meta.get('end') if isinstance(name, exp.Identifier) else None
    if end is not None:
        match = _TYPE_NAME.match(sql, end + 1)
        if match:
            return match.group(1).upper()
    return str(kind.this.value).upper()


def _foreign_key_to_ast(foreign_key: exp.ForeignKey, constraint_name: Optional[str]) -> Dict[str, Any]:
    reference = foreign_key.args.get('reference')
    target = reference.this if reference else None
    table = target.this if isinstance(target, exp.Schema) else target
    remote_columns = target.expressions if isinstance(target, exp.Schema) else []

    actions = {
        'delete': foreign_key.args.get('delete'),
        'update': foreign_key.args.get('update'),
    }
    options = list(foreign_key.args.get('options') or [])
    if reference:
        options.extend(reference.args.get('options') or [])
    for option in options:
        match = _KEY_OPTION.match(str(option))
        if match and not actions[match.group(1).lower()]:
            actions[match.group(1).lower()] = match.group(2).strip()

    return {
        'resource': 'constraint',
        'constraint_type': 'FOREIGN KEY',
        'constraint': constraint_name,
        'definition': [_column_ref(e) for e in foreign_key.expressions],
        'reference_definition': {
            'table': [_table_ref(table)] if isinstance(table, exp.Table) else [],
            'definition': [_column_ref(e) for e in remote_columns],
            'on_delete': actions['delete'],
            'on_update': actions['update'],
        },
    }
