"""Common test fixtures."""
# pylint: disable=redefined-outer-name,too-many-arguments,too-many-positional-arguments
import pytest

from crudgen.core.types import to_persistence_type, to_semantic_type
from crudgen.models.schema import Column, Index, Relation, TableSchema

USERS_SQL = (
    "CREATE TABLE users (id int NOT NULL, name varchar(255) NOT NULL, "
    "email varchar(255) NOT NULL, created_at timestamp NOT NULL, PRIMARY KEY (id))"
)

TEMPLATES_SQL = """
CREATE TABLE IF NOT EXISTS `Templates` (
  `id` VARCHAR(36) NOT NULL,
  `createdOn` DATETIME NOT NULL,
  `createdBy` VARCHAR(36) NOT NULL,
  `updatedOn` DATETIME NOT NULL,
  `updatedBy` VARCHAR(36) NOT NULL,
  `deletedOn` DATETIME NULL,
  `deletedBy` VARCHAR(36) NULL,
  `name` VARCHAR(255) NOT NULL,
  PRIMARY KEY (`id`))
"""


@pytest.fixture
def users_sql():
    """The users table used across the pipeline tests."""
    return USERS_SQL


@pytest.fixture
def templates_sql():
    """A MySQL table carrying every audit column."""
    return TEMPLATES_SQL


@pytest.fixture
def sql_file(tmp_path):
    """Factory writing SQL text to a file and returning its path."""
    def _write(sql, name="schema.sql"):
        path = tmp_path / name
        path.write_text(sql, encoding="utf-8")
        return path
    return _write


@pytest.fixture
def column_factory():
    """Factory to create Column instances for testing."""
    def _make_column(name="name", sql_type="VARCHAR", is_optional=False, length=None):
        return Column(
            name=name,
            sql_type=sql_type,
            semantic_type=to_semantic_type(sql_type),
            persistence_type=to_persistence_type(sql_type, name),
            is_optional=is_optional,
            length=length,
        )
    return _make_column


@pytest.fixture
def table_factory(column_factory):
    """Factory to create TableSchema instances for testing."""
    def _make_table(table_name="users", columns=None, relations=None, indexes=None):
        if columns is None:
            columns = [
                column_factory(name="id", sql_type="VARCHAR", length=36),
                column_factory(name="name", sql_type="VARCHAR", length=255),
            ]
        return TableSchema(
            table_name=table_name,
            columns=columns,
            relations=relations or [],
            indexes=indexes or [],
        )
    return _make_table


@pytest.fixture
def audited_table(table_factory, column_factory):
    """A table with every meta column plus two user-facing columns."""
    columns = [
        column_factory(name="id", sql_type="VARCHAR", length=36),
        column_factory(name="createdOn", sql_type="DATETIME"),
        column_factory(name="createdBy", sql_type="VARCHAR", length=36),
        column_factory(name="updatedOn", sql_type="DATETIME"),
        column_factory(name="updatedBy", sql_type="VARCHAR", length=36),
        column_factory(name="deletedOn", sql_type="DATETIME", is_optional=True),
        column_factory(name="deletedBy", sql_type="VARCHAR", length=36, is_optional=True),
        column_factory(name="name", sql_type="VARCHAR", length=255),
        column_factory(name="priority", sql_type="VARCHAR", length=50),
    ]
    relations = [Relation(
        name="departmentId", related_model="Department",
        field="departmentId", references="id",
    )]
    indexes = [Index(name="idx_name", fields="name, priority")]
    return table_factory(
        table_name="tasks", columns=columns, relations=relations, indexes=indexes
    )


@pytest.fixture
def ast_factory():
    """Builders for generic AST nodes in the shape produced by astify."""
    class _Ast:  # pylint: disable=too-few-public-methods
        @staticmethod
        def column(name, data_type="VARCHAR", length=None, nullable=None):
            node = {
                "resource": "column",
                "column": {"column": name},
                "definition": {"dataType": data_type, "length": length},
            }
            if nullable is not None:
                node["nullable"] = {"type": nullable, "value": nullable}
            return node

        @staticmethod
        def foreign_key(column, table, references="id", on_delete=None, on_update=None):
            reference = {"table": [{"table": table}], "definition": [{"column": references}]}
            if on_delete:
                reference["on_delete"] = on_delete
            if on_update:
                reference["on_update"] = on_update
            return {
                "resource": "constraint",
                "constraint_type": "FOREIGN KEY",
                "definition": [{"column": column}],
                "reference_definition": reference,
            }

        @staticmethod
        def index(columns, name=None):
            return {
                "resource": "index",
                "index": name,
                "definition": [{"column": c} for c in columns],
            }

        @staticmethod
        def create(table, definitions):
            return {
                "type": "create",
                "keyword": "table",
                "table": [{"db": None, "table": table}],
                "create_definitions": definitions,
            }
    return _Ast
