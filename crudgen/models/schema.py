"""Normalized table schema models."""
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict


class SemanticType(str, Enum):
    """General-purpose language types used by DTO and request shapes."""

    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    DATE = "Date"
    UNKNOWN = "any"


class PersistenceType(str, Enum):
    """Prisma scalar types."""

    STRING = "String"
    INT = "Int"
    DECIMAL = "Decimal"
    FLOAT = "Float"
    DATE_TIME = "DateTime"
    BOOLEAN = "Boolean"


class ReferentialAction(str, Enum):
    """Foreign key actions, spelled the way Prisma expects them."""

    NO_ACTION = "NoAction"
    CASCADE = "Cascade"
    SET_NULL = "SetNull"
    RESTRICT = "Restrict"
    SET_DEFAULT = "SetDefault"


class Column(BaseModel):
    """Represents a column of the source table."""

    model_config = ConfigDict(frozen=True)

    name: str
    sql_type: str
    semantic_type: SemanticType
    persistence_type: PersistenceType
    is_optional: bool = False
    length: Optional[int] = None


class Relation(BaseModel):
    """Represents a foreign key relation to another table."""

    model_config = ConfigDict(frozen=True)

    name: str
    related_model: str
    field: str
    references: str
    on_delete: ReferentialAction = ReferentialAction.NO_ACTION
    on_update: ReferentialAction = ReferentialAction.NO_ACTION


class Index(BaseModel):
    """Represents a secondary index; fields keep declaration order."""

    model_config = ConfigDict(frozen=True)

    name: Optional[str] = None
    fields: str


class TableSchema(BaseModel):
    """Represents a table definition extracted from a CREATE TABLE statement."""

    model_config = ConfigDict(frozen=True)

    table_name: str
    columns: List[Column] = []
    relations: List[Relation] = []
    indexes: List[Index] = []
