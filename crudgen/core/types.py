"""SQL type mapping to TypeScript and Prisma types."""
import logging
from typing import Dict, Optional

from crudgen.errors import UnrecognizedSqlTypeError
from crudgen.models.schema import PersistenceType, SemanticType

logger = logging.getLogger(__name__)

SEMANTIC_TYPES: Dict[str, SemanticType] = {
    'varchar': SemanticType.STRING,
    'text': SemanticType.STRING,
    'char': SemanticType.STRING,
    'int': SemanticType.NUMBER,
    'integer': SemanticType.NUMBER,
    'decimal': SemanticType.NUMBER,
    'float': SemanticType.NUMBER,
    'double': SemanticType.NUMBER,
    'datetime': SemanticType.DATE,
    'timestamp': SemanticType.DATE,
    'tinyint': SemanticType.BOOLEAN,
}

PERSISTENCE_TYPES: Dict[str, PersistenceType] = {
    'varchar': PersistenceType.STRING,
    'text': PersistenceType.STRING,
    'char': PersistenceType.STRING,
    'int': PersistenceType.INT,
    'integer': PersistenceType.INT,
    'decimal': PersistenceType.DECIMAL,
    'float': PersistenceType.FLOAT,
    'double': PersistenceType.FLOAT,
    'datetime': PersistenceType.DATE_TIME,
    'timestamp': PersistenceType.DATE_TIME,
    'tinyint': PersistenceType.BOOLEAN,
}


def to_semantic_type(sql_type: Optional[str]) -> SemanticType:
    """Map a SQL type to the type used in DTOs; unknown types become `any`."""
    if not sql_type:
        return SemanticType.UNKNOWN
    return SEMANTIC_TYPES.get(sql_type.lower(), SemanticType.UNKNOWN)


def to_persistence_type(sql_type: Optional[str], column_name: str) -> PersistenceType:
    """Map a SQL type to a Prisma scalar type.

    Unrecognized or missing types fall back to String and log a warning
    naming the column.
    """
    persistence_type = PERSISTENCE_TYPES.get((sql_type or '').lower())
    if persistence_type is None:
        logger.warning("%s", UnrecognizedSqlTypeError(sql_type, column_name))
        return PersistenceType.STRING
    return persistence_type
