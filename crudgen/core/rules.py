"""Column rules for meta columns and Prisma native-type annotations."""
from typing import FrozenSet, List, Optional

from pydantic import BaseModel

from crudgen.models.schema import Column, PersistenceType

# Bookkeeping columns kept in the Prisma model but hidden from DTOs and requests
META_COLUMNS: FrozenSet[str] = frozenset({
    'createdOn', 'updatedOn', 'deletedOn',
    'createdBy', 'updatedBy', 'deletedBy',
})


class AnnotationRule(BaseModel):
    """A name-based annotation applied to matching columns."""

    name: str
    columns: FrozenSet[str]
    db_specific: str
    is_id: bool = False


class Annotation(BaseModel):
    """Prisma attributes attached to one column."""

    is_id: bool = False
    db_specific: Optional[str] = None


# Evaluated in order; the first match wins.
ANNOTATION_RULES: List[AnnotationRule] = [
    AnnotationRule(name='identity', columns=frozenset({'id'}), db_specific='Uuid', is_id=True),
    AnnotationRule(
        name='audit_actor',
        columns=frozenset({'createdBy', 'updatedBy', 'deletedBy'}),
        db_specific='Uuid',
    ),
    AnnotationRule(
        name='audit_timestamp',
        columns=frozenset({'createdOn', 'updatedOn', 'deletedOn'}),
        db_specific='Timestamp',
    ),
    AnnotationRule(name='priority', columns=frozenset({'priority'}), db_specific='VarChar(10)'),
]


def is_meta_column(column: Column) -> bool:
    """True for the audit columns excluded from user-facing shapes."""
    return column.name in META_COLUMNS


def annotate(column: Column) -> Annotation:
    """Resolve the Prisma annotation for a column.

    Named rules take precedence; otherwise a String column with a declared
    length becomes VarChar(<length>).
    """
    for rule in ANNOTATION_RULES:
        if column.name in rule.columns:
            return Annotation(is_id=rule.is_id, db_specific=rule.db_specific)

    if column.persistence_type == PersistenceType.STRING and column.length:
        return Annotation(db_specific=f"VarChar({column.length})")
    return Annotation()
