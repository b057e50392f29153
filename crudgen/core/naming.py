"""Naming transforms shared by every generated artifact.

All functions are total: any string, including an empty one, maps to a
deterministic result.
"""
import re

from pydantic import BaseModel

_CASE_BOUNDARY = re.compile(r'([a-z])([A-Z])')
_WORDS = re.compile(r'[A-Z]+(?![a-z])|[A-Z]?[a-z]+|[0-9]+')


class NamingVariants(BaseModel):
    """Every name derived from one table name."""

    singular_class_name: str
    plural_class_name: str
    singular_file_name: str
    plural_file_name: str
    upper_case_constant: str


def _to_class_name(name: str) -> str:
    return ''.join(word[:1].upper() + word[1:] for word in name.split('_'))


def to_singular_class_name(table_name: str) -> str:
    """Drop one trailing 's' and join the '_' segments in PascalCase.

    No real depluralization happens: 'boxes' becomes 'Boxe'.
    """
    if table_name.endswith('s'):
        table_name = table_name[:-1]
    return _to_class_name(table_name)


def to_plural_class_name(table_name: str) -> str:
    """Join the '_' segments of a table name in PascalCase."""
    return _to_class_name(table_name)


def to_dashed_file_name(class_name: str) -> str:
    """Convert a class name to a dashed, lower-case file name."""
    return _CASE_BOUNDARY.sub(r'\1-\2', class_name).replace('_', '-').lower()


def to_upper_constant(class_name: str) -> str:
    """Upper-case a class name without inserting separators."""
    return class_name.upper()


def to_camel_case(value: str) -> str:
    """Camel-case an identifier: 'dept_id' -> 'deptId', 'UserID' -> 'userId'."""
    words = _WORDS.findall(value)
    if not words:
        return ''
    head, *tail = words
    return head.lower() + ''.join(word[:1].upper() + word[1:].lower() for word in tail)


def naming_variants(table_name: str) -> NamingVariants:
    """Derive all naming variants for a table."""
    singular = to_singular_class_name(table_name)
    plural = to_plural_class_name(table_name)
    return NamingVariants(
        singular_class_name=singular,
        plural_class_name=plural,
        singular_file_name=to_dashed_file_name(singular),
        plural_file_name=to_dashed_file_name(plural),
        upper_case_constant=to_upper_constant(singular),
    )
