"""
Value kinds accepted by the INSERT builder.

A field map value is one of:

- ``SQLValue``: a SQL expression emitted verbatim (``now()``). It is neither
  escaped nor parameterized, so the caller owns its safety.
- ``Excluded``: a column reference rendered as ``EXCLUDED."column"``. Only
  meaningful inside an ``ON CONFLICT ... DO UPDATE SET`` clause.
- ``None``: SQL ``NULL``.
- anything else: an ordinary value, bound as a positional parameter.

``classify_value`` is the single place where a value is mapped to its kind.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any


@dataclass(frozen=True)
class SQLValue:
    """SQL expression used where a value would normally be expected."""

    expression: str

    def __str__(self) -> str:
        return self.expression


@dataclass(frozen=True)
class Excluded:
    """Column identifier that will be prefixed with EXCLUDED."""

    column: str

    def __str__(self) -> str:
        return self.column


class ValueKind(str, Enum):
    """Classification of a field map value."""

    PARAM = "param"
    RAW = "raw"
    EXCLUDED = "excluded"
    NULL = "null"


def classify_value(value: Any) -> ValueKind:
    """
    Classify a field map value.

    Examples:
        >>> classify_value(SQLValue("now()"))
        <ValueKind.RAW: 'raw'>
        >>> classify_value(None)
        <ValueKind.NULL: 'null'>
        >>> classify_value("a1")
        <ValueKind.PARAM: 'param'>
    """
    if value is None:
        return ValueKind.NULL
    if isinstance(value, SQLValue):
        return ValueKind.RAW
    if isinstance(value, Excluded):
        return ValueKind.EXCLUDED
    return ValueKind.PARAM
