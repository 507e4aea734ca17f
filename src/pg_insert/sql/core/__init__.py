"""Core SQL utilities package."""

from .identifier import quote_identifier, sanitize_identifier
from .parameters import ParameterList, substitute_placeholders
from .values import Excluded, SQLValue, ValueKind, classify_value

__all__ = [
    "quote_identifier",
    "sanitize_identifier",
    "ParameterList",
    "substitute_placeholders",
    "Excluded",
    "SQLValue",
    "ValueKind",
    "classify_value",
]
