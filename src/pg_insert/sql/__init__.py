"""
SQL module for parameterized INSERT generation.

This module provides identifier quoting, the value kinds accepted in field
maps, the PostgreSQL dialect and the InsertBuilder that ties them together.
"""

from .core.identifier import quote_identifier, sanitize_identifier
from .core.parameters import ParameterList, substitute_placeholders
from .core.values import Excluded, SQLValue, ValueKind, classify_value
from .dialects.postgresql import PostgreSQLDialect
from .exceptions import InsertBuilderError
from .operations.insert import BuildResult, Dialect, InsertBuilder, RowMapper

__all__ = [
    "quote_identifier",
    "sanitize_identifier",
    "ParameterList",
    "substitute_placeholders",
    "Excluded",
    "SQLValue",
    "ValueKind",
    "classify_value",
    "PostgreSQLDialect",
    "InsertBuilderError",
    "BuildResult",
    "Dialect",
    "InsertBuilder",
    "RowMapper",
]
