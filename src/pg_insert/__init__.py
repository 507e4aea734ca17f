"""pg-insert: deterministic, parameterized PostgreSQL INSERT generation.

Usage:
    >>> from pg_insert import Excluded, InsertBuilder, SQLValue
    >>> sql, args = InsertBuilder.from_mappings(
    ...     "public.test", [{"a": "a1", "b": SQLValue("now()")}]
    ... ).on_conflict_do_update("test_pkey", {"a": Excluded("a")}).build()
"""

from pg_insert.sql import (
    BuildResult,
    Excluded,
    InsertBuilder,
    InsertBuilderError,
    PostgreSQLDialect,
    RowMapper,
    SQLValue,
    sanitize_identifier,
)

__version__ = "0.1.0"

__all__ = [
    "BuildResult",
    "Excluded",
    "InsertBuilder",
    "InsertBuilderError",
    "PostgreSQLDialect",
    "RowMapper",
    "SQLValue",
    "sanitize_identifier",
    "__version__",
]
