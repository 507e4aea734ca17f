"""
PostgreSQL-specific SQL dialect implementation.

Provides PostgreSQL-specific syntax for identifier quoting, positional
placeholders, ON CONFLICT ON CONSTRAINT handling and RETURNING clauses.
"""

import math
from decimal import Decimal
from typing import Any, Mapping, Sequence

from ..core.identifier import sanitize_identifier
from ..core.values import ValueKind, classify_value
from ..exceptions import InsertBuilderError


class PostgreSQLDialect:
    """PostgreSQL SQL dialect implementation."""

    name = "postgresql"

    def quote(self, identifier: str) -> str:
        """Quote a possibly dotted identifier using double quotes."""
        return sanitize_identifier(identifier)

    def placeholder(self, index: int) -> str:
        """Positional parameter marker for a 1-based argument index."""
        return f"${index}"

    def render_update_value(self, value: Any) -> str:
        """
        Render the right-hand side of a ``DO UPDATE SET`` assignment.

        Conflict-update values are inlined rather than bound, so only kinds
        with an unambiguous literal form are accepted.

        Args:
            value: Field map value (SQLValue, Excluded, None or a literal)

        Returns:
            SQL text for the assignment value

        Raises:
            InsertBuilderError: If the value has no safe literal form
        """
        kind = classify_value(value)
        if kind is ValueKind.NULL:
            return "NULL"
        if kind is ValueKind.EXCLUDED:
            return f"EXCLUDED.{self.quote(value.column)}"
        if kind is ValueKind.RAW:
            return value.expression

        if isinstance(value, str):
            escaped = value.replace("'", "''")
            return f"'{escaped}'"
        # bool before int: bool is an int subclass
        if isinstance(value, bool):
            return "TRUE" if value else "FALSE"
        if isinstance(value, float):
            if not math.isfinite(value):
                raise InsertBuilderError(f"Non-finite float {value!r} has no SQL literal")
            return str(value)
        if isinstance(value, (int, Decimal)):
            return str(value)

        raise InsertBuilderError(
            f"Unsupported conflict update value of type {type(value).__name__}; "
            "wrap SQL expressions in SQLValue"
        )

    def build_conflict_clause(
        self, constraint: str, updates: Mapping[str, Any]
    ) -> str:
        """
        Build ``ON CONFLICT ON CONSTRAINT ... DO NOTHING | DO UPDATE SET ...``.

        Args:
            constraint: Constraint name used for conflict detection
            updates: Column to value map; empty means DO NOTHING

        Returns:
            Conflict clause SQL
        """
        clause = f"ON CONFLICT ON CONSTRAINT {self.quote(constraint)} DO "
        if not updates:
            return clause + "NOTHING"

        assignments = []
        for column in sorted(updates):
            try:
                rendered = self.render_update_value(updates[column])
            except InsertBuilderError as exc:
                raise InsertBuilderError(exc.reason, column=column) from exc
            assignments.append(f"{self.quote(column)} = {rendered}")
        return clause + "UPDATE SET " + ", ".join(assignments)

    def build_returning_clause(self, columns: Sequence[str]) -> str:
        """Build ``RETURNING ...`` in caller order; empty string if no columns."""
        if not columns:
            return ""
        return "RETURNING " + ", ".join(self.quote(c) for c in columns)

    def render_debug_literal(self, value: Any) -> str:
        """
        Render a bound argument for debug SQL output.

        Strings are single-quoted without escaping. The result must never be
        executed against a database.
        """
        if value is None:
            return "NULL"
        if isinstance(value, str):
            return f"'{value}'"
        return str(value)
