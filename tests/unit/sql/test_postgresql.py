"""
Unit tests for the PostgreSQL dialect.
"""

from decimal import Decimal

import pytest

from pg_insert.sql.core.values import Excluded, SQLValue
from pg_insert.sql.dialects.postgresql import PostgreSQLDialect
from pg_insert.sql.exceptions import InsertBuilderError


@pytest.mark.unit
class TestPostgreSQLDialect:
    """Tests for PostgreSQL dialect."""

    @pytest.fixture
    def dialect(self):
        return PostgreSQLDialect()

    def test_dialect_name(self, dialect):
        """Dialect should have correct name."""
        assert dialect.name == "postgresql"

    def test_quote_identifier(self, dialect):
        """Quote should use double quotes."""
        assert dialect.quote("年金计划号") == '"年金计划号"'

    def test_quote_qualified(self, dialect):
        assert dialect.quote("mapping.年金计划") == '"mapping"."年金计划"'

    def test_placeholder(self, dialect):
        assert dialect.placeholder(1) == "$1"
        assert dialect.placeholder(42) == "$42"

    def test_conflict_do_nothing(self, dialect):
        """An empty update map means DO NOTHING."""
        clause = dialect.build_conflict_clause("test_pkey", {})
        assert clause == 'ON CONFLICT ON CONSTRAINT "test_pkey" DO NOTHING'

    def test_conflict_do_update_sorted(self, dialect):
        """Assignments are ordered by column name."""
        clause = dialect.build_conflict_clause(
            "c", {"z": Excluded("z"), "a": 1, "m": None}
        )
        assert clause == (
            'ON CONFLICT ON CONSTRAINT "c" DO UPDATE SET '
            '"a" = 1, "m" = NULL, "z" = EXCLUDED."z"'
        )

    def test_conflict_every_key_once(self, dialect):
        updates = {f"col_{i}": i for i in range(15)}
        clause = dialect.build_conflict_clause("c", updates)
        for column in updates:
            assert clause.count(f'"{column}" = ') == 1

    def test_conflict_constraint_quoted(self, dialect):
        clause = dialect.build_conflict_clause('bad"name', {})
        assert '"bad""name"' in clause

    def test_conflict_unsupported_value_names_column(self, dialect):
        with pytest.raises(InsertBuilderError) as exc_info:
            dialect.build_conflict_clause("c", {"payload": {"k": "v"}})
        assert exc_info.value.column == "payload"
        assert "dict" in str(exc_info.value)

    def test_returning_in_caller_order(self, dialect):
        assert dialect.build_returning_clause(["id", "b", "a"]) == (
            'RETURNING "id", "b", "a"'
        )

    def test_returning_empty(self, dialect):
        assert dialect.build_returning_clause([]) == ""


@pytest.mark.unit
class TestRenderUpdateValue:
    """Tests for conflict-update value rendering."""

    @pytest.fixture
    def dialect(self):
        return PostgreSQLDialect()

    @pytest.mark.parametrize(
        "value, expected",
        [
            (None, "NULL"),
            (Excluded("b"), 'EXCLUDED."b"'),
            (Excluded('we"ird'), 'EXCLUDED."we""ird"'),
            (SQLValue("now()"), "now()"),
            ("text", "'text'"),
            (1, "1"),
            (-7, "-7"),
            (2.5, "2.5"),
            (Decimal("10.25"), "10.25"),
            (True, "TRUE"),
            (False, "FALSE"),
        ],
    )
    def test_supported_values(self, dialect, value, expected):
        assert dialect.render_update_value(value) == expected

    def test_string_quotes_escaped(self, dialect):
        """Inlined conflict literals are executed, so quotes are doubled."""
        assert dialect.render_update_value("O'Brien") == "'O''Brien'"

    def test_raw_sql_not_escaped(self, dialect):
        assert dialect.render_update_value(SQLValue("'x' || y")) == "'x' || y"

    @pytest.mark.parametrize("value", [float("nan"), float("inf"), float("-inf")])
    def test_non_finite_float_rejected(self, dialect, value):
        with pytest.raises(InsertBuilderError):
            dialect.render_update_value(value)

    @pytest.mark.parametrize("value", [b"raw", object(), [1, 2], {"a": 1}])
    def test_unsupported_types_rejected(self, dialect, value):
        with pytest.raises(InsertBuilderError, match="Unsupported conflict update value"):
            dialect.render_update_value(value)


@pytest.mark.unit
class TestRenderDebugLiteral:
    """Tests for debug argument rendering."""

    @pytest.fixture
    def dialect(self):
        return PostgreSQLDialect()

    def test_string_single_quoted_without_escaping(self, dialect):
        assert dialect.render_debug_literal("a1") == "'a1'"
        assert dialect.render_debug_literal("O'Brien") == "'O'Brien'"

    def test_none(self, dialect):
        assert dialect.render_debug_literal(None) == "NULL"

    def test_other_types_use_str(self, dialect):
        assert dialect.render_debug_literal(3) == "3"
        assert dialect.render_debug_literal(Decimal("1.50")) == "1.50"
        assert dialect.render_debug_literal(True) == "True"
