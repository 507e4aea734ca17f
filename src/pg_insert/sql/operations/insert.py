"""
SQL INSERT statement builders.

Provides a fluent builder that turns a collection of records into a single
multi-row, parameterized INSERT statement with optional
``ON CONFLICT ON CONSTRAINT`` handling and a ``RETURNING`` clause.
"""

import threading
from typing import (
    Any,
    Callable,
    Dict,
    Generic,
    List,
    Mapping,
    NamedTuple,
    Optional,
    Protocol,
    Sequence,
    Tuple,
    TypeVar,
)

from pg_insert.config import get_settings
from pg_insert.utils.logging import get_logger

from ..core.parameters import ParameterList, substitute_placeholders
from ..core.values import ValueKind, classify_value
from ..dialects.postgresql import PostgreSQLDialect
from ..exceptions import InsertBuilderError

logger = get_logger(__name__)

T = TypeVar("T")

RowMapper = Callable[[T], Mapping[str, Any]]


class Dialect(Protocol):
    """Protocol for SQL dialects."""

    name: str

    def quote(self, identifier: str) -> str: ...
    def placeholder(self, index: int) -> str: ...
    def build_conflict_clause(self, constraint: str, updates: Mapping[str, Any]) -> str: ...
    def build_returning_clause(self, columns: Sequence[str]) -> str: ...
    def render_debug_literal(self, value: Any) -> str: ...


class BuildResult(NamedTuple):
    """Generated SQL text and the positional arguments to bind to it."""

    sql: str
    args: Tuple[Any, ...]


def _identity(row: Mapping[str, Any]) -> Mapping[str, Any]:
    return row


class InsertBuilder(Generic[T]):
    """
    Builder for multi-row INSERT statements.

    Columns come from the first record's field map and are sorted, so the
    output does not depend on mapping iteration order. Placeholders are
    numbered across all rows. The statement is generated on the first
    ``build()`` call and cached; configure the builder completely before
    building.

    Example:
        >>> from pg_insert import Excluded, InsertBuilder, SQLValue
        >>> builder = InsertBuilder(
        ...     "public.users",
        ...     [{"id": 1, "name": "Ann"}],
        ...     lambda row: {**row, "created_at": SQLValue("now()")},
        ... ).on_conflict_do_update("users_pkey", {"name": Excluded("name")})
        >>> sql, args = builder.build()
        >>> sql
        'INSERT INTO "public"."users" ("created_at", "id", "name") VALUES (now(), $1, $2) ON CONFLICT ON CONSTRAINT "users_pkey" DO UPDATE SET "name" = EXCLUDED."name"'
        >>> args
        (1, 'Ann')
    """

    def __init__(
        self,
        table_name: str,
        values: Sequence[T],
        value_fn: RowMapper[T],
        dialect: Optional[Dialect] = None,
        validate_rows: Optional[bool] = None,
    ):
        """
        Initialize the InsertBuilder.

        Args:
            table_name: Target table, optionally schema qualified ("schema.table")
            values: Records to insert; must not be empty
            value_fn: Function converting one record to its field map
            dialect: SQL dialect to use for statement generation
            validate_rows: Check that every field map has the first one's keys.
                None uses the validate_rows setting.

        Raises:
            InsertBuilderError: If values is empty
        """
        records = tuple(values)
        if not records:
            raise InsertBuilderError(
                "At least one record is required to discover columns",
                table=table_name,
            )

        self.table_name = table_name
        self.dialect: Dialect = dialect or PostgreSQLDialect()
        self.validate_rows = (
            get_settings().validate_rows if validate_rows is None else validate_rows
        )
        self._log = logger.bind(table=table_name, dialect=self.dialect.name)
        self._values = records
        self._value_fn = value_fn
        self._constraint: Optional[str] = None
        self._do: Dict[str, Any] = {}
        self._returning: Tuple[str, ...] = ()

        self._build_lock = threading.Lock()
        self._result: Optional[BuildResult] = None

    @classmethod
    def from_mappings(
        cls, table_name: str, rows: Sequence[Mapping[str, Any]], **kwargs: Any
    ) -> "InsertBuilder[Mapping[str, Any]]":
        """Create a builder for records that already are field maps."""
        return cls(table_name, rows, _identity, **kwargs)

    @property
    def is_built(self) -> bool:
        return self._result is not None

    def on_conflict_do_nothing(self, constraint: str) -> "InsertBuilder[T]":
        """Do nothing when the named constraint is violated."""
        self._warn_if_built("on_conflict_do_nothing")
        self._constraint = constraint
        self._do = {}
        return self

    def on_conflict_do_update(
        self, constraint: str, do: Mapping[str, Any]
    ) -> "InsertBuilder[T]":
        """
        Update the given columns when the named constraint is violated.

        Values may be Excluded, SQLValue, None or a str/bool/int/float/Decimal
        literal. An empty mapping behaves like on_conflict_do_nothing.
        """
        self._warn_if_built("on_conflict_do_update")
        self._constraint = constraint
        self._do = dict(do)
        return self

    def returning(self, *columns: str) -> "InsertBuilder[T]":
        """Return the given columns, in order, from the inserted rows."""
        self._warn_if_built("returning")
        self._returning = tuple(columns)
        return self

    def build(self) -> BuildResult:
        """
        Generate the statement on first call; return the cached result after.

        Returns:
            BuildResult(sql, args); unpacks as ``sql, args = builder.build()``

        Raises:
            InsertBuilderError: If the records or conflict values are invalid
        """
        result = self._result
        if result is not None:
            return result

        with self._build_lock:
            if self._result is None:
                try:
                    self._result = self._generate()
                except InsertBuilderError as exc:
                    self._log.error(
                        "insert_builder_failed",
                        reason=exc.reason,
                        row_index=exc.row_index,
                        column=exc.column,
                    )
                    raise
            return self._result

    def raw_sql(self) -> str:
        """
        Render the statement with placeholders replaced by argument values.

        For logging and tests only: string arguments are quoted but not
        escaped, so the output must never be executed.
        """
        sql, args = self.build()
        return substitute_placeholders(sql, args, self.dialect.render_debug_literal)

    def _warn_if_built(self, method: str) -> None:
        if self._result is not None:
            self._log.warning("insert_builder_configured_after_build", method=method)

    def _generate(self) -> BuildResult:
        rows = [self._value_fn(value) for value in self._values]
        columns = sorted(rows[0])
        if self.validate_rows:
            self._check_row_keys(rows, columns)

        params = ParameterList()
        row_sql: List[str] = []
        for row_index, row in enumerate(rows):
            rendered = []
            for column in columns:
                value = row.get(column)
                kind = classify_value(value)
                if kind is ValueKind.RAW:
                    rendered.append(value.expression)
                elif kind is ValueKind.EXCLUDED:
                    raise InsertBuilderError(
                        "Excluded references are only valid in conflict updates",
                        table=self.table_name,
                        row_index=row_index,
                        column=column,
                    )
                else:
                    rendered.append(self.dialect.placeholder(params.add(value)))
            row_sql.append("(" + ", ".join(rendered) + ")")

        quoted_columns = ", ".join(self.dialect.quote(c) for c in columns)
        parts = [
            f"INSERT INTO {self.dialect.quote(self.table_name)} ({quoted_columns})"
            f" VALUES {', '.join(row_sql)}"
        ]

        if self._constraint:
            try:
                parts.append(
                    self.dialect.build_conflict_clause(self._constraint, self._do)
                )
            except InsertBuilderError as exc:
                raise InsertBuilderError(
                    exc.reason, table=self.table_name, column=exc.column
                ) from exc

        returning = self.dialect.build_returning_clause(self._returning)
        if returning:
            parts.append(returning)

        result = BuildResult(" ".join(parts), params.as_tuple())

        event: Dict[str, Any] = {
            "rows": len(rows),
            "columns": len(columns),
            "args": len(result.args),
            "conflict": self._conflict_mode(),
        }
        if get_settings().log_sql:
            event["sql"] = result.sql
        self._log.debug("insert_sql_built", **event)
        return result

    def _check_row_keys(
        self, rows: Sequence[Mapping[str, Any]], columns: Sequence[str]
    ) -> None:
        expected = set(columns)
        for row_index, row in enumerate(rows[1:], start=1):
            keys = set(row)
            if keys == expected:
                continue
            details = []
            missing = sorted(expected - keys)
            unexpected = sorted(keys - expected)
            if missing:
                details.append(f"missing {missing}")
            if unexpected:
                details.append(f"unexpected {unexpected}")
            raise InsertBuilderError(
                "Record columns differ from the first record: " + ", ".join(details),
                table=self.table_name,
                row_index=row_index,
            )

    def _conflict_mode(self) -> str:
        if not self._constraint:
            return "none"
        return "do_update" if self._do else "do_nothing"
