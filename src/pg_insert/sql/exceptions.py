"""
Exceptions raised while generating SQL statements.
"""

from typing import Any, Dict, Optional


class InsertBuilderError(ValueError):
    """
    Raised when an INSERT statement cannot be generated from its inputs.

    Covers caller-contract violations such as an empty record collection,
    field maps whose keys differ from the first record's, or values that
    have no safe literal form in a conflict-update clause.

    Args:
        message: Error description
        table: Target table identifier (optional)
        row_index: Index of the offending record (optional)
        column: Offending column name (optional)
    """

    def __init__(
        self,
        message: str,
        table: Optional[str] = None,
        row_index: Optional[int] = None,
        column: Optional[str] = None,
    ):
        self.table = table
        self.row_index = row_index
        self.column = column
        self.reason = message

        context_parts = []
        if table is not None:
            context_parts.append(f"table='{table}'")
        if row_index is not None:
            context_parts.append(f"row_index={row_index}")
        if column is not None:
            context_parts.append(f"column='{column}'")

        if context_parts:
            full_message = f"{message} ({', '.join(context_parts)})"
        else:
            full_message = message

        super().__init__(full_message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to structured dict for logging."""
        return {
            "error_type": type(self).__name__,
            "reason": self.reason,
            "table": self.table,
            "row_index": self.row_index,
            "column": self.column,
        }
