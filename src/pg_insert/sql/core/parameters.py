"""
SQL parameter binding utilities.

Positional placeholders (``$1``, ``$2``, ...) are numbered globally across
every row of a statement. ``ParameterList`` hands out those numbers and keeps
the matching argument order; ``substitute_placeholders`` reverses the process
for debug rendering.
"""

import re
from typing import Any, Callable, List, Sequence, Tuple

_PLACEHOLDER_RE = re.compile(r"\$(\d+)")


class ParameterList:
    """
    Ordered collection of bound arguments.

    Example:
        >>> params = ParameterList()
        >>> params.add("a1")
        1
        >>> params.add("b1")
        2
        >>> params.as_tuple()
        ('a1', 'b1')
    """

    def __init__(self) -> None:
        self._args: List[Any] = []

    def add(self, value: Any) -> int:
        """Append a value and return its 1-based placeholder number."""
        self._args.append(value)
        return len(self._args)

    def as_tuple(self) -> Tuple[Any, ...]:
        return tuple(self._args)

    def __len__(self) -> int:
        return len(self._args)


def substitute_placeholders(
    sql: str, args: Sequence[Any], render: Callable[[Any], str]
) -> str:
    """
    Replace ``$n`` placeholders with rendered argument values.

    The substitution is a single left-to-right pass over whole placeholder
    tokens, so ``$12`` is never read as ``$1`` followed by ``2``. Tokens whose
    number does not match an argument are left as they are.

    A raw SQL fragment that happens to contain ``$n`` text is substituted too;
    the output is meant for logs and tests only.

    Args:
        sql: SQL text containing positional placeholders
        args: Arguments in placeholder order
        render: Function producing the literal text for one argument

    Returns:
        SQL text with placeholders replaced

    Examples:
        >>> substitute_placeholders("VALUES ($1, $2)", ["a", 1], repr)
        "VALUES ('a', 1)"
    """

    def _replace(match: "re.Match[str]") -> str:
        index = int(match.group(1))
        if 1 <= index <= len(args):
            return render(args[index - 1])
        return match.group(0)

    return _PLACEHOLDER_RE.sub(_replace, sql)
