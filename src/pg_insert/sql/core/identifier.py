"""
SQL identifier handling utilities.

Provides functions for quoting table, column and constraint names so they can
be embedded in generated PostgreSQL statements without opening an injection
path. Every identifier the builder emits goes through ``sanitize_identifier``.
"""

_NUL = "\x00"


def quote_identifier(name: str) -> str:
    """
    Quote a single identifier segment.

    Null bytes are stripped, internal double quotes are doubled and the
    result is wrapped in double quotes. Any string, including the empty
    string, yields a syntactically valid quoted identifier.

    Args:
        name: The identifier segment to quote

    Returns:
        Properly quoted identifier

    Examples:
        >>> quote_identifier("company_id")
        '"company_id"'
        >>> quote_identifier('column"name')
        '"column""name"'
        >>> quote_identifier("")
        '""'
    """
    escaped = name.replace(_NUL, "").replace('"', '""')
    return f'"{escaped}"'


def sanitize_identifier(identifier: str) -> str:
    """
    Quote a possibly dotted identifier such as ``schema.table``.

    Each dot-delimited segment is quoted independently and the segments are
    rejoined with an unquoted dot.

    Examples:
        >>> sanitize_identifier("public.test")
        '"public"."test"'
        >>> sanitize_identifier("年金计划")
        '"年金计划"'
        >>> sanitize_identifier('a"b.c')
        '"a""b"."c"'
    """
    if "." not in identifier:
        return quote_identifier(identifier)

    return ".".join(quote_identifier(part) for part in identifier.split("."))
