"""Statement builders."""

from .insert import BuildResult, Dialect, InsertBuilder, RowMapper

__all__ = ["BuildResult", "Dialect", "InsertBuilder", "RowMapper"]
