"""Polars expression namespace for fuzzy search.

This module registers a `.fuse` namespace on Polars expressions, enabling
Bitap scoring directly in Polars expression contexts. The query is compiled
once per expression and shared by every row.

Null values produce null scores and never match. Empty strings are treated
the same way.

Example:
    >>> import polars as pl
    >>> import fuzzyfuse  # Registers the namespace
    >>>
    >>> df = pl.DataFrame({"title": ["Old Man's War", "Lamb"]})
    >>> df.with_columns(
    ...     score=pl.col("title").fuse.score("od mn war"),
    ...     hit=pl.col("title").fuse.is_match("od mn war"),
    ... )
"""

from typing import Optional

import polars as pl

from fuzzyfuse._core import Fuse
from fuzzyfuse._utils import highlight as _highlight


@pl.api.register_expr_namespace("fuse")
class FuseExprNamespace:
    """
    Fuzzy search namespace for Polars expressions.

    Access via `.fuse` on any string expression.
    """

    def __init__(self, expr: pl.Expr):
        self._expr = expr

    def score(self, query: str, fuse: Optional[Fuse] = None) -> pl.Expr:
        """
        Score each value against the query.

        Args:
            query: The pattern string to search for
            fuse: Search configuration (default: ``Fuse()``)

        Returns:
            Expression producing scores (0.0 is exact), null where the value
            does not match

        Example:
            >>> df.with_columns(score=pl.col("title").fuse.score("Syrup"))
        """
        fuse = fuse or Fuse()
        pattern = fuse.create_pattern(query)

        def _score(value: str) -> Optional[float]:
            if not value:
                return None
            result = fuse.search(pattern, value)
            return None if result is None else result.score

        return self._expr.map_elements(_score, return_dtype=pl.Float64)

    def is_match(self, query: str, fuse: Optional[Fuse] = None) -> pl.Expr:
        """
        Check whether each value matches the query.

        Args:
            query: The pattern string to search for
            fuse: Search configuration (default: ``Fuse()``)

        Returns:
            Boolean expression, False for nulls and non-matches

        Example:
            >>> df.filter(pl.col("title").fuse.is_match("silm"))
        """
        return self.score(query, fuse=fuse).is_not_null()

    def highlight(
        self,
        query: str,
        before: str = "[",
        after: str = "]",
        fuse: Optional[Fuse] = None,
    ) -> pl.Expr:
        """
        Wrap the matched characters of each value in markers.

        Values that do not match are returned unchanged.

        Args:
            query: The pattern string to search for
            before: Marker inserted before each matched range
            after: Marker inserted after each matched range
            fuse: Search configuration (default: ``Fuse()``)

        Returns:
            String expression

        Example:
            >>> df.with_columns(marked=pl.col("title").fuse.highlight("od mn war"))
        """
        fuse = fuse or Fuse()
        pattern = fuse.create_pattern(query)

        def _mark(value: str) -> str:
            if not value:
                return value
            result = fuse.search(pattern, value)
            if result is None:
                return value
            return _highlight(value, result.ranges, before, after)

        return self._expr.map_elements(_mark, return_dtype=pl.Utf8)


__all__ = ["FuseExprNamespace"]
