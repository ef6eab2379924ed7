"""
Polars integration for FuzzyFuse.

This module provides fuzzy search for Polars DataFrames and Series at two
levels:

Levels:
    1. **Expression Namespace** (`.fuse`) - Per-row operations
       Use this to score or highlight a column against a query.
       Example: `df.with_columns(score=pl.col("title").fuse.score("silm"))`

    2. **DataFrame Functions** - Ranked searches
       Use this to rank a Series, or DataFrame rows with weighted columns.
       Example: `search_dataframe(df, "man", {"title": 0.3, "author": 0.7})`

Examples:
    >>> import polars as pl
    >>> import fuzzyfuse.polars as ffp  # or: from fuzzyfuse import polars as ffp

    # Expression namespace (registered automatically when importing fuzzyfuse)
    >>> df = pl.DataFrame({"title": ["The Silmarillion", "The Lock Artist"]})
    >>> df.with_columns(score=pl.col("title").fuse.score("Te silm"))

    # DataFrame functions
    >>> ffp.search_series(df["title"], "Te silm")
"""

# Expression namespace is registered on import
# (importing fuzzyfuse.expr handles this)
import fuzzyfuse.expr as _expr  # noqa: F401

from fuzzyfuse.polars_ext import (
    search_dataframe,
    search_series,
)

__all__ = [
    "search_series",
    "search_dataframe",
]
