"""
FuzzyFuse - Approximate string search with match highlighting

A Python library for fuzzy searching strings, lists of strings and lists
of records with weighted fields, built on the Bitap algorithm. Every hit
carries a score (0.0 is an exact match, 1.0 no match) and the character
ranges that matched, ready for highlighting.

Example usage:
    >>> import fuzzyfuse as ff

    # Search a single string
    >>> fuse = ff.Fuse()
    >>> result = fuse.search_text_in_string("od mn war", "Old Man's War")
    >>> result.score, result.ranges
    (0.4444444444444444, [(0, 1), (2, 7), (9, 13)])

    # Reuse one pattern across many strings
    >>> pattern = fuse.create_pattern("Te silm")
    >>> fuse.search(pattern, "The Silmarillion") is not None
    True

    # Rank a list of strings (best first)
    >>> books = ["The Silmarillion", "The Lock Artist", "The Lost Symbol"]
    >>> [r.index for r in fuse.search_text_in_iterable("Te silm", books)]
    [0, 2, 1]

    # Highlight matched characters
    >>> ff.highlight("Old Man's War", result.ranges)
    "[O]l[d Man]'s[ War]"
"""

from importlib.metadata import version as _get_version
from typing import Optional

# Register the .fuse expression namespace
import fuzzyfuse.expr  # noqa: F401

# Import polars subpackage for `from fuzzyfuse import polars` style
from fuzzyfuse import polars
from fuzzyfuse._core import (
    FResult,
    Fuse,
    FuseableSearchResult,
    Pattern,
    ScoreResult,
    SearchResult,
)
from fuzzyfuse._utils import (
    calculate_pattern_alphabet,
    calculate_score,
    find_ranges,
    fold_case,
    highlight,
)
from fuzzyfuse.batch import search_fuse_list, search_string_list
from fuzzyfuse.enums import Backend
from fuzzyfuse.exceptions import FuzzyFuseError, SchemaError, ValidationError
from fuzzyfuse.fuseable import Fuseable, FuseProperty, MappingRecord

# -----------------------------------------------------------------------------
# Polars Integration
# -----------------------------------------------------------------------------
# Ranked searches over Series and DataFrames.
# See: fuzzyfuse.polars_ext module docstring for details.
from fuzzyfuse.polars_ext import (
    search_dataframe,
    search_series,
)

__version__ = _get_version("fuzzyfuse")
__all__ = [
    # Version
    "__version__",
    # Custom exceptions
    "FuzzyFuseError",
    "ValidationError",
    "SchemaError",
    # Engine and patterns
    "Fuse",
    "Pattern",
    # Result types
    "ScoreResult",
    "SearchResult",
    "FResult",
    "FuseableSearchResult",
    # Records
    "Fuseable",
    "FuseProperty",
    "MappingRecord",
    # Enums
    "Backend",
    # Building blocks
    "calculate_score",
    "calculate_pattern_alphabet",
    "find_ranges",
    "fold_case",
    "highlight",
    # Chunked searches
    "search_string_list",
    "search_fuse_list",
    # Polars Integration
    "search_series",
    "search_dataframe",
    # Polars subpackage
    "polars",
    # Convenience
    "search",
]


def search(text: str, string: str, **config) -> Optional[ScoreResult]:
    """Search for ``text`` in ``string`` with a one-off configuration.

    Shorthand for ``Fuse(**config).search_text_in_string(text, string)``.

    Example:
        >>> search("od mn war", "Old Man's War").ranges
        [(0, 1), (2, 7), (9, 13)]
    """
    return Fuse(**config).search_text_in_string(text, string)
