"""Enums for fuzzyfuse API."""

from enum import Enum


class Backend(str, Enum):
    """Worker strategies for chunked collection searches.

    String values are accepted anywhere a Backend is expected.

    Example:
        >>> from fuzzyfuse import Backend, Fuse
        >>> fuse = Fuse()
        >>> results = fuse.search_text_in_string_list(
        ...     "aa",
        ...     ["tbtlaafazm", "koyqdadlgq"],
        ...     chunk_size=1,
        ...     backend=Backend.POOL,
        ... )
    """

    THREAD = "thread"
    """One scoped thread per chunk, all joined before returning"""

    POOL = "pool"
    """Chunks submitted as tasks to a shared thread pool"""


__all__ = ["Backend"]
