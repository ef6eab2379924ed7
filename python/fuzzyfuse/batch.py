"""Chunked collection search for FuzzyFuse.

This module splits a collection into fixed-size contiguous chunks and
searches each chunk on its own worker thread. Every worker shares the same
read-only Pattern and Fuse configuration; completed chunk results are
appended to one accumulator under a single lock, then sorted by score.

The call is all-or-nothing: it returns only after every worker finished,
and an exception raised by any worker propagates to the caller.

Example usage:
    >>> from fuzzyfuse import Fuse
    >>> import fuzzyfuse.batch as batch

    # Search a list of strings, 10 items per worker
    >>> results = batch.search_string_list(Fuse(), "aa", ["tbtlaafazm", "koyqdadlgq"], 10)
    >>> results[0].index
    0

    # Use a thread pool instead of one thread per chunk
    >>> results = batch.search_string_list(Fuse(), "aa", ["tbtlaafazm"], 1, backend="pool")
"""

from __future__ import annotations

import logging
import os
import threading
from collections.abc import Sequence
from concurrent.futures import ThreadPoolExecutor
from typing import TYPE_CHECKING, Callable, List, Optional, TypeVar, Union

from fuzzyfuse._core import FuseableSearchResult, SearchResult
from fuzzyfuse._utils import normalize_backend
from fuzzyfuse.enums import Backend
from fuzzyfuse.exceptions import ValidationError

if TYPE_CHECKING:
    from fuzzyfuse._core import Fuse
    from fuzzyfuse.fuseable import Fuseable

__all__ = [
    "search_string_list",
    "search_fuse_list",
    "max_workers",
]

logger = logging.getLogger(__name__)

MAX_WORKERS_ENV = "FUZZYFUSE_MAX_WORKERS"

T = TypeVar("T", SearchResult, FuseableSearchResult)


def max_workers() -> Optional[int]:
    """Return the pool size configured by ``FUZZYFUSE_MAX_WORKERS``.

    Returns:
        The configured worker count, or None to let the executor decide.

    Raises:
        ValidationError: If the variable is set to something other than a
            positive integer.
    """
    raw = os.environ.get(MAX_WORKERS_ENV, "").strip()
    if not raw:
        return None
    try:
        value = int(raw)
    except ValueError:
        raise ValidationError(f"{MAX_WORKERS_ENV} must be an integer, got {raw!r}") from None
    if value < 1:
        raise ValidationError(f"{MAX_WORKERS_ENV} must be >= 1, got {value}")
    return value


def _run_chunks(
    work: Callable[[int], List[T]],
    count: int,
    chunk_size: int,
    backend: Union[str, Backend],
) -> List[T]:
    if chunk_size < 1:
        raise ValidationError(f"chunk_size must be >= 1, got {chunk_size}")
    mode = normalize_backend(backend)

    offsets = range(0, count, chunk_size)
    items: List[T] = []
    lock = threading.Lock()

    def run(offset: int) -> None:
        chunk_items = work(offset)
        with lock:
            items.extend(chunk_items)

    logger.debug(
        "Searching %d items in %d chunks of %d (%s backend)",
        count,
        len(offsets),
        chunk_size,
        mode.value,
    )

    if mode is Backend.THREAD:
        errors: List[BaseException] = []

        def guarded(offset: int) -> None:
            try:
                run(offset)
            except Exception as exc:
                with lock:
                    errors.append(exc)

        threads = [
            threading.Thread(target=guarded, args=(offset,), name=f"fuzzyfuse-chunk-{offset}")
            for offset in offsets
        ]
        started: List[threading.Thread] = []
        try:
            for thread in threads:
                thread.start()
                started.append(thread)
        finally:
            # Workers already running must finish even if a later start failed
            for thread in started:
                thread.join()
        if errors:
            raise errors[0]
    else:
        with ThreadPoolExecutor(max_workers=max_workers()) as executor:
            futures = [executor.submit(run, offset) for offset in offsets]
            # Leaving the block waits for the remaining workers before the
            # first failure propagates.
            for future in futures:
                future.result()

    # Index breaks ties so the order never depends on which chunk finished first
    items.sort(key=lambda r: (r.score, r.index))
    return items


def search_string_list(
    fuse: Fuse,
    text: str,
    items: Sequence[str],
    chunk_size: int,
    backend: Union[str, Backend] = "thread",
) -> List[SearchResult]:
    """Search for a text pattern in a list of strings, chunk by chunk.

    Produces the same results as :meth:`Fuse.search_text_in_iterable`.

    Args:
        fuse: Search configuration.
        text: The pattern string to search for.
        items: Strings to search.
        chunk_size: Number of items handed to each worker (>= 1). For 1000
            items, a chunk_size of 100 gives 10 workers.
        backend: "thread" starts one thread per chunk, "pool" submits the
            chunks to a thread pool sized by ``FUZZYFUSE_MAX_WORKERS``.

    Returns:
        SearchResult objects sorted by score ascending, with indices into
        ``items``.

    Raises:
        ValidationError: If chunk_size < 1 or the backend name is unknown.

    Example:
        >>> books = ["The Silmarillion", "The Lock Artist", "The Lost Symbol"]
        >>> [r.index for r in search_string_list(Fuse(), "Te silm", books, 1)]
        [0, 2, 1]
    """
    if not isinstance(items, Sequence):
        items = list(items)
    pattern = fuse.create_pattern(text)

    def work(offset: int) -> List[SearchResult]:
        chunk_items = []
        for index, item in enumerate(items[offset : offset + chunk_size], start=offset):
            result = fuse.search(pattern, str(item))
            if result is not None:
                chunk_items.append(
                    SearchResult(index=index, score=result.score, ranges=result.ranges)
                )
        return chunk_items

    return _run_chunks(work, len(items), chunk_size, backend)


def search_fuse_list(
    fuse: Fuse,
    text: str,
    items: Sequence[Fuseable],
    chunk_size: int,
    backend: Union[str, Backend] = "thread",
) -> List[FuseableSearchResult]:
    """Search for a text pattern in a list of Fuseable records, chunk by chunk.

    Produces the same results as :meth:`Fuse.search_text_in_fuse_list`,
    including the per-field weighting rules.

    Args:
        fuse: Search configuration.
        text: The pattern string to search for.
        items: Records implementing ``properties()`` and ``lookup(key)``.
        chunk_size: Number of records handed to each worker (>= 1).
        backend: "thread" or "pool", as for :func:`search_string_list`.

    Returns:
        FuseableSearchResult objects sorted by score ascending, with
        indices into ``items``.

    Raises:
        SchemaError: If any record is missing a declared field. No partial
            results are returned.
        ValidationError: If chunk_size < 1 or the backend name is unknown.
    """
    if not isinstance(items, Sequence):
        items = list(items)
    pattern = fuse.create_pattern(text)

    def work(offset: int) -> List[FuseableSearchResult]:
        chunk_items = []
        for index, item in enumerate(items[offset : offset + chunk_size], start=offset):
            result = fuse.search_fuseable(pattern, item, index)
            if result is not None:
                chunk_items.append(result)
        return chunk_items

    return _run_chunks(work, len(items), chunk_size, backend)
