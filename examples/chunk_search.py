#!/usr/bin/env python3
"""
FuzzyFuse Chunked Search
========================

Splits a large list into chunks and searches every chunk on its own worker
thread, then compares the timing and the results with a sequential search.

Run:
    python examples/chunk_search.py
    FUZZYFUSE_MAX_WORKERS=4 python examples/chunk_search.py
"""

import logging
import random
import string
import time

import fuzzyfuse as ff


def random_strings(count: int, length: int, seed: int = 42) -> list:
    rng = random.Random(seed)
    return ["".join(rng.choices(string.ascii_lowercase, k=length)) for _ in range(count)]


def timed(label: str, fn):
    start = time.perf_counter()
    results = fn()
    elapsed = time.perf_counter() - start
    print(f"  {label:28} {elapsed * 1000:8.1f} ms  ({len(results)} hits)")
    return results


def main():
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    fuse = ff.Fuse()
    items = random_strings(10_000, 10)
    query = "aa"

    print(f"Searching {len(items)} strings for {query!r}\n")
    sequential = timed("sequential", lambda: fuse.search_text_in_iterable(query, items))

    for backend in ff.Backend:
        for chunk_size in (100, 1000, 5000):
            chunked = timed(
                f"{backend.value}, chunk_size={chunk_size}",
                lambda: fuse.search_text_in_string_list(
                    query, items, chunk_size, backend=backend
                ),
            )
            assert chunked == sequential, "chunked results differ from sequential"

    print("\nBest matches:")
    for hit in sequential[:5]:
        print(f"  [{hit.score:.3f}] {ff.highlight(items[hit.index], hit.ranges)}")

    print("\nWith a completion callback:")
    fuse.search_text_in_string_list(
        query,
        items,
        1000,
        completion=lambda results: print(f"  done, {len(results)} results"),
    )


if __name__ == "__main__":
    main()
