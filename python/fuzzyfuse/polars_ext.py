"""Polars DataFrame and Series search for FuzzyFuse.

This module runs the Bitap search over Polars data and returns the ranked
hits as DataFrames, so the results can be joined back onto the source
data by row index.

Functions in This Module
------------------------
- ``search_series()``: Rank the values of a Series against a query
- ``search_dataframe()``: Rank DataFrame rows, treating chosen columns as
  weighted searchable fields

Example Usage
-------------
>>> import polars as pl
>>> import fuzzyfuse as ff
>>>
>>> books = pl.Series(["The Silmarillion", "The Lock Artist", "The Lost Symbol"])
>>> ff.search_series(books, "Te silm")["index"].to_list()
[0, 2, 1]
>>>
>>> df = pl.DataFrame({
...     "title": ["Old Man's War fiction", "Right Ho Jeeves"],
...     "author": ["John X", "P.D. Mans"],
... })
>>> ff.search_dataframe(df, "man", {"title": 0.3, "author": 0.7})["index"].to_list()
[1, 0]

See Also
--------
- ``fuzzyfuse.expr``: ``.fuse`` expression namespace for column operations
- ``fuzzyfuse.batch``: chunked searches over plain Python lists
"""

import logging
from typing import Dict, List, Mapping, Optional, Sequence, Union

import polars as pl

from fuzzyfuse._core import Fuse
from fuzzyfuse.exceptions import SchemaError
from fuzzyfuse.fuseable import FuseProperty, MappingRecord

logger = logging.getLogger(__name__)

_RANGES_DTYPE = pl.List(pl.List(pl.Int64))


def _as_properties(
    weights: Union[Mapping[str, float], Sequence[FuseProperty]],
) -> List[FuseProperty]:
    if isinstance(weights, Mapping):
        return [FuseProperty(name, float(weight)) for name, weight in weights.items()]
    return list(weights)


def search_series(
    series: "pl.Series",
    query: str,
    fuse: Optional[Fuse] = None,
) -> "pl.DataFrame":
    """
    Search every value of a Series for the query.

    Null and empty values never match.

    Args:
        series: Series of strings to search
        query: The pattern string to search for
        fuse: Search configuration (default: ``Fuse()``)

    Returns:
        DataFrame sorted by score ascending (best first) with columns:
        - index: Row position in the input Series
        - text: The matched value
        - score: Match score (0.0 is exact)
        - ranges: Matched ``[start, end)`` character ranges of the value

    Example:
        >>> series = pl.Series(["Syrup", "Syrup2", "Live"])
        >>> search_series(series, "syrup")["index"].to_list()
        [0, 1]
    """
    fuse = fuse or Fuse()
    pattern = fuse.create_pattern(query)

    rows = []
    for index, value in enumerate(series.to_list()):
        if value is None:
            continue
        text = str(value)
        if not text:
            continue
        result = fuse.search(pattern, text)
        if result is None:
            continue
        rows.append(
            {
                "index": index,
                "text": text,
                "score": result.score,
                "ranges": [list(r) for r in result.ranges],
            }
        )

    schema = {
        "index": pl.Int64,
        "text": pl.Utf8,
        "score": pl.Float64,
        "ranges": _RANGES_DTYPE,
    }
    logger.debug("search_series matched %d of %d values", len(rows), len(series))
    if not rows:
        return pl.DataFrame(schema=schema)
    return pl.DataFrame(rows, schema=schema).sort("score", maintain_order=True)


def search_dataframe(
    df: "pl.DataFrame",
    query: str,
    weights: Union[Mapping[str, float], Sequence[FuseProperty]],
    fuse: Optional[Fuse] = None,
    chunk_size: Optional[int] = None,
) -> "pl.DataFrame":
    """
    Search DataFrame rows, scoring each searchable column with its weight.

    Each row is treated as a record whose fields are the columns named in
    ``weights``. Field scores follow :meth:`Fuse.search_text_in_fuse_list`:
    a weight of 1.0 keeps the raw score, any other weight ``w`` scales it
    by ``1 - w``, and the row score is the mean over the fields that matched.

    Args:
        df: DataFrame to search
        query: The pattern string to search for
        weights: Column name to weight mapping, or a list of FuseProperty
        fuse: Search configuration (default: ``Fuse()``)
        chunk_size: If given, search rows in parallel chunks of this size

    Returns:
        DataFrame sorted by score ascending (best first) with columns:
        - index: Row position in the input DataFrame
        - score: Combined row score
        - <column>_score: Weighted score of each searchable column (null
          when that column did not match)

    Raises:
        SchemaError: If a searchable column is missing from ``df`` or holds
            a null value
        ValidationError: If a searchable column holds an empty string

    Example:
        >>> df = pl.DataFrame({"title": ["Lamb", "Fool"], "author": ["Moore", "Moore"]})
        >>> search_dataframe(df, "fool", {"title": 0.7, "author": 0.3})["index"][0]
        1
    """
    fuse = fuse or Fuse()
    properties = _as_properties(weights)
    columns = [prop.value for prop in properties]

    missing = [name for name in columns if name not in df.columns]
    if missing:
        raise SchemaError(f"Columns not found in DataFrame: {missing}")

    selected = df.select(list(dict.fromkeys(columns)))
    records = [MappingRecord(row, properties) for row in selected.iter_rows(named=True)]

    if chunk_size is None:
        results = fuse.search_text_in_fuse_list(query, records)
    else:
        results = fuse.search_text_in_fuse_list_with_chunk_size(query, records, chunk_size)

    schema: Dict[str, pl.DataType] = {"index": pl.Int64, "score": pl.Float64}
    for name in columns:
        schema[f"{name}_score"] = pl.Float64

    rows = []
    for result in results:
        row = {"index": result.index, "score": result.score}
        row.update({f"{name}_score": None for name in columns})
        for field_result in result.results:
            row[f"{field_result.value}_score"] = field_result.score
        rows.append(row)

    logger.debug("search_dataframe matched %d of %d rows", len(rows), len(records))
    if not rows:
        return pl.DataFrame(schema=schema)
    return pl.DataFrame(rows, schema=schema)


__all__ = ["search_series", "search_dataframe"]
