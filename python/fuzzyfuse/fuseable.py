"""Searchable record capability.

Any object with ``properties()`` and ``lookup(key)`` methods can be
searched with :meth:`fuzzyfuse.Fuse.search_text_in_fuse_list`. The engine
only talks to this protocol, never to concrete record types.

Example:
    >>> from fuzzyfuse import Fuse, FuseProperty
    >>>
    >>> class Book:
    ...     def __init__(self, title, author):
    ...         self.title = title
    ...         self.author = author
    ...
    ...     def properties(self):
    ...         return [
    ...             FuseProperty("title", weight=0.3),
    ...             FuseProperty("author", weight=0.7),
    ...         ]
    ...
    ...     def lookup(self, key):
    ...         return {"title": self.title, "author": self.author}.get(key)
    >>>
    >>> books = [Book("Old Man's War fiction", "John X"), Book("Right Ho Jeeves", "P.D. Mans")]
    >>> [r.index for r in Fuse().search_text_in_fuse_list("man", books)]
    [1, 0]
"""

import math
from dataclasses import dataclass
from typing import List, Mapping, Optional, Protocol, Sequence, runtime_checkable

from fuzzyfuse.exceptions import ValidationError


@dataclass(frozen=True)
class FuseProperty:
    """A searchable field of a record and its weight in the search.

    Attributes:
        value: Name of the field, as understood by the record's ``lookup``.
        weight: Relative importance of the field, in (0, 1]. A weight of
            1.0 keeps the raw field score; any other weight ``w`` scales
            the field score by ``1 - w``, so heavier fields score lower
            (better).

    Raises:
        ValidationError: If ``weight`` is not a finite number in (0, 1].
    """

    value: str
    weight: float = 1.0

    def __post_init__(self) -> None:
        if (
            isinstance(self.weight, bool)
            or not isinstance(self.weight, (int, float))
            or not math.isfinite(self.weight)
        ):
            raise ValidationError(f"weight must be a finite number, got {self.weight!r}")
        if not 0.0 < self.weight <= 1.0:
            raise ValidationError(
                f"weight must be in (0.0, 1.0], got {self.weight} for field {self.value!r}"
            )

    @classmethod
    def init(cls, value: str) -> "FuseProperty":
        """Create a property with weight 1.0."""
        return cls(value)

    @classmethod
    def init_with_weight(cls, value: str, weight: float) -> "FuseProperty":
        """Create a property with the given weight."""
        return cls(value, weight)


@runtime_checkable
class Fuseable(Protocol):
    """Protocol for records searchable by field."""

    def properties(self) -> List[FuseProperty]:
        """Return the searchable fields of this record with their weights."""
        ...

    def lookup(self, key: str) -> Optional[str]:
        """Return the value of field ``key``, or None when it has none."""
        ...


class MappingRecord:
    """Adapt a mapping (dict, DataFrame row) to the Fuseable protocol.

    Args:
        data: Field name to value mapping. Values are converted with
            ``str()``; ``None`` values count as missing.
        properties: Searchable fields. Shared between records, never copied.

    Example:
        >>> props = [FuseProperty("title", 0.3), FuseProperty("author", 0.7)]
        >>> record = MappingRecord({"title": "Lamb", "author": "Christopher Moore"}, props)
        >>> record.lookup("title")
        'Lamb'
    """

    __slots__ = ("_data", "_properties")

    def __init__(self, data: Mapping[str, object], properties: Sequence[FuseProperty]):
        self._data = data
        self._properties = properties

    def properties(self) -> List[FuseProperty]:
        return list(self._properties)

    def lookup(self, key: str) -> Optional[str]:
        value = self._data.get(key)
        if value is None:
            return None
        return str(value)

    def __repr__(self) -> str:
        return f"MappingRecord({dict(self._data)!r})"


__all__ = ["FuseProperty", "Fuseable", "MappingRecord"]
