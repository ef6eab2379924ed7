"""Matching engine for fuzzyfuse.

Holds the compiled :class:`Pattern`, the result types, and :class:`Fuse`,
which carries the search configuration and implements the Bitap matcher
along with the sequential collection searches. Chunked searches live in
:mod:`fuzzyfuse.batch` and reuse the same matcher.

Scores run from 0.0 (exact match) to 1.0 (no match); lower is better.
"""

import dataclasses
import logging
import math
import sys
import warnings
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import (
    TYPE_CHECKING,
    Callable,
    Iterable,
    List,
    Mapping,
    Optional,
    Sequence,
    Union,
)

from fuzzyfuse._utils import (
    Range,
    calculate_pattern_alphabet,
    calculate_score,
    find_ranges,
    fold_case,
)
from fuzzyfuse.exceptions import SchemaError, ValidationError
from fuzzyfuse.fuseable import Fuseable

if TYPE_CHECKING:
    from fuzzyfuse.enums import Backend

logger = logging.getLogger(__name__)

# Scores this close to 1.0 are reported as "no match"
NO_MATCH_TOLERANCE = 0.00001


@dataclass(frozen=True)
class Pattern:
    """A compiled search pattern.

    Always build patterns with :meth:`Fuse.create_pattern`; the same
    pattern can then be reused across any number of searches and threads.

    Attributes:
        text: The pattern text, case-folded unless the search is case sensitive.
        length: Number of characters in ``text`` (always >= 1).
        mask: Bit marking a full-length match, ``1 << (length - 1)``.
        alphabet: Read-only map of each character to the bitmask of its
            positions in ``text`` (last character is bit 0).
    """

    text: str
    length: int
    mask: int
    alphabet: Mapping[str, int]


@dataclass(frozen=True)
class ScoreResult:
    """Result of searching a single string.

    Attributes:
        score: 0.0 is a perfect match, 1.0 a perfect mismatch.
        ranges: Half-open ``(start, end)`` character ranges of the target
            that took part in the match, useful for highlighting.
    """

    score: float
    ranges: List[Range] = field(default_factory=list)


@dataclass(frozen=True)
class SearchResult:
    """A hit from searching a collection of strings.

    Attributes:
        index: Position of the matching item in the searched collection.
        score: 0.0 is a perfect match, 1.0 a perfect mismatch.
        ranges: Matched character ranges of the item.
    """

    index: int
    score: float
    ranges: List[Range] = field(default_factory=list)


@dataclass(frozen=True)
class FResult:
    """A hit on a single field of a record.

    Attributes:
        value: Name of the field.
        score: Weighted field score.
        ranges: Matched character ranges of the field value.
    """

    value: str
    score: float
    ranges: List[Range] = field(default_factory=list)


@dataclass(frozen=True)
class FuseableSearchResult:
    """A hit from searching a collection of records.

    Attributes:
        index: Position of the record in the searched collection.
        score: Mean of the weighted scores of the fields that matched.
        results: One FResult per matching field, in property order.
    """

    index: int
    score: float
    results: List[FResult] = field(default_factory=list)


@dataclass(frozen=True)
class Fuse:
    """Fuzzy search engine configuration and entry point.

    A Fuse instance is immutable, so one instance can be shared freely,
    including across the worker threads of chunked searches.

    Attributes:
        location: Position in the text where the pattern is expected.
        distance: How far from ``location`` a match may drift before its
            score reaches 1.0. Zero rejects any match not at ``location``.
        threshold: Score at which the algorithm gives up (0.0 requires a
            perfect match, 1.0 matches anything).
        max_pattern_length: Advisory maximum pattern length. Longer
            patterns still work but trigger a warning.
        is_case_sensitive: Compare upper and lower case separately.
        tokenize: Also score each whitespace-separated word of the pattern
            and average the word scores with the whole-pattern score.

    Example:
        >>> fuse = Fuse()
        >>> result = fuse.search_text_in_string("od mn war", "Old Man's War")
        >>> result.ranges
        [(0, 1), (2, 7), (9, 13)]
    """

    location: int = 0
    distance: int = 100
    threshold: float = 0.6
    max_pattern_length: int = 32
    is_case_sensitive: bool = False
    tokenize: bool = False

    def __post_init__(self) -> None:
        if not isinstance(self.threshold, (int, float)) or not math.isfinite(self.threshold):
            raise ValidationError(f"threshold must be a finite number, got {self.threshold!r}")
        if not 0.0 <= self.threshold <= 1.0:
            raise ValidationError(f"threshold must be between 0.0 and 1.0, got {self.threshold}")
        for name in ("location", "distance", "max_pattern_length"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise ValidationError(f"{name} must be an integer, got {value!r}")
        if self.distance < 0:
            raise ValidationError(f"distance must be >= 0, got {self.distance}")
        if self.location < 0:
            raise ValidationError(f"location must be >= 0, got {self.location}")
        if self.max_pattern_length < 1:
            raise ValidationError(
                f"max_pattern_length must be >= 1, got {self.max_pattern_length}"
            )

    def replace(self, **changes) -> "Fuse":
        """Return a copy of this configuration with ``changes`` applied."""
        return dataclasses.replace(self, **changes)

    def _normalize(self, text: str) -> str:
        return text if self.is_case_sensitive else fold_case(text)

    def create_pattern(self, string: str) -> Optional[Pattern]:
        """Create a pattern object from a query string.

        Args:
            string: The text to compile.

        Returns:
            The compiled Pattern, or None when the (case-folded) text is
            empty. Every search method treats a None pattern as "no match".
        """
        pattern = self._normalize(string)
        length = len(pattern)

        if length == 0:
            return None

        if length > self.max_pattern_length:
            warnings.warn(
                f"Pattern length {length} exceeds max_pattern_length "
                f"{self.max_pattern_length}; matching quality may degrade.",
                UserWarning,
                stacklevel=2,
            )

        return Pattern(
            text=pattern,
            length=length,
            mask=1 << (length - 1),
            alphabet=MappingProxyType(calculate_pattern_alphabet(pattern)),
        )

    def search_util(self, pattern: Pattern, string: str) -> ScoreResult:
        """Run the Bitap matcher for one pattern against one string.

        The returned score is 1.0 when nothing matched. Prefer
        :meth:`search`, which also applies tokenization and the no-match
        cutoff.

        Raises:
            ValidationError: If ``string`` is empty.
        """
        string = self._normalize(string)
        text_length = len(string)

        # Exact match
        if pattern.text == string:
            return ScoreResult(score=0.0, ranges=[(0, text_length)])

        location = self.location
        distance = self.distance
        threshold = self.threshold
        alphabet = pattern.alphabet

        match_mask_arr = [0] * text_length

        # Literal occurrences tighten the threshold before the fuzzy pass
        index = string.find(pattern.text)
        while index != -1:
            score = calculate_score(pattern.length, 0, index, location, distance)
            threshold = min(threshold, score)
            for idx in range(index, index + pattern.length):
                match_mask_arr[idx] = 1
            index = string.find(pattern.text, index + pattern.length)

        score = 1.0
        bin_max = pattern.length + text_length
        last_bit_arr: List[int] = []

        for i in range(pattern.length):
            # Largest window around location still able to beat the threshold
            # with i errors.
            bin_min = 0
            bin_mid = bin_max
            while bin_min < bin_mid:
                if (
                    calculate_score(pattern.length, i, location, location + bin_mid, distance)
                    <= threshold
                ):
                    bin_min = bin_mid
                else:
                    bin_max = bin_mid
                bin_mid = (bin_max - bin_min) // 2 + bin_min
            bin_max = bin_mid

            start = max(1, location - bin_mid + 1)
            finish = min(text_length, location + bin_mid) + pattern.length

            bit_arr = [0] * (finish + 2)
            bit_arr[finish + 1] = (1 << i) - 1

            if start > finish:
                continue

            for j in range(finish, start - 1, -1):
                current_location = j - 1
                if current_location < text_length:
                    char_match = alphabet.get(string[current_location], 0)
                else:
                    char_match = 0

                if char_match:
                    match_mask_arr[current_location] = 1

                bit_arr[j] = ((bit_arr[j + 1] << 1) | 1) & char_match
                if i > 0:
                    bit_arr[j] |= (
                        ((last_bit_arr[j + 1] | last_bit_arr[j]) << 1) | 1
                    ) | last_bit_arr[j + 1]

                if bit_arr[j] & pattern.mask:
                    score = calculate_score(
                        pattern.length, i, location, current_location, distance
                    )
                    if score <= threshold:
                        threshold = score
                        best_location = current_location
                        # Nothing further left can be closer to location
                        if best_location <= location:
                            break

            # One more error can no longer beat the threshold
            if calculate_score(pattern.length, i + 1, location, location, distance) > threshold:
                break

            last_bit_arr = bit_arr

        return ScoreResult(score=score, ranges=find_ranges(match_mask_arr))

    def search(self, pattern: Optional[Pattern], string: str) -> Optional[ScoreResult]:
        """Search for a pattern in a given string.

        Args:
            pattern: The pattern to search for, created by :meth:`create_pattern`.
            string: The string in which to search for the pattern.

        Returns:
            A ScoreResult with a ``score`` between 0.0 (exact match) and 1.0
            (not a match) and the ``ranges`` of the matched characters, or
            None when nothing matched or the pattern is None.

            With ``tokenize`` enabled the score is the mean of the whole
            pattern score and each word's score, and the ranges of every
            search are concatenated in the order they ran. Those ranges may
            overlap and are not sorted.

        Example:
            >>> fuse = Fuse()
            >>> pattern = fuse.create_pattern("some text")
            >>> fuse.search(pattern, "some string") is not None
            True
        """
        if pattern is None:
            return None

        if self.tokenize:
            total = self.search_util(pattern, string)
            total_score = total.score
            ranges = list(total.ranges)
            count = 0

            for word in pattern.text.split():
                word_pattern = self.create_pattern(word)
                if word_pattern is None:
                    continue
                result = self.search_util(word_pattern, string)
                total_score += result.score
                ranges.extend(result.ranges)
                count += 1

            averaged = ScoreResult(score=total_score / (count + 1), ranges=ranges)
            if abs(averaged.score - 1.0) < NO_MATCH_TOLERANCE:
                return None
            return averaged

        result = self.search_util(pattern, string)
        if abs(result.score - 1.0) < NO_MATCH_TOLERANCE:
            return None
        return result

    def search_text_in_string(self, text: str, string: str) -> Optional[ScoreResult]:
        """Search for a text pattern in a given string.

        If the same text is searched across many strings, create the pattern
        once with :meth:`create_pattern` and call :meth:`search` instead.

        Example:
            >>> Fuse().search_text_in_string("od mn war", "Old Man's War").score
            0.4444444444444444
        """
        return self.search(self.create_pattern(text), string)

    def search_text_in_iterable(self, text: str, items: Iterable[str]) -> List[SearchResult]:
        """Search for a text pattern in every string of an iterable.

        Args:
            text: The pattern string to search for.
            items: Strings to search. Non-string items are searched as
                ``str(item)``.

        Returns:
            SearchResult objects for the items that matched, sorted by
            score ascending (best first).

        Example:
            >>> books = ["The Silmarillion", "The Lock Artist", "The Lost Symbol"]
            >>> [r.index for r in Fuse().search_text_in_iterable("Te silm", books)]
            [0, 2, 1]
        """
        pattern = self.create_pattern(text)
        results = []

        for index, item in enumerate(items):
            result = self.search(pattern, str(item))
            if result is not None:
                results.append(SearchResult(index=index, score=result.score, ranges=result.ranges))

        results.sort(key=lambda r: r.score)
        return results

    def search_fuseable(
        self,
        pattern: Optional[Pattern],
        item: Fuseable,
        index: int = 0,
    ) -> Optional[FuseableSearchResult]:
        """Score one record against a compiled pattern.

        Each property's weight ``w`` turns into a multiplier of 1.0 when
        ``w`` is 1.0 and ``1 - w`` otherwise. A perfect field match with
        multiplier 1.0 is reported as 0.001 rather than 0.0.

        Args:
            pattern: The compiled pattern.
            item: The record to score.
            index: Index reported in the result.

        Returns:
            The record's result, or None when no field matched.

        Raises:
            SchemaError: If ``item.lookup`` returns None for a declared property.
        """
        total_score = 0.0
        property_results = []

        for prop in item.properties():
            value = item.lookup(prop.value)
            if value is None:
                logger.error("Lookup failed for field %r on record %r", prop.value, item)
                raise SchemaError(
                    f"Lookup Failed: Lookup doesn't contain requested value => {prop.value}."
                )

            result = self.search(pattern, value)
            if result is None:
                continue

            if abs(prop.weight - 1.0) < NO_MATCH_TOLERANCE:
                weight = 1.0
            else:
                weight = 1.0 - prop.weight

            if result.score == 0.0 and abs(weight - 1.0) < sys.float_info.epsilon:
                score = 0.001 * weight
            else:
                score = result.score * weight

            total_score += score
            property_results.append(FResult(value=prop.value, score=score, ranges=result.ranges))

        if not property_results:
            return None

        return FuseableSearchResult(
            index=index,
            score=total_score / len(property_results),
            results=property_results,
        )

    def search_text_in_fuse_list(
        self, text: str, items: Sequence[Fuseable]
    ) -> List[FuseableSearchResult]:
        """Search for a text pattern in a list of Fuseable records.

        Args:
            text: The pattern string to search for.
            items: Records implementing ``properties()`` and ``lookup(key)``.

        Returns:
            FuseableSearchResult objects for the records with at least one
            matching field, sorted by score ascending (best first).

        Raises:
            SchemaError: If a record is missing one of its declared fields.
        """
        pattern = self.create_pattern(text)
        results = []

        for index, item in enumerate(items):
            result = self.search_fuseable(pattern, item, index)
            if result is not None:
                results.append(result)

        results.sort(key=lambda r: r.score)
        return results

    def search_text_in_string_list(
        self,
        text: str,
        items: Sequence[str],
        chunk_size: int,
        completion: Optional[Callable[[List[SearchResult]], None]] = None,
        backend: Union[str, "Backend"] = "thread",
    ) -> List[SearchResult]:
        """Search a list of strings in parallel chunks.

        Same results as :meth:`search_text_in_iterable`; see
        :func:`fuzzyfuse.batch.search_string_list`.

        Args:
            text: The pattern string to search for.
            items: Strings to search.
            chunk_size: Number of items handed to each worker.
            completion: Optional callback invoked with the sorted results.
            backend: "thread" (one thread per chunk) or "pool" (thread pool).

        Returns:
            The sorted results.
        """
        from fuzzyfuse import batch

        results = batch.search_string_list(self, text, items, chunk_size, backend=backend)
        if completion is not None:
            completion(results)
        return results

    def search_text_in_fuse_list_with_chunk_size(
        self,
        text: str,
        items: Sequence[Fuseable],
        chunk_size: int,
        completion: Optional[Callable[[List[FuseableSearchResult]], None]] = None,
        backend: Union[str, "Backend"] = "thread",
    ) -> List[FuseableSearchResult]:
        """Search a list of Fuseable records in parallel chunks.

        Same results as :meth:`search_text_in_fuse_list`; see
        :func:`fuzzyfuse.batch.search_fuse_list`.
        """
        from fuzzyfuse import batch

        results = batch.search_fuse_list(self, text, items, chunk_size, backend=backend)
        if completion is not None:
            completion(results)
        return results


__all__ = [
    "Pattern",
    "ScoreResult",
    "SearchResult",
    "FResult",
    "FuseableSearchResult",
    "Fuse",
]
