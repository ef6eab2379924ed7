"""Internal utilities for fuzzyfuse.

Score, alphabet and range helpers used by the Bitap matcher in
``fuzzyfuse._core``. Everything here works on ``str`` code points, never on
encoded bytes, so indices always line up with the caller's strings.
"""

from typing import Dict, Iterable, List, Sequence, Tuple, Union

from fuzzyfuse.enums import Backend
from fuzzyfuse.exceptions import ValidationError

Range = Tuple[int, int]

# Valid backend names (lowercase)
VALID_BACKENDS = frozenset(b.value for b in Backend)


def calculate_score(
    pattern_length: int,
    e: int,
    x: int,
    loc: int,
    distance: int,
) -> float:
    """Compute the cost of a match with ``e`` errors found at position ``x``.

    Args:
        pattern_length: Number of characters in the pattern (>= 1).
        e: Number of errors in the match.
        x: Position the match was found at.
        loc: Expected position of the match.
        distance: How quickly the score degrades with distance from ``loc``.
            Zero turns any positional deviation into a full mismatch.

    Returns:
        ``e / pattern_length + abs(x - loc) / distance``. The value is not
        clamped; anything at or above the threshold is treated as no match.

    Example:
        >>> calculate_score(4, 2, 25, 0, 100)
        0.75
        >>> calculate_score(4, 2, 25, 0, 0)
        1.0
    """
    accuracy = e / pattern_length
    proximity = abs(x - loc)
    if distance == 0:
        return 1.0 if proximity != 0 else accuracy
    return accuracy + proximity / distance


def calculate_pattern_alphabet(pattern: str) -> Dict[str, int]:
    """Initialize the alphabet for the Bitap algorithm.

    Each character maps to a bitmask of the positions it occupies, where
    the last character of the pattern is bit 0.

    Example:
        >>> calculate_pattern_alphabet("abca")
        {'a': 9, 'b': 4, 'c': 2}
    """
    length = len(pattern)
    mask: Dict[str, int] = {}
    for i, c in enumerate(pattern):
        mask[c] = mask.get(c, 0) | (1 << (length - i - 1))
    return mask


def find_ranges(mask: Sequence[int]) -> List[Range]:
    """Return the consecutive runs of ``1`` in ``mask`` as half-open ranges.

    Raises:
        ValidationError: If the mask is empty.

    Example:
        >>> find_ranges([0, 1, 1, 0, 1])
        [(1, 3), (4, 5)]
    """
    if not mask:
        raise ValidationError("Input array is empty")

    ranges: List[Range] = []
    start = -1
    for n, bit in enumerate(mask):
        if start == -1 and bit:
            start = n
        elif start != -1 and not bit:
            ranges.append((start, n))
            start = -1

    if start != -1:
        ranges.append((start, len(mask)))
    return ranges


def _fold_char(c: str) -> str:
    lowered = c.lower()
    # Characters such as "İ" lowercase to two code points; keep them as-is
    # so folded text stays index-aligned with the input.
    return lowered if len(lowered) == 1 else c


def fold_case(text: str) -> str:
    """Lowercase ``text`` one character at a time, preserving its length.

    Example:
        >>> fold_case("Old Man's War")
        "old man's war"
    """
    if text.isascii():
        return text.lower()
    return "".join(_fold_char(c) for c in text)


def highlight(
    text: str,
    ranges: Iterable[Range],
    before: str = "[",
    after: str = "]",
) -> str:
    """Wrap the matched ranges of ``text`` in ``before``/``after`` markers.

    Overlapping or unordered ranges (as produced by tokenized searches) are
    merged first, so every matched character is wrapped exactly once.

    Example:
        >>> highlight("Old Man's War", [(0, 1), (2, 7), (9, 13)])
        "[O]l[d Man]'s[ War]"
    """
    if not text:
        return text

    mask = [0] * len(text)
    for start, end in ranges:
        for idx in range(max(start, 0), min(end, len(text))):
            mask[idx] = 1

    parts = []
    cursor = 0
    for start, end in find_ranges(mask):
        parts.append(text[cursor:start])
        parts.append(f"{before}{text[start:end]}{after}")
        cursor = end
    parts.append(text[cursor:])
    return "".join(parts)


def normalize_backend(backend: Union[str, Backend]) -> Backend:
    """Convert a backend name to the Backend enum.

    Args:
        backend: Either a Backend enum value or a string backend name.

    Returns:
        The matching Backend member.

    Raises:
        ValidationError: If the backend name is not recognized.
        TypeError: If backend is not a string or Backend enum.

    Example:
        >>> normalize_backend("POOL")
        <Backend.POOL: 'pool'>
    """
    if isinstance(backend, Backend):
        return backend

    if isinstance(backend, str):
        name = backend.lower()
        if name in VALID_BACKENDS:
            return Backend(name)
        raise ValidationError(
            f"Unknown backend: '{backend}'. Valid options: {sorted(VALID_BACKENDS)}"
        )

    raise TypeError(f"backend must be str or Backend enum, got {type(backend).__name__}")


__all__ = [
    "Range",
    "VALID_BACKENDS",
    "calculate_score",
    "calculate_pattern_alphabet",
    "find_ranges",
    "fold_case",
    "highlight",
    "normalize_backend",
]
