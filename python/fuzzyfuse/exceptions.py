"""Exception hierarchy for fuzzyfuse."""


class FuzzyFuseError(Exception):
    """Base exception for all fuzzyfuse errors."""


class ValidationError(FuzzyFuseError):
    """Raised when input validation fails (invalid parameters, out of range values).

    Also raised when the range extractor is handed an empty match mask,
    which happens when a zero-length target string is searched.
    """


class SchemaError(FuzzyFuseError):
    """Raised when a record's declared searchable field has no value.

    A missing field means the record's properties and its data disagree,
    so the whole search call is aborted instead of skipping the field.
    """


__all__ = ["FuzzyFuseError", "ValidationError", "SchemaError"]
