"""
Custom exception hierarchy for series-ingest.

Parse-step failures all derive from ``ParseFailure`` so the row loop can
skip a bad line with a single ``except`` clause, while callers that use
the interpreters directly can still tell the failure kinds apart:

- ``EmptyFieldError``: a field that should carry content is zero-length.
- ``TimestampUnparseableError``: no registered timestamp format matched.
- ``ValueUnparseableError``: a numeric field failed float parsing.
- ``HeaderUnparseableError``: the first line yields no column names.

``SourceOpenError`` and ``ConfigValidationError`` are file- and
config-scoped and never raised from inside the line loop.
"""


class SeriesIngestError(Exception):
    """Base exception for all series-ingest errors."""


class ConfigValidationError(SeriesIngestError):
    """Raised when a series-ingest YAML config is empty or inconsistent."""


class SourceOpenError(SeriesIngestError):
    """Raised when a source file cannot be opened for reading.

    Aborts ingestion of that one file only.
    """

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"could not open file '{path}': {reason}")
        self.path = path
        self.reason = reason


class ParseFailure(SeriesIngestError):
    """Base class for line- and header-scoped parse failures."""


class EmptyFieldError(ParseFailure):
    """A field expected to carry content is empty (or there is no more data)."""


class TimestampUnparseableError(ParseFailure):
    """No timestamp format matched; carries the trimmed candidate text."""

    def __init__(self, candidate: str, reason: str = "could not parse timestamp") -> None:
        super().__init__(f"{reason}: '{candidate}'")
        self.candidate = candidate


class ValueUnparseableError(ParseFailure):
    """A numeric field failed float parsing after normalization."""

    def __init__(self, candidate: str) -> None:
        super().__init__(f"could not parse value: '{candidate}'")
        self.candidate = candidate


class HeaderUnparseableError(ParseFailure):
    """The first line of a file could not be split into column names.

    Fatal for the file: it contributes an empty table.
    """
