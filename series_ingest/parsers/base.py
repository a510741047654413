"""
Shared data model for the series parsers.

- ``Entry``: one immutable (timestamp, value) sample.
- ``SeriesTable``: series name -> entries sorted by timestamp.
- ``ParseResult``: a finished SeriesTable plus advisory counters that
  describe what was skipped. The counters never leak into the table.
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class Entry:
    """A single sample.

    Attributes:
        timestamp: Milliseconds since the Unix epoch (never negative).
        value: The sample value, already rounded to float32 precision.
    """
    timestamp: int
    value: float


SeriesTable = dict[str, tuple[Entry, ...]]


@dataclass
class ParseResult:
    """Output of ``SeriesParser.parse()``.

    Attributes:
        series: The finalized SeriesTable (empty if the header failed).
        columns: Resolved series names, one per value column, in column order.
        lines_read: Number of lines consumed, header included.
        lines_skipped: Data lines that contributed nothing.
        surplus_columns: Non-empty fields dropped because the header
            declared fewer columns.
    """
    series: SeriesTable = field(default_factory=dict)
    columns: list[str] = field(default_factory=list)
    lines_read: int = 0
    lines_skipped: int = 0
    surplus_columns: int = 0
