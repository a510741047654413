"""
Multi-file mode for series-ingest.

``FileTable`` maps a file identifier to the SeriesTable parsed from that
file. It is the one place where results are shared: parsing itself
builds a private table per call, and ``FileTable.publish()`` swaps the
finished table in under a lock, so readers see either the previous
table or the new one, never a half-built mix.

``ingest_files()`` is the batch workflow:
  1. derive the identifier (and fallback name) from each path;
  2. open the file as ``utf-8-sig`` text;
  3. parse it with ``SeriesParser``;
  4. publish the result, replacing any earlier table under that id.

A file that cannot be opened is logged and recorded in the returned
``IngestSummary``; the remaining files are still ingested.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable

from series_ingest.config import ParserConfig
from series_ingest.exceptions import SourceOpenError
from series_ingest.naming import derive_file_id
from series_ingest.parsers.base import Entry, ParseResult, SeriesTable
from series_ingest.parsers.series import SeriesParser

logger = logging.getLogger(__name__)


class FileTable:
    """Thread-safe mapping of file identifier -> SeriesTable."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._tables: dict[str, SeriesTable] = {}

    def publish(self, file_id: str, table: SeriesTable) -> None:
        """Store *table* under *file_id*, fully replacing any prior table."""
        with self._lock:
            replaced = file_id in self._tables
            self._tables[file_id] = table
        logger.info(
            "%s table for '%s' (%d series)",
            "Replaced" if replaced else "Published", file_id, len(table),
        )

    def get(self, file_id: str) -> SeriesTable | None:
        with self._lock:
            return self._tables.get(file_id)

    def file_ids(self) -> list[str]:
        with self._lock:
            return list(self._tables)

    def snapshot(self) -> dict[str, SeriesTable]:
        """Return a shallow copy of the current file -> table mapping."""
        with self._lock:
            return dict(self._tables)

    def flatten(self) -> dict[str, tuple[Entry, ...]]:
        """Merge all files into one series-name keyed mapping.

        Files are merged in publication order, so when two files carry a
        series of the same name the later publication wins.
        """
        merged: dict[str, tuple[Entry, ...]] = {}
        for table in self.snapshot().values():
            merged.update(table)
        return merged

    def __contains__(self, file_id: object) -> bool:
        with self._lock:
            return file_id in self._tables

    def __len__(self) -> int:
        with self._lock:
            return len(self._tables)


@dataclass
class IngestSummary:
    """Outcome of ``ingest_files()``.

    Attributes:
        parsed: File id -> ParseResult for every file that was read.
        failed: Path -> SourceOpenError for every file that could not be opened.
    """
    parsed: dict[str, ParseResult] = field(default_factory=dict)
    failed: dict[str, SourceOpenError] = field(default_factory=dict)


def parse_file(path: str | Path, config: ParserConfig | None = None) -> tuple[str, ParseResult]:
    """Open and parse a single file, returning ``(file_id, ParseResult)``.

    Raises:
        SourceOpenError: If the file cannot be opened.
    """
    path = Path(path)
    file_id = derive_file_id(path)
    try:
        handle = open(path, "r", encoding="utf-8-sig", errors="replace", newline="")
    except OSError as exc:
        raise SourceOpenError(str(path), exc.strerror or str(exc)) from exc

    logger.info("Parsing file with fallback name: %s, %s", file_id, path)
    with handle:
        result = SeriesParser(config).parse(handle, file_id)
    return file_id, result


def ingest_files(
    paths: Iterable[str | Path],
    files: FileTable | None = None,
    config: ParserConfig | None = None,
) -> IngestSummary:
    """Parse every path and publish each result into *files*.

    Args:
        paths: Source files to ingest, in order.
        files: Destination FileTable. A fresh one is used when ``None``;
            pass your own to get at the published tables.
        config: Parser settings shared by all files.

    Returns:
        IngestSummary with per-file parse results and open failures.
    """
    if files is None:
        files = FileTable()

    summary = IngestSummary()
    for path in paths:
        try:
            file_id, result = parse_file(path, config)
        except SourceOpenError as exc:
            logger.error("%s", exc)
            summary.failed[str(path)] = exc
            continue
        files.publish(file_id, result.series)
        summary.parsed[file_id] = result
    return summary
