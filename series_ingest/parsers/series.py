"""
Multi-column series parser.

Turns a line-oriented text stream into a SeriesTable:

  - Line 0 is the header. Column 0 names the timestamp column and is
    discarded; every other column names a series. Empty names fall back
    to the caller-supplied fallback name, and duplicate names merge into
    one series in column order.
  - Every later line carries one timestamp (column 0) followed by one
    value per series column. A line is atomic: if its timestamp or any
    of its values fails to parse, the whole line is skipped and parsing
    carries on with the next one.
  - After the last line, each series is stably sorted by timestamp.

Failures on the first ``quiet_lines`` data lines are not logged, since
many exports put introductory metadata there. Everything is advisory:
diagnostics go to the log, never into the returned table.
"""

from __future__ import annotations

import logging
from operator import attrgetter
from typing import Iterable, TextIO

from series_ingest.config import ParserConfig
from series_ingest.exceptions import EmptyFieldError, HeaderUnparseableError, ParseFailure
from series_ingest.parsers.base import Entry, ParseResult, SeriesTable
from series_ingest.parsers.timestamps import interpret_timestamp
from series_ingest.parsers.tokenizer import iter_fields, next_field
from series_ingest.parsers.values import interpret_value

logger = logging.getLogger(__name__)

_BOM = "\ufeff"


def resolve_header(
    line: str | None,
    fallback_name: str,
    config: ParserConfig | None = None,
) -> list[str]:
    """Resolve the header line into one series name per value column.

    Raises:
        HeaderUnparseableError: If *line* is missing or blank.
    """
    if config is None:
        config = ParserConfig()
    if line is None:
        raise HeaderUnparseableError("file has no header line")

    line = line.rstrip("\r\n")
    if line.startswith(_BOM):
        line = line[len(_BOM):]
    if not line.strip():
        raise HeaderUnparseableError("header line is empty")

    fields = iter_fields(line, separator=config.separator, quote=config.quote)
    next(fields)  # timestamp column

    names: list[str] = []
    for text in fields:
        name = text.strip()
        names.append(name or fallback_name)
    return names


def assemble_row(
    line: str,
    columns: list[str],
    config: ParserConfig | None = None,
    *,
    year: int | None = None,
) -> tuple[list[tuple[str, Entry]], int]:
    """Parse one data line into ``(series name, Entry)`` pairs.

    Field text arrives with its quote layer already removed by the
    tokenizer. Fields beyond ``len(columns)`` are not parsed; the non-empty
    ones are counted and returned as the second element so the caller can
    warn. A row with fewer value fields than columns fails as a whole.

    Raises:
        ParseFailure: On the first field that fails. No entries from the
            line survive.
    """
    if config is None:
        config = ParserConfig()

    stamp, cursor = next_field(line, 0, config.separator, config.quote)
    timestamp = interpret_timestamp(stamp, config, year=year)

    entries: list[tuple[str, Entry]] = []
    surplus = 0
    fields = iter_fields(line, cursor, config.separator, config.quote)
    for index, text in enumerate(fields):
        if index >= len(columns):
            if text.strip():
                surplus += 1
            continue
        value = interpret_value(text, config.quote, unquote=False)
        entries.append((columns[index], Entry(timestamp=timestamp, value=value)))

    if len(entries) < len(columns):
        raise EmptyFieldError(
            f"no more data: {len(entries)} of {len(columns)} value column(s) present"
        )
    return entries, surplus


class SeriesBuilder:
    """Accumulates entries per series name, then sorts once at the end."""

    def __init__(self) -> None:
        self._series: dict[str, list[Entry]] = {}

    def add(self, name: str, entry: Entry) -> None:
        self._series.setdefault(name, []).append(entry)

    def extend(self, pairs: Iterable[tuple[str, Entry]]) -> None:
        for name, entry in pairs:
            self.add(name, entry)

    def finalize(self) -> SeriesTable:
        """Return every series stably sorted by ascending timestamp."""
        by_time = attrgetter("timestamp")
        return {
            name: tuple(sorted(entries, key=by_time))
            for name, entries in self._series.items()
        }


class SeriesParser:
    """Parser for header-plus-rows series files.

    A parser holds only settings; each ``parse()`` call builds its own
    accumulation state, so one instance may serve several threads.
    """

    def __init__(self, config: ParserConfig | None = None, *, year: int | None = None) -> None:
        self.config = config or ParserConfig()
        self.year = year

    def parse(self, handle: TextIO, fallback_name: str) -> ParseResult:
        """Parse an open text handle into a ParseResult.

        Args:
            handle: An already-open, readable text stream. It is read to the
                end but not closed.
            fallback_name: Series name for header cells that are empty.

        Returns:
            ParseResult whose ``series`` is empty when the header is unusable.
        """
        if not fallback_name:
            raise ValueError("fallback_name must be a non-empty string")

        config = self.config
        lines = iter(handle)
        result = ParseResult()

        header = next(lines, None)
        try:
            result.columns = resolve_header(header, fallback_name, config)
        except HeaderUnparseableError as exc:
            logger.error("Could not parse header (fallback name '%s'): %s", fallback_name, exc)
            result.lines_read = 0 if header is None else 1
            return result
        result.lines_read = 1

        builder = SeriesBuilder()
        for number, raw_line in enumerate(lines, start=1):
            result.lines_read += 1
            line = raw_line.rstrip("\r\n")
            if not line.strip():
                continue
            quiet = number <= config.quiet_lines

            try:
                entries, surplus = assemble_row(line, result.columns, config, year=self.year)
            except ParseFailure as exc:
                result.lines_skipped += 1
                if not quiet:
                    logger.warning("Error parsing line %d: %s\n    %s", number, exc, line)
                continue

            if surplus:
                result.surplus_columns += surplus
                if not quiet:
                    logger.warning(
                        "Line %d has %d column(s) beyond the %d in the header; dropped",
                        number, surplus, len(result.columns),
                    )
            builder.extend(entries)

        result.series = builder.finalize()
        logger.info(
            "Parsed %d series from %d lines (%d skipped, fallback name '%s')",
            len(result.series), result.lines_read, result.lines_skipped, fallback_name,
        )
        return result


def parse_series(
    handle: TextIO,
    fallback_name: str,
    config: ParserConfig | None = None,
) -> SeriesTable:
    """Parse an open text handle into a SeriesTable.

    Single-file entry point. Bad data lines are skipped and logged; an
    unusable header yields an empty table.
    """
    return SeriesParser(config).parse(handle, fallback_name).series
