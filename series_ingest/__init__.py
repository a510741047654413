"""
series-ingest: normalize loosely-structured CSV time series.

Instrument and spreadsheet exports disagree on timestamp formats, quoting
and decimal marks. This library reads such a file into named numeric
series, each sorted by time.

Public API surface:

- ``parse_series(handle, fallback_name, config=None)`` -- single-file
  mode. Takes an already-open text handle and returns a SeriesTable
  (series name -> tuple of ``Entry``). Bad lines are skipped and logged.

- ``ingest_files(paths, files=None, config=None)`` -- multi-file mode.
  Opens each path, derives its identifier from the file name, parses it
  and publishes the result into a ``FileTable``.

- ``load(config_path)`` -- runs ``ingest_files()`` for the sources listed
  in a YAML config and returns the populated ``FileTable``.

Example::

    import series_ingest

    with open("boiler_2021.csv", encoding="utf-8-sig") as f:
        table = series_ingest.parse_series(f, "boiler")
    for entry in table["temperature"]:
        print(entry.timestamp, entry.value)
"""

from __future__ import annotations

import logging
from pathlib import Path

from series_ingest.catalog import FileTable, IngestSummary, ingest_files
from series_ingest.config import IngestConfig, ParserConfig, load_config
from series_ingest.parsers import Entry, ParseResult, SeriesParser, SeriesTable, parse_series

__all__ = [
    "Entry",
    "FileTable",
    "IngestConfig",
    "IngestSummary",
    "ParseResult",
    "ParserConfig",
    "SeriesParser",
    "SeriesTable",
    "ingest_files",
    "load",
    "load_config",
    "parse_series",
]

logger = logging.getLogger(__name__)


def load(config_path: str | Path, files: FileTable | None = None) -> FileTable:
    """Ingest every source listed in a YAML config.

    Relative source paths are resolved against the config file's directory.

    Args:
        config_path: Path to the series-ingest YAML config.
        files: FileTable to publish into. A fresh one is created when ``None``.

    Returns:
        The FileTable holding one SeriesTable per readable source.

    Raises:
        FileNotFoundError: If *config_path* does not exist.
        ConfigValidationError: If the config file is empty.
        pydantic.ValidationError: If the config fails schema validation.
    """
    config_path = Path(config_path)
    config = load_config(config_path)
    logger.info("load() -- %d source(s) from %s", len(config.sources), config_path)

    if files is None:
        files = FileTable()

    base = config_path.parent
    paths = [
        p if p.is_absolute() else base / p
        for p in (Path(source) for source in config.sources)
    ]
    summary = ingest_files(paths, files, config.parser)
    if summary.failed:
        logger.warning(
            "load() -- %d of %d source(s) could not be opened",
            len(summary.failed), len(paths),
        )
    return files
