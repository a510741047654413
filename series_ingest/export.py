"""
Downstream views of parsed series.

Two JSON shapes are produced for chart front-ends:

  records: ``{"A": [{"timestamp": 1609459200000, "value": 1.0}, ...]}``
  pairs:   ``{"A": [[1609459200000, 1.0], ...]}``

Values are float32 samples; they are written with their shortest float32
representation (``42.1``, not ``42.099998474121094``). Non-finite values
have no JSON spelling and become ``null``. Key order carries no meaning.

For analysis the same data is available as a long pandas DataFrame with
one row per sample.

Nothing in this module touches the file system.
"""

from __future__ import annotations

import json
import logging
import math
from typing import Any, Literal, Mapping

import numpy as np
import pandas as pd

from series_ingest.parsers.base import SeriesTable

logger = logging.getLogger(__name__)

_FRAME_COLUMNS = ["series", "timestamp", "value"]


def _json_value(value: float) -> float | None:
    """Round-trip *value* through its shortest float32 spelling."""
    if not math.isfinite(value):
        return None
    return float(str(np.float32(value)))


def to_records(table: SeriesTable) -> dict[str, list[dict[str, Any]]]:
    """Series name -> list of ``{"timestamp", "value"}`` objects."""
    return {
        name: [
            {"timestamp": entry.timestamp, "value": _json_value(entry.value)}
            for entry in entries
        ]
        for name, entries in table.items()
    }


def to_pairs(table: SeriesTable) -> dict[str, list[list[Any]]]:
    """Series name -> list of ``[timestamp, value]`` pairs."""
    return {
        name: [[entry.timestamp, _json_value(entry.value)] for entry in entries]
        for name, entries in table.items()
    }


def dumps(
    table: SeriesTable,
    layout: Literal["records", "pairs"] = "records",
) -> str:
    """Serialize *table* to JSON text in the given layout.

    Raises:
        ValueError: If *layout* is not ``"records"`` or ``"pairs"``.
    """
    if layout == "records":
        payload = to_records(table)
    elif layout == "pairs":
        payload = to_pairs(table)
    else:
        raise ValueError(
            f"Unsupported JSON layout: '{layout}'. Supported layouts: ['pairs', 'records']"
        )
    return json.dumps(payload, allow_nan=False)


def to_frame(table: SeriesTable) -> pd.DataFrame:
    """Flatten *table* into a long DataFrame (series, timestamp, value).

    Rows keep each series' timestamp order; series follow the table's
    iteration order. ``timestamp`` is uint64 milliseconds and ``value``
    is float32.
    """
    rows = [
        (name, entry.timestamp, entry.value)
        for name, entries in table.items()
        for entry in entries
    ]
    df = pd.DataFrame(rows, columns=_FRAME_COLUMNS)
    return df.astype({"series": "object", "timestamp": "uint64", "value": "float32"})


def files_to_frame(files: Mapping[str, SeriesTable]) -> pd.DataFrame:
    """Like ``to_frame()`` for several files, with a leading ``file_id`` column."""
    frames = []
    for file_id, table in files.items():
        df = to_frame(table)
        df.insert(0, "file_id", file_id)
        frames.append(df)

    if not frames:
        empty = to_frame({})
        empty.insert(0, "file_id", pd.Series(dtype="object"))
        return empty

    logger.debug("Combining %d file tables into one frame", len(frames))
    return pd.concat(frames, ignore_index=True)

