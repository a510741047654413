"""
Parsers sub-package for series-ingest.

Components, leaf to root:
- tokenizer.py: splits one line into fields (single separator, one
  optional quote layer).
- timestamps.py: tries ordered timestamp format families.
- values.py: normalizes and parses float32 values.
- series.py: header resolution, row assembly, the SeriesBuilder and the
  SeriesParser that ties them together.
- base.py: Entry, SeriesTable and ParseResult.

Data only flows downward: nothing here imports from the package root.
"""

from series_ingest.parsers.base import Entry, ParseResult, SeriesTable
from series_ingest.parsers.series import SeriesParser, parse_series

__all__ = ["Entry", "ParseResult", "SeriesTable", "SeriesParser", "parse_series"]
