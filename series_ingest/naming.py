"""
File identifier derivation.

A source file's identifier is the part of its base name before the first
``.`` or ``_``: ``boiler_2021-03.csv`` -> ``boiler``. The same string
serves as the fallback series name for empty header cells and as the key
of the file's SeriesTable in multi-file mode.
"""

from __future__ import annotations

import re
from pathlib import Path

_CUT = re.compile(r"[._]")


def derive_file_id(path: str | Path) -> str:
    """Return the identifier for *path*.

    Names that start with ``.`` or ``_`` would truncate to nothing; they
    keep their full base name instead.
    """
    name = Path(path).name
    file_id = _CUT.split(name, maxsplit=1)[0]
    return file_id or name
