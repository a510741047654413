"""
Shared test fixtures for series-ingest tests.

Sample files are small inline strings exposed as fixtures (``basic_csv``,
``messy_csv``). Tests that need a real file on disk write them into
``tmp_path`` via the ``write_csv`` fixture.
"""

from pathlib import Path

import pytest

# ---------------------------------------------------------------------------
# Sample inputs
# ---------------------------------------------------------------------------
BASIC_CSV = """\
Time,A,B
2021-01-01 00:00:00,1.0,2.0
2021-01-01 00:01:00,3.0,4.0
"""

# Out of order, quoted, with a metadata line, bad rows and a surplus column
MESSY_CSV = """\
"Time","Sensor1",""
exported by logger v2,,
2021-01-01 00:02:00,"5.5",6
2021-01-01 00:00:00,1.5,2
not a time,7,8
2021-01-01 00:01:00,3.5,x
2021-01-01 00:01:00,3.25,4,99
"""


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------
@pytest.fixture
def basic_csv() -> str:
    return BASIC_CSV


@pytest.fixture
def messy_csv() -> str:
    return MESSY_CSV


@pytest.fixture
def ts0() -> int:
    """2021-01-01 00:00:00 UTC in epoch milliseconds."""
    return 1609459200000


@pytest.fixture
def write_csv(tmp_path: Path):
    """Return a helper that writes *content* to ``tmp_path / name``."""

    def _write(name: str, content: str) -> Path:
        path = tmp_path / name
        path.write_text(content, encoding="utf-8")
        return path

    return _write


# ---------------------------------------------------------------------------
# Pytest markers
# ---------------------------------------------------------------------------
def pytest_configure(config: pytest.Config) -> None:
    config.addinivalue_line(
        "markers",
        "integration: mark test as integration test (reads and writes real files)",
    )
