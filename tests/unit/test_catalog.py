"""
Unit tests for multi-file mode (series_ingest.catalog, series_ingest.naming).
"""

from __future__ import annotations

import threading

import pytest

from series_ingest.catalog import FileTable
from series_ingest.naming import derive_file_id
from series_ingest.parsers.base import Entry


class TestDeriveFileId:
    """Tests for derive_file_id()."""

    @pytest.mark.parametrize(
        ("path", "expected"),
        [
            ("boiler.csv", "boiler"),
            ("boiler_2021.csv", "boiler"),
            ("data/pump.2021_03.csv", "pump"),
            ("/tmp/readings", "readings"),
            ("_hidden.csv", "_hidden.csv"),
            (".env", ".env"),
        ],
    )
    def test_cut_at_first_dot_or_underscore(self, path, expected):
        assert derive_file_id(path) == expected


class TestFileTable:
    """Tests for FileTable."""

    def test_publish_and_get(self):
        files = FileTable()
        table = {"A": (Entry(1, 1.0),)}
        files.publish("foo", table)
        assert files.get("foo") == table
        assert "foo" in files
        assert len(files) == 1
        assert files.file_ids() == ["foo"]

    def test_get_unknown_is_none(self):
        assert FileTable().get("nope") is None

    def test_republish_replaces_without_merge(self):
        files = FileTable()
        files.publish("foo", {"A": (Entry(1, 1.0),), "B": (Entry(1, 2.0),)})
        files.publish("foo", {"C": (Entry(2, 3.0),)})
        assert files.get("foo") == {"C": (Entry(2, 3.0),)}
        assert len(files) == 1

    def test_snapshot_is_a_copy(self):
        files = FileTable()
        files.publish("foo", {})
        snap = files.snapshot()
        files.publish("bar", {})
        assert list(snap) == ["foo"]

    def test_flatten_later_publication_wins(self):
        files = FileTable()
        files.publish("first", {"A": (Entry(1, 1.0),), "B": (Entry(1, 2.0),)})
        files.publish("second", {"A": (Entry(5, 9.0),)})
        flat = files.flatten()
        assert flat["A"] == (Entry(5, 9.0),)
        assert flat["B"] == (Entry(1, 2.0),)

    def test_concurrent_publishers(self):
        files = FileTable()

        def worker(n: int) -> None:
            for i in range(50):
                files.publish(f"f{n}", {"A": (Entry(i, float(i)),)})

        threads = [threading.Thread(target=worker, args=(n,)) for n in range(4)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert sorted(files.file_ids()) == ["f0", "f1", "f2", "f3"]
        assert all(files.get(f"f{n}") == {"A": (Entry(49, 49.0),)} for n in range(4))
