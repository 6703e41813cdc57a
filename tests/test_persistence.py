"""
Tests for the SQLite cache.
"""

import sqlite3

import pytest

from pricecard.persistence import SqliteCache


class TestSqliteCache:
    def test_missing_key(self, tmp_path):
        assert SqliteCache(tmp_path / "cache.db").read("nothing") is None

    def test_write_then_overwrite(self, tmp_path):
        cache = SqliteCache(tmp_path / "nested" / "cache.db")
        cache.write("k", '{"menu": []}')
        cache.write("k", '{"menu": [], "modifiers": []}')
        assert cache.read("k") == '{"menu": [], "modifiers": []}'

    def test_survives_reopen(self, tmp_path):
        path = tmp_path / "cache.db"
        SqliteCache(path).write("k", "基礎")
        assert SqliteCache(path).read("k") == "基礎"

    def test_connections_are_closed(self, tmp_path):
        class RecordingCache(SqliteCache):
            def __init__(self, db_path):
                super().__init__(db_path)
                self.opened = []

            def _connect(self):
                conn = super()._connect()
                self.opened.append(conn)
                return conn

        cache = RecordingCache(tmp_path / "cache.db")
        cache.write("k", "v")
        assert cache.read("k") == "v"
        assert len(cache.opened) == 4
        for conn in cache.opened:
            with pytest.raises(sqlite3.ProgrammingError):
                conn.execute("SELECT 1")
