"""Tests for flappy_solo/score_db.py - the SQLite key/value store."""
import pytest

from flappy_solo.score_db import Database


@pytest.mark.unit
class TestDatabase:
    def test_missing_key_is_none(self, db):
        assert db.get("bestScore") is None

    def test_set_then_get(self, db):
        db.set("bestScore", "12")
        assert db.get("bestScore") == "12"

    def test_set_overwrites(self, db):
        db.set("bestScore", "12")
        db.set("bestScore", "15")
        assert db.get("bestScore") == "15"

    def test_keys_are_independent(self, db):
        db.set("bestScore", "3")
        db.set("gamesPlayed", "8")
        assert db.get("bestScore") == "3"
        assert db.get("gamesPlayed") == "8"

    def test_values_survive_reopen(self, tmp_path):
        path = str(tmp_path / "scores.db")
        first = Database(path)
        first.set("bestScore", "21")
        first.close()

        second = Database(path)
        try:
            assert second.get("bestScore") == "21"
        finally:
            second.close()
