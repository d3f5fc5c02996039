"""
Tests for persistence.py - best-effort high score stores.
"""

from wrapsnake.persistence import FileHighScoreStore, MemoryHighScoreStore


class TestMemoryHighScoreStore:
    def test_round_trip(self):
        store = MemoryHighScoreStore()
        assert store.load() == 0
        store.save(9)
        assert store.load() == 9


class TestFileHighScoreStore:
    def test_missing_file_loads_zero(self, tmp_path):
        assert FileHighScoreStore(tmp_path / "nope.txt").load() == 0

    def test_save_creates_parent_dirs(self, tmp_path):
        path = tmp_path / "a" / "b" / "hs.txt"
        store = FileHighScoreStore(path)
        store.save(14)
        assert path.read_text(encoding="utf-8") == "14"
        assert FileHighScoreStore(path).load() == 14

    def test_malformed_file_loads_zero(self, tmp_path, caplog):
        path = tmp_path / "hs.txt"
        path.write_text("lots", encoding="utf-8")
        assert FileHighScoreStore(path).load() == 0
        assert "malformed" in caplog.text

    def test_write_failure_is_swallowed(self, tmp_path, caplog):
        blocker = tmp_path / "file"
        blocker.write_text("x", encoding="utf-8")
        # parent "directory" is a regular file, so mkdir/write fails
        store = FileHighScoreStore(blocker / "hs.txt")
        store.save(3)
        assert "Could not save" in caplog.text
        assert store.load() == 0

    def test_undecodable_file_loads_zero(self, tmp_path, caplog):
        path = tmp_path / "hs.txt"
        path.write_bytes(b"\xff\xfe")
        assert FileHighScoreStore(path).load() == 0
        assert "Could not read" in caplog.text

    def test_game_starts_and_restarts_over_undecodable_file(self, tmp_path):
        from wrapsnake.config import GameConfig
        from wrapsnake.game import RunState, SnakeGame

        path = tmp_path / "hs.txt"
        path.write_bytes(b"\xff\xfe")
        game = SnakeGame(GameConfig(seed=0), FileHighScoreStore(path))
        assert game.state.high_score == 0
        game.restart()
        assert game.state.run_state is RunState.RUNNING
