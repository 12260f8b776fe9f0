"""
Test console harness input parsing and run loop
"""

import builtins

import pytest

import main
from backend.commands import (
    FinishTest, NextQuestion, PreviousQuestion, SetReflection, SetScore
)


class TestParseCommand:

    @pytest.mark.parametrize("text, expected", [
        ("n", NextQuestion()),
        ("P", PreviousQuestion()),
        (" f ", FinishTest()),
        ("7", SetScore(7)),
        ("7.5", SetScore(7.5)),
        ("r  felt good today ", SetReflection("felt good today")),
    ])
    def test_known_inputs(self, text, expected):
        assert main.parse_command(text) == expected

    def test_unknown_input(self):
        assert main.parse_command("maybe") is None


class TestConsoleRun:

    def feed(self, monkeypatch, lines):
        answers = iter(lines)
        monkeypatch.setattr(builtins, 'input', lambda prompt="": next(answers))

    def test_quit_saves_nothing(self, monkeypatch, tmp_path):
        self.feed(monkeypatch, ["5", "quit"])

        code = main.main([
            "--settings", str(tmp_path / "settings.json"),
            "--results-dir", str(tmp_path / "results"),
        ])

        assert code == 0
        assert not (tmp_path / "results").exists()

    def test_full_run_writes_result(self, monkeypatch, tmp_path, capsys):
        lines = []
        for _ in range(22):
            lines += ["8", "n"]
        lines += ["8", "f"]
        self.feed(monkeypatch, lines)

        code = main.main([
            "--settings", str(tmp_path / "settings.json"),
            "--results-dir", str(tmp_path / "results"),
        ])

        assert code == 0
        saved = list((tmp_path / "results").glob("PERMA-Results-*.md"))
        assert len(saved) == 1
        assert "Positive Emotion: 8.00" in saved[0].read_text()
        assert "Result saved to" in capsys.readouterr().out
