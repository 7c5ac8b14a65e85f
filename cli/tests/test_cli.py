"""
Tests for cli/flashdeck_cli (argument parsing and REPL commands).
"""

from __future__ import annotations

import json
import random

import pytest

from flashdeck.kernel.deck import Deck
from flashdeck_cli.main import main, parse_args
from flashdeck_cli.repl import Repl


@pytest.fixture
def repl():
    deck = Deck(rng=random.Random(0))
    deck.add_question("1+1", "2", ["math"])
    deck.add_question("capital of France", "Paris", ["geo"])
    return Repl(deck)


class TestParseArgs:
    def test_defaults_to_repl(self):
        args = parse_args([])
        assert args["command"] is None
        assert args["home"] is None

    def test_export_with_path(self):
        args = parse_args(["export", "out.json", "--slot", "work"])
        assert args["command"] == "export"
        assert args["path"] == "out.json"
        assert args["slot"] == "work"

    def test_home_option(self):
        assert parse_args(["--home", "/tmp/decks"])["home"] == "/tmp/decks"

    def test_unknown_option_exits(self):
        with pytest.raises(SystemExit):
            parse_args(["--bogus"])

    def test_missing_option_value_exits(self):
        with pytest.raises(SystemExit):
            parse_args(["--slot"])


class TestReplCommands:
    def test_add_prompts_and_stores(self, repl, monkeypatch, capsys):
        answers = iter(["3*3", "9", "math, easy"])
        monkeypatch.setattr("builtins.input", lambda prompt="": next(answers))
        repl._handle_command("/add")
        question = repl.deck.questions[-1]
        assert (question.q, question.a, question.tags) == ("3*3", "9", ["math", "easy"])
        assert "Added #2" in capsys.readouterr().out

    def test_add_requires_answer(self, repl, monkeypatch, capsys):
        answers = iter(["3*3", "  "])
        monkeypatch.setattr("builtins.input", lambda prompt="": next(answers))
        repl._handle_command("/add")
        assert len(repl.deck.questions) == 2
        assert "required" in capsys.readouterr().out

    def test_delete(self, repl, capsys):
        repl._handle_command("/delete 0")
        repl._handle_command("/delete 0")
        repl._handle_command("/delete zero")
        out = capsys.readouterr().out
        assert "Deleted #0" in out
        assert "No question #0" in out
        assert "Invalid key" in out

    def test_tags(self, repl, capsys):
        repl._handle_command("/tags")
        assert "geo, math" in capsys.readouterr().out

    def test_study_flow(self, repl, capsys):
        repl._handle_command("/start math")
        repl._handle_command("/flip")
        repl._handle_command("/next")
        out = capsys.readouterr().out
        assert "1+1" in out
        assert "Answer:" in out
        assert "Deck complete" in out

    def test_next_without_session(self, repl, capsys):
        repl._handle_command("/next")
        assert "No session" in capsys.readouterr().out

    def test_export_and_import(self, repl, tmp_path, capsys):
        path = tmp_path / "deck.json"
        repl._handle_command(f"/export {path}")
        assert len(json.loads(path.read_text())["questions"]) == 2

        path.write_text('{"questions": [{"q": "x", "a": "y"}]}')
        repl._handle_command(f"/import {path}")
        assert [question.q for question in repl.deck.questions] == ["x"]
        assert "Imported 1 questions" in capsys.readouterr().out

    def test_failed_import(self, repl, tmp_path, capsys):
        path = tmp_path / "bad.json"
        path.write_text("{not json")
        repl._handle_command(f"/import {path}")
        assert len(repl.deck.questions) == 2
        assert "deck unchanged" in capsys.readouterr().out

    def test_quit(self, repl):
        repl._handle_command("/quit")
        assert not repl.running

    def test_unknown_command(self, repl, capsys):
        repl._handle_command("/dance")
        assert "Unknown command" in capsys.readouterr().out


class TestMainCommands:
    def test_export_writes_file(self, tmp_path, monkeypatch, capsys):
        target = tmp_path / "out.json"
        monkeypatch.setattr("sys.argv", ["flashdeck", "--home", str(tmp_path / "home"), "export", str(target)])
        main()
        assert json.loads(target.read_text()) == {"questions": []}
        assert "Exported 0 questions" in capsys.readouterr().out

    def test_export_to_unwritable_path_exits(self, tmp_path, monkeypatch, capsys):
        # a directory cannot be written as a file
        monkeypatch.setattr("sys.argv", ["flashdeck", "--home", str(tmp_path / "home"), "export", str(tmp_path)])
        with pytest.raises(SystemExit) as exc:
            main()
        assert exc.value.code == 1
        assert "Export failed" in capsys.readouterr().out
