"""
Tests for flashdeck/config.py
"""

from __future__ import annotations

from pathlib import Path

from flashdeck.config import Settings, settings


class TestSettings:
    def test_defaults(self):
        assert settings.SLOT == "appState"
        assert settings.EXPORT_FILENAME == "flashcards-data.json"

    def test_home_from_environment(self, monkeypatch, tmp_path):
        monkeypatch.setenv("FLASHDECK_HOME", str(tmp_path))
        assert Settings().HOME == tmp_path

    def test_home_default(self, monkeypatch):
        monkeypatch.delenv("FLASHDECK_HOME", raising=False)
        assert Settings().HOME == Path.home() / ".flashdeck"
