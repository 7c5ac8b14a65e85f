"""
Flashdeck configuration — all environment variables in one place.

Read from environment at runtime.
"""

from __future__ import annotations

import os
from pathlib import Path


class Settings:
    """Application settings from environment variables."""

    # Storage
    SLOT: str = os.environ.get("FLASHDECK_SLOT", "appState")
    EXPORT_FILENAME: str = os.environ.get("FLASHDECK_EXPORT_FILENAME", "flashcards-data.json")

    # Logging
    LOG_LEVEL: str = os.environ.get("FLASHDECK_LOG_LEVEL", "WARNING").upper()

    @property
    def HOME(self) -> Path:
        home = os.environ.get("FLASHDECK_HOME")
        if home:
            return Path(home).expanduser()
        return Path.home() / ".flashdeck"


# Singleton instance
settings = Settings()
