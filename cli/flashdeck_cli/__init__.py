"""Flashdeck CLI — terminal front end for studying a local deck."""

__version__ = "0.1.0"
