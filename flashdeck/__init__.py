"""Flashdeck — local flashcard decks with tag-filtered, shuffled study sessions."""

__version__ = "0.1.0"
