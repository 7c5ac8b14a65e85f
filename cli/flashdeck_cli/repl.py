"""REPL for Flashdeck CLI."""

from __future__ import annotations

import asyncio
from pathlib import Path

from flashdeck.config import settings
from flashdeck.kernel.deck import Deck


class Repl:
    """Interactive study loop over one deck."""

    def __init__(self, deck: Deck):
        self.deck = deck
        self.running = True
        self.showing_answer = False

    def start(self):
        """Start the REPL."""
        count = len(self.deck.questions)
        print(f"deck > {count} question{'s' if count != 1 else ''}. Type /help for commands.")

        while self.running:
            try:
                line = input("deck > ").strip()

                if not line:
                    continue

                if line.startswith("/"):
                    self._handle_command(line)
                else:
                    print("  Commands start with /. Type /help for available commands.")

            except (EOFError, KeyboardInterrupt):
                print()
                break

    def _handle_command(self, line: str):
        """Handle REPL commands."""
        parts = line.split(maxsplit=1)
        cmd = parts[0].lower()
        arg = parts[1].strip() if len(parts) > 1 else None

        if cmd == "/quit":
            self.running = False
            print("Goodbye.")
        elif cmd == "/add":
            self._add()
        elif cmd == "/list":
            self._list()
        elif cmd == "/delete":
            if arg:
                self._delete(arg)
            else:
                print("Usage: /delete <key>")
        elif cmd == "/tags":
            self._tags()
        elif cmd == "/start":
            self._start(arg)
        elif cmd == "/flip":
            self._flip()
        elif cmd == "/next":
            self._next()
        elif cmd == "/import":
            if arg:
                self._import(arg)
            else:
                print("Usage: /import <path>")
        elif cmd == "/export":
            self._export(arg or settings.EXPORT_FILENAME)
        elif cmd == "/help":
            self._show_help()
        else:
            print(f"Unknown command: {cmd}")
            print("Type /help for available commands.")

    def _add(self):
        """Collect a new question. Question and answer must not be blank."""
        q = input("  Question: ").strip()
        a = input("  Answer: ").strip()
        if not q or not a:
            print("  Question and answer are both required.")
            return
        raw_tags = input("  Tags (comma separated, optional): ")
        tags = [tag for tag in raw_tags.split(",") if tag.strip()]

        self.deck.add_question(q, a, tags)
        print(f"  Added #{self.deck.questions[-1].key}.")

    def _list(self):
        questions = self.deck.questions
        if not questions:
            print("  No questions yet. Use /add or /import.")
            return

        for question in questions:
            tags = f"  [{', '.join(question.tags)}]" if question.tags else ""
            print(f"  #{question.key}  {question.q}{tags}")
            print(f"        {question.a}")

    def _delete(self, arg: str):
        try:
            key = int(arg)
        except ValueError:
            print("  Invalid key.")
            return

        result = self.deck.remove_question(key)
        if result.applied:
            print(f"  Deleted #{key}.")
        else:
            print(f"  No question #{key}.")

    def _tags(self):
        tags = self.deck.tags
        if not tags:
            print("  No tags.")
            return
        print("  Tags: " + ", ".join(tags))

    def _start(self, tag: str | None):
        self.deck.start_session(tag)
        self.showing_answer = False
        self._show_card()

    def _flip(self):
        if self.deck.current_card is None:
            self._show_card()
            return
        self.showing_answer = not self.showing_answer
        self._show_card()

    def _next(self):
        if not self.deck.session_started:
            print("  No session. Use /start [tag].")
            return
        self.deck.advance_session()
        self.showing_answer = False
        self._show_card()

    def _show_card(self):
        card = self.deck.current_card
        if card is None:
            if self.deck.session_complete:
                print("  Deck complete. /start to go again.")
            else:
                print("  No session. Use /start [tag].")
            return

        face, text = ("Answer", card.a) if self.showing_answer else ("Question", card.q)
        print(f"  [{self.deck.remaining} left] {face}:")
        for text_line in text.splitlines() or [""]:
            print(f"    {text_line}")

    def _import(self, path: str):
        print("  Import replaces the current deck.")
        if asyncio.run(self.deck.import_file(path)):
            print(f"  Imported {len(self.deck.questions)} questions.")
        else:
            print("  Import failed; deck unchanged.")

    def _export(self, path: str):
        target = Path(path).expanduser()
        try:
            target.write_text(self.deck.export_requested(), encoding="utf-8")
        except OSError as e:
            print(f"  Export failed: {e}")
            return
        print(f"  Exported {len(self.deck.questions)} questions to {target}")

    def _show_help(self):
        print("""  /add              Add a question
  /list             Show all questions with keys
  /delete <key>     Delete a question
  /tags             Show all tags
  /start [tag]      Start a shuffled session, optionally for one tag
  /flip             Show the other side of the current card
  /next             Move to the next card
  /import <path>    Replace the deck with an exported file
  /export [path]    Write the deck to a file
  /help             Show this help
  /quit             Exit""")
