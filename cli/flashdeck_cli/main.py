"""Main entry point for Flashdeck CLI."""
from __future__ import annotations

import asyncio
import logging
import sys
from pathlib import Path

from flashdeck.config import settings
from flashdeck.kernel.deck import Deck
from flashdeck.kernel.persistence import FileStorage
from flashdeck_cli import __version__
from flashdeck_cli.repl import Repl


def print_help():
    """Print help message."""
    print(f"""
Flashdeck CLI v{__version__}

Usage:
  flashdeck [options] [command]

Commands:
  export [PATH]     Write the deck to PATH (default: {settings.EXPORT_FILENAME})
  import PATH       Replace the deck with an exported file

Options:
  --home DIR        Data directory (default: ~/.flashdeck)
  --slot NAME       Storage slot inside the data directory (default: appState)
  -h, --help        Show this help
  -v, --version     Show version

Environment:
  FLASHDECK_HOME       Same as --home
  FLASHDECK_SLOT       Same as --slot
  FLASHDECK_LOG_LEVEL  Logging level (default: WARNING)

With no command, starts the interactive study REPL.
""")


def parse_args(args: list[str]) -> dict:
    """
    Parse command line arguments.

    Returns dict with:
        command: str | None (export, import, None for REPL)
        path: str | None
        home: str | None
        slot: str | None
        show_help: bool
        show_version: bool
    """
    result = {
        "command": None,
        "path": None,
        "home": None,
        "slot": None,
        "show_help": False,
        "show_version": False,
    }

    i = 0
    while i < len(args):
        arg = args[i]

        if arg in ("export", "import") and result["command"] is None:
            result["command"] = arg
        elif arg in ("--home", "--slot"):
            if i + 1 < len(args):
                result[arg[2:]] = args[i + 1]
                i += 1
            else:
                print(f"Error: {arg} requires a value")
                sys.exit(1)
        elif arg in ("--help", "-h"):
            result["show_help"] = True
        elif arg in ("--version", "-v"):
            result["show_version"] = True
        elif arg.startswith("-"):
            print(f"Unknown option: {arg}")
            print("Run 'flashdeck --help' for usage.")
            sys.exit(1)
        elif result["command"] is not None and result["path"] is None:
            result["path"] = arg
        else:
            print(f"Unknown command: {arg}")
            print("Run 'flashdeck --help' for usage.")
            sys.exit(1)

        i += 1

    return result


def main():
    """Main entry point."""
    args = parse_args(sys.argv[1:])

    if args["show_help"]:
        print_help()
        return

    if args["show_version"]:
        print(f"flashdeck {__version__}")
        return

    logging.basicConfig(
        level=getattr(logging, settings.LOG_LEVEL, logging.WARNING),
        format="%(levelname)s %(name)s: %(message)s",
    )

    home = Path(args["home"]).expanduser() if args["home"] else settings.HOME
    deck = Deck.open(FileStorage(home), args["slot"] or settings.SLOT)

    if args["command"] == "export":
        target = Path(args["path"] or settings.EXPORT_FILENAME)
        try:
            target.write_text(deck.export_requested(), encoding="utf-8")
        except OSError as e:
            print(f"Export failed: {e}")
            sys.exit(1)
        print(f"Exported {len(deck.questions)} questions to {target}")

    elif args["command"] == "import":
        if not args["path"]:
            print("Error: import requires a PATH")
            sys.exit(1)
        if not asyncio.run(deck.import_file(args["path"])):
            print("Import failed; deck unchanged.")
            sys.exit(1)
        print(f"Imported {len(deck.questions)} questions.")

    else:
        Repl(deck).start()


if __name__ == "__main__":
    main()
