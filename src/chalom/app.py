"""chalom: keep a dated markdown changelog and report time spent.

Main entry point for the command line.
"""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler

from chalom.config import load_config
from chalom.services.changelog import log_item, report

logger = logging.getLogger(__name__)

USAGE = """\
chalom: keep a dated markdown changelog and report time spent

Usage: chalom [-f path] [-a] [-c] [-v] [text]

Options:
  -f <path>     Changelog file (default from config, else changelog.md)
  -a            Add <text> as an item at the current time (default)
  -c            Print the time report for every day, latest first
  -v            Verbose logging to stderr
  --help        This message
  --version     Show version"""


@dataclass
class Options:
    """Parsed command line."""

    path: Path
    command: str = "-a"
    text: str = ""
    verbose: bool = False


def parse_args(argv: list[str], default_path: Path) -> Options:
    """Parse arguments (without the program name).

    The first argument that is not an option is the item text; later
    ones are ignored.
    """
    opts = Options(path=default_path)
    text = None
    args = list(argv)
    while args:
        arg = args.pop(0)
        if arg == "-f":
            if args:
                opts.path = Path(args.pop(0))
        elif arg in ("-a", "-c"):
            opts.command = arg
        elif arg == "-v":
            opts.verbose = True
        elif text is None:
            text = arg
    opts.text = text or ""
    return opts


def setup_logging(level: int) -> None:
    """Send log records to stderr through rich."""
    handler = RichHandler(
        console=Console(stderr=True),
        show_path=False,
        show_time=False,
    )
    logging.basicConfig(level=level, format="%(message)s", handlers=[handler], force=True)


def main(argv: list[str] | None = None) -> int:
    """CLI entry point."""
    argv = sys.argv[1:] if argv is None else argv
    # Only a leading --help/--version is a command; later it is item text
    target = argv[0] if argv else ""

    if target == "--help":
        print(USAGE)
        return 0

    if target == "--version":
        from chalom import __version__
        print(f"chalom {__version__}")
        return 0

    config = load_config()
    opts = parse_args(argv, config.changelog_path)
    setup_logging(logging.DEBUG if opts.verbose else config.level)

    try:
        if opts.command == "-c":
            for line in report(opts.path):
                print(line)
        else:
            log_item(opts.path, opts.text)
    except OSError as e:
        logger.error("Cannot use changelog %s: %s", opts.path, e)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
