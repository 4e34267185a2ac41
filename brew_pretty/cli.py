"""
brew-pretty - colourized ``brew update`` and ``brew outdated`` report.

Usage:
    brew-pretty                         # Run brew update and brew outdated
    brew-pretty --no-update             # Only show outdated formulae
    brew-pretty --outdated-file out.json --update-file update.txt
    brew outdated --json=v2 | brew-pretty --no-update --outdated-file -
"""

from __future__ import annotations

import argparse
import sys
from dataclasses import replace
from pathlib import Path
from typing import Sequence

from . import __version__
from .brew import BrewCommandError, decode_output, run_outdated, run_update
from .config import Config, load_config, validate_config
from .logging_config import setup_logging
from .report import build_report
from .terminal import terminal_for


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="brew-pretty",
        description="Colourize brew update and brew outdated output",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--no-update", action="store_true", help="Skip brew update")
    parser.add_argument("--no-outdated", action="store_true", help="Skip brew outdated")
    parser.add_argument("--update-file", metavar="PATH", help="Read update output from PATH ('-' for stdin) instead of running brew")
    parser.add_argument("--outdated-file", metavar="PATH", help="Read outdated output from PATH ('-' for stdin) instead of running brew")
    parser.add_argument("--text", action="store_true", help="Read the outdated listing as text lines instead of JSON")
    parser.add_argument("--width", type=int, metavar="N", help="Terminal width to lay out name grids for")
    parser.add_argument("--no-color", action="store_true", help="Disable ANSI colours")
    parser.add_argument("--config", metavar="PATH", help="Configuration file")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    parser.add_argument("-q", "--quiet", action="store_true", help="Only log errors")
    parser.add_argument("--log-file", metavar="PATH", help="Also write logs to PATH")

    args = parser.parse_args(argv)
    if args.update_file == "-" and args.outdated_file == "-":
        parser.error("only one of --update-file and --outdated-file can read stdin")
    if args.width is not None and args.width < 0:
        parser.error("--width must not be negative")
    return args


def read_source(path: str) -> str:
    """Read captured brew output from a file, or stdin for '-'."""
    if path == "-":
        return decode_output(sys.stdin.buffer.read())
    return decode_output(Path(path).read_bytes())


def apply_cli_overrides(config: Config, args: argparse.Namespace) -> Config:
    colors, layout, outdated = config.colors, config.layout, config.outdated
    if args.no_color:
        colors = replace(colors, enabled=False)
    if args.width is not None:
        layout = replace(layout, terminal_width=args.width)
    if args.text:
        outdated = replace(outdated, json=False)
    return replace(config, colors=colors, layout=layout, outdated=outdated)


def main(argv: Sequence[str] | None = None) -> int:
    args = parse_args(argv)
    logger = setup_logging(verbose=args.verbose, quiet=args.quiet, log_file=args.log_file)

    try:
        config = load_config(args.config, verbose=args.verbose)
    except ValueError as e:
        logger.error(str(e))
        return 2
    config = apply_cli_overrides(config, args)
    for warning in validate_config(config):
        logger.warning(f"Config: {warning}")

    failed = False

    update_text = None
    if not args.no_update:
        try:
            update_text = read_source(args.update_file) if args.update_file else run_update()
        except (BrewCommandError, OSError) as e:
            logger.error(f"Failed to read update output: {e}")
            failed = True

    outdated_text = None
    if not args.no_outdated:
        try:
            if args.outdated_file:
                outdated_text = read_source(args.outdated_file)
            else:
                outdated_text = run_outdated(json=config.outdated.json)
        except (BrewCommandError, OSError) as e:
            logger.error(f"Failed to read outdated output: {e}")
            failed = True

    report = build_report(update_text, outdated_text, terminal_for(config.layout.terminal_width), config)
    if report.text:
        print(report.text)

    return 1 if failed or report.failed else 0


if __name__ == "__main__":
    sys.exit(main())
