"""Command-line entry point."""

from __future__ import annotations

import argparse
import curses
import logging
import os
import sys
from typing import List, Optional

from . import __version__
from .config import Settings
from .curses_backend import CursesBackend
from .errors import SetupError
from .exporters import LatexBackend, TextBackend
from .navigator import AutoplayController, ConversionController, InteractiveController

logger = logging.getLogger(__name__)

TYPES = ("ncurses", "autoplay", "txt", "latex")


def parse_arguments(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="termpp",
        description="Present a text slide deck in the terminal, or convert it to another format.",
    )
    parser.add_argument("file", help="presentation source file")
    parser.add_argument("-t", "--type", choices=TYPES, default="ncurses", help="output type (default: ncurses)")
    parser.add_argument("-o", "--output", help="write output to this file (txt and latex)")
    parser.add_argument(
        "-s", "--seconds", type=float, help="seconds to wait between slides with -t autoplay"
    )
    parser.add_argument("-v", "--version", action="version", version=f"termpp - text presentation program {__version__}")
    args = parser.parse_args(argv)
    if args.type in ("txt", "latex") and not args.output:
        parser.error(f"-t {args.type} requires -o <file>")
    if args.output and os.path.abspath(args.output) == os.path.abspath(args.file):
        parser.error("don't use the input file name as the output file name")
    return args


def setup_logging(settings: Settings, interactive: bool) -> None:
    """Configure logging; curses modes only log to a file so the screen stays clean."""
    level = getattr(logging, settings.log_level, logging.WARNING)
    if settings.log_file:
        handler: logging.Handler = logging.FileHandler(settings.log_file, encoding="utf-8")
    elif interactive:
        handler = logging.NullHandler()
    else:
        handler = logging.StreamHandler(sys.stderr)
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=[handler],
    )


def _run_curses(stdscr, args: argparse.Namespace, settings: Settings) -> None:
    backend = CursesBackend(stdscr, settings)
    backend.open()
    try:
        if args.type == "autoplay":
            seconds = settings.seconds if args.seconds is None else args.seconds
            AutoplayController(args.file, backend, seconds).run()
        else:
            InteractiveController(args.file, backend, settings).run()
    finally:
        backend.close()


def _run_export(args: argparse.Namespace, settings: Settings) -> None:
    if args.type == "txt":
        backend = TextBackend(args.output, settings.text_width, settings.huge_font)
    else:
        backend = LatexBackend(args.output, settings.latex_width)
    controller = ConversionController(args.file, backend)
    backend.open()
    try:
        controller.run()
    finally:
        backend.close()


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_arguments(argv)
    settings = Settings.from_env()
    interactive = args.type in ("ncurses", "autoplay")
    setup_logging(settings, interactive)

    try:
        if interactive:
            if not os.path.isfile(args.file):
                raise SetupError(f"couldn't open file: {args.file}")
            try:
                curses.wrapper(_run_curses, args, settings)
            except curses.error as exc:
                raise SetupError(f"terminal does not support curses: {exc}") from exc
        else:
            _run_export(args, settings)
    except SetupError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        return 130
    return 0


if __name__ == "__main__":
    sys.exit(main())
