"""External processes and huge-text rendering."""

from __future__ import annotations

import logging
import shlex
import subprocess
from typing import Dict, List, Tuple

from pyfiglet import Figlet, FontNotFound

logger = logging.getLogger(__name__)

DEFAULT_FONT = "standard"

_figlets: Dict[Tuple[str, int], Figlet] = {}


def capture_output(cmdline: str) -> List[str]:
    """Run *cmdline* through the shell and return its stdout lines.

    A command that cannot be started, or fails without printing anything,
    yields its error message as the only line, so page construction never
    aborts and nothing is written over the terminal.
    """
    try:
        result = subprocess.run(
            cmdline,
            shell=True,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            stdin=subprocess.DEVNULL,
            universal_newlines=True,
            errors="replace",
        )
    except OSError as exc:
        logger.warning("Embedded command %r failed: %s", cmdline, exc)
        return [str(exc)]
    lines = result.stdout.splitlines()
    if result.returncode != 0:
        logger.warning("Embedded command %r exited with status %d", cmdline, result.returncode)
        if not lines:
            errors = [line for line in result.stderr.splitlines() if line.strip()]
            return errors or [f"command failed with status {result.returncode}"]
    return lines


def run_command(cmdline: str) -> int:
    """Run *cmdline* attached to the terminal and return its exit status."""
    try:
        return subprocess.call(cmdline, shell=True)
    except OSError as exc:
        logger.warning("Command %r failed: %s", cmdline, exc)
        return -1


def editor_command(editor: str, path: str) -> str:
    return f"{editor} {shlex.quote(path)}"


def _figlet(font: str, width: int) -> Figlet:
    key = (font, width)
    figlet = _figlets.get(key)
    if figlet is None:
        try:
            figlet = Figlet(font=font, width=width)
        except FontNotFound:
            logger.warning("Unknown figlet font %r, using %r", font, DEFAULT_FONT)
            figlet = Figlet(font=DEFAULT_FONT, width=width)
        _figlets[key] = figlet
    return figlet


def render_huge(text: str, font: str = DEFAULT_FONT, width: int = 80) -> List[str]:
    """Render *text* as large letters, one string per output row."""
    figlet = _figlet(font, max(1, width))
    rendered = figlet.renderText(text).rstrip("\n")
    return rendered.splitlines()
