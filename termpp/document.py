"""Split a presentation source into pages."""

from __future__ import annotations

import logging
import re
from typing import Callable, Iterable, List, Optional

from .errors import SetupError
from .shell import capture_output

logger = logging.getLogger(__name__)

Capture = Callable[[str], List[str]]

_NEWPAGE_RE = re.compile(r"^--newpage")


class Page:
    """A slide: a title plus the lines that are dispatched one at a time."""

    def __init__(self, title: str, lines: Optional[Iterable[str]] = None):
        self.title = title
        self.lines: List[str] = list(lines or [])
        self.cursor = 0
        self.end_of_page = False

    def __repr__(self) -> str:
        return f"Page({self.title!r}, {len(self.lines)} lines, cursor={self.cursor})"

    def add_line(self, line: str, capture: Capture = capture_output) -> None:
        """Append *line*; ``$$cmd`` and ``$%cmd`` also splice in the command output."""
        if line is None:
            return
        self.lines.append(line)
        if line.startswith("$$") or line.startswith("$%"):
            prefix = "%" if line.startswith("$%") else ""
            for out_line in capture(line[2:]):
                self.lines.append(prefix + out_line)

    def next_line(self) -> Optional[str]:
        """Return the next line and advance; None once the page is exhausted."""
        if self.cursor >= len(self.lines):
            self.end_of_page = True
            return None
        line = self.lines[self.cursor]
        self.cursor += 1
        if self.cursor >= len(self.lines):
            self.end_of_page = True
        return line

    def reset(self) -> None:
        self.cursor = 0
        self.end_of_page = False


class Document:
    def __init__(self, pages: List[Page], source: Optional[str] = None):
        self.pages = pages
        self.source = source

    def __len__(self) -> int:
        return len(self.pages)

    def __getitem__(self, index: int) -> Page:
        return self.pages[index]

    def __iter__(self):
        return iter(self.pages)


def source_lines(text: str) -> List[str]:
    """Split *text* on newlines only, dropping one trailing "\\r" per line.

    Form feeds and other characters ``str.splitlines`` treats as breaks stay
    inside the line.
    """
    if not text:
        return []
    lines = text.split("\n")
    if text.endswith("\n"):
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]


def parse_document(text: str, capture: Capture = capture_output, source: Optional[str] = None) -> Document:
    """Build a Document from source text.

    Embedded shell commands run here, once, so revisiting a page never
    re-executes them.
    """
    pages: List[Page] = []
    page = Page("Title")
    for line in source_lines(text):
        if line.startswith("--##"):
            continue
        if _NEWPAGE_RE.match(line):
            pages.append(page)
            name = line[len("--newpage"):].strip()
            page = Page(name or f"slide {len(pages) + 1}")
            continue
        page.add_line(line, capture)
    pages.append(page)
    logger.debug("Parsed %d pages from %s", len(pages), source or "<string>")
    return Document(pages, source)


def load_document(path: str, capture: Capture = capture_output) -> Document:
    """Read and parse the presentation at *path*."""
    try:
        with open(path, "r", encoding="utf-8", errors="replace", newline="") as f:
            text = f.read()
    except OSError as exc:
        raise SetupError(f"couldn't open file: {exc}") from exc
    return parse_document(text, capture, source=path)
