"""Directive dispatch: map one source line to one backend operation."""

from __future__ import annotations

import logging
import re
from datetime import datetime
from typing import Callable, List, Optional, Tuple

from .backend import Backend
from .document import source_lines

logger = logging.getLogger(__name__)

DEFAULT_DATE_FORMAT = "%b %d %Y"

_LEADING_INT_RE = re.compile(r"\s*([+-]?\d+)")


def parse_seconds(text: str) -> int:
    """Leading integer of *text*, or 0 when there is none."""
    m = _LEADING_INT_RE.match(text)
    return int(m.group(1)) if m else 0


def expand_date(text: str, now: datetime) -> str:
    """Expand ``today`` and ``today <strftime format>``; other text is kept."""
    if text == "today":
        return now.strftime(DEFAULT_DATE_FORMAT)
    if text.startswith("today "):
        return now.strftime(text[len("today "):])
    return text


def _read_lines(path: str) -> List[str]:
    with open(path, "r", encoding="utf-8", errors="replace", newline="") as f:
        return source_lines(f.read())


class Dispatcher:
    """Classify source lines and call the matching backend operation.

    The table is ordered and the first matching prefix wins. A line that
    matches nothing, including an unknown ``--`` directive, is body text.
    """

    def __init__(
        self,
        backend: Backend,
        clock: Callable[[], datetime] = datetime.now,
        reader: Callable[[str], List[str]] = _read_lines,
    ):
        self.backend = backend
        self.clock = clock
        self.reader = reader
        self.last_included_file: Optional[str] = None
        self._table: List[Tuple[str, Callable[[str], Optional[bool]]]] = [
            ("--##", self._comment),
            ("--heading ", lambda rest: backend.heading(rest)),
            ("--withborder", lambda rest: backend.with_border()),
            ("--horline", lambda rest: backend.horline()),
            ("--color ", lambda rest: backend.color(rest.strip())),
            ("--center ", lambda rest: backend.center(rest)),
            ("--right ", lambda rest: backend.right(rest)),
            ("--exec ", lambda rest: backend.exec_command(rest)),
            ("---", self._pause),
            ("--beginoutput", lambda rest: backend.begin_output()),
            ("--beginshelloutput", lambda rest: backend.begin_shell_output()),
            ("--endoutput", lambda rest: backend.end_output()),
            ("--endshelloutput", lambda rest: backend.end_shell_output()),
            ("--sleep ", lambda rest: backend.sleep(parse_seconds(rest))),
            ("--boldon", lambda rest: backend.bold_on()),
            ("--boldoff", lambda rest: backend.bold_off()),
            ("--revon", lambda rest: backend.reverse_on()),
            ("--revoff", lambda rest: backend.reverse_off()),
            ("--ulon", lambda rest: backend.underline_on()),
            ("--uloff", lambda rest: backend.underline_off()),
            ("--beginslideleft", lambda rest: backend.begin_slide("left")),
            ("--endslideleft", lambda rest: backend.end_slide()),
            ("--endslideright", lambda rest: backend.end_slide()),
            ("--endslidetop", lambda rest: backend.end_slide()),
            ("--endslidebottom", lambda rest: backend.end_slide()),
            ("--beginslideright", lambda rest: backend.begin_slide("right")),
            ("--beginslidetop", lambda rest: backend.begin_slide("top")),
            ("--beginslidebottom", lambda rest: backend.begin_slide("bottom")),
            ("--sethugefont ", lambda rest: backend.set_huge_font(rest.strip())),
            ("--huge ", lambda rest: backend.huge(rest)),
            ("--footer ", lambda rest: backend.footer(rest)),
            ("--header ", lambda rest: backend.header(rest)),
            ("--title ", lambda rest: backend.title(rest)),
            ("--author ", lambda rest: backend.author(rest)),
            ("--date ", lambda rest: backend.date(expand_date(rest, self.clock()))),
            ("--bgcolor ", lambda rest: backend.bgcolor(rest.strip())),
            ("--fgcolor ", lambda rest: backend.fgcolor(rest.strip())),
            # Unreachable, shadowed by the first --color entry.
            ("--color ", lambda rest: backend.color(rest.strip())),
            ("--include-file ", self._include_file),
        ]

    def classify(self, line: str) -> Optional[str]:
        """Return the matching directive prefix, or None for body text."""
        for prefix, _ in self._table:
            if line.startswith(prefix):
                return prefix
        return None

    def dispatch(self, line: Optional[str]) -> bool:
        """Render *line*; return True when the presenter should pause."""
        if line is None:
            return False
        for prefix, handler in self._table:
            if line.startswith(prefix):
                return bool(handler(line[len(prefix):]))
        self.backend.print_line(line)
        return False

    def _comment(self, rest: str) -> None:
        pass

    def _pause(self, rest: str) -> bool:
        self.backend.wait()
        return True

    def _include_file(self, rest: str) -> None:
        path = rest.strip()
        self.last_included_file = path
        self.backend.begin_output()
        self.backend.print_line(path)
        try:
            lines = self.reader(path)
        except OSError as exc:
            logger.warning("Cannot include %r: %s", path, exc)
            lines = [f"couldn't open file: {exc}"]
        for line in lines:
            self.backend.print_line(line)
        self.backend.end_output()
