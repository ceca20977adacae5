"""
Pytest configuration and fixtures.
"""

from datetime import datetime
from pathlib import Path
from typing import List, Optional

import pytest

from termpp.backend import InteractiveBackend
from termpp.navigator import KeyAction


class RecordingBackend(InteractiveBackend):
    """Interactive backend that records every call and replays scripted keys."""

    def __init__(self, keys=()):
        self.calls: List[tuple] = []
        self.keys = list(keys)
        self.page_number: Optional[int] = None
        self.opened = False
        self.closed = 0

    def _record(self, name, *args):
        self.calls.append((name,) + args)

    def names(self) -> List[str]:
        return [call[0] for call in self.calls]

    def printed(self) -> List[str]:
        return [call[1] for call in self.calls if call[0] == "print_line"]

    def open(self):
        self.opened = True

    def close(self):
        self.closed += 1

    def new_page(self):
        self._record("new_page")

    def refresh(self):
        self._record("refresh")

    def print_line(self, line):
        self._record("print_line", line)

    def heading(self, text):
        self._record("heading", text)

    def with_border(self):
        self._record("with_border")

    def horline(self):
        self._record("horline")

    def color(self, name):
        self._record("color", name)

    def center(self, text):
        self._record("center", text)

    def right(self, text):
        self._record("right", text)

    def exec_command(self, cmdline):
        self._record("exec_command", cmdline)

    def wait(self):
        self._record("wait")

    def begin_output(self):
        self._record("begin_output")

    def end_output(self):
        self._record("end_output")

    def begin_shell_output(self):
        self._record("begin_shell_output")

    def end_shell_output(self):
        self._record("end_shell_output")

    def sleep(self, seconds):
        self._record("sleep", seconds)

    def bold_on(self):
        self._record("bold_on")

    def bold_off(self):
        self._record("bold_off")

    def reverse_on(self):
        self._record("reverse_on")

    def reverse_off(self):
        self._record("reverse_off")

    def underline_on(self):
        self._record("underline_on")

    def underline_off(self):
        self._record("underline_off")

    def begin_slide(self, direction):
        self._record("begin_slide", direction)

    def end_slide(self):
        self._record("end_slide")

    def set_huge_font(self, name):
        self._record("set_huge_font", name)

    def huge(self, text):
        self._record("huge", text)

    def footer(self, text):
        self._record("footer", text)

    def header(self, text):
        self._record("header", text)

    def title(self, text):
        self._record("title", text)

    def author(self, text):
        self._record("author", text)

    def date(self, text):
        self._record("date", text)

    def bgcolor(self, name):
        self._record("bgcolor", name)

    def fgcolor(self, name):
        self._record("fgcolor", name)

    def clear(self):
        self._record("clear")

    def read_key(self):
        if not self.keys:
            return KeyAction.QUIT
        return self.keys.pop(0)

    def draw_status(self, page_number, page_count, eop, title=None):
        self._record("draw_status", page_number, page_count, eop, title)

    def show_help(self):
        self._record("show_help")

    def read_page_number(self, pages, current):
        self._record("read_page_number", current)
        return self.page_number

    def store_screen(self):
        self._record("store_screen")
        return "saved"

    def restore_screen(self, saved):
        self._record("restore_screen", saved)

    def update_size(self):
        self._record("update_size")


@pytest.fixture
def backend():
    return RecordingBackend()


@pytest.fixture
def fixed_clock():
    return lambda: datetime(2024, 3, 5, 14, 30)


@pytest.fixture
def no_shell():
    """Capture function that never runs a real process."""
    calls = []

    def capture(cmdline):
        calls.append(cmdline)
        return [f"out of {cmdline.strip()}"]

    capture.calls = calls
    return capture


@pytest.fixture
def write_deck(tmp_path: Path):
    def _write(text: str, name: str = "deck.tpp") -> Path:
        path = tmp_path / name
        path.write_text(text, encoding="utf-8")
        return path

    return _write
