"""Capability interface shared by every rendering backend.

The dispatcher calls exactly one of these operations per source line. The
curses surface implements all of them; exporters implement the ones they can
express and leave the rest as no-ops.
"""

from __future__ import annotations

import abc
from typing import TYPE_CHECKING, Any, Optional, Sequence

if TYPE_CHECKING:
    from .document import Page
    from .navigator import KeyAction


class Backend(abc.ABC):
    def open(self) -> None:
        """Acquire the output resource. Called once before the first page."""

    def close(self) -> None:
        """Release the output resource. Safe to call more than once."""

    @abc.abstractmethod
    def new_page(self) -> None: ...

    @abc.abstractmethod
    def refresh(self) -> None: ...

    @abc.abstractmethod
    def print_line(self, line: str) -> None: ...

    @abc.abstractmethod
    def heading(self, text: str) -> None: ...

    @abc.abstractmethod
    def with_border(self) -> None: ...

    @abc.abstractmethod
    def horline(self) -> None: ...

    @abc.abstractmethod
    def color(self, name: str) -> None: ...

    @abc.abstractmethod
    def center(self, text: str) -> None: ...

    @abc.abstractmethod
    def right(self, text: str) -> None: ...

    @abc.abstractmethod
    def exec_command(self, cmdline: str) -> None: ...

    @abc.abstractmethod
    def wait(self) -> None: ...

    @abc.abstractmethod
    def begin_output(self) -> None: ...

    @abc.abstractmethod
    def end_output(self) -> None: ...

    @abc.abstractmethod
    def begin_shell_output(self) -> None: ...

    @abc.abstractmethod
    def end_shell_output(self) -> None: ...

    @abc.abstractmethod
    def sleep(self, seconds: int) -> None: ...

    @abc.abstractmethod
    def bold_on(self) -> None: ...

    @abc.abstractmethod
    def bold_off(self) -> None: ...

    @abc.abstractmethod
    def reverse_on(self) -> None: ...

    @abc.abstractmethod
    def reverse_off(self) -> None: ...

    @abc.abstractmethod
    def underline_on(self) -> None: ...

    @abc.abstractmethod
    def underline_off(self) -> None: ...

    @abc.abstractmethod
    def begin_slide(self, direction: str) -> None:
        """Start a slide-in transition from "left", "right", "top" or "bottom"."""

    @abc.abstractmethod
    def end_slide(self) -> None: ...

    @abc.abstractmethod
    def set_huge_font(self, name: str) -> None: ...

    @abc.abstractmethod
    def huge(self, text: str) -> None: ...

    @abc.abstractmethod
    def footer(self, text: str) -> None: ...

    @abc.abstractmethod
    def header(self, text: str) -> None: ...

    @abc.abstractmethod
    def title(self, text: str) -> None: ...

    @abc.abstractmethod
    def author(self, text: str) -> None: ...

    @abc.abstractmethod
    def date(self, text: str) -> None: ...

    @abc.abstractmethod
    def bgcolor(self, name: str) -> None: ...

    @abc.abstractmethod
    def fgcolor(self, name: str) -> None: ...


class InteractiveBackend(Backend):
    """A backend that owns a screen and a keyboard."""

    @abc.abstractmethod
    def clear(self) -> None: ...

    @abc.abstractmethod
    def read_key(self) -> "KeyAction": ...

    @abc.abstractmethod
    def draw_status(self, page_number: int, page_count: int, eop: bool, title: Optional[str] = None) -> None: ...

    @abc.abstractmethod
    def show_help(self) -> None: ...

    @abc.abstractmethod
    def read_page_number(self, pages: Sequence["Page"], current: int) -> Optional[int]:
        """Ask for a 1-based page number; return the 0-based index or None."""

    @abc.abstractmethod
    def store_screen(self) -> Any: ...

    @abc.abstractmethod
    def restore_screen(self, saved: Any) -> None: ...

    @abc.abstractmethod
    def update_size(self) -> None: ...
