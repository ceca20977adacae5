"""Interactive curses surface.

All drawing state (style, cursor row, output framing) belongs to the
``CursesBackend`` instance. Draw calls are clipped to the window and ignore
``curses.error`` raised at the screen edges, so overlong text never aborts a
presentation.
"""

from __future__ import annotations

import contextlib
import curses
import logging
import random
import time
from dataclasses import replace
from typing import Optional, Sequence

from .backend import InteractiveBackend
from .config import Settings
from .markup import StyleState, build_inline_units, is_valid_color, strip_inline_tokens
from .navigator import KeyAction
from .shell import render_huge, run_command
from .wrap import split_lines, units_to_segments, wrap_units

logger = logging.getLogger(__name__)

COLORS = {
    "white": curses.COLOR_WHITE,
    "yellow": curses.COLOR_YELLOW,
    "red": curses.COLOR_RED,
    "green": curses.COLOR_GREEN,
    "blue": curses.COLOR_BLUE,
    "cyan": curses.COLOR_CYAN,
    "magenta": curses.COLOR_MAGENTA,
    "black": curses.COLOR_BLACK,
    "default": -1,
}

# Pair n draws color n on the current background; pair 0 is the terminal default.
COLOR_PAIRS = {
    "white": 1,
    "yellow": 2,
    "red": 3,
    "green": 4,
    "blue": 5,
    "cyan": 6,
    "magenta": 7,
    "black": 8,
    "default": 0,
}

_ATTRS = {
    "bold": curses.A_BOLD,
    "underline": curses.A_UNDERLINE,
    "reverse": curses.A_REVERSE,
}

_KEYS = {
    KeyAction.ADVANCE: ("dDjJlL", (curses.KEY_DOWN, curses.KEY_RIGHT)),
    KeyAction.RETREAT: ("aAbBhHkK", (curses.KEY_UP, curses.KEY_LEFT)),
    KeyAction.RESIZE: ("zZ", (curses.KEY_RESIZE,)),
    KeyAction.RELOAD: ("rR", ()),
    KeyAction.QUIT: ("qQ", (27,)),
    KeyAction.FIRST_PAGE: ("sS", ()),
    KeyAction.EDIT: ("eE", ()),
    KeyAction.JUMP: ("gG", ()),
    KeyAction.HELP: ("?", ()),
}

HELP_TEXT = [
    "termpp help",
    "",
    "space bar, j, l, cursor-down/right ...... next entry, or next page at the end",
    "b, a, h, k, cursor-up/left .............. previous page",
    "q, Q, Esc ............................... quit",
    "g, G .................................... jump directly to page",
    "r, R .................................... reload current file",
    "s, S .................................... jump to the first page",
    "e, E .................................... edit the last included file",
    "z, Z .................................... adapt to a new terminal size",
    "? ....................................... this help screen",
]


def classify_key(code: int) -> KeyAction:
    """Map a curses key code to a navigator action; unknown keys advance."""
    for action, (chars, codes) in _KEYS.items():
        if code in codes or (0 <= code < 0x110000 and chr(code) in chars):
            return action
    return KeyAction.ADVANCE


class CursesBackend(InteractiveBackend):
    def __init__(self, stdscr, settings: Optional[Settings] = None):
        self._screen = stdscr
        self.settings = settings or Settings()
        self.figlet_font = self.settings.huge_font
        self.voffset = 5
        self.indent = 3
        self.cur_line = self.voffset
        self.output = False
        self.shell_output = False
        self.slide_output = False
        self.slide_dir = "left"
        self.foreground = "white"
        self.style_state = StyleState(color=self.foreground)
        self._active = {"bold": False, "underline": False, "reverse": False, "color": None}
        self.footer_text = ""
        self.header_text = ""
        self._last_status_len = 0
        self._closed = False
        self.width = 0
        self.height = 0
        self.update_size()

    # -- lifecycle ---------------------------------------------------------

    def open(self) -> None:
        try:
            curses.curs_set(0)
        except curses.error:
            pass
        curses.start_color()
        curses.use_default_colors()
        self._screen.keypad(True)
        self.bgcolor("black")
        self._apply_style(self.style_state)

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        try:
            self._screen.attrset(0)
        except curses.error:
            pass

    # -- low level drawing -------------------------------------------------

    def update_size(self) -> None:
        self.height, self.width = self._screen.getmaxyx()

    def _addstr(self, y: int, x: int, text: str) -> None:
        if not text or y < 0 or y >= self.height:
            return
        if x < 0:
            text = text[-x:]
            x = 0
        avail = self.width - x
        if avail <= 0:
            return
        try:
            self._screen.addstr(y, x, text[:avail])
        except curses.error:
            # Writing the bottom-right cell moves the cursor off screen.
            pass

    def _move(self, y: int, x: int) -> None:
        try:
            self._screen.move(min(max(y, 0), self.height - 1), min(max(x, 0), self.width - 1))
        except curses.error:
            pass

    def _set_attr(self, kind: str, on: bool) -> None:
        try:
            if on:
                self._screen.attron(_ATTRS[kind])
            else:
                self._screen.attroff(_ATTRS[kind])
        except curses.error:
            logger.debug("Terminal rejected %s attribute", kind)

    def _apply_style(self, state: StyleState) -> None:
        for kind in ("bold", "underline", "reverse"):
            value = getattr(state, kind)
            if value != self._active[kind]:
                self._set_attr(kind, value)
                self._active[kind] = value
        if state.color and state.color != self._active["color"]:
            self._screen.attroff(curses.A_COLOR)
            self._screen.attron(curses.color_pair(COLOR_PAIRS[state.color]))
            self._active["color"] = state.color

    @contextlib.contextmanager
    def _with_style(self, **overrides):
        saved = self.style_state
        self.style_state = replace(saved, **overrides)
        self._apply_style(self.style_state)
        try:
            yield
        finally:
            self.style_state = saved
            self._apply_style(self.style_state)

    # -- text layout ---------------------------------------------------------

    @property
    def framed(self) -> bool:
        return self.output or self.shell_output

    def _alignment_x(self, length: int, align: str) -> int:
        if align == "center":
            return (self.width - length) // 2
        if align == "right":
            return self._right_align_x(length)
        return self.indent

    def _right_align_x(self, length: int) -> int:
        padding = 2 if self.framed else 0
        return max(self.indent, self.width - self.indent - padding - length)

    def _render_plain_lines(self, text: str, width: int, align: str, allow_shell: bool, allow_slide: bool) -> None:
        boxed = self.framed and not self.slide_output
        for line in split_lines(text, width):
            x = self.indent
            if boxed:
                self._addstr(self.cur_line, x, "| ")
                x += 2
            if align in ("center", "right"):
                self._addstr(self.cur_line, self._alignment_x(len(line), align), line)
            elif allow_shell and self.shell_output and line[:1] in ("$", "%", "#"):
                self._type_line(line, x)
            elif allow_slide:
                self._slide_text(line)
            else:
                self._addstr(self.cur_line, x, line)
            if boxed:
                self._addstr(self.cur_line, self.width - self.indent - 2, " |")
            self.cur_line += 1

    def _render_inline_lines(self, text: str, width: int, align: str) -> None:
        units = build_inline_units(text, self.style_state)
        for line_units in wrap_units(units, width):
            x = self._alignment_x(len(line_units), align)
            if line_units:
                for segment in units_to_segments(line_units):
                    self._apply_style(segment.style)
                    self._addstr(self.cur_line, x, segment.text)
                    x += len(segment.text)
                self._apply_style(self.style_state)
            self.cur_line += 1

    def _render_text(self, text: Optional[str], align: str) -> None:
        if text is None:
            return
        width = self.width - 2 * self.indent
        if self.framed:
            width -= 2
        width = max(1, width)
        if self.framed:
            self._render_plain_lines(text, width, align, align == "left", False)
        elif align == "left" and self.slide_output:
            self._render_plain_lines(strip_inline_tokens(text), width, align, False, True)
        else:
            self._render_inline_lines(text, width, align)

    def _type_line(self, line: str, x: int) -> None:
        for offset, ch in enumerate(line):
            self._addstr(self.cur_line, x + offset, ch)
            self._screen.refresh()
            time.sleep(self.settings.type_delay * (5 + random.randrange(20)) / 5)

    def _slide_text(self, line: str) -> None:
        if not line or self.cur_line >= self.height:
            return
        delay = self.settings.slide_delay
        if self.slide_dir == "left":
            for start in range(len(line) - 1, -1, -1):
                self._addstr(self.cur_line, self.indent, line[start:])
                self._screen.refresh()
                time.sleep(delay)
        elif self.slide_dir == "right":
            for pos in range(self.width - self.indent):
                x = self.width - pos - 1
                self._move(self.cur_line, x)
                self._screen.clrtoeol()
                self._addstr(self.cur_line, x, line[: pos + 1])
                self._screen.refresh()
                time.sleep(delay)
        elif self.slide_dir in ("top", "bottom"):
            saved = self.store_screen()
            if self.slide_dir == "top":
                rows = range(1, self.cur_line + 1)
            else:
                rows = range(self.height - 1, self.cur_line - 1, -1)
            for row in rows:
                self.restore_screen(saved)
                self._addstr(row, self.indent, line)
                self._screen.refresh()
                time.sleep(delay * 2)

    def _frame_rule(self, left: str, right: str) -> None:
        self._addstr(self.cur_line, self.indent, left + "-" * (self.width - self.indent * 2 - 2) + right)
        self.cur_line += 1

    # -- page and screen -----------------------------------------------------

    def new_page(self) -> None:
        self.cur_line = self.voffset
        self.output = self.shell_output = False
        self.update_size()
        self._screen.clear()

    def clear(self) -> None:
        self._screen.clear()
        self._screen.refresh()

    def refresh(self) -> None:
        self._screen.refresh()

    def read_key(self) -> KeyAction:
        return classify_key(self._screen.getch())

    def store_screen(self):
        saved = curses.newwin(self.height, self.width, 0, 0)
        self._screen.overwrite(saved)
        return saved

    def restore_screen(self, saved) -> None:
        saved.overwrite(self._screen)
        self._screen.refresh()

    def draw_status(self, page_number: int, page_count: int, eop: bool, title: Optional[str] = None) -> None:
        with self._with_style(bold=False):
            status = f"[slide {page_number}/{page_count}]"
            max_width = self.width - self.indent
            if title:
                available = max_width - len(status) - 1
                if available > 0:
                    status = f"{status} {title[:available]}"
            status = status[:max_width]
            if self._last_status_len > len(status):
                status += " " * (self._last_status_len - len(status))
            self._last_status_len = len(status)
            self._addstr(self.height - 2, self.indent, status)
        if self.footer_text:
            self.footer(self.footer_text)
        if self.header_text:
            self.header(self.header_text)
        if eop:
            with self._with_style(bold=True):
                self._addstr(self.height - 2, self.indent - 1, "*")

    def show_help(self) -> None:
        self._screen.clear()
        for offset, line in enumerate(HELP_TEXT):
            self._addstr(self.voffset + offset, self.indent, line)
        self._addstr(self.height - 2, self.indent, "Press any key to return to slide")
        self._screen.refresh()

    def read_page_number(self, pages: Sequence, current: int) -> Optional[int]:
        self._screen.clear()
        col = 0
        row = 2
        for i, page in enumerate(pages):
            entry = f"{i + 1:2d} {page.title[:80]}"
            if i == current:
                entry += " <="
            self._addstr(row, col * 15 + 2, entry)
            row += 1
            if row >= self.height - 3:
                row = 2
                col += 1
        prompt = "jump to slide: "
        x = self.indent + 12
        self._addstr(self.height - 2, x, prompt)
        curses.echo()
        try:
            raw = self._screen.getstr(self.height - 2, x + len(prompt), 6)
        except curses.error:
            raw = b""
        finally:
            curses.noecho()
        text = raw.decode("utf-8", "replace").strip()
        self._addstr(self.height - 2, x, " " * (len(prompt) + len(text)))
        if not text.isdigit():
            return None
        return int(text) - 1

    # -- directives ----------------------------------------------------------

    def print_line(self, line: str) -> None:
        self._render_text(line, "left")

    def heading(self, text: str) -> None:
        with self._with_style(bold=True):
            self._render_text(text, "center")

    def center(self, text: str) -> None:
        self._render_text(text, "center")

    def right(self, text: str) -> None:
        self._render_text(text, "right")

    def with_border(self) -> None:
        bottom = self.height - 2
        self._addstr(0, 0, "." + "-" * (self.width - 2) + ".")
        self._addstr(bottom, 0, "`" + "-" * (self.width - 2) + "'")
        for y in range(1, bottom):
            self._addstr(y, 0, "|")
            self._addstr(y, self.width - 1, "|")

    def horline(self) -> None:
        with self._with_style(bold=True):
            self._addstr(self.cur_line, 0, "-" * self.width)

    def exec_command(self, cmdline: str) -> None:
        curses.def_prog_mode()
        curses.endwin()
        try:
            status = run_command(cmdline)
        finally:
            curses.reset_prog_mode()
            self._screen.refresh()
        if status != 0:
            logger.warning("--exec %r exited with status %d", cmdline, status)

    def wait(self) -> None:
        pass

    def begin_output(self) -> None:
        self._frame_rule(".", ".")
        self.output = True

    def begin_shell_output(self) -> None:
        self._frame_rule(".", ".")
        self.shell_output = True

    def end_output(self) -> None:
        if self.output:
            self._frame_rule("`", "'")
            self.output = False

    def end_shell_output(self) -> None:
        if self.shell_output:
            self._frame_rule("`", "'")
            self.shell_output = False

    def sleep(self, seconds: int) -> None:
        self._screen.refresh()
        time.sleep(max(0, seconds))

    def bold_on(self) -> None:
        self._set_style(bold=True)

    def bold_off(self) -> None:
        self._set_style(bold=False)

    def reverse_on(self) -> None:
        self._set_style(reverse=True)

    def reverse_off(self) -> None:
        self._set_style(reverse=False)

    def underline_on(self) -> None:
        self._set_style(underline=True)

    def underline_off(self) -> None:
        self._set_style(underline=False)

    def _set_style(self, **fields) -> None:
        self.style_state = replace(self.style_state, **fields)
        self._apply_style(self.style_state)

    def begin_slide(self, direction: str) -> None:
        self.slide_output = True
        self.slide_dir = direction

    def end_slide(self) -> None:
        self.slide_output = False

    def set_huge_font(self, name: str) -> None:
        self.figlet_font = name

    def huge(self, text: str) -> None:
        width = self.width - self.indent
        if self.framed:
            width -= 2
        for line in render_huge(text, self.figlet_font, width):
            self.print_line(line)

    def footer(self, text: str) -> None:
        self.footer_text = text
        self._addstr(self.height - 3, (self.width - len(text)) // 2, text)

    def header(self, text: str) -> None:
        self.header_text = text
        self._addstr(1, (self.width - len(text)) // 2, text)

    def title(self, text: str) -> None:
        self.bold_on()
        self.center(text)
        self.bold_off()
        self.center("")

    def author(self, text: str) -> None:
        self.center(text)
        self.center("")

    def date(self, text: str) -> None:
        self.center(text)
        self.center("")

    def bgcolor(self, name: str) -> None:
        background = COLORS.get(name, curses.COLOR_BLACK)
        for color_name, pair in COLOR_PAIRS.items():
            if pair:
                curses.init_pair(pair, COLORS[color_name], background)
        self._screen.bkgd(" ", curses.color_pair(COLOR_PAIRS.get(self.foreground, 1)))
        # Pair contents changed, so the active color must be re-sent.
        self._active["color"] = None
        self._apply_style(self.style_state)

    def fgcolor(self, name: str) -> None:
        if not is_valid_color(name):
            logger.warning("Ignoring unknown foreground color %r", name)
            return
        self.foreground = name
        self._set_style(color=name)

    def color(self, name: str) -> None:
        if is_valid_color(name):
            self._set_style(color=name)
        else:
            logger.warning("Ignoring unknown color %r", name)
