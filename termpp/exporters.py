"""Backends that convert a presentation into another document format."""

from __future__ import annotations

import logging
from typing import Optional, TextIO

from .backend import Backend
from .errors import SetupError
from .markup import strip_inline_tokens
from .shell import DEFAULT_FONT, render_huge
from .wrap import split_lines

logger = logging.getLogger(__name__)

LATEX_PREAMBLE = r"""% Generated by termpp
\documentclass{beamer}

\mode<presentation>
{
  \usetheme{Montpellier}
  \setbeamercovered{transparent}
}

\usepackage[utf8]{inputenc}
\usepackage{times}
\usepackage[T1]{fontenc}
"""


class FileBackend(Backend):
    """Shared file handling for exporters.

    Every operation defaults to a no-op here; subclasses override the ones
    their format can express.
    """

    def __init__(self, path: str, width: int):
        self.path = path
        self.width = width
        self._f: Optional[TextIO] = None

    def open(self) -> None:
        try:
            self._f = open(self.path, "w", encoding="utf-8")
        except OSError as exc:
            raise SetupError(f"couldn't open file: {exc}") from exc
        logger.debug("Writing %s", self.path)

    def close(self) -> None:
        if self._f is None:
            return
        self._f.close()
        self._f = None

    def write(self, text: str = "") -> None:
        if self._f is None:
            raise RuntimeError(f"{type(self).__name__} used before open()")
        self._f.write(text + "\n")

    def new_page(self) -> None:
        pass

    def refresh(self) -> None:
        pass

    def print_line(self, line: str) -> None:
        for part in split_lines(strip_inline_tokens(line), self.width):
            self.write(part)

    def heading(self, text: str) -> None:
        self.print_line(text)

    def with_border(self) -> None:
        pass

    def horline(self) -> None:
        pass

    def color(self, name: str) -> None:
        pass

    def center(self, text: str) -> None:
        self.print_line(text)

    def right(self, text: str) -> None:
        self.print_line(text)

    def exec_command(self, cmdline: str) -> None:
        pass

    def wait(self) -> None:
        pass

    def begin_output(self) -> None:
        pass

    def end_output(self) -> None:
        pass

    def begin_shell_output(self) -> None:
        pass

    def end_shell_output(self) -> None:
        pass

    def sleep(self, seconds: int) -> None:
        pass

    def bold_on(self) -> None:
        pass

    def bold_off(self) -> None:
        pass

    def reverse_on(self) -> None:
        pass

    def reverse_off(self) -> None:
        pass

    def underline_on(self) -> None:
        pass

    def underline_off(self) -> None:
        pass

    def begin_slide(self, direction: str) -> None:
        pass

    def end_slide(self) -> None:
        pass

    def set_huge_font(self, name: str) -> None:
        pass

    def huge(self, text: str) -> None:
        pass

    def footer(self, text: str) -> None:
        pass

    def header(self, text: str) -> None:
        pass

    def title(self, text: str) -> None:
        pass

    def author(self, text: str) -> None:
        pass

    def date(self, text: str) -> None:
        pass

    def bgcolor(self, name: str) -> None:
        pass

    def fgcolor(self, name: str) -> None:
        pass


class TextBackend(FileBackend):
    """Plain-text handout."""

    def __init__(self, path: str, width: int = 80, huge_font: str = DEFAULT_FONT):
        super().__init__(path, width)
        self.output_env = False
        self.figlet_font = huge_font
        self._meta = set()

    def new_page(self) -> None:
        self.write("-" * 44)

    def _emit(self, part: str) -> None:
        self.write(f"| {part}" if self.output_env else part)

    def print_line(self, line: str) -> None:
        for part in split_lines(strip_inline_tokens(line), self.width):
            self._emit(part)

    def heading(self, text: str) -> None:
        self.write()
        for part in split_lines(strip_inline_tokens(text), self.width):
            self.write(part)
        self.write("~" * 36)

    def horline(self) -> None:
        self.write("*" * 44)

    def center(self, text: str) -> None:
        for part in split_lines(strip_inline_tokens(text), self.width):
            self._emit(" " * max(0, (self.width - len(part)) // 2) + part)

    def right(self, text: str) -> None:
        for part in split_lines(strip_inline_tokens(text), self.width):
            self._emit(" " * max(0, self.width - len(part)) + part)

    def begin_output(self) -> None:
        self.write("." + "-" * 27)
        self.output_env = True

    def end_output(self) -> None:
        self.write("`" + "-" * 27)
        self.output_env = False

    def begin_shell_output(self) -> None:
        self.begin_output()

    def end_shell_output(self) -> None:
        self.end_output()

    def set_huge_font(self, name: str) -> None:
        self.figlet_font = name

    def huge(self, text: str) -> None:
        width = self.width - 2 if self.output_env else self.width
        for line in render_huge(text, self.figlet_font, width):
            self.print_line(line)

    def _metadata(self, label: str, text: str) -> None:
        self.write(f"{label}: {strip_inline_tokens(text)}")
        self._meta.add(label)
        if self._meta >= {"Title", "Author", "Date"}:
            self.write("\n")

    def title(self, text: str) -> None:
        self._metadata("Title", text)

    def author(self, text: str) -> None:
        self._metadata("Author", text)

    def date(self, text: str) -> None:
        self._metadata("Date", text)


class LatexBackend(FileBackend):
    """LaTeX-beamer source: one frame per page, body text in verbatim."""

    def __init__(self, path: str, width: int = 50):
        super().__init__(path, width)
        self.slide_open = False
        self.verbatim_open = False
        self.begin_doc = False
        self._meta = set()

    def open(self) -> None:
        super().open()
        self.write(LATEX_PREAMBLE)

    def _begin_document(self) -> None:
        if not self.begin_doc:
            self.write(r"\begin{document}")
            self.begin_doc = True

    def _try_open(self) -> None:
        self._begin_document()
        if not self.slide_open:
            self.write(r"\begin{frame}[fragile]")
            self.slide_open = True
        if not self.verbatim_open:
            self.write(r"\begin{verbatim}")
            self.verbatim_open = True

    def _try_close(self) -> None:
        if self.verbatim_open:
            self.write(r"\end{verbatim}")
            self.verbatim_open = False
        if self.slide_open:
            self.write(r"\end{frame}")
            self.slide_open = False

    def new_page(self) -> None:
        self._try_close()

    def print_line(self, line: str) -> None:
        self._try_open()
        super().print_line(line)

    def heading(self, text: str) -> None:
        self._try_close()
        self.write(rf"\section{{{strip_inline_tokens(text)}}}")

    def _metadata(self, key: str, command: str) -> None:
        self.write(command)
        self._meta.add(key)
        if self._meta >= {"title", "author", "date"}:
            self._begin_document()
            self.write("\\begin{frame}\n  \\titlepage\n\\end{frame}")

    def title(self, text: str) -> None:
        title = strip_inline_tokens(text)
        self._metadata("title", rf"\title[{title}]{{{title}}}")

    def author(self, text: str) -> None:
        self._metadata("author", rf"\author{{{strip_inline_tokens(text)}}}")

    def date(self, text: str) -> None:
        self._metadata("date", rf"\date{{{strip_inline_tokens(text)}}}")

    def close(self) -> None:
        if self._f is None:
            return
        self._try_close()
        self._begin_document()
        self.write(r"\end{document}")
        super().close()
