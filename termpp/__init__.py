"""termpp: text presentation program for the terminal.

Slides are written in a line-oriented source format (``--newpage``,
``--heading``, ``---`` pauses, ...) with inline ``--b``/``--u``/``--rev``/
``--c <color>`` markup, and are shown with curses or exported to plain text
or LaTeX-beamer.
"""

__version__ = "1.3.1"

from .document import Document, Page, load_document, parse_document  # noqa: E402
from .dispatch import Dispatcher  # noqa: E402
from .markup import StyleState, build_inline_units, scan_inline_tokens, strip_inline_tokens  # noqa: E402
from .navigator import KeyAction, Navigator  # noqa: E402
from .wrap import split_lines, units_to_segments, wrap_units  # noqa: E402

__all__ = [
    "Dispatcher",
    "Document",
    "KeyAction",
    "Navigator",
    "Page",
    "StyleState",
    "build_inline_units",
    "load_document",
    "parse_document",
    "scan_inline_tokens",
    "split_lines",
    "strip_inline_tokens",
    "units_to_segments",
    "wrap_units",
]
