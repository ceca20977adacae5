"""Inline markup: tokenizer, style state machine and unit builder.

Inline markers may appear inside any text argument:

- ``--b`` / ``--/b``      bold on / off
- ``--u`` / ``--/u``      underline on / off
- ``--rev`` / ``--/rev``  reverse video on / off
- ``--c <name>``          push a color (see ``COLOR_NAMES``)
- ``--/c``                pop the previous color
- ``\\--``                a literal ``--``

Malformed markers are never an error; they stay in the text as literal
characters.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import List, NamedTuple, Optional, Union

COLOR_NAMES = (
    "white",
    "yellow",
    "red",
    "green",
    "blue",
    "cyan",
    "magenta",
    "black",
    "default",
)

BOLD = "bold"
UNDERLINE = "underline"
REVERSE = "reverse"


@dataclass(frozen=True)
class Text:
    text: str


@dataclass(frozen=True)
class StyleToggle:
    kind: str
    on: bool


@dataclass(frozen=True)
class ColorPush:
    name: str


@dataclass(frozen=True)
class ColorPop:
    pass


Token = Union[Text, StyleToggle, ColorPush, ColorPop]

# Closing markers come before opening ones, and longer markers before the
# shorter markers they start with.
_FIXED_MARKERS = (
    ("--/b", StyleToggle(BOLD, False)),
    ("--b", StyleToggle(BOLD, True)),
    ("--/u", StyleToggle(UNDERLINE, False)),
    ("--u", StyleToggle(UNDERLINE, True)),
    ("--/rev", StyleToggle(REVERSE, False)),
    ("--rev", StyleToggle(REVERSE, True)),
    ("--/c", ColorPop()),
)


def is_valid_color(name: Optional[str]) -> bool:
    return name in COLOR_NAMES


# ASCII whitespace only; other Unicode spaces keep the marker literal.
_MARKER_SPACE = " \t\r\n\f\v"


def _color_marker_at(text: str, index: int):
    """Match ``--c <ws>+<name>`` at *index*; return ``(token, length)`` or None."""
    j = index + 3
    if j >= len(text) or text[j] not in _MARKER_SPACE:
        return None
    while j < len(text) and text[j] in _MARKER_SPACE:
        j += 1
    k = j
    while k < len(text) and text[k].isascii() and text[k].isalpha():
        k += 1
    if k > j and is_valid_color(text[j:k]):
        return ColorPush(text[j:k]), k - index
    return None


def _marker_at(text: str, index: int):
    for marker, token in _FIXED_MARKERS:
        if text.startswith(marker, index):
            return token, len(marker)
    if text.startswith("--c", index):
        return _color_marker_at(text, index)
    return None


def scan_inline_tokens(text: Optional[str]) -> List[Token]:
    """Split *text* into literal ``Text`` runs and markup tokens."""
    if text is None:
        return []
    tokens: List[Token] = []
    buffer = []
    i = 0
    while i < len(text):
        if text[i] == "\\" and text.startswith("--", i + 1):
            buffer.append("--")
            i += 3
            continue
        if text.startswith("--", i):
            match = _marker_at(text, i)
            if match is not None:
                if buffer:
                    tokens.append(Text("".join(buffer)))
                    buffer = []
                token, length = match
                tokens.append(token)
                i += length
                continue
        buffer.append(text[i])
        i += 1
    if buffer:
        tokens.append(Text("".join(buffer)))
    return tokens


def strip_inline_tokens(text: Optional[str]) -> str:
    """Remove inline markers, keeping literal text (escaped ``--`` included)."""
    return "".join(t.text for t in scan_inline_tokens(text) if isinstance(t, Text))


@dataclass(frozen=True)
class StyleState:
    """Style snapshot attached to every rendered character.

    Instances are never mutated. Each transition creates a new object, and
    renderers group characters by object identity, so two separately built
    states with equal fields still start separate runs.
    """

    bold: bool = False
    underline: bool = False
    reverse: bool = False
    color: Optional[str] = None

    def with_flag(self, kind: str, on: bool) -> "StyleState":
        if kind not in (BOLD, UNDERLINE, REVERSE):
            raise ValueError(f"unknown style kind: {kind!r}")
        return replace(self, **{kind: on})

    def with_color(self, color: Optional[str]) -> "StyleState":
        return replace(self, color=color)


class ColorStack:
    """Previously active colors; popping an empty stack does nothing."""

    def __init__(self):
        self._colors: List[Optional[str]] = []

    def __len__(self) -> int:
        return len(self._colors)

    def push(self, color: Optional[str]) -> None:
        self._colors.append(color)

    def pop(self, fallback: Optional[str] = None) -> Optional[str]:
        if not self._colors:
            return fallback
        return self._colors.pop()


def apply_token(state: StyleState, token: Token, stack: ColorStack) -> StyleState:
    """Return the style state that follows *state* once *token* is applied."""
    if isinstance(token, StyleToggle):
        return state.with_flag(token.kind, token.on)
    if isinstance(token, ColorPush):
        if not is_valid_color(token.name):
            return state
        stack.push(state.color)
        return state.with_color(token.name)
    if isinstance(token, ColorPop):
        if not len(stack):
            return state
        return state.with_color(stack.pop(state.color))
    return state


class Unit(NamedTuple):
    char: str
    style: StyleState


def build_inline_units(text: Optional[str], base_state: StyleState) -> List[Unit]:
    """Expand *text* into one ``Unit`` per visible character."""
    units: List[Unit] = []
    state = replace(base_state)
    stack = ColorStack()
    for token in scan_inline_tokens(text):
        if isinstance(token, Text):
            units.extend(Unit(ch, state) for ch in token.text)
        else:
            state = apply_token(state, token, stack)
    return units
