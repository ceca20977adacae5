"""Word wrapping for plain strings and styled units, and run compaction."""

from __future__ import annotations

from typing import List, NamedTuple, Optional, Sequence

from .markup import StyleState, Unit


class Segment(NamedTuple):
    style: StyleState
    text: str


def _break_point(chars: Sequence[str], start: int, width: int) -> Optional[int]:
    """Index of the last space in ``chars[start:start + width]``, not at *start*."""
    i = start + width - 1
    while i > start:
        if chars[i] == " ":
            return i
        i -= 1
    return None


def _wrap(chars: Sequence[str], width: int) -> List[tuple]:
    """Return ``(begin, end)`` slices for each wrapped line of *chars*.

    A remainder shorter than *width* is kept whole. Otherwise the line ends at
    the last space inside the window and that space is dropped; with no space
    to break on the line is cut at exactly *width* characters.
    """
    width = max(1, width)
    if not chars:
        return [(0, 0)]
    spans = []
    idx = 0
    while idx < len(chars):
        if len(chars) - idx < width:
            spans.append((idx, len(chars)))
            break
        brk = _break_point(chars, idx, width)
        if brk is None:
            spans.append((idx, idx + width))
            idx += width
        else:
            spans.append((idx, brk))
            idx = brk + 1
    return spans


def split_lines(text: Optional[str], width: int) -> List[str]:
    """Wrap a plain string into lines of at most *width* characters."""
    text = text or ""
    return [text[a:b] for a, b in _wrap(text, width)]


def wrap_units(units: Sequence[Unit], width: int) -> List[List[Unit]]:
    """Wrap styled units with the same break rules as ``split_lines``."""
    chars = [unit.char for unit in units]
    return [list(units[a:b]) for a, b in _wrap(chars, width)]


def units_to_segments(units: Sequence[Unit]) -> List[Segment]:
    """Merge consecutive units that share the same style object."""
    segments: List[Segment] = []
    current = None
    buffer = []
    for unit in units:
        if buffer and unit.style is current:
            buffer.append(unit.char)
            continue
        if buffer:
            segments.append(Segment(current, "".join(buffer)))
        current = unit.style
        buffer = [unit.char]
    if buffer:
        segments.append(Segment(current, "".join(buffer)))
    return segments
