"""
Tests for plain and styled word wrapping and segment compaction.
"""

import pytest

from termpp.markup import StyleState, Unit, build_inline_units
from termpp.wrap import Segment, split_lines, units_to_segments, wrap_units


def _text(line):
    return "".join(u.char for u in line)


class TestSplitLines:
    def test_breaks_at_spaces(self):
        assert split_lines("aaaa bbbb cccc", 9) == ["aaaa", "bbbb", "cccc"]

    def test_hard_cut_keeps_every_character(self):
        assert split_lines("abcdefghijkl", 5) == ["abcde", "fghij", "kl"]

    def test_short_text_whole(self):
        assert split_lines("hello world", 80) == ["hello world"]

    def test_exact_width_without_space(self):
        assert split_lines("abcde", 5) == ["abcde"]

    def test_exact_width_with_space_still_breaks(self):
        assert split_lines("ab cd", 5) == ["ab", "cd"]
        assert split_lines("ab cd", 6) == ["ab cd"]

    def test_empty_and_none_give_one_line(self):
        assert split_lines("", 10) == [""]
        assert split_lines(None, 10) == [""]

    @pytest.mark.parametrize("width", [0, -3])
    def test_width_clamped(self, width):
        assert split_lines("abc", width) == ["a", "b", "c"]

    def test_leading_space_is_not_a_break(self):
        assert split_lines(" abcdefgh", 4) == [" abc", "defg", "h"]

    def test_lines_never_exceed_width(self):
        text = "the quick brown fox jumps over the lazy dog " * 5
        for width in range(1, 30):
            assert all(len(line) <= width for line in split_lines(text, width))


class TestWrapUnits:
    def test_same_boundaries_as_plain(self):
        text = "aaaa bbbb cccc"
        units = build_inline_units(text, StyleState())
        assert [_text(line) for line in wrap_units(units, 9)] == split_lines(text, 9)

    def test_empty_gives_one_empty_line(self):
        assert wrap_units([], 10) == [[]]

    def test_styles_travel_with_characters(self):
        units = build_inline_units("--bbold run--/b plain", StyleState())
        lines = wrap_units(units, 5)
        assert [_text(line) for line in lines] == ["bold", "run", "plain"]
        flat = [u for line in lines for u in line]
        assert [u.style.bold for u in flat] == [True] * 7 + [False] * 5

    def test_styled_units_are_identical_objects(self):
        units = build_inline_units("--bbold--/b plain", StyleState())
        wrapped = [u for line in wrap_units(units, 3) for u in line]
        originals = [u for u in units if u.char != " "]
        assert all(a is b for a, b in zip(wrapped, originals))


class TestUnitsToSegments:
    def test_merges_shared_state(self):
        units = build_inline_units("ab--bcd", StyleState())
        segments = units_to_segments(units)
        assert [s.text for s in segments] == ["ab", "cd"]
        assert segments[1].style.bold

    def test_noop_toggle_starts_new_segment(self):
        units = build_inline_units("--bab--bcd", StyleState())
        segments = units_to_segments(units)
        assert [s.text for s in segments] == ["ab", "cd"]
        assert segments[0].style == segments[1].style

    def test_equal_but_distinct_states_not_merged(self):
        a = StyleState(bold=True)
        b = StyleState(bold=True)
        segments = units_to_segments([Unit("x", a), Unit("y", b)])
        assert segments == [Segment(a, "x"), Segment(b, "y")]

    def test_empty(self):
        assert units_to_segments([]) == []
