"""
Tests for directive classification and dispatch.
"""

from datetime import datetime

import pytest

from termpp.dispatch import Dispatcher, expand_date, parse_seconds


@pytest.fixture
def dispatcher(backend, fixed_clock):
    return Dispatcher(backend, clock=fixed_clock)


class TestDirectives:
    @pytest.mark.parametrize(
        "line, call",
        [
            ("--heading Intro --bnow", ("heading", "Intro --bnow")),
            ("--withborder", ("with_border",)),
            ("--horline", ("horline",)),
            ("--color red ", ("color", "red")),
            ("--center middle", ("center", "middle")),
            ("--right edge", ("right", "edge")),
            ("--exec xterm &", ("exec_command", "xterm &")),
            ("--beginoutput", ("begin_output",)),
            ("--endoutput", ("end_output",)),
            ("--beginshelloutput", ("begin_shell_output",)),
            ("--endshelloutput", ("end_shell_output",)),
            ("--sleep 3", ("sleep", 3)),
            ("--boldon", ("bold_on",)),
            ("--boldoff", ("bold_off",)),
            ("--revon", ("reverse_on",)),
            ("--revoff", ("reverse_off",)),
            ("--ulon", ("underline_on",)),
            ("--uloff", ("underline_off",)),
            ("--beginslideleft", ("begin_slide", "left")),
            ("--beginslideright", ("begin_slide", "right")),
            ("--beginslidetop", ("begin_slide", "top")),
            ("--beginslidebottom", ("begin_slide", "bottom")),
            ("--sethugefont  banner ", ("set_huge_font", "banner")),
            ("--huge Big", ("huge", "Big")),
            ("--footer foot", ("footer", "foot")),
            ("--header head", ("header", "head")),
            ("--title My talk", ("title", "My talk")),
            ("--author Someone", ("author", "Someone")),
            ("--date 2024-01-01", ("date", "2024-01-01")),
            ("--bgcolor blue ", ("bgcolor", "blue")),
            ("--fgcolor white", ("fgcolor", "white")),
        ],
    )
    def test_one_backend_call(self, dispatcher, backend, line, call):
        assert dispatcher.dispatch(line) is False
        assert backend.calls == [call]

    @pytest.mark.parametrize("line", ["--endslideleft", "--endslideright", "--endslidetop", "--endslidebottom"])
    def test_all_end_slides_converge(self, dispatcher, backend, line):
        dispatcher.dispatch(line)
        assert backend.calls == [("end_slide",)]

    def test_pause(self, dispatcher, backend):
        assert dispatcher.dispatch("---") is True
        assert backend.calls == [("wait",)]

    def test_longer_hyphen_run_is_pause(self, dispatcher, backend):
        assert dispatcher.dispatch("-----") is True

    def test_plain_text(self, dispatcher, backend):
        assert dispatcher.dispatch("just --btext") is False
        assert backend.calls == [("print_line", "just --btext")]

    def test_blank_line(self, dispatcher, backend):
        dispatcher.dispatch("")
        assert backend.calls == [("print_line", "")]

    @pytest.mark.parametrize("line", ["--frobnicate", "--heading", "--title", "--newpage stray"])
    def test_unknown_directive_is_printed(self, dispatcher, backend, line):
        assert dispatcher.dispatch(line) is False
        assert backend.calls == [("print_line", line)]

    def test_comment_ignored(self, dispatcher, backend):
        assert dispatcher.dispatch("--## note to self") is False
        assert backend.calls == []

    def test_none_line(self, dispatcher, backend):
        assert dispatcher.dispatch(None) is False
        assert backend.calls == []

    def test_first_match_wins_for_color(self, dispatcher):
        assert dispatcher.classify("--color red") == "--color "
        prefixes = [prefix for prefix, _ in dispatcher._table]
        assert prefixes.count("--color ") == 2

    def test_classify(self, dispatcher):
        assert dispatcher.classify("--beginshelloutput") == "--beginshelloutput"
        assert dispatcher.classify("hello") is None


class TestDate:
    def test_today(self, dispatcher, backend):
        dispatcher.dispatch("--date today")
        assert backend.calls == [("date", "Mar 05 2024")]

    def test_today_with_format(self, dispatcher, backend):
        dispatcher.dispatch("--date today %Y/%m/%d")
        assert backend.calls == [("date", "2024/03/05")]

    def test_literal_date(self):
        assert expand_date("yesterday", datetime(2024, 1, 1)) == "yesterday"


class TestSleep:
    @pytest.mark.parametrize("text, expected", [("5", 5), (" 2s", 2), ("soon", 0), ("", 0)])
    def test_parse_seconds(self, text, expected):
        assert parse_seconds(text) == expected


class TestIncludeFile:
    def test_frames_file_contents(self, backend, tmp_path):
        included = tmp_path / "code.py"
        included.write_text("print('hi')\nx = 1\n", encoding="utf-8")
        dispatcher = Dispatcher(backend)
        dispatcher.dispatch(f"--include-file {included} ")
        assert backend.calls == [
            ("begin_output",),
            ("print_line", str(included)),
            ("print_line", "print('hi')"),
            ("print_line", "x = 1"),
            ("end_output",),
        ]
        assert dispatcher.last_included_file == str(included)

    def test_missing_file_is_not_fatal(self, backend, tmp_path):
        dispatcher = Dispatcher(backend)
        missing = tmp_path / "nope.txt"
        assert dispatcher.dispatch(f"--include-file {missing}") is False
        names = backend.names()
        assert names[0] == "begin_output" and names[-1] == "end_output"
        assert backend.printed()[1].startswith("couldn't open file")
