"""Unit tests for collapse_whitespace."""

import re

import pytest

from termtext import collapse_whitespace, strip_ctl, visible_width


def collapse(text: str) -> str:
    return collapse_whitespace(text)[0]


class TestCollapseRuns:
    """Tests for the basic run rules."""

    def test_run_becomes_one_space(self):
        assert collapse("a   b") == "a b"

    def test_single_space_unchanged(self):
        x = ["a b", "no-blanks"]
        assert collapse_whitespace(x) is x

    def test_tab_becomes_space(self):
        assert collapse("a\tb") == "a b"

    def test_single_newline_becomes_space(self):
        assert collapse("a\nb") == "a b"

    def test_leading_and_trailing_runs_dropped(self):
        assert collapse("  a b  ") == "a b"
        assert collapse("a ") == "a"

    def test_blank_only(self):
        assert collapse("   ") == ""


class TestCollapseSentences:
    """Tests for two spaces after a sentence end."""

    def test_two_spaces_kept_after_period(self):
        assert collapse("Hi.  There") == "Hi.  There"

    def test_longer_run_after_period_becomes_two(self):
        assert collapse("Hi.    There") == "Hi.  There"

    def test_closing_quote_after_punctuation(self):
        assert collapse('He said "Go!"   Then') == 'He said "Go!"  Then'

    def test_single_space_after_period_stays_single(self):
        assert collapse("Hi. There") == "Hi. There"

    def test_no_punctuation_collapses(self):
        assert collapse("Hi  There") == "Hi There"


class TestCollapseParagraphs:
    """Tests for paragraph breaks."""

    def test_many_newlines_become_two(self):
        assert collapse("Line1\n\n\n\nLine2") == "Line1\n\nLine2"

    def test_blanks_around_newlines(self):
        assert collapse("Line1  \n \n  Line2") == "Line1\n\nLine2"

    def test_paragraph_break_overrides_sentence_rule(self):
        assert collapse("End.  \n\n  Next") == "End.\n\nNext"

    def test_trailing_paragraph_break_dropped(self):
        assert collapse("abc\n\n") == "abc"

    def test_leading_paragraph_break_kept(self):
        assert collapse("\n\nabc") == "\n\nabc"


class TestCollapseControls:
    """Tests for control sequences inside and outside runs."""

    def test_control_inside_run_follows_separator(self):
        assert collapse("a \x1b[31m b") == "a \x1b[31mb"

    @pytest.mark.parametrize("control", ["\x7f", "\x01", "\x1b[2K"])
    def test_single_controls_inside_run(self, control):
        """DEL rides along with a run like any other C0 control."""
        assert collapse(f"a  {control}  b") == f"a {control}b"

    def test_control_outside_run_is_copied(self):
        assert collapse("\x1b[31ma   b\x1b[0m") == "\x1b[31ma b\x1b[0m"

    def test_control_after_leading_run(self):
        assert collapse("  \x1b[31mabc") == "\x1b[31mabc"

    def test_excluded_family_ends_run(self):
        """A sequence that is not a control for this call is text."""
        assert collapse_whitespace("a  \x1b[31m  b", ctl="url")[0] == "a \x1b[31m b"

    def test_missing_and_empty(self):
        assert collapse_whitespace([None, ""]) == [None, ""]


class TestCollapseProperties:
    """Tests for properties that hold for any input."""

    SAMPLES = [
        "a   b",
        "Hi.     There  you.   Ok",
        "x\t\t y \n\n\n\n z",
        "  \x1b[1m  lead  \x1b[0m  ",
        "a  \x1b[31m  \x1b]8;;u\x07   b",
        "?!  )  '   end",
        "é中  \x7f \x7f\x01\x1b[31m\x7f !)",
    ]

    @pytest.mark.parametrize("text", SAMPLES)
    def test_no_three_plain_spaces(self, text):
        plain = strip_ctl(collapse(text))[0]
        assert "   " not in plain

    @pytest.mark.parametrize("text", SAMPLES)
    def test_paragraph_breaks_are_two_newlines(self, text):
        plain = strip_ctl(collapse(text))[0]
        assert re.search(r"\n[ \t]*\n[ \t]*\n", plain) is None

    @pytest.mark.parametrize("text", SAMPLES)
    def test_never_wider(self, text):
        before = visible_width(text)[0]
        after = visible_width(collapse(text))[0]
        assert after <= before

    @pytest.mark.parametrize("text", SAMPLES)
    def test_idempotent(self, text):
        once = collapse(text)
        assert collapse(once) == once
