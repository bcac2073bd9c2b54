"""Unit tests for unhandled_ctl."""

import warnings

import pytest

from termtext import UnhandledSequence, unhandled_ctl
from termtext.core.errors import ConfigError, UnhandledLimitWarning
from termtext.core.types import ErrorCode


class TestUnhandledCtl:
    """Tests for unhandled_ctl()."""

    def test_unterminated_escape(self):
        rows = unhandled_ctl("abc\x1b[", term_cap="none")
        assert rows == [
            UnhandledSequence(
                index=0,
                start=3,
                end=5,
                error_code=ErrorCode.UNTERMINATED,
                translated=False,
                esc="\x1b[",
                byte_start=3,
                byte_end=5,
            )
        ]

    def test_well_formed_sequences_produce_no_rows(self):
        text = "\x1b[1;31ma\x1b[0m\x1b]8;;u\x1b\\b\x1b]8;;\x1b\\\x1b[2J\x1b(B\x01\x1b]0;t\x07"
        assert unhandled_ctl([text, "", None, "plain"]) == []

    def test_element_index_and_order(self):
        rows = unhandled_ctl(["ok", "\x1b[999mx\x1b[4:3m", "\x1b"])
        assert [(r.index, r.error_code) for r in rows] == [
            (1, ErrorCode.UNKNOWN_SGR),
            (1, ErrorCode.UNKNOWN_SGR),
            (2, ErrorCode.UNTERMINATED),
        ]
        assert [r.esc for r in rows] == ["\x1b[999m", "\x1b[4:3m", "\x1b"]

    def test_offsets_count_controls_and_display_width(self):
        """Wide text counts two; earlier sequences count per character."""
        rows = unhandled_ctl("\x1b[1m中\x1b[999m")
        assert len(rows) == 1
        assert rows[0].start == 6
        assert rows[0].end == 12
        assert rows[0].byte_start == 7
        assert rows[0].byte_end == 13

    def test_unsupported_color_depends_on_capabilities(self):
        assert unhandled_ctl("\x1b[91m", term_cap="all") == []
        rows = unhandled_ctl("\x1b[91m", term_cap=["all", "bright"])
        assert [r.error_code for r in rows] == [ErrorCode.UNSUPPORTED_COLOR]

    def test_reports_even_without_warnings(self):
        """The reporter never warns about the sequences it reports."""
        with warnings.catch_warnings():
            warnings.simplefilter("error")
            assert len(unhandled_ctl("\x1b[999m")) == 1


class TestUnhandledLimit:
    """Tests for the row limit."""

    def test_limit_truncates_with_warning(self):
        with pytest.warns(UnhandledLimitWarning):
            rows = unhandled_ctl(["\x1b[999m", "\x1b[998m", "\x1b[997m"], limit=2)
        assert [r.index for r in rows] == [0, 1]

    def test_limit_not_reached(self):
        with warnings.catch_warnings():
            warnings.simplefilter("error")
            assert len(unhandled_ctl(["\x1b[999m"], limit=1)) == 1

    def test_negative_limit(self):
        with pytest.raises(ConfigError):
            unhandled_ctl("a", limit=-1)
