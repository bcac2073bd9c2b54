"""Unit tests for strip_ctl."""

import warnings

import pytest

from termtext import strip_ctl
from termtext.core.cancel import CancellationToken
from termtext.core.errors import (
    ConfigError,
    InputTypeError,
    OperationCancelledError,
    UnhandledSequenceWarning,
)


class TestStripCtl:
    """Tests for strip_ctl()."""

    def test_removes_style_sequences(self):
        """Only control spans are removed; spaces are untouched."""
        assert strip_ctl("\x1b[31mRed\x1b[0m  Text") == ["Red  Text"]

    def test_removes_every_family(self):
        text = "\x01a\x1b[2Jb\x1b]0;t\x07c\x1b]8;;u\x1b\\d\x1b(Be"
        assert strip_ctl(text) == ["abcde"]

    def test_keeps_tabs_and_newlines(self):
        assert strip_ctl("a\tb\n\x1b[1mc") == ["a\tb\nc"]

    def test_missing_and_empty(self):
        assert strip_ctl([None, "", "\x1b[1m"]) == [None, "", ""]

    def test_unchanged_input_is_returned_as_is(self):
        x = ["plain", "text"]
        assert strip_ctl(x) is x

    def test_changed_input_is_not_mutated(self):
        x = ["\x1b[1mbold", "plain"]
        result = strip_ctl(x)
        assert result == ["bold", "plain"]
        assert x == ["\x1b[1mbold", "plain"]

    def test_tuple_input(self):
        assert strip_ctl(("\x1b[1ma", "b")) == ["a", "b"]

    def test_empty_collection(self):
        assert strip_ctl([]) == []


class TestStripFamilies:
    """Tests for the ctl option."""

    def test_only_selected_family(self):
        text = "\x1b[31mred\x1b]8;;u\x07link\x1b]8;;\x07"
        assert strip_ctl(text, ctl="sgr") == ["red\x1b]8;;u\x07link\x1b]8;;\x07"]

    def test_all_except(self):
        """'all' with other names strips everything but those."""
        text = "\x1b[31mred\x1b]8;;u\x07link\x1b]8;;\x07"
        assert strip_ctl(text, ctl=["all", "url"]) == ["red\x1b]8;;u\x07link\x1b]8;;\x07"]

    def test_unknown_family(self):
        with pytest.raises(ConfigError):
            strip_ctl("a", ctl="colour")


class TestStripInvalid:
    """Tests for invalid sequences."""

    def test_invalid_sequence_is_stripped_with_one_warning(self):
        with pytest.warns(UnhandledSequenceWarning, match=r"index \[1\]") as record:
            result = strip_ctl(["ok", "\x1b[999ma\x1b[998mb", "\x1b["])
        assert result == ["ok", "ab", ""]
        assert len(record) == 1

    def test_warn_false(self):
        with warnings.catch_warnings():
            warnings.simplefilter("error")
            assert strip_ctl("\x1b[999ma", warn=False) == ["a"]


class TestStripErrors:
    """Tests for input validation and cancellation."""

    def test_wrong_input_type(self):
        with pytest.raises(InputTypeError):
            strip_ctl(5)

    def test_wrong_element_type(self):
        with pytest.raises(TypeError, match=r"index \[1\]"):
            strip_ctl(["a", 3])

    def test_cancelled(self):
        token = CancellationToken()
        token.cancel()
        with pytest.raises(OperationCancelledError):
            strip_ctl(["\x1b[1ma"], cancel=token)


class TestStripProperties:
    """Tests for properties that hold for any input."""

    @pytest.mark.parametrize(
        "text",
        [
            "\x1b[31mRed\x1b[0m  Text",
            "\x1b[999m\x1b[ \x1b",
            "a\x1b]8;;u\x1b\\b\x1b]8;;\x1b\\",
            "\x1b\x1b[1m[31m",
        ],
    )
    def test_idempotent(self, text):
        once = strip_ctl(text, warn=False)
        assert strip_ctl(once, warn=False) == once
