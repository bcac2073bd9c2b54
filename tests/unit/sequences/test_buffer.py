"""Unit tests for termtext.sequences.buffer."""

import pytest

from termtext.core.errors import BufferOverflowError, OversizedResultError
from termtext.sequences.buffer import WriteBuffer


class TestTwoPass:
    """Tests for the measure-then-write protocol."""

    def test_measure_then_write(self):
        buff = WriteBuffer()
        for writing in (False, True):
            if writing:
                buff.size()
            else:
                buff.reset()
            buff.write("abc")
            buff.write("")
            buff.write("de")
        assert buff.measured == 5
        assert buff.capacity == 5
        assert buff.getvalue() == "abcde"
        assert len(buff) == 5

    def test_measure_pass_keeps_nothing(self):
        buff = WriteBuffer()
        buff.reset()
        buff.write("abc")
        assert buff.measuring is True
        assert len(buff) == 3
        assert buff.getvalue() == ""

    def test_write_past_measured_size_overflows(self):
        buff = WriteBuffer()
        buff.reset()
        buff.write("ab")
        buff.size()
        buff.write("ab")
        with pytest.raises(BufferOverflowError):
            buff.write("c")


class TestReserve:
    """Tests for reserve() and clear()."""

    def test_reserve_and_clear_reuse_capacity(self):
        buff = WriteBuffer()
        buff.reserve(4)
        buff.write("abcd")
        buff.clear(index=3)
        buff.write("xy")
        assert buff.getvalue() == "xy"
        assert buff.capacity == 4
        assert buff.index == 3

    def test_reserve_over_limit(self):
        buff = WriteBuffer(limit=5, index=2)
        with pytest.raises(OversizedResultError) as exc_info:
            buff.reserve(6)
        assert exc_info.value.index == 2
        assert exc_info.value.limit == 5


class TestOversized:
    """Tests for the result length limit."""

    def test_measure_over_limit(self):
        buff = WriteBuffer(limit=5)
        buff.reset(index=7)
        with pytest.raises(OversizedResultError) as exc_info:
            buff.write("abcdef")
        assert exc_info.value.index == 7
        assert exc_info.value.length == 6
        assert "[7]" in exc_info.value.message
