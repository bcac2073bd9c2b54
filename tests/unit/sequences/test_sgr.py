"""Unit tests for the SGR style model."""

from termtext.core.types import ErrorCode, TermCap
from termtext.sequences.sgr import (
    EMPTY_STYLE,
    Attr,
    Color,
    Style,
    apply_sgr,
    render_sgr,
    style_codes,
    transition_codes,
)


def _style(params: str) -> Style:
    style, error = apply_sgr(EMPTY_STYLE, params)
    assert error is None
    return style


class TestApplySgr:
    """Tests for apply_sgr()."""

    def test_attributes_and_colors(self):
        style = _style("1;3;31;44")
        assert style.attrs == frozenset({Attr.BOLD, Attr.ITALIC})
        assert style.fg == Color("basic", (1,))
        assert style.bg == Color("basic", (4,))

    def test_empty_parameters_reset(self):
        """ESC [ m is the same as ESC [ 0 m."""
        style, error = apply_sgr(_style("1;31"), "")
        assert error is None
        assert style == EMPTY_STYLE

    def test_empty_parameter_inside_list_is_zero(self):
        style, error = apply_sgr(_style("1"), ";31")
        assert error is None
        assert style.attrs == frozenset()
        assert style.fg == Color("basic", (1,))

    def test_off_codes_clear_their_group(self):
        style = _style("1;2;22")
        assert style.attrs == frozenset()

    def test_default_colors(self):
        style = _style("31;41;39;49")
        assert style.fg is None
        assert style.bg is None

    def test_fonts(self):
        assert _style("12").font == 2
        assert _style("12;10").font == 0

    def test_ideograms(self):
        assert _style("61").ideogram == 1
        assert _style("61;65").ideogram is None

    def test_extended_colors(self):
        assert _style("38;5;196").fg == Color("256", (196,))
        assert _style("48;2;10;20;30").bg == Color("truecolor", (10, 20, 30))

    def test_bright_colors(self):
        style = _style("91;102")
        assert style.fg == Color("bright", (1,))
        assert style.bg == Color("bright", (2,))

    def test_unknown_code_keeps_style(self):
        before = _style("1")
        style, error = apply_sgr(before, "1;58")
        assert error is ErrorCode.UNKNOWN_SGR
        assert style == before

    def test_truncated_extended_color(self):
        _, error = apply_sgr(EMPTY_STYLE, "38;2;1;2")
        assert error is ErrorCode.UNKNOWN_SGR

    def test_out_of_range_palette_index(self):
        _, error = apply_sgr(EMPTY_STYLE, "38;5;256")
        assert error is ErrorCode.UNKNOWN_SGR

    def test_unsupported_capabilities(self):
        assert apply_sgr(EMPTY_STYLE, "91", TermCap.NONE)[1] is ErrorCode.UNSUPPORTED_COLOR
        assert apply_sgr(EMPTY_STYLE, "38;5;1", TermCap.BRIGHT)[1] is ErrorCode.UNSUPPORTED_COLOR
        assert (
            apply_sgr(EMPTY_STYLE, "38;2;1;2;3", TermCap.COLOR256)[1]
            is ErrorCode.UNSUPPORTED_COLOR
        )

    def test_basic_colors_need_no_capability(self):
        assert apply_sgr(EMPTY_STYLE, "31", TermCap.NONE)[1] is None


class TestStyleCodes:
    """Tests for style_codes() and render_sgr()."""

    def test_sorted_by_code(self):
        assert style_codes(_style("31;4;1")) == ["1", "4", "31"]

    def test_extended_colors_render_with_parameters(self):
        assert style_codes(_style("48;5;7;38;2;1;2;3")) == ["38;2;1;2;3", "48;5;7"]

    def test_empty_style_has_no_codes(self):
        assert style_codes(EMPTY_STYLE) == []
        assert render_sgr([]) == ""

    def test_render_joined_and_normalized(self):
        assert render_sgr(["1", "31"]) == "\x1b[1;31m"
        assert render_sgr(["1", "31"], normalize=True) == "\x1b[1m\x1b[31m"


class TestTransitionCodes:
    """Tests for transition_codes()."""

    def test_no_change(self):
        style = _style("1;31")
        assert transition_codes(style, style) == []

    def test_switch_off_uses_specific_codes(self):
        assert transition_codes(_style("1;31"), EMPTY_STYLE) == ["22", "39"]

    def test_kept_group_member_is_restored(self):
        """22 clears both bold and faint, so faint is turned back on."""
        assert transition_codes(_style("1;2"), _style("2")) == ["22", "2"]

    def test_additions(self):
        assert transition_codes(_style("1"), _style("1;4;32")) == ["4", "32"]

    def test_offs_come_first(self):
        assert transition_codes(_style("1"), _style("3")) == ["22", "3"]
