"""SGR (Select Graphic Rendition) style model.

A ``Style`` is the set of rendering attributes that an SGR sequence can turn
on or off: simple attributes (bold, italic, ...), the font, the foreground and
background colors, and the ideogram decoration. ``apply_sgr`` folds the
parameters of one SGR sequence into a style; ``style_codes`` and
``transition_codes`` turn styles back into SGR parameters.

Usage:
    from termtext.sequences.sgr import Style, apply_sgr, render_sgr, style_codes

    style, error = apply_sgr(Style(), "1;31", TermCap.ALL)
    render_sgr(style_codes(style))  # '\\x1b[1;31m'
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import IntEnum

from termtext.core.types import ErrorCode, TermCap

SGR_START = "\x1b["
SGR_END = "m"
SGR_RESET = "\x1b[0m"


class Attr(IntEnum):
    """Boolean rendering attributes, valued by the SGR code that sets them."""

    BOLD = 1
    FAINT = 2
    ITALIC = 3
    UNDERLINE = 4
    BLINK = 5
    RAPID_BLINK = 6
    INVERSE = 7
    CONCEAL = 8
    CROSSED_OUT = 9
    FRAKTUR = 20
    DOUBLE_UNDERLINE = 21
    PROPORTIONAL = 26
    FRAMED = 51
    ENCIRCLED = 52
    OVERLINED = 53


# SGR "off" code -> attributes it clears
OFF_CODES: dict[int, frozenset[Attr]] = {
    22: frozenset({Attr.BOLD, Attr.FAINT}),
    23: frozenset({Attr.ITALIC, Attr.FRAKTUR}),
    24: frozenset({Attr.UNDERLINE, Attr.DOUBLE_UNDERLINE}),
    25: frozenset({Attr.BLINK, Attr.RAPID_BLINK}),
    27: frozenset({Attr.INVERSE}),
    28: frozenset({Attr.CONCEAL}),
    29: frozenset({Attr.CROSSED_OUT}),
    50: frozenset({Attr.PROPORTIONAL}),
    54: frozenset({Attr.FRAMED, Attr.ENCIRCLED}),
    55: frozenset({Attr.OVERLINED}),
}


@dataclass(frozen=True)
class Color:
    """A foreground or background color.

    Attributes:
        mode: One of "basic", "bright", "256", "truecolor".
        value: Palette index (basic/bright 0-7, 256 0-255) or (r, g, b).
    """

    mode: str
    value: tuple[int, ...]

    def code(self, background: bool = False) -> str:
        """Render as SGR parameters for the given layer."""
        if self.mode == "basic":
            return str((40 if background else 30) + self.value[0])
        if self.mode == "bright":
            return str((100 if background else 90) + self.value[0])
        lead = "48" if background else "38"
        if self.mode == "256":
            return f"{lead};5;{self.value[0]}"
        return f"{lead};2;" + ";".join(str(v) for v in self.value)

    @property
    def capability(self) -> TermCap:
        """Terminal capability required to display this color."""
        return _MODE_CAPS[self.mode]


_MODE_CAPS = {
    "basic": TermCap.NONE,
    "bright": TermCap.BRIGHT,
    "256": TermCap.COLOR256,
    "truecolor": TermCap.TRUECOLOR,
}


@dataclass(frozen=True)
class Style:
    """Active SGR attributes.

    Attributes:
        attrs: Boolean attributes currently on.
        font: 0 for the primary font, 1-9 for alternate fonts (SGR 11-19).
        fg: Foreground color, None for the terminal default.
        bg: Background color, None for the terminal default.
        ideogram: 0-4 for SGR 60-64, None when off.
    """

    attrs: frozenset[Attr] = field(default_factory=frozenset)
    font: int = 0
    fg: Color | None = None
    bg: Color | None = None
    ideogram: int | None = None

    @property
    def is_empty(self) -> bool:
        return self == EMPTY_STYLE


EMPTY_STYLE = Style()

_ATTR_CODES = frozenset(int(a) for a in Attr)


class _SgrError(Exception):
    def __init__(self, code: ErrorCode) -> None:
        self.code = code
        super().__init__(code.description)


def _read_color(params: list[int], i: int, term_cap: TermCap) -> tuple[Color, int]:
    """Decode a 38/48 extended color starting at ``params[i]``.

    Returns the color and the index of the last parameter consumed.
    """
    if i + 1 >= len(params):
        raise _SgrError(ErrorCode.UNKNOWN_SGR)
    kind = params[i + 1]
    if kind == 5:
        if i + 2 >= len(params) or params[i + 2] > 255:
            raise _SgrError(ErrorCode.UNKNOWN_SGR)
        color = Color("256", (params[i + 2],))
        end = i + 2
    elif kind == 2:
        rgb = params[i + 2:i + 5]
        if len(rgb) != 3 or any(v > 255 for v in rgb):
            raise _SgrError(ErrorCode.UNKNOWN_SGR)
        color = Color("truecolor", tuple(rgb))
        end = i + 4
    else:
        raise _SgrError(ErrorCode.UNKNOWN_SGR)
    _check_cap(color, term_cap)
    return color, end


def _check_cap(color: Color, term_cap: TermCap) -> None:
    if color.capability and not (term_cap & color.capability):
        raise _SgrError(ErrorCode.UNSUPPORTED_COLOR)


def _parse_params(params: str) -> list[int]:
    if not params:
        return [0]
    values = []
    for piece in params.split(";"):
        if not piece:
            values.append(0)
        elif piece.isdigit() and piece.isascii():
            values.append(int(piece))
        else:
            # Sub-parameters (``4:3``) are not interpreted
            raise _SgrError(ErrorCode.UNKNOWN_SGR)
    return values


def _fold(style: Style, params: list[int], term_cap: TermCap) -> Style:
    i = 0
    while i < len(params):
        code = params[i]
        if code == 0:
            style = EMPTY_STYLE
        elif code in _ATTR_CODES:
            style = replace(style, attrs=style.attrs | {Attr(code)})
        elif code in OFF_CODES:
            style = replace(style, attrs=style.attrs - OFF_CODES[code])
        elif code == 10:
            style = replace(style, font=0)
        elif 11 <= code <= 19:
            style = replace(style, font=code - 10)
        elif 30 <= code <= 37:
            style = replace(style, fg=Color("basic", (code - 30,)))
        elif 40 <= code <= 47:
            style = replace(style, bg=Color("basic", (code - 40,)))
        elif code in (38, 48):
            color, i = _read_color(params, i, term_cap)
            style = replace(style, **{"fg" if code == 38 else "bg": color})
        elif code == 39:
            style = replace(style, fg=None)
        elif code == 49:
            style = replace(style, bg=None)
        elif 60 <= code <= 64:
            style = replace(style, ideogram=code - 60)
        elif code == 65:
            style = replace(style, ideogram=None)
        elif 90 <= code <= 97 or 100 <= code <= 107:
            background = code >= 100
            color = Color("bright", (code - (100 if background else 90),))
            _check_cap(color, term_cap)
            style = replace(style, **{"bg" if background else "fg": color})
        else:
            raise _SgrError(ErrorCode.UNKNOWN_SGR)
        i += 1
    return style


def apply_sgr(
    style: Style, params: str, term_cap: TermCap = TermCap.ALL
) -> tuple[Style, ErrorCode | None]:
    """Fold the parameter string of one SGR sequence into ``style``.

    Args:
        style: Style in effect before the sequence.
        params: Parameter text between ``ESC [`` and ``m``.
        term_cap: Color capabilities considered supported.

    Returns:
        The new style and None, or the unchanged style and the error code of
        the first parameter that could not be applied.
    """
    try:
        return _fold(style, _parse_params(params), term_cap), None
    except _SgrError as e:
        return style, e.code


def _lead(code: str) -> int:
    return int(code.split(";", 1)[0])


def style_codes(style: Style) -> list[str]:
    """SGR parameters that establish ``style`` from the empty style."""
    codes = [str(int(a)) for a in style.attrs]
    if style.font:
        codes.append(str(10 + style.font))
    if style.fg is not None:
        codes.append(style.fg.code())
    if style.bg is not None:
        codes.append(style.bg.code(background=True))
    if style.ideogram is not None:
        codes.append(str(60 + style.ideogram))
    return sorted(codes, key=_lead)


def transition_codes(old: Style, new: Style) -> list[str]:
    """SGR parameters that turn ``old`` into ``new`` without a full reset.

    Off codes come first: an off code clears its whole group, so any member of
    the group that ``new`` keeps is switched back on afterwards.
    """
    offs: list[str] = []
    ons: set[Attr] = set(new.attrs - old.attrs)
    for off, group in OFF_CODES.items():
        if (old.attrs & group) - new.attrs:
            offs.append(str(off))
            ons |= new.attrs & group
    sets = [str(int(a)) for a in ons]
    if old.font != new.font:
        sets.append(str(10 + new.font))
    if old.fg != new.fg:
        sets.append(new.fg.code() if new.fg is not None else "39")
    if old.bg != new.bg:
        sets.append(new.bg.code(background=True) if new.bg is not None else "49")
    if old.ideogram != new.ideogram:
        sets.append(str(60 + new.ideogram) if new.ideogram is not None else "65")
    return offs + sorted(sets, key=_lead)


def render_sgr(codes: list[str], normalize: bool = False) -> str:
    """Render SGR parameters as escape sequences.

    Normalized output uses one sequence per parameter group; otherwise all
    parameters share a single sequence.
    """
    if not codes:
        return ""
    if normalize:
        return "".join(f"{SGR_START}{code}{SGR_END}" for code in codes)
    return f"{SGR_START}{';'.join(codes)}{SGR_END}"
