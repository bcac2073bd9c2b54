"""Forward-only scanner for strings with embedded control sequences.

``read_next`` advances by one logical unit (one character, or one complete
control sequence) and returns a ``Token`` describing what was consumed and the
format state after it. Callers thread ``token.end`` and ``token.state`` into
the next call; nothing is mutated in place.

Recognized grammar:

- C0 controls (other than tab, newline and ESC) and DEL: one character.
- ``ESC [ P* I* F``: CSI. SGR when ``F`` is ``m`` and ``P`` is digits, ``;``
  and ``:`` only.
- ``ESC ] ... (BEL | ESC \\)``: OSC. Hyperlink when it starts with ``8;``.
- ``ESC P|X|^|_ ... ESC \\``: DCS/SOS/PM/APC control strings.
- ``ESC I* F``: other escapes.

Malformed input never raises: the offending span is returned as an
``INVALID`` token with an ``ErrorCode`` and the scan continues after it.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass

from wcwidth import wcwidth

from termtext.core.types import (
    START,
    Classification,
    ControlFamily,
    ErrorCode,
    Position,
    TermCap,
    Token,
)
from termtext.sequences.sgr import apply_sgr
from termtext.sequences.state import EMPTY_STATE, FormatState, Hyperlink

ESC = "\x1b"
BEL = "\x07"
DEL = "\x7f"
PROTECTED_WS = frozenset("\t\n")

_SGR_PARAM_CHARS = frozenset("0123456789;:")
_STRING_INTRODUCERS = frozenset("PX^_")


def is_introducer(ch: str) -> bool:
    """True if ``ch`` may start a control sequence (C0 except tab/newline, or DEL)."""
    o = ord(ch)
    return (o < 0x20 and ch not in PROTECTED_WS) or o == 0x7F


def char_width(ch: str) -> int:
    """Terminal column width of one character (unprintables count as zero)."""
    return max(wcwidth(ch), 0)


def _utf8_len(text: str) -> int:
    if text.isascii():
        return len(text)
    return len(text.encode("utf-8", "surrogatepass"))


@dataclass(frozen=True)
class _Span:
    """A control sequence located in the source string."""

    end: int
    family: ControlFamily
    error: ErrorCode | None = None
    payload: str = ""


def _scan_csi(text: str, i: int) -> _Span:
    n = len(text)
    j = i + 2
    error = None
    seen_intermediate = False
    while j < n:
        o = ord(text[j])
        if 0x30 <= o <= 0x3F:
            if seen_intermediate:
                error = ErrorCode.MALFORMED_CSI
        elif 0x20 <= o <= 0x2F:
            seen_intermediate = True
        elif 0x40 <= o <= 0x7E:
            break
        else:
            # Disallowed character ends the sequence before it
            return _Span(j, ControlFamily.CSI, ErrorCode.MALFORMED_CSI)
        j += 1
    else:
        return _Span(n, ControlFamily.CSI, ErrorCode.UNTERMINATED)

    params = text[i + 2:j]
    if (
        text[j] == "m"
        and not seen_intermediate
        and all(c in _SGR_PARAM_CHARS for c in params)
    ):
        return _Span(j + 1, ControlFamily.SGR, error, params)
    return _Span(j + 1, ControlFamily.CSI, error)


def _scan_string(text: str, i: int, allow_bel: bool) -> tuple[int, int | None, ErrorCode | None]:
    """Find the terminator of an OSC or control string starting at ``i``.

    Returns (end of sequence, start of terminator, error). The terminator
    start is None when the string was not properly terminated.
    """
    n = len(text)
    j = i + 2
    while j < n:
        ch = text[j]
        if ch == BEL and allow_bel:
            return j + 1, j, None
        if ch == ESC:
            if j + 1 >= n:
                return n, None, ErrorCode.UNTERMINATED
            if text[j + 1] == "\\":
                return j + 2, j, None
            return j, None, ErrorCode.MALFORMED_OSC
        if ord(ch) < 0x20 or ch == DEL:
            return j, None, ErrorCode.MALFORMED_OSC
        j += 1
    return n, None, ErrorCode.UNTERMINATED


def _scan_osc(text: str, i: int) -> _Span:
    end, term, error = _scan_string(text, i, allow_bel=True)
    content = text[i + 2:term if term is not None else end]
    if not content.startswith("8;"):
        return _Span(end, ControlFamily.OSC, error)
    if error is None and content.count(";") < 2:
        error = ErrorCode.MALFORMED_OSC
    return _Span(end, ControlFamily.URL, error, content[2:])


def _scan_escape(text: str, i: int) -> _Span:
    n = len(text)
    if i + 1 >= n:
        return _Span(n, ControlFamily.ESC, ErrorCode.UNTERMINATED)
    nxt = text[i + 1]
    if nxt == "[":
        return _scan_csi(text, i)
    if nxt == "]":
        return _scan_osc(text, i)
    if nxt in _STRING_INTRODUCERS:
        end, _, error = _scan_string(text, i, allow_bel=False)
        return _Span(end, ControlFamily.ESC, error)
    j = i + 1
    while j < n and 0x20 <= ord(text[j]) <= 0x2F:
        j += 1
    if j >= n:
        return _Span(n, ControlFamily.ESC, ErrorCode.UNTERMINATED)
    if 0x30 <= ord(text[j]) <= 0x7E:
        return _Span(j + 1, ControlFamily.ESC)
    return _Span(j, ControlFamily.ESC, ErrorCode.MALFORMED_ESC)


def find_sequence(text: str, i: int) -> _Span:
    """Locate the control sequence that starts at ``text[i]``."""
    if text[i] == ESC:
        return _scan_escape(text, i)
    return _Span(i + 1, ControlFamily.C0)


def _plain_run_end(text: str, i: int) -> int:
    n = len(text)
    j = i + 1
    while j < n:
        ch = text[j]
        if ch == " " or ch in PROTECTED_WS or is_introducer(ch):
            break
        j += 1
    return j


def _text_token(
    text: str, kind: Classification, pos: Position, end: int, state: FormatState,
    family: ControlFamily | None = None,
) -> Token:
    span = text[pos.char:end]
    width = sum(char_width(c) for c in span)
    return Token(
        kind=kind,
        start=pos,
        end=pos.advance(end - pos.char, _utf8_len(span), width),
        state=state,
        family=family,
    )


def read_next(
    text: str,
    position: Position = START,
    state: FormatState = EMPTY_STATE,
    ctl: ControlFamily = ControlFamily.ALL,
    term_cap: TermCap = TermCap.ALL,
    *,
    single: bool = False,
    warned: bool = False,
) -> Token:
    """Consume one logical unit of ``text`` starting at ``position``.

    Args:
        text: String being scanned.
        position: Where to start; must be before the end of ``text``.
        state: Format state in effect at ``position``.
        ctl: Families to treat as controls; others degrade to plain text.
        term_cap: Color capabilities considered supported.
        single: Read exactly one character or sequence. Otherwise a run of
            plain characters is returned as one token.
        warned: Whether the caller already emitted its one-shot warning.

    Returns:
        The token for the consumed span.

    Raises:
        IndexError: If ``position`` is at or past the end of ``text``.
    """
    i = position.char
    if i >= len(text):
        raise IndexError(f"read_next at offset {i} of a {len(text)} character string")

    ch = text[i]
    if ch in PROTECTED_WS:
        return _text_token(text, Classification.PROTECTED_WS, position, i + 1, state)
    if ch == " ":
        return _text_token(text, Classification.WHITESPACE, position, i + 1, state)
    if not is_introducer(ch):
        end = i + 1 if single else _plain_run_end(text, i)
        return _text_token(text, Classification.PLAIN, position, end, state)

    span = find_sequence(text, i)
    if not span.family & ctl:
        return _text_token(
            text, Classification.PLAIN, position, span.end, state, span.family
        )

    error = span.error
    new_state = state
    if error is None:
        if span.family == ControlFamily.SGR:
            style, error = apply_sgr(state.style, span.payload, term_cap)
            if error is None:
                new_state = FormatState(style, state.link)
            kind = Classification.STYLE
        elif span.family == ControlFamily.URL:
            params, url = span.payload.split(";", 1)
            link = Hyperlink(url, params) if url else None
            new_state = FormatState(state.style, link)
            kind = Classification.HYPERLINK
        else:
            kind = Classification.OTHER
    if error is not None:
        kind = Classification.INVALID

    consumed = text[i:span.end]
    return Token(
        kind=kind,
        start=position,
        end=position.advance(span.end - i, _utf8_len(consumed)),
        state=new_state,
        error=error,
        warn=error is not None and not warned,
        family=span.family,
    )


def iter_tokens(
    text: str,
    ctl: ControlFamily = ControlFamily.ALL,
    term_cap: TermCap = TermCap.ALL,
    *,
    single: bool = False,
    position: Position = START,
    state: FormatState = EMPTY_STATE,
    warned: bool = False,
) -> Iterator[Token]:
    """Yield successive tokens from ``position`` to the end of ``text``.

    Only the first token with an error carries ``warn``, and none does when
    ``warned`` is already set.
    """
    while position.char < len(text):
        token = read_next(
            text, position, state, ctl, term_cap, single=single, warned=warned
        )
        warned = warned or token.warn
        position, state = token.end, token.state
        yield token
