"""Emit style and hyperlink sequences into a WriteBuffer.

A *bridge* is the shortest run of sequences that moves a terminal from one
``FormatState`` to another across text that was removed from the output.
"""

from __future__ import annotations

from termtext.core.types import Classification, ControlFamily, Position, TermCap
from termtext.sequences.buffer import WriteBuffer
from termtext.sequences.scanner import iter_tokens
from termtext.sequences.sgr import SGR_RESET, Style, render_sgr, style_codes, transition_codes
from termtext.sequences.state import FormatState, Hyperlink

OSC_START = "\x1b]"
ST = "\x1b\\"


def url_sequence(link: Hyperlink | None) -> str:
    """OSC 8 sequence opening ``link``, or closing the active link when None."""
    if link is None:
        return f"{OSC_START}8;;{ST}"
    return f"{OSC_START}8;{link.params};{link.url}{ST}"


def style_bridge(old: Style, new: Style, normalize: bool = False) -> str:
    """Sequences turning ``old`` into ``new``.

    Without normalization, a transition to the empty style is a plain reset.
    """
    if old == new:
        return ""
    if new.is_empty and not normalize:
        return SGR_RESET
    return render_sgr(transition_codes(old, new), normalize)


def write_sgr(buff: WriteBuffer, style: Style, normalize: bool = False) -> None:
    """Write the sequences establishing ``style`` from no formatting."""
    buff.write(render_sgr(style_codes(style), normalize))


def write_url(buff: WriteBuffer, link: Hyperlink | None) -> None:
    """Write the sequence opening ``link`` (nothing when no link is active)."""
    if link is not None:
        buff.write(url_sequence(link))


def write_bridge(
    buff: WriteBuffer, old: FormatState, new: FormatState, normalize: bool = False
) -> None:
    """Write the bridge from ``old`` to ``new``."""
    buff.write(style_bridge(old.style, new.style, normalize))
    if old.link != new.link:
        buff.write(url_sequence(new.link))


def write_normalize_or_copy(
    buff: WriteBuffer,
    text: str,
    start: Position,
    state: FormatState,
    end: int,
    normalize: bool,
    ctl: ControlFamily = ControlFamily.ALL,
    term_cap: TermCap = TermCap.ALL,
) -> None:
    """Write ``text[start:end]``, optionally with canonical SGR sequences.

    With ``normalize`` every contiguous group of style sequences is replaced by
    the normalized transition between the styles before and after the group.
    Groups with no net effect disappear. Everything else is copied verbatim.

    Args:
        buff: Destination buffer.
        text: Source string.
        start: Position of the first character to write.
        state: Format state in effect at ``start``.
        end: Character offset to stop at.
        normalize: Rewrite style sequences canonically.
        ctl: Families treated as controls.
        term_cap: Color capabilities considered supported.
    """
    if not normalize:
        buff.write(text[start.char:end])
        return

    group_start: Style | None = None
    for token in iter_tokens(text, ctl, term_cap, position=start, state=state):
        if token.start.char >= end:
            break
        if token.kind is Classification.STYLE:
            if group_start is None:
                group_start = state.style
        else:
            if group_start is not None:
                buff.write(style_bridge(group_start, state.style, normalize=True))
                group_start = None
            buff.write(token.text(text))
        state = token.state
    if group_start is not None:
        buff.write(style_bridge(group_start, state.style, normalize=True))
