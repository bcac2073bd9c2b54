"""Trim leading and trailing whitespace around control sequences.

Controls in the trimmed regions are not simply dropped: the style and
hyperlink in effect where the kept body starts are re-established in front of
it, and whatever the trailing region changed (typically a reset) is written
after it. The output renders the same as the input minus the blanks.

Usage:
    from termtext import trim_ws

    trim_ws("\\x1b[31m  hi  \\x1b[0m")  # ['\\x1b[31mhi\\x1b[0m']
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from termtext.config import TrimOptions, build_options
from termtext.core.cancel import CancellationToken
from termtext.core.types import START, Position
from termtext.ops._common import OneShotWarning, ResultList, Strings, as_elements, checkpoint
from termtext.sequences.buffer import WriteBuffer
from termtext.sequences.scanner import is_introducer, read_next
from termtext.sequences.state import EMPTY_STATE, FormatState
from termtext.sequences.writer import (
    write_bridge,
    write_normalize_or_copy,
    write_sgr,
    write_url,
)

logger = logging.getLogger(__name__)

TRIM_BLANKS = frozenset(" \t\n\r")


@dataclass(frozen=True)
class Boundaries:
    """Where the kept body of an element starts and ends.

    Attributes:
        start: Position of the first kept character.
        end: Character offset just past the kept body.
        lead: Format state at ``start``.
        trail: Format state where the trailing blank run begins.
        last: Format state at the end of the string.
    """

    start: Position
    end: int
    lead: FormatState
    trail: FormatState
    last: FormatState


def _skip_blank(pos: Position, ch: str) -> Position:
    return pos.advance(1, 1, 1 if ch == " " else 0)


def find_boundaries(
    text: str, opts: TrimOptions, warning: OneShotWarning, index: int = 0
) -> Boundaries:
    """Scan ``text`` for the trim boundaries requested by ``opts.which``."""
    n = len(text)
    pos, state = START, EMPTY_STATE
    warned = warning.warned

    # Leading blanks and the controls among them
    skipped_blank = False
    if opts.which in ("both", "left"):
        while pos.char < n:
            ch = text[pos.char]
            if ch in TRIM_BLANKS:
                pos = _skip_blank(pos, ch)
                skipped_blank = True
                continue
            if not is_introducer(ch):
                break
            token = read_next(
                text, pos, state, opts.families, opts.caps, single=True, warned=warned
            )
            warning.check(token, index)
            warned = warning.warned
            if not token.kind.is_recognized:
                break
            pos, state = token.end, token.state
    # Leading controls with no blank among them stay in the body
    start, lead = (pos, state) if skipped_blank else (START, EMPTY_STATE)

    # Trailing blank run: the first blank with nothing but blanks and
    # controls after it
    end: int | None = None
    trail = last = EMPTY_STATE
    if opts.which in ("both", "right"):
        while pos.char < n:
            ch = text[pos.char]
            if ch in TRIM_BLANKS:
                if end is None:
                    end, trail = pos.char, state
                pos = _skip_blank(pos, ch)
                continue
            token = read_next(
                text, pos, state, opts.families, opts.caps,
                single=is_introducer(ch), warned=warned,
            )
            warning.check(token, index)
            warned = warning.warned
            if not token.kind.is_recognized:
                end = None
            pos, state = token.end, token.state
        last = state

    if end is None:
        end, trail = n, last
    return Boundaries(start=start, end=end, lead=lead, trail=trail, last=last)


def _write_trimmed(
    buff: WriteBuffer, text: str, bounds: Boundaries, opts: TrimOptions
) -> None:
    if bounds.start.char:
        write_sgr(buff, bounds.lead.style, opts.norm)
        write_url(buff, bounds.lead.link)
    write_normalize_or_copy(
        buff, text, bounds.start, bounds.lead, bounds.end, opts.norm,
        opts.families, opts.caps,
    )
    if bounds.end:
        write_bridge(buff, bounds.trail, bounds.last, opts.norm)


def trim_ws(
    x: Strings,
    which: str = "both",
    warn: bool = True,
    term_cap: object = "all",
    ctl: object = "all",
    norm: bool = False,
    cancel: CancellationToken | None = None,
) -> list[str | None]:
    """Trim leading and/or trailing whitespace (space, tab, newline, CR).

    Args:
        x: A string or a sequence of strings (None for missing elements).
        which: "both", "left" or "right".
        warn: Warn once if an invalid sequence is encountered.
        term_cap: Color capabilities considered supported.
        ctl: Control families treated as controls.
        norm: Re-emit style sequences in the kept body in canonical form.
        cancel: Optional cancellation token checked between elements.

    Returns:
        The trimmed strings; the input list itself when nothing was trimmed.
    """
    opts = build_options(
        TrimOptions, which=which, warn=warn, term_cap=term_cap, ctl=ctl, norm=norm
    )
    elements = as_elements(x)
    result = ResultList(elements)
    warning = OneShotWarning(opts.warn)
    buff = WriteBuffer()

    for i, element in enumerate(elements):
        checkpoint(cancel)
        if element is None:
            continue

        bounds = find_boundaries(element, opts, warning, i)
        if not bounds.start.char and bounds.end == len(element):
            continue

        # Two pass: measure, then write into a buffer of exactly that size
        for writing in (False, True):
            if writing:
                buff.size()
            else:
                buff.reset(index=i)
            _write_trimmed(buff, element, bounds, opts)
        result.set(i, buff.getvalue())

    logger.debug("Trimmed %d of %d elements", result.changed, len(elements))
    return result.value
