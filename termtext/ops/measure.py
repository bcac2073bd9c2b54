"""Control-aware measurements.

Both functions skip style, hyperlink, other and invalid control spans; what
is left is the text a terminal would show.
"""

from __future__ import annotations

import logging

from termtext.config import ScanOptions, WidthOptions, build_options
from termtext.core.types import Classification, Token
from termtext.ops._common import OneShotWarning, Strings, as_elements
from termtext.sequences.scanner import iter_tokens

logger = logging.getLogger(__name__)

# Missing elements measure as this text unless keep_na is set
NA_TEXT = "NA"


def _has_visible(text: str, opts: ScanOptions, warning: OneShotWarning, index: int) -> bool:
    for token in iter_tokens(
        text, opts.families, opts.caps, single=True, warned=warning.warned
    ):
        warning.check(token, index)
        if not token.kind.is_control and token.kind is not Classification.PROTECTED_WS:
            return True
    return False


def has_visible(
    x: Strings,
    keep_na: bool = False,
    warn: bool = True,
    term_cap: object = "all",
    ctl: object = "all",
) -> list[bool | None]:
    """True for each element holding more than controls, tabs and newlines.

    Args:
        x: A string or a sequence of strings (None for missing elements).
        keep_na: Report missing elements as None instead of True.
        warn: Warn once if an invalid sequence is encountered.
        term_cap: Color capabilities considered supported.
        ctl: Control families treated as controls.
    """
    opts = build_options(
        ScanOptions, keep_na=keep_na, warn=warn, term_cap=term_cap, ctl=ctl
    )
    warning = OneShotWarning(opts.warn)
    result: list[bool | None] = []
    for i, element in enumerate(as_elements(x)):
        if element is None:
            result.append(None if opts.keep_na else True)
        else:
            result.append(_has_visible(element, opts, warning, i))
    return result


def _token_size(token: Token, what: str) -> int:
    if what == "width":
        return token.end.width - token.start.width
    if what == "bytes":
        return token.end.byte - token.start.byte
    return token.length


def visible_width(
    x: Strings,
    type: str = "chars",
    keep_na: bool = False,
    warn: bool = True,
    term_cap: object = "all",
    ctl: object = "all",
) -> list[int | None]:
    """Length of each element with control sequences excluded.

    Args:
        x: A string or a sequence of strings (None for missing elements).
        type: "chars" for characters, "width" for terminal columns,
            "bytes" for UTF-8 bytes.
        keep_na: Report missing elements as None instead of the size of "NA".
        warn: Warn once if an invalid sequence is encountered.
        term_cap: Color capabilities considered supported.
        ctl: Control families treated as controls.
    """
    opts = build_options(
        WidthOptions, type=type, keep_na=keep_na, warn=warn, term_cap=term_cap, ctl=ctl
    )
    warning = OneShotWarning(opts.warn)
    result: list[int | None] = []
    for i, element in enumerate(as_elements(x)):
        if element is None:
            if opts.keep_na:
                result.append(None)
                continue
            element = NA_TEXT
        size = 0
        for token in iter_tokens(element, opts.families, opts.caps, warned=warning.warned):
            warning.check(token, i)
            if not token.kind.is_control:
                size += _token_size(token, opts.type)
        result.append(size)

    logger.debug("Measured %d elements by %s", len(result), opts.type)
    return result
