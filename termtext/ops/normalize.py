"""Canonical re-emission of style sequences.

``"\\x1b[1;31mhi\\x1b[0m"`` becomes ``"\\x1b[1m\\x1b[31mhi\\x1b[22m\\x1b[39m"``:
one sequence per parameter, and specific "off" codes instead of a reset.
"""

from __future__ import annotations

import logging

from termtext.config import ScanOptions, build_options
from termtext.core.cancel import CancellationToken
from termtext.core.types import START, Classification
from termtext.ops._common import OneShotWarning, ResultList, Strings, as_elements, checkpoint
from termtext.sequences.buffer import WriteBuffer
from termtext.sequences.scanner import iter_tokens
from termtext.sequences.state import EMPTY_STATE
from termtext.sequences.writer import write_normalize_or_copy

logger = logging.getLogger(__name__)


def normalize_state(
    x: Strings,
    warn: bool = True,
    term_cap: object = "all",
    ctl: object = "all",
    cancel: CancellationToken | None = None,
) -> list[str | None]:
    """Rewrite style sequences in canonical form.

    Elements without style sequences are left as they are.
    """
    opts = build_options(ScanOptions, warn=warn, term_cap=term_cap, ctl=ctl)
    elements = as_elements(x)
    result = ResultList(elements)
    warning = OneShotWarning(opts.warn)
    buff = WriteBuffer()

    for i, element in enumerate(elements):
        checkpoint(cancel)
        if not element:
            continue

        has_style = False
        for token in iter_tokens(element, opts.families, opts.caps, warned=warning.warned):
            warning.check(token, i)
            has_style = has_style or token.kind is Classification.STYLE
        if not has_style:
            continue

        for writing in (False, True):
            if writing:
                buff.size()
            else:
                buff.reset(index=i)
            write_normalize_or_copy(
                buff, element, START, EMPTY_STATE, len(element), True,
                opts.families, opts.caps,
            )
        normalized = buff.getvalue()
        if normalized != element:
            result.set(i, normalized)

    logger.debug("Normalized %d of %d elements", result.changed, len(elements))
    return result.value
