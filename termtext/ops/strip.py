"""Remove control sequences from strings.

Text, spaces, tabs and newlines are kept; every style, hyperlink, other
recognized and invalid control span is dropped. Families excluded from
``ctl`` are left in place as plain text.

Usage:
    from termtext import strip_ctl

    strip_ctl("\\x1b[31mRed\\x1b[0m  Text")  # ['Red  Text']
"""

from __future__ import annotations

import logging

from termtext.config import ScanOptions, build_options
from termtext.core.cancel import CancellationToken
from termtext.ops._common import OneShotWarning, ResultList, Strings, as_elements, checkpoint
from termtext.sequences.buffer import WriteBuffer
from termtext.sequences.scanner import iter_tokens

logger = logging.getLogger(__name__)


def strip_ctl(
    x: Strings,
    ctl: object = "all",
    warn: bool = True,
    cancel: CancellationToken | None = None,
) -> list[str | None]:
    """Strip control sequences.

    Args:
        x: A string or a sequence of strings (None for missing elements).
        ctl: Control families to strip (see ``termtext.config.schema``).
        warn: Warn once if an invalid sequence is encountered.
        cancel: Optional cancellation token checked between elements.

    Returns:
        The stripped strings. When no element contains a control sequence the
        input list itself is returned.

    Raises:
        InputTypeError: If ``x`` is not a string or a sequence of strings.
        ConfigError: If ``ctl`` cannot be resolved.
    """
    opts = build_options(ScanOptions, ctl=ctl, warn=warn)
    elements = as_elements(x)
    result = ResultList(elements)
    warning = OneShotWarning(opts.warn)

    buff: WriteBuffer | None = None

    for i, element in enumerate(elements):
        checkpoint(cancel)
        if not element:
            continue

        has_ctl = False
        copied_to = 0
        for token in iter_tokens(element, opts.families, warned=warning.warned):
            warning.check(token, i)
            if not token.kind.is_control:
                continue
            if buff is None:
                # Sized once for the longest element, reused for every element
                buff = WriteBuffer()
                buff.reserve(max(len(e) for e in elements if e))
            if not has_ctl:
                has_ctl = True
                buff.clear(index=i)
            buff.write(element[copied_to:token.start.char])
            copied_to = token.end.char

        if has_ctl:
            buff.write(element[copied_to:])
            result.set(i, buff.getvalue())

    logger.debug("Stripped controls from %d of %d elements", result.changed, len(elements))
    return result.value
