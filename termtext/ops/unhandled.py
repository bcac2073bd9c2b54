"""Report control sequences that termtext cannot interpret.

Every family is scanned as a control here regardless of what other operations
are told to treat as controls, so the report covers everything a caller might
be surprised by.

Offsets in a report row count visible text by display width and every
character of a control sequence as one unit. ``start`` is inclusive and
``end`` exclusive.
"""

from __future__ import annotations

import logging
import warnings
from dataclasses import dataclass

from termtext.config import ScanOptions, build_options
from termtext.core.cancel import CancellationToken
from termtext.core.constants import MAX_INT
from termtext.core.errors import ConfigError, UnhandledLimitWarning
from termtext.core.types import ControlFamily, ErrorCode
from termtext.ops._common import Strings, as_elements, checkpoint
from termtext.sequences.scanner import iter_tokens

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class UnhandledSequence:
    """One problematic sequence.

    Attributes:
        index: 0-based index of the element holding the sequence.
        start: Offset of the sequence (inclusive).
        end: Offset just past the sequence (exclusive).
        error_code: Why the sequence was rejected.
        translated: Whether the element was re-encoded before scanning.
        esc: The offending sequence text.
        byte_start: UTF-8 byte offset of the sequence.
        byte_end: UTF-8 byte offset just past the sequence.
    """

    index: int
    start: int
    end: int
    error_code: ErrorCode
    translated: bool
    esc: str
    byte_start: int
    byte_end: int


def unhandled_ctl(
    x: Strings,
    term_cap: object = "all",
    limit: int = MAX_INT,
    cancel: CancellationToken | None = None,
) -> list[UnhandledSequence]:
    """List every invalid control sequence, in element then position order.

    Args:
        x: A string or a sequence of strings (None for missing elements).
        term_cap: Color capabilities considered supported.
        limit: Maximum number of rows. Hitting it emits UnhandledLimitWarning
            and returns what was collected so far.
        cancel: Optional cancellation token checked between elements.

    Returns:
        One row per problematic sequence; empty when there are none.

    Raises:
        ConfigError: If ``term_cap`` cannot be resolved or ``limit`` is negative.
    """
    if limit < 0:
        raise ConfigError(f"limit must be non-negative, got {limit}")
    opts = build_options(ScanOptions, term_cap=term_cap, ctl=ControlFamily.ALL)
    elements = as_elements(x)
    rows: list[UnhandledSequence] = []

    for i, element in enumerate(elements):
        checkpoint(cancel)
        if not element:
            continue

        ctl_chars = 0
        for token in iter_tokens(element, opts.families, opts.caps, single=True):
            start = token.start.width + ctl_chars
            if token.kind.is_control:
                ctl_chars += token.length
            if token.error is None:
                continue
            if len(rows) >= limit:
                warnings.warn(
                    f"Stopped reporting unhandled sequences after {limit} rows; "
                    f"raise limit to see more.",
                    UnhandledLimitWarning,
                    stacklevel=2,
                )
                logger.debug("Unhandled report truncated at element [%d]", i)
                return rows
            rows.append(
                UnhandledSequence(
                    index=i,
                    start=start,
                    end=token.end.width + ctl_chars,
                    error_code=token.error,
                    translated=False,
                    esc=token.text(element),
                    byte_start=token.start.byte,
                    byte_end=token.end.byte,
                )
            )

    logger.debug("Found %d unhandled sequences in %d elements", len(rows), len(elements))
    return rows
