"""Collapse runs of blanks (space, tab, newline) while passing controls through.

Rules, applied to each run of blanks:

- a run becomes one space;
- a run may keep two spaces after a sentence end (``.``, ``!`` or ``?``,
  optionally followed by one of ``"``, ``'``, ``)``);
- a run holding two or more newlines becomes exactly two newlines, anchored
  at the first newline of the run; this overrides the sentence-end rule;
- leading and trailing runs are dropped.

Recognized control sequences inside a run do not end it. They are held back
and written verbatim right after the run's separator. A control sequence
outside a run is copied as is and ends the leading-blank bookkeeping.

Usage:
    from termtext import collapse_whitespace

    collapse_whitespace(["a   b", "Hi.  There"])  # ['a b', 'Hi.  There']
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from termtext.config import ScanOptions, build_options
from termtext.core.cancel import CancellationToken
from termtext.core.constants import SENTENCE_CLOSERS, SENTENCE_END
from termtext.core.types import ControlFamily, Position, TermCap
from termtext.ops._common import ResultList, Strings, as_elements, checkpoint
from termtext.sequences.buffer import WriteBuffer
from termtext.sequences.scanner import is_introducer, read_next
from termtext.sequences.state import EMPTY_STATE

logger = logging.getLogger(__name__)

BLANKS = frozenset(" \t\n")


@dataclass
class _Run:
    """Bookkeeping for the blank run being scanned."""

    to_strip: int = 0  # characters (blanks and held controls) in the run
    to_strip_at_nl: int = 0  # ``to_strip`` when the first newline was seen
    separators: int = 0  # spaces to keep: 0, 1 or 2
    newlines: int = 0
    first_newline: int = 0
    has_tab_or_nl: bool = False
    leading: bool = True  # still inside the leading blanks of the element


class _Collapser:
    """Collapses one element; writes only once a run needs rewriting."""

    def __init__(
        self, text: str, buff: WriteBuffer, index: int, ctl: ControlFamily, term_cap: TermCap
    ) -> None:
        self.text = text
        self.buff = buff
        self.index = index
        self.ctl = ctl
        self.term_cap = term_cap
        self.writing = False
        self.copied_to = 0

    def _control_length(self, j: int) -> int:
        """Length of the recognized control sequence at ``j``, 0 if none."""
        token = read_next(
            self.text, Position(char=j), EMPTY_STATE, self.ctl, self.term_cap, single=True
        )
        return token.length if token.kind.is_recognized else 0

    def _flush(self, j: int, run: _Run, at_end: bool) -> None:
        """Rewrite the run that ends at ``j``."""
        if not self.writing:
            self.writing = True
            self.buff.reserve(len(self.text))
            self.buff.clear(index=self.index)

        separator = " "
        copy_to = j
        to_strip = run.to_strip
        separators = run.separators
        if run.newlines > 1:
            # Paragraph break, anchored at the first newline of the run
            copy_to = run.first_newline
            to_strip = run.to_strip_at_nl
            separators = 2
            separator = "\n"

        copy_end = copy_to - to_strip
        self.buff.write(self.text[self.copied_to:copy_end])
        if not at_end:
            self.buff.write(separator * min(separators, 2))

        # Controls held back inside the run follow the separator
        k = copy_end
        run_end = copy_end + run.to_strip
        while k < run_end:
            if is_introducer(self.text[k]):
                length = self._control_length(k) or 1
                self.buff.write(self.text[k:k + length])
                k += length
            else:
                k += 1
        self.copied_to = j

    def collapse(self) -> str | None:
        """Return the collapsed text, or None when nothing needed rewriting."""
        text = self.text
        n = len(text)
        run = _Run()
        para_start = True
        space_prev = punct_prev = punct_prev_prev = False

        j = 0
        while j <= n:
            ch = text[j] if j < n else ""
            at_end = j == n
            newline = ch == "\n"
            tab = ch == "\t"
            reset = False

            if newline or tab:
                run.has_tab_or_nl = True
            if newline:
                if not run.newlines:
                    run.first_newline = j
                    run.to_strip_at_nl = run.to_strip
                run.newlines += 1

            space = ch in BLANKS and not at_end
            if space and not para_start:
                if not space_prev:
                    run.separators = 1
                elif punct_prev_prev:
                    run.separators = 2

            special_len = self._control_length(j) if not at_end and is_introducer(ch) else 0
            special = special_len > 0

            must_flush = not space and not special and (
                (run.to_strip and run.leading)
                or run.to_strip > 2
                or (run.to_strip > 1 and not punct_prev)
                or run.has_tab_or_nl
            )
            if must_flush or (at_end and (self.writing or run.separators)):
                self._flush(j, run, at_end)
                reset = True
            elif space:
                run.to_strip += 1
            elif special:
                if space_prev:
                    # Held back as part of the run
                    run.to_strip += special_len
                    space = True
                j += special_len - 1
                ch = text[j]
            else:
                reset = True

            if reset:
                run = _Run(leading=False)
            para_start = run.newlines > 1
            space_prev = space
            punct_prev_prev = punct_prev or (special and punct_prev_prev)
            punct_prev = ch in SENTENCE_END or (punct_prev and ch in SENTENCE_CLOSERS)
            j += 1

        return self.buff.getvalue() if self.writing else None


def collapse_whitespace(
    x: Strings,
    ctl: object = "all",
    term_cap: object = "all",
    cancel: CancellationToken | None = None,
) -> list[str | None]:
    """Collapse blank runs in each element.

    Sequences are copied, never interpreted, so no warnings are emitted.

    Args:
        x: A string or a sequence of strings (None for missing elements).
        ctl: Control families that may sit inside a blank run.
        term_cap: Color capabilities considered supported.
        cancel: Optional cancellation token checked between elements.

    Returns:
        The collapsed strings; the input list itself when nothing changed.
    """
    opts = build_options(ScanOptions, ctl=ctl, term_cap=term_cap, warn=False)
    elements = as_elements(x)
    result = ResultList(elements)
    buff = WriteBuffer()

    for i, element in enumerate(elements):
        checkpoint(cancel)
        if not element:
            continue
        collapsed = _Collapser(element, buff, i, opts.families, opts.caps).collapse()
        if collapsed is not None:
            result.set(i, collapsed)

    logger.debug("Collapsed whitespace in %d of %d elements", result.changed, len(elements))
    return result.value
