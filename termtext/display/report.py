"""Rich rendering of unhandled-sequence reports."""

from __future__ import annotations

from collections.abc import Sequence

from rich.table import Table
from rich.text import Text

from termtext.ops.unhandled import UnhandledSequence

# Column header, cell style
_COLUMNS = (
    ("index", "cyan"),
    ("start", ""),
    ("end", ""),
    ("error", "bold red"),
    ("sequence", "yellow"),
    ("bytes", "dim"),
)


def unhandled_table(rows: Sequence[UnhandledSequence], title: str | None = None) -> Table:
    """Build a table with one line per unhandled sequence.

    Sequences are shown with their escapes spelled out (``'\\x1b[31'``) so the
    table itself never emits control characters.
    """
    table = Table(title=title, show_lines=False)
    for header, style in _COLUMNS:
        table.add_column(header, style=style, no_wrap=header == "sequence")

    for row in rows:
        table.add_row(
            str(row.index),
            str(row.start),
            str(row.end),
            Text(f"{row.error_code.value}: {row.error_code.description}"),
            Text(repr(row.esc)),
            f"{row.byte_start}-{row.byte_end}",
        )
    return table
