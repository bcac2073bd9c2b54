"""Format state carried through a scan: active style and hyperlink."""

from __future__ import annotations

from dataclasses import dataclass, field

from termtext.sequences.sgr import EMPTY_STYLE, Style


@dataclass(frozen=True)
class Hyperlink:
    """An active OSC 8 hyperlink.

    Attributes:
        url: Link target.
        params: Raw ``key=value:key=value`` parameter field (often ``id=...``).
    """

    url: str
    params: str = ""


@dataclass(frozen=True)
class FormatState:
    """Fold of every style and hyperlink sequence seen so far in one scan.

    Attributes:
        style: Active SGR attributes.
        link: Active hyperlink, None when no link is open.
    """

    style: Style = field(default_factory=Style)
    link: Hyperlink | None = None

    @property
    def is_empty(self) -> bool:
        """True when no style is active and no link is open."""
        return self.style == EMPTY_STYLE and self.link is None


EMPTY_STATE = FormatState()
