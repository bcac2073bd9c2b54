"""Pydantic models for termtext call options.

Family and capability options accept the same spellings everywhere:

- a flag value (``ControlFamily.SGR | ControlFamily.URL``),
- a name (``"sgr"``) or a list of names (``["sgr", "url"]``),
- ``"all"``; a list holding ``"all"`` plus other names means all *except*
  those names (``["all", "url"]`` is every family but hyperlinks),
- for capabilities, additionally ``"none"``.
"""

from __future__ import annotations

from collections.abc import Iterable
from enum import IntFlag
from typing import Literal

from pydantic import BaseModel, ConfigDict, field_validator

from termtext.core.types import ControlFamily, TermCap

CTL_NAMES: dict[str, ControlFamily] = {
    "c0": ControlFamily.C0,
    "sgr": ControlFamily.SGR,
    "csi": ControlFamily.CSI,
    "esc": ControlFamily.ESC,
    "url": ControlFamily.URL,
    "osc": ControlFamily.OSC,
    "all": ControlFamily.ALL,
}

TERM_CAP_NAMES: dict[str, TermCap] = {
    "bright": TermCap.BRIGHT,
    "256": TermCap.COLOR256,
    "truecolor": TermCap.TRUECOLOR,
    "all": TermCap.ALL,
    "none": TermCap.NONE,
}


def _parse_flags(
    value: object, names: dict[str, IntFlag], flag_type: type[IntFlag], what: str
) -> int:
    """Resolve a flag value, name, or list of names to an int bit mask."""
    if isinstance(value, flag_type):
        return int(value)
    if isinstance(value, bool):
        raise ValueError(f"{what} must be a name, a list of names, or a flag value")
    if isinstance(value, int):
        if value & ~int(names["all"]):
            raise ValueError(f"{what} has unknown bits set: {value}")
        return value
    if isinstance(value, str):
        value = [value]
    if not isinstance(value, Iterable):
        raise ValueError(f"{what} must be a name, a list of names, or a flag value")

    selected = []
    for item in value:
        key = str(item).lower()
        if key not in names:
            valid = ", ".join(sorted(names))
            raise ValueError(f"Unknown {what} {item!r} (valid: {valid})")
        selected.append(key)

    mask = 0
    for key in selected:
        if key != "all":
            mask |= int(names[key])
    if "all" in selected:
        # "all" with others negates the others
        return int(names["all"]) & ~mask
    return mask


class ScanOptions(BaseModel):
    """Options shared by every operation.

    Attributes:
        ctl: Bit mask of ``ControlFamily`` values treated as controls.
        term_cap: Bit mask of ``TermCap`` values the terminal supports.
        warn: Emit at most one warning per call for invalid sequences.
        keep_na: Missing inputs stay missing in measuring operations.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    ctl: int = int(ControlFamily.ALL)
    term_cap: int = int(TermCap.ALL)
    warn: bool = True
    keep_na: bool = False

    @field_validator("ctl", mode="before")
    @classmethod
    def parse_ctl(cls, v: object) -> int:
        """Resolve control family names to a mask."""
        return _parse_flags(v, CTL_NAMES, ControlFamily, "ctl")

    @field_validator("term_cap", mode="before")
    @classmethod
    def parse_term_cap(cls, v: object) -> int:
        """Resolve terminal capability names to a mask."""
        return _parse_flags(v, TERM_CAP_NAMES, TermCap, "term_cap")

    @property
    def families(self) -> ControlFamily:
        return ControlFamily(self.ctl)

    @property
    def caps(self) -> TermCap:
        return TermCap(self.term_cap)


class TrimOptions(ScanOptions):
    """Options for trim_ws.

    Attributes:
        which: Side(s) to trim.
        norm: Re-emit style sequences of the kept body in canonical form.
    """

    which: Literal["both", "left", "right"] = "both"
    norm: bool = False


class WidthOptions(ScanOptions):
    """Options for visible_width.

    Attributes:
        type: What to count: characters, terminal columns, or UTF-8 bytes.
    """

    type: Literal["chars", "width", "bytes"] = "chars"
