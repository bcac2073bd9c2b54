"""Element-wise operations over strings with embedded control sequences."""

from termtext.ops.measure import has_visible, visible_width
from termtext.ops.normalize import normalize_state
from termtext.ops.strip import strip_ctl
from termtext.ops.trim import trim_ws
from termtext.ops.unhandled import UnhandledSequence, unhandled_ctl
from termtext.ops.whitespace import collapse_whitespace

__all__ = [
    "strip_ctl",
    "collapse_whitespace",
    "trim_ws",
    "unhandled_ctl",
    "UnhandledSequence",
    "has_visible",
    "visible_width",
    "normalize_state",
]
