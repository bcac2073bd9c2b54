"""Option validation and loading."""

from termtext.config.loader import build_options, load_options_file
from termtext.config.schema import (
    CTL_NAMES,
    TERM_CAP_NAMES,
    ScanOptions,
    TrimOptions,
    WidthOptions,
)

__all__ = [
    "CTL_NAMES",
    "TERM_CAP_NAMES",
    "ScanOptions",
    "TrimOptions",
    "WidthOptions",
    "build_options",
    "load_options_file",
]
