"""Argument parsing for the termtext CLI."""

import argparse
from pathlib import Path

from termtext.config import CTL_NAMES, TERM_CAP_NAMES


def add_files_arg(parser: argparse.ArgumentParser) -> None:
    """Add the positional input files argument."""
    parser.add_argument(
        "files",
        nargs="*",
        type=Path,
        help="Files to read lines from (default: stdin)",
    )


def add_term_cap_arg(parser: argparse.ArgumentParser) -> None:
    """Add --term-cap argument to a parser."""
    parser.add_argument(
        "--term-cap",
        action="append",
        dest="term_cap",
        choices=sorted(TERM_CAP_NAMES),
        metavar="CAP",
        help="Supported color capability (can be repeated; default: all)",
    )


def add_no_warn_arg(parser: argparse.ArgumentParser) -> None:
    """Add --no-warn argument to a parser."""
    parser.add_argument(
        "--no-warn",
        action="store_false",
        dest="warn",
        default=None,
        help="Do not warn about invalid control sequences",
    )


def add_ctl_arg(parser: argparse.ArgumentParser) -> None:
    """Add --ctl argument to a parser."""
    parser.add_argument(
        "--ctl",
        action="append",
        choices=sorted(CTL_NAMES),
        metavar="FAMILY",
        help=(
            "Control family to act on (can be repeated; default: all). "
            "'all' together with other families means all except those"
        ),
    )


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog="termtext",
        description="Control-sequence-aware text operations for terminal output",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Log debug information to stderr",
    )
    parser.add_argument(
        "--config",
        type=Path,
        metavar="PATH",
        help="JSON file with default options (overridden by command line flags)",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    # strip - remove control sequences
    strip_parser = subparsers.add_parser(
        "strip",
        help="Remove control sequences",
    )
    add_files_arg(strip_parser)
    add_ctl_arg(strip_parser)
    add_no_warn_arg(strip_parser)

    # collapse - collapse blank runs
    collapse_parser = subparsers.add_parser(
        "collapse",
        help="Collapse runs of whitespace",
    )
    add_files_arg(collapse_parser)
    add_ctl_arg(collapse_parser)
    add_term_cap_arg(collapse_parser)

    # trim - trim leading/trailing whitespace
    trim_parser = subparsers.add_parser(
        "trim",
        help="Trim leading and trailing whitespace",
    )
    add_files_arg(trim_parser)
    add_ctl_arg(trim_parser)
    add_term_cap_arg(trim_parser)
    add_no_warn_arg(trim_parser)
    trim_parser.add_argument(
        "--which",
        choices=["both", "left", "right"],
        help="Side to trim (default: both)",
    )
    trim_parser.add_argument(
        "--norm",
        action="store_true",
        default=None,
        help="Rewrite style sequences in canonical form",
    )

    # unhandled - report invalid sequences
    unhandled_parser = subparsers.add_parser(
        "unhandled",
        help="List control sequences that cannot be interpreted",
    )
    add_files_arg(unhandled_parser)
    add_term_cap_arg(unhandled_parser)
    unhandled_parser.add_argument(
        "--limit",
        type=int,
        help="Stop after this many rows",
    )

    # width - measure lines
    width_parser = subparsers.add_parser(
        "width",
        help="Print the visible length of each line",
    )
    add_files_arg(width_parser)
    add_ctl_arg(width_parser)
    add_term_cap_arg(width_parser)
    add_no_warn_arg(width_parser)
    width_parser.add_argument(
        "--type",
        choices=["chars", "width", "bytes"],
        help="What to count (default: chars)",
    )

    return parser.parse_args(argv)
