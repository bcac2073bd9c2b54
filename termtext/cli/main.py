"""Entry point for the termtext CLI.

Each command reads lines from the given files (or stdin), applies one
operation, and writes one result per line to stdout. The ``unhandled``
command prints a table instead and exits with status 1 when it finds
anything.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from termtext.cli.arg_parser import parse_args
from termtext.config import (
    ScanOptions,
    TrimOptions,
    WidthOptions,
    build_options,
    load_options_file,
)
from termtext.core.constants import MAX_INT
from termtext.core.errors import TermTextError
from termtext.display import get_console, unhandled_table
from termtext.ops import (
    collapse_whitespace,
    strip_ctl,
    trim_ws,
    unhandled_ctl,
    visible_width,
)

logger = logging.getLogger(__name__)

COMMAND_OPTIONS: dict[str, type[ScanOptions]] = {
    "strip": ScanOptions,
    "collapse": ScanOptions,
    "trim": TrimOptions,
    "unhandled": ScanOptions,
    "width": WidthOptions,
}

# Options a flag or the options file may set
OPTION_KEYS = ("ctl", "term_cap", "warn", "which", "norm", "type")


def _print_error(message: str) -> None:
    """Print error message to stderr."""
    print(f"Error: {message}", file=sys.stderr)


def _print_lines(lines: list[str | None]) -> None:
    sys.stdout.write("".join(f"{line}\n" for line in lines))


def configure_logging(verbose: bool) -> None:
    """Send termtext debug logging to stderr when ``verbose`` is set."""
    if not verbose:
        return
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(
        "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    ))
    pkg_logger = logging.getLogger("termtext")
    pkg_logger.setLevel(logging.DEBUG)
    # Remove any existing handlers to avoid duplicates on reconfigure
    pkg_logger.handlers.clear()
    pkg_logger.addHandler(handler)
    pkg_logger.propagate = False


def split_lines(text: str) -> list[str]:
    """Split on newlines only; other control characters stay in the line."""
    lines = text.split("\n")
    if lines and lines[-1] == "":
        lines.pop()
    return lines


def read_lines(files: list[Path]) -> list[str]:
    """Read input lines from ``files``, or from stdin when none are given.

    Raises:
        TermTextError: If a file cannot be read.
    """
    if not files:
        return split_lines(sys.stdin.read())
    lines: list[str] = []
    for path in files:
        try:
            lines.extend(split_lines(path.read_text(encoding="utf-8")))
        except (OSError, UnicodeDecodeError) as e:
            raise TermTextError(f"Failed to read {path}: {e}") from e
    return lines


def resolve_options(args: argparse.Namespace) -> ScanOptions:
    """Merge the options file (if any) with command line flags.

    Raises:
        ConfigError: If the file or the merged options are invalid.
    """
    model = COMMAND_OPTIONS[args.command]
    values: dict[str, object] = {}
    if args.config is not None:
        values.update(load_options_file(args.config, model))
    for key in OPTION_KEYS:
        value = getattr(args, key, None)
        if value is not None:
            values[key] = value
    return build_options(model, **values)


def cmd_strip(lines: list[str], opts: ScanOptions) -> int:
    _print_lines(strip_ctl(lines, ctl=opts.ctl, warn=opts.warn))
    return 0


def cmd_collapse(lines: list[str], opts: ScanOptions) -> int:
    _print_lines(collapse_whitespace(lines, ctl=opts.ctl, term_cap=opts.term_cap))
    return 0


def cmd_trim(lines: list[str], opts: TrimOptions) -> int:
    _print_lines(trim_ws(
        lines,
        which=opts.which,
        warn=opts.warn,
        term_cap=opts.term_cap,
        ctl=opts.ctl,
        norm=opts.norm,
    ))
    return 0


def cmd_width(lines: list[str], opts: WidthOptions) -> int:
    widths = visible_width(
        lines, type=opts.type, warn=opts.warn, term_cap=opts.term_cap, ctl=opts.ctl
    )
    _print_lines([str(w) for w in widths])
    return 0


def cmd_unhandled(lines: list[str], opts: ScanOptions, limit: int | None) -> int:
    """Print a table of unhandled sequences.

    Returns:
        Exit code: 0 when every sequence was understood, 1 otherwise.
    """
    rows = unhandled_ctl(
        lines, term_cap=opts.term_cap, limit=MAX_INT if limit is None else limit
    )
    console = get_console()
    if not rows:
        console.print("[green]No unhandled sequences[/]")
        return 0
    console.print(unhandled_table(rows))
    return 1


def run_command(args: argparse.Namespace, lines: list[str], opts: ScanOptions) -> int:
    """Dispatch a parsed command. Returns the exit code."""
    logger.debug("Running %s on %d lines", args.command, len(lines))
    if args.command == "strip":
        return cmd_strip(lines, opts)
    if args.command == "collapse":
        return cmd_collapse(lines, opts)
    if args.command == "trim":
        return cmd_trim(lines, opts)
    if args.command == "width":
        return cmd_width(lines, opts)
    if args.command == "unhandled":
        return cmd_unhandled(lines, opts, args.limit)
    _print_error(f"Unknown command: {args.command}")
    return 1


def main(argv: list[str] | None = None) -> None:
    """Entry point for the termtext CLI."""
    args = parse_args(argv)
    configure_logging(args.verbose)
    try:
        opts = resolve_options(args)
        lines = read_lines(args.files)
        exit_code = run_command(args, lines, opts)
    except TermTextError as e:
        _print_error(e.message)
        exit_code = 1
    raise SystemExit(exit_code)


if __name__ == "__main__":
    main()
