"""Shared pytest fixtures and configuration for pytest."""

import io

import pytest
from rich.console import Console

from termtext.display import console as console_module
from termtext.display import set_console


@pytest.fixture
def console_output():
    """Route the shared Rich console into a buffer; yields the buffer."""
    previous = console_module._console
    buffer = io.StringIO()
    set_console(Console(file=buffer, width=200, force_terminal=False, color_system=None))
    yield buffer
    set_console(previous)


@pytest.fixture
def write_lines(tmp_path):
    """Write lines to a UTF-8 file and return its path."""

    def _write(*lines: str, name: str = "input.txt"):
        path = tmp_path / name
        path.write_text("".join(f"{line}\n" for line in lines), encoding="utf-8")
        return path

    return _write
