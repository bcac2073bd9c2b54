"""Command line interface for termtext."""

from termtext.cli.main import main

__all__ = ["main"]
