"""Allow ``python -m termtext``."""

from termtext.cli.main import main

main()
