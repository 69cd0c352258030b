"""CLI command modules."""

from dayboard.cli.commands import config, init, todo

__all__ = [
    "config",
    "init",
    "todo",
]
