"""CLI command modules."""

from nagoyabae.cli.commands import character, score, serve

__all__ = [
    "character",
    "score",
    "serve",
]
