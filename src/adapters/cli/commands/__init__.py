"""Sous-package CLI commands - re-exporte les commandes publiques."""

from src.adapters.cli.commands.missing_commands import missing
from src.adapters.cli.commands.series_commands import (
    add_series,
    delete_episode,
    refresh,
)

__all__ = [
    "add_series",
    "delete_episode",
    "missing",
    "refresh",
]
