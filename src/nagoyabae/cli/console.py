"""Shared console utilities for CLI commands."""

from __future__ import annotations

from typing import TYPE_CHECKING

import typer
from rich.console import Console

if TYPE_CHECKING:
    from pathlib import Path

    from nagoyabae.config import NagoyaConfig
    from nagoyabae.service import Orchestrator

# Shared console instance for all CLI commands
console = Console()


def error(msg: str) -> None:
    """Print an error message in red."""
    console.print(f"[red]{msg}[/red]")


def warning(msg: str) -> None:
    """Print a warning message in yellow."""
    console.print(f"[yellow]{msg}[/yellow]")


def success(msg: str) -> None:
    """Print a success message in green."""
    console.print(f"[green]{msg}[/green]")


def dim(msg: str) -> None:
    """Print a dimmed message."""
    console.print(f"[dim]{msg}[/dim]")


def get_config(config_path: Path | None) -> NagoyaConfig:
    """Load configuration or exit with a readable error."""
    from nagoyabae.config import ConfigError, load_config

    try:
        return load_config(config_path)
    except (FileNotFoundError, ConfigError) as e:
        error(str(e))
        raise typer.Exit(1) from None


def get_orchestrator(config: NagoyaConfig) -> Orchestrator:
    from nagoyabae.llm.registry import create_registry
    from nagoyabae.service import Orchestrator

    return Orchestrator(create_registry(config), generation=config.generation)
