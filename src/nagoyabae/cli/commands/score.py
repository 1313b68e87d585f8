"""Score a local photo from the command line."""

import asyncio
from pathlib import Path
from typing import Annotated

import typer
from rich.table import Table

from nagoyabae.cli.console import console, error, get_config, get_orchestrator
from nagoyabae.llm.types import ProviderId


def register(app: typer.Typer) -> None:
    """Register the score command."""

    @app.command()
    def score(
        image: Annotated[
            Path,
            typer.Argument(
                exists=True,
                dir_okay=False,
                readable=True,
                help="Photo to score",
            ),
        ],
        provider: Annotated[
            ProviderId,
            typer.Option(
                "--provider",
                "-p",
                help="Provider to score with",
            ),
        ] = ProviderId.OPENAI,
        config: Annotated[
            Path | None,
            typer.Option(
                "--config",
                "-c",
                help="Path to configuration file",
            ),
        ] = None,
    ) -> None:
        """Score how Nagoya-bae a photo is."""
        from nagoyabae.images import codec
        from nagoyabae.llm.errors import TerminalFailure
        from nagoyabae.llm.types import AnalysisRequest
        from nagoyabae.logging import configure_logging

        # Warnings only; results are printed to the console
        configure_logging(level="WARNING")

        orchestrator = get_orchestrator(get_config(config))
        request = AnalysisRequest(image=codec.from_path(image), provider_id=provider)

        try:
            result = asyncio.run(orchestrator.analyze(request))
        except TerminalFailure as e:
            error(f"Scoring failed ({e.kind.value}): {e.message}")
            raise typer.Exit(1) from None

        table = Table(title=result.title, show_header=False)
        table.add_column("Field", style="bold")
        table.add_column("Value")
        table.add_row("Score", f"{result.score}/100")
        table.add_row("Comment", result.comment)
        table.add_row("Tags", " ".join(result.vibe_tags))
        console.print(table)
