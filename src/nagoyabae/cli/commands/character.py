"""Generate a mascot character from a local photo."""

import asyncio
from pathlib import Path
from typing import Annotated

import typer

from nagoyabae.cli.console import (
    console,
    dim,
    error,
    get_config,
    get_orchestrator,
    success,
)
from nagoyabae.llm.types import GeneratorId


def register(app: typer.Typer) -> None:
    """Register the character command."""

    @app.command()
    def character(
        image: Annotated[
            Path,
            typer.Argument(
                exists=True,
                dir_okay=False,
                readable=True,
                help="Photo to turn into a mascot",
            ),
        ],
        generator: Annotated[
            GeneratorId | None,
            typer.Option(
                "--generator",
                "-g",
                help="Image generation provider (default from config)",
            ),
        ] = None,
        model: Annotated[
            str | None,
            typer.Option(
                "--model",
                "-m",
                help="Image generation model",
            ),
        ] = None,
        output: Annotated[
            Path | None,
            typer.Option(
                "--output",
                "-o",
                help="Where to save an inline generated image (default: <photo>-mascot.<ext>)",
            ),
        ] = None,
        config: Annotated[
            Path | None,
            typer.Option(
                "--config",
                "-c",
                help="Path to configuration file",
            ),
        ] = None,
    ) -> None:
        """Generate a Nagoya mascot character from a photo."""
        from nagoyabae.images import codec
        from nagoyabae.llm.errors import TerminalFailure
        from nagoyabae.llm.types import GenerationRequest
        from nagoyabae.logging import configure_logging

        # Warnings only; results are printed to the console
        configure_logging(level="WARNING")

        nagoya_config = get_config(config)
        orchestrator = get_orchestrator(nagoya_config)
        request = GenerationRequest(
            image=codec.from_path(image),
            generator=generator or nagoya_config.generation.default_generator,
            model_name=model,
        )

        try:
            result = asyncio.run(orchestrator.generate_character(request))
        except TerminalFailure as e:
            error(f"Character generation failed ({e.kind.value}): {e.message}")
            for record in e.attempts:
                dim(f"  {record.candidate.label}: {record.outcome.message}")
            raise typer.Exit(1) from None

        console.print(f"[bold]Description:[/bold] {result.description}")
        console.print(f"[bold]Model:[/bold] {result.model_used}")

        if not result.image_url.startswith(codec.DATA_URI_PREFIX):
            console.print(f"[bold]Image:[/bold] {result.image_url}")
            return

        generated = codec.decode(result.image_url)
        extension = generated.mime_type.split("/", 1)[1]
        target = output or image.with_name(f"{image.stem}-mascot.{extension}")
        target.write_bytes(generated.data)
        success(f"Saved mascot to {target}")
