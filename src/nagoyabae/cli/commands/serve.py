"""Server command for running the HTTP API."""

import asyncio
import logging
from pathlib import Path
from typing import Annotated

import typer

logger = logging.getLogger(__name__)


def register(app: typer.Typer) -> None:
    """Register the serve command."""

    @app.command()
    def serve(
        config: Annotated[
            Path | None,
            typer.Option(
                "--config",
                "-c",
                help="Path to configuration file",
            ),
        ] = None,
        host: Annotated[
            str | None,
            typer.Option(
                "--host",
                "-h",
                help="Host to bind to (default from config)",
            ),
        ] = None,
        port: Annotated[
            int | None,
            typer.Option(
                "--port",
                "-p",
                help="Port to bind to (default from config)",
            ),
        ] = None,
    ) -> None:
        """Start the nagoyabae API server."""
        try:
            asyncio.run(_run_server(config, host, port))
        except KeyboardInterrupt:
            # Use print here since logging may not be configured yet
            print("\nServer stopped")


async def _run_server(
    config_path: Path | None = None,
    host: str | None = None,
    port: int | None = None,
) -> None:
    """Run the server asynchronously."""
    import uvicorn

    from nagoyabae.cli.console import get_config
    from nagoyabae.logging import configure_logging
    from nagoyabae.server.app import create_app

    configure_logging(use_rich=True)

    logger.info("Loading configuration")
    config = get_config(config_path)

    host = host or config.server.host
    port = port or config.server.port

    fastapi_app = create_app(config)
    logger.info(f"Server starting on http://{host}:{port}")

    uvicorn_config = uvicorn.Config(
        fastapi_app,
        host=host,
        port=port,
        log_level="info",
        log_config=None,  # Use shared logging config, not uvicorn's
    )
    await uvicorn.Server(uvicorn_config).serve()
