"""Command line entry point for the Playwright bridge."""

from __future__ import annotations

from pathlib import Path

import typer
import uvicorn

from .boilerplate import boilerplate as run_boilerplate
from ..core.config import settings

app = typer.Typer(no_args_is_help=True, help="Playwright end-to-end testing bridge.")


@app.command()
def boilerplate(
    base_path: Path = typer.Option(
        Path("."),
        "--base-path",
        help="Project root containing pyproject.toml.",
        file_okay=False,
    ),
) -> None:
    """Copy Playwright test boilerplate into the project."""

    run_boilerplate(base_path)


@app.command()
def serve(
    host: str = typer.Option(settings.api_host, help="Interface to bind."),
    port: int = typer.Option(settings.api_port, help="Port to listen on."),
    reload: bool = typer.Option(False, help="Reload on code changes."),
) -> None:
    """Run the demo application with the bridge installed."""

    uvicorn.run(
        "playwright_bridge.api.main:create_app",
        factory=True,
        host=host,
        port=port,
        reload=reload,
    )


def run() -> None:
    app()


if __name__ == "__main__":
    run()
