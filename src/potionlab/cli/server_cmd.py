# Copyright (c) Syntropy Systems
"""CLI command for running the potionlab HTTP API."""

import typer

from potionlab.cli.context import console, fail
from potionlab.config import require_project_dir
from potionlab.errors import PotionlabError


def serve(
    port: int = typer.Option(8080, "--port", "-p", help="Port to listen on"),
    host: str = typer.Option("127.0.0.1", "--host", "-h", help="Host to bind to"),
):
    """
    Serve the current project over HTTP.

    All changes go through one lock, so concurrent clients cannot interleave
    edits to the trial log. state.json is rewritten after every change.

    Examples:

        potionlab serve

        potionlab serve --host 0.0.0.0 --port 9000
    """
    try:
        import uvicorn
    except ImportError:
        console.print("[red]Error:[/red] uvicorn is required for server mode.")
        console.print("Install with: pip install potionlab[server]")
        raise typer.Exit(1)

    try:
        project_dir = require_project_dir()
    except PotionlabError as e:
        raise fail(e) from e

    try:
        from potionlab.server.app import create_app
    except ImportError as e:
        console.print(f"[red]Error:[/red] Missing dependency: {e}")
        console.print("Install server dependencies with: pip install potionlab[server]")
        raise typer.Exit(1)

    try:
        app = create_app(project_dir=project_dir)
    except (PotionlabError, ValueError) as e:
        raise fail(e) from e

    console.print("[bold]potionlab server[/bold]")
    console.print(f"  Host: {host}")
    console.print(f"  Port: {port}")
    console.print(f"  Project: {project_dir}")
    console.print()

    uvicorn.run(app, host=host, port=port, log_level="info")
