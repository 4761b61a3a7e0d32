"""Development server CLI commands."""

import sys
from typing import Optional

import typer
from rich.panel import Panel

from src.book_api.runtime.context import get_config

from .utils import console, get_project_root, run_command

dev_app = typer.Typer(help="🚀 Development server commands")


@dev_app.command(name="start-server")
def start_server(
    host: Optional[str] = typer.Option(
        None, help="Host to bind the server to (defaults to app.host in config.yaml)"
    ),
    port: Optional[int] = typer.Option(
        None, help="Port to bind the server to (defaults to app.port in config.yaml)"
    ),
    reload: bool = typer.Option(True, help="Enable auto-reload on code changes"),
    log_level: str = typer.Option(
        "info", help="Log level (debug, info, warning, error, critical)"
    ),
) -> None:
    """
    🚀 Start the FastAPI development server.

    Runs uvicorn against the book API with hot reloading.
    """
    app_config = get_config().app
    if host is None:
        host = app_config.host
    if port is None:
        port = app_config.port

    console.print(
        Panel.fit(
            "[bold green]Starting FastAPI Development Server[/bold green]",
            border_style="green",
        )
    )

    cmd = [
        sys.executable,
        "-m",
        "uvicorn",
        "src.book_api.api.http.app:app",
        "--host",
        host,
        "--port",
        str(port),
        "--log-level",
        log_level,
        "--no-access-log",
    ]

    if reload:
        cmd.extend(["--reload", "--reload-dir", "src"])

    console.print(f"[blue]Running:[/blue] {' '.join(cmd)}")
    console.print(f"[blue]Server will be available at:[/blue] http://{host}:{port}")
    console.print("[dim]Press Ctrl+C to stop the server[/dim]")

    try:
        run_command(cmd, cwd=get_project_root())
    except KeyboardInterrupt:
        console.print("\n[yellow]Server stopped by user[/yellow]")
    except typer.Exit:
        console.print("[red]Failed to start development server[/red]")
        raise
