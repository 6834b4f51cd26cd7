"""
Command line entry point: ``task-spawner``.

    task-spawner serve [--host 0.0.0.0] [--port 3000] [--gateway memory]
    task-spawner vendors
    task-spawner --version

``serve`` runs uvicorn with the :func:`~task_spawner.api.create_app`
factory.  Uvicorn drains in-flight requests on SIGINT/SIGTERM.
"""

from __future__ import annotations

import os

import typer
from rich.console import Console

from task_spawner import __version__

console = Console()

app = typer.Typer(
    name="task-spawner",
    help="task-spawner — run vendor workers as ECS Fargate tasks.",
    no_args_is_help=True,
)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"task-spawner {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool | None = typer.Option(
        None,
        "--version",
        "-V",
        help="Show version and exit.",
        callback=_version_callback,
        is_eager=True,
    ),
) -> None:
    """task-spawner CLI."""


@app.command("serve")
def serve(
    host: str | None = typer.Option(None, "--host", "-h", help="Bind address [SPAWNER_HOST]"),
    port: int | None = typer.Option(None, "--port", "-p", help="Bind port [SPAWNER_PORT]"),
    gateway: str | None = typer.Option(
        None, "--gateway", help="Orchestrator gateway: ecs | memory [SPAWNER_GATEWAY_BACKEND]"
    ),
    reload: bool = typer.Option(False, "--reload", help="Auto-reload on changes"),
    log_level: str = typer.Option("info", "--log-level"),
) -> None:
    """Start the spawner REST API server."""
    import uvicorn

    from task_spawner.api.settings import APISettings

    if gateway is not None:
        # create_app runs inside uvicorn and reads settings from the environment
        os.environ["SPAWNER_GATEWAY_BACKEND"] = gateway

    settings = APISettings()
    bind_host = host or settings.host
    bind_port = port or settings.port

    console.print(
        f"[bold green]Starting task-spawner API[/bold green] on {bind_host}:{bind_port} "
        f"(gateway={settings.gateway_backend})"
    )
    uvicorn.run(
        "task_spawner.api:create_app",
        factory=True,
        host=bind_host,
        port=bind_port,
        reload=reload,
        log_level=log_level,
    )


@app.command("vendors")
def vendors() -> None:
    """List supported vendors and their worker images."""
    from rich.table import Table

    from task_spawner.tasks.vendors import VENDOR_IMAGES, supported_vendors

    table = Table(title="Supported vendors")
    table.add_column("Vendor", style="cyan")
    table.add_column("Image")
    for name in supported_vendors():
        table.add_row(name, VENDOR_IMAGES[name])
    console.print(table)


if __name__ == "__main__":
    app()
