"""
CLI tool for running and administering the chat broadcast hub.

Provides commands for serving the application, inspecting the effective
configuration, and disconnecting a client through the admin endpoint.
"""

import logging

import httpx
import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from chat_hub.constants import ADMIN_DISCONNECT_RESPONSE
from chat_hub.settings import app_settings

typer_app = typer.Typer(
    name="chat-hub",
    help="Chat broadcast hub CLI - serve the hub and manage connections",
    add_completion=False,
)
console = Console()


@typer_app.command(name="serve")
def serve(
    host: str = typer.Option(app_settings.SERVER_HOST, help="Bind address"),
    port: int = typer.Option(app_settings.SERVER_PORT, help="Bind port"),
    reload: bool = typer.Option(False, help="Reload on code changes"),
):
    """
    Run the hub under uvicorn.

    Example:
        python cli.py serve --port 8080
    """
    import uvicorn

    from chat_hub.uvicorn_filters import ExcludeMetricsFilter

    logging.getLogger("uvicorn.access").addFilter(ExcludeMetricsFilter())

    uvicorn.run(
        "chat_hub:application",
        factory=True,
        host=host,
        port=port,
        reload=reload,
    )


@typer_app.command(name="show-config")
def show_config():
    """
    Display the effective settings (secrets masked).

    Example:
        python cli.py show-config
    """
    console.print()
    console.print(
        Panel.fit(
            "[bold cyan]Chat Hub Configuration[/bold cyan]",
            border_style="cyan",
        )
    )
    console.print()

    table = Table("Setting", "Value", show_lines=True)
    for name, value in app_settings.model_dump().items():
        table.add_row(f"[green]{name}[/green]", str(value))

    console.print(table)
    console.print()


@typer_app.command(name="disconnect")
def disconnect(
    identity: int = typer.Argument(..., min=0, help="Connection identity"),
    url: str = typer.Option(
        f"http://localhost:{app_settings.SERVER_PORT}",
        help="Base URL of the running hub",
    ),
    token: str = typer.Option(
        None,
        envvar="ADMIN_BEARER_TOKEN",
        help="Admin bearer token (defaults to the configured secret)",
    ),
):
    """
    Stop broadcasting to a connected client via the admin endpoint.

    Example:
        python cli.py disconnect 3 --url http://localhost:8000
    """
    bearer = token or app_settings.ADMIN_BEARER_TOKEN.get_secret_value()

    try:
        response = httpx.get(
            f"{url.rstrip('/')}/admin/disconnect/{identity}",
            headers={"Authorization": f"Bearer {bearer}"},
            timeout=10.0,
        )
    except httpx.HTTPError as e:
        console.print(f"[red]Request failed:[/red] {e}")
        raise typer.Exit(code=1)

    if response.status_code != 200:
        console.print(
            f"[red]Admin endpoint returned {response.status_code}:[/red] "
            f"{response.text}"
        )
        raise typer.Exit(code=1)

    if response.text == ADMIN_DISCONNECT_RESPONSE:
        console.print(f"[green]Identity {identity} disconnected[/green]")
    else:
        console.print(f"Unexpected response: {response.text}")


if __name__ == "__main__":
    typer_app()
