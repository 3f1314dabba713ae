"""Main CLI entry point for astraventa-relay."""

import typer
from rich.console import Console

from astraventa.cli.commands import chat as chat_command
from astraventa.cli.commands import config as config_command

app = typer.Typer(
    name="astra",
    help="Astraventa Relay CLI - run and inspect the chat and contact relay",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

app.add_typer(config_command.app, name="config", help="Configuration management")
app.command(name="chat")(chat_command.chat)


@app.command()
def version() -> None:
    """Show version information."""
    from astraventa import __version__

    console = Console()
    console.print(f"[bold cyan]astra[/bold cyan] version [green]{__version__}[/green]")


@app.command()
def providers() -> None:
    """Show the provider chain and which providers have credentials."""
    from astraventa.cli.presenters.providers import build_provider_table
    from astraventa.core.config import get_config

    config = get_config()
    console = Console()
    console.print(build_provider_table(config.provider_configs))
    if not any(provider_config.is_configured for provider_config in config.provider_configs):
        console.print("[yellow]No provider credentials set: every chat will get the fallback reply[/yellow]")


@app.command()
def start(
    host: str = typer.Option(None, "--host", help="Override host"),
    port: int = typer.Option(None, "--port", help="Override port"),
    reload: bool = typer.Option(False, "--reload", help="Enable auto-reload for development"),
) -> None:
    """Start the relay server."""
    import uvicorn

    from astraventa.core.config import get_config
    from astraventa.core.logging import normalize_log_level

    config = get_config()

    console = Console()

    server_host = host or config.host
    server_port = port or config.port

    console.print("[bold green]Starting Astraventa Relay server...[/bold green]")
    console.print(f"Host: {server_host}")
    console.print(f"Port: {server_port}")

    uvicorn.run(
        "astraventa.main:app",
        host=server_host,
        port=server_port,
        reload=reload,
        log_level=normalize_log_level(config.log_level).lower(),
    )


if __name__ == "__main__":
    app()
