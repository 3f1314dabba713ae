"""One-shot chat through the provider chain, outside the HTTP server."""

import asyncio
import json

import typer
from rich.console import Console
from rich.panel import Panel

from astraventa.core.canned import canned_reply_for
from astraventa.core.config import get_config
from astraventa.core.provider import build_provider_chain
from astraventa.core.router import ProviderChainRouter
from astraventa.models.chat import AllProvidersFailed, ChatMessage


def chat(
    message: str = typer.Argument(..., help="Guest message to answer"),
    raw: bool = typer.Option(False, "--json", help="Print the relay response body as JSON"),
) -> None:
    """Ask the assistant a question using the configured providers."""
    console = Console()
    router = ProviderChainRouter(build_provider_chain(get_config()))
    outcome = asyncio.run(router.route([ChatMessage(role="user", content=message)]))

    if raw:
        typer.echo(json.dumps(outcome.to_payload(), ensure_ascii=False))
        if isinstance(outcome, AllProvidersFailed):
            raise typer.Exit(code=1)
        return

    if isinstance(outcome, AllProvidersFailed):
        # Guests never see the raw failure, only a reply close to their question
        console.print(Panel(canned_reply_for(message), title="Assistant (offline reply)"))
        console.print(f"[yellow]{outcome.error}[/yellow]")
        raise typer.Exit(code=1)

    latency = f" · {outcome.latency_ms}ms" if outcome.latency_ms is not None else ""
    console.print(
        Panel(outcome.content, title=f"Assistant · {outcome.model_identifier}{latency}")
    )
