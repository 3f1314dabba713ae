"""Rich rendering of the provider chain."""

from __future__ import annotations

from collections.abc import Sequence

from rich.table import Table

from astraventa.core.config import Config
from astraventa.core.provider.provider_config import ProviderConfig


def build_provider_table(provider_configs: Sequence[ProviderConfig]) -> Table:
    table = Table(title="Provider Chain (priority order)")
    table.add_column("#", style="dim", justify="right")
    table.add_column("Status")
    table.add_column("Name", style="cyan")
    table.add_column("Model Identifier", style="green")
    table.add_column("Credential")
    table.add_column("SHA256", style="dim")

    for position, provider_config in enumerate(provider_configs, start=1):
        status = "[green]ready[/green]" if provider_config.is_configured else "[yellow]skipped[/yellow]"
        table.add_row(
            str(position),
            status,
            provider_config.name,
            provider_config.model_identifier,
            provider_config.api_key_env,
            Config.get_api_key_hash(provider_config.api_key),
        )
    return table
