"""Configuration commands for the astra CLI."""

import typer
from rich.console import Console

from astraventa.core.config.schema import ConfigSchema
from astraventa.core.config.validation import validate_all

app = typer.Typer(help="Configuration management")


@app.command()
def validate() -> None:
    """Check every environment variable against the schema."""
    console = Console()
    errors = validate_all()
    if errors:
        for error in errors:
            console.print(f"[red]❌ {error.env_var}[/red]: {error.message} (got {error.value!r})")
        raise typer.Exit(code=1)
    console.print("[green]✅ Configuration is valid[/green]")


@app.command()
def docs() -> None:
    """Print Markdown documentation for all environment variables."""
    typer.echo(ConfigSchema.generate_markdown_docs())
