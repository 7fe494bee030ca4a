"""Configuration commands.

- show: Display effective configuration
- init: Write a configuration template
"""

from __future__ import annotations

from pathlib import Path
from typing import Annotated
import json

import typer
from rich.console import Console
from rich.table import Table

from jsonrpc_socket.config import Config, PROJECT_CONFIG_NAME

app = typer.Typer(
    name="config",
    help="Manage client configuration",
    no_args_is_help=True,
)

console = Console()


@app.command()
def show(
    json_output: Annotated[
        bool,
        typer.Option("--json", "-j", help="Output in JSON format"),
    ] = False,
    config_path: Annotated[
        Path | None,
        typer.Option("--config", help="Explicit config file"),
    ] = None,
) -> None:
    """Display current configuration.

    Credential values are masked.
    """
    try:
        config = Config.load(config_path=config_path)
    except ValueError as e:
        console.print(f"[red]Error reading configuration:[/red] {e}")
        raise typer.Exit(1)

    masked = "***" if config.credential.value else None

    if json_output:
        config_dict = config.to_dict()
        config_dict["credential"]["value"] = masked
        print(json.dumps(config_dict, indent=2))
        return

    table = Table(title="Service Settings", show_header=True)
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="green")
    table.add_row("Host:port", config.service.host_port)
    table.add_row("Path", f"/{config.service.path.strip('/')}")
    table.add_row("Timeout", "none" if config.service.timeout is None else f"{config.service.timeout}s")
    table.add_row("Credential", config.credential.name or "Not set")
    table.add_row("User-Agent", config.client.user_agent)
    console.print(table)

    for warning in config.validate_config():
        console.print(f"[yellow]Warning:[/yellow] {warning}")


@app.command()
def init(
    path: Annotated[
        Path,
        typer.Option("--path", help="Where to write the template"),
    ] = Path(PROJECT_CONFIG_NAME),
    force: Annotated[
        bool,
        typer.Option("--force", "-f", help="Overwrite an existing file"),
    ] = False,
) -> None:
    """Write a configuration template."""
    if path.exists() and not force:
        console.print(f"[red]File exists:[/red] {path}. Use --force to overwrite")
        raise typer.Exit(1)
    path.write_text(Config.get_template())
    console.print(f"[green]✓[/green] Configuration template written to {path}")
