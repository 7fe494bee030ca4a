"""Main CLI entry point for jsonrpc-socket."""

from __future__ import annotations

import logging
import sys
from typing import Annotated, Any

import structlog
import typer
from rich.console import Console

from jsonrpc_socket import __version__
from jsonrpc_socket.commands import config
from jsonrpc_socket.commands.call import call

app = typer.Typer(
    name="jsonrpc-socket",
    help="jsonrpc-socket - JSON-RPC 2.0 calls over a raw socket",
    no_args_is_help=True,
    add_completion=False,
)

app.command()(call)
app.add_typer(config.app, name="config")

console = Console()


def configure_logging(verbose: bool = False) -> None:
    """Route structlog output to stderr so stdout carries only replies."""
    level = logging.DEBUG if verbose else logging.WARNING

    def stderr_logger(*args: Any) -> structlog.PrintLogger:
        return structlog.PrintLogger(sys.stderr)

    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(colors=False),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        logger_factory=stderr_logger,
    )


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"jsonrpc-socket version: {__version__}")
        raise typer.Exit(0)


@app.callback()
def main(
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-v",
            help="Show version and exit",
            callback=version_callback,
            is_eager=True,
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", help="Log transport events to stderr"),
    ] = False,
) -> None:
    """
    jsonrpc-socket - Command-line JSON-RPC 2.0 client.

    Frames each call as a minimal HTTP/1.1 POST and sends it over a plain
    TCP connection.
    """
    configure_logging(verbose)


def cli_main() -> None:
    """Entry point for the CLI."""
    try:
        app()
    except KeyboardInterrupt:
        console.print("\n[yellow]Operation cancelled by user[/yellow]")
        sys.exit(130)


if __name__ == "__main__":
    cli_main()
