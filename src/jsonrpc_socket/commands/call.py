"""Remote procedure call command.

Sends one JSON-RPC request with the blocking entry point and prints the
decoded reply. The reply is printed as-is, including a JSON-RPC ``error``
member; only transport failures change the exit code.
"""

from __future__ import annotations

from pathlib import Path
from typing import Annotated, Any
import json
import re

import typer
from rich.console import Console
from rich.markup import escape

from jsonrpc_socket.client import JsonRpcClient
from jsonrpc_socket.config import Config
from jsonrpc_socket.exceptions import RpcError
from jsonrpc_socket.transport.address import Credential, ServiceAddress
from jsonrpc_socket.transport.socket import SocketTransport

console = Console()

INTEGER_ID = re.compile(r"-?(0|[1-9][0-9]*)")


def _parse_params(raw: str | None) -> Any:
    if raw is None:
        return None
    try:
        return json.loads(raw)
    except ValueError as e:
        console.print(f"[red]Invalid params JSON:[/red] {e}")
        raise typer.Exit(2)


def _parse_id(raw: str | None) -> int | str | None:
    if raw is None:
        return None
    if INTEGER_ID.fullmatch(raw):
        return int(raw)
    return raw


def _parse_credential(raw: str | None) -> Credential | None:
    if raw is None:
        return None
    name, sep, value = raw.partition("=")
    if not sep or not name:
        console.print(f"[red]Invalid credential:[/red] '{raw}'. Use NAME=VALUE")
        raise typer.Exit(2)
    try:
        return Credential(name, value)
    except ValueError as e:
        console.print(f"[red]Invalid credential:[/red] {escape(str(e))}")
        raise typer.Exit(2)


def call(
    method: Annotated[str, typer.Argument(help="Remote method name (e.g., 'mul')")],
    params: Annotated[
        str | None,
        typer.Argument(help="Method params as JSON (e.g., '[2.5, 3.5]')"),
    ] = None,
    host_port: Annotated[
        str | None,
        typer.Option("--host-port", "-H", help="Service host:port (overrides config)"),
    ] = None,
    path: Annotated[
        str | None,
        typer.Option("--path", "-p", help="Request path (overrides config)"),
    ] = None,
    request_id: Annotated[
        str | None,
        typer.Option("--id", help="Correlation id; integers are sent as numbers"),
    ] = None,
    timeout: Annotated[
        float | None,
        typer.Option("--timeout", "-t", help="Connect/write/read timeout in seconds"),
    ] = None,
    credential: Annotated[
        str | None,
        typer.Option("--credential", "-c", help="Credential header as NAME=VALUE"),
    ] = None,
    config_path: Annotated[
        Path | None,
        typer.Option("--config", help="Explicit config file"),
    ] = None,
) -> None:
    """Call a remote method and print the JSON-RPC reply.

    Examples:
        # Multiply two numbers
        jsonrpc-socket call mul '[2.5, 3.5]' -H localhost:8082 -p math-api

        # Send an API key header
        jsonrpc-socket call ping -c API-KEY=abcdef12345
    """
    parsed_params = _parse_params(params)
    parsed_credential = _parse_credential(credential)

    try:
        config = Config.load(config_path=config_path)
    except ValueError as e:
        console.print(f"[red]Configuration error:[/red] {escape(str(e))}")
        raise typer.Exit(2)

    try:
        address = ServiceAddress(
            host_port or config.service.host_port,
            path if path is not None else config.service.path,
        )
        transport = SocketTransport(
            timeout=timeout if timeout is not None else config.service.timeout,
            user_agent=config.client.user_agent,
        )
        client = JsonRpcClient(
            address,
            credential=parsed_credential or config.to_credential(),
            transport=transport,
        )
    except ValueError as e:
        console.print(f"[red]Invalid option:[/red] {escape(str(e))}")
        raise typer.Exit(2)

    try:
        reply = client.call_sync(method, parsed_params, _parse_id(request_id))
    except RpcError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    console.print_json(json.dumps(reply))
