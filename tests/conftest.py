"""Root-level pytest configuration for all tests.

Provides small threaded TCP servers that stand in for a JSON-RPC peer, so
transport tests exercise real sockets without external network access.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator
from typing import Any
import json
import socket
import socketserver
import threading

import pytest
import structlog


def _read_request(sock: socket.socket) -> bytes:
    """Read one framed request: headers, then Content-Length body bytes."""
    data = b""
    while b"\r\n\r\n" not in data:
        chunk = sock.recv(1024)
        if not chunk:
            return data
        data += chunk
    head, _, body = data.partition(b"\r\n\r\n")
    length = 0
    for line in head.decode("latin-1").split("\r\n")[1:]:
        name, _, value = line.partition(":")
        if name.strip().lower() == "content-length":
            length = int(value.strip())
    while len(body) < length:
        chunk = sock.recv(1024)
        if not chunk:
            break
        body += chunk
    return head + b"\r\n\r\n" + body


def _dispatch(request: dict[str, Any]) -> dict[str, Any]:
    """Tiny math service: ``mul`` and ``add`` take exactly two numbers."""
    method = request.get("method")
    params = request.get("params")
    request_id = request.get("id")

    if method not in ("mul", "add"):
        error = {"code": -32601, "message": "Method not found"}
        return {"jsonrpc": "2.0", "result": None, "error": error, "id": request_id}
    if not isinstance(params, list) or len(params) != 2:
        error = {"code": -32602, "message": "Invalid params"}
        return {"jsonrpc": "2.0", "result": None, "error": error, "id": request_id}

    a, b = params
    result = a * b if method == "mul" else a + b
    return {"jsonrpc": "2.0", "result": result, "error": None, "id": request_id}


def _http_reply(body: bytes) -> bytes:
    head = (
        "HTTP/1.1 200 OK\r\n"
        "Content-Type: application/json\r\n"
        f"Content-Length: {len(body)}\r\n"
        "\r\n"
    )
    return head.encode("ascii") + body


class RecordingServer(socketserver.ThreadingTCPServer):
    """TCP server that records every raw request it receives."""

    allow_reuse_address = True
    daemon_threads = True

    def __init__(self, handler: type[socketserver.BaseRequestHandler], keep_open: bool = False) -> None:
        super().__init__(("127.0.0.1", 0), handler)
        self.requests: list[bytes] = []
        self.reply: bytes | None = None
        self.keep_open = keep_open
        self.release = threading.Event()

    @property
    def host_port(self) -> str:
        host, port = self.server_address[:2]
        return f"{host}:{port}"


class JsonRpcHandler(socketserver.BaseRequestHandler):
    """Answer one JSON-RPC call per connection, or a canned reply if set."""

    server: RecordingServer

    def handle(self) -> None:
        raw = _read_request(self.request)
        self.server.requests.append(raw)

        if self.server.reply is not None:
            self.request.sendall(self.server.reply)
        else:
            _, _, body = raw.partition(b"\r\n\r\n")
            response = _dispatch(json.loads(body.decode("utf-8")))
            self.request.sendall(_http_reply(json.dumps(response).encode("utf-8")))

        if self.server.keep_open:
            # Hold the connection like a keep-alive server would.
            self.server.release.wait(timeout=5)


def _serve(server: RecordingServer) -> Iterator[RecordingServer]:
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    try:
        yield server
    finally:
        server.release.set()
        server.shutdown()
        server.server_close()
        thread.join(timeout=5)


@pytest.fixture(autouse=True)
def _reset_structlog() -> Iterator[None]:
    """Undo logging configuration applied by CLI invocations."""
    yield
    structlog.reset_defaults()


@pytest.fixture
def rpc_server() -> Iterator[RecordingServer]:
    """JSON-RPC math service that closes the connection after replying."""
    yield from _serve(RecordingServer(JsonRpcHandler))


@pytest.fixture
def keepalive_server() -> Iterator[RecordingServer]:
    """JSON-RPC math service that keeps the connection open after replying."""
    yield from _serve(RecordingServer(JsonRpcHandler, keep_open=True))


@pytest.fixture
def canned_server(rpc_server: RecordingServer) -> Callable[[bytes], RecordingServer]:
    """Factory making the server send fixed reply bytes instead of dispatching."""

    def factory(reply: bytes) -> RecordingServer:
        rpc_server.reply = reply
        return rpc_server

    return factory


@pytest.fixture
def silent_listener() -> Iterator[str]:
    """Listening socket that accepts connections but never replies."""
    sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    sock.bind(("127.0.0.1", 0))
    sock.listen(8)
    host, port = sock.getsockname()
    try:
        yield f"{host}:{port}"
    finally:
        sock.close()


@pytest.fixture
def closed_port() -> str:
    """Address with nothing listening on it."""
    sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    sock.bind(("127.0.0.1", 0))
    host, port = sock.getsockname()
    sock.close()
    return f"{host}:{port}"
