"""Socket transport implementation.

This module performs one JSON-RPC round trip over a raw TCP stream: connect,
write a framed HTTP/1.1 POST, read the reply to completion and decode it.
The coroutine :meth:`SocketTransport.send` is the canonical implementation;
:meth:`SocketTransport.send_sync` runs it to completion for blocking callers.
"""

from __future__ import annotations

from typing import Any, Awaitable, TypeVar
import asyncio

import structlog

from jsonrpc_socket.exceptions import ConnectionError, ResponseError, RpcError
from jsonrpc_socket.protocol.envelope import USER_AGENT, serialize
from jsonrpc_socket.protocol.models import Envelope
from jsonrpc_socket.transport.address import Credential, ServiceAddress
from jsonrpc_socket.transport.framing import frame_request, is_complete, parse_response

logger = structlog.get_logger()

T = TypeVar("T")

READ_CHUNK_SIZE = 4 * 1024


class SocketTransport:
    """Single-request-per-connection JSON-RPC transport.

    Each call opens its own connection and releases it on every exit path,
    including errors and cancellation. The transport holds no per-call
    state, so one instance can serve concurrent callers.

    Args:
        timeout: Optional bound in seconds applied to connect, write and
            each read (default: None, wait indefinitely)
        user_agent: Value of the User-Agent header

    Example:
        >>> transport = SocketTransport(timeout=5.0)
        >>> envelope = build("mul", [2.5, 3.5], 1)
        >>> address = ServiceAddress("localhost:8082", "math-api")
        >>> reply = await transport.send(envelope, address)
        >>> reply["result"]
        8.75
    """

    def __init__(
        self,
        timeout: float | None = None,
        user_agent: str = USER_AGENT,
    ) -> None:
        if timeout is not None and timeout <= 0:
            raise ValueError("timeout must be positive")
        self.timeout = timeout
        self.user_agent = user_agent

    async def send(
        self,
        envelope: Envelope,
        address: ServiceAddress,
        credential: Credential | None = None,
    ) -> Any:
        """Send one request and return the decoded JSON reply.

        A JSON-RPC ``error`` member in the reply is returned as data, not
        raised.

        Args:
            envelope: Request envelope
            address: Target service address
            credential: Optional credential header

        Returns:
            Decoded JSON value of the reply body

        Raises:
            SerializationError: Envelope could not be encoded or body decoded
            ConnectionError: Connect or write failed or timed out
            ResponseError: Read failed or timed out
            InvalidResponseError: Reply has no header/body separator
        """
        body = serialize(envelope)
        request = frame_request(body, address, credential, self.user_agent)
        log = logger.bind(method=envelope.method, host_port=address.host_port)

        reader, writer = await self._connect(address, log)
        try:
            await self._write(writer, request, log)
            log.debug("rpc_request_sent", bytes=len(request), path=address.request_target())
            raw = await self._read(reader, log)
        finally:
            writer.close()
            try:
                await writer.wait_closed()
            except OSError as e:
                log.debug("rpc_close_failed", error=str(e))

        log.debug("rpc_response_received", bytes=len(raw))
        try:
            return parse_response(raw)
        except RpcError as e:
            log.warning("rpc_response_invalid", error=str(e))
            raise

    def send_sync(
        self,
        envelope: Envelope,
        address: ServiceAddress,
        credential: Credential | None = None,
    ) -> Any:
        """Blocking counterpart of :meth:`send`.

        Must not be called from a running event loop.
        """
        return asyncio.run(self.send(envelope, address, credential))

    async def _connect(
        self,
        address: ServiceAddress,
        log: Any,
    ) -> tuple[asyncio.StreamReader, asyncio.StreamWriter]:
        try:
            return await self._bounded(asyncio.open_connection(address.host, address.port))
        except asyncio.TimeoutError as e:
            log.warning("rpc_connect_timeout", timeout=self.timeout)
            raise ConnectionError(
                f"Connecting to {address.host_port} timed out (timeout={self.timeout}s)",
                cause=e,
            ) from e
        except OSError as e:
            log.warning("rpc_connect_failed", error=str(e))
            raise ConnectionError(
                f"Connection to {address.host_port} failed: {e}",
                cause=e,
            ) from e
        except (ValueError, OverflowError) as e:
            # idna encoding of the host (UnicodeError) or an unusable port
            log.warning("rpc_connect_failed", error=str(e))
            raise ConnectionError(
                f"Cannot resolve {address.host_port}: {e}",
                cause=e,
            ) from e

    async def _write(self, writer: asyncio.StreamWriter, request: bytes, log: Any) -> None:
        try:
            writer.write(request)
            await self._bounded(writer.drain())
        except asyncio.TimeoutError as e:
            log.warning("rpc_write_timeout", timeout=self.timeout)
            raise ConnectionError(f"Write timed out (timeout={self.timeout}s)", cause=e) from e
        except OSError as e:
            log.warning("rpc_write_failed", error=str(e))
            raise ConnectionError(f"Write failed: {e}", cause=e) from e

    async def _read(self, reader: asyncio.StreamReader, log: Any) -> bytes:
        """Read until end of stream or until the announced body is complete."""
        buffer = bytearray()
        try:
            while True:
                chunk = await self._bounded(reader.read(READ_CHUNK_SIZE))
                if not chunk:
                    break
                buffer.extend(chunk)
                if is_complete(bytes(buffer)):
                    break
        except asyncio.TimeoutError as e:
            log.warning("rpc_read_timeout", timeout=self.timeout, received=len(buffer))
            raise ResponseError(f"Read timed out (timeout={self.timeout}s)", cause=e) from e
        except OSError as e:
            log.warning("rpc_read_failed", error=str(e), received=len(buffer))
            raise ResponseError(f"Read failed: {e}", cause=e) from e
        return bytes(buffer)

    async def _bounded(self, awaitable: Awaitable[T]) -> T:
        if self.timeout is None:
            return await awaitable
        return await asyncio.wait_for(awaitable, timeout=self.timeout)
