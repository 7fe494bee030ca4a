"""JSON-RPC 2.0 client over a raw socket.

Binds a service address, an optional credential and a transport together and
hands out correlation ids, so callers only name the method and its params.
"""

from __future__ import annotations

from typing import Any

from jsonrpc_socket.config import Config
from jsonrpc_socket.exceptions import SerializationError
from jsonrpc_socket.protocol.envelope import build
from jsonrpc_socket.protocol.exceptions import raise_for_error
from jsonrpc_socket.protocol.models import Envelope, JsonRpcResponse, RequestId
from jsonrpc_socket.transport.address import Credential, ServiceAddress
from jsonrpc_socket.transport.socket import SocketTransport


class JsonRpcClient:
    """JSON-RPC 2.0 client with auto-incrementing request ids.

    ``call`` returns the decoded reply as-is, leaving ``result``/``error``
    to the caller. ``invoke`` validates the reply and raises the typed
    protocol exception for a JSON-RPC error, returning ``result`` otherwise.

    Args:
        address: Target service address
        credential: Optional credential header sent with every request
        transport: Socket transport (default: new transport with ``timeout``)
        timeout: Timeout for the default transport, ignored if ``transport``
            is given

    Example:
        >>> client = JsonRpcClient(ServiceAddress("localhost:8082", "math-api"))
        >>> client.invoke_sync("mul", [2.5, 3.5])
        8.75
    """

    def __init__(
        self,
        address: ServiceAddress,
        credential: Credential | None = None,
        transport: SocketTransport | None = None,
        timeout: float | None = None,
    ) -> None:
        self.address = address
        self.credential = credential
        self.transport = transport or SocketTransport(timeout=timeout)
        self.request_id = 0

    @classmethod
    def from_config(cls, config: Config) -> JsonRpcClient:
        transport = SocketTransport(
            timeout=config.service.timeout,
            user_agent=config.client.user_agent,
        )
        return cls(config.to_address(), config.to_credential(), transport=transport)

    def next_id(self) -> int:
        """Generate next request ID."""
        self.request_id += 1
        return self.request_id

    def _envelope(self, method: str, params: Any, id: RequestId | None) -> Envelope:
        return build(method, params, self.next_id() if id is None else id)

    async def call(self, method: str, params: Any = None, id: RequestId | None = None) -> Any:
        """Execute a call and return the decoded reply.

        Args:
            method: Method name to invoke
            params: Any JSON-serializable value
            id: Correlation id (default: next auto-incremented id)

        Returns:
            Decoded JSON reply, including any JSON-RPC ``error`` member

        Raises:
            RpcError: Any transport failure, see :class:`SocketTransport`
        """
        envelope = self._envelope(method, params, id)
        return await self.transport.send(envelope, self.address, self.credential)

    def call_sync(self, method: str, params: Any = None, id: RequestId | None = None) -> Any:
        """Blocking counterpart of :meth:`call`."""
        envelope = self._envelope(method, params, id)
        return self.transport.send_sync(envelope, self.address, self.credential)

    async def invoke(self, method: str, params: Any = None, id: RequestId | None = None) -> Any:
        """Execute a call and return its ``result``.

        Raises:
            ProtocolError: The peer returned a JSON-RPC error (typed by code)
            SerializationError: The reply is not a JSON-RPC response object
            RpcError: Any transport failure
        """
        return self._unwrap(await self.call(method, params, id))

    def invoke_sync(self, method: str, params: Any = None, id: RequestId | None = None) -> Any:
        """Blocking counterpart of :meth:`invoke`."""
        return self._unwrap(self.call_sync(method, params, id))

    @staticmethod
    def _unwrap(reply: Any) -> Any:
        if not isinstance(reply, dict):
            raise SerializationError(f"Expected JSON object response, got {type(reply).__name__}")
        try:
            response = JsonRpcResponse.model_validate(reply)
        except ValueError as e:
            raise SerializationError(f"Response validation failed: {e}", cause=e) from e

        raise_for_error(response.error)
        return response.result
