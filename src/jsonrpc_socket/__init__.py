"""Minimal JSON-RPC 2.0 client over a raw socket connection."""

__version__ = "0.3.0"

from jsonrpc_socket.exceptions import (  # noqa: E402
    ConnectionError,
    InvalidResponseError,
    ResponseError,
    RpcError,
    SerializationError,
)
from jsonrpc_socket.protocol import Envelope, JsonRpcResponse, Params, build, serialize  # noqa: E402
from jsonrpc_socket.transport import ApiKey, Credential, ServiceAddress, SocketTransport  # noqa: E402
from jsonrpc_socket.client import JsonRpcClient  # noqa: E402

__all__ = [
    "__version__",
    "Envelope",
    "JsonRpcResponse",
    "Params",
    "build",
    "serialize",
    "ServiceAddress",
    "Credential",
    "ApiKey",
    "SocketTransport",
    "JsonRpcClient",
    "RpcError",
    "ConnectionError",
    "SerializationError",
    "ResponseError",
    "InvalidResponseError",
]
