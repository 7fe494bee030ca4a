"""Protocol layer for jsonrpc_socket.

This module handles the JSON-RPC 2.0 side of a call with no knowledge of
sockets or HTTP framing. It is responsible for:
- Request envelope construction and serialization
- Protocol constants (version tag, default headers)
- Reply models
- Translating JSON-RPC error codes to typed exceptions
"""

from jsonrpc_socket.protocol.models import (
    Envelope,
    JsonRpcErrorObject,
    JsonRpcResponse,
    Params,
)
from jsonrpc_socket.protocol.envelope import (
    DEFAULT_HEADERS,
    JSONRPC_VERSION,
    USER_AGENT,
    build,
    serialize,
)
from jsonrpc_socket.protocol.exceptions import (
    InternalError,
    InvalidParamsError,
    InvalidRequestError,
    JsonRpcProtocolError,
    MethodNotFoundError,
    ParseError,
    ProtocolError,
    raise_for_error,
)

__all__ = [
    # Models
    "Envelope",
    "JsonRpcErrorObject",
    "JsonRpcResponse",
    "Params",
    # Envelope builder
    "DEFAULT_HEADERS",
    "JSONRPC_VERSION",
    "USER_AGENT",
    "build",
    "serialize",
    # Exceptions
    "ProtocolError",
    "JsonRpcProtocolError",
    "ParseError",
    "InvalidRequestError",
    "MethodNotFoundError",
    "InvalidParamsError",
    "InternalError",
    "raise_for_error",
]
