"""Transport layer for jsonrpc_socket.

This module handles the byte-stream side of a call with no knowledge of
JSON-RPC error semantics. It is responsible for:
- Service address and credential normalization
- Minimal HTTP/1.1 request framing
- Connect/write/read over a raw TCP stream with an optional timeout
- Splitting and decoding the reply
- Network error translation
"""

from jsonrpc_socket.exceptions import (
    ConnectionError,
    InvalidResponseError,
    ResponseError,
    RpcError,
    SerializationError,
)
from jsonrpc_socket.transport.address import ApiKey, Credential, ServiceAddress
from jsonrpc_socket.transport.framing import (
    decode_body,
    frame_request,
    parse_response,
    split_response,
)
from jsonrpc_socket.transport.socket import SocketTransport

__all__ = [
    "SocketTransport",
    "ServiceAddress",
    "Credential",
    "ApiKey",
    "frame_request",
    "split_response",
    "decode_body",
    "parse_response",
    "RpcError",
    "ConnectionError",
    "SerializationError",
    "ResponseError",
    "InvalidResponseError",
]
