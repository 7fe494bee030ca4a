"""JSON-RPC 2.0 envelope builder.

Owns the protocol constants and the two steps that turn a method call into
wire-ready text: ``build`` assembles an immutable :class:`Envelope`, and
``serialize`` encodes it to compact JSON.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Any, Mapping
import json

from jsonrpc_socket import __version__
from jsonrpc_socket.protocol.models import Envelope, Params, RequestId
from jsonrpc_socket.exceptions import SerializationError

JSONRPC_VERSION = "2.0"
CONTENT_TYPE = "application/json"
ACCEPT = "application/json"
USER_AGENT = f"jsonrpc_socket/{__version__}"

# Fixed request headers in wire order, minus Host and Content-Length which
# depend on the call.
DEFAULT_HEADERS: Mapping[str, str] = MappingProxyType(
    {
        "Content-Type": CONTENT_TYPE,
        "User-Agent": USER_AGENT,
        "Accept": ACCEPT,
    }
)


def build(method: str, params: Any = None, id: RequestId = 0) -> Envelope:
    """Build a JSON-RPC request envelope.

    Args:
        method: Method name to invoke, must be non-empty
        params: Any JSON-serializable value, or a :class:`Params` wrapper
        id: Correlation token, returned verbatim by the peer

    Returns:
        Immutable envelope with ``jsonrpc`` fixed to "2.0"

    Raises:
        ValueError: If method is empty

    Example:
        >>> build("mul", [2.5, 3.5], 1).model_dump()
        {'jsonrpc': '2.0', 'method': 'mul', 'params': [2.5, 3.5], 'id': 1}
    """
    if not method:
        raise ValueError("method cannot be empty")
    if isinstance(params, Params):
        params = params.root
    return Envelope(method=method, params=params, id=id)


def serialize(envelope: Envelope) -> str:
    """Encode an envelope as compact JSON.

    Keys are emitted in the order ``jsonrpc, method, params, id``.

    Raises:
        SerializationError: If params hold a value JSON cannot represent
    """
    try:
        return json.dumps(
            envelope.model_dump(),
            separators=(",", ":"),
            ensure_ascii=False,
            allow_nan=False,
        )
    except (TypeError, ValueError) as e:
        raise SerializationError(f"Failed to serialize request: {e}", cause=e) from e
