"""Protocol layer exceptions.

These exceptions represent JSON-RPC ``error`` members returned by the peer.
The transport never raises them; they are produced only when a caller opts in
via :func:`raise_for_error` (as ``JsonRpcClient.invoke`` does).
"""

from __future__ import annotations

from typing import Any

from jsonrpc_socket.protocol.models import JsonRpcErrorObject

PARSE_ERROR = -32700
INVALID_REQUEST = -32600
METHOD_NOT_FOUND = -32601
INVALID_PARAMS = -32602
INTERNAL_ERROR = -32603


class ProtocolError(Exception):
    """Base exception for JSON-RPC errors reported by the peer.

    Args:
        message: Human-readable error description
        code: JSON-RPC error code (optional)
        data: Additional error data (optional)
    """

    def __init__(
        self,
        message: str,
        code: int | None = None,
        data: Any = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code
        self.data = data

    def __str__(self) -> str:
        if self.code is not None:
            return f"[{self.code}] {self.message}"
        return self.message


class JsonRpcProtocolError(ProtocolError):
    """Error with a code outside the predefined JSON-RPC range."""

    pass


class ParseError(ProtocolError):
    """Peer could not parse the request JSON.

    Error code: -32700
    """

    def __init__(self, message: str, data: Any = None) -> None:
        super().__init__(message, code=PARSE_ERROR, data=data)


class InvalidRequestError(ProtocolError):
    """Request is not a valid JSON-RPC 2.0 object.

    Error code: -32600
    """

    def __init__(self, message: str, data: Any = None) -> None:
        super().__init__(message, code=INVALID_REQUEST, data=data)


class MethodNotFoundError(ProtocolError):
    """Method does not exist on the peer.

    Error code: -32601
    """

    def __init__(self, message: str, data: Any = None) -> None:
        super().__init__(message, code=METHOD_NOT_FOUND, data=data)


class InvalidParamsError(ProtocolError):
    """Method parameters were rejected, e.g. wrong count or type.

    Error code: -32602
    """

    def __init__(self, message: str, data: Any = None) -> None:
        super().__init__(message, code=INVALID_PARAMS, data=data)


class InternalError(ProtocolError):
    """Peer failed while executing the method.

    Error code: -32603
    """

    def __init__(self, message: str, data: Any = None) -> None:
        super().__init__(message, code=INTERNAL_ERROR, data=data)


_ERRORS_BY_CODE: dict[int, type[ProtocolError]] = {
    PARSE_ERROR: ParseError,
    INVALID_REQUEST: InvalidRequestError,
    METHOD_NOT_FOUND: MethodNotFoundError,
    INVALID_PARAMS: InvalidParamsError,
    INTERNAL_ERROR: InternalError,
}


def raise_for_error(error: JsonRpcErrorObject | None) -> None:
    """Raise the exception matching a JSON-RPC error object.

    Does nothing when ``error`` is None.

    Raises:
        ParseError: -32700
        InvalidRequestError: -32600
        MethodNotFoundError: -32601
        InvalidParamsError: -32602
        InternalError: -32603
        JsonRpcProtocolError: Any other code
    """
    if error is None:
        return
    exc_class = _ERRORS_BY_CODE.get(error.code)
    if exc_class is None:
        raise JsonRpcProtocolError(error.message, code=error.code, data=error.data)
    raise exc_class(error.message, data=error.data)
