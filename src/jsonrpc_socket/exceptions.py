"""Error taxonomy for jsonrpc_socket.

These exceptions classify every failure point of a single socket round trip.
They have no knowledge of JSON-RPC error codes; a JSON-RPC ``error`` member
in a well-formed reply is not a transport failure.
"""

from __future__ import annotations


class RpcError(Exception):
    """Base exception for transport layer errors.

    Args:
        message: Human-readable error description
        cause: Original exception that caused this error

    Attributes:
        message: Error message
        cause: Original exception (or None)
    """

    kind = "rpc"

    def __init__(self, message: str, cause: BaseException | None = None) -> None:
        """Initialize RpcError.

        Args:
            message: Human-readable error description
            cause: Original exception that caused this error
        """
        super().__init__(message)
        self.message = message
        self.cause = cause

    def __str__(self) -> str:
        """Return string representation of error.

        Returns:
            Error message prefixed with the error kind
        """
        return f"{self.kind} error: {self.message}"


class ConnectionError(RpcError):
    """Connection could not be opened or the request could not be written.

    Examples:
        - Connection refused
        - DNS lookup failed
        - Connect or write timed out
        - Connection reset while writing
    """

    kind = "connection"


class SerializationError(RpcError):
    """Envelope could not be encoded, or the reply body could not be decoded.

    The underlying encoder/decoder message is kept in ``message``.
    """

    kind = "serialization"


class ResponseError(RpcError):
    """Reading the reply failed after a successful connection.

    Examples:
        - Connection reset while reading
        - Read timed out
    """

    kind = "response"


class InvalidResponseError(RpcError):
    """Bytes were received but contain no header/body separator.

    Raised for malformed or truncated HTTP replies.
    """

    kind = "invalid response"

    def __init__(
        self,
        message: str = "no header/body separator in response",
        cause: BaseException | None = None,
    ) -> None:
        super().__init__(message, cause)
