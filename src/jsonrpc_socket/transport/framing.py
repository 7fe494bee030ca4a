"""Minimal HTTP/1.1 framing for JSON-RPC over a raw byte stream.

Pure functions shared by every entry point of the transport: building the
request bytes, splitting a raw reply into header block and body, and
decoding the body as JSON. Nothing here touches a socket.
"""

from __future__ import annotations

from typing import Any
import json

from jsonrpc_socket.exceptions import InvalidResponseError, SerializationError
from jsonrpc_socket.protocol.envelope import DEFAULT_HEADERS, USER_AGENT
from jsonrpc_socket.transport.address import Credential, ServiceAddress

CRLF = "\r\n"
HEADER_SEPARATOR = "\r\n\r\n"
HEADER_SEPARATOR_BYTES = HEADER_SEPARATOR.encode("ascii")


def frame_request(
    body: str,
    address: ServiceAddress,
    credential: Credential | None = None,
    user_agent: str = USER_AGENT,
) -> bytes:
    """Wrap a serialized envelope in a minimal HTTP/1.1 POST request.

    Header order is fixed: Host, Content-Type, User-Agent, Accept, the
    optional credential header, Content-Length. The body follows the blank
    line with no trailing terminator.

    Args:
        body: Serialized JSON-RPC envelope
        address: Target service address
        credential: Optional credential rendered as one header line
        user_agent: Value of the User-Agent header

    Returns:
        Complete request bytes, UTF-8 encoded
    """
    payload = body.encode("utf-8")
    lines = [
        f"POST {address.request_target()} HTTP/1.1",
        f"Host: {address.host_port}",
    ]
    for name, value in DEFAULT_HEADERS.items():
        if name == "User-Agent":
            value = user_agent
        lines.append(f"{name}: {value}")
    if credential is not None:
        lines.append(credential.as_header())
    lines.append(f"Content-Length: {len(payload)}")

    head = CRLF.join(lines) + HEADER_SEPARATOR
    return head.encode("utf-8") + payload


def content_length(header_block: bytes) -> int | None:
    """Return the Content-Length announced in a reply header block.

    Returns None when the header is absent or not a non-negative integer.
    """
    text = header_block.decode("latin-1")
    for line in text.split(CRLF)[1:]:
        name, sep, value = line.partition(":")
        if sep and name.strip().lower() == "content-length":
            value = value.strip()
            if value.isdigit():
                return int(value)
            return None
    return None


def is_complete(raw: bytes) -> bool:
    """Check whether a partially read reply already holds its whole body.

    True only once the header block is complete and announces a
    Content-Length that the received body bytes satisfy. Replies without a
    Content-Length are complete only at end of stream.
    """
    head, sep, body = raw.partition(HEADER_SEPARATOR_BYTES)
    if not sep:
        return False
    length = content_length(head)
    return length is not None and len(body) >= length


def split_response(raw: bytes) -> tuple[str, str]:
    """Split a raw reply into its header block and body.

    Bytes are decoded as UTF-8 with invalid sequences replaced, then split on
    the first blank-line separator.

    Raises:
        InvalidResponseError: If the reply has no header/body separator
    """
    text = raw.decode("utf-8", errors="replace")
    headers, sep, body = text.partition(HEADER_SEPARATOR)
    if not sep:
        preview = text[:80]
        raise InvalidResponseError(
            f"no header/body separator in {len(raw)} received bytes: {preview!r}"
        )
    return headers, body


def decode_body(body: str) -> Any:
    """Parse a reply body as JSON after trimming trailing whitespace.

    Raises:
        SerializationError: If the body is not valid JSON
    """
    try:
        return json.loads(body.rstrip())
    except ValueError as e:
        raise SerializationError(f"Failed to decode response body: {e}", cause=e) from e


def parse_response(raw: bytes) -> Any:
    """Split a raw reply and decode its body."""
    _, body = split_response(raw)
    return decode_body(body)
