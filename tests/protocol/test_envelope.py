"""Unit tests for the envelope builder."""

from __future__ import annotations

import json

import pytest

from jsonrpc_socket import __version__
from jsonrpc_socket.exceptions import SerializationError
from jsonrpc_socket.protocol.envelope import (
    DEFAULT_HEADERS,
    JSONRPC_VERSION,
    USER_AGENT,
    build,
    serialize,
)
from jsonrpc_socket.protocol.models import Params


class TestConstants:
    """Tests for protocol constants."""

    def test_version(self) -> None:
        assert JSONRPC_VERSION == "2.0"

    def test_user_agent_carries_version(self) -> None:
        assert USER_AGENT == f"jsonrpc_socket/{__version__}"

    def test_default_headers_order(self) -> None:
        """Test fixed headers appear in wire order."""
        assert list(DEFAULT_HEADERS) == ["Content-Type", "User-Agent", "Accept"]
        assert DEFAULT_HEADERS["Content-Type"] == "application/json"
        assert DEFAULT_HEADERS["Accept"] == "application/json"

    def test_default_headers_read_only(self) -> None:
        with pytest.raises(TypeError):
            DEFAULT_HEADERS["Accept"] = "text/plain"  # type: ignore[index]


class TestBuild:
    """Tests for build()."""

    @pytest.mark.parametrize(
        "params",
        [None, 1, 3.14, "hello", [120_000, 20_000], ["hello", "world"], {"a": [1, 2]}],
    )
    def test_build_serializes_four_keys(self, params: object) -> None:
        """Test serialized envelope has exactly the four JSON-RPC keys."""
        data = json.loads(serialize(build("echo", params, 5)))

        assert set(data) == {"jsonrpc", "method", "params", "id"}
        assert data["jsonrpc"] == "2.0"
        assert data["method"] == "echo"
        assert data["params"] == params
        assert data["id"] == 5

    def test_build_unwraps_params(self) -> None:
        envelope = build("mul", Params([2.5, 3.5]), 1)

        assert envelope.params == [2.5, 3.5]

    def test_build_empty_method_raises(self) -> None:
        with pytest.raises(ValueError, match="method cannot be empty"):
            build("", [1, 2], 1)

    def test_build_keeps_string_id(self) -> None:
        data = json.loads(serialize(build("ping", None, "42")))

        assert data["id"] == "42"


class TestSerialize:
    """Tests for serialize()."""

    def test_serialize_is_compact(self) -> None:
        assert serialize(build("mul", [2.5, 3.5], 1)) == (
            '{"jsonrpc":"2.0","method":"mul","params":[2.5,3.5],"id":1}'
        )

    def test_serialize_round_trip_keeps_order(self) -> None:
        """Test decoding the serialized request keeps field order."""
        envelope = build("sum", {"values": [1, 2, 3]}, "abc")
        decoded = json.loads(serialize(envelope))

        assert list(decoded) == ["jsonrpc", "method", "params", "id"]
        assert decoded == envelope.model_dump()

    def test_serialize_keeps_unicode(self) -> None:
        assert '"héllo"' in serialize(build("echo", "héllo", 1))

    def test_serialize_unserializable_params(self) -> None:
        with pytest.raises(SerializationError, match="Failed to serialize request"):
            serialize(build("echo", {1, 2, 3}, 1))

    def test_serialize_rejects_nan(self) -> None:
        with pytest.raises(SerializationError):
            serialize(build("echo", float("nan"), 1))
