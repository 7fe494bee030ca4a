"""JSON-RPC 2.0 protocol models.

This module defines Pydantic models for the request envelope and the reply
shape. The envelope is immutable once built; the reply model is an opt-in
typed view over the decoded JSON returned by the transport.

References:
    JSON-RPC 2.0 Specification: https://www.jsonrpc.org/specification
"""

from __future__ import annotations

from typing import Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, RootModel, StrictInt, StrictStr, field_validator

RequestId = Union[StrictInt, StrictStr]


class Params(RootModel[Any]):
    """Request parameters wrapper.

    Holds any JSON-serializable value: scalar, sequence or mapping.

    Example:
        >>> Params("hello").root
        'hello'
        >>> Params([120_000, 20_000]).root
        [120000, 20000]
    """

    model_config = ConfigDict(frozen=True)


class Envelope(BaseModel):
    """JSON-RPC 2.0 request object.

    Attributes:
        jsonrpc: Protocol version (always "2.0")
        method: Method name to invoke
        params: Method parameters, any serializable value
        id: Correlation token, kept exactly as supplied (int or str)

    Example:
        >>> envelope = Envelope(method="mul", params=[2.5, 3.5], id=1)
        >>> envelope.jsonrpc
        '2.0'
    """

    model_config = ConfigDict(frozen=True)

    jsonrpc: Literal["2.0"] = Field(default="2.0", description="JSON-RPC version")
    method: str = Field(..., min_length=1, description="Method name to invoke")
    params: Any = Field(default=None, description="Method parameters")
    id: RequestId = Field(default=0, description="Request ID")

    @field_validator("params", mode="before")
    @classmethod
    def unwrap_params(cls, v: Any) -> Any:
        """Store the wrapped value when a Params instance is given."""
        if isinstance(v, Params):
            return v.root
        return v


class JsonRpcErrorObject(BaseModel):
    """JSON-RPC 2.0 error object.

    Example:
        >>> error = JsonRpcErrorObject(code=-32602, message="Invalid params")
        >>> error.code
        -32602
    """

    code: int = Field(..., description="Error code")
    message: str = Field(..., description="Error message")
    data: Any = Field(default=None, description="Additional error data")


class JsonRpcResponse(BaseModel):
    """JSON-RPC 2.0 response object.

    Exactly one of ``result``/``error`` is expected to be set by the peer;
    that is not enforced here.
    """

    jsonrpc: Literal["2.0"] = Field(default="2.0", description="JSON-RPC version")
    result: Any = Field(default=None, description="Method result")
    error: JsonRpcErrorObject | None = Field(default=None, description="Error object")
    id: RequestId | None = Field(default=None, description="Request ID")

    @property
    def is_error(self) -> bool:
        return self.error is not None
