"""Service address and credential value objects."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator

DEFAULT_PORT = 80
MAX_PORT = 65535


def _reject_line_breaks(v: str, field: str) -> str:
    if "\r" in v or "\n" in v:
        raise ValueError(f"{field} cannot contain CR or LF")
    return v


class ServiceAddress(BaseModel):
    """Target of a JSON-RPC call: a ``host:port`` pair and a request path.

    ``host_port`` loses any trailing slash and ``path`` any leading or
    trailing slash, so joining them always yields exactly one separator.
    Normalization is idempotent.

    Example:
        >>> address = ServiceAddress("localhost:8082/", "/math-api/")
        >>> address.full_path()
        'localhost:8082/math-api'
        >>> address.request_target()
        '/math-api'
    """

    model_config = ConfigDict(frozen=True)

    host_port: str = Field(..., min_length=1, description="host:port of the service")
    path: str = Field(default="", description="Request path without leading slash")

    def __init__(self, host_port: str, path: str = "", **data: object) -> None:
        super().__init__(host_port=host_port, path=path, **data)

    @field_validator("host_port")
    @classmethod
    def normalize_host_port(cls, v: str) -> str:
        v = _reject_line_breaks(v.strip().rstrip("/"), "host_port")
        if not v:
            raise ValueError("host_port cannot be empty")
        host, _, port = v.rpartition(":")
        if host and port.isdigit() and int(port) > MAX_PORT:
            raise ValueError(f"port must be 0-{MAX_PORT}, got {port}")
        return v

    @field_validator("path")
    @classmethod
    def normalize_path(cls, v: str) -> str:
        return _reject_line_breaks(v.strip().strip("/"), "path")

    @property
    def host(self) -> str:
        host, _, port = self.host_port.rpartition(":")
        if not host or not port.isdigit():
            return self.host_port.strip("[]")
        return host.strip("[]")

    @property
    def port(self) -> int:
        host, _, port = self.host_port.rpartition(":")
        if not host or not port.isdigit():
            return DEFAULT_PORT
        return int(port)

    def full_path(self) -> str:
        """Return ``host_port/path``."""
        return f"{self.host_port}/{self.path}"

    def request_target(self) -> str:
        """Return the path as used on the HTTP request line."""
        return f"/{self.path}"


class Credential(BaseModel):
    """API key or token sent with each request.

    Store a key and render it as an HTTP header, a query string or a cookie.

    Example:
        >>> api_key = Credential("API-KEY", "abcdef12345")
        >>> api_key.as_header()
        'API-KEY: abcdef12345'
        >>> api_key.as_query_str()
        'API-KEY=abcdef12345'
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=1, description="Header or key name")
    value: str = Field(..., repr=False, description="Secret value")

    def __init__(self, name: str, value: str, **data: object) -> None:
        super().__init__(name=name, value=value, **data)

    @field_validator("name", "value")
    @classmethod
    def single_line(cls, v: str, info: ValidationInfo) -> str:
        return _reject_line_breaks(v, info.field_name)

    def as_header(self) -> str:
        return f"{self.name}: {self.value}"

    def as_query_str(self) -> str:
        return f"{self.name}={self.value}"

    def as_cookie(self) -> str:
        return f"Cookie: {self.name}={self.value}"


ApiKey = Credential
