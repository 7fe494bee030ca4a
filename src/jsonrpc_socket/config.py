"""Configuration management for jsonrpc_socket.

Implements multi-level configuration with precedence:
1. Environment variables (JSONRPC_SOCKET_* prefix, highest priority)
2. Explicit config file (--config)
3. Project config (./.jsonrpc-socket.yaml)
4. Global config (~/.jsonrpc-socket/config.yaml)
5. Built-in defaults (lowest priority)
"""

from __future__ import annotations

import os
import re
from pathlib import Path
from typing import Any

import yaml  # type: ignore[import-untyped]
from pydantic import BaseModel, Field, field_validator

from jsonrpc_socket.protocol.envelope import USER_AGENT
from jsonrpc_socket.transport.address import Credential, ServiceAddress

PROJECT_CONFIG_NAME = ".jsonrpc-socket.yaml"


class ServiceConfig(BaseModel):
    """Target service configuration."""

    host_port: str = Field(default="localhost:8080")
    path: str = Field(default="")
    timeout: float | None = Field(default=10.0, gt=0, le=300)

    @field_validator("host_port")
    @classmethod
    def validate_host_port(cls, v: str) -> str:
        """Reject URLs; the transport speaks to host:port directly."""
        if v.startswith(("http://", "https://")):
            raise ValueError("host_port must be host:port, not a URL")
        return v.rstrip("/")


class CredentialConfig(BaseModel):
    """Credential header configuration."""

    name: str | None = None
    value: str | None = None


class ClientConfig(BaseModel):
    """Client identification."""

    user_agent: str = USER_AGENT


class Config(BaseModel):
    """Complete client configuration."""

    service: ServiceConfig = Field(default_factory=ServiceConfig)
    credential: CredentialConfig = Field(default_factory=CredentialConfig)
    client: ClientConfig = Field(default_factory=ClientConfig)

    @classmethod
    def load(
        cls,
        config_path: Path | None = None,
        skip_global: bool = False,
        skip_project: bool = False,
    ) -> Config:
        """Load configuration with precedence: env > file or project > global > defaults.

        Args:
            config_path: Optional explicit config file path
            skip_global: Skip loading global config
            skip_project: Skip loading project config

        Returns:
            Loaded and merged configuration

        Raises:
            ValueError: If a config file is missing or invalid
        """
        config_data: dict[str, Any] = {}

        if not skip_global:
            global_config_path = Path.home() / ".jsonrpc-socket" / "config.yaml"
            if global_config_path.exists():
                config_data = cls._load_yaml_file(global_config_path)

        if not skip_project and not config_path:
            project_config_path = Path.cwd() / PROJECT_CONFIG_NAME
            if project_config_path.exists():
                project_data = cls._load_yaml_file(project_config_path)
                config_data = cls._deep_merge(config_data, project_data)

        if config_path:
            if not config_path.exists():
                raise ValueError(f"Config file not found: {config_path}")
            explicit_data = cls._load_yaml_file(config_path)
            config_data = cls._deep_merge(config_data, explicit_data)

        env_overrides = cls._load_from_env()
        config_data = cls._deep_merge(config_data, env_overrides)

        config_data = cls._substitute_env_vars(config_data)

        try:
            return cls(**config_data)
        except Exception as e:
            raise ValueError(f"Invalid configuration: {e}") from e

    @staticmethod
    def _load_yaml_file(path: Path) -> dict[str, Any]:
        """Load and parse YAML file.

        Raises:
            ValueError: If file is invalid YAML or unreadable
        """
        try:
            with open(path) as f:
                data = yaml.safe_load(f)
                return data if isinstance(data, dict) else {}
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML in {path}: {e}") from e
        except OSError as e:
            raise ValueError(f"Failed to read {path}: {e}") from e

    @staticmethod
    def _load_from_env() -> dict[str, Any]:
        """Load configuration from JSONRPC_SOCKET_* environment variables."""
        env_mapping = {
            "JSONRPC_SOCKET_HOST_PORT": ["service", "host_port"],
            "JSONRPC_SOCKET_PATH": ["service", "path"],
            "JSONRPC_SOCKET_TIMEOUT": ["service", "timeout"],
            "JSONRPC_SOCKET_CREDENTIAL_NAME": ["credential", "name"],
            "JSONRPC_SOCKET_CREDENTIAL_VALUE": ["credential", "value"],
            "JSONRPC_SOCKET_USER_AGENT": ["client", "user_agent"],
        }

        result: dict[str, Any] = {}
        for env_var, path in env_mapping.items():
            value = os.getenv(env_var)
            if value is not None:
                Config._set_nested(result, path, Config._convert_env_value(value, path))
        return result

    @staticmethod
    def _convert_env_value(value: str, path: list[str]) -> Any:
        if path[-1] == "timeout":
            if value.lower() in ("", "none", "null"):
                return None
            try:
                return float(value)
            except ValueError:
                return value
        return value

    @staticmethod
    def _substitute_env_vars(data: Any) -> Any:
        """Substitute ${VAR_NAME} references in string values."""
        if isinstance(data, dict):
            return {k: Config._substitute_env_vars(v) for k, v in data.items()}
        if isinstance(data, list):
            return [Config._substitute_env_vars(item) for item in data]
        if isinstance(data, str):
            def replace_env(match: re.Match[str]) -> str:
                return os.getenv(match.group(1), match.group(0))
            return re.sub(r"\$\{([A-Z_][A-Z0-9_]*)\}", replace_env, data)
        return data

    @staticmethod
    def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
        result = base.copy()
        for key, value in override.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = Config._deep_merge(result[key], value)
            else:
                result[key] = value
        return result

    @staticmethod
    def _set_nested(data: dict[str, Any], path: list[str], value: Any) -> None:
        for key in path[:-1]:
            data = data.setdefault(key, {})
        data[path[-1]] = value

    def to_address(self) -> ServiceAddress:
        return ServiceAddress(self.service.host_port, self.service.path)

    def to_credential(self) -> Credential | None:
        """Return the configured credential, or None unless both parts are set."""
        if self.credential.name and self.credential.value is not None:
            return Credential(self.credential.name, self.credential.value)
        return None

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump()

    def to_yaml(self) -> str:
        return yaml.dump(self.to_dict(), default_flow_style=False, sort_keys=False)

    @classmethod
    def get_template(cls) -> str:
        """Get configuration file template."""
        return f"""# jsonrpc-socket configuration

# Target service
service:
  host_port: localhost:8080
  path: ""
  timeout: 10.0  # seconds, null waits indefinitely

# Credential header (optional)
credential:
  name: API-KEY
  value: ${{JSONRPC_SOCKET_API_KEY}}

client:
  user_agent: {USER_AGENT}
"""

    def validate_config(self) -> list[str]:
        """Validate configuration and return any warnings."""
        warnings: list[str] = []

        if self.credential.value and not self.credential.value.startswith("${"):
            warnings.append(
                "Credential value appears to be hardcoded. "
                "Use an environment variable reference: ${JSONRPC_SOCKET_API_KEY}"
            )

        if self.credential.value and not self.credential.name:
            warnings.append("Credential value is set without a name and will not be sent.")

        if self.service.timeout is None:
            warnings.append("No timeout configured. Calls may wait indefinitely.")
        elif self.service.timeout < 1:
            warnings.append(
                f"Timeout is very low ({self.service.timeout}s). "
                "This may cause frequent timeouts."
            )

        return warnings
