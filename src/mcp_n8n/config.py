"""
Configuration management for the n8n MCP Server.

Configuration is loaded from multiple sources with layered precedence:
1. Built-in defaults (Pydantic model defaults)
2. YAML config file (/etc/mcp-n8n/config.yml or --config path)
3. Legacy token variables (AUTH_TOKEN, then N8N_MCP_AUTH_TOKEN)
4. Environment variables (MCP_N8N_* prefix, __ for nesting)
5. Command-line arguments (highest precedence)
"""

from __future__ import annotations

import argparse
import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, field_validator

from mcp_n8n import __version__

DEFAULT_CONFIG_PATH = Path("/etc/mcp-n8n/config.yml")

# Checked in order; later names win
LEGACY_TOKEN_VARIABLES = ("AUTH_TOKEN", "N8N_MCP_AUTH_TOKEN")

VALID_TRANSPORTS = {"stdio", "http"}

# =============================================================================
# Server Configuration
# =============================================================================


class ServerConfig(BaseModel):
    """Server settings.

    Attributes:
        transport: Which transport to run ("stdio" or "http").
        listen: Listen address and port for the HTTP transport.
    """

    transport: str = Field(
        default="stdio",
        description="Transport: 'stdio' (line-delimited JSON-RPC) or 'http'",
    )
    listen: str = Field(
        default="127.0.0.1:3000",
        description="HTTP listen address and port (e.g., '0.0.0.0:3000')",
    )

    @field_validator("transport")
    @classmethod
    def validate_transport(cls, v: str) -> str:
        """Validate and normalize the transport name."""
        v_lower = v.lower()
        if v_lower not in VALID_TRANSPORTS:
            raise ValueError(
                f"Invalid transport: {v}. Must be one of: {', '.join(sorted(VALID_TRANSPORTS))}"
            )
        return v_lower

    @field_validator("listen")
    @classmethod
    def validate_listen(cls, v: str) -> str:
        """Validate that listen is HOST:PORT with a numeric port."""
        host, sep, port = v.rpartition(":")
        if not sep or not host or not port.isdigit() or not 0 < int(port) < 65536:
            raise ValueError(f"Invalid listen address: {v}. Expected HOST:PORT")
        return v

    @property
    def host(self) -> str:
        return self.listen.rpartition(":")[0]

    @property
    def port(self) -> int:
        return int(self.listen.rpartition(":")[2])


# =============================================================================
# Security Configuration
# =============================================================================


class SecurityConfig(BaseModel):
    """HTTP authentication settings.

    Attributes:
        auth_token: Shared bearer token. When unset, every MCP request on the
            HTTP transport is rejected.
    """

    auth_token: str | None = Field(
        default=None,
        description="Bearer token required on HTTP MCP requests",
    )

    @field_validator("auth_token")
    @classmethod
    def validate_auth_token(cls, v: str | None) -> str | None:
        """Treat an empty or blank token as unset."""
        if v is None or not v.strip():
            return None
        return v.strip()


# =============================================================================
# Logging Configuration
# =============================================================================


class LoggingConfig(BaseModel):
    """Logging configuration.

    Attributes:
        level: Log level.
        json_format: Emit JSON lines instead of plain text.
    """

    level: str = Field(
        default="info",
        description="Log level: debug, info, warning, error",
    )
    json_format: bool = Field(
        default=True,
        description="Whether to emit structured JSON log lines",
    )

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        """Validate and normalize log level."""
        valid_levels = {"debug", "info", "warn", "warning", "error", "critical"}
        v_lower = v.lower()
        if v_lower not in valid_levels:
            raise ValueError(
                f"Invalid log level: {v}. Must be one of: {', '.join(sorted(valid_levels))}"
            )
        if v_lower == "warn":
            return "warning"
        return v_lower


# =============================================================================
# Server Identity
# =============================================================================


class CatalogConfig(BaseModel):
    """What the server reports about itself in initialize and /health."""

    server_name: str = Field(default="n8n-mcp-server")
    server_version: str = Field(default=__version__)
    protocol_version: str = Field(default="2024-11-05")


# =============================================================================
# Main Application Configuration
# =============================================================================


class AppConfig(BaseModel):
    """
    Main application configuration model.

    Attributes:
        server: Transport settings.
        security: HTTP authentication settings.
        logging: Logging configuration.
        catalog: Server identity reported to clients.
    """

    server: ServerConfig = Field(default_factory=ServerConfig)
    security: SecurityConfig = Field(default_factory=SecurityConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    catalog: CatalogConfig = Field(default_factory=CatalogConfig)


# =============================================================================
# Configuration Loading Functions
# =============================================================================


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Deep merge two dictionaries, returning a new one."""
    result = base.copy()
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def _load_yaml_config(config_path: Path) -> dict[str, Any]:
    """
    Load configuration from a YAML file.

    Raises:
        FileNotFoundError: If the config file doesn't exist.
        yaml.YAMLError: If the YAML is invalid.
    """
    if not config_path.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    with open(config_path) as f:
        return yaml.safe_load(f) or {}


def _load_legacy_token() -> dict[str, Any]:
    """Read the bearer token from the variables deployments already set."""
    token: str | None = None
    for name in LEGACY_TOKEN_VARIABLES:
        value = os.environ.get(name)
        if value:
            token = value
    if token is None:
        return {}
    return {"security": {"auth_token": token}}


def _load_env_config(prefix: str = "MCP_N8N_") -> dict[str, Any]:
    """
    Load configuration from environment variables.

    Nested keys use a double underscore, e.g. MCP_N8N_SERVER__LISTEN.
    Values stay strings; pydantic coerces them to the field types.
    """
    result: dict[str, Any] = {}

    for key, value in os.environ.items():
        if not key.startswith(prefix):
            continue

        parts = key[len(prefix) :].lower().split("__")

        current = result
        for part in parts[:-1]:
            current = current.setdefault(part, {})
        current[parts[-1]] = value

    return result


def _parse_cli_args(args: list[str] | None = None) -> dict[str, Any]:
    """
    Parse command-line arguments into a config override dict.

    The config file path, if given, is returned under "_config_path".
    """
    parser = argparse.ArgumentParser(
        prog="mcp-n8n",
        description="n8n MCP Server",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    parser.add_argument("--config", "-c", type=str, help="Path to configuration file")
    parser.add_argument(
        "--transport",
        choices=sorted(VALID_TRANSPORTS),
        help="Transport to serve MCP over",
    )
    parser.add_argument("--listen", type=str, help="HTTP listen address (HOST:PORT)")
    parser.add_argument(
        "--log-level",
        type=str,
        choices=["debug", "info", "warning", "error"],
        help="Override log level",
    )
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")

    parsed = parser.parse_args(args)

    result: dict[str, Any] = {}

    if parsed.config:
        result["_config_path"] = parsed.config

    server: dict[str, Any] = {}
    if parsed.transport:
        server["transport"] = parsed.transport
    if parsed.listen:
        server["listen"] = parsed.listen
    if server:
        result["server"] = server

    if parsed.log_level:
        result["logging"] = {"level": parsed.log_level}
    if parsed.debug:
        result["logging"] = {"level": "debug"}

    return result


def load_config(
    config_path: Path | str | None = None,
    env_prefix: str = "MCP_N8N_",
    cli_args: list[str] | None = None,
) -> AppConfig:
    """
    Load configuration from all sources with layered precedence.

    Args:
        config_path: Path to a YAML file. If None, uses --config or the
            default path when it exists.
        env_prefix: Prefix for environment variables.
        cli_args: Command-line arguments. If None, uses sys.argv.

    Raises:
        FileNotFoundError: If the specified config file doesn't exist.
        ValidationError: If the configuration is invalid.

    Example:
        >>> config = load_config(cli_args=["--transport", "http"])
        >>> config.server.port
        3000
    """
    config_dict: dict[str, Any] = {}

    cli_config = _parse_cli_args(cli_args)

    if config_path is None:
        if "_config_path" in cli_config:
            config_path = Path(cli_config.pop("_config_path"))
        elif DEFAULT_CONFIG_PATH.exists():
            config_path = DEFAULT_CONFIG_PATH
    else:
        cli_config.pop("_config_path", None)
        config_path = Path(config_path)

    if config_path is not None:
        config_dict = _deep_merge(config_dict, _load_yaml_config(config_path))

    config_dict = _deep_merge(config_dict, _load_legacy_token())
    config_dict = _deep_merge(config_dict, _load_env_config(env_prefix))
    config_dict = _deep_merge(config_dict, cli_config)

    return AppConfig(**config_dict)
