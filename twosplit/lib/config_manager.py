"""Configuration manager with hierarchy: .env → environment → defaults.

This module provides a single place to read configuration values:
1. Process environment, optionally populated from a .env file at the git root
2. Hardcoded defaults from twosplit.lib.defaults (server works out of the box
   apart from the API key)

Usage:
    from twosplit.lib.config_manager import config

    value = config.get("TWOSPLIT_LOG_LEVEL")

    # Startup validation, before serving any request
    server_config = load_server_config()
"""

import logging
import os
from pathlib import Path
from typing import Any, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field

from twosplit.lib.defaults import DEFAULTS, SENSITIVE_KEYS, get_default
from twosplit.services.errors import ConfigurationError

logger = logging.getLogger(__name__)

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def _find_git_root(start_path: Optional[Path] = None) -> Path:
    """Walk up directory tree to find .git/ folder."""
    current = start_path or Path.cwd()
    current = current.resolve()

    while current != current.parent:
        if (current / ".git").exists():
            return current
        current = current.parent

    raise FileNotFoundError("No .git directory found in any parent directory")


def _coerce_type(value: str, default: Any) -> Any:
    """Coerce string value to match the type of the default.

    Args:
        value: String value from the environment
        default: Default value (determines target type)

    Returns:
        Value coerced to appropriate type
    """
    if default is None:
        return value

    if isinstance(default, bool):
        return value.lower() in ("true", "1", "yes", "on")
    if isinstance(default, int):
        try:
            return int(value)
        except ValueError:
            return default
    if isinstance(default, float):
        try:
            return float(value)
        except ValueError:
            return default
    return value


class ConfigManager:
    """Manages configuration with environment → defaults hierarchy.

    The manager loads .env on initialization. Values already present in the
    process environment win over the .env file, since an MCP client usually
    passes the API key through the server's environment block.
    """

    def __init__(self, load_env: bool = True):
        """Initialize the config manager and optionally load .env."""
        self._env_loaded = False
        if load_env:
            self._load_env()

    def _load_env(self) -> None:
        """Load .env file from git root."""
        if self._env_loaded:
            return

        try:
            git_root = _find_git_root()
            env_path = git_root / ".env"
            if env_path.exists():
                load_dotenv(dotenv_path=env_path, override=False)
                logger.debug(f"Loaded .env from {env_path}")
            else:
                logger.debug(f"No .env file found at {env_path}")
        except FileNotFoundError:
            logger.debug("Could not find git root, .env not loaded")

        self._env_loaded = True

    def get(self, key: str, default: Any = None) -> Any:
        """Get config value (environment → defaults).

        Args:
            key: Configuration key
            default: Override default (uses DEFAULTS if not provided)

        Returns:
            Configuration value
        """
        env_value = os.getenv(key)
        if env_value is not None:
            default_val = default if default is not None else get_default(key)
            return _coerce_type(env_value, default_val)

        if default is not None:
            return default
        return get_default(key)

    def get_all(self) -> dict[str, Any]:
        """Get all known configuration values.

        Returns:
            Dictionary of all config keys and their resolved values
        """
        return {key: self.get(key) for key in DEFAULTS}

    def is_sensitive(self, key: str) -> bool:
        """Check if a key contains sensitive data."""
        return key in SENSITIVE_KEYS

    def mask_value(self, key: str, value: Any) -> str:
        """Mask sensitive values for display.

        Args:
            key: Configuration key
            value: Value to potentially mask

        Returns:
            Masked or original value as string
        """
        if not self.is_sensitive(key):
            return str(value)

        str_value = str(value)
        if not str_value:
            return ""
        if len(str_value) <= 8:
            return "*" * len(str_value)
        return str_value[:4] + "*" * (len(str_value) - 8) + str_value[-4:]


class ServerConfig(BaseModel):
    """Validated configuration the server needs before accepting requests."""

    api_key: str = Field(repr=False)
    max_tokens: int = 1024
    backend_timeout: Optional[float] = None
    log_level: str = "INFO"
    log_format: str = "json"
    otlp_endpoint: Optional[str] = None
    environment: str = "production"


def load_server_config(manager: Optional[ConfigManager] = None) -> ServerConfig:
    """Validate startup configuration.

    Args:
        manager: Config source (defaults to the module-level ``config``)

    Returns:
        ServerConfig ready to build the backend and orchestrator from

    Raises:
        ConfigurationError: If ANTHROPIC_API_KEY is missing or a value is invalid
    """
    manager = manager or config

    api_key = (manager.get("ANTHROPIC_API_KEY") or "").strip()
    if not api_key:
        raise ConfigurationError("ANTHROPIC_API_KEY environment variable is required")

    max_tokens = manager.get("TWOSPLIT_MAX_TOKENS")
    if max_tokens <= 0:
        raise ConfigurationError(f"TWOSPLIT_MAX_TOKENS must be positive, got {max_tokens}")

    timeout = manager.get("TWOSPLIT_BACKEND_TIMEOUT")
    if timeout < 0:
        raise ConfigurationError(f"TWOSPLIT_BACKEND_TIMEOUT must not be negative, got {timeout}")

    log_format = str(manager.get("TWOSPLIT_LOG_FORMAT")).lower()
    if log_format not in ("json", "text"):
        raise ConfigurationError(f"TWOSPLIT_LOG_FORMAT must be 'json' or 'text', got {log_format!r}")

    log_level = str(manager.get("TWOSPLIT_LOG_LEVEL")).upper()
    if log_level not in LOG_LEVELS:
        raise ConfigurationError(
            f"TWOSPLIT_LOG_LEVEL must be one of {', '.join(LOG_LEVELS)}, got {log_level!r}"
        )

    server_config = ServerConfig(
        api_key=api_key,
        max_tokens=max_tokens,
        backend_timeout=timeout or None,
        log_level=log_level,
        log_format=log_format,
        otlp_endpoint=manager.get("OTLP_ENDPOINT") or None,
        environment=manager.get("ENVIRONMENT"),
    )
    logger.debug(
        "Loaded server config (ANTHROPIC_API_KEY=%s)",
        manager.mask_value("ANTHROPIC_API_KEY", api_key),
    )
    return server_config


# Singleton instance
config = ConfigManager()
