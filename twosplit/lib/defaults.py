"""Default configuration values for the twosplit server.

All hardcoded defaults live here. The server is fully configured by these
defaults except for the Anthropic API key, which has no usable default.

Config hierarchy: environment (.env) → these defaults
"""

from typing import Any

# =============================================================================
# Configuration Defaults
# =============================================================================

DEFAULTS: dict[str, Any] = {
    # -------------------------------------------------------------------------
    # Backend - Anthropic
    # -------------------------------------------------------------------------
    "ANTHROPIC_API_KEY": "",  # Required, checked at startup
    "TWOSPLIT_BACKEND_TIMEOUT": 0.0,  # Seconds per backend call, 0 = SDK default
    "TWOSPLIT_MAX_TOKENS": 1024,

    # -------------------------------------------------------------------------
    # Logging
    # -------------------------------------------------------------------------
    "TWOSPLIT_LOG_LEVEL": "INFO",
    "TWOSPLIT_LOG_FORMAT": "json",  # "json" or "text"

    # -------------------------------------------------------------------------
    # Tracing (empty endpoint = disabled)
    # -------------------------------------------------------------------------
    "OTLP_ENDPOINT": "",
    "ENVIRONMENT": "production",
}


# =============================================================================
# Config Categories
# =============================================================================

CONFIG_CATEGORIES = {
    "backend": [
        "ANTHROPIC_API_KEY",
        "TWOSPLIT_BACKEND_TIMEOUT",
        "TWOSPLIT_MAX_TOKENS",
    ],
    "logging": [
        "TWOSPLIT_LOG_LEVEL",
        "TWOSPLIT_LOG_FORMAT",
    ],
    "tracing": [
        "OTLP_ENDPOINT",
        "ENVIRONMENT",
    ],
}


# =============================================================================
# Sensitive Keys (masked when logged)
# =============================================================================

SENSITIVE_KEYS = {
    "ANTHROPIC_API_KEY",
}


def get_default(key: str) -> Any:
    """Get the default value for a config key.

    Args:
        key: Configuration key name

    Returns:
        Default value, or None if key not found
    """
    return DEFAULTS.get(key)


def is_sensitive(key: str) -> bool:
    """Check if a config key contains sensitive data."""
    return key in SENSITIVE_KEYS


def get_category(key: str) -> str | None:
    """Get the category for a config key.

    Args:
        key: Configuration key name

    Returns:
        Category name, or None if not categorized
    """
    for category, keys in CONFIG_CATEGORIES.items():
        if key in keys:
            return category
    return None
