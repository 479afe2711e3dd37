"""
bracketeer/config.py - Local configuration management

Reads user config from a platform-appropriate config directory:
  - macOS/Linux: ~/.bracketeer/config.toml
  - Windows: %APPDATA%\\bracketeer\\config.toml

Example:
    [account]
    api_key = "your-challonge-api-key"
    subdomain = "myorg"  # Omit for personal tournaments

    [http]
    base_url = "https://api.challonge.com/v1/"
    timeout = 30  # Seconds; omit to block until the server answers

The API key can also come from the CHALLONGE_API_KEY environment variable,
which wins over the file.
"""

import logging
import os
import sys
import tomllib
from dataclasses import dataclass
from pathlib import Path

from .builder import DEFAULT_BASE_URL
from .errors import BadApiKeyError

logger = logging.getLogger(__name__)

# ============================================================================
# Constants
# ============================================================================

API_KEY_ENV = "CHALLONGE_API_KEY"


def _get_config_dir() -> Path:
    """Get platform-appropriate config directory."""
    if sys.platform == "win32":
        appdata = os.environ.get("APPDATA")
        if appdata:
            return Path(appdata) / "bracketeer"
    return Path.home() / ".bracketeer"


CONFIG_DIR = _get_config_dir()
CONFIG_PATH = CONFIG_DIR / "config.toml"


# ============================================================================
# Data Types
# ============================================================================


@dataclass
class BracketeerConfig:
    """Top-level configuration."""

    api_key: str | None = None
    subdomain: str | None = None
    base_url: str = DEFAULT_BASE_URL
    timeout: float | None = None


# ============================================================================
# Parsing
# ============================================================================


def _section(raw: dict, name: str) -> dict:
    data = raw.get(name, {})
    return data if isinstance(data, dict) else {}


def _parse_timeout(value) -> float | None:
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, (int, float)) or value <= 0:
        logger.warning(f"Ignoring invalid [http] timeout: {value!r}")
        return None
    return float(value)


def load_config(path: Path | None = None) -> BracketeerConfig:
    """
    Read config from TOML file.

    Args:
        path: Override config file path (default: ~/.bracketeer/config.toml)

    Returns:
        BracketeerConfig. Missing file or bad TOML returns empty config.
    """
    config_path = path or CONFIG_PATH

    if not config_path.exists():
        return BracketeerConfig()

    try:
        with open(config_path, "rb") as f:
            raw = tomllib.load(f)
    except Exception as e:
        logger.warning(f"Failed to parse {config_path}: {e}")
        return BracketeerConfig()

    account = _section(raw, "account")
    http = _section(raw, "http")

    return BracketeerConfig(
        api_key=account.get("api_key") or None,
        subdomain=account.get("subdomain") or None,
        base_url=http.get("base_url") or DEFAULT_BASE_URL,
        timeout=_parse_timeout(http.get("timeout")),
    )


def resolve_api_key(
    explicit: str | None = None,
    config: BracketeerConfig | None = None,
) -> str:
    """
    Pick the API key: explicit argument, then CHALLONGE_API_KEY, then config.

    Raises:
        BadApiKeyError: no key anywhere
    """
    key = explicit or os.environ.get(API_KEY_ENV)
    if not key and config is not None:
        key = config.api_key
    if not key:
        raise BadApiKeyError(
            f"no API key configured (set {API_KEY_ENV} or [account] api_key in {CONFIG_PATH})"
        )
    return key
