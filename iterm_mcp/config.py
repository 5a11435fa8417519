"""Config loading and saving.

Configuration lives in ~/.config/iterm-mcp/config.json unless the
ITERM_MCP_CONFIG environment variable or an explicit path names another
file. A missing file means defaults.
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path

import dacite

from .exceptions import (
    ConfigLoadError,
    ConfigSaveError,
    ConfigValidationError,
    record_error,
)
from .models import AppConfig, model_to_dict

logger = logging.getLogger(__name__)

# Configuration file locations
CONFIG_DIR = Path.home() / ".config" / "iterm-mcp"
GLOBAL_CONFIG_PATH = CONFIG_DIR / "config.json"
CONFIG_ENV_VAR = "ITERM_MCP_CONFIG"


def get_config_dir() -> Path:
    """Get the configuration directory path."""
    return CONFIG_DIR


def get_config_path(path: str | Path | None = None) -> Path:
    """Resolve which config file to use.

    An explicit ``path`` wins over ITERM_MCP_CONFIG, which wins over the
    default location.
    """
    if path:
        return Path(path).expanduser()
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        return Path(env_path).expanduser()
    return GLOBAL_CONFIG_PATH


def load_config_from_dict(data: dict) -> AppConfig:
    """Build an AppConfig from parsed JSON.

    Raises:
        ConfigValidationError: If the data does not match the schema.
    """
    try:
        config = dacite.from_dict(
            data_class=AppConfig,
            data=data,
            config=dacite.Config(strict=True, cast=[float]),
        )
    except (dacite.DaciteError, TypeError, ValueError) as e:
        logger.error("Config schema validation failed: %s", e)
        record_error(e)
        raise ConfigValidationError(
            f"Config schema validation failed: {e}",
            cause=e,
        ) from e

    settings = config.settings
    for name in ("preview_chars", "preview_lines", "poll_interval_ms"):
        value = getattr(settings, name)
        if value <= 0:
            raise ConfigValidationError(
                f"{name} must be positive",
                field=name,
                value=value,
                context={"expected": "positive integer"},
            )
    if settings.default_read_lines < 0:
        raise ConfigValidationError(
            "default_read_lines must not be negative",
            field="default_read_lines",
            value=settings.default_read_lines,
        )
    if settings.command_settle_seconds < 0:
        raise ConfigValidationError(
            "command_settle_seconds must not be negative",
            field="command_settle_seconds",
            value=settings.command_settle_seconds,
        )
    return config


def load_config(path: str | Path | None = None) -> AppConfig:
    """
    Load application configuration.

    Args:
        path: Explicit config file; see get_config_path for the fallbacks.

    Returns:
        AppConfig instance, defaults when the file does not exist.

    Raises:
        ConfigLoadError: If the file exists but cannot be read or parsed.
        ConfigValidationError: If the contents do not match the schema.
    """
    config_path = get_config_path(path)

    if not config_path.exists():
        logger.debug("No config found at %s, using defaults", config_path)
        return AppConfig()

    try:
        with open(config_path, encoding="utf-8") as f:
            data = json.load(f)
        logger.debug("Loaded config from %s", config_path)
    except json.JSONDecodeError as e:
        logger.error("Invalid JSON in config file: %s", e)
        record_error(e)
        raise ConfigLoadError(
            f"Invalid JSON in config file at line {e.lineno}",
            file_path=str(config_path),
            context={"line": e.lineno, "column": e.colno},
            cause=e,
        ) from e
    except OSError as e:
        logger.error("Failed to read config file: %s", e)
        record_error(e)
        raise ConfigLoadError(
            "Failed to read config file",
            file_path=str(config_path),
            cause=e,
        ) from e

    if not isinstance(data, dict):
        raise ConfigValidationError(
            "Config file must contain a JSON object",
            context={"file_path": str(config_path)},
        )

    return load_config_from_dict(data)


def save_config(config: AppConfig, path: str | Path | None = None) -> Path:
    """
    Save application configuration.

    Args:
        config: AppConfig instance to save.
        path: Explicit config file; see get_config_path for the fallbacks.

    Returns:
        The path written.

    Raises:
        ConfigSaveError: If the config cannot be saved.
    """
    config_path = get_config_path(path)

    try:
        config_path.parent.mkdir(parents=True, exist_ok=True)
        with open(config_path, "w", encoding="utf-8") as f:
            json.dump(model_to_dict(config), f, indent=2)
        logger.debug("Saved config to %s", config_path)
    except OSError as e:
        logger.error("Failed to write config file: %s", e)
        record_error(e)
        raise ConfigSaveError(
            "Failed to write config file",
            file_path=str(config_path),
            cause=e,
        ) from e

    return config_path
