"""Configuration loading from TOML files and environment variables."""

import logging
import os
import tomllib
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from chop.config.models import ChopConfig
from chop.config.paths import get_config_path
from chop.errors import ConfigError

logger = logging.getLogger(__name__)

SELECTOR_ENV_VAR = "CHOP_SELECTOR"


def _resolve_env_overrides(config: dict[str, Any]) -> dict[str, Any]:
    """Apply environment variables over values from the config file."""
    if command := os.environ.get(SELECTOR_ENV_VAR):
        selector = config.get("selector")
        if not isinstance(selector, dict):
            selector = {}
        config["selector"] = {**selector, "command": command}
    return config


def load_config(path: Path | None = None) -> ChopConfig:
    """Load configuration from a TOML file.

    Args:
        path: Explicit path to config file. If None, the default location is
            used when it exists, otherwise built-in defaults apply.

    Returns:
        Validated ChopConfig instance.

    Raises:
        ConfigError: If an explicit path is missing, or the file is invalid.
    """
    if path is not None:
        config_path: Path | None = Path(path).expanduser()
        if not config_path.exists():
            raise ConfigError(f"Config file not found: {config_path}")
    else:
        default_path = get_config_path()
        config_path = default_path if default_path.exists() else None

    raw_config: dict[str, Any] = {}
    if config_path is not None:
        try:
            with config_path.open("rb") as f:
                raw_config = tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            raise ConfigError(f"Invalid config file {config_path}: {e}") from e
        except OSError as e:
            raise ConfigError(f"Cannot read config file {config_path}: {e}") from e
        logger.debug("config_loaded", extra={"config_path": str(config_path)})

    raw_config = _resolve_env_overrides(raw_config)

    try:
        return ChopConfig.model_validate(raw_config)
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration: {e}") from e


def get_default_config() -> ChopConfig:
    """Get the built-in default configuration."""
    return ChopConfig()
