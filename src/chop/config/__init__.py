"""Configuration module."""

from chop.config.loader import get_default_config, load_config
from chop.config.models import ChopConfig, SelectorConfig
from chop.config.paths import get_chop_home, get_config_path
from chop.errors import ConfigError

__all__ = [
    "ChopConfig",
    "ConfigError",
    "SelectorConfig",
    "get_chop_home",
    "get_config_path",
    "get_default_config",
    "load_config",
]
