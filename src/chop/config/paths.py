"""Path management for chop.

User state lives under a single base directory, overridable with the
CHOP_HOME environment variable. Default: ~/.chop
"""

import os
from pathlib import Path

ENV_VAR = "CHOP_HOME"


def get_chop_home() -> Path:
    """Get the base directory for chop configuration.

    Resolution order:
    1. CHOP_HOME environment variable (if set)
    2. ~/.chop
    """
    if env_home := os.environ.get(ENV_VAR):
        return Path(env_home).expanduser().resolve()
    return Path.home() / ".chop"


def get_config_path() -> Path:
    """Get the default config file path."""
    return get_chop_home() / "config.toml"
