"""XDG-compliant path management for overwriter.

XDG default:
- Config: ~/.config/overwriter/
"""

import os
from pathlib import Path

APP_NAME = "overwriter"

CONFIG_FILENAME = "config.toml"


def get_config_dir() -> Path:
    """Get the configuration directory path.

    Returns:
        Path to ~/.config/overwriter/ (or XDG_CONFIG_HOME/overwriter/).
    """
    base = os.environ.get("XDG_CONFIG_HOME")
    if base:
        return Path(base) / APP_NAME
    return Path.home() / ".config" / APP_NAME


def get_config_path() -> Path:
    """Get the default configuration file path.

    Returns:
        Path to ~/.config/overwriter/config.toml.
    """
    return get_config_dir() / CONFIG_FILENAME
