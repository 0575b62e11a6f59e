"""Configuration model and I/O.

Configuration is stored in ~/.config/overwriter/config.toml and holds
the reconciliation defaults plus the CLI color theme. A missing file
means defaults.

Example::

    [reconcile]
    sidecar_suffix = ".meta"
    exclude = [".DS_Store", "Thumbs.db"]
    skip_identical = true
    cleanup_empty_dirs = true

    [colors]
    replace = "#f5b332"
"""

import os
import tomllib
from pathlib import Path
from tempfile import NamedTemporaryFile
from typing import Annotated, Any

import tomli_w
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from overwriter.core.paths import get_config_path
from overwriter.core.theme import ThemeColors

DEFAULT_EXCLUDE: list[str] = [".DS_Store", "Thumbs.db", "desktop.ini"]


class ReconcileSettings(BaseModel):
    """Defaults applied to every reconciliation run.

    Attributes:
        sidecar_suffix: Suffix of sidecar files; empty string disables sidecars.
        exclude: File name glob patterns left out of snapshots.
        skip_identical: Resolve byte-identical conflicts without asking.
        cleanup_empty_dirs: Remove directories emptied by consumed files.
    """

    model_config = ConfigDict(extra="forbid")

    sidecar_suffix: Annotated[
        str,
        Field(description="Sidecar file suffix (empty = no sidecars)"),
    ] = ".meta"
    exclude: Annotated[
        list[str],
        Field(default_factory=lambda: list(DEFAULT_EXCLUDE), description="Excluded name patterns"),
    ]
    skip_identical: Annotated[
        bool,
        Field(description="Skip identical files without prompting"),
    ] = True
    cleanup_empty_dirs: Annotated[
        bool,
        Field(description="Remove emptied incoming directories"),
    ] = True

    @field_validator("sidecar_suffix")
    @classmethod
    def validate_suffix(cls, v: str) -> str:
        """Validate that the suffix is a plain file name suffix."""
        if "/" in v or "\\" in v:
            msg = f"sidecar_suffix must not contain path separators: {v!r}"
            raise ValueError(msg)
        return v


class OverwriterConfig(BaseModel):
    """Top-level configuration file model."""

    model_config = ConfigDict(extra="forbid")

    reconcile: Annotated[
        ReconcileSettings,
        Field(default_factory=ReconcileSettings, description="Reconciliation defaults"),
    ]
    colors: Annotated[
        ThemeColors,
        Field(default_factory=ThemeColors, description="CLI color theme"),
    ]


class ConfigError(Exception):
    """Base exception for configuration errors."""


class ConfigParseError(ConfigError):
    """Raised when the configuration file cannot be parsed."""


def load_config(path: Path | None = None) -> OverwriterConfig:
    """Load configuration from a TOML file.

    Args:
        path: Path to the config file. If None, uses the default path.

    Returns:
        Validated configuration; defaults if the file does not exist.

    Raises:
        ConfigParseError: If the TOML syntax is invalid.
        ConfigError: If the file cannot be read or the content is invalid.
    """
    config_path = path or get_config_path()

    if not config_path.exists():
        return OverwriterConfig()

    try:
        with open(config_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigParseError(f"Invalid TOML syntax in {config_path}: {e}") from e
    except OSError as e:
        raise ConfigError(f"Failed to read config: {e}") from e

    try:
        return OverwriterConfig.model_validate(data)
    except (ValueError, ValidationError) as e:
        raise ConfigError(f"Invalid config content: {e}") from e


def save_config(config: OverwriterConfig, path: Path | None = None) -> Path:
    """Save configuration to a TOML file.

    The file is written atomically by first writing to a temporary file
    and then using os.replace() for atomic rename.

    Args:
        config: The configuration to save.
        path: Path to save the config. If None, uses the default path.

    Returns:
        Path where the config was saved.

    Raises:
        ConfigError: If the file cannot be written.
    """
    config_path = path or get_config_path()
    data = config_to_dict(config)

    tmp_path: Path | None = None
    try:
        config_path.parent.mkdir(parents=True, exist_ok=True)
        with NamedTemporaryFile(
            mode="wb",
            dir=config_path.parent,
            delete=False,
            suffix=".tmp",
        ) as f:
            tmp_path = Path(f.name)
            tomli_w.dump(data, f)
        os.replace(str(tmp_path), str(config_path))
    except OSError as e:
        if tmp_path is not None and tmp_path.exists():
            tmp_path.unlink()
        raise ConfigError(f"Failed to write config: {e}") from e

    return config_path


def config_to_dict(config: OverwriterConfig) -> dict[str, Any]:
    """Convert the configuration to a dictionary for TOML serialization."""
    return config.model_dump(mode="json")
