"""Pytest configuration and shared fixtures.

This module contains fixtures used across all test modules.
"""

from collections.abc import Callable
from pathlib import Path

import pytest

TreeWriter = Callable[[Path, dict[str, bytes | str]], Path]


def write_tree(root: Path, files: dict[str, bytes | str]) -> Path:
    """Create files under root from a {relative path: content} mapping."""
    for relative, content in files.items():
        target = root / relative
        target.parent.mkdir(parents=True, exist_ok=True)
        if isinstance(content, bytes):
            target.write_bytes(content)
        else:
            target.write_text(content)
    return root


@pytest.fixture
def make_tree() -> TreeWriter:
    """Return a helper that writes a file tree."""
    return write_tree


@pytest.fixture(autouse=True)
def isolated_config_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point XDG_CONFIG_HOME at a temporary directory."""
    config_home = tmp_path / "xdg-config"
    monkeypatch.setenv("XDG_CONFIG_HOME", str(config_home))
    return config_home


@pytest.fixture
def incoming(tmp_path: Path) -> Path:
    """Empty directory for incoming files."""
    path = tmp_path / "incoming"
    path.mkdir()
    return path


@pytest.fixture
def existing(tmp_path: Path) -> Path:
    """Empty directory for existing files."""
    path = tmp_path / "existing"
    path.mkdir()
    return path
