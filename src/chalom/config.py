"""Configuration loading for chalom.

Settings live in ``~/.chalom/config.yaml`` (or ``$CHALOM_HOME/config.yaml``).
A missing or broken config file means defaults, never an error.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path

import yaml

DEFAULT_CHANGELOG = "changelog.md"


@dataclass
class Config:
    """Application configuration."""

    changelog: str = DEFAULT_CHANGELOG
    log_level: str = "WARNING"

    @property
    def changelog_path(self) -> Path:
        """Returns the default changelog path, with ``~`` expanded."""
        return Path(self.changelog).expanduser()

    @property
    def level(self) -> int:
        """Numeric logging level; unknown names mean WARNING."""
        value = logging.getLevelName(self.log_level.upper())
        return value if isinstance(value, int) else logging.WARNING


def chalom_home() -> Path:
    """Return the chalom home directory."""
    env = os.environ.get("CHALOM_HOME")
    if env:
        return Path(env)
    return Path.home() / ".chalom"


def config_path() -> Path:
    return chalom_home() / "config.yaml"


def load_config(path: Path | None = None) -> Config:
    """Load config from ``config.yaml``, keeping defaults for anything unusable."""
    config_file = path or config_path()
    cfg = Config()

    if not config_file.exists():
        return cfg

    try:
        with open(config_file, encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError):
        data = {}

    if not isinstance(data, dict):
        return cfg

    changelog = data.get("changelog")
    if isinstance(changelog, str) and changelog.strip():
        cfg.changelog = changelog.strip()
    log_level = data.get("log_level")
    if isinstance(log_level, str) and log_level.strip():
        cfg.log_level = log_level.strip()

    return cfg
