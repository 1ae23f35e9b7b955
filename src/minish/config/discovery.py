"""Config file discovery.

Lookup order:
  1. ``MINISH_CONFIG`` env var (used only if it names an existing file)
  2. Walk up from the start directory looking for ``minish.toml``
  3. User config at ``$XDG_CONFIG_HOME/minish/minish.toml``
"""

from __future__ import annotations

import os
from pathlib import Path

CONFIG_FILENAME = "minish.toml"
CONFIG_ENV_VAR = "MINISH_CONFIG"


def user_config_path() -> Path:
    """Per-user config location, honouring ``XDG_CONFIG_HOME``."""
    base = os.environ.get("XDG_CONFIG_HOME")
    root = Path(base) if base else Path.home() / ".config"
    return root / "minish" / CONFIG_FILENAME


def find_config(start: Path | None = None) -> Path | None:
    """Return the config file that applies to *start* (default: cwd), if any."""
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        p = Path(env_path)
        return p if p.is_file() else None

    current = (start or Path.cwd()).resolve()
    for directory in (current, *current.parents):
        candidate = directory / CONFIG_FILENAME
        if candidate.is_file():
            return candidate

    user_path = user_config_path()
    return user_path if user_path.is_file() else None
