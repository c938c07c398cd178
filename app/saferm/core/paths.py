"""Locations of safe-rm's per-user files.

Everything lives under ``$XDG_CONFIG_HOME/safe-rm`` (``~/.config/safe-rm``
when the variable is unset or empty). ``SAFE_RM_CONFIG`` replaces the
config file location outright.
"""

import os
from pathlib import Path

APP_NAME = "safe-rm"
CONFIG_ENV_VAR = "SAFE_RM_CONFIG"
CONFIG_FILENAME = "config.toml"
THEME_FILENAME = "theme.toml"


def get_config_dir() -> Path:
    """Directory holding the config and theme files."""
    xdg_home = os.environ.get("XDG_CONFIG_HOME")
    base = Path(xdg_home) if xdg_home else Path.home() / ".config"
    return base / APP_NAME


def get_config_path() -> Path:
    """Config file to read and write.

    Returns:
        The ``SAFE_RM_CONFIG`` path when set and non-empty, otherwise
        ``config.toml`` inside ``get_config_dir()``.
    """
    override = os.environ.get(CONFIG_ENV_VAR)
    return Path(override) if override else get_config_dir() / CONFIG_FILENAME


def get_user_theme_path() -> Path:
    """Optional per-user color overrides."""
    return get_config_dir() / THEME_FILENAME


def ensure_parent_dir(path: Path) -> Path:
    """Make sure the directory that will contain ``path`` exists.

    Returns:
        The parent directory.

    Raises:
        RuntimeError: If the directory cannot be created.
    """
    parent = path.parent
    try:
        parent.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        reason = "Permission denied" if isinstance(e, PermissionError) else str(e)
        msg = f"Cannot create config directory {parent}: {reason}"
        raise RuntimeError(msg) from e
    return parent
