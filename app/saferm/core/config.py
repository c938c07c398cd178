"""safe-rm configuration.

This module provides the configuration model and I/O functions for the
user configuration file (``~/.config/safe-rm/config.toml`` unless
``SAFE_RM_CONFIG`` points elsewhere).

Two settings are supported:
- allow_project_deletion: skip version-control status checks for paths
  inside the project (default: true)
- allowed_paths: directories where deletion is always permitted,
  bypassing containment and status checks
"""

import logging
import os
import sys
import tomllib
from pathlib import Path
from tempfile import NamedTemporaryFile
from typing import Annotated

import tomli_w
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from saferm.core.paths import ensure_parent_dir, get_config_path
from saferm.gate.allowlist import AllowList

logger = logging.getLogger(__name__)

# Written by `saferm init`; must stay valid TOML and a valid SafeRmConfig
CONFIG_TEMPLATE = """\
# safe-rm configuration
# Location: ~/.config/safe-rm/config.toml (override with SAFE_RM_CONFIG)

# Skip git status checks for files inside the project.
# Set to false to refuse deleting modified, staged or untracked files.
allow_project_deletion = true

# Define directories where deletion is always permitted,
# bypassing project containment and git status checks.
# Supports tilde (~) expansion for the home directory.

# Allow recursive deletion under ~/.claude/skills
[[allowed_paths]]
path = "~/.claude/skills"
recursive = true

# Example: allow only direct children of /tmp/logs
# [[allowed_paths]]
# path = "/tmp/logs"
# recursive = false
"""


class AllowedPathEntry(BaseModel):
    """A directory where deletion is always permitted.

    Attributes:
        path: Directory path; may start with ``~``.
        recursive: Cover all descendants instead of direct children only.
    """

    model_config = ConfigDict(extra="ignore")

    path: Annotated[str, Field(min_length=1, description="Allowed directory")]
    recursive: Annotated[
        bool,
        Field(description="Allow descendants at any depth"),
    ] = False


class SafeRmConfig(BaseModel):
    """User configuration for safe-rm.

    Attributes:
        allow_project_deletion: Skip status checks inside the project.
        allowed_paths: Allow-list entries, in file order.
    """

    model_config = ConfigDict(extra="ignore")

    allow_project_deletion: Annotated[
        bool,
        Field(description="Skip git status checks for in-project paths"),
    ] = True
    allowed_paths: Annotated[
        list[AllowedPathEntry],
        Field(description="Directories where deletion is always permitted"),
    ] = []

    def has_entry(self, path: str, recursive: bool) -> bool:
        """Check if an identical allow-list entry is already configured."""
        return any(
            entry.path == path and entry.recursive == recursive for entry in self.allowed_paths
        )


class ConfigError(Exception):
    """Base exception for configuration errors."""


class ConfigParseError(ConfigError):
    """Raised when the config file cannot be parsed."""


def read_config(path: Path | None = None) -> SafeRmConfig:
    """Read and validate the configuration file.

    A missing file yields the default configuration.

    Args:
        path: Config file path. If None, uses the default location.

    Returns:
        Validated SafeRmConfig.

    Raises:
        ConfigParseError: If the TOML syntax is invalid.
        ConfigError: If the file cannot be read or fails validation.
    """
    config_path = path or get_config_path()

    try:
        with open(config_path, "rb") as f:
            data = tomllib.load(f)
    except FileNotFoundError:
        logger.debug("No config file at %s, using defaults", config_path)
        return SafeRmConfig()
    except tomllib.TOMLDecodeError as e:
        raise ConfigParseError(f"config parse error ({config_path}): {e}") from e
    except OSError as e:
        raise ConfigError(f"cannot read config ({config_path}): {e}") from e

    try:
        return SafeRmConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigParseError(f"config parse error ({config_path}): {e}") from e


def load_config(path: Path | None = None) -> SafeRmConfig:
    """Load configuration, degrading to defaults on any problem.

    Problems are logged and reported on stderr; they never abort a
    deletion run.

    Args:
        path: Config file path. If None, uses the default location.

    Returns:
        The configured SafeRmConfig, or defaults.
    """
    try:
        config = read_config(path)
    except ConfigError as e:
        logger.warning("Ignoring configuration: %s", e)
        print(f"safe-rm: warning: {e}", file=sys.stderr)
        return SafeRmConfig()

    logger.debug(
        "Loaded config: allow_project_deletion=%s, %d allowed path(s)",
        config.allow_project_deletion,
        len(config.allowed_paths),
    )
    return config


def save_config(config: SafeRmConfig, path: Path | None = None) -> Path:
    """Save configuration to a TOML file.

    The file is written atomically by first writing to a temporary file
    and then using os.replace() for atomic rename.

    Args:
        config: The configuration to save.
        path: Destination. If None, uses the default location.

    Returns:
        Path where the config was saved.

    Raises:
        ConfigError: If the file cannot be written.
    """
    config_path = path or get_config_path()

    try:
        ensure_parent_dir(config_path)
    except RuntimeError as e:
        raise ConfigError(str(e)) from e

    tmp_path: Path | None = None
    try:
        with NamedTemporaryFile(
            mode="wb",
            dir=config_path.parent,
            delete=False,
            suffix=".tmp",
        ) as f:
            tmp_path = Path(f.name)
            tomli_w.dump(config.model_dump(mode="python"), f)
        os.replace(tmp_path, config_path)
    except OSError as e:
        if tmp_path is not None and tmp_path.exists():
            tmp_path.unlink()
        raise ConfigError(f"Failed to write config: {e}") from e

    return config_path


def write_template(path: Path | None = None) -> Path | None:
    """Write CONFIG_TEMPLATE unless a config file already exists.

    Args:
        path: Destination. If None, uses the default location.

    Returns:
        Path written, or None if a file was already present.

    Raises:
        ConfigError: If the file cannot be written.
    """
    config_path = path or get_config_path()
    if config_path.exists():
        return None

    try:
        ensure_parent_dir(config_path)
        config_path.write_text(CONFIG_TEMPLATE, encoding="utf-8")
    except (RuntimeError, OSError) as e:
        raise ConfigError(f"Cannot write config file: {e}") from e

    return config_path


def build_allow_list(config: SafeRmConfig) -> AllowList:
    """Resolve the configured allow-list entries once."""
    return AllowList.from_entries(config.allowed_paths)
