"""TOML configuration loader.

Files are optional: a client embedded in another application often ships
no config directory, in which case only defaults and PARLEY_* variables
apply.
"""

import os
import tomllib
from pathlib import Path
from typing import Any

CONFIG_DIR_ENV = "PARLEY_CONFIG_DIR"
ENVIRONMENT_ENV = "PARLEY_ENV"
SEARCH_DEPTH = 5


def get_config_dir() -> Path | None:
    """Locate the configuration directory.

    PARLEY_CONFIG_DIR wins when set and must exist. Otherwise the nearest
    'config/' directory from the working directory upwards is used.

    Returns:
        Directory path, or None when no config directory is found

    Raises:
        FileNotFoundError: If PARLEY_CONFIG_DIR points to a missing directory
    """
    explicit = os.environ.get(CONFIG_DIR_ENV)
    if explicit:
        path = Path(explicit)
        if not path.is_dir():
            raise FileNotFoundError(f"Config directory not found: {explicit}")
        return path

    current = Path.cwd()
    for _ in range(SEARCH_DEPTH):
        candidate = current / "config"
        if candidate.is_dir():
            return candidate
        if current.parent == current:
            break
        current = current.parent
    return None


def get_environment() -> str:
    """Get the current environment from PARLEY_ENV (default 'development')."""
    return os.environ.get(ENVIRONMENT_ENV, "development")


def load_toml(file_path: Path) -> dict[str, Any]:
    """Load a TOML file.

    Raises:
        FileNotFoundError: If the file doesn't exist
        tomllib.TOMLDecodeError: If the TOML syntax is invalid
    """
    if not file_path.exists():
        raise FileNotFoundError(f"Configuration file not found: {file_path}")

    with file_path.open("rb") as f:
        return tomllib.load(f)


def deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Merge two dictionaries recursively, override taking precedence.

    Neither input is modified.
    """
    result = dict(base)
    for key, value in override.items():
        current = result.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            result[key] = deep_merge(current, value)
        else:
            result[key] = value
    return result


def load_config() -> dict[str, Any]:
    """Load configuration from TOML files.

    Loading order:
    1. config/default.toml
    2. config/{PARLEY_ENV}.toml

    Both files are optional.
    """
    config_dir = get_config_dir()
    if config_dir is None:
        return {}

    config: dict[str, Any] = {}
    for name in ("default", get_environment()):
        path = config_dir / f"{name}.toml"
        if path.exists():
            config = deep_merge(config, load_toml(path))
    return config
