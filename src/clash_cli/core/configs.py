"""Configuration file discovery.

Clash profiles are plain YAML files kept side by side in a single flat
directory. This module lists them and resolves a user-supplied name to
the absolute path the controller expects.
"""

from pathlib import Path
from typing import Final

from loguru import logger

from clash_cli.core.exceptions import ConfigDirectoryError, ConfigNotFoundError

CONFIG_SUFFIXES: Final = (".yaml", ".yml")


def is_config_name(name: str) -> bool:
    return name.endswith(CONFIG_SUFFIXES)


def list_config_files(config_dir: Path) -> list[str]:
    """List configuration file names in ``config_dir``.

    Args:
        config_dir: Directory to scan

    Returns:
        list[str]: Sorted names of regular entries ending in ``.yaml`` or ``.yml``

    Raises:
        ConfigDirectoryError: If the directory cannot be read
    """
    try:
        entries = sorted(config_dir.iterdir(), key=lambda p: p.name)
    except OSError as e:
        logger.debug(f"Cannot read config directory {config_dir}: {e}")
        raise ConfigDirectoryError(str(e)) from e

    return [entry.name for entry in entries if not entry.is_dir() and is_config_name(entry.name)]


def normalize_config_name(name: str) -> str:
    """Append ``.yaml`` unless the name already carries a YAML suffix."""
    return name if is_config_name(name) else f"{name}.yaml"


def resolve_config_path(config_dir: Path, name: str) -> Path:
    """Resolve a configuration name to an existing absolute path.

    Raises:
        ConfigNotFoundError: If no such file exists in ``config_dir``
    """
    file_name = normalize_config_name(name)
    path = (config_dir / file_name).absolute()
    if not path.exists():
        logger.debug(f"Config file not found: {path}")
        raise ConfigNotFoundError(file_name)
    return path
