"""Command-line client for the Clash external controller API."""

import pathlib
import tomllib


def get_version() -> str:
    """Read version from pyproject.toml."""
    current_dir = pathlib.Path(__file__).parent
    # Look for pyproject.toml in parent directories
    for parent in [current_dir] + list(current_dir.parents):
        pyproject_path = parent / "pyproject.toml"
        if pyproject_path.exists():
            with pyproject_path.open("rb") as f:
                pyproject_data = tomllib.load(f)
            return pyproject_data.get("project", {}).get("version", "0.0.0")

    # Fallback version if file not found
    return "0.0.0"


__version__ = get_version()
