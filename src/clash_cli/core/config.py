"""Runtime configuration for the Clash control client.

The configuration is built once when the CLI starts and handed to every
command through the Typer context. Defaults point at the conventional
per-user Clash directory and the controller on its loopback port; the
``CLASH_CLI_*`` environment variables override them, which is mostly
useful for pointing the client at a mock controller.

Example:
    config = ClashConfig.from_env()
    print(config.api_base_url)  # http://127.0.0.1:9090
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Final

DEFAULT_API_PORT: Final = 9090
DEFAULT_API_BASE_URL: Final = f"http://127.0.0.1:{DEFAULT_API_PORT}"

CONFIG_DIR_ENV: Final = "CLASH_CLI_CONFIG_DIR"
API_URL_ENV: Final = "CLASH_CLI_API_URL"


def default_config_dir() -> Path:
    """Return the per-user Clash configuration directory."""
    return Path.home() / ".config" / "clash"


@dataclass(frozen=True)
class ClashConfig:
    """Settings shared by all commands.

    Attributes:
        config_dir: Directory holding the ``*.yaml``/``*.yml`` profiles
        api_base_url: Base URL of the external controller, without trailing slash
    """

    config_dir: Path
    api_base_url: str = DEFAULT_API_BASE_URL

    @classmethod
    def from_env(cls) -> "ClashConfig":
        """Build the configuration from defaults and environment overrides."""
        config_dir = os.environ.get(CONFIG_DIR_ENV)
        api_base_url = os.environ.get(API_URL_ENV) or DEFAULT_API_BASE_URL
        return cls(
            config_dir=Path(config_dir).expanduser() if config_dir else default_config_dir(),
            api_base_url=api_base_url.rstrip("/"),
        )
