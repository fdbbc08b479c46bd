"""Utility functions and helpers."""

from clash_cli.core.utils.log_config import configure_logging, get_log_dir
from clash_cli.core.utils.utils import delay_style, format_delay

__all__ = ["configure_logging", "delay_style", "format_delay", "get_log_dir"]
