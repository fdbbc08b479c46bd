"""Logging configuration for the Clash control client.

This module provides centralized logging configuration using Loguru.
It sets up logging to both stderr and a rotating log file. Command output
goes through the rich console instead, so the stderr handler stays quiet
unless ``--debug`` is given.
"""

import os
import sys
from pathlib import Path

from loguru import logger

LOG_DIR_ENV = "CLASH_CLI_LOG_DIR"


def get_log_dir() -> Path:
    """Return the log directory, creating it if needed."""
    override = os.environ.get(LOG_DIR_ENV)
    log_dir = Path(override) if override else Path.home() / ".clash-cli" / "logs"
    log_dir.mkdir(parents=True, exist_ok=True)
    return log_dir


def configure_logging(debug: bool = False) -> None:
    """Install the stderr and file handlers.

    Args:
        debug: Log everything to stderr instead of warnings only
    """
    logger.remove()  # Remove default handler

    logger.add(
        sys.stderr,
        format=(
            "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
            "<level>{level: <8}</level> | "
            "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - "
            "<level>{message}</level>"
        ),
        level="DEBUG" if debug else "WARNING",
        backtrace=debug,
        diagnose=debug,
    )

    # Add file handler with rotation
    logger.add(
        get_log_dir() / "clash-cli.log",
        rotation="10 MB",
        retention="1 week",
        compression="zip",
        format=(
            "{time:YYYY-MM-DD HH:mm:ss} | "
            "{level: <8} | "
            "{name}:{function}:{line} - "
            "{message}"
        ),
        level="DEBUG",
    )


__all__ = ["configure_logging", "get_log_dir", "logger", "LOG_DIR_ENV"]
