"""Custom exceptions for the Clash control client.

This module defines the errors raised by the core components:
- Configuration directory and file lookup failures
- Connection failures towards the external controller
- Non-success responses from the external controller

The command layer catches them and turns them into user-facing messages,
so none of them ends the process with a traceback.

Example:
    try:
        client.set_mode("rule")
    except ApiResponseError as e:
        console.print(f"Failed to set mode: {e.body}")
"""


class ClashCliError(Exception):
    """Base exception for clash-cli errors."""


class ConfigDirectoryError(ClashCliError):
    """Raised when the configuration directory cannot be read."""


class ConfigNotFoundError(ClashCliError):
    """Raised when a configuration file does not exist."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Config file {name} does not exist")
        self.name = name


class ApiError(ClashCliError):
    """Base exception for external controller errors."""


class ApiConnectionError(ApiError):
    """Raised when the external controller cannot be reached."""


class ApiResponseError(ApiError):
    """Raised when the external controller answers with a non-success status."""

    def __init__(self, status_code: int, body: str) -> None:
        super().__init__(body)
        self.status_code = status_code
        self.body = body
