"""Common utility functions."""

from typing import Final

# Latency thresholds in milliseconds
FAST_DELAY_MS: Final = 200
SLOW_DELAY_MS: Final = 500


def format_delay(delay: float) -> str:
    """Format a delay in milliseconds with no decimals.

    Args:
        delay: Delay reported by the controller

    Returns:
        str: Delay such as ``"123 ms"``
    """
    return f"{delay:.0f} ms"


def delay_style(delay: float) -> str:
    """Pick a rich style for a delay value."""
    if delay < FAST_DELAY_MS:
        return "green"
    if delay < SLOW_DELAY_MS:
        return "yellow"
    return "red"
