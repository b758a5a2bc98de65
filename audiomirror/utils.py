"""Utility functions for audiomirror."""

from datetime import datetime
from typing import Optional

# Timestamp formats used in log lines and run summaries
LOG_TIME_FORMAT = "%H:%M:%S"
RUN_TIME_FORMAT = "%Y-%m-%d %H:%M:%S"


def format_duration(seconds: float) -> str:
    """Format an elapsed duration as hours, minutes and seconds.

    Args:
        seconds: Duration in seconds (fractions are truncated)

    Returns:
        Formatted duration string

    Examples:
        >>> format_duration(0)
        '0h 0m 0s'
        >>> format_duration(3725.9)
        '1h 2m 5s'
    """
    total = max(0, int(seconds))
    return f"{total // 3600}h {(total // 60) % 60}m {total % 60}s"


def format_run_time(moment: Optional[datetime] = None) -> str:
    """Format a wall-clock time for start/finish lines.

    Args:
        moment: Time to format (defaults to now)

    Returns:
        Time formatted as "YYYY-MM-DD HH:MM:SS"
    """
    return (moment or datetime.now()).strftime(RUN_TIME_FORMAT)


def format_counters(examined: int, transcoded: int, linked: int) -> str:
    """Format the three run counters the way they are reported.

    Examples:
        >>> format_counters(3, 1, 2)
        'Files examined/transcoded/linked: 3 / 1 / 2'
    """
    return f"Files examined/transcoded/linked: {examined} / {transcoded} / {linked}"
