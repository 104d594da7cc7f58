"""
Shared utility functions for vttstream.

Provides the WebVTT timestamp grammar and small helpers for rendering
blocks in diagnostics.
"""

import re
from typing import List, Optional

# [HH:]MM:SS.mmm - hours take two or more digits, everything else is fixed width.
_TIMESTAMP_PATTERN = re.compile(
    r'(?:(?P<hours>[0-9]{2,}):)?(?P<minutes>[0-9]{2}):(?P<seconds>[0-9]{2})\.(?P<millis>[0-9]{3})'
)


def timestamp_to_ms(timestamp: str) -> Optional[int]:
    """
    Convert a WebVTT cue timestamp to milliseconds.

    Args:
        timestamp: Timestamp string in [HH:]MM:SS.mmm format

    Returns:
        Time in milliseconds, or None if the string is not a valid timestamp

    Example:
        >>> timestamp_to_ms("00:01:30.500")
        90500
        >>> timestamp_to_ms("01:30.500")
        90500
        >>> timestamp_to_ms("1:30.500") is None
        True
    """
    match = _TIMESTAMP_PATTERN.fullmatch(timestamp)
    if not match:
        return None

    hours = int(match.group('hours') or 0)
    minutes = int(match.group('minutes'))
    seconds = int(match.group('seconds'))
    millis = int(match.group('millis'))

    if minutes > 59 or seconds > 59:
        return None

    return ((hours * 60 + minutes) * 60 + seconds) * 1000 + millis


def ms_to_timestamp(ms: int) -> str:
    """
    Convert milliseconds to HH:MM:SS.mmm format.

    Hours are zero-padded to two digits and grow as needed.

    Example:
        >>> ms_to_timestamp(90500)
        '00:01:30.500'
    """
    hours, remainder = divmod(ms, 3600 * 1000)
    minutes, remainder = divmod(remainder, 60 * 1000)
    seconds, millis = divmod(remainder, 1000)
    return f"{hours:02d}:{minutes:02d}:{seconds:02d}.{millis:03d}"


def block_to_string(block: List[str]) -> str:
    """Render a block for log output."""
    out = " --- BLOCK START ---\n"
    for line in block:
        out += f"    {line}\n"
    out += " --- BLOCK END ---"
    return out
