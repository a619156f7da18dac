"""Common utility functions."""

from typing import Final

# Size constants
BYTES_PER_KB: Final = 1024
BYTES_PER_MB: Final = BYTES_PER_KB * 1024

# Size units
SIZE_UNITS: Final = [
    ("B", 1),
    ("KB", BYTES_PER_KB),
    ("MB", BYTES_PER_MB),
]


def format_bytes(bytes_: float) -> str:
    """Format a byte count into human readable form.

    Args:
        bytes_: Number of bytes to format

    Returns:
        str: Formatted string with appropriate unit
    """
    if bytes_ < BYTES_PER_KB:
        return f"{int(bytes_)} B"
    for unit, divisor in SIZE_UNITS[1:]:
        if bytes_ < divisor * BYTES_PER_KB:
            return f"{bytes_ / divisor:.1f} {unit}"
    return f"{bytes_ / BYTES_PER_MB:.1f} MB"


def format_frame(frame: bytes) -> str:
    """Render a protocol frame as space separated hex bytes for logging."""
    return frame.hex(" ") if frame else "<empty>"
