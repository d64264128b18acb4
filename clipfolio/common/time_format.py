"""Display helpers for clip timestamps."""

import math


def format_timestamp(seconds: float) -> str:
    """Format a position in seconds as ``M:SS``.

    Both components are floored, so ``59.9`` renders as ``0:59``. Only meant
    for display, never for comparisons.
    """
    mins = math.floor(seconds / 60)
    secs = math.floor(seconds % 60)
    return f"{mins}:{secs:02d}"


def format_duration(start: float, end: float) -> str:
    """Format the length of ``[start, end)`` as ``M:SS``."""
    return format_timestamp(end - start)
