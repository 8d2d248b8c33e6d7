"""Display formatting for raw provider counters."""

import math
from datetime import datetime
from typing import Any, Optional


def _to_number(value: Any) -> float:
    """Coerce an untrusted counter to a finite float, treating junk as zero."""
    if isinstance(value, bool) or value is None:
        return 0.0
    try:
        number = float(value)
    except (TypeError, ValueError, OverflowError):
        return 0.0
    return number if math.isfinite(number) else 0.0


def format_views(views: Any) -> str:
    """
    Format a view counter as a short display string.

    Args:
        views: Raw view count (int, float or numeric string)

    Returns:
        "1.5M", "12.3K", "500", or "0" for missing/non-positive input
    """
    count = _to_number(views)
    if count <= 0:
        return "0"
    if count >= 1_000_000:
        return f"{count / 1_000_000:.1f}M"
    if count >= 1_000:
        return f"{count / 1_000:.1f}K"
    return str(int(count))


def format_duration(seconds: Any) -> str:
    """
    Format a duration in seconds as H:MM:SS or M:SS.

    Args:
        seconds: Raw duration in seconds

    Returns:
        "1:01:01", "1:30", or "00:00" for missing/non-positive input
    """
    total = int(_to_number(seconds))
    if total <= 0:
        return "00:00"

    hours, remainder = divmod(total, 3600)
    minutes, secs = divmod(remainder, 60)
    if hours > 0:
        return f"{hours}:{minutes:02d}:{secs:02d}"
    return f"{minutes}:{secs:02d}"


def format_date(value: Any) -> Optional[str]:
    """
    Format an ISO 8601 timestamp as M/D/YYYY.

    Returns None when the value is missing or unparseable so callers can
    substitute their own placeholder.
    """
    if not isinstance(value, str) or not value:
        return None
    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return None
    return f"{parsed.month}/{parsed.day}/{parsed.year}"
