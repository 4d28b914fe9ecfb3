"""Time formatting helpers shared by the timer display and history views."""

from __future__ import annotations

from datetime import datetime


def format_time(total_seconds: int) -> str:
    """Format seconds as ``H:MM:SS`` when an hour or more, else ``MM:SS``.

    Examples:
        >>> format_time(1500)
        '25:00'
        >>> format_time(7265)
        '2:01:05'
    """
    total_seconds = max(0, int(total_seconds))
    hours, rest = divmod(total_seconds, 3600)
    minutes, seconds = divmod(rest, 60)

    if hours > 0:
        return f"{hours}:{minutes:02d}:{seconds:02d}"
    return f"{minutes:02d}:{seconds:02d}"


def get_duration_text(seconds: int) -> str:
    """Human readable duration: ``1h 30m``, ``2 hours``, ``25 min``."""
    total_minutes = max(0, int(seconds)) // 60
    hours, minutes = divmod(total_minutes, 60)

    if hours > 0:
        if minutes > 0:
            return f"{hours}h {minutes}m"
        return f"{hours} hour{'s' if hours > 1 else ''}"
    return f"{total_minutes} min"


def get_progress(time_left: int, original_time: int) -> int:
    """Percentage (0-100) of the countdown already consumed."""
    if original_time == 0:
        return 0
    return round((original_time - time_left) / original_time * 100)


def format_timestamp(moment: datetime | None = None) -> str:
    """Time of day as shown in the session history, e.g. ``02:05:09 PM``."""
    moment = moment or datetime.now()
    return moment.strftime("%I:%M:%S %p")


def format_date(moment: datetime | None = None) -> str:
    """Calendar date as shown in the session history, e.g. ``Mon Oct 19 2026``."""
    moment = moment or datetime.now()
    return moment.strftime("%a %b %d %Y")
