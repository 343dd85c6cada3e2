"""Formatter for departure times."""

import math
from datetime import datetime, timedelta
from zoneinfo import ZoneInfo

# Icons per transport type display name
TRANSPORT_ICONS = {
    "Bahn": "🚆",
    "S-Bahn": "🚆",
    "U-Bahn": "🚇",
    "Tram": "🚊",
    "Bus": "🚍",
    "Regionalbus": "🚍",
    "Schiff": "🛳",
    "Ruftaxi": "🚖",
}


class DepartureFormatter:
    """Formats times and durations for display in a given timezone."""

    def __init__(self, timezone: str = "Europe/Berlin") -> None:
        """Initialize the formatter.

        Args:
            timezone: IANA timezone name departure times are shown in.
        """
        self._tz = ZoneInfo(timezone)

    def format_clock(self, instant: datetime) -> str:
        """Format an instant as local wall clock time (HH:MM)."""
        return instant.astimezone(self._tz).strftime("%H:%M")

    def format_delay(self, delay: timedelta | None) -> str:
        """Format a delay as signed minutes ('+3', '-1', '+0'), or '' if unknown."""
        if delay is None:
            return ""
        minutes = int(delay.total_seconds() // 60)
        return f"{minutes:+d}"

    def minutes_until(self, delta: timedelta) -> int:
        """Whole minutes left, rounded up so that 'in 0 min' really means now."""
        return max(0, math.ceil(delta.total_seconds() / 60))

    def format_compact_duration(self, delta: timedelta) -> str:
        """Format timedelta as compact hours and minutes (e.g., '2h40m', '5m', 'now')."""
        total_seconds = int(delta.total_seconds())
        if total_seconds < 0:
            return "now"
        if total_seconds < 60:
            return "<1m"

        total_minutes = total_seconds // 60
        if total_minutes < 60:
            return f"{total_minutes}m"

        hours, minutes = divmod(total_minutes, 60)
        if minutes == 0:
            return f"{hours}h"
        return f"{hours}h{minutes}m"

    @staticmethod
    def icon(transport_type: str) -> str:
        return TRANSPORT_ICONS.get(transport_type, "🚏")
