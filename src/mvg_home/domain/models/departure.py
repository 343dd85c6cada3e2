"""Departure domain model."""

from dataclasses import dataclass
from datetime import datetime, timedelta

_NO_DELAY = timedelta(0)


@dataclass(frozen=True)
class Departure:
    """Represents a single scheduled departure from a station."""

    line: str
    destination: str
    scheduled: datetime
    delay: timedelta | None  # None if the API reports no realtime delay
    platform: str | None
    stop_point_id: str | None = None  # Physical stop point (e.g., "de:09162:1108:4:4")
    transport_type: str = ""
    is_cancelled: bool = False

    @property
    def effective_time(self) -> datetime:
        """Departure instant used to decide whether it can be caught.

        Early departures (negative delay) count as on time.
        """
        return self.scheduled + max(self.delay or _NO_DELAY, _NO_DELAY)

    @property
    def display_time(self) -> datetime:
        """Departure instant as announced, including negative delays."""
        return self.scheduled + (self.delay or _NO_DELAY)
