"""Walk plan domain model."""

from dataclasses import dataclass
from datetime import datetime, timedelta


@dataclass(frozen=True)
class WalkPlan:
    """Time needed between leaving and being able to board."""

    walk_duration: timedelta
    buffer: timedelta = timedelta(0)

    @property
    def total(self) -> timedelta:
        return self.walk_duration + self.buffer

    def earliest_catchable(self, now: datetime) -> datetime:
        """Earliest departure instant reachable when leaving at ``now``."""
        return now + self.total
