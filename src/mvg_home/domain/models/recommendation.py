"""Recommendation domain model."""

from dataclasses import dataclass
from datetime import datetime, timedelta

from mvg_home.domain.models.departure import Departure


@dataclass(frozen=True)
class Recommendation:
    """A departure annotated with the result of the walk time check."""

    departure: Departure
    earliest_catchable: datetime
    catchable: bool

    @property
    def effective_time(self) -> datetime:
        return self.departure.effective_time

    @property
    def slack(self) -> timedelta:
        """Time left before one has to start walking to catch this departure."""
        return self.departure.effective_time - self.earliest_catchable
