"""Departure selection service."""

import logging
from collections.abc import Iterable
from datetime import datetime

from mvg_home.domain.models.departure import Departure
from mvg_home.domain.models.recommendation import Recommendation
from mvg_home.domain.models.walk_plan import WalkPlan

logger = logging.getLogger(__name__)

DEFAULT_MAX_RESULTS = 5


class DepartureSelector:
    """Selects the departures one can still catch after walking to the stop."""

    def __init__(self, max_results: int = DEFAULT_MAX_RESULTS) -> None:
        """Initialize the selector.

        Args:
            max_results: Maximum number of recommendations to return.
        """
        if max_results < 1:
            raise ValueError("max_results must be at least 1")
        self._max_results = max_results

    @property
    def max_results(self) -> int:
        return self._max_results

    def select(
        self, departures: Iterable[Departure], now: datetime, walk_plan: WalkPlan
    ) -> list[Recommendation]:
        """Turn departures into recommendations.

        Departures that leave before ``now`` plus walking time and buffer are
        dropped. The rest is ordered by effective departure time, then by line,
        and truncated to ``max_results``.

        Args:
            departures: Departures as returned by the API.
            now: Timezone-aware instant the user leaves.
            walk_plan: Walking time and safety buffer.

        Returns:
            Catchable departures, earliest first. Empty if none can be caught.
        """
        if now.tzinfo is None or now.utcoffset() is None:
            raise ValueError("now must be timezone-aware")

        earliest = walk_plan.earliest_catchable(now)
        recommendations = []
        dropped = 0
        for departure in departures:
            catchable = departure.effective_time >= earliest
            if not catchable:
                dropped += 1
                continue
            recommendations.append(
                Recommendation(
                    departure=departure,
                    earliest_catchable=earliest,
                    catchable=catchable,
                )
            )

        recommendations.sort(key=lambda r: (r.effective_time, r.departure.line))
        logger.debug(
            f"Dropped {dropped} departures leaving before {earliest.isoformat()}, "
            f"{len(recommendations)} remain"
        )
        return recommendations[: self._max_results]
