"""Application services (use cases)."""

from mvg_home.application.services.commute_service import CommuteService
from mvg_home.application.services.departure_selector import (
    DEFAULT_MAX_RESULTS,
    DepartureSelector,
)

__all__ = ["DEFAULT_MAX_RESULTS", "CommuteService", "DepartureSelector"]
