"""Domain models for the way home."""

from mvg_home.domain.models.departure import Departure
from mvg_home.domain.models.error_details import ErrorDetails
from mvg_home.domain.models.proxy_config import ProxyConfig
from mvg_home.domain.models.recommendation import Recommendation
from mvg_home.domain.models.walk_plan import WalkPlan

__all__ = [
    "Departure",
    "ErrorDetails",
    "ProxyConfig",
    "Recommendation",
    "WalkPlan",
]
