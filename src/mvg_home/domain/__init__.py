"""Domain layer - core business logic and models."""

from mvg_home.domain.models import (
    Departure,
    ProxyConfig,
    Recommendation,
    WalkPlan,
)
from mvg_home.domain.ports import (
    DepartureRepository,
    DisplayAdapter,
    ProxyResolver,
)

__all__ = [
    "Departure",
    "DepartureRepository",
    "DisplayAdapter",
    "ProxyConfig",
    "ProxyResolver",
    "Recommendation",
    "WalkPlan",
]
