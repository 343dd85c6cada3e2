"""Display adapter port."""

from abc import ABC, abstractmethod
from collections.abc import Sequence
from datetime import datetime

from mvg_home.domain.errors import MvgHomeError
from mvg_home.domain.models.recommendation import Recommendation


class DisplayAdapter(ABC):
    """Port for displaying recommendations to users."""

    @abstractmethod
    def show_recommendations(
        self, recommendations: Sequence[Recommendation], now: datetime
    ) -> None:
        """Display the selected departures, or that none can be caught."""
        ...

    @abstractmethod
    def show_error(self, error: MvgHomeError) -> None:
        """Display a fatal error."""
        ...
