"""Departure repository port."""

from typing import Protocol

from mvg_home.domain.models.departure import Departure
from mvg_home.domain.ports.http_client import HttpClient


class DepartureRepository(Protocol):
    """Port for retrieving departure information."""

    async def fetch(self, station_id: str, client: HttpClient) -> list[Departure]:
        """Get departures for a station, in the order the service reports them."""
        ...
