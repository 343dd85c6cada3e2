"""MVG departure repository adapter."""

import logging

from mvg_home.adapters.mvg_api.departure_parser import MvgDepartureParser
from mvg_home.domain.models.departure import Departure
from mvg_home.domain.ports.departure_repository import DepartureRepository
from mvg_home.domain.ports.http_client import HttpClient

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://www.mvg.de/api/bgw-pt/v3/"
DEFAULT_LIMIT = 20
TRANSPORT_TYPES = "UBAHN,TRAM,SBAHN,BUS,REGIONAL_BUS,BAHN"


class MvgDepartureRepository(DepartureRepository):
    """Adapter for the MVG departure monitor."""

    def __init__(self, base_url: str = DEFAULT_BASE_URL, limit: int = DEFAULT_LIMIT) -> None:
        """Initialize the repository.

        Args:
            base_url: Base URL of the MVG API, ending with a slash.
            limit: Number of departures to request.
        """
        self._base_url = base_url if base_url.endswith("/") else f"{base_url}/"
        self._limit = limit

    @property
    def departures_url(self) -> str:
        return f"{self._base_url}departures"

    async def fetch(self, station_id: str, client: HttpClient) -> list[Departure]:
        """Get departures for a station.

        Raises:
            NetworkError: On connection failure or timeout.
            ApiError: If the service answers with a non-success status.
            DecodeError: If the response does not contain valid departures.
        """
        logger.info(f"Fetching departures for station {station_id}")
        params: dict[str, str | int] = {
            "globalId": station_id,
            "limit": self._limit,
            "transportTypes": TRANSPORT_TYPES,
        }
        data = await client.get_json(self.departures_url, params=params)
        departures = MvgDepartureParser.parse_departures(data)
        logger.info(f"Received {len(departures)} departures for station {station_id}")
        return departures
