"""MVG API adapters."""

from mvg_home.adapters.mvg_api.departure_parser import MvgDepartureParser
from mvg_home.adapters.mvg_api.http_client import MvgHttpClient, MvgHttpClientFactory
from mvg_home.adapters.mvg_api.mvg_departure_repository import MvgDepartureRepository

__all__ = [
    "MvgDepartureParser",
    "MvgDepartureRepository",
    "MvgHttpClient",
    "MvgHttpClientFactory",
]
