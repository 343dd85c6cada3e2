"""Ports (interfaces) for the ports-and-adapters architecture."""

from mvg_home.domain.ports.departure_repository import DepartureRepository
from mvg_home.domain.ports.display_adapter import DisplayAdapter
from mvg_home.domain.ports.http_client import HttpClient, HttpClientFactory
from mvg_home.domain.ports.proxy_resolver import ProxyResolver

__all__ = [
    "DepartureRepository",
    "DisplayAdapter",
    "HttpClient",
    "HttpClientFactory",
    "ProxyResolver",
]
