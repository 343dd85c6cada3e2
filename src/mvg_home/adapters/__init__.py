"""Adapters layer - external system integrations."""

from mvg_home.adapters.config import AppConfig
from mvg_home.adapters.mvg_api import MvgDepartureRepository, MvgHttpClientFactory
from mvg_home.adapters.proxy import SystemProxyResolver

__all__ = [
    "AppConfig",
    "MvgDepartureRepository",
    "MvgHttpClientFactory",
    "SystemProxyResolver",
]
