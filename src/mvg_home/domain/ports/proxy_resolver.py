"""Proxy resolver port."""

from typing import Protocol

from mvg_home.domain.models.proxy_config import ProxyConfig


class ProxyResolver(Protocol):
    """Port for discovering the proxy to use for the departure API."""

    async def resolve(self) -> ProxyConfig:
        """Resolve the proxy configuration.

        Raises:
            ProxyResolutionError: If the system mechanism fails hard.
        """
        ...
