"""HTTP client ports."""

from typing import Any, Protocol

from mvg_home.domain.models.proxy_config import ProxyConfig


class HttpClient(Protocol):
    """Port for the transport used to talk to the departure API."""

    async def get_json(self, url: str, params: dict[str, str | int] | None = None) -> Any:
        """Issue a GET request and return the decoded JSON body."""
        ...

    async def close(self) -> None:
        """Release the underlying connections."""
        ...


class HttpClientFactory(Protocol):
    """Port for creating an HTTP client for a resolved proxy."""

    def build(self, proxy: ProxyConfig) -> HttpClient:
        """Build a client that routes requests through ``proxy``.

        Raises:
            ClientBuildError: If the proxy URL is malformed or TLS setup fails.
        """
        ...
