"""HTTP client for MVG API requests."""

import logging
import ssl
from typing import Any

import aiohttp
from yarl import URL

from mvg_home import __version__
from mvg_home.adapters.api_request_logger import log_api_request
from mvg_home.domain.errors import ApiError, ClientBuildError, DecodeError, NetworkError
from mvg_home.domain.models.proxy_config import ProxyConfig

logger = logging.getLogger(__name__)

USER_AGENT = f"mvg-home/{__version__}"
DEFAULT_TIMEOUT_SECONDS = 10.0
SUPPORTED_PROXY_SCHEMES = ("http", "https")
# Cap on how much of an error body ends up in messages
ERROR_BODY_LIMIT = 500


class MvgHttpClient:
    """HTTP client bound to one aiohttp session and one proxy."""

    def __init__(self, session: aiohttp.ClientSession, proxy: str | None = None) -> None:
        """Initialize with an open session and the proxy to route requests through."""
        self._session = session
        self._proxy = proxy

    @property
    def proxy(self) -> str | None:
        return self._proxy

    async def __aenter__(self) -> "MvgHttpClient":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()

    async def close(self) -> None:
        """Close the underlying session and its connection pool."""
        if not self._session.closed:
            await self._session.close()

    async def get_json(self, url: str, params: dict[str, str | int] | None = None) -> Any:
        """GET ``url`` and decode the JSON body.

        Raises:
            NetworkError: On connection failure or timeout.
            ApiError: If the service answers with a non-success status.
            DecodeError: If the body is not valid JSON.
        """
        log_api_request("GET", url, params=params, proxy=self._proxy)
        try:
            async with self._session.get(url, params=params, proxy=self._proxy) as response:
                if not 200 <= response.status < 300:
                    body = await response.text(errors="replace")
                    logger.error(f"MVG API returned status {response.status} for {url}")
                    raise ApiError(response.status, body[:ERROR_BODY_LIMIT].strip())
                try:
                    return await response.json(content_type=None)
                except ValueError as e:
                    raise DecodeError(f"Response from {url} is not valid JSON: {e}") from e
        except TimeoutError as e:
            raise NetworkError(f"Request to {url} timed out") from e
        except aiohttp.ClientError as e:
            raise NetworkError(f"Request to {url} failed: {e}") from e


class MvgHttpClientFactory:
    """Builds MVG HTTP clients for a resolved proxy."""

    def __init__(
        self,
        target_url: str,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        ca_file: str | None = None,
    ) -> None:
        """Initialize the factory.

        Args:
            target_url: URL the clients will talk to; selects http vs https proxy.
            timeout: Total timeout for a request in seconds.
            ca_file: Optional CA bundle to trust in addition to the system store.
        """
        self._target_url = target_url
        self._timeout = timeout
        self._ca_file = ca_file

    def build(self, proxy: ProxyConfig) -> MvgHttpClient:
        """Build a client for ``proxy``. Must be called with a running event loop.

        Raises:
            ClientBuildError: If the proxy URL is malformed or TLS setup fails.
        """
        proxy_url = self._validate_proxy(proxy.for_url(self._target_url))
        ssl_context = self._create_ssl_context()

        session = aiohttp.ClientSession(
            connector=aiohttp.TCPConnector(ssl=ssl_context),
            timeout=aiohttp.ClientTimeout(total=self._timeout),
            headers={"accept": "application/json", "user-agent": USER_AGENT},
            # Proxies come from the resolver only
            trust_env=False,
        )
        return MvgHttpClient(session, proxy=proxy_url)

    @staticmethod
    def _validate_proxy(proxy_url: str | None) -> str | None:
        if proxy_url is None:
            return None
        try:
            url = URL(proxy_url)
        except (TypeError, ValueError) as e:
            raise ClientBuildError(f"Malformed proxy URL {proxy_url!r}: {e}") from e
        if url.scheme not in SUPPORTED_PROXY_SCHEMES:
            raise ClientBuildError(
                f"Unsupported proxy scheme in {proxy_url!r}, expected http or https"
            )
        if not url.host:
            raise ClientBuildError(f"Proxy URL {proxy_url!r} has no host")
        return proxy_url

    def _create_ssl_context(self) -> ssl.SSLContext:
        try:
            return ssl.create_default_context(cafile=self._ca_file)
        except (ssl.SSLError, OSError) as e:
            raise ClientBuildError(f"Failed to initialize TLS: {e}") from e
