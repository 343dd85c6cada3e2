"""System proxy resolver.

The platform proxy lookup (environment variables, the macOS System Configuration
framework or the Windows registry) is synchronous and can be slow. It runs on a
dedicated daemon thread and hands its result back to the event loop through a
single future, so the loop never blocks and a hung lookup never delays exit.
"""

import asyncio
import logging
import threading
import urllib.request
from collections.abc import Callable
from urllib.parse import urlsplit

from mvg_home.domain.errors import ProxyResolutionError
from mvg_home.domain.models.proxy_config import ProxyConfig

logger = logging.getLogger(__name__)

DEFAULT_DISCOVERY_TIMEOUT_SECONDS = 2.0


class SystemProxyResolver:
    """Resolves the system proxy for a single target URL."""

    def __init__(
        self,
        target_url: str,
        timeout: float = DEFAULT_DISCOVERY_TIMEOUT_SECONDS,
        lookup: Callable[[], dict[str, str]] = urllib.request.getproxies,
        bypass: Callable[[str], bool] = urllib.request.proxy_bypass,
    ) -> None:
        """Initialize the resolver.

        Args:
            target_url: URL the proxy is resolved for, once per process run.
            timeout: Seconds to wait for the lookup before using a direct connection.
            lookup: Synchronous call returning a scheme -> proxy URL mapping.
            bypass: Synchronous call telling whether a host bypasses the proxy.
        """
        self._target_url = target_url
        self._timeout = timeout
        self._lookup = lookup
        self._bypass = bypass

    async def resolve(self) -> ProxyConfig:
        """Resolve the proxy configuration on a worker thread.

        Returns:
            The proxy configuration, or a direct one if the lookup timed out.

        Raises:
            ProxyResolutionError: If the system mechanism failed.
        """
        loop = asyncio.get_running_loop()
        handoff: asyncio.Future[ProxyConfig] = loop.create_future()
        worker = threading.Thread(
            target=self._run_discovery,
            args=(loop, handoff),
            name="proxy-discovery",
            daemon=True,
        )
        worker.start()

        try:
            proxy = await asyncio.wait_for(handoff, timeout=self._timeout)
        except TimeoutError:
            logger.warning(
                f"Proxy discovery did not finish within {self._timeout}s, "
                f"using direct connection for {self._target_url}"
            )
            return ProxyConfig.direct()

        if proxy.is_direct:
            logger.info(f"Using direct connection for {self._target_url}")
        else:
            logger.info(f"Using proxy {proxy.for_url(self._target_url)} for {self._target_url}")
        return proxy

    def _run_discovery(
        self, loop: asyncio.AbstractEventLoop, handoff: "asyncio.Future[ProxyConfig]"
    ) -> None:
        """Worker thread body: discover and hand the outcome to the event loop."""
        try:
            result: ProxyConfig | ProxyResolutionError = self.discover()
        except ProxyResolutionError as e:
            result = e

        try:
            loop.call_soon_threadsafe(_settle, handoff, result)
        except RuntimeError:
            # Event loop already closed; nobody is waiting anymore.
            logger.debug("Discarding proxy discovery result after event loop closed")

    def discover(self) -> ProxyConfig:
        """Run the synchronous system lookup. Blocks the calling thread."""
        host = urlsplit(self._target_url).hostname or ""
        logger.debug(f"Looking up system proxy for {self._target_url}")
        try:
            proxies = self._lookup()
            bypassed = bool(host) and self._bypass(host)
        except Exception as e:
            raise ProxyResolutionError(
                f"Failed to look up system proxy for {self._target_url}: {e}"
            ) from e

        if bypassed:
            logger.debug(f"{host} bypasses the proxy")
            return ProxyConfig.direct()

        fallback = _with_scheme(proxies.get("all"))
        return ProxyConfig(
            http=_with_scheme(proxies.get("http")) or fallback,
            https=_with_scheme(proxies.get("https")) or fallback,
        )


def _with_scheme(proxy: str | None) -> str | None:
    """Treat scheme-less proxies like curl does, as plain HTTP proxies."""
    if not proxy:
        return None
    return proxy if "://" in proxy else f"http://{proxy}"


def _settle(
    handoff: "asyncio.Future[ProxyConfig]", result: ProxyConfig | ProxyResolutionError
) -> None:
    """Complete the handoff future unless the waiter already gave up."""
    if handoff.done():
        return
    if isinstance(result, ProxyResolutionError):
        handoff.set_exception(result)
    else:
        handoff.set_result(result)
