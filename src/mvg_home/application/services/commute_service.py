"""Commute use case: from the home station, which departures can I still catch?"""

import logging
from collections.abc import Sequence
from datetime import UTC, datetime

from mvg_home.application.services.departure_selector import DepartureSelector
from mvg_home.domain.errors import ProxyResolutionError
from mvg_home.domain.models.departure import Departure
from mvg_home.domain.models.proxy_config import ProxyConfig
from mvg_home.domain.models.recommendation import Recommendation
from mvg_home.domain.models.walk_plan import WalkPlan
from mvg_home.domain.ports.departure_repository import DepartureRepository
from mvg_home.domain.ports.http_client import HttpClientFactory
from mvg_home.domain.ports.proxy_resolver import ProxyResolver

logger = logging.getLogger(__name__)


class CommuteService:
    """Resolves the proxy, fetches departures and selects the catchable ones."""

    def __init__(
        self,
        proxy_resolver: ProxyResolver,
        client_factory: HttpClientFactory,
        departure_repository: DepartureRepository,
        selector: DepartureSelector,
        walk_plan: WalkPlan,
        ignore_lines: Sequence[str] = (),
        include_cancelled: bool = False,
    ) -> None:
        """Initialize the service with its collaborators.

        Args:
            proxy_resolver: Resolves the proxy for the departure API.
            client_factory: Builds the HTTP client for the resolved proxy.
            departure_repository: Fetches departures through the client.
            selector: Applies the walk plan to the fetched departures.
            walk_plan: Walking time and safety buffer to the stop.
            ignore_lines: Line label prefixes to never recommend (e.g. "N" for night buses).
            include_cancelled: Whether cancelled departures may be recommended.
        """
        self._proxy_resolver = proxy_resolver
        self._client_factory = client_factory
        self._departure_repository = departure_repository
        self._selector = selector
        self._walk_plan = walk_plan
        self._ignore_lines = tuple(prefix for prefix in ignore_lines if prefix)
        self._include_cancelled = include_cancelled

    async def resolve_proxy(self) -> ProxyConfig:
        """Resolve the proxy, falling back to a direct connection on failure."""
        try:
            return await self._proxy_resolver.resolve()
        except ProxyResolutionError as e:
            logger.warning(f"Proxy lookup failed, using direct connection: {e}")
            return ProxyConfig.direct()

    async def fetch_departures(self, station_id: str) -> list[Departure]:
        """Fetch the raw departures for a station over a freshly built client."""
        proxy = await self.resolve_proxy()
        client = self._client_factory.build(proxy)
        try:
            return await self._departure_repository.fetch(station_id, client)
        finally:
            await client.close()

    async def recommend(
        self, station_id: str, now: datetime | None = None
    ) -> list[Recommendation]:
        """Get the departures from ``station_id`` that can still be caught.

        Args:
            station_id: Global MVG station identifier (e.g., "de:09162:70").
            now: Instant the user leaves. Defaults to the time the departures arrived.

        Returns:
            Catchable departures, earliest first.
        """
        departures = self.filter_departures(await self.fetch_departures(station_id))
        if now is None:
            now = datetime.now(UTC)
        return self._selector.select(departures, now, self._walk_plan)

    def filter_departures(self, departures: list[Departure]) -> list[Departure]:
        """Drop cancelled departures and departures of ignored lines."""
        result = []
        for departure in departures:
            if departure.is_cancelled and not self._include_cancelled:
                logger.debug(f"Skipping cancelled {departure.line} at {departure.scheduled}")
                continue
            if departure.line.startswith(self._ignore_lines):
                logger.debug(f"Skipping ignored line {departure.line} -> {departure.destination}")
                continue
            result.append(departure)
        return result
