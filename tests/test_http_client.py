"""Tests for the MVG HTTP client and its factory."""

import asyncio
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock

import aiohttp
import pytest
from aiohttp import web
from aiohttp.test_utils import TestServer

from mvg_home.adapters.mvg_api import MvgHttpClient, MvgHttpClientFactory
from mvg_home.adapters.mvg_api.http_client import USER_AGENT
from mvg_home.domain.errors import ApiError, ClientBuildError, DecodeError, NetworkError
from mvg_home.domain.models import ProxyConfig
from tests.test_mvg_departure_repository import departures_app, json_handler

HTTPS_TARGET = "https://www.mvg.de/api/bgw-pt/v3/"


def _mock_session(status: int = 200, payload: object = None) -> MagicMock:
    response = MagicMock()
    response.status = status
    response.json = AsyncMock(return_value=payload)
    response.text = AsyncMock(return_value="")

    request_context = MagicMock()
    request_context.__aenter__ = AsyncMock(return_value=response)
    request_context.__aexit__ = AsyncMock(return_value=None)

    session = MagicMock()
    session.closed = False
    session.close = AsyncMock()
    session.get = MagicMock(return_value=request_context)
    return session


class TestFactory:
    """Tests for MvgHttpClientFactory."""

    @pytest.mark.asyncio
    async def test_direct_config_builds_client_without_proxy(self) -> None:
        """Given a direct config, when building, then the client routes without a proxy."""
        async with MvgHttpClientFactory(HTTPS_TARGET).build(ProxyConfig.direct()) as client:
            assert client.proxy is None

    @pytest.mark.asyncio
    async def test_https_target_uses_https_proxy(self) -> None:
        """Given http and https proxies, when building for an https URL, then https proxy wins."""
        proxy = ProxyConfig(http="http://plain:3128", https="http://secure:3128")

        async with MvgHttpClientFactory(HTTPS_TARGET).build(proxy) as client:
            assert client.proxy == "http://secure:3128"

    @pytest.mark.asyncio
    async def test_http_target_uses_http_proxy(self) -> None:
        """Given http and https proxies, when building for an http URL, then http proxy wins."""
        proxy = ProxyConfig(http="http://plain:3128", https="http://secure:3128")

        async with MvgHttpClientFactory("http://localhost/api/").build(proxy) as client:
            assert client.proxy == "http://plain:3128"

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "proxy_url",
        ["socks5://proxy.corp:1080", "http://", "ftp://proxy.corp:21"],
    )
    async def test_malformed_proxy_is_rejected(self, proxy_url: str) -> None:
        """Given an unusable proxy URL, when building, then ClientBuildError is raised."""
        factory = MvgHttpClientFactory(HTTPS_TARGET)

        with pytest.raises(ClientBuildError):
            factory.build(ProxyConfig(https=proxy_url))

    @pytest.mark.asyncio
    async def test_missing_ca_file_is_rejected(self, tmp_path: Path) -> None:
        """Given a CA bundle that does not exist, when building, then ClientBuildError is raised."""
        factory = MvgHttpClientFactory(HTTPS_TARGET, ca_file=str(tmp_path / "missing.pem"))

        with pytest.raises(ClientBuildError, match="TLS"):
            factory.build(ProxyConfig.direct())


class TestClient:
    """Tests for MvgHttpClient."""

    @pytest.mark.asyncio
    async def test_proxy_is_passed_to_every_request(self) -> None:
        """Given a client with a proxy, when requesting, then the session gets proxy=."""
        session = _mock_session(payload=[])
        client = MvgHttpClient(session, proxy="http://secure:3128")

        result = await client.get_json(HTTPS_TARGET + "departures", params={"limit": 5})

        assert result == []
        session.get.assert_called_once_with(
            HTTPS_TARGET + "departures", params={"limit": 5}, proxy="http://secure:3128"
        )

    @pytest.mark.asyncio
    async def test_close_is_idempotent(self) -> None:
        """Given a closed session, when closing again, then close is not repeated."""
        session = _mock_session()
        client = MvgHttpClient(session)

        await client.close()
        session.closed = True
        await client.close()

        session.close.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_successful_response_is_decoded(self) -> None:
        """Given a 200 JSON response, when requesting, then the decoded body is returned."""
        captured: list[web.Request] = []
        app = departures_app(json_handler([{"label": "U3"}]), captured)

        async with TestServer(app) as server:
            url = str(server.make_url("/api/departures"))
            async with MvgHttpClientFactory(url).build(ProxyConfig.direct()) as client:
                body = await client.get_json(url, params={"globalId": "de:09162:70"})

        assert body == [{"label": "U3"}]
        assert captured[0].headers["User-Agent"] == USER_AGENT

    @pytest.mark.asyncio
    async def test_error_status_is_api_error(self) -> None:
        """Given a 503 response, when requesting, then ApiError carries the status."""

        async def unavailable(_request: web.Request) -> web.StreamResponse:
            return web.Response(status=503, text="  maintenance window  ")

        async with TestServer(departures_app(unavailable)) as server:
            url = str(server.make_url("/api/departures"))
            async with MvgHttpClientFactory(url).build(ProxyConfig.direct()) as client:
                with pytest.raises(ApiError) as exc_info:
                    await client.get_json(url)

        assert exc_info.value.status == 503
        assert exc_info.value.message == "maintenance window"
        assert exc_info.value.to_details().status_code == 503

    @pytest.mark.asyncio
    async def test_undecodable_error_body_is_api_error(self) -> None:
        """Given a 503 with a non-UTF-8 body, when requesting, then ApiError is still raised."""

        async def garbled(_request: web.Request) -> web.StreamResponse:
            return web.Response(status=503, body=b"\xff\xfe down", content_type="text/plain")

        async with TestServer(departures_app(garbled)) as server:
            url = str(server.make_url("/api/departures"))
            async with MvgHttpClientFactory(url).build(ProxyConfig.direct()) as client:
                with pytest.raises(ApiError) as exc_info:
                    await client.get_json(url)

        assert exc_info.value.status == 503
        assert "down" in exc_info.value.message

    @pytest.mark.asyncio
    async def test_invalid_json_is_decode_error(self) -> None:
        """Given a body that is not JSON, when requesting, then DecodeError is raised."""

        async def html(_request: web.Request) -> web.StreamResponse:
            return web.Response(text="<html>maintenance</html>", content_type="text/html")

        async with TestServer(departures_app(html)) as server:
            url = str(server.make_url("/api/departures"))
            async with MvgHttpClientFactory(url).build(ProxyConfig.direct()) as client:
                with pytest.raises(DecodeError, match="not valid JSON"):
                    await client.get_json(url)

    @pytest.mark.asyncio
    async def test_connection_refused_is_network_error(self) -> None:
        """Given nothing listening, when requesting, then NetworkError is raised."""
        url = "http://127.0.0.1:1/api/departures"

        async with MvgHttpClientFactory(url).build(ProxyConfig.direct()) as client:
            with pytest.raises(NetworkError, match="failed"):
                await client.get_json(url)

    @pytest.mark.asyncio
    async def test_slow_response_is_network_error(self) -> None:
        """Given a server slower than the timeout, when requesting, then NetworkError is raised."""

        async def slow(_request: web.Request) -> web.StreamResponse:
            await asyncio.sleep(1)
            return web.json_response([])

        async with TestServer(departures_app(slow)) as server:
            url = str(server.make_url("/api/departures"))
            factory = MvgHttpClientFactory(url, timeout=0.2)
            async with factory.build(ProxyConfig.direct()) as client:
                with pytest.raises(NetworkError, match="timed out"):
                    await client.get_json(url)

    @pytest.mark.asyncio
    async def test_client_error_is_wrapped(self) -> None:
        """Given an aiohttp client error, when requesting, then NetworkError wraps it."""
        session = MagicMock()
        session.get = MagicMock(side_effect=aiohttp.ClientConnectionError("proxy refused"))
        client = MvgHttpClient(session, proxy="http://secure:3128")

        with pytest.raises(NetworkError, match="proxy refused"):
            await client.get_json(HTTPS_TARGET)
