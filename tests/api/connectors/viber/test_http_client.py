"""Testes para o dispatcher (ViberHttpClient) e o transporte HttpClient."""

from __future__ import annotations

import json
from typing import Any
from unittest.mock import MagicMock

import httpx
import pytest

from api.connectors.viber.endpoints import API_ENDPOINTS, VIBER_AUTH_TOKEN_HEADER
from api.connectors.viber.errors import UnknownEndpointError, ViberResponseError
from api.connectors.viber.http_base import HttpClient, HttpClientConfig
from api.connectors.viber.http_client import ViberHttpClient, build_user_agent
from api.connectors.viber.models import BotIdentity
from api.connectors.viber.proxy import DIRECT, ProxyDecision
from app.protocols import ViberTransportProtocol

API_URL = "https://chatapi.viber.com/pa"


class FakeTransport:
    """Transporte fake que registra as chamadas."""

    def __init__(
        self,
        response: httpx.Response | None = None,
        error: Exception | None = None,
    ) -> None:
        self._response = response or httpx.Response(200, json={"status": 0})
        self._error = error
        self.calls: list[dict[str, Any]] = []

    async def post(
        self,
        url: str,
        json: dict[str, Any],
        headers: dict[str, str] | None = None,
        proxy: ProxyDecision | None = None,
    ) -> httpx.Response:
        self.calls.append({"url": url, "json": json, "headers": headers, "proxy": proxy})
        if self._error is not None:
            raise self._error
        return self._response


@pytest.fixture
def bot() -> BotIdentity:
    return BotIdentity(name="Echo", avatar="https://example.test/a.png", auth_token="tok-123")


def _client(bot: BotIdentity, transport: FakeTransport, **kwargs: Any) -> ViberHttpClient:
    kwargs.setdefault("environ", {})
    return ViberHttpClient(bot, api_url=API_URL, transport=transport, **kwargs)


class TestViberHttpClientDispatch:
    """Testes de montagem do envelope e normalização."""

    @pytest.mark.asyncio
    async def test_unknown_endpoint_never_calls_transport(self, bot: BotIdentity) -> None:
        """Operação fora da tabela falha sem IO."""
        transport = FakeTransport()
        client = _client(bot, transport)

        with pytest.raises(UnknownEndpointError, match="could not find endpoint nope"):
            await client.send("nope", {})

        assert transport.calls == []

    @pytest.mark.asyncio
    @pytest.mark.parametrize("endpoint", sorted(API_ENDPOINTS))
    async def test_known_endpoints_build_url(self, bot: BotIdentity, endpoint: str) -> None:
        transport = FakeTransport()
        await _client(bot, transport).send(endpoint, {})

        assert transport.calls[0]["url"] == f"{API_URL}{API_ENDPOINTS[endpoint]}"

    @pytest.mark.asyncio
    async def test_auth_token_injected_and_not_overridable(self, bot: BotIdentity) -> None:
        """auth_token do bot sempre vence o do payload."""
        transport = FakeTransport()
        await _client(bot, transport).send(
            "sendMessage", {"auth_token": "forged", "receiver": "u1", "type": "text"}
        )

        body = transport.calls[0]["json"]
        assert body["auth_token"] == "tok-123"
        assert body["receiver"] == "u1"
        assert body["type"] == "text"

    @pytest.mark.asyncio
    async def test_payload_not_mutated(self, bot: BotIdentity) -> None:
        transport = FakeTransport()
        payload = {"id": "u1"}
        await _client(bot, transport).send("getUserDetails", payload)

        assert payload == {"id": "u1"}

    @pytest.mark.asyncio
    async def test_headers_carry_token_and_user_agent(self, bot: BotIdentity) -> None:
        transport = FakeTransport()
        await _client(bot, transport).send("getAccountInfo", {})

        headers = transport.calls[0]["headers"]
        assert headers[VIBER_AUTH_TOKEN_HEADER] == "tok-123"
        product, _, package_version = headers["User-Agent"].partition("/")
        assert product == "ViberBot-Python"
        assert package_version

    @pytest.mark.asyncio
    async def test_success_returns_body(self, bot: BotIdentity) -> None:
        transport = FakeTransport(httpx.Response(200, json={"status": 0}))
        result = await _client(bot, transport).send("getAccountInfo", {})

        assert result == {"status": 0}

    @pytest.mark.asyncio
    @pytest.mark.parametrize("status_code", [201, 400, 401, 500])
    async def test_non_200_raises_generic_error(
        self, bot: BotIdentity, status_code: int
    ) -> None:
        """Qualquer status diferente de 200 vira ViberResponseError."""
        transport = FakeTransport(httpx.Response(status_code, json={"status": 0}))

        with pytest.raises(ViberResponseError, match="Response error"):
            await _client(bot, transport).send("getAccountInfo", {})

    @pytest.mark.asyncio
    async def test_non_200_with_non_json_body(self, bot: BotIdentity) -> None:
        transport = FakeTransport(httpx.Response(502, content=b"<html>bad gateway</html>"))

        with pytest.raises(ViberResponseError):
            await _client(bot, transport).send("getAccountInfo", {})

    @pytest.mark.asyncio
    async def test_transport_error_propagates_unchanged(self, bot: BotIdentity) -> None:
        error = httpx.ConnectError("connection refused")
        transport = FakeTransport(error=error)

        with pytest.raises(httpx.ConnectError) as exc_info:
            await _client(bot, transport).send("getAccountInfo", {})

        assert exc_info.value is error

    @pytest.mark.asyncio
    async def test_malformed_json_on_200_propagates(self, bot: BotIdentity) -> None:
        transport = FakeTransport(httpx.Response(200, content=b"not json"))

        with pytest.raises(ValueError):
            await _client(bot, transport).send("getAccountInfo", {})

    @pytest.mark.asyncio
    async def test_transport_error_is_logged(
        self, bot: BotIdentity, caplog: pytest.LogCaptureFixture
    ) -> None:
        transport = FakeTransport(error=httpx.ReadTimeout("timeout"))

        with caplog.at_level("ERROR"), pytest.raises(httpx.ReadTimeout):
            await _client(bot, transport).send("getAccountInfo", {})

        assert any(record.getMessage() == "viber_transport_error" for record in caplog.records)

    @pytest.mark.asyncio
    async def test_request_log_omits_auth_token(
        self, bot: BotIdentity, caplog: pytest.LogCaptureFixture
    ) -> None:
        transport = FakeTransport()

        with caplog.at_level("DEBUG"):
            await _client(bot, transport).send("getUserDetails", {"id": "u1"})

        request_logs = [r for r in caplog.records if r.getMessage() == "viber_request"]
        assert request_logs
        assert request_logs[0].payload == {"id": "u1"}


class TestViberHttpClientProxy:
    """Testes da seleção de proxy por requisição."""

    @pytest.mark.asyncio
    async def test_bypass_resolves_direct(self, bot: BotIdentity) -> None:
        transport = FakeTransport()
        environ = {"HTTP_PROXY": "http://proxy.example:8080", "NO_PROXY": "viber.com"}
        await _client(bot, transport, environ=environ).send("getAccountInfo", {})

        assert transport.calls[0]["proxy"] is DIRECT

    @pytest.mark.asyncio
    async def test_proxy_used_when_not_bypassed(self, bot: BotIdentity) -> None:
        transport = FakeTransport()
        environ = {"HTTP_PROXY": "http://proxy.example:8080", "NO_PROXY": "example.com"}
        await _client(bot, transport, environ=environ).send("getAccountInfo", {})

        proxy = transport.calls[0]["proxy"]
        assert proxy.use_proxy is True
        assert proxy.hostname == "proxy.example"
        assert proxy.port == 8080

    @pytest.mark.asyncio
    async def test_reads_process_environment_per_call(
        self, bot: BotIdentity, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Sem snapshot fixo, os.environ é lido a cada chamada."""
        monkeypatch.delenv("HTTP_PROXY", raising=False)
        monkeypatch.delenv("HTTPS_PROXY", raising=False)
        monkeypatch.delenv("NO_PROXY", raising=False)
        transport = FakeTransport()
        client = ViberHttpClient(bot, api_url=API_URL, transport=transport)

        await client.send("getAccountInfo", {})
        monkeypatch.setenv("HTTP_PROXY", "http://proxy.example:8080")
        await client.send("getAccountInfo", {})

        assert transport.calls[0]["proxy"] is DIRECT
        assert transport.calls[1]["proxy"].hostname == "proxy.example"


class TestBuildUserAgent:
    def test_format(self) -> None:
        assert build_user_agent().startswith("ViberBot-Python/")


class TestHttpClient:
    """Testes do transporte httpx."""

    @pytest.mark.asyncio
    async def test_post_sends_json_and_headers(self) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json={"status": 0})

        client = HttpClient(
            HttpClientConfig(default_headers={"Accept": "application/json"}),
            transport=httpx.MockTransport(handler),
        )
        response = await client.post(
            f"{API_URL}/send_message",
            json={"auth_token": "tok", "text": "oi"},
            headers={VIBER_AUTH_TOKEN_HEADER: "tok"},
            proxy=DIRECT,
        )

        assert response.status_code == 200
        assert response.json() == {"status": 0}
        request = seen[0]
        assert request.method == "POST"
        assert str(request.url) == f"{API_URL}/send_message"
        assert json.loads(request.content) == {"auth_token": "tok", "text": "oi"}
        assert request.headers[VIBER_AUTH_TOKEN_HEADER] == "tok"
        assert request.headers["Accept"] == "application/json"
        assert request.headers["Content-Type"] == "application/json"

    @pytest.mark.asyncio
    async def test_post_routes_through_proxy_mounts(self) -> None:
        """Com proxy, a requisição passa pelo transporte montado para o esquema."""

        def direct_handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json={"via": "direct"})

        def proxy_handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json={"via": "proxy"})

        proxy = MagicMock(spec=ProxyDecision)
        proxy.build_mounts.return_value = {"https://": httpx.MockTransport(proxy_handler)}

        client = HttpClient(transport=httpx.MockTransport(direct_handler))
        response = await client.post(f"{API_URL}/post", json={}, proxy=proxy)

        assert response.json() == {"via": "proxy"}
        proxy.build_mounts.assert_called_once_with(verify=True)

    @pytest.mark.asyncio
    async def test_verify_ssl_reaches_proxy_mounts(self) -> None:
        """VIBER_VERIFY_SSL=false também vale para os transportes do proxy."""

        def proxy_handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json={"via": "proxy"})

        proxy = MagicMock(spec=ProxyDecision)
        proxy.build_mounts.return_value = {"https://": httpx.MockTransport(proxy_handler)}

        client = HttpClient(HttpClientConfig(verify_ssl=False))
        response = await client.post(f"{API_URL}/post", json={}, proxy=proxy)

        assert response.json() == {"via": "proxy"}
        proxy.build_mounts.assert_called_once_with(verify=False)


class TestTransportProtocol:
    def test_http_client_satisfies_protocol(self) -> None:
        assert isinstance(HttpClient(), ViberTransportProtocol)

    def test_fake_transport_satisfies_protocol(self) -> None:
        assert isinstance(FakeTransport(), ViberTransportProtocol)
