"""Cliente HTTP especializado para a API de bots do Viber.

Único ponto de dispatch do conector:
- Resolução do endpoint pela tabela fixa
- Injeção do auth_token (body e header X-Viber-Auth-Token) e User-Agent
- Seleção de proxy por requisição a partir do ambiente
- Normalização do resultado: 200 = sucesso, qualquer outro status = falha
"""

from __future__ import annotations

import os
from importlib.metadata import PackageNotFoundError, version
from typing import TYPE_CHECKING, Any

from api.connectors.viber.endpoints import (
    USER_AGENT_PRODUCT,
    VIBER_API_URL,
    VIBER_AUTH_TOKEN_HEADER,
    resolve_endpoint_path,
)
from api.connectors.viber.errors import UnknownEndpointError, ViberResponseError
from api.connectors.viber.http_base import HttpClient
from api.connectors.viber.proxy import ProxyResolver
from api.connectors.viber.viber_logging import (
    log_request,
    log_response,
    log_response_error,
    log_transport_error,
)

if TYPE_CHECKING:
    from collections.abc import Mapping

    from api.connectors.viber.models import BotIdentity
    from app.protocols.http_client import ViberTransportProtocol

DISTRIBUTION_NAME = "viber-bot-client"


def build_user_agent() -> str:
    """User-Agent no formato `<produto>/<versão>`."""
    try:
        package_version = version(DISTRIBUTION_NAME)
    except PackageNotFoundError:
        package_version = "0.0.0"
    return f"{USER_AGENT_PRODUCT}/{package_version}"


class ViberHttpClient:
    """Dispatcher de requisições autenticadas para a API do Viber."""

    def __init__(
        self,
        bot: BotIdentity,
        api_url: str = VIBER_API_URL,
        transport: ViberTransportProtocol | None = None,
        proxy_resolver: ProxyResolver | None = None,
        environ: Mapping[str, str] | None = None,
    ) -> None:
        """Inicializa o dispatcher.

        Args:
            bot: Identidade do bot (token usado em toda requisição)
            api_url: URL base da API
            transport: Transporte HTTP. Usa HttpClient se None.
            proxy_resolver: Resolver de proxy. Usa ProxyResolver se None.
            environ: Snapshot fixo do ambiente. Se None, lê os.environ a cada chamada.
        """
        self._bot = bot
        self._url = api_url.rstrip("/")
        self._transport = transport or HttpClient()
        self._proxy_resolver = proxy_resolver or ProxyResolver()
        self._environ = environ
        self._user_agent = build_user_agent()

    @property
    def user_agent(self) -> str:
        return self._user_agent

    async def send(self, endpoint: str, payload: dict[str, Any]) -> dict[str, Any]:
        """Envia uma requisição para a operação `endpoint`.

        Args:
            endpoint: Nome simbólico da operação (ex: "sendMessage")
            payload: Campos específicos da operação

        Returns:
            Body JSON da resposta

        Raises:
            UnknownEndpointError: Se a operação não está na tabela
            ViberResponseError: Se o status não é 200
            httpx.HTTPError: Falhas de transporte, propagadas sem alteração
        """
        path = resolve_endpoint_path(endpoint)
        if path is None:
            raise UnknownEndpointError(endpoint)

        url = f"{self._url}{path}"
        body = {**payload, "auth_token": self._bot.auth_token}
        headers = {
            VIBER_AUTH_TOKEN_HEADER: self._bot.auth_token,
            "User-Agent": self._user_agent,
        }
        environ = self._environ if self._environ is not None else os.environ
        proxy = self._proxy_resolver.resolve(url, environ)

        log_request(endpoint, url, payload)
        try:
            response = await self._transport.post(url, json=body, headers=headers, proxy=proxy)
        except Exception as exc:
            log_transport_error(endpoint, url, exc)
            raise

        if response.status_code != 200:
            log_response_error(endpoint, response.status_code)
            raise ViberResponseError()

        try:
            response_data = response.json()
        except ValueError as exc:
            log_transport_error(endpoint, url, exc)
            raise

        log_response(endpoint, response.status_code, response_data)
        return response_data
