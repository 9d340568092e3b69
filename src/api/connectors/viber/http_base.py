"""Cliente HTTP base do conector Viber (transporte)."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

import httpx

if TYPE_CHECKING:
    from api.connectors.viber.proxy import ProxyDecision

logger = logging.getLogger(__name__)


@dataclass
class HttpClientConfig:
    """Configuração do cliente HTTP."""

    default_headers: dict[str, str] = field(default_factory=dict)
    verify_ssl: bool = True


class HttpClient:
    """Transporte HTTP de tentativa única.

    Não aplica retry nem timeout próprio; o proxy vem sempre do resolver
    (trust_env=False impede o httpx de ler o ambiente por conta própria).
    """

    def __init__(
        self,
        config: HttpClientConfig | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._config = config or HttpClientConfig()
        self._transport = transport

    async def post(
        self,
        url: str,
        json: dict[str, Any],
        headers: dict[str, str] | None = None,
        proxy: ProxyDecision | None = None,
    ) -> httpx.Response:
        merged_headers = {**self._config.default_headers, **(headers or {})}
        mounts = proxy.build_mounts(verify=self._config.verify_ssl) if proxy is not None else {}
        async with httpx.AsyncClient(
            transport=self._transport,
            mounts=mounts or None,
            verify=self._config.verify_ssl,
            trust_env=False,
        ) as client:
            response = await client.post(url, json=json, headers=merged_headers)
        logger.debug(
            "http_post_completed",
            extra={"url": url, "status_code": response.status_code, "proxied": bool(mounts)},
        )
        return response
