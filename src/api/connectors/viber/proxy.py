"""Resolução de proxy de saída a partir de um snapshot do ambiente.

Regras:
- HTTP_PROXY tem prioridade sobre HTTPS_PROXY (string vazia = ausente)
- NO_PROXY é uma lista de substrings separadas por vírgula; se a URL de
  destino contém qualquer uma delas, a conexão é direta
- Credenciais presentes na URL do proxy são sempre descartadas
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from functools import lru_cache
from urllib.parse import urlsplit

import httpx

logger = logging.getLogger(__name__)

HTTP_PROXY_ENV = "HTTP_PROXY"
HTTPS_PROXY_ENV = "HTTPS_PROXY"
NO_PROXY_ENV = "NO_PROXY"

# Teto do pool por transporte, para não crescer sockets sem limite sob carga
PROXY_POOL_LIMIT = 256


@dataclass(frozen=True)
class ProxyDecision:
    """Resultado da resolução: conexão direta ou via proxy.

    Attributes:
        use_proxy: True se a requisição deve passar pelo proxy
        protocol: Esquema do proxy (http|https)
        hostname: Host do proxy
        port: Porta do proxy (None se omitida na URL)
        username: Sempre None
        password: Sempre None
    """

    use_proxy: bool
    protocol: str | None = None
    hostname: str | None = None
    port: int | None = None
    username: None = None
    password: None = None

    @property
    def proxy_url(self) -> str | None:
        """URL do proxy sem credenciais."""
        if not self.use_proxy:
            return None
        host = f"[{self.hostname}]" if ":" in (self.hostname or "") else self.hostname
        netloc = host if self.port is None else f"{host}:{self.port}"
        return f"{self.protocol}://{netloc}"

    def build_mounts(self, verify: bool = True) -> dict[str, httpx.AsyncBaseTransport]:
        """Prepara transportes proxied para http:// e https://.

        O httpx escolhe o mount pelo esquema da URL de destino.
        """
        if not self.use_proxy:
            return {}
        limits = httpx.Limits(
            max_connections=PROXY_POOL_LIMIT,
            max_keepalive_connections=PROXY_POOL_LIMIT,
        )
        return {
            "http://": httpx.AsyncHTTPTransport(proxy=self.proxy_url, limits=limits, verify=verify),
            "https://": httpx.AsyncHTTPTransport(proxy=self.proxy_url, limits=limits, verify=verify),
        }


DIRECT = ProxyDecision(use_proxy=False)


@lru_cache(maxsize=16)
def _parse_proxy_url(proxy_url: str) -> ProxyDecision:
    parts = urlsplit(proxy_url)
    return ProxyDecision(
        use_proxy=True,
        protocol=parts.scheme,
        hostname=parts.hostname,
        port=parts.port,
    )


def _parse_no_proxy(value: str | None) -> tuple[str, ...]:
    if not value:
        return ()
    return tuple(entry.strip() for entry in value.split(",") if entry.strip())


class ProxyResolver:
    """Decide, por requisição, se o proxy de saída deve ser usado."""

    def resolve(self, target_url: str, environ: Mapping[str, str]) -> ProxyDecision:
        """Resolve o proxy para `target_url`.

        Args:
            target_url: URL completa do endpoint
            environ: Snapshot das variáveis de ambiente

        Returns:
            DIRECT ou ProxyDecision com os parâmetros de conexão
        """
        proxy_env = environ.get(HTTP_PROXY_ENV) or environ.get(HTTPS_PROXY_ENV)
        if not proxy_env:
            return DIRECT

        bypass = _parse_no_proxy(environ.get(NO_PROXY_ENV))
        if any(entry in target_url for entry in bypass):
            logger.debug("viber_proxy_bypassed", extra={"url": target_url})
            return DIRECT

        return _parse_proxy_url(proxy_env)
