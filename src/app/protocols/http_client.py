"""Protocolos HTTP usados pelo conector Viber.

Evita dependência direta do httpx na camada de dispatch.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    import httpx

    from api.connectors.viber.proxy import ProxyDecision


@runtime_checkable
class ViberTransportProtocol(Protocol):
    """Contrato mínimo para o transporte HTTP do Viber."""

    async def post(
        self,
        url: str,
        json: dict[str, Any],
        headers: dict[str, str] | None = None,
        proxy: ProxyDecision | None = None,
    ) -> httpx.Response: ...
