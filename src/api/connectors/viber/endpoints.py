"""Tabela fixa de endpoints e constantes de protocolo da API do Viber."""

from __future__ import annotations

from enum import StrEnum
from types import MappingProxyType

VIBER_API_URL: str = "https://chatapi.viber.com/pa"
VIBER_AUTH_TOKEN_HEADER: str = "X-Viber-Auth-Token"
USER_AGENT_PRODUCT: str = "ViberBot-Python"
MAX_GET_ONLINE_IDS: int = 100


class Endpoint(StrEnum):
    """Operações suportadas pela API."""

    SET_WEBHOOK = "setWebhook"
    GET_ACCOUNT_INFO = "getAccountInfo"
    GET_USER_DETAILS = "getUserDetails"
    GET_ONLINE_STATUS = "getOnlineStatus"
    SEND_MESSAGE = "sendMessage"
    POST = "post"


API_ENDPOINTS: MappingProxyType[str, str] = MappingProxyType(
    {
        Endpoint.SET_WEBHOOK: "/set_webhook",
        Endpoint.GET_ACCOUNT_INFO: "/get_account_info",
        Endpoint.GET_USER_DETAILS: "/get_user_details",
        Endpoint.GET_ONLINE_STATUS: "/get_online",
        Endpoint.SEND_MESSAGE: "/send_message",
        Endpoint.POST: "/post",
    }
)


def resolve_endpoint_path(endpoint: str) -> str | None:
    """Retorna o sufixo de URL da operação, ou None se desconhecida."""
    return API_ENDPOINTS.get(endpoint)
