"""Conector Viber - adapter de borda para a API de bots do Viber.

Este módulo é o único ponto de IO para o canal Viber.
Responsabilidades:
- Tabela de endpoints e constantes de protocolo
- Resolução de proxy de saída a partir do ambiente
- Dispatch autenticado (auth_token, User-Agent) e normalização de resposta
- API tipada: webhook, envio de mensagens, usuários, status online, chat público
"""

from .client import ViberClient, create_viber_client
from .endpoints import API_ENDPOINTS, MAX_GET_ONLINE_IDS, VIBER_API_URL, Endpoint
from .errors import (
    UnknownEndpointError,
    ViberClientError,
    ViberResponseError,
    ViberValidationError,
)
from .http_base import HttpClient, HttpClientConfig
from .http_client import ViberHttpClient
from .models import BotIdentity, SenderProfile, serialize_tracking_data
from .proxy import DIRECT, ProxyDecision, ProxyResolver

__all__ = [
    "API_ENDPOINTS",
    "DIRECT",
    "MAX_GET_ONLINE_IDS",
    "VIBER_API_URL",
    "BotIdentity",
    "Endpoint",
    "HttpClient",
    "HttpClientConfig",
    "ProxyDecision",
    "ProxyResolver",
    "SenderProfile",
    "UnknownEndpointError",
    "ViberClient",
    "ViberClientError",
    "ViberHttpClient",
    "ViberResponseError",
    "ViberValidationError",
    "create_viber_client",
    "serialize_tracking_data",
]
