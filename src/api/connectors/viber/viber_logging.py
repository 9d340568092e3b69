"""Helpers de logging para a API do Viber (sem token)."""

from __future__ import annotations

import logging
from typing import Any

logger = logging.getLogger(__name__)


def log_request(endpoint: str, url: str, payload: dict[str, Any]) -> None:
    """Loga a requisição de saída; `payload` ainda não contém o auth_token."""
    logger.debug(
        "viber_request",
        extra={"endpoint": endpoint, "url": url, "payload": payload},
    )


def log_response(endpoint: str, status_code: int, body: Any) -> None:
    logger.debug(
        "viber_response",
        extra={"endpoint": endpoint, "status_code": status_code, "body": body},
    )


def log_response_error(endpoint: str, status_code: int) -> None:
    logger.warning(
        "viber_response_error",
        extra={"endpoint": endpoint, "status_code": status_code},
    )


def log_transport_error(endpoint: str, url: str, exc: BaseException) -> None:
    """Loga falha de rede/protocolo antes de propagá-la."""
    logger.error(
        "viber_transport_error",
        extra={"endpoint": endpoint, "url": url, "error_type": type(exc).__name__},
        exc_info=exc,
    )
