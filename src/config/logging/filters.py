"""Filters de logging para injeção de contexto.

Campos injetados:
- service: Nome do serviço (ex: viber_bot_client)

Também mascara o auth_token de payloads anexados via `extra`.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping

REDACTED = "***"
SENSITIVE_KEYS = frozenset({"auth_token"})


def _redact(payload: Mapping[str, object]) -> dict[str, object]:
    return {
        key: REDACTED if key in SENSITIVE_KEYS else value for key, value in payload.items()
    }


class ServiceContextFilter(logging.Filter):
    """Injeta service em cada record e remove tokens de `payload`.

    Args:
        service_name: Nome do serviço para identificação nos logs.
    """

    def __init__(self, service_name: str) -> None:
        super().__init__()
        self._service_name = service_name

    def filter(self, record: logging.LogRecord) -> bool:
        """Enriquece o record; nunca descarta.

        Args:
            record: LogRecord a ser enriquecido.

        Returns:
            True sempre.
        """
        record.service = self._service_name
        payload = getattr(record, "payload", None)
        if isinstance(payload, Mapping):
            record.payload = _redact(payload)
        return True
