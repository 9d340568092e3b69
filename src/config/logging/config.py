"""Configuração centralizada de logging.

Uso:
    from config.logging import configure_logging, get_logger

    # Na inicialização da aplicação que usa o cliente
    configure_logging(level="DEBUG", service_name="viber_bot_client")

    # Em qualquer módulo
    logger = get_logger(__name__)
    logger.info("viber_set_webhook", extra={"url": url})
"""

from __future__ import annotations

import logging

from config.logging.filters import ServiceContextFilter
from config.logging.formatters import create_json_formatter

# Níveis de log válidos
VALID_LOG_LEVELS = frozenset({"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"})

# Nome padrão do serviço
DEFAULT_SERVICE_NAME = "viber_bot_client"


def configure_logging(
    level: str | None = None,
    service_name: str = DEFAULT_SERVICE_NAME,
) -> None:
    """Configura logging JSON estruturado.

    Args:
        level: Nível de log (DEBUG, INFO, WARNING, ERROR, CRITICAL).
            Se None, usa ViberSettings.log_level (LOG_LEVEL).
        service_name: Nome do serviço para identificação nos logs.

    Raises:
        ValueError: Se o nível de log for inválido.
    """
    if level is None:
        # Import local para evitar dependência circular
        from config.settings import get_viber_settings

        level = get_viber_settings().log_level

    level_upper = level.upper()
    if level_upper not in VALID_LOG_LEVELS:
        raise ValueError(
            f"Nível de log inválido: {level}. "
            f"Válidos: {', '.join(sorted(VALID_LOG_LEVELS))}"
        )

    handler = logging.StreamHandler()
    handler.setLevel(level_upper)
    handler.setFormatter(create_json_formatter())
    handler.addFilter(ServiceContextFilter(service_name))

    root = logging.getLogger()
    root.setLevel(level_upper)
    # Substituir handlers existentes para evitar duplicação
    root.handlers = [handler]


def get_logger(name: str) -> logging.Logger:
    """Retorna logger para o módulo especificado."""
    return logging.getLogger(name)
