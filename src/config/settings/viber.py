"""Settings específicas do Viber.

Configurações do bot e da API de bots do Viber.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache

from api.connectors.viber.endpoints import VIBER_API_URL
from api.connectors.viber.models import BotIdentity
from app.constants.viber import EventType


@dataclass(frozen=True)
class ViberSettings:
    """Configurações do canal Viber.

    Attributes:
        auth_token: Token de autenticação do bot
        bot_name: Nome exibido como remetente
        bot_avatar: URL do avatar do bot
        api_url: URL base da API de bots
        subscribed_events: Eventos assinados no set_webhook (vazio = padrão da API)
        verify_ssl: Valida certificados TLS
        log_level: Nível de log do serviço
    """

    # Credenciais
    auth_token: str = ""

    # Identidade do bot
    bot_name: str = ""
    bot_avatar: str | None = None

    # API
    api_url: str = VIBER_API_URL
    subscribed_events: tuple[str, ...] = ()
    verify_ssl: bool = True

    log_level: str = "INFO"

    @property
    def bot_identity(self) -> BotIdentity:
        """Identidade imutável usada pelo cliente."""
        return BotIdentity(
            name=self.bot_name,
            avatar=self.bot_avatar,
            auth_token=self.auth_token,
        )

    def validate(self) -> list[str]:
        """Valida configurações mínimas do Viber.

        Returns:
            Lista de erros de validação (vazia = tudo OK).
        """
        errors: list[str] = []

        if not self.auth_token:
            errors.append("VIBER_AUTH_TOKEN não configurado")

        if not self.bot_name:
            errors.append("VIBER_BOT_NAME não configurado")

        if not self.api_url.startswith(("http://", "https://")):
            errors.append(f"VIBER_API_URL inválida: {self.api_url}")

        known = {event.value for event in EventType}
        unknown = [event for event in self.subscribed_events if event not in known]
        if unknown:
            errors.append(f"VIBER_SUBSCRIBED_EVENTS contém eventos desconhecidos: {unknown}")

        return errors


def _parse_events(value: str) -> tuple[str, ...]:
    return tuple(event.strip() for event in value.split(",") if event.strip())


def _load_from_env() -> ViberSettings:
    """Carrega ViberSettings a partir de variáveis de ambiente."""
    return ViberSettings(
        auth_token=os.getenv("VIBER_AUTH_TOKEN", ""),
        bot_name=os.getenv("VIBER_BOT_NAME", ""),
        bot_avatar=os.getenv("VIBER_BOT_AVATAR") or None,
        api_url=os.getenv("VIBER_API_URL", VIBER_API_URL),
        subscribed_events=_parse_events(os.getenv("VIBER_SUBSCRIBED_EVENTS", "")),
        verify_ssl=os.getenv("VIBER_VERIFY_SSL", "true").lower() in ("true", "1", "yes"),
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
    )


@lru_cache(maxsize=1)
def get_viber_settings() -> ViberSettings:
    """Retorna instância cacheada de ViberSettings.

    A cache garante singleton para múltiplas injeções.
    """
    return _load_from_env()
