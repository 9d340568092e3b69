"""Enums de domínio para a API de bots do Viber."""

from __future__ import annotations

from enum import StrEnum


class MessageType(StrEnum):
    """Tipos de mensagem aceitos pela API do Viber."""

    TEXT = "text"
    PICTURE = "picture"
    VIDEO = "video"
    FILE = "file"
    CONTACT = "contact"
    LOCATION = "location"
    URL = "url"
    STICKER = "sticker"
    RICH_MEDIA = "rich_media"


class EventType(StrEnum):
    """Eventos de callback que podem ser assinados no set_webhook."""

    DELIVERED = "delivered"
    SEEN = "seen"
    FAILED = "failed"
    SUBSCRIBED = "subscribed"
    UNSUBSCRIBED = "unsubscribed"
    CONVERSATION_STARTED = "conversation_started"
