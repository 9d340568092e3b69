"""Modelos de requisição da API do Viber.

Cada operação tem sua própria struct imutável; `to_payload()` devolve um
dict serializável em JSON, sem os campos opcionais não informados.
"""

from __future__ import annotations

import json
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class BotIdentity:
    """Identidade do bot usada para assinar todas as requisições.

    Attributes:
        name: Nome exibido como remetente
        avatar: URL da imagem de avatar
        auth_token: Token de autenticação da API
    """

    name: str
    avatar: str | None
    auth_token: str

    def __repr__(self) -> str:
        return f"BotIdentity(name={self.name!r}, avatar={self.avatar!r}, auth_token='***')"

    def as_sender(self) -> dict[str, Any]:
        """Objeto `sender` usado nas mensagens enviadas pelo bot."""
        return {"name": self.name, "avatar": self.avatar}


@dataclass(frozen=True)
class SenderProfile:
    """Perfil de usuário que publica no chat público."""

    id: str
    name: str | None = None
    avatar: str | None = None

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> SenderProfile:
        """Cria a partir de um dict (ex: resultado de get_user_details)."""
        return cls(id=data.get("id"), name=data.get("name"), avatar=data.get("avatar"))


def serialize_tracking_data(tracking_data: Any) -> str:
    """Serializa tracking_data para string.

    A API rejeita `null` neste campo: valores ausentes ou vazios viram "".
    """
    if tracking_data is None:
        return ""
    if isinstance(tracking_data, (Mapping, Sequence)) and not tracking_data:
        return ""
    return json.dumps(tracking_data)


def _drop_unset(data: dict[str, Any]) -> dict[str, Any]:
    return {key: value for key, value in data.items() if value is not None}


@dataclass(frozen=True)
class SetWebhookRequest:
    """Requisição de registro do webhook."""

    url: str
    is_inline: bool = False
    event_types: tuple[str, ...] | None = None

    def to_payload(self) -> dict[str, Any]:
        event_types = list(self.event_types) if self.event_types is not None else None
        return _drop_unset(
            {"url": self.url, "is_inline": self.is_inline, "event_types": event_types}
        )


@dataclass(frozen=True)
class SendMessageRequest:
    """Requisição de envio de mensagem para usuário ou chat.

    `message_data` é mesclado por último e prevalece sobre os campos nomeados.
    """

    sender: Mapping[str, Any]
    receiver: str | None = None
    tracking_data: str = ""
    keyboard: Mapping[str, Any] | None = None
    chat_id: str | None = None
    min_api_version: int | None = None
    message_data: Mapping[str, Any] = field(default_factory=dict)

    def to_payload(self) -> dict[str, Any]:
        payload = _drop_unset(
            {
                "receiver": self.receiver or None,
                "sender": dict(self.sender),
                "tracking_data": self.tracking_data,
                "keyboard": self.keyboard,
                "chat_id": self.chat_id,
                "min_api_version": self.min_api_version,
            }
        )
        payload.update(self.message_data)
        return payload


@dataclass(frozen=True)
class UserDetailsRequest:
    """Consulta de detalhes de um usuário."""

    id: str

    def to_payload(self) -> dict[str, Any]:
        return {"id": self.id}


@dataclass(frozen=True)
class OnlineStatusRequest:
    """Consulta de status online de até 100 usuários."""

    ids: tuple[str, ...]

    def to_payload(self) -> dict[str, Any]:
        return {"ids": list(self.ids)}


@dataclass(frozen=True)
class PublicPostRequest:
    """Publicação no chat público em nome de um usuário."""

    sender: SenderProfile
    min_api_version: int | None = None
    message_data: Mapping[str, Any] = field(default_factory=dict)

    def to_payload(self) -> dict[str, Any]:
        payload = _drop_unset(
            {
                "from": self.sender.id,
                "sender": {"name": self.sender.name, "avatar": self.sender.avatar},
                "min_api_version": self.min_api_version,
            }
        )
        payload.update(self.message_data)
        return payload
