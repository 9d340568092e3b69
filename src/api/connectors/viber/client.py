"""API pública do conector Viber.

Cada método valida seus argumentos, monta a struct da operação e delega
ao ViberHttpClient. Falhas de validação aparecem no `await`, exceto em
get_user_details e get_online_status, que levantam na chamada (contrato
legado mantido por compatibilidade com chamadores existentes).
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Iterable, Mapping, Sequence
from typing import TYPE_CHECKING, Any

from api.connectors.viber.endpoints import MAX_GET_ONLINE_IDS, Endpoint
from api.connectors.viber.errors import ViberValidationError
from api.connectors.viber.http_client import ViberHttpClient
from api.connectors.viber.models import (
    OnlineStatusRequest,
    PublicPostRequest,
    SendMessageRequest,
    SenderProfile,
    SetWebhookRequest,
    UserDetailsRequest,
    serialize_tracking_data,
)

if TYPE_CHECKING:
    from api.connectors.viber.models import BotIdentity
    from config.settings import ViberSettings

_logger = logging.getLogger(__name__)

JsonDict = dict[str, Any]


class ViberClient:
    """Cliente tipado para a API de bots do Viber."""

    def __init__(
        self,
        bot: BotIdentity,
        http_client: ViberHttpClient | None = None,
        subscribed_events: Iterable[str] | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        """Inicializa o cliente.

        Args:
            bot: Identidade do bot (remetente padrão e token)
            http_client: Dispatcher. Cria um ViberHttpClient padrão se None.
            subscribed_events: Eventos enviados no set_webhook (None = padrão da API)
            logger: Logger opcional; usa o logger do módulo se None.
        """
        self._bot = bot
        self._http = http_client or ViberHttpClient(bot)
        self._subscribed_events = (
            tuple(subscribed_events) if subscribed_events is not None else None
        )
        self._logger = logger or _logger

    @property
    def bot(self) -> BotIdentity:
        return self._bot

    async def set_webhook(self, url: str, is_inline: bool = False) -> JsonDict:
        """Registra a URL de webhook do bot."""
        self._logger.info(
            "viber_set_webhook",
            extra={"url": url, "is_inline": is_inline},
        )
        request = SetWebhookRequest(
            url=url,
            is_inline=is_inline,
            event_types=self._subscribed_events,
        )
        return await self._http.send(Endpoint.SET_WEBHOOK, request.to_payload())

    async def send_message(
        self,
        receiver: str | None = None,
        message_type: str | None = None,
        message_data: Mapping[str, Any] | None = None,
        tracking_data: Any = None,
        keyboard: Mapping[str, Any] | None = None,
        chat_id: str | None = None,
        min_api_version: int | None = None,
    ) -> JsonDict:
        """Envia mensagem para um usuário (receiver) ou chat (chat_id).

        Args:
            receiver: ID do usuário destinatário
            message_type: Tipo da mensagem (ver MessageType)
            message_data: Campos específicos do tipo, mesclados no payload.
                Só None conta como ausente; um dict vazio é aceito.
            tracking_data: Valor livre para correlação, serializado em string
            keyboard: Teclado customizado
            chat_id: ID do chat (alternativa ao receiver)
            min_api_version: Versão mínima da API exigida no cliente

        Raises:
            ViberValidationError: Destinatário ou conteúdo ausente
        """
        if not receiver and not chat_id:
            raise ViberValidationError(
                "Invalid arguments passed to send_message. 'receiver' and 'chat_id' are missing."
            )
        if message_type and message_data is None:
            raise ViberValidationError(
                "Invalid arguments passed to send_message. 'message_data' is missing."
            )
        if not message_type and message_data is None and keyboard is None:
            raise ViberValidationError(
                "Invalid arguments passed to send_message. 'message_data' and "
                "'message_type' are missing and there's no keyboard."
            )

        request = SendMessageRequest(
            sender=self._bot.as_sender(),
            receiver=receiver,
            tracking_data=serialize_tracking_data(tracking_data),
            keyboard=keyboard,
            chat_id=chat_id,
            min_api_version=min_api_version,
            message_data=message_data or {},
        )
        self._logger.debug(
            "viber_send_message",
            extra={"message_type": message_type, "receiver": receiver, "chat_id": chat_id},
        )
        return await self._http.send(Endpoint.SEND_MESSAGE, request.to_payload())

    async def get_account_info(self) -> JsonDict:
        """Retorna os dados da conta do bot."""
        return await self._http.send(Endpoint.GET_ACCOUNT_INFO, {})

    def get_user_details(self, user_id: str) -> Awaitable[JsonDict]:
        """Consulta detalhes de um usuário.

        Raises:
            ViberValidationError: Na chamada (não no await) se user_id vazio
        """
        if not user_id:
            raise ViberValidationError("Missing user id")
        request = UserDetailsRequest(id=user_id)
        return self._http.send(Endpoint.GET_USER_DETAILS, request.to_payload())

    def get_online_status(self, user_ids: str | Sequence[str] | None) -> Awaitable[JsonDict]:
        """Consulta status online de 1 a 100 usuários.

        Um id isolado é tratado como lista de um elemento.

        Raises:
            ViberValidationError: Na chamada (não no await) se 0 ou >100 ids
        """
        if user_ids is None:
            ids: tuple[str, ...] = ()
        elif isinstance(user_ids, (list, tuple, set, frozenset)):
            ids = tuple(user_ids)
        else:
            ids = (user_ids,)
        if not ids:
            raise ViberValidationError("Empty or no user ids passed to get_online_status")
        if len(ids) > MAX_GET_ONLINE_IDS:
            raise ViberValidationError(
                f"Can only check up to {MAX_GET_ONLINE_IDS} ids per request"
            )
        request = OnlineStatusRequest(ids=ids)
        return self._http.send(Endpoint.GET_ONLINE_STATUS, request.to_payload())

    async def post_to_public_chat(
        self,
        sender_profile: SenderProfile | Mapping[str, Any] | None,
        message_type: str | None,
        message_data: Mapping[str, Any] | None,
        min_api_version: int | None = None,
    ) -> JsonDict:
        """Publica no chat público em nome de `sender_profile`.

        Raises:
            ViberValidationError: Perfil, tipo ou dados ausentes
        """
        if sender_profile is None:
            raise ViberValidationError(
                "Invalid arguments passed to post_to_public_chat. 'sender_profile' is missing."
            )
        if not message_type or message_data is None:
            raise ViberValidationError(
                "Invalid arguments passed to post_to_public_chat. "
                "'message_data' or 'message_type' are missing."
            )

        if not isinstance(sender_profile, SenderProfile):
            sender_profile = SenderProfile.from_mapping(sender_profile)
        request = PublicPostRequest(
            sender=sender_profile,
            min_api_version=min_api_version,
            message_data=message_data,
        )
        self._logger.debug(
            "viber_post_to_public_chat",
            extra={"message_type": message_type, "sender_id": sender_profile.id},
        )
        return await self._http.send(Endpoint.POST, request.to_payload())


def create_viber_client(settings: ViberSettings | None = None) -> ViberClient:
    """Factory para criar o cliente Viber a partir das settings.

    Args:
        settings: ViberSettings opcional. Se None, carrega do ambiente.

    Returns:
        Cliente configurado.
    """
    # Import local para evitar dependência circular
    from api.connectors.viber.http_base import HttpClient, HttpClientConfig
    from config.settings import get_viber_settings

    viber = settings or get_viber_settings()
    bot = viber.bot_identity
    transport = HttpClient(HttpClientConfig(verify_ssl=viber.verify_ssl))
    http_client = ViberHttpClient(bot, api_url=viber.api_url, transport=transport)
    return ViberClient(
        bot,
        http_client=http_client,
        subscribed_events=viber.subscribed_events or None,
    )
