"""Erros do conector Viber."""

from __future__ import annotations


class ViberClientError(Exception):
    """Base para falhas do cliente Viber."""


class ViberValidationError(ViberClientError, ValueError):
    """Argumentos inválidos detectados antes de qualquer chamada de rede."""


class UnknownEndpointError(ViberClientError, LookupError):
    """Operação fora da tabela de endpoints (erro de programação)."""

    def __init__(self, endpoint: str) -> None:
        super().__init__(f"could not find endpoint {endpoint}")
        self.endpoint = endpoint


class ViberResponseError(ViberClientError):
    """Resposta com status diferente de 200.

    Não carrega detalhes: o chamador só distingue sucesso de falha.
    """

    def __init__(self) -> None:
        super().__init__("Response error")
