"""Protocolos e contratos da aplicação."""

from .http_client import ViberTransportProtocol

__all__ = [
    "ViberTransportProtocol",
]
