"""Connectors por canal — adapters de borda para APIs externas.

Estrutura:
- viber/: API de bots do Viber
"""

__all__: list[str] = []
