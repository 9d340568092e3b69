"""API — camada de borda e adapters de canais.

Subpastas:
- connectors/: adapters HTTP por canal

NÃO PODE conter: regras de negócio do bot nem tratamento de webhooks recebidos.
"""
