"""App — contratos e constantes compartilhadas pelos connectors.

Subpastas:
- protocols/: contratos/interfaces de colaboradores (transporte HTTP)
- constants/: enums de domínio
"""
