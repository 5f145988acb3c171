# src/kitflow/core/config/__init__.py

"""
Camada de configuração do operador Kitflow.

Responsabilidades do pacote:
    - Carregamento de arquivos de configuração (defaults + overrides locais)
    - Resolução de configuração final via deep-merge determinístico
    - Hash canônico da configuração para rastreabilidade
    - Materialização tipada das seções usadas pelo core (`OperatorSettings`)

Limites explícitos:
    - Não carrega a Platform (recurso de cluster, não configuração local)
    - Não interage com o store de recursos
"""

from .errors import (
    ConfigError,
    ConfigTypeConflictError,
    DefaultsNotFoundError,
    InvalidConfigRootTypeError,
    InvalidSettingsError,
    UnsupportedConfigFormatError,
)
from .hashing import compute_config_hash
from .loader import load_config
from .merge import deep_merge
from .settings import DEFAULT_CONFIG, CatalogSettings, OperatorSettings

__all__ = [
    "ConfigError",
    "ConfigTypeConflictError",
    "DefaultsNotFoundError",
    "InvalidConfigRootTypeError",
    "InvalidSettingsError",
    "UnsupportedConfigFormatError",
    "compute_config_hash",
    "load_config",
    "deep_merge",
    "DEFAULT_CONFIG",
    "CatalogSettings",
    "OperatorSettings",
]
