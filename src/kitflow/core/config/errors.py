# src/kitflow/core/config/errors.py
"""
Exceções da camada de configuração do operador Kitflow.

As exceções aqui definidas representam violações estruturais da
configuração e interrompem a inicialização do control loop; nunca são
levantadas durante uma passada de reconciliação comum.

Invariantes:
    - Todas as exceções de configuração herdam de `ConfigError`
    - Nenhuma exceção representa erro de reconciliação ou de store
"""


class ConfigError(Exception):
    """Exceção base para erros de configuração do Kitflow."""


class DefaultsNotFoundError(ConfigError):
    """
    O arquivo de configuração base (defaults) não existe.

    O arquivo de defaults é obrigatório: sem ele não existe configuração
    efetiva válida para o operador.
    """


class UnsupportedConfigFormatError(ConfigError):
    """
    Formato de arquivo não suportado pelo loader.

    Formatos suportados (v1):
        - YAML (.yaml, .yml)
        - JSON (.json)
    """


class InvalidConfigRootTypeError(ConfigError):
    """O conteúdo raiz da configuração não é um mapa chave-valor."""


class ConfigTypeConflictError(ConfigError):
    """
    Conflito de tipos durante o deep-merge.

    Exemplo de conflito:
        - base:     {"builder": {"build_dir": "/tmp/builder"}}
        - override: {"builder": "/tmp/builder"}
    """


class InvalidSettingsError(ConfigError):
    """Uma seção conhecida da configuração possui valor inválido."""
