# src/kitflow/core/config/hashing.py
"""
Hash da configuração efetiva do operador.

O hash identifica a configuração usada por um processo do control loop
e é anexado aos metadados do ReconcileContext para rastreabilidade.
"""

from typing import Any, Dict

from kitflow.core.hashing import sha256_hex


def compute_config_hash(config: Dict[str, Any]) -> str:
    """
    Gera o hash SHA-256 (JSON canônico) da configuração efetiva.

    Raises:
        TypeError: Se o objeto fornecido não for um dicionário.
    """
    if not isinstance(config, dict):
        raise TypeError(
            f"Config para hashing deve ser dict, recebido: {type(config).__name__}"
        )
    return sha256_hex(config)
