# src/kitflow/core/config/merge.py
"""
Deep-merge de configuração (defaults + override local).

Política de merge (v1):
    - dict + dict → merge recursivo por chave
    - list        → sobrescrita total
    - null        → sobrescrito por qualquer valor, e sobrescreve qualquer valor
    - escalar     → sobrescrita direta, exigindo o mesmo tipo
    - conflito de tipos → ConfigTypeConflictError

Nenhum input é mutado; o resultado é sempre um novo dicionário.
"""

from copy import deepcopy
from typing import Any, Dict, List

from .errors import ConfigTypeConflictError


def _merge_value(path: List[str], base_value: Any, override_value: Any) -> Any:
    if base_value is None or override_value is None:
        return deepcopy(override_value)

    if isinstance(base_value, dict) and isinstance(override_value, dict):
        return _merge_dict(path, base_value, override_value)

    if isinstance(base_value, list) and isinstance(override_value, list):
        return deepcopy(override_value)

    if type(base_value) is not type(override_value):
        raise ConfigTypeConflictError(
            f"Conflito de tipo na chave '{'.'.join(path)}': "
            f"{type(base_value).__name__} vs {type(override_value).__name__}"
        )

    return deepcopy(override_value)


def _merge_dict(path: List[str], base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    result: Dict[str, Any] = deepcopy(base)
    for key, value in override.items():
        if key in result:
            result[key] = _merge_value(path + [str(key)], result[key], value)
        else:
            result[key] = deepcopy(value)
    return result


def deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """
    Combina `base` e `override`, com precedência do override.

    Raises:
        ConfigTypeConflictError: Se algum dos lados não for dict, ou se uma
            mesma chave possuir tipos incompatíveis.
    """
    if not isinstance(base, dict) or not isinstance(override, dict):
        raise ConfigTypeConflictError(
            f"Deep-merge requer dicts no nível raiz, recebido: "
            f"{type(base).__name__} vs {type(override).__name__}"
        )
    return _merge_dict([], base, override)
