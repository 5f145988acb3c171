# src/kitflow/core/hashing.py
"""
Hashing canônico do Kitflow.

Base comum para o hash de configuração e para o digest de Kits.

Política de hashing (v1):
    - Serialização JSON canônica (chaves ordenadas, separadores compactos)
    - Codificação UTF-8
    - Algoritmo SHA-256, saída hexadecimal de 64 caracteres

Invariantes:
    - Estruturas equivalentes produzem o mesmo hash,
      independentemente da ordem original das chaves
    - Nenhuma mutação ocorre sobre o input
"""

from __future__ import annotations

import hashlib
import json
from enum import Enum
from typing import Any


def _json_default(value: Any) -> Any:
    if isinstance(value, Enum):
        return value.value
    raise TypeError(f"Valor não serializável para hashing: {type(value).__name__}")


def canonical_json(obj: Any) -> str:
    return json.dumps(
        obj,
        sort_keys=True,
        separators=(",", ":"),
        ensure_ascii=False,
        default=_json_default,
    )


def sha256_hex(obj: Any) -> str:
    """SHA-256 hexadecimal da serialização canônica de `obj`."""
    return hashlib.sha256(canonical_json(obj).encode("utf-8")).hexdigest()
