# src/kitflow/core/digest.py
"""
Digest de conteúdo de Kits.

O digest identifica a parte relevante do spec finalizado de um Kit
(imagem, dependências e configuração de traits). Componentes externos o
comparam para detectar mudanças que exigem um novo build.

Política (v1):
    - versão do algoritmo incluída no conteúdo hasheado
    - dependências na ordem declarada (o spec já chega normalizado)
    - traits serializados com chaves ordenadas
    - SHA-256 do JSON canônico
"""

from __future__ import annotations

from typing import Any, Dict

from kitflow.core.hashing import sha256_hex
from kitflow.core.resources.types import Kit

DIGEST_VERSION = "v1"


def kit_digest_content(kit: Kit) -> Dict[str, Any]:
    return {
        "digest_version": DIGEST_VERSION,
        "image": kit.spec.image,
        "dependencies": list(kit.spec.dependencies),
        "traits": {k: dict(v or {}) for k, v in kit.spec.traits.items()},
    }


def compute_kit_digest(kit: Kit) -> str:
    """
    Calcula o digest estável do spec finalizado de um Kit.

    Raises:
        TypeError: Se a configuração de traits contiver valores não
            serializáveis em JSON.
    """
    return sha256_hex(kit_digest_content(kit))
