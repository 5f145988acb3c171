# src/kitflow/core/resources/platform.py
"""
Resolução da Platform corrente de um namespace.

A Platform é um insumo somente-leitura: descreve o flavor do cluster,
o registry, a estratégia de publicação e as restrições de versão.
Um namespace está pronto para receber Kits apenas quando possui uma
Platform na fase Ready.
"""

from __future__ import annotations

from typing import List

from kitflow.core.exceptions import PlatformNotReady

from .store import ResourceStore
from .types import Platform, PlatformPhase


def get_current_platform(store: ResourceStore, namespace: str) -> Platform:
    """
    Retorna a Platform ativa (fase Ready) do namespace.

    Raises:
        PlatformNotReady: Se nenhuma Platform do namespace estiver pronta.
        StoreError: Falhas do store são propagadas sem alteração.
    """
    platforms: List[Platform] = store.list(Platform, namespace)
    for p in platforms:
        if p.status.phase == PlatformPhase.READY:
            return p

    raise PlatformNotReady(
        message=f"no active platform found in namespace {namespace}",
        details={
            "namespace": namespace,
            "platforms": {p.meta.name: p.status.phase.value for p in platforms},
        },
        hint="Aguarde a inicialização da Platform do namespace.",
    )
