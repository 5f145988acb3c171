# src/kitflow/core/pipeline/catalog.py
"""
Resolução do catálogo de runtime.

Um catálogo descreve a versão dos componentes de integração e a versão de
runtime usada para construir e executar a imagem. A Platform restringe o
catálogo aceito por uma restrição de versão:

    - "2.23.1"  → versão exata
    - "2.23.x"  → qualquer patch da 2.23 ("*" equivale a "x")
    - "2.23"    → prefixo, mesmo efeito de "2.23.x"
    - ""        → qualquer versão

Entre os candidatos compatíveis, vence a maior versão.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Optional, Tuple, Union

from kitflow.core.config.settings import CatalogSettings

_WILDCARDS = {"x", "X", "*"}


@dataclass(frozen=True)
class RuntimeCatalog:
    version: str
    runtime_version: str


def _segments(version: str) -> List[str]:
    return [s for s in version.strip().split(".") if s != ""]


def _sort_key(version: str) -> Tuple[Tuple[int, Union[int, str]], ...]:
    key = []
    for seg in _segments(version):
        if seg.isdigit():
            key.append((1, int(seg)))
        else:
            key.append((0, seg))
    return tuple(key)


def matches_constraint(version: str, constraint: str) -> bool:
    wanted = _segments(constraint)
    actual = _segments(version)
    if len(wanted) > len(actual):
        return False
    for w, a in zip(wanted, actual):
        if w in _WILDCARDS:
            continue
        if w != a:
            return False
    return True


def resolve_catalog(constraint: str, catalogs: Iterable[CatalogSettings]) -> Optional[RuntimeCatalog]:
    """Maior catálogo compatível com a restrição, ou None se não houver."""
    candidates = [c for c in catalogs if matches_constraint(c.version, constraint)]
    if not candidates:
        return None

    best = max(candidates, key=lambda c: _sort_key(c.version))
    return RuntimeCatalog(version=best.version, runtime_version=best.runtime_version)
