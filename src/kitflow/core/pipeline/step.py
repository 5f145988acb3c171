# src/kitflow/core/pipeline/step.py
"""
Contrato de Step do pipeline de build.

Um Step é um estágio imutável e nomeado do pipeline, etiquetado com
exatamente uma fase. O comportamento de cada Step pertence ao executor
externo de builds; o core manipula apenas a identidade dos Steps, que é
o que fica persistido no spec de um Build.

Invariantes:
    - `id` é único no catálogo de Steps
    - Steps não carregam estado mutável
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List

from .types import StepPhase


@dataclass(frozen=True)
class BuildStep:
    """Estágio nomeado do pipeline de build."""

    id: str
    phase: StepPhase
    description: str = ""

    def __post_init__(self) -> None:
        if not isinstance(self.id, str) or not self.id.strip():
            raise ValueError("step.id must be a non-empty string")


def step_ids_for(steps: Iterable[BuildStep]) -> List[str]:
    """Projeta uma sequência de Steps em seus identificadores, preservando a ordem."""
    return [s.id for s in steps]
