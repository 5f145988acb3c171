# src/kitflow/core/pipeline/registry.py
"""
Registro estrutural de Steps de build.

O `StepRegistry` é o catálogo de Steps conhecidos pelo operador. Ele
garante unicidade de identificadores e permite resolver identificadores
persistidos (spec de um Build) de volta para Steps.

Invariantes:
    - Cada Step registrado possui um `step.id` único
    - `list()` reflete exatamente a ordem de registro
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable, List

from .step import BuildStep


class DuplicateStepIdError(ValueError):
    """Tentativa de registrar dois Steps com o mesmo `step.id`."""


class UnknownStepError(KeyError):
    """Identificador de Step ausente do catálogo."""


@dataclass
class StepRegistry:
    """Catálogo de Steps com ordem de registro preservada."""

    _steps: Dict[str, BuildStep] = field(default_factory=dict, init=False, repr=False)
    _order: List[str] = field(default_factory=list, init=False, repr=False)

    def add(self, step: BuildStep) -> None:
        if step.id in self._steps:
            raise DuplicateStepIdError(f"Duplicate step id: {step.id}")

        self._steps[step.id] = step
        self._order.append(step.id)

    def extend(self, steps: Iterable[BuildStep]) -> None:
        for s in steps:
            self.add(s)

    def get(self, step_id: str) -> BuildStep:
        if step_id not in self._steps:
            raise UnknownStepError(step_id)
        return self._steps[step_id]

    def resolve(self, step_ids: Iterable[str]) -> List[BuildStep]:
        return [self.get(sid) for sid in step_ids]

    def __contains__(self, step_id: object) -> bool:
        return step_id in self._steps

    def list(self) -> List[BuildStep]:
        return [self._steps[sid] for sid in self._order]
