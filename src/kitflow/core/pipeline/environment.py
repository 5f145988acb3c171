# src/kitflow/core/pipeline/environment.py
"""
Environment de build de uma passada.

O Environment é o agregado efêmero calculado pela composição do pipeline:
catálogo, versão de runtime, Platform, classpath resolvido, sequência
ordenada de Steps e diretório de build. É reconstruído a cada passada de
Initialize ou de submissão de Build e nunca é persistido.

Invariantes:
    - O Environment é imutável após a composição
    - `steps` está em ordem de execução
    - `steps` é vazio quando não há Kit em BuildSubmitted
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import FrozenSet, List, Optional, Tuple

from kitflow.core.resources.types import Build, Integration, Kit, Platform, PublishStrategy

from .catalog import RuntimeCatalog
from .step import BuildStep, step_ids_for
from .types import StepPhase


@dataclass(frozen=True)
class Environment:
    platform: Platform
    publish_strategy: PublishStrategy
    catalog: Optional[RuntimeCatalog]
    runtime_version: str
    classpath: FrozenSet[str]
    steps: Tuple[BuildStep, ...]
    build_dir: str
    executed_traits: Tuple[str, ...]
    kit: Optional[Kit] = None
    integration: Optional[Integration] = None
    build: Optional[Build] = None

    @property
    def step_ids(self) -> List[str]:
        return step_ids_for(self.steps)

    def steps_in_phase(self, phase: StepPhase) -> List[BuildStep]:
        return [s for s in self.steps if s.phase == phase]

    def publisher(self) -> Optional[BuildStep]:
        published = self.steps_in_phase(StepPhase.APPLICATION_PUBLISH)
        return published[0] if published else None
