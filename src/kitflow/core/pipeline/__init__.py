# src/kitflow/core/pipeline/__init__.py
"""
# Pipeline de build — Kitflow

Este pacote define os Steps de build e a composição do Environment que
determina como um Build será executado.

## Componentes

- **types**: `StepPhase`, fase de pipeline de cada Step
- **step**: `BuildStep` (imutável) e `step_ids_for`
- **registry**: `StepRegistry`, catálogo de Steps com ids únicos
- **steps**: Steps padrão (builder, s2i, kaniko) e seleção do publisher
- **catalog**: resolução do catálogo de runtime por restrição de versão
- **environment**: `Environment`, agregado imutável de uma passada
- **traits**: contribuições ordenadas para o Environment
- **composer**: `compose(ctx, build, resource)`

## Invariantes

- A ordem de `Environment.steps` é a ordem de execução
- Exatamente um Step de uma sequência de build ocupa APPLICATION_PUBLISH
- Sem Kit em BuildSubmitted, a sequência de Steps é vazia
"""

from .types import StepPhase
from .step import BuildStep, step_ids_for
from .registry import DuplicateStepIdError, StepRegistry, UnknownStepError
from .catalog import RuntimeCatalog, matches_constraint, resolve_catalog
from .environment import Environment
from .composer import compose

__all__ = [
    "StepPhase",
    "BuildStep",
    "step_ids_for",
    "DuplicateStepIdError",
    "StepRegistry",
    "UnknownStepError",
    "RuntimeCatalog",
    "matches_constraint",
    "resolve_catalog",
    "Environment",
    "compose",
]
