# src/kitflow/core/pipeline/traits.py
"""
Traits da composição do pipeline de build.

Um trait é uma contribuição isolada para o Environment. A composição
executa os traits em ordem fixa sobre um rascunho mutável (`TraitDraft`)
e só então congela o resultado em um `Environment`.

Traits definidos:
    - dependencies → injeta a dependência de runtime e normaliza as
      dependências do Kit (única mutação de recurso feita na composição)
    - catalog      → resolve catálogo e versão de runtime a partir da Platform
    - builder      → define a sequência de Steps e o diretório de build

Cada trait pode ser desligado via `spec.traits.<id>.enabled: false` no
recurso sendo composto.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import PurePosixPath
from typing import Any, Dict, List, Optional, Protocol, Set

from kitflow.core.config.settings import OperatorSettings
from kitflow.core.resources.types import (
    Build,
    Integration,
    Kit,
    KitPhase,
    Platform,
    PublishStrategy,
)

from .catalog import RuntimeCatalog, resolve_catalog
from .step import BuildStep
from .steps import (
    BUILDER_STEPS,
    INCREMENTAL_PACKAGER,
    STANDARD_PACKAGER,
    effective_strategy,
    select_publisher,
)


@dataclass
class TraitDraft:
    """Rascunho mutável do Environment, visível apenas durante a composição."""

    platform: Platform
    settings: OperatorSettings
    kit: Optional[Kit] = None
    integration: Optional[Integration] = None
    build: Optional[Build] = None
    publish_strategy: PublishStrategy = PublishStrategy.NONE
    catalog: Optional[RuntimeCatalog] = None
    runtime_version: str = ""
    classpath: Set[str] = field(default_factory=set)
    steps: List[BuildStep] = field(default_factory=list)
    build_dir: str = ""
    executed: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    def trait_config(self, trait_id: str) -> Dict[str, Any]:
        resource = self.kit if self.kit is not None else self.integration
        if resource is None:
            return {}
        return dict(resource.spec.traits.get(trait_id) or {})

    def kit_in_phase(self, *phases: KitPhase) -> bool:
        return self.kit is not None and self.kit.status.phase in phases


class Trait(Protocol):
    id: str

    def configure(self, draft: TraitDraft) -> bool:
        ...

    def apply(self, draft: TraitDraft) -> None:
        ...


class DependenciesTrait:
    id = "dependencies"

    def configure(self, draft: TraitDraft) -> bool:
        return draft.kit_in_phase(KitPhase.NONE)

    def apply(self, draft: TraitDraft) -> None:
        kit = draft.kit
        assert kit is not None

        deps = set(kit.spec.dependencies)
        if draft.settings.runtime_dependency:
            deps.add(draft.settings.runtime_dependency)

        kit.spec.dependencies = sorted(deps)


class CatalogTrait:
    id = "catalog"

    def configure(self, draft: TraitDraft) -> bool:
        return True

    def apply(self, draft: TraitDraft) -> None:
        build_spec = draft.platform.spec.build
        constraint = build_spec.catalog_version or draft.settings.catalog_version

        draft.catalog = resolve_catalog(constraint, draft.settings.catalogs)
        if draft.catalog is None:
            draft.warnings.append(f"no runtime catalog matches constraint '{constraint}'")
            draft.runtime_version = build_spec.runtime_version
            return

        draft.runtime_version = build_spec.runtime_version or draft.catalog.runtime_version


class BuilderTrait:
    id = "builder"

    def configure(self, draft: TraitDraft) -> bool:
        return draft.kit_in_phase(KitPhase.BUILD_SUBMITTED)

    def apply(self, draft: TraitDraft) -> None:
        kit = draft.kit
        assert kit is not None

        spec = draft.platform.spec
        publisher = select_publisher(spec.cluster, spec.build.publish_strategy)
        incremental = draft.trait_config(self.id).get("incremental", draft.settings.incremental)
        packager = INCREMENTAL_PACKAGER if incremental else STANDARD_PACKAGER

        draft.publish_strategy = effective_strategy(spec.cluster, spec.build.publish_strategy)
        draft.steps = list(BUILDER_STEPS) + [packager, publisher]
        draft.build_dir = str(PurePosixPath(draft.settings.build_dir) / kit.meta.namespace / kit.meta.name)


def default_traits() -> List[Trait]:
    """Traits na ordem em que a composição os executa."""
    return [DependenciesTrait(), CatalogTrait(), BuilderTrait()]
