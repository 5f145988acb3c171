# src/kitflow/core/pipeline/steps.py
"""
Catálogo padrão de Steps de build e seleção do publisher.

Os Steps estão agrupados pelo executor que os implementa:
    - builder/* → Steps comuns (diretório, projeto, dependências, pacote)
    - s2i/*     → publicação via Source-to-Image (OpenShift)
    - kaniko/*  → publicação via Kaniko (qualquer cluster)

A seleção do publisher depende do par (flavor do cluster, estratégia de
publicação configurada na Platform):

    | cluster     | estratégia | publisher        |
    |-------------|------------|------------------|
    | OpenShift   | S2I        | s2i/publisher    |
    | OpenShift   | Kaniko     | kaniko/publisher |
    | Kubernetes  | Kaniko     | kaniko/publisher |
    | Kubernetes  | S2I        | não suportado    |

Estratégia vazia assume o padrão do cluster (OpenShift → S2I,
Kubernetes → Kaniko).
"""

from __future__ import annotations

from typing import Dict, FrozenSet, List

from kitflow.core.exceptions import UnsupportedPublishStrategy
from kitflow.core.resources.types import PlatformCluster, PublishStrategy

from .registry import StepRegistry
from .step import BuildStep
from .types import StepPhase


CLEAN_BUILD_DIR = BuildStep("builder/clean-build-dir", StepPhase.INIT, "limpa o diretório de build")
GENERATE_PROJECT = BuildStep("builder/generate-project", StepPhase.PROJECT_GENERATION, "gera o descritor de projeto")
INJECT_DEPENDENCIES = BuildStep("builder/inject-dependencies", StepPhase.PROJECT_GENERATION, "injeta as dependências do Kit")
SANITIZE_DEPENDENCIES = BuildStep("builder/sanitize-dependencies", StepPhase.PROJECT_GENERATION, "normaliza as dependências")
COMPUTE_DEPENDENCIES = BuildStep("builder/compute-dependencies", StepPhase.PROJECT_BUILD, "resolve o classpath")
STANDARD_PACKAGER = BuildStep("builder/standard-packager", StepPhase.APPLICATION_PACKAGE, "empacota a aplicação completa")
INCREMENTAL_PACKAGER = BuildStep(
    "builder/incremental-packager",
    StepPhase.APPLICATION_PACKAGE,
    "empacota sobre a imagem de um Kit compatível",
)

S2I_PUBLISHER = BuildStep("s2i/publisher", StepPhase.APPLICATION_PUBLISH, "publica a imagem via S2I")
KANIKO_PUBLISHER = BuildStep("kaniko/publisher", StepPhase.APPLICATION_PUBLISH, "publica a imagem via Kaniko")

# Steps comuns, na ordem de execução, antes do packager e do publisher.
BUILDER_STEPS: List[BuildStep] = [
    CLEAN_BUILD_DIR,
    GENERATE_PROJECT,
    INJECT_DEPENDENCIES,
    SANITIZE_DEPENDENCIES,
    COMPUTE_DEPENDENCIES,
]

PUBLISHERS: Dict[PublishStrategy, BuildStep] = {
    PublishStrategy.S2I: S2I_PUBLISHER,
    PublishStrategy.KANIKO: KANIKO_PUBLISHER,
}

SUPPORTED_STRATEGIES: Dict[PlatformCluster, FrozenSet[PublishStrategy]] = {
    PlatformCluster.OPENSHIFT: frozenset({PublishStrategy.S2I, PublishStrategy.KANIKO}),
    PlatformCluster.KUBERNETES: frozenset({PublishStrategy.KANIKO}),
}

DEFAULT_STRATEGIES: Dict[PlatformCluster, PublishStrategy] = {
    PlatformCluster.OPENSHIFT: PublishStrategy.S2I,
    PlatformCluster.KUBERNETES: PublishStrategy.KANIKO,
}


def effective_strategy(cluster: PlatformCluster, strategy: PublishStrategy) -> PublishStrategy:
    """Estratégia configurada, ou o padrão do cluster quando vazia."""
    if strategy == PublishStrategy.NONE:
        return DEFAULT_STRATEGIES[cluster]
    return strategy


def select_publisher(cluster: PlatformCluster, strategy: PublishStrategy) -> BuildStep:
    """
    Seleciona o Step que ocupa a fase APPLICATION_PUBLISH.

    Raises:
        UnsupportedPublishStrategy: Se a estratégia não for suportada no cluster.
    """
    resolved = effective_strategy(cluster, strategy)
    if resolved not in SUPPORTED_STRATEGIES.get(cluster, frozenset()):
        raise UnsupportedPublishStrategy(
            message=f"publish strategy {resolved.value} is not supported on {cluster.value}",
            details={
                "cluster": cluster.value,
                "strategy": resolved.value,
                "supported": sorted(s.value for s in SUPPORTED_STRATEGIES.get(cluster, frozenset())),
            },
            hint="Ajuste `spec.build.publish_strategy` da Platform.",
        )
    return PUBLISHERS[resolved]


def default_step_registry() -> StepRegistry:
    """Catálogo com todos os Steps conhecidos pelo operador."""
    registry = StepRegistry()
    registry.extend(BUILDER_STEPS)
    registry.extend([STANDARD_PACKAGER, INCREMENTAL_PACKAGER, S2I_PUBLISHER, KANIKO_PUBLISHER])
    return registry
