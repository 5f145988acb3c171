# src/kitflow/core/resources/types.py
"""
Tipos canônicos de recursos do Kitflow.

Este módulo define os enums de fase e as estruturas de dados dos recursos
manipulados pelo control loop: Kit, Build, Platform e Integration.

Componentes principais:
    - KitPhase / BuildPhase / IntegrationPhase / PlatformPhase → enums de fase
    - PlatformCluster / PublishStrategy → capacidades da plataforma alvo
    - ObjectMeta / OwnerReference → identidade e relação de ownership
    - Artifact / Failure → itens de status compartilhados entre Kit e Build
    - Kit / Build / Platform / Integration → recursos tipados

Princípios fundamentais:
    - A identidade de um recurso é (namespace, name)
    - Valores de enum são strings estáveis, adequadas para persistência
    - Nenhuma lógica de reconciliação vive neste módulo

Invariantes:
    - Cada classe de recurso declara seu `kind` como atributo de classe
    - Spec e status são estruturas separadas (escritas por atores distintos)

Limites explícitos:
    - Não valida schema (admissão é responsabilidade externa)
    - Não persiste recursos
    - Não decide transições de fase
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, ClassVar, Dict, List, Optional


class KitPhase(str, Enum):
    """
    Fases do ciclo de vida de um Kit.

    Transições válidas:
        - NONE → BUILD_SUBMITTED → BUILD_RUNNING → {READY, ERROR}
        - NONE → READY, quando o Kit declara uma imagem pré-construída

    Uma vez em READY ou ERROR, a reentrada depende de um gatilho externo
    (mudança de spec), fora do escopo do core.
    """
    NONE = ""
    BUILD_SUBMITTED = "Build Submitted"
    BUILD_RUNNING = "Build Running"
    READY = "Ready"
    ERROR = "Error"


class BuildPhase(str, Enum):
    """Fases de um Build, escritas exclusivamente pelo executor externo."""
    NONE = ""
    PENDING = "Pending"
    RUNNING = "Running"
    SUCCEEDED = "Succeeded"
    FAILED = "Failed"
    INTERRUPTED = "Interrupted"
    ERROR = "Error"


class IntegrationPhase(str, Enum):
    NONE = ""
    INITIALIZATION = "Initialization"
    WAITING_FOR_PLATFORM = "Waiting For Platform"
    BUILDING_KIT = "Building Kit"
    RESOLVING_KIT = "Resolving Kit"
    DEPLOYING = "Deploying"
    RUNNING = "Running"
    ERROR = "Error"


class PlatformPhase(str, Enum):
    NONE = ""
    CREATING = "Creating"
    STARTING = "Starting"
    READY = "Ready"
    ERROR = "Error"


class PlatformCluster(str, Enum):
    OPENSHIFT = "OpenShift"
    KUBERNETES = "Kubernetes"


class PublishStrategy(str, Enum):
    NONE = ""
    S2I = "S2I"
    KANIKO = "Kaniko"


# ---------------------------------------------------------------------------
# Metadados
# ---------------------------------------------------------------------------

@dataclass
class OwnerReference:
    kind: str
    name: str
    uid: str = ""
    controller: bool = False
    block_owner_deletion: bool = False


@dataclass
class ObjectMeta:
    """
    Identidade e metadados de um recurso.

    `resource_version` é controlado pelo store e usado para concorrência
    otimista; `uid` é atribuído na criação.
    """
    name: str
    namespace: str
    uid: str = ""
    resource_version: int = 0
    generation: int = 0
    labels: Dict[str, str] = field(default_factory=dict)
    annotations: Dict[str, str] = field(default_factory=dict)
    owner_references: List[OwnerReference] = field(default_factory=list)
    deletion_timestamp: Optional[datetime] = None


@dataclass
class Artifact:
    id: str
    location: str = ""
    target: str = ""


@dataclass
class Failure:
    reason: str
    time: Optional[datetime] = None


# ---------------------------------------------------------------------------
# Platform
# ---------------------------------------------------------------------------

@dataclass
class PlatformRegistrySpec:
    address: str = ""
    insecure: bool = False
    organization: str = ""


@dataclass
class PlatformBuildSpec:
    publish_strategy: PublishStrategy = PublishStrategy.NONE
    registry: PlatformRegistrySpec = field(default_factory=PlatformRegistrySpec)
    catalog_version: str = ""
    runtime_version: str = ""
    base_image: str = ""


@dataclass
class PlatformSpec:
    cluster: PlatformCluster = PlatformCluster.KUBERNETES
    build: PlatformBuildSpec = field(default_factory=PlatformBuildSpec)


@dataclass
class PlatformStatus:
    phase: PlatformPhase = PlatformPhase.NONE


@dataclass
class Platform:
    kind: ClassVar[str] = "Platform"

    meta: ObjectMeta
    spec: PlatformSpec = field(default_factory=PlatformSpec)
    status: PlatformStatus = field(default_factory=PlatformStatus)


# ---------------------------------------------------------------------------
# Kit
# ---------------------------------------------------------------------------

@dataclass
class KitSpec:
    image: str = ""
    dependencies: List[str] = field(default_factory=list)
    traits: Dict[str, Dict[str, Any]] = field(default_factory=dict)


@dataclass
class KitStatus:
    phase: KitPhase = KitPhase.NONE
    base_image: str = ""
    image: str = ""
    public_image: str = ""
    digest: str = ""
    artifacts: List[Artifact] = field(default_factory=list)
    failure: Optional[Failure] = None


@dataclass
class Kit:
    kind: ClassVar[str] = "Kit"

    meta: ObjectMeta
    spec: KitSpec = field(default_factory=KitSpec)
    status: KitStatus = field(default_factory=KitStatus)


# ---------------------------------------------------------------------------
# Build
# ---------------------------------------------------------------------------

@dataclass
class BuildSpec:
    """
    Snapshot imutável do que deve ser construído.

    Steps são persistidos apenas como identificadores: o comportamento
    de cada Step pertence ao executor externo.
    """
    meta: ObjectMeta
    catalog_version: str = ""
    runtime_version: str = ""
    platform: PlatformSpec = field(default_factory=PlatformSpec)
    dependencies: List[str] = field(default_factory=list)
    steps: List[str] = field(default_factory=list)
    build_dir: str = ""


@dataclass
class BuildStatus:
    phase: BuildPhase = BuildPhase.NONE
    base_image: str = ""
    image: str = ""
    public_image: str = ""
    artifacts: List[Artifact] = field(default_factory=list)
    error: str = ""
    failure: Optional[Failure] = None


@dataclass
class Build:
    kind: ClassVar[str] = "Build"

    meta: ObjectMeta
    spec: BuildSpec
    status: BuildStatus = field(default_factory=BuildStatus)


# ---------------------------------------------------------------------------
# Integration
# ---------------------------------------------------------------------------

@dataclass
class IntegrationSpec:
    dependencies: List[str] = field(default_factory=list)
    traits: Dict[str, Dict[str, Any]] = field(default_factory=dict)


@dataclass
class IntegrationStatus:
    phase: IntegrationPhase = IntegrationPhase.NONE
    kit: str = ""
    digest: str = ""


@dataclass
class Integration:
    kind: ClassVar[str] = "Integration"

    meta: ObjectMeta
    spec: IntegrationSpec = field(default_factory=IntegrationSpec)
    status: IntegrationStatus = field(default_factory=IntegrationStatus)
