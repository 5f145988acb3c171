# src/kitflow/core/resources/__init__.py
"""
Recursos do Kitflow: modelo de dados, store tipado e ownership.

## Componentes

- **types**: enums de fase e dataclasses de Kit, Build, Platform e Integration
- **store**: `ResourceStore` (Protocol), exceções de store e `InMemoryResourceStore`
- **meta**: relação de controlador entre recursos (`set_controller_reference`)
- **platform**: `get_current_platform` (Platform Ready do namespace)
"""

from .types import (
    Artifact,
    Build,
    BuildPhase,
    BuildSpec,
    BuildStatus,
    Failure,
    Integration,
    IntegrationPhase,
    IntegrationSpec,
    IntegrationStatus,
    Kit,
    KitPhase,
    KitSpec,
    KitStatus,
    ObjectMeta,
    OwnerReference,
    Platform,
    PlatformBuildSpec,
    PlatformCluster,
    PlatformPhase,
    PlatformRegistrySpec,
    PlatformSpec,
    PlatformStatus,
    PublishStrategy,
)
from .store import (
    AlreadyExistsError,
    ConflictError,
    InMemoryResourceStore,
    NotFoundError,
    ResourceStore,
    StoreError,
)
from .meta import is_controlled_by, set_controller_reference, snapshot_meta
from .platform import get_current_platform

__all__ = [
    "Artifact",
    "Build",
    "BuildPhase",
    "BuildSpec",
    "BuildStatus",
    "Failure",
    "Integration",
    "IntegrationPhase",
    "IntegrationSpec",
    "IntegrationStatus",
    "Kit",
    "KitPhase",
    "KitSpec",
    "KitStatus",
    "ObjectMeta",
    "OwnerReference",
    "Platform",
    "PlatformBuildSpec",
    "PlatformCluster",
    "PlatformPhase",
    "PlatformRegistrySpec",
    "PlatformSpec",
    "PlatformStatus",
    "PublishStrategy",
    "AlreadyExistsError",
    "ConflictError",
    "InMemoryResourceStore",
    "NotFoundError",
    "ResourceStore",
    "StoreError",
    "is_controlled_by",
    "set_controller_reference",
    "snapshot_meta",
    "get_current_platform",
]
