# tests/conftest.py
"""
Fixtures compartilhados para testes do Kitflow.

Este módulo define fixtures reutilizáveis que fornecem:
- configuração mínima e determinística do operador
- store de recursos em memória, isolado por teste
- contexto de reconciliação controlado (ReconcileContext)
- fábricas de Platform, Kit, Build e Integration já persistidos

O objetivo destas fixtures é permitir testes do core (config, recursos,
pipeline e engine) sem depender de cluster, filesystem ou executores
reais de build.

Decisões arquiteturais:
    - Fábricas retornam a cópia persistida pelo store (com uid e
      resource_version atribuídos)
    - Imports do core são realizados de forma lazy para melhorar a
      clareza de erros durante falhas
    - Namespace padrão único ("ns") para reduzir ruído nos testes

Invariantes:
    - Nenhuma fixture executa Actions
    - Nenhuma fixture realiza I/O
    - Cada teste recebe um store vazio

Limites explícitos:
    - Não substituir testes de integração com um store real
    - Não conter lógica de reconciliação
"""

import pytest
from datetime import datetime, timezone


NAMESPACE = "ns"


# =====================================================
# Config fixtures
# =====================================================

@pytest.fixture
def operator_config_defaults_yaml() -> str:
    """
    YAML de defaults semelhante ao arquivo `kitflow.defaults.yaml` de um
    operador real: diretório de build, dependência de runtime e catálogos
    conhecidos.

    Returns:
        str: Conteúdo YAML representando a configuração padrão.
    """
    return """\
builder:
  build_dir: /var/lib/kitflow/builder
  runtime_dependency: runtime:jvm
  incremental: false
platform:
  catalog_version: "2.23.x"
catalogs:
  - version: "2.23.0"
    runtime_version: "0.3.2"
  - version: "2.23.1"
    runtime_version: "0.3.3"
"""


@pytest.fixture
def operator_config_local_yaml() -> str:
    """
    YAML de override local: liga o packager incremental e troca o
    diretório de build, preservando o restante dos defaults.

    Returns:
        str: Conteúdo YAML representando overrides locais.
    """
    return """\
builder:
  build_dir: /tmp/kitflow
  incremental: true
"""


@pytest.fixture
def operator_config() -> dict:
    """
    Configuração do operador já resolvida, usada pelos testes de pipeline
    e engine.

    Invariantes:
        - Dois catálogos da linha 2.23 e um da linha 3.0
        - Restrição padrão "2.23.x" (resolve para 2.23.1)
        - Diretório de build fixo para asserções determinísticas

    Returns:
        dict: Configuração mínima e válida.
    """
    return {
        "builder": {
            "build_dir": "/builds",
            "runtime_dependency": "runtime:jvm",
            "incremental": False,
        },
        "platform": {"catalog_version": "2.23.x"},
        "catalogs": [
            {"version": "2.23.0", "runtime_version": "0.3.2"},
            {"version": "2.23.1", "runtime_version": "0.3.3"},
            {"version": "3.0.0", "runtime_version": "1.0.0"},
        ],
    }


# =====================================================
# Store + contexto
# =====================================================

@pytest.fixture
def store():
    from kitflow.core.resources.store import InMemoryResourceStore

    return InMemoryResourceStore()


@pytest.fixture
def ctx(store, operator_config):
    """
    ReconcileContext determinístico para testes.

    `reconcile_id` e `created_at` são fixos; store e configuração são
    injetados pelas fixtures correspondentes.
    """
    from kitflow.core.context import ReconcileContext

    return ReconcileContext(
        reconcile_id="rec-test-001",
        created_at=datetime(2026, 1, 16, 0, 0, 0, tzinfo=timezone.utc),
        store=store,
        config=operator_config,
        meta={"source": "pytest"},
    )


# =====================================================
# Fábricas de recursos
# =====================================================

@pytest.fixture
def make_platform(store):
    """
    Fábrica de Platforms persistidas.

    Por padrão cria uma Platform Kubernetes, estratégia Kaniko, na fase
    Ready, no namespace padrão.
    """
    from kitflow.core.resources.types import (
        ObjectMeta,
        Platform,
        PlatformBuildSpec,
        PlatformCluster,
        PlatformPhase,
        PlatformSpec,
        PlatformStatus,
        PublishStrategy,
    )

    def _make(
        *,
        name: str = "platform",
        namespace: str = NAMESPACE,
        cluster=PlatformCluster.KUBERNETES,
        strategy=PublishStrategy.KANIKO,
        phase=PlatformPhase.READY,
        catalog_version: str = "",
        runtime_version: str = "",
    ):
        platform = Platform(
            meta=ObjectMeta(name=name, namespace=namespace),
            spec=PlatformSpec(
                cluster=cluster,
                build=PlatformBuildSpec(
                    publish_strategy=strategy,
                    catalog_version=catalog_version,
                    runtime_version=runtime_version,
                ),
            ),
            status=PlatformStatus(phase=phase),
        )
        return store.create(platform)

    return _make


@pytest.fixture
def make_kit(store):
    """Fábrica de Kits persistidos (fase vazia por padrão)."""
    from kitflow.core.resources.types import Kit, KitPhase, KitSpec, KitStatus, ObjectMeta

    def _make(
        *,
        name: str = "kit",
        namespace: str = NAMESPACE,
        phase=KitPhase.NONE,
        image: str = "",
        dependencies=None,
        traits=None,
    ):
        kit = Kit(
            meta=ObjectMeta(name=name, namespace=namespace),
            spec=KitSpec(
                image=image,
                dependencies=list(dependencies or []),
                traits=dict(traits or {}),
            ),
            status=KitStatus(phase=phase),
        )
        return store.create(kit)

    return _make


@pytest.fixture
def make_build(store):
    """
    Fábrica de Builds persistidos e controlados pelo Kit informado.

    Simula o Build criado em uma passada anterior, com o status já escrito
    pelo executor externo.
    """
    from kitflow.core.resources.meta import set_controller_reference, snapshot_meta
    from kitflow.core.resources.types import Build, BuildSpec, BuildStatus, ObjectMeta

    def _make(kit, *, phase, image: str = "", artifacts=None, error: str = "", failure=None):
        build = Build(
            meta=ObjectMeta(name=kit.meta.name, namespace=kit.meta.namespace),
            spec=BuildSpec(meta=snapshot_meta(kit.meta), steps=["builder/clean-build-dir"]),
            status=BuildStatus(
                phase=phase,
                image=image,
                artifacts=list(artifacts or []),
                error=error,
                failure=failure,
            ),
        )
        set_controller_reference(kit, build)
        return store.create(build)

    return _make


@pytest.fixture
def make_integration(store):
    """Fábrica de Integrations persistidas, ligadas a um Kit por nome."""
    from kitflow.core.resources.types import (
        Integration,
        IntegrationPhase,
        IntegrationStatus,
        ObjectMeta,
    )

    def _make(*, name: str, kit: str, namespace: str = NAMESPACE, phase=IntegrationPhase.BUILDING_KIT):
        integration = Integration(
            meta=ObjectMeta(name=name, namespace=namespace),
            status=IntegrationStatus(phase=phase, kit=kit),
        )
        return store.create(integration)

    return _make


@pytest.fixture
def set_build_phase(store):
    """Simula o executor externo escrevendo a fase do Build."""

    def _set(kit, phase, **status):
        from kitflow.core.resources.types import Build

        build = store.get(Build, kit.meta.namespace, kit.meta.name)
        build.status.phase = phase
        for key, value in status.items():
            setattr(build.status, key, value)
        return store.update_status(build)

    return _set


@pytest.fixture
def ScriptedStore():
    """
    Fixture factory que fornece um store em memória com falhas roteirizadas.

    Retorna uma *classe* derivada de `InMemoryResourceStore` que permite
    simular, de forma determinística:
    - falha transitória na próxima criação de um kind (`fail_create`)
    - falha na atualização de status de recursos específicos (`fail_update_status`)
    - falha transitória na leitura de um kind (`fail_get`)
    - efeito colateral logo após uma deleção (`after_delete`), usado para
      cancelar a passada entre o delete e o create de um Build

    Invariantes:
        - Cada falha roteirizada de criação ocorre uma única vez
        - Fora das falhas roteirizadas, a semântica é a do store em memória

    Returns:
        type: Classe _ScriptedStore instanciável sem argumentos.
    """
    from kitflow.core.resources.store import InMemoryResourceStore, StoreError

    class _ScriptedStore(InMemoryResourceStore):
        def __init__(self):
            super().__init__()
            self.fail_create = set()
            self.fail_get = set()
            self.fail_update_status = set()
            self.after_delete = None

        def _fail(self, op, obj_kind, name=""):
            raise StoreError(f"simulated {op} failure", kind=obj_kind, namespace="", name=name)

        def get(self, kind, namespace, name):
            if kind.kind in self.fail_get:
                self._fail("get", kind.kind, name)
            return super().get(kind, namespace, name)

        def create(self, obj):
            if obj.kind in self.fail_create:
                self.fail_create.discard(obj.kind)
                self._fail("create", obj.kind, obj.meta.name)
            return super().create(obj)

        def update_status(self, obj):
            if (obj.kind, obj.meta.name) in self.fail_update_status:
                self._fail("update_status", obj.kind, obj.meta.name)
            return super().update_status(obj)

        def delete(self, obj):
            try:
                super().delete(obj)
            finally:
                if self.after_delete is not None:
                    self.after_delete()

    return _ScriptedStore
