# tests/core/engine/test_build_replace.py
"""
Testes do protocolo delete-then-create de Builds.

A substituição de um Build terminal é feita em duas escritas: delete do
Build anterior e create do novo. Entre elas existe uma janela sem Build.

Os testes asseguram que:
- uma falha do store no create deixa o Kit sem Build, e a passada
  seguinte recria o Build
- um cancelamento entre delete e create não cria Build, e a passada
  seguinte recria o Build
- falhas transitórias de leitura são propagadas sem alteração
"""

import pytest
from datetime import datetime, timezone

try:
    from kitflow.core.context import ReconcileContext
    from kitflow.core.engine.build import BuildAction
    from kitflow.core.exceptions import ReconcileCancelled
    from kitflow.core.resources.store import NotFoundError, StoreError
    from kitflow.core.resources.types import Build, BuildPhase, KitPhase
except Exception as e:  # noqa: BLE001
    BuildAction = None
    _IMPORT_ERR = e
else:
    _IMPORT_ERR = None


def _require_imports():
    if _IMPORT_ERR is not None:
        pytest.fail(
            "Missing build action module. Implement:\n"
            "- src/kitflow/core/engine/build.py (BuildAction)\n"
            f"Import error: {_IMPORT_ERR}"
        )


@pytest.fixture
def store(ScriptedStore):
    return ScriptedStore()


@pytest.fixture
def new_ctx(store, operator_config):
    def _new(reconcile_id):
        return ReconcileContext(
            reconcile_id=reconcile_id,
            created_at=datetime(2026, 1, 16, 0, 0, 0, tzinfo=timezone.utc),
            store=store,
            config=operator_config,
        )

    return _new


@pytest.fixture
def kit_with_finished_build(make_platform, make_kit, make_build):
    make_platform()
    kit = make_kit(phase=KitPhase.BUILD_SUBMITTED)
    old = make_build(kit, phase=BuildPhase.SUCCEEDED)
    return kit, old


def test_crash_between_delete_and_create_is_repaired(ctx, store, kit_with_finished_build):
    _require_imports()
    kit, old = kit_with_finished_build
    store.fail_create.add("Build")

    with pytest.raises(StoreError):
        BuildAction().handle(ctx, kit)

    with pytest.raises(NotFoundError):
        store.get(Build, "ns", "kit")

    BuildAction().handle(ctx, kit)

    repaired = store.get(Build, "ns", "kit")
    assert repaired.meta.uid != old.meta.uid
    assert repaired.spec.steps[-1] == "kaniko/publisher"


def test_cancellation_between_delete_and_create_is_repaired(store, new_ctx, kit_with_finished_build):
    _require_imports()
    kit, _ = kit_with_finished_build
    first = new_ctx("rec-1")
    store.after_delete = first.cancel

    with pytest.raises(ReconcileCancelled) as exc:
        BuildAction().handle(first, kit)

    assert exc.value.details["operation"] == "create build"
    assert store.list(Build, "ns") == []

    store.after_delete = None
    BuildAction().handle(new_ctx("rec-2"), kit)

    assert len(store.list(Build, "ns")) == 1


def test_transient_get_error_is_propagated(ctx, store, kit_with_finished_build):
    _require_imports()
    kit, old = kit_with_finished_build
    store.fail_get.add("Build")

    with pytest.raises(StoreError) as exc:
        BuildAction().handle(ctx, kit)

    assert not isinstance(exc.value, NotFoundError)
    assert "delete:Build" not in store.calls
    store.fail_get.clear()
    assert store.get(Build, "ns", "kit").meta.uid == old.meta.uid
