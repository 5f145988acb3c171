# tests/core/engine/test_initialize.py
"""
Testes da InitializeAction (Kit com fase vazia).

Os testes asseguram que:
- sem Platform pronta a Action não escreve nada e não falha (espera suave)
- o spec alterado pela composição é persistido
- Kits sem imagem vão para BuildSubmitted; com imagem, direto para Ready
  com status.image == spec.image e nenhum Build criado
- o digest é sempre preenchido e determinístico para spec idêntico
- passadas canceladas não escrevem

Limites explícitos:
    - Não valida a criação de Builds (ver test_build_submitted)
"""

import pytest

try:
    from kitflow.core.engine.initialize import InitializeAction
    from kitflow.core.exceptions import ReconcileCancelled
    from kitflow.core.resources.types import Build, Kit, KitPhase, PlatformPhase
except Exception as e:  # noqa: BLE001
    InitializeAction = None
    _IMPORT_ERR = e
else:
    _IMPORT_ERR = None


def _require_imports():
    if _IMPORT_ERR is not None:
        pytest.fail(
            "Missing initialize module. Implement:\n"
            "- src/kitflow/core/engine/initialize.py (InitializeAction)\n"
            f"Import error: {_IMPORT_ERR}"
        )


def test_predicate_accepts_only_unset_phase(make_kit):
    _require_imports()
    action = InitializeAction()
    assert action.can_handle(make_kit(name="a"))
    assert not action.can_handle(make_kit(name="b", phase=KitPhase.BUILD_SUBMITTED))


@pytest.mark.parametrize("platform_phase", [None, "CREATING"])
def test_platform_not_ready_is_a_soft_wait(ctx, store, make_platform, make_kit, platform_phase):
    """
    Sem Platform pronta: nenhuma mutação, nenhum erro, evento de espera.
    """
    _require_imports()
    if platform_phase is not None:
        make_platform(phase=PlatformPhase[platform_phase])
    kit = make_kit(dependencies=["camel:log"])

    assert InitializeAction().handle(ctx, kit) is None

    stored = store.get(Kit, "ns", "kit")
    assert stored == kit
    assert "update:Kit" not in store.calls
    assert "update_status:Kit" not in store.calls
    assert ctx.events[-1]["message"] == "waiting for platform"


def test_kit_without_image_is_submitted(ctx, store, make_platform, make_kit):
    _require_imports()
    make_platform()
    kit = make_kit(dependencies=["camel:timer", "camel:log"])

    updated = InitializeAction().handle(ctx, kit)

    stored = store.get(Kit, "ns", "kit")
    assert updated == stored
    assert stored.status.phase == KitPhase.BUILD_SUBMITTED
    assert stored.spec.dependencies == ["camel:log", "camel:timer", "runtime:jvm"]
    assert len(stored.status.digest) == 64
    assert stored.status.image == ""


def test_prebuilt_image_goes_directly_to_ready(ctx, store, make_platform, make_kit):
    _require_imports()
    make_platform()
    kit = make_kit(image="registry/app:1.0")

    InitializeAction().handle(ctx, kit)

    stored = store.get(Kit, "ns", "kit")
    assert stored.status.phase == KitPhase.READY
    assert stored.status.image == "registry/app:1.0"
    assert stored.status.digest
    assert store.list(Build, "ns") == []
    assert "create:Build" not in store.calls


def test_digest_is_deterministic_for_identical_spec(ctx, store, make_platform, make_kit):
    _require_imports()
    make_platform()
    action = InitializeAction()
    a = action.handle(ctx, make_kit(name="a", dependencies=["camel:log", "camel:timer"]))
    b = action.handle(ctx, make_kit(name="b", dependencies=["camel:timer", "camel:log"]))
    c = action.handle(ctx, make_kit(name="c", dependencies=["camel:rest"]))

    assert a.status.digest == b.status.digest
    assert a.status.digest != c.status.digest


def test_transition_is_logged(ctx, make_platform, make_kit):
    _require_imports()
    make_platform()
    InitializeAction().handle(ctx, make_kit())

    event = ctx.events[-1]
    assert event["action"] == "initialize"
    assert event["message"] == "kit state transition"
    assert event["phase"] == "Build Submitted"


def test_cancelled_pass_does_not_write(ctx, store, make_platform, make_kit):
    _require_imports()
    make_platform()
    kit = make_kit()
    ctx.cancel()

    with pytest.raises(ReconcileCancelled):
        InitializeAction().handle(ctx, kit)

    assert "update:Kit" not in store.calls
    assert store.get(Kit, "ns", "kit").status.phase == KitPhase.NONE
