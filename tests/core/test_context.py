# tests/core/test_context.py
"""
Testes do ReconcileContext.

Os testes asseguram que:
- eventos de log carregam reconcile_id, action, level, message e timestamp
- warnings são agrupados por action
- após `cancel()`, `ensure_active` levanta ReconcileCancelled e registra
  o evento correspondente
"""

import pytest

try:
    from kitflow.core.exceptions import KitflowException, ReconcileCancelled
except Exception as e:  # noqa: BLE001
    ReconcileCancelled = None
    _IMPORT_ERR = e
else:
    _IMPORT_ERR = None


def _require_imports():
    if _IMPORT_ERR is not None:
        pytest.fail(
            "Missing context/exceptions modules. Implement:\n"
            "- src/kitflow/core/context.py (ReconcileContext)\n"
            f"Import error: {_IMPORT_ERR}"
        )


def test_log_event_shape(ctx):
    _require_imports()
    ctx.log(action="build", level="INFO", message="kit state transition", phase="Ready")

    [event] = ctx.events
    assert event["reconcile_id"] == "rec-test-001"
    assert event["action"] == "build"
    assert event["level"] == "INFO"
    assert event["message"] == "kit state transition"
    assert event["phase"] == "Ready"
    assert event["timestamp"].endswith("+00:00")


def test_warnings_grouped_by_action(ctx):
    _require_imports()
    ctx.add_warning(action="compose", message="a")
    ctx.add_warning(action="compose", message="b")
    ctx.add_warning(action="notify", message="c")
    assert ctx.warnings == {"compose": ["a", "b"], "notify": ["c"]}


def test_ensure_active_passes_until_cancelled(ctx):
    _require_imports()
    ctx.ensure_active(action="build", operation="create build")
    assert ctx.events == []
    assert ctx.cancelled is False


def test_cancelled_context_raises(ctx):
    _require_imports()
    ctx.cancel()
    with pytest.raises(ReconcileCancelled) as exc:
        ctx.ensure_active(action="build", operation="create build")

    assert isinstance(exc.value, KitflowException)
    assert exc.value.details["operation"] == "create build"
    assert ctx.events[-1]["message"] == "reconcile cancelled"
