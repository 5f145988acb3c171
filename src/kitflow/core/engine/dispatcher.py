# src/kitflow/core/engine/dispatcher.py
"""
Dispatcher de Actions por fase do Kit.

Este módulo implementa o `ActionDispatcher`, a cadeia fixa de Actions
avaliada a cada passada de reconciliação.

Responsabilidades:
    - Executar o handler da primeira Action cujo predicado aceita o Kit
    - Tratar a ausência de Action compatível como passada no-op
    - Registrar falhas como `KitflowErrorPayload` no log do contexto

Decisões arquiteturais:
    - A ordem das Actions é fixa na construção
    - Exceções do handler são registradas e repropagadas sem alteração;
      retries e backoff pertencem ao loop externo
    - Predicados sobrepostos são um erro de configuração, detectado por
      `validate_partition`

Limites explícitos:
    - Não executa mais de uma Action por passada
    - Não persiste o resultado das Actions
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence

from kitflow.core.context import ReconcileContext
from kitflow.core.errors import KitflowErrorPayload, STORE_ERROR, reconcile_execution_error
from kitflow.core.exceptions import KitflowException
from kitflow.core.resources.store import StoreError
from kitflow.core.resources.types import Kit, KitPhase, ObjectMeta

from .action import Action

ACTION = "dispatcher"


class OverlappingActionsError(ValueError):
    """Mais de uma Action aceita a mesma fase."""


@dataclass(frozen=True)
class DispatchResult:
    """Resultado de uma passada: Action executada (ou None) e Kit resultante."""

    action: Optional[str] = None
    kit: Optional[Kit] = None

    @property
    def handled(self) -> bool:
        return self.action is not None


def _exception_to_error(exc: Exception, action: str) -> KitflowErrorPayload:
    if isinstance(exc, KitflowException):
        return KitflowErrorPayload(
            type=exc.__class__.__name__,
            message=str(exc) or "Erro de reconciliação",
            details=dict(exc.details or {}),
            hint=exc.hint,
            decision_required=bool(exc.decision_required),
        )

    if isinstance(exc, StoreError):
        return KitflowErrorPayload(
            type=STORE_ERROR,
            message=str(exc),
            details={
                "exception_class": exc.__class__.__name__,
                "kind": exc.kind,
                "namespace": exc.namespace,
                "name": exc.name,
            },
            hint="Falha do store; a passada será reexecutada pelo loop externo.",
        )

    return reconcile_execution_error(
        action=action,
        exc_type=exc.__class__.__name__,
        exc_message=str(exc),
    )


class ActionDispatcher:
    """Cadeia ordenada de Actions com seleção pela fase do Kit."""

    def __init__(self, actions: Iterable[Action]):
        self.actions: List[Action] = list(actions)

    def select(self, kit: Kit) -> Optional[Action]:
        for action in self.actions:
            if action.can_handle(kit):
                return action
        return None

    def validate_partition(self, phases: Sequence[KitPhase] = tuple(KitPhase)) -> None:
        """
        Garante que nenhuma fase é aceita por mais de uma Action.

        Raises:
            OverlappingActionsError: Se houver predicados sobrepostos.
        """
        for phase in phases:
            probe = Kit(meta=ObjectMeta(name="probe", namespace=""))
            probe.status.phase = phase
            matching = [a.name for a in self.actions if a.can_handle(probe)]
            if len(matching) > 1:
                raise OverlappingActionsError(
                    f"phase '{phase.value}' is handled by more than one action: {matching}"
                )

    def dispatch(self, ctx: ReconcileContext, kit: Kit) -> DispatchResult:
        action = self.select(kit)
        if action is None:
            ctx.log(
                action=ACTION,
                level="DEBUG",
                message="no action for phase",
                kit=kit.meta.name,
                phase=kit.status.phase.value,
            )
            return DispatchResult()

        ctx.log(
            action=action.name,
            level="DEBUG",
            message="invoking action",
            kit=kit.meta.name,
            phase=kit.status.phase.value,
        )

        try:
            result = action.handle(ctx, kit)
        except Exception as exc:
            err = _exception_to_error(exc, action.name)
            ctx.log(
                action=action.name,
                level="ERROR",
                message="action failed",
                kit=kit.meta.name,
                error=err.to_dict(),
            )
            raise

        return DispatchResult(action=action.name, kit=result)
