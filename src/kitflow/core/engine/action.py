# src/kitflow/core/engine/action.py
"""
Contrato de Action do control loop.

Uma Action expõe um predicado puro sobre a fase do Kit (`can_handle`) e
um handler (`handle`). Os predicados das Actions registradas em um mesmo
dispatcher devem particionar as fases: no máximo uma Action aceita uma
fase qualquer.

Invariantes:
    - `can_handle` não consulta o store nem o contexto
    - `handle` é idempotente e seguro para reexecução após falha parcial
    - `handle` retorna o Kit persistido quando escreve status, ou None
"""

from __future__ import annotations

from typing import Optional, Protocol

from kitflow.core.context import ReconcileContext
from kitflow.core.resources.types import Kit


class Action(Protocol):
    name: str

    def can_handle(self, kit: Kit) -> bool:
        ...

    def handle(self, ctx: ReconcileContext, kit: Kit) -> Optional[Kit]:
        ...


def log_transition(ctx: ReconcileContext, *, action: str, kit: Kit, level: str = "INFO", **extra) -> None:
    ctx.log(
        action=action,
        level=level,
        message="kit state transition",
        kit=kit.meta.name,
        namespace=kit.meta.namespace,
        phase=kit.status.phase.value,
        **extra,
    )
