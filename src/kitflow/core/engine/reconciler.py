# src/kitflow/core/engine/reconciler.py
"""
Ponto de entrada da reconciliação de um Kit.

O `KitReconciler` é invocado pelo loop externo a cada mudança observada
em um Kit: busca o Kit, ignora Kits ausentes ou marcados para deleção e
delega ao `ActionDispatcher`. Passadas de um mesmo Kit são serializadas
pelo loop externo; o reconciler não mantém estado entre passadas.
"""

from __future__ import annotations

from typing import Iterable, Optional

from kitflow.core.context import ReconcileContext
from kitflow.core.resources.store import NotFoundError
from kitflow.core.resources.types import Kit

from .action import Action
from .build import BuildAction
from .dispatcher import ActionDispatcher, DispatchResult
from .initialize import InitializeAction

ACTION = "reconciler"


def default_actions():
    """Actions na ordem de avaliação do dispatcher."""
    return [InitializeAction(), BuildAction()]


class KitReconciler:
    def __init__(self, actions: Optional[Iterable[Action]] = None):
        self.dispatcher = ActionDispatcher(actions if actions is not None else default_actions())
        self.dispatcher.validate_partition()

    def reconcile(self, ctx: ReconcileContext, namespace: str, name: str) -> DispatchResult:
        try:
            kit = ctx.store.get(Kit, namespace, name)
        except NotFoundError:
            ctx.log(action=ACTION, level="DEBUG", message="kit not found", namespace=namespace, kit=name)
            return DispatchResult()

        if kit.meta.deletion_timestamp is not None:
            ctx.log(action=ACTION, level="DEBUG", message="kit is being deleted", namespace=namespace, kit=name)
            return DispatchResult()

        return self.dispatcher.dispatch(ctx, kit)
