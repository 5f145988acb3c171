# src/kitflow/core/engine/notify.py
"""
Fan-out de Kits prontos para as Integrations dependentes.

Saga sem transação: as Integrations do namespace cujo `status.kit` é
exatamente o nome do Kit passam para ResolvingKit, uma a uma. A primeira
falha interrompe o fan-out e é reportada com a lista do que já foi
atualizado; as atualizações feitas permanecem. Reaplicar é inofensivo,
pois só a fase é escrita.
"""

from __future__ import annotations

from typing import List

from kitflow.core.context import ReconcileContext
from kitflow.core.errors import notification_failed
from kitflow.core.exceptions import NotificationFailed, ReconcileCancelled
from kitflow.core.resources.store import StoreError
from kitflow.core.resources.types import Integration, IntegrationPhase, Kit

ACTION = "notify"


def inform_integrations(ctx: ReconcileContext, kit: Kit) -> List[str]:
    """
    Move para ResolvingKit as Integrations ligadas a `kit`.

    Returns:
        List[str]: Nomes das Integrations atualizadas, em ordem de listagem.

    Raises:
        NotificationFailed: Se a atualização de uma Integration falhar;
            `details["updated"]` lista as já atualizadas.
        StoreError: Falha ao listar as Integrations.
    """
    integrations: List[Integration] = ctx.store.list(Integration, kit.meta.namespace)

    updated: List[str] = []
    for integration in integrations:
        if integration.status.kit != kit.meta.name:
            continue

        integration.status.phase = IntegrationPhase.RESOLVING_KIT
        try:
            ctx.ensure_active(action=ACTION, operation=f"update integration {integration.meta.name}")
            ctx.store.update_status(integration)
        except (StoreError, ReconcileCancelled) as exc:
            payload = notification_failed(
                kit=kit.meta.name,
                updated=updated,
                failed=integration.meta.name,
                exc_message=str(exc),
            )
            ctx.log(action=ACTION, level="ERROR", message=payload.message, error=payload.to_dict())
            raise NotificationFailed.from_payload(payload) from exc

        updated.append(integration.meta.name)

    ctx.log(
        action=ACTION,
        level="INFO",
        message="integrations informed about kit state change",
        kit=kit.meta.name,
        integrations=list(updated),
    )
    return updated
