# src/kitflow/core/engine/initialize.py
"""
Action de inicialização de Kits novos (fase vazia).

Fluxo:
    1. Espera suave enquanto o namespace não possui Platform pronta
    2. Composição do pipeline sobre uma cópia do Kit (sem Build)
    3. Persistência do spec possivelmente alterado pela composição
    4. Decisão build-vs-imagem: imagem pré-construída → Ready, senão
       BuildSubmitted
    5. Digest do spec finalizado e persistência do status

Qualquer erro da composição, do store ou do digest aborta a passada e é
propagado para o loop externo.
"""

from __future__ import annotations

import copy
from typing import Optional

from kitflow.core.context import ReconcileContext
from kitflow.core.digest import compute_kit_digest
from kitflow.core.exceptions import PlatformNotReady
from kitflow.core.pipeline.composer import compose
from kitflow.core.resources.platform import get_current_platform
from kitflow.core.resources.types import Kit, KitPhase

from .action import log_transition


class InitializeAction:
    name = "initialize"

    def can_handle(self, kit: Kit) -> bool:
        return kit.status.phase == KitPhase.NONE

    def handle(self, ctx: ReconcileContext, kit: Kit) -> Optional[Kit]:
        try:
            get_current_platform(ctx.store, kit.meta.namespace)
        except PlatformNotReady as exc:
            ctx.log(
                action=self.name,
                level="INFO",
                message="waiting for platform",
                kit=kit.meta.name,
                namespace=kit.meta.namespace,
                details=dict(exc.details),
            )
            return None

        target = copy.deepcopy(kit)
        compose(ctx, None, target)

        ctx.ensure_active(action=self.name, operation="update kit")
        target = ctx.store.update(target)

        if target.spec.image:
            target.status.phase = KitPhase.READY
            target.status.image = target.spec.image
        else:
            target.status.phase = KitPhase.BUILD_SUBMITTED

        target.status.digest = compute_kit_digest(target)

        ctx.ensure_active(action=self.name, operation="update kit status")
        updated = ctx.store.update_status(target)

        log_transition(ctx, action=self.name, kit=updated, digest=updated.status.digest)
        return updated
