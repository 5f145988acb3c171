# src/kitflow/core/engine/build.py
"""
Action de build: garante um Build em andamento e finaliza o resultado.

Sub-fases:
    - BuildSubmitted → (re)cria o Build quando ausente ou terminal e avança
      para BuildRunning ao observar o Build em execução
    - BuildRunning   → acompanha o Build; Succeeded leva o Kit a Ready e
      notifica as Integrations, Error/Interrupted leva o Kit a Error

Decisões arquiteturais:
    - Specs de Build são imutáveis: a recriação é delete-then-create
    - Entre o delete e o create existe uma janela sem Build; a passada
      seguinte observa "Build ausente" e recria
    - Um Build em fase vazia ou não terminal está em andamento e não é
      recriado
    - A checagem de fase antes da finalização lê o Kit armazenado

Invariantes:
    - No máximo um Build por Kit em andamento
    - Um Kit em Ready nunca carrega artefato com `location` preenchido
    - O status do Build nunca é escrito por esta Action
"""

from __future__ import annotations

import copy
from datetime import datetime, timezone
from typing import FrozenSet, Optional

from kitflow.core.config.settings import OperatorSettings
from kitflow.core.context import ReconcileContext
from kitflow.core.errors import catalog_not_resolved, kit_phase_conflict, pipeline_incomplete
from kitflow.core.exceptions import CatalogNotResolved, KitPhaseConflict, PipelineIncomplete
from kitflow.core.pipeline.composer import compose
from kitflow.core.pipeline.environment import Environment
from kitflow.core.pipeline.steps import default_step_registry
from kitflow.core.pipeline.types import StepPhase
from kitflow.core.resources.meta import set_controller_reference, snapshot_meta
from kitflow.core.resources.store import NotFoundError
from kitflow.core.resources.types import (
    Artifact,
    Build,
    BuildPhase,
    BuildSpec,
    Failure,
    Kit,
    KitPhase,
    ObjectMeta,
)

from .action import log_transition
from .notify import inform_integrations

# Fases de Build que disparam uma nova submissão.
RESUBMIT_PHASES: FrozenSet[BuildPhase] = frozenset(
    {BuildPhase.ERROR, BuildPhase.INTERRUPTED, BuildPhase.SUCCEEDED}
)

FAILED_PHASES: FrozenSet[BuildPhase] = frozenset({BuildPhase.ERROR, BuildPhase.INTERRUPTED})


class BuildAction:
    name = "build"

    def can_handle(self, kit: Kit) -> bool:
        return kit.status.phase in (KitPhase.BUILD_SUBMITTED, KitPhase.BUILD_RUNNING)

    def handle(self, ctx: ReconcileContext, kit: Kit) -> Optional[Kit]:
        if kit.status.phase == KitPhase.BUILD_SUBMITTED:
            return self.handle_build_submitted(ctx, kit)
        if kit.status.phase == KitPhase.BUILD_RUNNING:
            return self.handle_build_running(ctx, kit)
        return None

    # ------------------------------------------------------------------
    # BuildSubmitted
    # ------------------------------------------------------------------
    def handle_build_submitted(self, ctx: ReconcileContext, kit: Kit) -> Optional[Kit]:
        try:
            build: Optional[Build] = ctx.store.get(Build, kit.meta.namespace, kit.meta.name)
        except NotFoundError:
            build = None

        if build is None or build.status.phase in RESUBMIT_PHASES:
            build = self.submit_build(ctx, kit, previous=build)

        if build.status.phase != BuildPhase.RUNNING:
            return None

        target = copy.deepcopy(kit)
        target.status.phase = KitPhase.BUILD_RUNNING

        ctx.ensure_active(action=self.name, operation="update kit status")
        updated = ctx.store.update_status(target)
        log_transition(ctx, action=self.name, kit=updated)
        return updated

    def new_build(self, ctx: ReconcileContext, kit: Kit) -> Build:
        """
        Monta o Build a partir de uma composição sem contexto de Build.

        Raises:
            CatalogNotResolved: Se o Environment não resolveu catálogo de runtime.
            PipelineIncomplete: Se os Steps compostos não formarem um pipeline
                executável (exatamente um Step de publicação).
        """
        env = compose(ctx, None, copy.deepcopy(kit))
        if env.catalog is None:
            settings = OperatorSettings.from_dict(ctx.config)
            payload = catalog_not_resolved(
                kit=kit.meta.name,
                constraint=env.platform.spec.build.catalog_version or settings.catalog_version,
                available=[c.version for c in settings.catalogs],
            )
            raise CatalogNotResolved.from_payload(payload)
        self._check_pipeline(kit, env)

        build = Build(
            meta=ObjectMeta(name=kit.meta.name, namespace=kit.meta.namespace),
            spec=BuildSpec(
                meta=snapshot_meta(kit.meta),
                catalog_version=env.catalog.version,
                runtime_version=env.runtime_version,
                platform=copy.deepcopy(env.platform.spec),
                dependencies=list(kit.spec.dependencies),
                steps=env.step_ids,
                build_dir=env.build_dir,
            ),
        )
        set_controller_reference(kit, build)
        return build

    def _check_pipeline(self, kit: Kit, env: Environment) -> None:
        steps = default_step_registry().resolve(env.step_ids)
        publishers = [s.id for s in steps if s.phase == StepPhase.APPLICATION_PUBLISH]
        if len(publishers) != 1:
            payload = pipeline_incomplete(kit=kit.meta.name, steps=env.step_ids, publishers=publishers)
            raise PipelineIncomplete.from_payload(payload)

    def submit_build(self, ctx: ReconcileContext, kit: Kit, previous: Optional[Build] = None) -> Build:
        build = self.new_build(ctx, kit)

        ctx.ensure_active(action=self.name, operation="delete build")
        try:
            ctx.store.delete(build)
        except NotFoundError:
            pass

        ctx.ensure_active(action=self.name, operation="create build")
        created = ctx.store.create(build)

        ctx.log(
            action=self.name,
            level="INFO",
            message="build submitted",
            kit=kit.meta.name,
            previous_phase=previous.status.phase.value if previous is not None else None,
            steps=list(created.spec.steps),
        )
        return created

    # ------------------------------------------------------------------
    # BuildRunning
    # ------------------------------------------------------------------
    def handle_build_running(self, ctx: ReconcileContext, kit: Kit) -> Optional[Kit]:
        build: Build = ctx.store.get(Build, kit.meta.namespace, kit.meta.name)

        phase = build.status.phase
        if phase == BuildPhase.RUNNING:
            ctx.log(action=self.name, level="DEBUG", message="build running", kit=kit.meta.name)
            return None

        if phase == BuildPhase.SUCCEEDED:
            return self._build_succeeded(ctx, kit, build)

        if phase in FAILED_PHASES:
            return self._build_failed(ctx, kit, build)

        return None

    def _expect_running(self, ctx: ReconcileContext, kit: Kit) -> Kit:
        target = ctx.store.get(Kit, kit.meta.namespace, kit.meta.name)
        if target.status.phase != KitPhase.BUILD_RUNNING:
            payload = kit_phase_conflict(
                kit=kit.meta.name,
                expected=KitPhase.BUILD_RUNNING.value,
                found=target.status.phase.value,
            )
            raise KitPhaseConflict.from_payload(payload)
        return target

    def _build_succeeded(self, ctx: ReconcileContext, kit: Kit, build: Build) -> Kit:
        target = self._expect_running(ctx, kit)

        target.status.base_image = build.status.base_image
        target.status.image = build.status.image
        target.status.public_image = build.status.public_image
        target.status.phase = KitPhase.READY
        # location é detalhe interno do executor
        target.status.artifacts = [Artifact(id=a.id, location="", target=a.target) for a in build.status.artifacts]

        ctx.ensure_active(action=self.name, operation="update kit status")
        updated = ctx.store.update_status(target)
        log_transition(ctx, action=self.name, kit=updated, image=updated.status.image)

        inform_integrations(ctx, updated)
        return updated

    def _build_failed(self, ctx: ReconcileContext, kit: Kit, build: Build) -> Kit:
        target = self._expect_running(ctx, kit)

        failure = copy.deepcopy(build.status.failure)
        if failure is None:
            failure = Failure(
                reason=build.status.error or f"build {build.status.phase.value}",
                time=datetime.now(timezone.utc),
            )

        target.status.failure = failure
        target.status.phase = KitPhase.ERROR

        ctx.ensure_active(action=self.name, operation="update kit status")
        updated = ctx.store.update_status(target)
        log_transition(
            ctx,
            action=self.name,
            kit=updated,
            level="ERROR",
            build_phase=build.status.phase.value,
            error=build.status.error,
        )
        return updated
