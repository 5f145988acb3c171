# src/kitflow/core/pipeline/composer.py
"""
Composição do pipeline de build.

Este módulo implementa `compose`, o colaborador que calcula o Environment
de build a partir de um Kit (ou de uma Integration) e de um Build
existente opcional.

Responsabilidades do módulo:
    - Resolver a Platform corrente do namespace
    - Executar os traits em ordem fixa sobre um rascunho
    - Congelar o rascunho em um `Environment` imutável

Decisões arquiteturais:
    - A única mutação de recurso é feita pelo trait `dependencies` sobre o
      Kit recebido; persistir essa mutação é responsabilidade do chamador
    - Sem Kit em BuildSubmitted, a sequência de Steps é vazia
    - Falhas do store e pré-condições não atendidas são propagadas

Limites explícitos:
    - Não lê nem escreve Builds
    - Não gera descritores de projeto nem extrai metadados de fontes
"""

from __future__ import annotations

from typing import Optional, Sequence, Union

from kitflow.core.config.settings import OperatorSettings
from kitflow.core.context import ReconcileContext
from kitflow.core.resources.platform import get_current_platform
from kitflow.core.resources.types import Build, Integration, Kit

from .environment import Environment
from .traits import Trait, TraitDraft, default_traits

ACTION = "compose"


def _is_enabled(draft: TraitDraft, trait_id: str) -> bool:
    return bool(draft.trait_config(trait_id).get("enabled", True))


def compose(
    ctx: ReconcileContext,
    build: Optional[Build],
    resource: Union[Kit, Integration],
    traits: Optional[Sequence[Trait]] = None,
) -> Environment:
    """
    Calcula o Environment de build para `resource`.

    Args:
        ctx: Contexto da passada (store e configuração do operador).
        build: Build existente, quando houver; apenas anexado ao Environment.
        resource: Kit ou Integration sendo composto. Um Kit pode ter o
            spec alterado pela composição.
        traits: Traits a executar; por padrão, `default_traits()`.

    Returns:
        Environment: Agregado imutável da passada.

    Raises:
        PlatformNotReady: Se o namespace não possuir Platform pronta.
        UnsupportedPublishStrategy: Se o publisher não puder ser selecionado.
        InvalidSettingsError: Se a configuração do operador for inválida.
        StoreError: Falhas do store são propagadas sem alteração.
    """
    kit = resource if isinstance(resource, Kit) else None
    integration = resource if isinstance(resource, Integration) else None

    platform = get_current_platform(ctx.store, resource.meta.namespace)
    settings = OperatorSettings.from_dict(ctx.config)

    draft = TraitDraft(
        platform=platform,
        settings=settings,
        kit=kit,
        integration=integration,
        build=build,
    )

    for trait in (traits if traits is not None else default_traits()):
        if not _is_enabled(draft, trait.id):
            continue
        if trait.configure(draft):
            trait.apply(draft)
            draft.executed.append(trait.id)

    deps = kit.spec.dependencies if kit is not None else resource.spec.dependencies
    draft.classpath.update(deps)

    for w in draft.warnings:
        ctx.add_warning(action=ACTION, message=w)

    env = Environment(
        platform=draft.platform,
        publish_strategy=draft.publish_strategy,
        catalog=draft.catalog,
        runtime_version=draft.runtime_version,
        classpath=frozenset(draft.classpath),
        steps=tuple(draft.steps),
        build_dir=draft.build_dir,
        executed_traits=tuple(draft.executed),
        kit=kit,
        integration=integration,
        build=build,
    )

    ctx.log(
        action=ACTION,
        level="DEBUG",
        message="environment composed",
        resource=f"{resource.kind}/{resource.meta.name}",
        traits=list(env.executed_traits),
        steps=env.step_ids,
    )
    return env
