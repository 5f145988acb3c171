# src/kitflow/core/resources/meta.py
"""
Utilitários de metadados e ownership entre recursos.

A relação de ownership (Kit → Build) governa a deleção em cascata e
delimita o escopo do fan-out. Apenas um dono pode ser o controlador
de um recurso.
"""

from __future__ import annotations

import copy
from typing import Any

from kitflow.core.exceptions import OwnershipError

from .types import ObjectMeta, OwnerReference


def snapshot_meta(meta: ObjectMeta) -> ObjectMeta:
    """Cópia independente dos metadados, usada em snapshots de spec."""
    return copy.deepcopy(meta)


def set_controller_reference(owner: Any, obj: Any) -> None:
    """
    Define `owner` como controlador de `obj`.

    Uma referência existente para o mesmo dono é substituída; um
    controlador diferente já presente gera `OwnershipError`.
    """
    ref = OwnerReference(
        kind=owner.kind,
        name=owner.meta.name,
        uid=owner.meta.uid,
        controller=True,
        block_owner_deletion=True,
    )

    refs = []
    for existing in obj.meta.owner_references:
        same_owner = existing.kind == ref.kind and existing.name == ref.name
        if existing.controller and not same_owner:
            raise OwnershipError(
                message=f"{obj.kind} {obj.meta.name} is already controlled by {existing.kind} {existing.name}",
                details={
                    "object": obj.meta.name,
                    "controller_kind": existing.kind,
                    "controller_name": existing.name,
                },
            )
        if not same_owner:
            refs.append(existing)

    refs.append(ref)
    obj.meta.owner_references = refs


def is_controlled_by(obj: Any, owner: Any) -> bool:
    if obj.meta.namespace != owner.meta.namespace:
        return False
    for ref in obj.meta.owner_references:
        if not ref.controller:
            continue
        if ref.kind != owner.kind or ref.name != owner.meta.name:
            continue
        if ref.uid and owner.meta.uid and ref.uid != owner.meta.uid:
            continue
        return True
    return False
