# src/kitflow/core/resources/store.py
"""
Store tipado de recursos do Kitflow.

Este módulo define o contrato consumido pelo core para leitura e escrita
de recursos (`ResourceStore`) e uma implementação em memória
(`InMemoryResourceStore`) com a mesma semântica de um store real:

    - identidade por (kind, namespace, name)
    - concorrência otimista via `meta.resource_version`
    - escrita de spec e de status como operações separadas
    - deleção em cascata de recursos controlados pelo dono

Decisões arquiteturais:
    - O store nunca devolve referências internas (sempre cópias)
    - `update` preserva o status armazenado; `update_status` preserva o spec
    - Falhas são exceções tipadas; not-found é distinguível de erro transitório

Invariantes:
    - Uma escrita com `resource_version` desatualizado falha com ConflictError
    - Toda escrita bem-sucedida incrementa `resource_version`

Limites explícitos:
    - Não implementa watch nem filas de eventos
    - Não valida schema de recursos
    - Não realiza retries
"""

from __future__ import annotations

import copy
import uuid
from dataclasses import dataclass, field
from typing import Any, Dict, List, Protocol, Tuple, Type, TypeVar, runtime_checkable

from .meta import is_controlled_by

T = TypeVar("T")


class StoreError(Exception):
    """
    Exceção base do store de recursos.

    Erros que não são not-found são tratados como transitórios pelo core:
    propagados sem alteração para o loop externo.
    """

    def __init__(self, message: str, *, kind: str = "", namespace: str = "", name: str = "") -> None:
        super().__init__(message)
        self.kind = kind
        self.namespace = namespace
        self.name = name


class NotFoundError(StoreError):
    """O recurso (kind, namespace, name) não existe."""


class AlreadyExistsError(StoreError):
    """Criação de um recurso cuja identidade já está ocupada."""


class ConflictError(StoreError):
    """O recurso armazenado mudou desde a leitura (concorrência otimista)."""


@runtime_checkable
class ResourceStore(Protocol):
    """Contrato mínimo de acesso a recursos consumido pelas Actions."""

    def get(self, kind: Type[T], namespace: str, name: str) -> T:
        ...

    def list(self, kind: Type[T], namespace: str) -> List[T]:
        ...

    def create(self, obj: T) -> T:
        ...

    def update(self, obj: T) -> T:
        ...

    def update_status(self, obj: T) -> T:
        ...

    def delete(self, obj: Any) -> None:
        ...


_Key = Tuple[str, str, str]


@dataclass
class InMemoryResourceStore:
    """
    Implementação de referência do `ResourceStore` mantida em memória.

    Usada em testes e em execuções locais do control loop. Os contadores
    de operações permitem inspecionar efeitos colaterais sem instrumentação
    adicional.
    """

    _objects: Dict[_Key, Any] = field(default_factory=dict, init=False, repr=False)
    _order: List[_Key] = field(default_factory=list, init=False, repr=False)
    calls: Dict[str, int] = field(default_factory=dict, init=False)

    def _count(self, op: str, kind: str) -> None:
        key = f"{op}:{kind}"
        self.calls[key] = self.calls.get(key, 0) + 1

    @staticmethod
    def _key(kind: str, namespace: str, name: str) -> _Key:
        return (kind, namespace, name)

    def _stored(self, obj: Any, op: str) -> Any:
        key = self._key(obj.kind, obj.meta.namespace, obj.meta.name)
        current = self._objects.get(key)
        if current is None:
            raise NotFoundError(
                f"{obj.kind} {obj.meta.namespace}/{obj.meta.name} not found",
                kind=obj.kind,
                namespace=obj.meta.namespace,
                name=obj.meta.name,
            )
        if obj.meta.resource_version != current.meta.resource_version:
            raise ConflictError(
                f"cannot {op} {obj.kind} {obj.meta.namespace}/{obj.meta.name}: "
                f"resource version {obj.meta.resource_version} is stale "
                f"(stored={current.meta.resource_version})",
                kind=obj.kind,
                namespace=obj.meta.namespace,
                name=obj.meta.name,
            )
        return current

    # -----------------------------
    # Leitura
    # -----------------------------
    def get(self, kind: Type[Any], namespace: str, name: str) -> Any:
        self._count("get", kind.kind)
        obj = self._objects.get(self._key(kind.kind, namespace, name))
        if obj is None:
            raise NotFoundError(
                f"{kind.kind} {namespace}/{name} not found",
                kind=kind.kind,
                namespace=namespace,
                name=name,
            )
        return copy.deepcopy(obj)

    def list(self, kind: Type[Any], namespace: str) -> List[Any]:
        self._count("list", kind.kind)
        return [
            copy.deepcopy(self._objects[k])
            for k in self._order
            if k[0] == kind.kind and k[1] == namespace
        ]

    # -----------------------------
    # Escrita
    # -----------------------------
    def create(self, obj: Any) -> Any:
        self._count("create", obj.kind)
        meta = obj.meta
        key = self._key(obj.kind, meta.namespace, meta.name)
        if key in self._objects:
            raise AlreadyExistsError(
                f"{key[0]} {meta.namespace}/{meta.name} already exists",
                kind=key[0],
                namespace=meta.namespace,
                name=meta.name,
            )

        stored = copy.deepcopy(obj)
        stored.meta.uid = stored.meta.uid or str(uuid.uuid4())
        stored.meta.resource_version = 1
        stored.meta.generation = 1

        self._objects[key] = stored
        self._order.append(key)
        return copy.deepcopy(stored)

    def update(self, obj: Any) -> Any:
        self._count("update", obj.kind)
        current = self._stored(obj, "update")

        stored = copy.deepcopy(obj)
        stored.status = copy.deepcopy(current.status)
        stored.meta.uid = current.meta.uid
        stored.meta.resource_version = current.meta.resource_version + 1
        if stored.spec != current.spec:
            stored.meta.generation = current.meta.generation + 1
        else:
            stored.meta.generation = current.meta.generation

        self._objects[self._key(obj.kind, obj.meta.namespace, obj.meta.name)] = stored
        return copy.deepcopy(stored)

    def update_status(self, obj: Any) -> Any:
        self._count("update_status", obj.kind)
        current = self._stored(obj, "update status of")

        stored = copy.deepcopy(current)
        stored.status = copy.deepcopy(obj.status)
        stored.meta.resource_version = current.meta.resource_version + 1

        self._objects[self._key(obj.kind, obj.meta.namespace, obj.meta.name)] = stored
        return copy.deepcopy(stored)

    def delete(self, obj: Any) -> None:
        self._count("delete", obj.kind)
        key = self._key(obj.kind, obj.meta.namespace, obj.meta.name)
        current = self._objects.pop(key, None)
        if current is None:
            raise NotFoundError(
                f"{obj.kind} {obj.meta.namespace}/{obj.meta.name} not found",
                kind=obj.kind,
                namespace=obj.meta.namespace,
                name=obj.meta.name,
            )
        self._order.remove(key)

        # cascata: recursos controlados pelo objeto removido
        owned = [k for k in self._order if is_controlled_by(self._objects[k], current)]
        for k in owned:
            if k in self._objects:
                self.delete(self._objects[k])
