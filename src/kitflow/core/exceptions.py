"""
Kitflow — Canonical Exceptions (v1)

Este módulo define exceções tipadas internas do Kitflow.

Objetivo:
- Permitir que Actions levantem exceções semânticas tipadas
- Facilitar o mapeamento determinístico para KitflowErrorPayload
- Distinguir pré-condições suaves (espera) de erros fatais da passada

Regras:
- Não contém lógica de reconciliação.
- Exceções carregam apenas dados estruturados (serializáveis).
- Erros do store de recursos vivem em `core.resources.store`.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional

from .errors import KitflowErrorPayload


@dataclass(frozen=True)
class KitflowException(Exception):
    """Base class para exceções internas do Kitflow.

    Importante:
    - Sempre carregar dados estruturados em `details`
    - Mensagem deve ser curta e humana
    """

    message: str
    details: Dict[str, Any]
    hint: Optional[str] = None
    decision_required: bool = False

    def __str__(self) -> str:  # pragma: no cover
        return self.message

    @classmethod
    def from_payload(cls, payload: KitflowErrorPayload) -> "KitflowException":
        return cls(
            message=payload.message,
            details=dict(payload.details),
            hint=payload.hint,
            decision_required=payload.decision_required,
        )


# ---------------------------------------------------------------------------
# Pré-condições de domínio
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class PlatformNotReady(KitflowException):
    """Nenhuma Platform pronta no namespace do Kit (espera suave no Initialize)."""


@dataclass(frozen=True)
class CatalogNotResolved(KitflowException):
    """O Environment não resolveu catálogo/runtime; o build não pode prosseguir."""


@dataclass(frozen=True)
class PipelineIncomplete(KitflowException):
    """A composição não produziu um pipeline executável (publisher ausente ou duplicado)."""


@dataclass(frozen=True)
class UnsupportedPublishStrategy(KitflowException):
    """Combinação (cluster, estratégia de publicação) sem publisher conhecido."""


# ---------------------------------------------------------------------------
# Consistência
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class KitPhaseConflict(KitflowException):
    """O Kit não está mais na fase esperada ao finalizar o resultado de um Build."""


@dataclass(frozen=True)
class OwnershipError(KitflowException):
    """O recurso já é controlado por outro dono."""


# ---------------------------------------------------------------------------
# Fan-out / Reconciliação
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class NotificationFailed(KitflowException):
    """Falha parcial no fan-out; `details` lista as Integrations já atualizadas."""


@dataclass(frozen=True)
class ReconcileCancelled(KitflowException):
    """A passada foi cancelada pelo contexto antes de uma escrita."""
