"""
Kitflow — Canonical Error Structures (v1)

Este módulo define o padrão canônico de erros do Kitflow.
Erros são artefatos operacionais do control loop e devem ser:

- explícitos
- serializáveis
- rastreáveis
- acionáveis

Um erro registrado aqui nunca implica retry interno: a decisão de
reprocessar pertence ao loop externo de reconciliação.
"""

from __future__ import annotations

from dataclasses import dataclass, asdict
from typing import Any, Dict, List, Optional


# ---------------------------------------------------------------------------
# Payload canônico
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class KitflowErrorPayload:
    """
    Payload canônico de erro do Kitflow.

    Campos:
    - type: código estável do erro (não é texto livre)
    - message: mensagem curta, humana e objetiva
    - details: dados estruturados relevantes para diagnóstico
    - hint: ação sugerida ao operador
    - decision_required: indica se a reconciliação está bloqueada aguardando
      intervenção humana (ex.: edição concorrente do Kit).
    """

    type: str
    message: str
    details: Dict[str, Any]
    hint: Optional[str] = None
    decision_required: bool = False

    def to_dict(self) -> Dict[str, Any]:
        """Retorna representação serializável do erro."""
        return asdict(self)


# ---------------------------------------------------------------------------
# Catálogo canônico de tipos de erro (v1)
# ---------------------------------------------------------------------------

# Pré-condições de domínio
CATALOG_NOT_RESOLVED = "CATALOG_NOT_RESOLVED"
PIPELINE_INCOMPLETE = "PIPELINE_INCOMPLETE"

# Consistência
KIT_PHASE_CONFLICT = "KIT_PHASE_CONFLICT"

# Fan-out
NOTIFICATION_FAILED = "NOTIFICATION_FAILED"

# Store / Reconciliação
STORE_ERROR = "STORE_ERROR"
RECONCILE_EXECUTION_ERROR = "RECONCILE_EXECUTION_ERROR"


# ---------------------------------------------------------------------------
# Helpers de fábrica
# ---------------------------------------------------------------------------

def kit_phase_conflict(
    *,
    kit: str,
    expected: str,
    found: str,
    hint: str = "O Kit foi modificado externamente durante o build; verifique a edição concorrente antes de reprocessar.",
) -> KitflowErrorPayload:
    return KitflowErrorPayload(
        type=KIT_PHASE_CONFLICT,
        message=f"found kit {kit} not in the expected phase (expected={expected}, found={found})",
        details={
            "kit": kit,
            "expected": expected,
            "found": found,
        },
        hint=hint,
        decision_required=True,
    )


def catalog_not_resolved(
    *,
    kit: str,
    constraint: Optional[str] = None,
    available: Optional[List[str]] = None,
    hint: str = "Declare um catálogo compatível em `catalogs` ou ajuste a restrição de versão da Platform.",
) -> KitflowErrorPayload:
    return KitflowErrorPayload(
        type=CATALOG_NOT_RESOLVED,
        message="undefined runtime catalog",
        details={
            "kit": kit,
            "constraint": constraint,
            "available": list(available or []),
        },
        hint=hint,
        decision_required=False,
    )


def pipeline_incomplete(
    *,
    kit: str,
    steps: List[str],
    publishers: List[str],
    hint: str = "Não desligue o trait `builder` de um Kit que precisa ser construído.",
) -> KitflowErrorPayload:
    return KitflowErrorPayload(
        type=PIPELINE_INCOMPLETE,
        message=f"build pipeline for kit {kit} must have exactly one publish step (found {len(publishers)})",
        details={
            "kit": kit,
            "steps": list(steps),
            "publishers": list(publishers),
        },
        hint=hint,
        decision_required=True,
    )


def notification_failed(
    *,
    kit: str,
    updated: List[str],
    failed: str,
    exc_message: Optional[str] = None,
    hint: str = "A notificação é idempotente; a próxima passada reaplica a fase nas Integrations restantes.",
) -> KitflowErrorPayload:
    return KitflowErrorPayload(
        type=NOTIFICATION_FAILED,
        message=f"cannot inform integrations about kit {kit}",
        details={
            "kit": kit,
            "updated": list(updated),
            "failed": failed,
            "exc_message": exc_message,
        },
        hint=hint,
        decision_required=False,
    )


def reconcile_execution_error(
    *,
    action: Optional[str] = None,
    exc_type: Optional[str] = None,
    exc_message: Optional[str] = None,
    hint: str = "Falha propagada ao loop externo; a passada será reexecutada com backoff.",
) -> KitflowErrorPayload:
    return KitflowErrorPayload(
        type=RECONCILE_EXECUTION_ERROR,
        message="Falha inesperada durante a reconciliação do Kit",
        details={
            "action": action,
            "exc_type": exc_type,
            "exc_message": exc_message,
        },
        hint=hint,
        decision_required=False,
    )
