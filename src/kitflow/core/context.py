# src/kitflow/core/context.py
"""
Contexto de execução de uma passada de reconciliação.

Este módulo define o `ReconcileContext`, o contexto canônico passado a
todas as Actions durante uma passada do control loop sobre um Kit.

O contexto consolida:
    - identidade da passada (reconcile_id, created_at)
    - store de recursos usado para leitura e escrita
    - configuração efetiva do operador
    - logs estruturados da passada
    - warnings associados a Actions específicas
    - sinal cooperativo de cancelamento

Decisões arquiteturais:
    - Actions interagem com o mundo exterior apenas via contexto
    - Logs são eventos estruturados, não texto livre
    - O cancelamento é verificado antes de cada escrita, nunca no meio dela

Invariantes:
    - Cada passada possui um ReconcileContext próprio
    - Logs incluem sempre `reconcile_id` e `action`
    - Após `cancel()`, nenhuma escrita nova é iniciada pela passada

Limites explícitos:
    - Não executa Actions
    - Não decide retries nem backoff
    - Não persiste eventos automaticamente
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List

from kitflow.core.exceptions import ReconcileCancelled
from kitflow.core.resources.store import ResourceStore


@dataclass
class ReconcileContext:
    """
    Contexto compartilhado de uma passada de reconciliação.

    Atributos:
        - reconcile_id: identificador da passada (rastreabilidade)
        - created_at: instante de criação da passada (UTC)
        - store: acesso tipado aos recursos
        - config: configuração efetiva do operador
        - meta: metadados livres da passada (ex.: origem do disparo)
    """
    reconcile_id: str
    created_at: datetime
    store: ResourceStore
    config: Dict[str, Any] = field(default_factory=dict)
    meta: Dict[str, Any] = field(default_factory=dict)

    events: List[Dict[str, Any]] = field(default_factory=list, init=False)
    warnings: Dict[str, List[str]] = field(default_factory=dict, init=False)
    _cancelled: bool = field(default=False, init=False, repr=False)

    # -----------------------------
    # Cancelamento
    # -----------------------------
    def cancel(self) -> None:
        self._cancelled = True

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    def ensure_active(self, *, action: str, operation: str) -> None:
        """Levanta `ReconcileCancelled` se a passada foi cancelada."""
        if not self._cancelled:
            return
        self.log(action=action, level="WARNING", message="reconcile cancelled", operation=operation)
        raise ReconcileCancelled(
            message=f"reconcile {self.reconcile_id} cancelled before {operation}",
            details={
                "reconcile_id": self.reconcile_id,
                "action": action,
                "operation": operation,
            },
        )

    # -----------------------------
    # Logging & warnings
    # -----------------------------
    def log(self, *, action: str, level: str, message: str, **extra: Any) -> None:
        event = {
            "reconcile_id": self.reconcile_id,
            "action": action,
            "level": level,
            "message": message,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }
        event.update(extra)
        self.events.append(event)

    def add_warning(self, *, action: str, message: str) -> None:
        if action not in self.warnings:
            self.warnings[action] = []
        self.warnings[action].append(message)
