# src/kitflow/core/engine/__init__.py
"""
Engine de reconciliação de Kits.

- **action**: contrato `Action` (predicado de fase + handler)
- **dispatcher**: `ActionDispatcher`, primeira Action compatível por passada
- **initialize**: `InitializeAction` (fase vazia)
- **build**: `BuildAction` (BuildSubmitted / BuildRunning)
- **notify**: `inform_integrations`, fan-out para Integrations
- **reconciler**: `KitReconciler`, entrada do loop externo
"""

from .action import Action
from .dispatcher import ActionDispatcher, DispatchResult, OverlappingActionsError
from .initialize import InitializeAction
from .build import BuildAction
from .notify import inform_integrations
from .reconciler import KitReconciler, default_actions

__all__ = [
    "Action",
    "ActionDispatcher",
    "DispatchResult",
    "OverlappingActionsError",
    "InitializeAction",
    "BuildAction",
    "inform_integrations",
    "KitReconciler",
    "default_actions",
]
