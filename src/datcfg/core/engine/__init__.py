"""
Engine de resolução do datcfg.

- **types**: estados do pass, `ResolvedComponent` e `ResolutionResult`
- **context**: `ResolutionContext` (identidade do pass + log de eventos)
- **engine**: `ResolutionEngine`, a máquina de estados de um pass
"""

from .context import ResolutionContext, new_run_id
from .engine import ResolutionEngine, resolve
from .types import PIPELINE_ORDER, ResolutionResult, ResolutionState, ResolvedComponent

__all__ = [
    "PIPELINE_ORDER",
    "ResolutionContext",
    "ResolutionEngine",
    "ResolutionResult",
    "ResolutionState",
    "ResolvedComponent",
    "new_run_id",
    "resolve",
]
