"""
Contexto de execução de um pass de resolução.

O `ResolutionContext` é criado por pass e registra o que aconteceu nele:
    - identidade (run_id, created_at) e settings efetivos
    - log estruturado de eventos (uma entrada por transição de estado)
    - warnings agrupados por estado

Princípios fundamentais:
    - Isolamento por pass (nada é compartilhado entre passes)
    - Eventos estruturados, não texto livre

Limites explícitos:
    - Não guarda variáveis resolvidas nem o contexto de avaliação
    - Não persiste eventos automaticamente
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List
import uuid


def new_run_id() -> str:
    return uuid.uuid4().hex[:12]


@dataclass
class ResolutionContext:
    """
    Contexto de um pass de resolução.

    Invariantes:
        - Cada pass possui um ResolutionContext único
        - Eventos incluem sempre `run_id` e `state`
        - Warnings são associados explicitamente a um estado
    """
    run_id: str
    created_at: datetime
    settings: Dict[str, Any]
    meta: Dict[str, Any] = field(default_factory=dict)

    events: List[Dict[str, Any]] = field(default_factory=list, init=False)
    warnings: Dict[str, List[str]] = field(default_factory=dict, init=False)

    @classmethod
    def create(cls, settings: Dict[str, Any], **meta: Any) -> "ResolutionContext":
        return cls(
            run_id=new_run_id(),
            created_at=datetime.now(timezone.utc),
            settings=settings,
            meta=dict(meta),
        )

    # -----------------------------
    # Logging & warnings
    # -----------------------------
    def log(self, *, state: str, level: str, message: str, **extra: Any) -> None:
        event = {
            "run_id": self.run_id,
            "state": state,
            "level": level,
            "message": message,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }
        event.update(extra)
        self.events.append(event)

    def add_warning(self, *, state: str, message: str) -> None:
        if state not in self.warnings:
            self.warnings[state] = []
        self.warnings[state].append(message)
