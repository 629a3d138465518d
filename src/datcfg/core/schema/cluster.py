"""Shape do corpo do bloco `cluster`."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ClusterConfig:
    """Configuração decodificada de um `cluster`; ambos os contadores são obrigatórios."""

    controller_count: int
    worker_count: int

    def describe(self) -> str:
        return (
            f"Controllers: {self.controller_count}\n"
            f"Workers: {self.worker_count}"
        )
