"""
datcfg: Canonical Exceptions (v1)

Este módulo define exceções tipadas internas do datcfg.

Objetivo:
- Sinalizar pontos fatais que não fazem parte da agregação de diagnósticos
  (ex.: tipo de componente desconhecido, registry mutado após congelamento)
- Facilitar o mapeamento determinístico para `Diagnostic` pelo Engine
- Evitar ValueError/RuntimeError genéricos em guardrails críticos

Regras:
- Exceções devem carregar apenas dados estruturados (serializáveis).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class DatcfgException(Exception):
    """Base class para exceções internas do datcfg.

    Importante:
    - Sempre carregar dados estruturados em `details`
    - Mensagem deve ser curta e humana
    """

    message: str
    details: Dict[str, Any] = field(default_factory=dict)
    hint: Optional[str] = None

    def __str__(self) -> str:  # pragma: no cover
        return self.message


# ---------------------------------------------------------------------------
# Registry de componentes
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class UnknownComponentTypeError(DatcfgException):
    """Bloco `component` declara um tipo sem entrada no registry."""

    @property
    def type_name(self) -> str:
        return str(self.details.get("type_name", ""))


@dataclass(frozen=True)
class DuplicateComponentTypeError(DatcfgException):
    """Tentativa de registrar duas vezes o mesmo nome de tipo."""


@dataclass(frozen=True)
class RegistryFrozenError(DatcfgException):
    """Tentativa de registrar um tipo depois que o registry foi congelado."""


@dataclass(frozen=True)
class InvalidComponentShapeError(DatcfgException):
    """Shape registrado não é dataclass ou não implementa `describe()`."""
