# src/datcfg/core/components/registry.py
"""
Registro de tipos de componente.

Este módulo define o `ComponentRegistry`, a tabela de dispatch que associa
o nome de tipo declarado em `component "<tipo>" { ... }` a um shape
(dataclass) e decodifica o corpo do bloco em uma instância desse shape.

O registry atua como o ponto de extensão do datcfg: um novo tipo de
componente é adicionado registrando um novo par `nome -> shape`, sem que
merge, resolução de variáveis ou o engine conheçam tipos concretos.

Decisões arquiteturais:
    - O registry é populado uma única vez, na inicialização, e congelado
      (`freeze()`) antes de qualquer pass de resolução
    - O conteúdo dos documentos nunca registra tipos
    - Tipo desconhecido é falha fatal (`UnknownComponentTypeError`), nunca
      um componente ignorado
    - A ordem de registro é preservada separadamente da estrutura de armazenamento

Invariantes:
    - Cada nome de tipo é único no registry
    - Todo shape registrado é uma dataclass que implementa `describe()`
    - Um registry congelado não aceita novos registros

Limites explícitos:
    - Não decide quando interromper o pipeline (responsabilidade do Engine)
    - Não mantém estado entre decodes
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Tuple, Type

from ..diagnostics import Diagnostics
from ..exceptions import (
    DuplicateComponentTypeError,
    InvalidComponentShapeError,
    RegistryFrozenError,
    UnknownComponentTypeError,
)
from ..expr.context import EvaluationContext
from ..schema.decode import decode_body
from ..schema.root import COMPONENT_BLOCK
from .base import ComponentConfig
from .builtin import BUILTIN_COMPONENTS


@dataclass(frozen=True)
class ComponentType:
    """Entrada do registry: nome do tipo e shape decodificável."""

    name: str
    shape: Type[Any]

    def required_attributes(self) -> List[str]:
        return [
            f.name
            for f in dataclasses.fields(self.shape)
            if f.default is dataclasses.MISSING and f.default_factory is dataclasses.MISSING  # type: ignore[misc]
        ]

    def optional_attributes(self) -> List[str]:
        required = set(self.required_attributes())
        return [f.name for f in dataclasses.fields(self.shape) if f.name not in required]


@dataclass
class ComponentRegistry:
    """
    Registro canônico de tipos de componente.

    Uso típico:
        registry = default_registry()          # já congelado
        instance, diags = registry.decode(body, ctx, "foo")
    """

    _types: Dict[str, ComponentType] = field(default_factory=dict, init=False, repr=False)
    _order: List[str] = field(default_factory=list, init=False, repr=False)
    _frozen: bool = field(default=False, init=False)

    def register(self, type_name: str, shape: Type[Any]) -> None:
        if self._frozen:
            raise RegistryFrozenError(
                f"Component registry is frozen; cannot register {type_name!r}",
                details={"type_name": type_name},
            )
        if not isinstance(type_name, str) or not type_name.strip():
            raise ValueError("component type name must be a non-empty string")
        if type_name in self._types:
            raise DuplicateComponentTypeError(
                f"Duplicate component type: {type_name}",
                details={"type_name": type_name},
            )
        if not dataclasses.is_dataclass(shape) or not callable(getattr(shape, "describe", None)):
            raise InvalidComponentShapeError(
                f"Component shape for {type_name!r} must be a dataclass implementing describe()",
                details={"type_name": type_name, "shape": getattr(shape, "__name__", repr(shape))},
            )

        self._types[type_name] = ComponentType(name=type_name, shape=shape)
        self._order.append(type_name)

    def freeze(self) -> "ComponentRegistry":
        self._frozen = True
        return self

    @property
    def frozen(self) -> bool:
        return self._frozen

    def __contains__(self, type_name: object) -> bool:
        return type_name in self._types

    def get(self, type_name: str) -> ComponentType:
        if type_name not in self._types:
            raise UnknownComponentTypeError(
                f"Unknown component kind: {type_name}",
                details={"type_name": type_name, "known_types": self.names()},
            )
        return self._types[type_name]

    def names(self) -> List[str]:
        return list(self._order)

    def list(self) -> List[ComponentType]:
        return [self._types[name] for name in self._order]

    def decode(
        self,
        body: Mapping[str, Any],
        ctx: EvaluationContext,
        type_name: str,
        *,
        source: Optional[str] = None,
    ) -> Tuple[Optional[ComponentConfig], Diagnostics]:
        """
        Decodifica o corpo de um bloco `component` no shape do tipo.

        Raises:
            UnknownComponentTypeError: se `type_name` não estiver registrado.
        """
        entry = self.get(type_name)
        return decode_body(
            dict(body),
            entry.shape,
            ctx,
            address=f"{COMPONENT_BLOCK}.{type_name}",
            filename=source,
        )


def default_registry() -> ComponentRegistry:
    """Registry com os tipos embutidos, já congelado."""
    registry = ComponentRegistry()
    for name, shape in BUILTIN_COMPONENTS.items():
        registry.register(name, shape)
    return registry.freeze()
