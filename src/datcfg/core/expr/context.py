"""
Contexto de avaliação de expressões.

O `EvaluationContext` é o namespace somente leitura visível às expressões
durante o decode. Um contexto é construído por pass de resolução e
compartilhado por referência entre o decode do cluster e de todos os
componentes desse pass; ninguém o modifica.

Namespaces:
    - `var` → variáveis resolvidas (override ou default)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Mapping


VAR_NAMESPACE = "var"


def _frozen(mapping: Mapping[str, Any]) -> Mapping[str, Any]:
    return MappingProxyType(dict(mapping))


@dataclass(frozen=True)
class EvaluationContext:
    """Snapshot imutável de `namespace -> (nome -> valor)`."""

    variables: Mapping[str, Mapping[str, Any]] = field(
        default_factory=lambda: MappingProxyType({})
    )

    def namespace(self, name: str) -> Mapping[str, Any] | None:
        return self.variables.get(name)

    def has_variable(self, name: str) -> bool:
        ns = self.namespace(VAR_NAMESPACE)
        return ns is not None and name in ns


EMPTY_CONTEXT = EvaluationContext()


def build_eval_context(resolved: Mapping[str, Any]) -> EvaluationContext:
    """Expõe as variáveis resolvidas sob o namespace reservado `var`."""
    return EvaluationContext(
        variables=MappingProxyType({VAR_NAMESPACE: _frozen(resolved)})
    )
