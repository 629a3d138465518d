"""
Resolução de variáveis declaradas.

Para cada `VariableDeclaration`:
    1. override com o mesmo nome → usado; o default é ignorado (nem avaliado)
    2. senão, default declarado → avaliado com contexto vazio
    3. senão → variável ausente do resultado (sem erro neste estágio)

Uma variável ausente só falha quando alguma expressão a referencia, com
`EvaluationError` no decode. Defaults não podem referenciar outras
variáveis, então a ordem de resolução não altera o resultado.

Overrides sem declaração correspondente geram um aviso (`UndeclaredVariable`)
que não interrompe o pipeline.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Any, Dict, Iterable, Mapping, Optional, Tuple

from ..diagnostics import Diagnostics, undeclared_variable
from ..expr.context import EMPTY_CONTEXT
from ..expr.evaluator import ExpressionEvaluator
from ..schema.root import VARIABLE_BLOCK, VariableDeclaration


ResolvedVariables = Mapping[str, Any]


def resolve_variables(
    declarations: Iterable[VariableDeclaration],
    overrides: Mapping[str, Any],
    *,
    values_source: Optional[str] = None,
) -> Tuple[ResolvedVariables, Diagnostics]:
    """
    Produz o mapeamento final `nome -> valor`.

    Args:
        declarations: variáveis declaradas no documento mesclado.
        overrides: valores carregados do arquivo de valores.
        values_source: caminho do arquivo de valores (para diagnósticos).

    Returns:
        `(variáveis resolvidas, diagnósticos)`; falhas de avaliação de
        defaults são coletadas para todas as variáveis.
    """
    diags = Diagnostics()
    resolved: Dict[str, Any] = {}
    evaluator = ExpressionEvaluator(EMPTY_CONTEXT)
    declared = set()

    for decl in declarations:
        declared.add(decl.name)

        if decl.name in overrides:
            resolved[decl.name] = overrides[decl.name]
            continue

        if not decl.has_default:
            continue

        value, value_diags = evaluator.evaluate(
            decl.default,
            address=f"{VARIABLE_BLOCK}.{decl.name}.default",
            filename=decl.source,
        )
        diags.extend(value_diags)
        if not value_diags.has_errors():
            resolved[decl.name] = value

    for name in overrides:
        if name not in declared:
            diags.append(undeclared_variable(name=name, filename=values_source))

    return MappingProxyType(resolved), diags
