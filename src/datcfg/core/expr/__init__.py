"""
Expressões do datcfg: contexto de avaliação (namespace `var`) e avaliação
de interpolações `${...}` via simpleeval.
"""

from .context import EMPTY_CONTEXT, VAR_NAMESPACE, EvaluationContext, build_eval_context
from .evaluator import ExpressionEvaluator, evaluate

__all__ = [
    "EMPTY_CONTEXT",
    "VAR_NAMESPACE",
    "EvaluationContext",
    "ExpressionEvaluator",
    "build_eval_context",
    "evaluate",
]
