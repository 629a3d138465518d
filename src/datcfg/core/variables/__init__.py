"""Resolução de variáveis: override > default > ausente."""

from .resolver import ResolvedVariables, resolve_variables

__all__ = ["ResolvedVariables", "resolve_variables"]
