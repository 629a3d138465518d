"""Carregamento do arquivo de valores (overrides de variáveis)."""

from .loader import load_values

__all__ = ["load_values"]
