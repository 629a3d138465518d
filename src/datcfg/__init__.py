# src/datcfg/__init__.py
"""
datcfg: resolução de configuração declarativa de cluster e componentes.

Um conjunto de arquivos `.datcfg` (HCL) descreve um único `cluster`, zero ou
mais blocos `component "<tipo>"` e blocos `variable "<nome>"` com defaults.
O datcfg mescla os arquivos, aplica os overrides do arquivo de valores,
avalia as referências `var.<nome>` e decodifica tudo em valores tipados.

Uso típico:
    from datcfg import ResolutionEngine, load_settings

    result = ResolutionEngine(settings=load_settings()).run()
    if result.ok:
        print(result.cluster.describe())

Limites explícitos:
    - Não provisiona nem aplica nada: apenas resolve e descreve
    - Não define uma nova linguagem de expressões
"""

from .core.components import ComponentRegistry, default_registry
from .core.config import load_settings
from .core.diagnostics import Diagnostic, Diagnostics
from .core.engine import ResolutionEngine, ResolutionResult, ResolutionState, resolve

__all__ = [
    "ComponentRegistry",
    "Diagnostic",
    "Diagnostics",
    "ResolutionEngine",
    "ResolutionResult",
    "ResolutionState",
    "default_registry",
    "load_settings",
    "resolve",
]

__version__ = "0.1.0"
