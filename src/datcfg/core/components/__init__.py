"""
Componentes do datcfg.

- **base**: `ComponentConfig` (Protocol) com a capacidade `describe()`
- **registry**: `ComponentRegistry`, tabela `tipo -> shape` com decode
- **builtin**: tipos embutidos (`foo`, `bar`)
"""

from .base import ComponentConfig
from .builtin import BUILTIN_COMPONENTS, BarComponentConfig, FooComponentConfig
from .registry import ComponentRegistry, ComponentType, default_registry

__all__ = [
    "BUILTIN_COMPONENTS",
    "BarComponentConfig",
    "ComponentConfig",
    "ComponentRegistry",
    "ComponentType",
    "FooComponentConfig",
    "default_registry",
]
