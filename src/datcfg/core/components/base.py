"""
Contrato canônico de configuração de componente do datcfg.

Todo tipo de componente registrado é uma dataclass cujos campos são os
atributos aceitos pelo bloco `component "<tipo>" { ... }` e que implementa
`describe()`, a superfície polimórfica comum da qual o engine e a CLI
dependem.

Invariantes:
    - `describe()` não depende de estado externo, apenas dos atributos
      resolvidos da instância
    - instâncias são criadas apenas pelo decoder do registry
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class ComponentConfig(Protocol):
    """Contrato mínimo de uma configuração de componente decodificada."""

    def describe(self) -> str:
        """Resumo legível dos atributos resolvidos."""
        ...
