"""
Tipos canônicos de documento do datcfg.

Um documento é a árvore de valores Python produzida pelo parser HCL
(`python-hcl2`) para um único arquivo:

    - atributos: `nome -> valor` (escalares, listas, mapas ou strings
      de expressão no formato `${...}`)
    - blocos: `tipo -> [conteúdo, ...]`, onde blocos rotulados aparecem
      aninhados por rótulo (`component "foo" {}` vira `{"foo": {...}}`)

O corpo de um bloco chega como `BlockBody` quando o parser marca blocos
(`__is_block__`). Sem a marca, a forma da árvore é a única pista e a
separação de rótulos cai para a heurística estrutural.

Invariantes:
    - `RawDocument` e `Block` são imutáveis após criados
    - A origem (`source`) de cada bloco é sempre o arquivo que o declarou
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

BLOCK_MARKER = "__is_block__"


class BlockBody(dict):
    """Corpo de bloco marcado pelo parser (compara igual a um dict comum)."""


def is_block_body(value: Any) -> bool:
    """Verdadeiro para um `BlockBody`, direto ou aninhado sob rótulos."""
    if isinstance(value, BlockBody):
        return True
    if isinstance(value, dict) and len(value) == 1:
        return is_block_body(next(iter(value.values())))
    return False


@dataclass(frozen=True)
class RawDocument:
    """Um arquivo de configuração já parseado."""

    path: str
    body: Dict[str, Any] = field(default_factory=dict)

    def block_entries(self) -> List[Tuple[str, Dict[str, Any]]]:
        """Retorna `(tipo, conteúdo)` para cada bloco, na ordem do arquivo."""
        out: List[Tuple[str, Dict[str, Any]]] = []
        for key, value in self.body.items():
            if is_block_list(value):
                out.extend((key, item) for item in value)
        return out

    def attributes(self) -> Dict[str, Any]:
        return {k: v for k, v in self.body.items() if not is_block_list(v)}


@dataclass(frozen=True)
class Block:
    """
    Bloco de um documento, com rótulos ainda não separados do corpo.

    O número de rótulos depende do schema de quem decodifica (ex.:
    `component` tem um rótulo), por isso a separação é feita sob demanda
    via `split_labels`.
    """

    type: str
    content: Dict[str, Any]
    source: str

    def split_labels(self, count: int) -> Optional[Tuple[Tuple[str, ...], Dict[str, Any]]]:
        """
        Separa `count` rótulos do conteúdo do bloco.

        Um `BlockBody` encontrado antes de consumir todos os rótulos
        significa que o bloco foi declarado com rótulos a menos.

        Returns:
            `(rótulos, corpo)` ou `None` quando o bloco tem menos rótulos
            do que o esperado.
        """
        labels: List[str] = []
        body: Any = self.content
        for _ in range(count):
            if isinstance(body, BlockBody):
                return None
            if not (isinstance(body, dict) and len(body) == 1):
                return None
            label, inner = next(iter(body.items()))
            if not isinstance(inner, dict):
                return None
            labels.append(str(label))
            body = inner
        return tuple(labels), dict(body)


def is_block_list(value: Any) -> bool:
    """Blocos chegam do parser como lista não vazia de dicts."""
    return (
        isinstance(value, list)
        and bool(value)
        and all(isinstance(item, dict) for item in value)
    )
