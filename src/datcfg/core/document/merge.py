"""
Merge lógico de documentos.

`MergedBody` é uma visão somente leitura sobre N documentos que responde
consultas de blocos e atributos como se todos tivessem sido concatenados
textualmente, na ordem em que foram fornecidos.

Diferente do deep-merge de settings, aqui nada é sobrescrito: blocos
repetidos (ex.: vários `component`) permanecem todos visíveis, e conflitos
de blocos singleton (ex.: dois `cluster`) são detectados depois, no decode
do root.

Invariantes:
    - Nenhum documento é mutado
    - A ordem é: ordem dos arquivos, depois ordem dentro do arquivo
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, List, Tuple

from .types import Block, RawDocument


@dataclass(frozen=True)
class MergedBody:
    documents: Tuple[RawDocument, ...] = ()

    @property
    def paths(self) -> List[str]:
        return [d.path for d in self.documents]

    def blocks(self, block_type: str | None = None) -> List[Block]:
        """Todos os blocos (opcionalmente filtrados por tipo), em ordem."""
        out: List[Block] = []
        for doc in self.documents:
            for btype, content in doc.block_entries():
                if block_type is None or btype == block_type:
                    out.append(Block(type=btype, content=content, source=doc.path))
        return out

    def block_types(self) -> List[str]:
        seen: List[str] = []
        for block in self.blocks():
            if block.type not in seen:
                seen.append(block.type)
        return seen

    def attributes(self) -> List[Tuple[str, Any, str]]:
        """Atributos de nível raiz como `(nome, valor, arquivo)`."""
        return [
            (name, value, doc.path)
            for doc in self.documents
            for name, value in doc.attributes().items()
        ]


def merge_documents(documents: Iterable[RawDocument]) -> MergedBody:
    return MergedBody(documents=tuple(documents))
