"""
Decode do nível raiz do documento mesclado.

O root aceita apenas três tipos de bloco, cada um com exatamente um rótulo:

    cluster "<nome>"    { ...corpo decodificado depois, com contexto... }
    component "<tipo>"  { ...corpo decodificado pelo registry... }
    variable "<nome>"   { default = <expr>, description = "<texto>" }

Neste estágio nenhum corpo de `cluster`/`component` é avaliado: o contexto
de variáveis ainda não existe. O decode do root apenas valida a estrutura
e separa rótulos de corpos.

Decisões:
    - exatamente um `cluster` entre todos os arquivos (zero ou mais de um
      é erro; nenhum dos dois é escolhido silenciosamente)
    - nomes de variável duplicados são erro
    - atributos no nível raiz não são suportados
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from ..diagnostics import (
    Diagnostics,
    duplicate_block,
    duplicate_variable,
    missing_block,
    missing_label,
    type_mismatch,
    unsupported_attribute,
    unsupported_block,
)
from ..document.merge import MergedBody
from ..document.types import Block


CLUSTER_BLOCK = "cluster"
COMPONENT_BLOCK = "component"
VARIABLE_BLOCK = "variable"

ROOT_BLOCK_TYPES = (CLUSTER_BLOCK, COMPONENT_BLOCK, VARIABLE_BLOCK)
VARIABLE_ATTRIBUTES = ("default", "description")


class _Missing:
    def __repr__(self) -> str:
        return "MISSING"


MISSING: Any = _Missing()


@dataclass(frozen=True)
class VariableDeclaration:
    name: str
    default: Any = MISSING
    description: Optional[str] = None
    source: Optional[str] = None

    @property
    def has_default(self) -> bool:
        return self.default is not MISSING


@dataclass(frozen=True)
class ClusterSpec:
    name: str
    body: Dict[str, Any]
    source: Optional[str] = None


@dataclass(frozen=True)
class ComponentSpec:
    type: str
    body: Dict[str, Any]
    source: Optional[str] = None


@dataclass(frozen=True)
class ConfigRoot:
    cluster: ClusterSpec
    components: List[ComponentSpec] = field(default_factory=list)
    variables: List[VariableDeclaration] = field(default_factory=list)


def _labeled(block: Block, diags: Diagnostics) -> Optional[Tuple[str, Dict[str, Any]]]:
    split = block.split_labels(1)
    if split is None:
        diags.append(
            missing_label(block_type=block.type, expected=1, actual=0, filename=block.source)
        )
        return None
    labels, body = split
    return labels[0], body


def _decode_variable(block: Block, diags: Diagnostics) -> Optional[VariableDeclaration]:
    labeled = _labeled(block, diags)
    if labeled is None:
        return None
    name, body = labeled
    address = f"{VARIABLE_BLOCK}.{name}"

    ok = True
    for attr in body:
        if attr not in VARIABLE_ATTRIBUTES:
            diags.append(
                unsupported_attribute(name=attr, address=f"{address}.{attr}", filename=block.source)
            )
            ok = False

    description = body.get("description")
    if description is not None and not isinstance(description, str):
        diags.append(
            type_mismatch(
                name="description",
                address=f"{address}.description",
                expected="string",
                actual=type(description).__name__,
                filename=block.source,
            )
        )
        ok = False

    if not ok:
        return None
    return VariableDeclaration(
        name=name,
        default=body.get("default", MISSING),
        description=description,
        source=block.source,
    )


def decode_root(body: MergedBody) -> Tuple[Optional[ConfigRoot], Diagnostics]:
    """
    Valida a estrutura do documento mesclado e separa os blocos do root.

    Returns:
        `(ConfigRoot, diagnósticos)`; o root é `None` quando há erros.
    """
    diags = Diagnostics()

    for name, _value, source in body.attributes():
        diags.append(unsupported_attribute(name=name, address=name, filename=source))

    for block_type in body.block_types():
        if block_type not in ROOT_BLOCK_TYPES:
            for block in body.blocks(block_type):
                diags.append(unsupported_block(block_type=block_type, filename=block.source))

    cluster: Optional[ClusterSpec] = None
    cluster_blocks = body.blocks(CLUSTER_BLOCK)
    if not cluster_blocks:
        diags.append(missing_block(block_type=CLUSTER_BLOCK))
    for block in cluster_blocks:
        labeled = _labeled(block, diags)
        if labeled is None:
            continue
        if cluster is not None:
            diags.append(
                duplicate_block(
                    block_type=CLUSTER_BLOCK,
                    filename=block.source,
                    previous=cluster.source,
                )
            )
            continue
        cluster = ClusterSpec(name=labeled[0], body=labeled[1], source=block.source)

    components: List[ComponentSpec] = []
    for block in body.blocks(COMPONENT_BLOCK):
        labeled = _labeled(block, diags)
        if labeled is not None:
            components.append(ComponentSpec(type=labeled[0], body=labeled[1], source=block.source))

    variables: List[VariableDeclaration] = []
    seen: Dict[str, VariableDeclaration] = {}
    for block in body.blocks(VARIABLE_BLOCK):
        decl = _decode_variable(block, diags)
        if decl is None:
            continue
        if decl.name in seen:
            diags.append(
                duplicate_variable(
                    name=decl.name,
                    filename=decl.source,
                    previous=seen[decl.name].source,
                )
            )
            continue
        seen[decl.name] = decl
        variables.append(decl)

    if diags.has_errors() or cluster is None:
        return None, diags
    return ConfigRoot(cluster=cluster, components=components, variables=variables), diags
