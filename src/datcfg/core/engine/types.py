"""
Tipos canônicos do engine de resolução.

Componentes principais:
    - ResolutionState  → estados da máquina de estados de um pass
    - ResolvedComponent → componente decodificado (tipo + instância)
    - ResolutionResult → resultado imutável de um pass

Invariantes:
    - Enums possuem valores textuais canônicos (serializáveis)
    - ResolutionResult nunca é alterado após criado
    - Um resultado em FAILED não carrega cluster/componentes parciais
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional

from ..components.base import ComponentConfig
from ..diagnostics import Diagnostics
from ..schema.cluster import ClusterConfig


class ResolutionState(str, Enum):
    """
    Estados de um pass de resolução.

    Ordem nominal:
        DISCOVER → PARSE_ALL → LOAD_OVERRIDES → DECODE_ROOT →
        RESOLVE_VARIABLES → BUILD_CONTEXT → DECODE_CLUSTER →
        DECODE_COMPONENTS → DONE

    `FAILED` é terminal e alcançável a partir de qualquer estado quando
    o estágio termina com diagnósticos de erro.
    """
    DISCOVER = "discover"
    PARSE_ALL = "parse_all"
    LOAD_OVERRIDES = "load_overrides"
    DECODE_ROOT = "decode_root"
    RESOLVE_VARIABLES = "resolve_variables"
    BUILD_CONTEXT = "build_context"
    DECODE_CLUSTER = "decode_cluster"
    DECODE_COMPONENTS = "decode_components"
    DONE = "done"
    FAILED = "failed"


PIPELINE_ORDER = (
    ResolutionState.DISCOVER,
    ResolutionState.PARSE_ALL,
    ResolutionState.LOAD_OVERRIDES,
    ResolutionState.DECODE_ROOT,
    ResolutionState.RESOLVE_VARIABLES,
    ResolutionState.BUILD_CONTEXT,
    ResolutionState.DECODE_CLUSTER,
    ResolutionState.DECODE_COMPONENTS,
)


@dataclass(frozen=True)
class ResolvedComponent:
    type: str
    config: ComponentConfig
    source: Optional[str] = None

    def describe(self) -> str:
        return self.config.describe()


@dataclass(frozen=True)
class ResolutionResult:
    """
    Resultado imutável de um pass de resolução.

    Campos:
        - state: DONE ou FAILED
        - failed_at: estado em que o pass falhou (None em sucesso)
        - files: arquivos de configuração considerados, em ordem
        - variables: variáveis resolvidas expostas em `var`
        - cluster_name / cluster: cluster decodificado
        - components: componentes decodificados, em ordem de documento
        - diagnostics: todos os diagnósticos (erros e avisos)
        - fingerprint: hash canônico do resultado (vazio em FAILED)
    """
    state: ResolutionState
    failed_at: Optional[ResolutionState] = None
    files: List[str] = field(default_factory=list)
    variables: Mapping[str, Any] = field(default_factory=dict)
    cluster_name: Optional[str] = None
    cluster: Optional[ClusterConfig] = None
    components: List[ResolvedComponent] = field(default_factory=list)
    diagnostics: Diagnostics = field(default_factory=Diagnostics)
    fingerprint: str = ""

    @property
    def ok(self) -> bool:
        return self.state == ResolutionState.DONE

    def to_dict(self) -> Dict[str, Any]:
        return {
            "state": self.state.value,
            "failed_at": self.failed_at.value if self.failed_at else None,
            "files": list(self.files),
            "variables": dict(self.variables),
            "cluster": (
                {"name": self.cluster_name, **_as_dict(self.cluster)}
                if self.cluster is not None
                else None
            ),
            "components": [
                {"type": c.type, "config": _as_dict(c.config)} for c in self.components
            ],
            "diagnostics": self.diagnostics.to_list(),
            "fingerprint": self.fingerprint,
        }


def _as_dict(obj: Any) -> Dict[str, Any]:
    if dataclasses.is_dataclass(obj) and not isinstance(obj, type):
        return dataclasses.asdict(obj)
    return dict(getattr(obj, "__dict__", {}))
