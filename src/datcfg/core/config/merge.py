# src/datcfg/core/config/merge.py
"""
Combinação das camadas de settings do datcfg.

As três camadas (defaults embutidos, `datcfg.yaml` local e flags da CLI)
são sobrepostas na ordem em que chegam. Cada chave é resolvida por
`_merge_value`, que conhece o caminho pontilhado da chave (ex.:
`discovery.pattern`) para que um conflito aponte exatamente onde o
arquivo local diverge do formato esperado.

Regras por chave:
    - override `None` → ignorado (flag de CLI não informada)
    - base ausente ou `None` → valor do override
    - dict sobre dict → combinação recursiva
    - lista → substitui a lista inteira
    - escalar do mesmo tipo → substitui
    - tipos diferentes → `SettingsTypeConflictError`

Invariantes:
    - Nenhum input é mutado
    - Um conflito não produz resultado parcial
"""

from copy import deepcopy
from typing import Any, Dict, Tuple

from .errors import SettingsTypeConflictError

KeyPath = Tuple[str, ...]


def deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """
    Sobrepõe `override` a `base` e retorna um novo dicionário de settings.

    Raises:
        SettingsTypeConflictError: se alguma das raízes não for dict, ou se
            uma chave mudar de tipo entre as camadas.
    """
    if not isinstance(base, dict) or not isinstance(override, dict):
        raise SettingsTypeConflictError(
            "Camadas de settings devem ser mapeamentos, recebido: "
            f"{type(base).__name__} + {type(override).__name__}"
        )
    return _merge_mapping(base, override, ())


def _merge_mapping(base: Dict[str, Any], override: Dict[str, Any], path: KeyPath) -> Dict[str, Any]:
    merged = deepcopy(base)
    for key, incoming in override.items():
        if incoming is None:
            continue
        merged[key] = _merge_value(merged.get(key), incoming, (*path, str(key)))
    return merged


def _merge_value(current: Any, incoming: Any, path: KeyPath) -> Any:
    if current is None or isinstance(incoming, list):
        return deepcopy(incoming)
    if isinstance(current, dict) and isinstance(incoming, dict):
        return _merge_mapping(current, incoming, path)
    if type(current) is not type(incoming):
        raise SettingsTypeConflictError(
            f"Conflito de tipo em '{'.'.join(path)}': esperado "
            f"{type(current).__name__}, recebido {type(incoming).__name__}"
        )
    return deepcopy(incoming)
