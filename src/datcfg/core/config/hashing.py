# src/datcfg/core/config/hashing.py
"""
Forma canônica e fingerprint de estruturas do datcfg.

Usado em dois pontos:
    - settings efetivos de um pass (`settings_hash` no evento de `discover`)
    - resultado resolvido (`ResolutionResult.fingerprint`), que mistura
      dicts, `MappingProxyType` de variáveis e dataclasses de configuração

`canonicalize` reduz qualquer um desses valores a tipos JSON puros
(dataclass → dict por campo, mapeamento → dict com chaves string,
tupla → lista, Enum → valor, demais → `str`). O fingerprint é o SHA-256
do JSON canônico resultante.

Invariantes:
    - Estruturas equivalentes produzem o mesmo hash
    - A ordem original das chaves não influencia o hash
    - O hash é sempre uma string hexadecimal de 64 caracteres
"""

import dataclasses
import hashlib
import json
from collections.abc import Mapping
from enum import Enum
from typing import Any


def canonicalize(value: Any) -> Any:
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return {f.name: canonicalize(getattr(value, f.name)) for f in dataclasses.fields(value)}
    if isinstance(value, Mapping):
        return {str(k): canonicalize(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [canonicalize(v) for v in value]
    if isinstance(value, Enum):
        return canonicalize(value.value)
    if value is None or isinstance(value, (bool, int, float, str)):
        return value
    return str(value)


def canonical_json(value: Any) -> str:
    """JSON compacto, com chaves ordenadas, da forma canônica de `value`."""
    return json.dumps(
        canonicalize(value),
        sort_keys=True,
        separators=(",", ":"),
        ensure_ascii=False,
    )


def compute_config_hash(config: Mapping) -> str:
    """
    SHA-256 hexadecimal de um mapeamento de settings ou de resultado.

    Raises:
        TypeError: se `config` não for um mapeamento.
    """
    if not isinstance(config, Mapping):
        raise TypeError(
            f"Config para hashing deve ser um mapeamento, recebido: {type(config).__name__}"
        )
    return hashlib.sha256(canonical_json(config).encode("utf-8")).hexdigest()
