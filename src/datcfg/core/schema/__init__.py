"""
Schema do datcfg: decode do root (cluster / component / variable) e
decode genérico de corpos de bloco em dataclasses tipadas.
"""

from .cluster import ClusterConfig
from .decode import ConversionError, convert, decode_body
from .root import (
    MISSING,
    ClusterSpec,
    ComponentSpec,
    ConfigRoot,
    VariableDeclaration,
    decode_root,
)

__all__ = [
    "MISSING",
    "ClusterConfig",
    "ClusterSpec",
    "ComponentSpec",
    "ConfigRoot",
    "ConversionError",
    "VariableDeclaration",
    "convert",
    "decode_body",
    "decode_root",
]
