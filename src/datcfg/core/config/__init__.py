# src/datcfg/core/config/__init__.py

"""
Camada de settings do datcfg.

Este pacote carrega, mescla e identifica os settings da própria
ferramenta (onde descobrir arquivos `.datcfg`, onde está o arquivo de
valores). Não confundir com a configuração declarativa resolvida pelo
engine: settings dizem *como* resolver, não *o que* é resolvido.

Responsabilidades do pacote:
    - Defaults embutidos + arquivo local opcional + overrides da CLI
    - Deep-merge determinístico entre as camadas
    - Hash canônico para rastreabilidade do pass
"""

from .errors import (
    SettingsError,
    SettingsNotFoundError,
    SettingsTypeConflictError,
    InvalidSettingsRootTypeError,
    UnsupportedSettingsFormatError,
)
from .hashing import canonical_json, canonicalize, compute_config_hash
from .loader import DEFAULT_SETTINGS, DEFAULT_SETTINGS_FILE, load_settings
from .merge import deep_merge

__all__ = [
    "DEFAULT_SETTINGS",
    "DEFAULT_SETTINGS_FILE",
    "SettingsError",
    "SettingsNotFoundError",
    "SettingsTypeConflictError",
    "InvalidSettingsRootTypeError",
    "UnsupportedSettingsFormatError",
    "canonical_json",
    "canonicalize",
    "compute_config_hash",
    "deep_merge",
    "load_settings",
]
