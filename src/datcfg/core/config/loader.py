# src/datcfg/core/config/loader.py
"""
Loader canônico de settings do datcfg.

Os settings efetivos de um pass são resolvidos a partir de três camadas,
em ordem crescente de precedência:
    - defaults embutidos (`DEFAULT_SETTINGS`)
    - um arquivo local opcional (`datcfg.yaml`, YAML ou JSON)
    - overrides explícitos do chamador (ex.: flags da CLI)

Princípios fundamentais:
    - Settings são declarativos e explícitos
    - Erros estruturais são tratados como falhas fatais
    - A mesma entrada sempre produz os mesmos settings

Limites explícitos:
    - Não descobre nem lê arquivos `.datcfg`
    - Não lê o arquivo de valores (`dat.vars`)
"""

from pathlib import Path
from typing import Any, Dict, Optional
import json

import yaml  # PyYAML

from .merge import deep_merge
from .errors import (
    SettingsNotFoundError,
    InvalidSettingsRootTypeError,
    UnsupportedSettingsFormatError,
)


DEFAULT_SETTINGS_FILE = "datcfg.yaml"

DEFAULT_SETTINGS: Dict[str, Any] = {
    "discovery": {
        "directory": ".",
        "pattern": "*.datcfg",
    },
    "values": {
        "path": "dat.vars",
    },
}


def _load_file(path: Path) -> Dict[str, Any]:
    """
    Carrega um arquivo de settings e valida sua estrutura básica.

    Formatos suportados (v1):
        - YAML (.yaml, .yml)
        - JSON (.json)

    Arquivos vazios são interpretados como dicionários vazios.

    Raises:
        SettingsNotFoundError: Se o arquivo não existir.
        UnsupportedSettingsFormatError: Se o formato do arquivo não for suportado.
        InvalidSettingsRootTypeError: Se o conteúdo raiz não for um dicionário.
    """
    if not path.exists():
        raise SettingsNotFoundError(f"Arquivo de settings não encontrado: {path}")

    suffix = path.suffix.lower()

    if suffix in {".yaml", ".yml"}:
        with path.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f)

    elif suffix == ".json":
        with path.open("r", encoding="utf-8") as f:
            data = json.load(f)

    else:
        raise UnsupportedSettingsFormatError(f"Formato não suportado: {path.suffix}")

    if data is None:
        data = {}

    if not isinstance(data, dict):
        raise InvalidSettingsRootTypeError(
            f"Settings root deve ser dict, recebido: {type(data).__name__}"
        )

    return data


def load_settings(
    *,
    local_path: Optional[str] = None,
    overrides: Optional[Dict[str, Any]] = None,
    required: bool = False,
) -> Dict[str, Any]:
    """
    Carrega e resolve os settings efetivos do datcfg.

    Política de resolução:
        - Defaults embutidos são sempre a base
        - O arquivo local, quando existe, tem prioridade sobre os defaults
        - `overrides` tem prioridade sobre ambos (valores `None` são ignorados)

    Args:
        local_path (Optional[str]): Caminho do arquivo local de settings.
            Quando omitido, usa `datcfg.yaml` no diretório corrente.
        overrides (Optional[Dict[str, Any]]): Overrides explícitos do chamador.
        required (bool): Se True, a ausência do arquivo local é erro.

    Returns:
        Dict[str, Any]: Settings efetivos.

    Raises:
        SettingsNotFoundError: Se `required` e o arquivo local não existir.
        UnsupportedSettingsFormatError: Se o formato do arquivo não for suportado.
        InvalidSettingsRootTypeError: Se o conteúdo não for um dicionário.
        SettingsTypeConflictError: Se ocorrer conflito estrutural durante o merge.
    """

    effective = deep_merge(DEFAULT_SETTINGS, {})

    local_file = Path(local_path or DEFAULT_SETTINGS_FILE)
    if local_file.exists() or required:
        effective = deep_merge(effective, _load_file(local_file))

    if overrides:
        effective = deep_merge(effective, overrides)

    return effective
