"""
Loader do arquivo de valores (overrides de variáveis).

O arquivo de valores (por padrão `dat.vars`) contém apenas atributos
planos `nome = <literal ou expressão pura>`. Ele é a fonte de verdade
dos overrides e não é parametrizável: cada valor é avaliado com um
contexto **vazio**, portanto qualquer referência a `var.*` falha.

Formatos (inferidos pela extensão, como no loader de settings):
    - `.json`          → JSON
    - `.yaml` / `.yml` → YAML (PyYAML)
    - qualquer outro   → HCL (python-hcl2)

Política de falhas:
    - arquivo ausente ou vazio → mapeamento vazio, sem erro
    - falha de leitura (inclusive conteúdo não UTF-8) ou de parse → um
      diagnóstico `ParseError`, mapeamento vazio
    - falha por atributo → diagnóstico associado ao nome, e o processamento
      continua para os demais atributos (collect-all)
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, Tuple

import yaml  # PyYAML

from ..diagnostics import (
    Diagnostics,
    invalid_values_root,
    parse_error,
    unsupported_block,
)
from ..document.parser import parse_text
from ..document.types import is_block_body, is_block_list
from ..expr.context import EMPTY_CONTEXT
from ..expr.evaluator import ExpressionEvaluator


def _read_structured(path: Path, text: str) -> Tuple[Any, Diagnostics]:
    suffix = path.suffix.lower()
    try:
        if suffix == ".json":
            return json.loads(text), Diagnostics()
        return yaml.safe_load(text), Diagnostics()
    except (ValueError, yaml.YAMLError) as e:
        line = getattr(e, "lineno", None)
        mark = getattr(e, "problem_mark", None)
        if mark is not None:
            line = mark.line + 1
        return None, Diagnostics([parse_error(filename=str(path), message=str(e), line=line)])


def load_values(path: str | Path) -> Tuple[Dict[str, Any], Diagnostics]:
    """
    Carrega o arquivo de valores e avalia cada atributo.

    Args:
        path: caminho do arquivo de valores.

    Returns:
        `(overrides, diagnósticos)`. Nomes cujo valor falhou na avaliação
        não aparecem em `overrides`.
    """
    p = Path(path)
    values: Dict[str, Any] = {}
    diags = Diagnostics()

    if not p.is_file():
        return values, diags

    try:
        text = p.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        diags.append(parse_error(filename=str(p), message=str(e)))
        return values, diags
    if not text.strip():
        return values, diags

    if p.suffix.lower() in {".json", ".yaml", ".yml"}:
        body, read_diags = _read_structured(p, text)
        diags.extend(read_diags)
        if read_diags:
            return values, diags
        if body is None:
            return values, diags
        if not isinstance(body, dict):
            diags.append(invalid_values_root(filename=str(p), actual=type(body).__name__))
            return values, diags
    else:
        doc, parse_diags = parse_text(text, filename=str(p))
        diags.extend(parse_diags)
        if doc is None:
            return values, diags
        body = dict(doc.body)
        for name, raw in doc.body.items():
            if is_block_list(raw) and _is_nested_block(raw):
                diags.append(unsupported_block(block_type=name, filename=str(p)))
                body.pop(name)

    evaluator = ExpressionEvaluator(EMPTY_CONTEXT)
    for name, raw in body.items():
        value, attr_diags = evaluator.evaluate(raw, address=str(name), filename=str(p))
        if attr_diags.has_errors():
            diags.extend(attr_diags)
            continue
        values[str(name)] = value

    return values, diags


def _is_nested_block(raw: Any) -> bool:
    if any(is_block_body(item) for item in raw):
        return True
    # Sem a marca do parser, `name "label" { ... }` e `name = [{ label = {...} }]`
    # têm a mesma forma; só a lista de um único dict rotulado é rejeitada.
    if len(raw) != 1:
        return False
    item = raw[0]
    return len(item) == 1 and isinstance(next(iter(item.values())), dict)
