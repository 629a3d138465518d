"""
Descoberta e parsing de arquivos de configuração.

O parsing em si é delegado ao `python-hcl2`; este módulo apenas:
    - descobre arquivos por glob em ordem lexicográfica (determinística)
    - converte falhas do parser em diagnósticos `ParseError`
    - normaliza a árvore produzida pelo parser

Sobre a normalização: versões recentes do `python-hcl2` preservam as
aspas de literais string e de rótulos (`'"foo"'`), com as sequências de
escape ainda cruas. A árvore é normalizada para a forma sem aspas e com
escapes decodificados, de modo que o restante do core veja sempre `foo`
para um literal e `${...}` para uma expressão.

O marcador `__is_block__` do parser é preservado como tipo: dicts que o
carregam viram `BlockBody`, e é isso que permite distinguir um bloco sem
rótulo de um atributo mapa com a mesma forma.
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import Any, Iterable, List, Optional, Tuple

import hcl2

from ..diagnostics import Diagnostics, parse_error
from .types import BLOCK_MARKER, BlockBody, RawDocument

# Escapes de string do HCL: \n \r \t \" \\ \uNNNN \UNNNNNNNN
_ESCAPE = re.compile(r'\\(u[0-9a-fA-F]{4}|U[0-9a-fA-F]{8}|[nrt"\\])')
_SIMPLE_ESCAPES = {"n": "\n", "r": "\r", "t": "\t", '"': '"', "\\": "\\"}


def discover(directory: str | Path, pattern: str) -> List[Path]:
    """Lista os arquivos que casam com `pattern`, ordenados por caminho."""
    return sorted(p for p in Path(directory).glob(pattern) if p.is_file())


def _decode_escape(match: "re.Match[str]") -> str:
    seq = match.group(1)
    if seq[0] in "uU":
        code = int(seq[1:], 16)
        return chr(code) if code <= 0x10FFFF else match.group(0)
    return _SIMPLE_ESCAPES[seq]


def decode_escapes(value: str) -> str:
    """Decodifica escapes HCL; sequências desconhecidas ficam como estão."""
    return _ESCAPE.sub(_decode_escape, value)


def _unquote(value: str) -> str:
    if len(value) >= 2 and value[0] == '"' and value[-1] == '"':
        return decode_escapes(value[1:-1])
    return value


def _is_metadata(key: str) -> bool:
    return key.startswith("__") and key.endswith("__")


def normalize(value: Any) -> Any:
    """Remove aspas, decodifica escapes e converte o marcador de bloco em `BlockBody`."""
    if isinstance(value, dict):
        items = {
            _unquote(str(k)): normalize(v)
            for k, v in value.items()
            if not _is_metadata(str(k))
        }
        return BlockBody(items) if value.get(BLOCK_MARKER) else items
    if isinstance(value, list):
        return [normalize(v) for v in value]
    if isinstance(value, str):
        return _unquote(value)
    return value

def parse_text(text: str, *, filename: str) -> Tuple[Optional[RawDocument], Diagnostics]:
    diags = Diagnostics()
    if not text.endswith("\n"):
        text += "\n"
    try:
        body = hcl2.loads(text)
    except Exception as e:  # noqa: BLE001
        diags.append(
            parse_error(
                filename=filename,
                message=str(e).strip() or e.__class__.__name__,
                line=getattr(e, "line", None),
                column=getattr(e, "column", None),
            )
        )
        return None, diags

    body = normalize(body or {})
    return RawDocument(path=filename, body=body), diags


def parse_file(path: str | Path) -> Tuple[Optional[RawDocument], Diagnostics]:
    """
    Faz o parse de um único arquivo.

    Returns:
        `(documento, diagnósticos)`; o documento é `None` quando o parse falha.
    """
    p = Path(path)
    try:
        text = p.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        return None, Diagnostics([parse_error(filename=str(p), message=str(e))])
    return parse_text(text, filename=str(p))


def parse_files(paths: Iterable[str | Path]) -> Tuple[List[RawDocument], Diagnostics]:
    """
    Faz o parse de todos os arquivos, coletando todos os diagnósticos.

    A ordem dos documentos retornados é a ordem dos caminhos recebidos.
    """
    documents: List[RawDocument] = []
    diags = Diagnostics()
    for path in paths:
        doc, file_diags = parse_file(path)
        diags.extend(file_diags)
        if doc is not None:
            documents.append(doc)
    return documents, diags
