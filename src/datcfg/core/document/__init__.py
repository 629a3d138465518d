"""
Camada de documento do datcfg: descoberta, parsing (python-hcl2) e merge
lógico de múltiplos arquivos `.datcfg` em um único corpo consultável.
"""

from .merge import MergedBody, merge_documents
from .parser import discover, parse_file, parse_files, parse_text
from .types import Block, BlockBody, RawDocument

__all__ = [
    "Block",
    "BlockBody",
    "MergedBody",
    "RawDocument",
    "discover",
    "merge_documents",
    "parse_file",
    "parse_files",
    "parse_text",
]
