# tests/core/schema/test_decode.py
"""
Testes do decode de corpos de bloco em dataclasses tipadas.

Os testes asseguram que:
- campos sem default são obrigatórios
- valores são convertidos para o tipo anotado
- atributos desconhecidos são rejeitados
- todas as violações de um corpo são reportadas juntas
- nenhuma instância é construída quando há erro

Decisões arquiteturais:
    - Conversões seguem o espírito das conversões do HCL
      (ex.: string numérica → número)
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional

import pytest

try:
    from datcfg.core.diagnostics import (
        EVALUATION_ERROR,
        MISSING_REQUIRED_ATTRIBUTE,
        TYPE_MISMATCH,
        UNSUPPORTED_ATTRIBUTE,
    )
    from datcfg.core.expr import EMPTY_CONTEXT, build_eval_context
    from datcfg.core.schema import ClusterConfig, ConversionError, convert, decode_body
except Exception as e:  # noqa: BLE001
    decode_body = None
    _IMPORT_ERR = e
else:
    _IMPORT_ERR = None


def _require_imports():
    if _IMPORT_ERR is not None:
        pytest.fail(
            "Missing body decoder. Implement:"
            "- src/datcfg/core/schema/decode.py (decode_body, convert)"
            f"Import error: {_IMPORT_ERR}"
        )


@dataclass(frozen=True)
class _Shape:
    name: str
    replicas: int = 1
    ratio: float = 0.5
    enabled: bool = False
    zones: List[str] = field(default_factory=list)
    labels: Dict[str, str] = field(default_factory=dict)
    note: Optional[str] = None

    def describe(self) -> str:
        return self.name


def test_cluster_decodes_from_variables():
    _require_imports()
    ctx = build_eval_context({"controller_count": 3})
    cfg, diags = decode_body(
        {"controller_count": "${var.controller_count}", "worker_count": 2},
        ClusterConfig,
        ctx,
        address="cluster.main",
    )
    assert not diags
    assert cfg == ClusterConfig(controller_count=3, worker_count=2)
    assert cfg.describe() == "Controllers: 3\nWorkers: 2"


def test_optional_fields_keep_defaults():
    _require_imports()
    obj, diags = decode_body({"name": "x"}, _Shape, EMPTY_CONTEXT, address="t")
    assert not diags
    assert obj == _Shape(name="x")


def test_values_are_converted():
    _require_imports()
    obj, diags = decode_body(
        {
            "name": 42,
            "replicas": "3",
            "ratio": 1,
            "enabled": "true",
            "zones": ["a", 1],
            "labels": {"k": True},
        },
        _Shape,
        EMPTY_CONTEXT,
        address="t",
    )
    assert not diags
    assert obj.name == "42"
    assert obj.replicas == 3
    assert obj.ratio == 1.0
    assert obj.enabled is True
    assert obj.zones == ["a", "1"]
    assert obj.labels == {"k": "true"}


def test_all_problems_of_a_body_are_reported_together():
    """
    Atributo desconhecido, obrigatório ausente, tipo errado e variável
    indefinida aparecem no mesmo resultado.
    """
    _require_imports()
    ctx = build_eval_context({})
    obj, diags = decode_body(
        {"replicas": "many", "ratio": "${var.r}", "color": "blue"},
        _Shape,
        ctx,
        address="component.t",
        filename="main.datcfg",
    )

    assert obj is None
    by_type = {d.type: d for d in diags}
    assert set(by_type) == {
        UNSUPPORTED_ATTRIBUTE,
        MISSING_REQUIRED_ATTRIBUTE,
        TYPE_MISMATCH,
        EVALUATION_ERROR,
    }
    assert by_type[UNSUPPORTED_ATTRIBUTE].subject.address == "component.t.color"
    assert by_type[MISSING_REQUIRED_ATTRIBUTE].extra["attribute"] == "name"
    assert by_type[TYPE_MISMATCH].subject.address == "component.t.replicas"
    assert by_type[EVALUATION_ERROR].extra["variable"] == "r"
    assert all(d.subject.filename == "main.datcfg" for d in diags)


def test_fractional_number_is_not_an_int():
    _require_imports()
    with pytest.raises(ConversionError):
        convert(2.5, int)
    assert convert(2.0, int) == 2


def test_bool_is_not_a_number():
    _require_imports()
    with pytest.raises(ConversionError):
        convert(True, int)


def test_null_only_fits_optional():
    _require_imports()
    assert convert(None, Optional[str]) is None
    with pytest.raises(ConversionError):
        convert(None, str)
