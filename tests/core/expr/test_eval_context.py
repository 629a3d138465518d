# tests/core/expr/test_eval_context.py
"""
Testes do construtor de contexto de avaliação.

Invariantes:
    - O contexto expõe as variáveis sob o namespace `var`
    - O contexto é imutável (nenhum consumidor consegue alterá-lo)
    - Alterar o mapeamento de origem não afeta o contexto já construído
"""

import pytest

try:
    from datcfg.core.expr import EMPTY_CONTEXT, VAR_NAMESPACE, build_eval_context
except Exception as e:  # noqa: BLE001
    build_eval_context = None
    _IMPORT_ERR = e
else:
    _IMPORT_ERR = None


def _require_imports():
    if _IMPORT_ERR is not None:
        pytest.fail(
            "Missing evaluation context API. Implement:"
            "- src/datcfg/core/expr/context.py"
            f"Import error: {_IMPORT_ERR}"
        )


def test_variables_live_under_var_namespace():
    _require_imports()
    ctx = build_eval_context({"n": 3})
    assert VAR_NAMESPACE == "var"
    assert ctx.namespace("var")["n"] == 3
    assert ctx.has_variable("n")
    assert not ctx.has_variable("m")


def test_context_is_read_only():
    _require_imports()
    ctx = build_eval_context({"n": 3})
    with pytest.raises(TypeError):
        ctx.namespace("var")["n"] = 4  # type: ignore[index]
    with pytest.raises(TypeError):
        ctx.variables["other"] = {}  # type: ignore[index]


def test_source_mapping_is_snapshotted():
    _require_imports()
    source = {"n": 3}
    ctx = build_eval_context(source)
    source["n"] = 99
    assert ctx.namespace("var")["n"] == 3


def test_empty_context_has_no_namespace():
    _require_imports()
    assert EMPTY_CONTEXT.namespace("var") is None
    assert not EMPTY_CONTEXT.has_variable("n")
