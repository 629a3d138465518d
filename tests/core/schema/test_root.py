# tests/core/schema/test_root.py
"""
Testes do decode do root (cluster / component / variable).

Os testes asseguram que:
- exatamente um `cluster` é exigido entre todos os arquivos
- cada bloco do root exige seu rótulo
- blocos e atributos desconhecidos no root são rejeitados
- variáveis aceitam apenas `default` e `description`
- nomes de variável duplicados são erro
- componentes mantêm a ordem de documento

Limites explícitos:
    - Não avalia corpos de cluster/componentes
"""

import pytest

try:
    from datcfg.core.diagnostics import (
        DUPLICATE_BLOCK,
        DUPLICATE_VARIABLE,
        MISSING_BLOCK,
        MISSING_LABEL,
        UNSUPPORTED_ATTRIBUTE,
        UNSUPPORTED_BLOCK,
    )
    from datcfg.core.document import RawDocument, merge_documents
    from datcfg.core.schema import decode_root
except Exception as e:  # noqa: BLE001
    decode_root = None
    _IMPORT_ERR = e
else:
    _IMPORT_ERR = None


def _require_imports():
    if _IMPORT_ERR is not None:
        pytest.fail(
            "Missing root decoder. Implement:"
            "- src/datcfg/core/schema/root.py (decode_root)"
            f"Import error: {_IMPORT_ERR}"
        )


_CLUSTER = {"cluster": [{"main": {"controller_count": 1, "worker_count": 2}}]}


def _body(*bodies):
    return merge_documents(
        RawDocument(path=f"{i}.datcfg", body=b) for i, b in enumerate(bodies)
    )


def test_root_is_split_into_specs():
    _require_imports()
    root, diags = decode_root(
        _body(
            {**_CLUSTER, "variable": [{"n": {"default": 3, "description": "count"}}]},
            {"component": [{"bar": {"bar": "b"}}, {"foo": {}}]},
        )
    )

    assert not diags
    assert root.cluster.name == "main"
    assert root.cluster.source == "0.datcfg"
    assert [(c.type, c.source) for c in root.components] == [("bar", "1.datcfg"), ("foo", "1.datcfg")]
    (var,) = root.variables
    assert (var.name, var.default, var.description) == ("n", 3, "count")
    assert var.has_default


def test_variable_without_default():
    _require_imports()
    root, diags = decode_root(_body({**_CLUSTER, "variable": [{"x": {}}]}))
    assert not diags
    assert not root.variables[0].has_default


def test_missing_cluster():
    _require_imports()
    root, diags = decode_root(_body({"component": [{"foo": {}}]}))
    assert root is None
    assert [d.type for d in diags] == [MISSING_BLOCK]


def test_duplicate_cluster_across_files():
    """
    Dois `cluster` em arquivos distintos são um conflito, não um merge.

    Invariantes:
        - Nenhum dos dois é escolhido silenciosamente
        - O diagnóstico aponta o arquivo do bloco repetido e o anterior
    """
    _require_imports()
    root, diags = decode_root(_body(_CLUSTER, _CLUSTER))
    assert root is None
    assert [d.type for d in diags] == [DUPLICATE_BLOCK]
    assert diags[0].subject.filename == "1.datcfg"
    assert diags[0].extra["previous"] == "0.datcfg"


def test_missing_label():
    _require_imports()
    root, diags = decode_root(_body({"cluster": [{"controller_count": 1}]}))
    assert root is None
    assert MISSING_LABEL in [d.type for d in diags]


def test_unsupported_root_entries():
    _require_imports()
    root, diags = decode_root(
        _body({**_CLUSTER, "region": "eu", "provider": [{"aws": {}}]})
    )
    assert root is None
    assert sorted(d.type for d in diags) == [UNSUPPORTED_ATTRIBUTE, UNSUPPORTED_BLOCK]


def test_variable_rejects_unknown_attributes():
    _require_imports()
    root, diags = decode_root(_body({**_CLUSTER, "variable": [{"n": {"type": "number"}}]}))
    assert root is None
    assert [d.type for d in diags] == [UNSUPPORTED_ATTRIBUTE]
    assert diags[0].subject.address == "variable.n.type"


def test_duplicate_variable():
    _require_imports()
    root, diags = decode_root(
        _body(
            {**_CLUSTER, "variable": [{"n": {"default": 1}}]},
            {"variable": [{"n": {"default": 2}}]},
        )
    )
    assert root is None
    assert [d.type for d in diags] == [DUPLICATE_VARIABLE]
