# tests/core/components/test_component_registry.py
"""
Testes do registry de tipos de componente.

Os testes asseguram que:
- os tipos embutidos (`foo`, `bar`) estão registrados, em ordem
- tipo desconhecido é falha fatal tipada (nunca um componente ignorado)
- nomes duplicados e registros após `freeze()` são rejeitados
- apenas dataclasses com `describe()` são aceitas como shape
- o decode delega ao decoder de corpos com o endereço `component.<tipo>`

Decisões arquiteturais:
    - O registry é uma tabela fechada, congelada antes de qualquer pass
    - Documentos nunca registram tipos
"""

from dataclasses import dataclass

import pytest

try:
    from datcfg.core.components import (
        BarComponentConfig,
        ComponentConfig,
        ComponentRegistry,
        FooComponentConfig,
        default_registry,
    )
    from datcfg.core.diagnostics import MISSING_REQUIRED_ATTRIBUTE
    from datcfg.core.exceptions import (
        DuplicateComponentTypeError,
        InvalidComponentShapeError,
        RegistryFrozenError,
        UnknownComponentTypeError,
    )
    from datcfg.core.expr import EMPTY_CONTEXT, build_eval_context
except Exception as e:  # noqa: BLE001
    ComponentRegistry = None
    _IMPORT_ERR = e
else:
    _IMPORT_ERR = None


def _require_imports():
    if _IMPORT_ERR is not None:
        pytest.fail(
            "Missing component registry. Implement:"
            "- src/datcfg/core/components/registry.py (ComponentRegistry, default_registry)"
            f"Import error: {_IMPORT_ERR}"
        )


@dataclass(frozen=True)
class _Baz:
    size: int

    def describe(self) -> str:
        return f"Baz: {self.size}"


def test_default_registry_has_builtins_and_is_frozen():
    _require_imports()
    registry = default_registry()
    assert registry.names() == ["foo", "bar"]
    assert "foo" in registry and "baz" not in registry
    assert registry.frozen
    assert registry.get("bar").required_attributes() == ["bar"]
    assert registry.get("foo").optional_attributes() == ["foo"]


def test_unknown_type_is_fatal():
    _require_imports()
    with pytest.raises(UnknownComponentTypeError) as exc:
        default_registry().decode({}, EMPTY_CONTEXT, "baz")
    assert exc.value.type_name == "baz"
    assert exc.value.details["known_types"] == ["foo", "bar"]


def test_register_after_freeze_is_rejected():
    _require_imports()
    with pytest.raises(RegistryFrozenError):
        default_registry().register("baz", _Baz)


def test_duplicate_and_invalid_registrations():
    _require_imports()
    registry = ComponentRegistry()
    registry.register("baz", _Baz)
    with pytest.raises(DuplicateComponentTypeError):
        registry.register("baz", _Baz)
    with pytest.raises(InvalidComponentShapeError):
        registry.register("plain", dict)
    with pytest.raises(ValueError):
        registry.register("  ", _Baz)


def test_extension_with_new_kind():
    """Um novo tipo é adicionado apenas registrando `nome -> shape`."""
    _require_imports()
    registry = ComponentRegistry()
    registry.register("baz", _Baz)
    registry.freeze()

    obj, diags = registry.decode({"size": "${var.n}"}, build_eval_context({"n": 4}), "baz")
    assert not diags
    assert isinstance(obj, ComponentConfig)
    assert obj.describe() == "Baz: 4"


def test_builtin_decode_and_describe():
    _require_imports()
    registry = default_registry()
    foo, diags = registry.decode({"foo": "x"}, EMPTY_CONTEXT, "foo")
    assert not diags and foo == FooComponentConfig(foo="x")
    assert foo.describe() == "Foo: x"

    unset, _ = registry.decode({}, EMPTY_CONTEXT, "foo")
    assert unset.describe() == "Foo: <unset>"

    bar, diags = registry.decode({}, EMPTY_CONTEXT, "bar", source="main.datcfg")
    assert bar is None
    assert [d.type for d in diags] == [MISSING_REQUIRED_ATTRIBUTE]
    assert diags[0].subject.address == "component.bar.bar"
    assert diags[0].subject.filename == "main.datcfg"
    assert BarComponentConfig(bar="y").describe() == "Bar: y"
