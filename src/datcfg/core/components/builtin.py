"""Tipos de componente embutidos."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class FooComponentConfig:
    """`component "foo"`: atributo `foo` opcional."""

    foo: Optional[str] = None

    def describe(self) -> str:
        return f"Foo: {self.foo if self.foo is not None else '<unset>'}"


@dataclass(frozen=True)
class BarComponentConfig:
    """`component "bar"`: atributo `bar` obrigatório."""

    bar: str

    def describe(self) -> str:
        return f"Bar: {self.bar}"


BUILTIN_COMPONENTS = {
    "foo": FooComponentConfig,
    "bar": BarComponentConfig,
}
