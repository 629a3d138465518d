"""
Decode de corpos de bloco em shapes tipados (dataclasses).

Um shape é uma dataclass cujos campos são os atributos aceitos pelo bloco:
    - campo sem default → atributo obrigatório
    - campo com default → atributo opcional
    - a anotação de tipo define a conversão aplicada ao valor avaliado

Conversões suportadas (no espírito das conversões do HCL):
    - int   ← int, float integral, string numérica
    - float ← int, float, string numérica
    - str   ← str, número, bool
    - bool  ← bool, "true" / "false"
    - list / List[T], dict / Dict[str, T], Optional[T], Any

Todas as violações de um corpo são coletadas juntas; a instância só é
construída quando não há erros.
"""

from __future__ import annotations

import dataclasses
import typing
from typing import Any, Dict, Optional, Tuple, Type, TypeVar, Union

from ..diagnostics import (
    Diagnostics,
    missing_required_attribute,
    type_mismatch,
    unsupported_attribute,
)
from ..expr.context import EvaluationContext
from ..expr.evaluator import ExpressionEvaluator, type_name


T = TypeVar("T")


class ConversionError(ValueError):
    def __init__(self, expected: str, actual: str):
        super().__init__(f"{expected} required, got {actual}")
        self.expected = expected
        self.actual = actual


def _describe_type(tp: Any) -> str:
    origin = typing.get_origin(tp)
    if tp is int or tp is float:
        return "number"
    if tp is str:
        return "string"
    if tp is bool:
        return "bool"
    if tp is list or origin is list:
        return "list"
    if tp is dict or origin is dict:
        return "map"
    if origin is Union:
        return " or ".join(_describe_type(a) for a in typing.get_args(tp) if a is not type(None))
    return getattr(tp, "__name__", str(tp))


def _to_number(value: Any, target: type) -> Any:
    if isinstance(value, str):
        try:
            value = float(value) if any(c in value for c in ".eE") else int(value)
        except ValueError:
            raise ConversionError(_describe_type(target), f'string "{value}"') from None
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ConversionError(_describe_type(target), type_name(value))
    if target is int:
        if isinstance(value, float) and not value.is_integer():
            raise ConversionError("whole number", f"fractional number {value}")
        return int(value)
    return float(value)


def convert(value: Any, tp: Any) -> Any:
    """Converte `value` para o tipo anotado `tp` ou levanta `ConversionError`."""
    if tp is Any:
        return value

    origin = typing.get_origin(tp)
    args = typing.get_args(tp)

    if origin is Union:
        if value is None and type(None) in args:
            return None
        last: Optional[ConversionError] = None
        for arg in args:
            if arg is type(None):
                continue
            try:
                return convert(value, arg)
            except ConversionError as e:
                last = e
        raise last or ConversionError(_describe_type(tp), type_name(value))

    if value is None:
        raise ConversionError(_describe_type(tp), "null")

    if tp is bool:
        if isinstance(value, bool):
            return value
        if isinstance(value, str) and value in ("true", "false"):
            return value == "true"
        raise ConversionError("bool", type_name(value))

    if tp in (int, float):
        return _to_number(value, tp)

    if tp is str:
        if isinstance(value, bool):
            return "true" if value else "false"
        if isinstance(value, (str, int, float)):
            return str(value)
        raise ConversionError("string", type_name(value))

    if tp is list or origin is list:
        if not isinstance(value, list):
            raise ConversionError("list", type_name(value))
        if args:
            return [convert(v, args[0]) for v in value]
        return list(value)

    if tp is dict or origin is dict:
        if not isinstance(value, dict):
            raise ConversionError("map", type_name(value))
        if args:
            return {str(k): convert(v, args[1]) for k, v in value.items()}
        return dict(value)

    if isinstance(value, tp):
        return value
    raise ConversionError(_describe_type(tp), type_name(value))


def _is_required(f: dataclasses.Field) -> bool:
    return f.default is dataclasses.MISSING and f.default_factory is dataclasses.MISSING  # type: ignore[misc]


def decode_body(
    body: Dict[str, Any],
    shape: Type[T],
    ctx: EvaluationContext,
    *,
    address: str,
    filename: Optional[str] = None,
) -> Tuple[Optional[T], Diagnostics]:
    """
    Decodifica `body` em uma nova instância de `shape`.

    Args:
        body: atributos do bloco (já sem rótulos).
        shape: dataclass que descreve os atributos aceitos.
        ctx: contexto de avaliação compartilhado do pass.
        address: endereço lógico do bloco (ex.: `component.foo`).
        filename: arquivo de origem do bloco.

    Returns:
        `(instância, diagnósticos)`; a instância é `None` quando há erros.
    """
    diags = Diagnostics()
    fields = {f.name: f for f in dataclasses.fields(shape) if f.init}
    hints = typing.get_type_hints(shape)
    evaluator = ExpressionEvaluator(ctx)

    for name in body:
        if name not in fields:
            diags.append(
                unsupported_attribute(name=name, address=f"{address}.{name}", filename=filename)
            )

    kwargs: Dict[str, Any] = {}
    for name, f in fields.items():
        attr_address = f"{address}.{name}"
        if name not in body:
            if _is_required(f):
                diags.append(
                    missing_required_attribute(name=name, address=attr_address, filename=filename)
                )
            continue

        value, value_diags = evaluator.evaluate(body[name], address=attr_address, filename=filename)
        if value_diags.has_errors():
            diags.extend(value_diags)
            continue

        try:
            kwargs[name] = convert(value, hints.get(name, Any))
        except ConversionError as e:
            diags.append(
                type_mismatch(
                    name=name,
                    address=attr_address,
                    expected=e.expected,
                    actual=e.actual,
                    filename=filename,
                )
            )

    if diags.has_errors():
        return None, diags
    return shape(**kwargs), diags
