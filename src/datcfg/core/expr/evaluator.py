"""
Avaliação de expressões sobre a árvore produzida pelo parser HCL.

O `python-hcl2` não avalia expressões: referências e operações chegam
como strings `${...}` (ex.: `count = var.n` vira `"${var.n}"`). Este
módulo avalia essas interpolações contra um `EvaluationContext` usando
`simpleeval`, que executa apenas um subconjunto seguro de expressões.

Regras:
    - string que é exatamente uma interpolação → valor tipado do resultado
    - string com texto + interpolações → template (resultado é string)
    - `$${` escapa uma interpolação literal
    - dicts e listas são avaliados recursivamente
    - operadores HCL sem equivalente Python (`a ? b : c`, `&&`, `||`, `!`)
      são traduzidos antes da avaliação
    - demais escalares são retornados como estão

Falhas nunca são levantadas: cada uma vira um diagnóstico
`EvaluationError` associado ao endereço do atributo.
"""

from __future__ import annotations

import copy
from types import SimpleNamespace
from typing import Any, Dict, Iterator, List, Optional, Tuple, Union

from simpleeval import (
    AttributeDoesNotExist,
    EvalWithCompoundTypes,
    InvalidExpression,
    NameNotDefined,
)

from ..diagnostics import Diagnostics, evaluation_error
from .context import EMPTY_CONTEXT, VAR_NAMESPACE, EvaluationContext


SAFE_FUNCTIONS = {
    "abs": abs,
    "min": min,
    "max": max,
    "length": len,
    "lower": lambda s: s.lower() if isinstance(s, str) else s,
    "upper": lambda s: s.upper() if isinstance(s, str) else s,
    "tostring": str,
    "tonumber": lambda v: v if isinstance(v, (int, float)) else float(v) if "." in str(v) else int(v),
    "join": lambda sep, items: sep.join(str(i) for i in items),
}

HCL_LITERALS = {"true": True, "false": False, "null": None}

_RUNTIME_ERRORS = (
    SyntaxError,
    TypeError,
    ValueError,
    ZeroDivisionError,
    KeyError,
    IndexError,
    AttributeError,
)


class _Interpolation:
    __slots__ = ("expr",)

    def __init__(self, expr: str):
        self.expr = expr


Segment = Union[str, _Interpolation]


def split_template(text: str) -> List[Segment]:
    """
    Divide uma string em trechos literais e interpolações `${...}`.

    Chaves aninhadas e strings entre aspas dentro da interpolação são
    respeitadas. Uma interpolação sem fechamento é mantida como literal.
    """
    segments: List[Segment] = []
    buf: List[str] = []
    i = 0
    n = len(text)
    while i < n:
        if text.startswith("$${", i):
            buf.append("${")
            i += 3
            continue
        if text.startswith("${", i):
            end = _matching_brace(text, i + 2)
            if end is None:
                buf.append(text[i:])
                break
            if buf:
                segments.append("".join(buf))
                buf = []
            segments.append(_Interpolation(text[i + 2:end].strip()))
            i = end + 1
            continue
        buf.append(text[i])
        i += 1
    if buf:
        segments.append("".join(buf))
    return segments


def _matching_brace(text: str, start: int) -> Optional[int]:
    depth = 1
    quote: Optional[str] = None
    i = start
    while i < len(text):
        ch = text[i]
        if quote:
            if ch == "\\":
                i += 2
                continue
            if ch == quote:
                quote = None
        elif ch in "\"'":
            quote = ch
        elif ch == "{":
            depth += 1
        elif ch == "}":
            depth -= 1
            if depth == 0:
                return i
        i += 1
    return None


def _scan(expr: str, start: int = 0) -> Iterator[Tuple[int, str, int]]:
    # (índice, caractere, profundidade) fora de literais string; abre e fecha
    # de um par são produzidos na mesma profundidade.
    depth = 0
    quote: Optional[str] = None
    i = start
    while i < len(expr):
        ch = expr[i]
        if quote:
            if ch == "\\":
                i += 2
                continue
            if ch == quote:
                quote = None
        elif ch in "\"'":
            quote = ch
        else:
            if ch in ")]}":
                depth -= 1
            yield i, ch, depth
            if ch in "([{":
                depth += 1
        i += 1


def _closing(expr: str, start: int) -> Optional[int]:
    for i, ch, depth in _scan(expr, start):
        if i > start and depth == 0 and ch in ")]}":
            return i
    return None


def _split_top_level(expr: str, sep: str) -> List[str]:
    parts: List[str] = []
    last = 0
    for i, ch, depth in _scan(expr):
        if depth == 0 and ch == sep:
            parts.append(expr[last:i])
            last = i + 1
    parts.append(expr[last:])
    return parts


def _conditional_split(expr: str) -> Optional[Tuple[str, str, str]]:
    question: Optional[int] = None
    nested = 0
    for i, ch, depth in _scan(expr):
        if depth != 0:
            continue
        if question is None:
            if ch == "?":
                question = i
            continue
        if ch == "?":
            nested += 1
        elif ch == ":":
            if nested == 0:
                return expr[:question], expr[question + 1:i], expr[i + 1:]
            nested -= 1
    return None


def _rewrite_logic(expr: str) -> str:
    out: List[str] = []
    quote: Optional[str] = None
    i = 0
    n = len(expr)
    while i < n:
        ch = expr[i]
        if quote:
            out.append(ch)
            if ch == "\\" and i + 1 < n:
                out.append(expr[i + 1])
                i += 2
                continue
            if ch == quote:
                quote = None
            i += 1
            continue
        if ch in "\"'":
            quote = ch
            out.append(ch)
            i += 1
            continue
        if ch in "([{":
            close = _closing(expr, i)
            if close is None:
                out.append(expr[i:])
                break
            inner = expr[i + 1:close]
            if ch == "{":
                out.append("{" + _rewrite_logic(inner) + "}")
            else:
                args = ", ".join(translate_operators(p) for p in _split_top_level(inner, ","))
                out.append(ch + args + expr[close])
            i = close + 1
            continue
        if expr.startswith("&&", i):
            out.append(" and ")
            i += 2
            continue
        if expr.startswith("||", i):
            out.append(" or ")
            i += 2
            continue
        if ch == "!" and not expr.startswith("!=", i):
            out.append(" not ")
            i += 1
            continue
        out.append(ch)
        i += 1
    return "".join(out).strip()


def translate_operators(expr: str) -> str:
    """
    Traduz operadores HCL para a sintaxe aceita pelo `simpleeval`.

        a ? b : c  →  (b) if (a) else (c)
        &&, ||, !  →  and, or, not

    Literais string são preservados e o condicional é associativo à
    direita, como no HCL. Argumentos de chamadas e elementos de listas
    são traduzidos um a um.
    """
    expr = expr.strip()
    parts = _conditional_split(expr)
    if parts is None:
        return _rewrite_logic(expr)
    cond, then, other = (translate_operators(p) for p in parts)
    return f"({then}) if ({cond}) else ({other})"


def _names_for(ctx: EvaluationContext) -> Dict[str, Any]:
    names: Dict[str, Any] = dict(HCL_LITERALS)
    for namespace, values in ctx.variables.items():
        names[namespace] = SimpleNamespace(**dict(values))
    return names


def _template_part(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (dict, list)) or value is None:
        raise TypeError(
            f"Cannot include a {type_name(value)} value in a string template"
        )
    return str(value)


def type_name(value: Any) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "bool"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, dict):
        return "object"
    if isinstance(value, list):
        return "list"
    return type(value).__name__


class ExpressionEvaluator:
    """Avalia valores do documento contra um contexto fixo."""

    def __init__(self, ctx: EvaluationContext = EMPTY_CONTEXT):
        self.ctx = ctx
        self._engine = EvalWithCompoundTypes(
            names=_names_for(ctx),
            functions=SAFE_FUNCTIONS,
        )

    def evaluate(
        self,
        value: Any,
        *,
        address: str,
        filename: Optional[str] = None,
    ) -> Tuple[Any, Diagnostics]:
        diags = Diagnostics()
        result = self._walk(value, address, filename, diags)
        return result, diags

    def _walk(self, value: Any, address: str, filename: Optional[str], diags: Diagnostics) -> Any:
        if isinstance(value, dict):
            return {
                k: self._walk(v, f"{address}.{k}", filename, diags)
                for k, v in value.items()
            }
        if isinstance(value, list):
            return [
                self._walk(v, f"{address}[{i}]", filename, diags)
                for i, v in enumerate(value)
            ]
        if isinstance(value, str):
            return self._eval_template(value, address, filename, diags)
        return value

    def _eval_template(self, text: str, address: str, filename: Optional[str], diags: Diagnostics) -> Any:
        segments = split_template(text)
        if len(segments) == 1 and isinstance(segments[0], _Interpolation):
            return self._eval_expr(segments[0].expr, address, filename, diags)

        parts: List[str] = []
        failed = False
        for seg in segments:
            if isinstance(seg, str):
                parts.append(seg)
                continue
            before = len(diags)
            val = self._eval_expr(seg.expr, address, filename, diags)
            if len(diags) > before:
                failed = True
                continue
            try:
                parts.append(_template_part(val))
            except TypeError as e:
                failed = True
                diags.append(
                    evaluation_error(
                        expression=seg.expr,
                        message=f"Invalid template interpolation value: {e}",
                        filename=filename,
                        address=address,
                    )
                )
        return None if failed else "".join(parts)

    def _eval_expr(self, expr: str, address: str, filename: Optional[str], diags: Diagnostics) -> Any:
        try:
            return copy.deepcopy(self._engine.eval(translate_operators(expr)))
        except NameNotDefined as e:
            name = getattr(e, "name", None) or str(e)
            if name == VAR_NAMESPACE:
                message = "Variables not allowed: variables may not be used here"
            else:
                message = f'Unknown variable: there is no variable named "{name}"'
            diags.append(
                evaluation_error(
                    expression=expr,
                    message=message,
                    filename=filename,
                    address=address,
                    variable=name,
                )
            )
        except AttributeDoesNotExist as e:
            attr = getattr(e, "attr", None) or str(e)
            if f"{VAR_NAMESPACE}.{attr}" in expr and not self.ctx.has_variable(attr):
                message = f'Reference to undefined variable "{VAR_NAMESPACE}.{attr}"'
                variable = attr
            else:
                message = f'Unsupported attribute: no attribute named "{attr}"'
                variable = None
            diags.append(
                evaluation_error(
                    expression=expr,
                    message=message,
                    filename=filename,
                    address=address,
                    variable=variable,
                )
            )
        except InvalidExpression as e:
            diags.append(
                evaluation_error(
                    expression=expr,
                    message=f"Invalid expression: {e}",
                    filename=filename,
                    address=address,
                )
            )
        except _RUNTIME_ERRORS as e:
            diags.append(
                evaluation_error(
                    expression=expr,
                    message=f"Invalid expression: {e.__class__.__name__}: {e}",
                    filename=filename,
                    address=address,
                )
            )
        return None


def evaluate(
    value: Any,
    ctx: EvaluationContext = EMPTY_CONTEXT,
    *,
    address: str,
    filename: Optional[str] = None,
) -> Tuple[Any, Diagnostics]:
    """Atalho para avaliar um único valor com um contexto."""
    return ExpressionEvaluator(ctx).evaluate(value, address=address, filename=filename)
