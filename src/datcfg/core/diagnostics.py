"""
datcfg: Canonical Diagnostics (v1)

Este módulo define o padrão canônico de diagnósticos do datcfg.
Diagnósticos são artefatos de domínio e fazem parte do contrato operacional
da resolução de configuração, devendo ser:

- explícitos
- serializáveis
- localizáveis (arquivo + endereço do atributo/bloco)
- agregáveis (vários diagnósticos por estágio)

Falhas de decode não são levantadas como exceção: cada operação retorna
`(valor, Diagnostics)` e o orquestrador decide quando interromper.
"""

from __future__ import annotations

from dataclasses import dataclass, asdict, field
from typing import Any, Dict, Iterable, List, Optional


# ---------------------------------------------------------------------------
# Severidade e localização
# ---------------------------------------------------------------------------

SEVERITY_ERROR = "error"
SEVERITY_WARNING = "warning"


@dataclass(frozen=True)
class SourceLocation:
    """
    Localização de origem de um diagnóstico.

    Campos:
    - filename: arquivo de origem (quando conhecido)
    - address: endereço lógico dentro do documento (ex.: `component.foo.foo`)
    - line / column: posição textual, quando o parser a fornece
    """

    filename: Optional[str] = None
    address: Optional[str] = None
    line: Optional[int] = None
    column: Optional[int] = None

    def __str__(self) -> str:
        parts: List[str] = []
        if self.filename:
            pos = self.filename
            if self.line is not None:
                pos += f":{self.line}"
                if self.column is not None:
                    pos += f",{self.column}"
            parts.append(pos)
        if self.address:
            parts.append(self.address)
        return " ".join(parts)


# ---------------------------------------------------------------------------
# Payload canônico
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Diagnostic:
    """
    Diagnóstico canônico do datcfg.

    Campos:
    - type: código estável do diagnóstico (não é texto livre)
    - summary: mensagem curta, humana e objetiva
    - detail: explicação adicional (o que está errado e onde corrigir)
    - subject: localização de origem
    - severity: `error` interrompe o pipeline; `warning` apenas informa
    - extra: dados estruturados adicionais (ex.: nome do tipo desconhecido)
    """

    type: str
    summary: str
    detail: Optional[str] = None
    subject: SourceLocation = field(default_factory=SourceLocation)
    severity: str = SEVERITY_ERROR
    extra: Dict[str, Any] = field(default_factory=dict)

    @property
    def is_error(self) -> bool:
        return self.severity == SEVERITY_ERROR

    def to_dict(self) -> Dict[str, Any]:
        """Retorna representação serializável do diagnóstico."""
        return asdict(self)

    def __str__(self) -> str:
        where = str(self.subject)
        head = f"{where}: " if where else ""
        text = f"{head}{self.severity.capitalize()}: {self.summary}"
        if self.detail:
            text += f"; {self.detail}"
        return text


class Diagnostics(list):
    """Coleção ordenada de diagnósticos de um estágio."""

    def __init__(self, items: Iterable[Diagnostic] = ()):
        super().__init__(items)

    def has_errors(self) -> bool:
        return any(d.is_error for d in self)

    def errors(self) -> "Diagnostics":
        return Diagnostics(d for d in self if d.is_error)

    def warnings(self) -> "Diagnostics":
        return Diagnostics(d for d in self if not d.is_error)

    def to_list(self) -> List[Dict[str, Any]]:
        return [d.to_dict() for d in self]


# ---------------------------------------------------------------------------
# Catálogo canônico de tipos de diagnóstico (v1)
# ---------------------------------------------------------------------------

# Sintaxe / avaliação
PARSE_ERROR = "ParseError"
EVALUATION_ERROR = "EvaluationError"

# Forma (decode)
UNKNOWN_COMPONENT_TYPE = "UnknownComponentType"
MISSING_REQUIRED_ATTRIBUTE = "MissingRequiredAttribute"
TYPE_MISMATCH = "TypeMismatch"
UNSUPPORTED_ATTRIBUTE = "UnsupportedAttribute"
UNSUPPORTED_BLOCK = "UnsupportedBlock"
MISSING_BLOCK = "MissingBlock"
DUPLICATE_BLOCK = "DuplicateBlock"
MISSING_LABEL = "MissingLabel"

# Variáveis / overrides
DUPLICATE_VARIABLE = "DuplicateVariable"
UNDECLARED_VARIABLE = "UndeclaredVariable"
INVALID_VALUES_ROOT = "InvalidValuesRoot"

# Engine
ENGINE_EXECUTION_ERROR = "EngineExecutionError"


# ---------------------------------------------------------------------------
# Helpers de fábrica
# ---------------------------------------------------------------------------

def parse_error(
    *,
    filename: str,
    message: str,
    line: Optional[int] = None,
    column: Optional[int] = None,
) -> Diagnostic:
    return Diagnostic(
        type=PARSE_ERROR,
        summary="Invalid configuration syntax",
        detail=message,
        subject=SourceLocation(filename=filename, line=line, column=column),
    )


def evaluation_error(
    *,
    expression: str,
    message: str,
    filename: Optional[str] = None,
    address: Optional[str] = None,
    variable: Optional[str] = None,
) -> Diagnostic:
    return Diagnostic(
        type=EVALUATION_ERROR,
        summary=message,
        detail=f"while evaluating {expression!r}",
        subject=SourceLocation(filename=filename, address=address),
        extra={"expression": expression, "variable": variable},
    )


def unknown_component_type(
    *,
    type_name: str,
    known_types: List[str],
    filename: Optional[str] = None,
) -> Diagnostic:
    return Diagnostic(
        type=UNKNOWN_COMPONENT_TYPE,
        summary=f"Unknown component kind: {type_name}",
        detail="registered kinds: " + (", ".join(known_types) or "(none)"),
        subject=SourceLocation(filename=filename, address=f"component.{type_name}"),
        extra={"type_name": type_name},
    )


def missing_required_attribute(
    *,
    name: str,
    address: str,
    filename: Optional[str] = None,
) -> Diagnostic:
    return Diagnostic(
        type=MISSING_REQUIRED_ATTRIBUTE,
        summary="Missing required argument",
        detail=f'The argument "{name}" is required, but no definition was found.',
        subject=SourceLocation(filename=filename, address=address),
        extra={"attribute": name},
    )


def type_mismatch(
    *,
    name: str,
    address: str,
    expected: str,
    actual: str,
    filename: Optional[str] = None,
) -> Diagnostic:
    return Diagnostic(
        type=TYPE_MISMATCH,
        summary="Incorrect attribute value type",
        detail=f'Inappropriate value for attribute "{name}": {expected} required, got {actual}.',
        subject=SourceLocation(filename=filename, address=address),
        extra={"attribute": name, "expected": expected, "actual": actual},
    )


def unsupported_attribute(
    *,
    name: str,
    address: str,
    filename: Optional[str] = None,
) -> Diagnostic:
    return Diagnostic(
        type=UNSUPPORTED_ATTRIBUTE,
        summary="Unsupported argument",
        detail=f'An argument named "{name}" is not expected here.',
        subject=SourceLocation(filename=filename, address=address),
        extra={"attribute": name},
    )


def unsupported_block(
    *,
    block_type: str,
    filename: Optional[str] = None,
) -> Diagnostic:
    return Diagnostic(
        type=UNSUPPORTED_BLOCK,
        summary="Unsupported block type",
        detail=f'Blocks of type "{block_type}" are not expected here.',
        subject=SourceLocation(filename=filename, address=block_type),
        extra={"block_type": block_type},
    )


def missing_block(*, block_type: str) -> Diagnostic:
    return Diagnostic(
        type=MISSING_BLOCK,
        summary=f'Missing {block_type} block',
        detail=f'Exactly one "{block_type}" block is required across all configuration files.',
        subject=SourceLocation(address=block_type),
        extra={"block_type": block_type},
    )


def duplicate_block(
    *,
    block_type: str,
    filename: Optional[str] = None,
    previous: Optional[str] = None,
) -> Diagnostic:
    return Diagnostic(
        type=DUPLICATE_BLOCK,
        summary=f'Duplicate {block_type} block',
        detail=(
            f'Only one "{block_type}" block is allowed; '
            f"another was already defined in {previous}."
        ),
        subject=SourceLocation(filename=filename, address=block_type),
        extra={"block_type": block_type, "previous": previous},
    )


def missing_label(
    *,
    block_type: str,
    expected: int,
    actual: int,
    filename: Optional[str] = None,
) -> Diagnostic:
    return Diagnostic(
        type=MISSING_LABEL,
        summary="Missing name for block",
        detail=f'Blocks of type "{block_type}" expect {expected} label(s), got {actual}.',
        subject=SourceLocation(filename=filename, address=block_type),
        extra={"block_type": block_type, "expected": expected, "actual": actual},
    )


def duplicate_variable(
    *,
    name: str,
    filename: Optional[str] = None,
    previous: Optional[str] = None,
) -> Diagnostic:
    return Diagnostic(
        type=DUPLICATE_VARIABLE,
        summary="Duplicate variable declaration",
        detail=f'A variable named "{name}" was already declared in {previous}.',
        subject=SourceLocation(filename=filename, address=f"variable.{name}"),
        extra={"variable": name, "previous": previous},
    )


def undeclared_variable(*, name: str, filename: Optional[str] = None) -> Diagnostic:
    return Diagnostic(
        type=UNDECLARED_VARIABLE,
        summary="Value for undeclared variable",
        detail=f'A value was supplied for "{name}", but no variable block declares it.',
        subject=SourceLocation(filename=filename, address=name),
        severity=SEVERITY_WARNING,
        extra={"variable": name},
    )


def invalid_values_root(*, filename: str, actual: str) -> Diagnostic:
    return Diagnostic(
        type=INVALID_VALUES_ROOT,
        summary="Invalid values file",
        detail=f"The values file root must be a mapping, got {actual}.",
        subject=SourceLocation(filename=filename),
    )


def engine_execution_error(
    *,
    state: Optional[str] = None,
    exc_type: Optional[str] = None,
    exc_message: Optional[str] = None,
) -> Diagnostic:
    return Diagnostic(
        type=ENGINE_EXECUTION_ERROR,
        summary="Unexpected failure during configuration resolution",
        detail=exc_message or None,
        extra={"state": state, "exc_type": exc_type},
    )
