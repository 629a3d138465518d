# src/datcfg/cli.py
"""
CLI do datcfg.

Adapter fino sobre o engine: resolve settings, executa um pass e apresenta
o resultado. Nenhuma regra de resolução vive aqui.

Uso:
    datcfg [resolve] [--dir D] [--pattern P] [--values F] [--settings S]
           [--json] [--verbose]

Contrato de saída:
    - stdout: descrição do cluster e dos componentes (ou JSON com `--json`)
    - stderr: todos os diagnósticos (erros e avisos) e, com `--verbose`,
      os eventos estruturados do pass
    - exit 0 em sucesso; exit 1 em qualquer falha, após imprimir todos
      os diagnósticos
"""

from __future__ import annotations

import argparse
import json
import sys
from typing import Any, Dict, List, Optional

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from .core.components import default_registry
from .core.config import SettingsError, load_settings
from .core.diagnostics import Diagnostic
from .core.engine import ResolutionContext, ResolutionEngine, ResolutionResult

EXIT_OK = 0
EXIT_FAILURE = 1


def _add_options(p: argparse.ArgumentParser, *, suppress: bool) -> None:
    value = argparse.SUPPRESS if suppress else None
    flag = argparse.SUPPRESS if suppress else False
    p.add_argument("--dir", dest="directory", default=value,
                   help="directory holding the configuration files")
    p.add_argument("--pattern", default=value,
                   help="glob pattern of configuration files (default: *.datcfg)")
    p.add_argument("--values", default=value,
                   help="values file with variable overrides (default: dat.vars)")
    p.add_argument("--settings", default=value,
                   help="tool settings file (default: datcfg.yaml)")
    p.add_argument("--json", action="store_true", default=flag,
                   help="print the resolution result as JSON")
    p.add_argument("--verbose", action="store_true", default=flag,
                   help="print structured events of the pass")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="datcfg",
        description="Resolve declarative cluster/component configuration files.",
    )
    _add_options(parser, suppress=False)
    subparsers = parser.add_subparsers(dest="command", metavar="command")
    resolve_parser = subparsers.add_parser("resolve", help="resolve and describe the configuration")
    _add_options(resolve_parser, suppress=True)
    return parser


def _overrides(args: argparse.Namespace) -> Dict[str, Any]:
    return {
        "discovery": {"directory": args.directory, "pattern": args.pattern},
        "values": {"path": args.values},
    }


def _print_diagnostic(console: Console, d: Diagnostic) -> None:
    style = "bold red" if d.is_error else "yellow"
    console.print(f"[{style}]{d.type}[/{style}] {escape(str(d))}", highlight=False)


def _print_events(console: Console, ctx: ResolutionContext) -> None:
    table = Table(title=f"run {ctx.run_id}", show_lines=False)
    table.add_column("state")
    table.add_column("level")
    table.add_column("message")
    for event in ctx.events:
        table.add_row(event["state"], event["level"], event["message"])
    console.print(table)


def _render(out: Console, result: ResolutionResult) -> None:
    out.print(f"Cluster: {result.cluster_name}", markup=False, highlight=False)
    out.print(result.cluster.describe(), markup=False, highlight=False)
    for component in result.components:
        out.print(f"Component {component.type}:", markup=False, highlight=False)
        out.print(component.describe(), markup=False, highlight=False)


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    err = Console(stderr=True, soft_wrap=True, emoji=False)
    out = Console(highlight=False, soft_wrap=True, emoji=False)

    try:
        settings = load_settings(
            local_path=args.settings,
            overrides=_overrides(args),
            required=args.settings is not None,
        )
    except SettingsError as e:
        err.print(f"[bold red]{type(e).__name__}[/bold red] {escape(str(e))}", highlight=False)
        return EXIT_FAILURE

    ctx = ResolutionContext.create(settings, command=args.command or "resolve")
    result = ResolutionEngine(settings=settings, registry=default_registry()).run(ctx)

    for d in result.diagnostics:
        _print_diagnostic(err, d)
    if args.verbose:
        _print_events(err, ctx)

    if args.json:
        out.print(json.dumps(result.to_dict(), indent=2, sort_keys=True, default=str),
                  markup=False, highlight=False)
    elif result.ok:
        _render(out, result)

    return EXIT_OK if result.ok else EXIT_FAILURE


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
