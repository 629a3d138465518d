# src/datcfg/core/engine/engine.py
"""
Engine de resolução do datcfg (orquestrador de um pass).

Sequência de estados:
    DISCOVER → PARSE_ALL → LOAD_OVERRIDES → DECODE_ROOT →
    RESOLVE_VARIABLES → BUILD_CONTEXT → DECODE_CLUSTER →
    DECODE_COMPONENTS → DONE

Política de falhas:
    - Dentro de um estágio, diagnósticos são coletados por completo
      (parse de todos os arquivos, todos os atributos do arquivo de valores,
      todos os defaults, todos os atributos de um corpo).
    - Qualquer diagnóstico de erro ao final de um estágio leva a FAILED e
      nenhum estágio seguinte é executado.
    - Componentes são decodificados em ordem de documento; o primeiro tipo
      desconhecido ou falha de decode interrompe o pass.
    - Exceções tipadas (DatcfgException) são convertidas em diagnósticos;
      exceções inesperadas viram `EngineExecutionError` sem stack trace.

Um resultado FAILED nunca carrega cluster, componentes ou variáveis
parcialmente resolvidos.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List, Optional

from ..components.registry import ComponentRegistry, default_registry
from ..config.hashing import compute_config_hash
from ..config.loader import DEFAULT_SETTINGS
from ..diagnostics import (
    Diagnostic,
    Diagnostics,
    engine_execution_error,
    missing_block,
    unknown_component_type,
)
from ..document.merge import merge_documents
from ..document.parser import discover, parse_files
from ..exceptions import DatcfgException, UnknownComponentTypeError
from ..expr.context import build_eval_context
from ..schema.cluster import ClusterConfig
from ..schema.decode import decode_body
from ..schema.root import CLUSTER_BLOCK, decode_root
from ..values.loader import load_values
from ..variables.resolver import resolve_variables

from .context import ResolutionContext
from .types import ResolutionResult, ResolutionState, ResolvedComponent


class _Halt(Exception):
    """Interrupção interna do pass após um estágio com erros."""


class ResolutionEngine:
    """Engine canônico do datcfg (um pass por chamada a `run`)."""

    def __init__(
        self,
        *,
        settings: Optional[Dict[str, Any]] = None,
        registry: Optional[ComponentRegistry] = None,
    ):
        self.settings: Dict[str, Any] = settings if settings is not None else DEFAULT_SETTINGS
        self.registry: ComponentRegistry = (registry or default_registry()).freeze()

    # ------------------------------------------------------------------
    # Settings
    # ------------------------------------------------------------------
    def _directory(self) -> Path:
        discovery = self.settings.get("discovery", {}) or {}
        return Path(discovery.get("directory") or ".")

    def _pattern(self) -> str:
        discovery = self.settings.get("discovery", {}) or {}
        return str(discovery.get("pattern") or DEFAULT_SETTINGS["discovery"]["pattern"])

    def _values_path(self) -> Path:
        values = self.settings.get("values", {}) or {}
        path = Path(values.get("path") or DEFAULT_SETTINGS["values"]["path"])
        return path if path.is_absolute() else self._directory() / path

    # ------------------------------------------------------------------
    # Transições
    # ------------------------------------------------------------------
    def _enter(self, ctx: ResolutionContext, state: ResolutionState, **extra: Any) -> None:
        ctx.log(state=state.value, level="info", message=f"entering {state.value}", **extra)

    def _collect(
        self,
        ctx: ResolutionContext,
        state: ResolutionState,
        stage_diags: Diagnostics,
        all_diags: Diagnostics,
    ) -> None:
        all_diags.extend(stage_diags)
        for d in stage_diags.warnings():
            ctx.add_warning(state=state.value, message=str(d))
        if stage_diags.has_errors():
            ctx.log(
                state=state.value,
                level="error",
                message="stage failed",
                diagnostics=len(stage_diags.errors()),
            )
            raise _Halt(state)

    def _exception_to_diagnostic(self, exc: Exception, state: ResolutionState) -> Diagnostic:
        """Converte exceções em diagnósticos (serializáveis, sem stack trace)."""
        if isinstance(exc, UnknownComponentTypeError):
            return unknown_component_type(
                type_name=exc.type_name,
                known_types=list(exc.details.get("known_types", [])),
                filename=exc.details.get("source"),
            )
        if isinstance(exc, DatcfgException):
            return Diagnostic(
                type=exc.__class__.__name__,
                summary=str(exc) or "Erro de resolução",
                detail=exc.hint,
                extra=dict(exc.details),
            )
        return engine_execution_error(
            state=state.value,
            exc_type=exc.__class__.__name__,
            exc_message=str(exc),
        )

    # ------------------------------------------------------------------
    # Execução
    # ------------------------------------------------------------------
    def run(self, ctx: Optional[ResolutionContext] = None) -> ResolutionResult:
        ctx = ctx or ResolutionContext.create(self.settings)
        diags = Diagnostics()
        files: List[str] = []
        state = ResolutionState.DISCOVER

        try:
            self._enter(
                ctx,
                state,
                directory=str(self._directory()),
                pattern=self._pattern(),
                settings_hash=compute_config_hash(self.settings),
            )
            paths = discover(self._directory(), self._pattern())
            files = [str(p) for p in paths]

            state = ResolutionState.PARSE_ALL
            self._enter(ctx, state, files=files)
            documents, stage = parse_files(paths)
            self._collect(ctx, state, stage, diags)
            body = merge_documents(documents)

            state = ResolutionState.LOAD_OVERRIDES
            values_path = self._values_path()
            self._enter(ctx, state, values_path=str(values_path))
            overrides, stage = load_values(values_path)
            self._collect(ctx, state, stage, diags)

            state = ResolutionState.DECODE_ROOT
            self._enter(ctx, state)
            root, stage = decode_root(body)
            if root is None and not stage.has_errors():
                stage.append(missing_block(block_type=CLUSTER_BLOCK))
            self._collect(ctx, state, stage, diags)

            state = ResolutionState.RESOLVE_VARIABLES
            self._enter(ctx, state, declared=[v.name for v in root.variables])
            resolved, stage = resolve_variables(
                root.variables, overrides, values_source=str(values_path)
            )
            self._collect(ctx, state, stage, diags)

            state = ResolutionState.BUILD_CONTEXT
            self._enter(ctx, state, variables=sorted(resolved))
            eval_ctx = build_eval_context(resolved)

            state = ResolutionState.DECODE_CLUSTER
            self._enter(ctx, state, cluster=root.cluster.name)
            cluster, stage = decode_body(
                root.cluster.body,
                ClusterConfig,
                eval_ctx,
                address=f"{CLUSTER_BLOCK}.{root.cluster.name}",
                filename=root.cluster.source,
            )
            self._collect(ctx, state, stage, diags)

            state = ResolutionState.DECODE_COMPONENTS
            self._enter(ctx, state, components=[c.type for c in root.components])
            components: List[ResolvedComponent] = []
            for spec in root.components:
                try:
                    instance, stage = self.registry.decode(
                        spec.body, eval_ctx, spec.type, source=spec.source
                    )
                except UnknownComponentTypeError as e:
                    raise UnknownComponentTypeError(
                        e.message,
                        details={**e.details, "source": spec.source},
                        hint=e.hint,
                    ) from e
                self._collect(ctx, state, stage, diags)
                components.append(
                    ResolvedComponent(type=spec.type, config=instance, source=spec.source)
                )
                ctx.log(state=state.value, level="info", message="component decoded", type=spec.type)

        except _Halt:
            return self._failed(ctx, state, files, diags)

        except Exception as e:  # noqa: BLE001
            diags.append(self._exception_to_diagnostic(e, state))
            return self._failed(ctx, state, files, diags)

        ctx.log(state=ResolutionState.DONE.value, level="info", message="resolution complete")

        payload = {
            "files": files,
            "variables": dict(resolved),
            "cluster": {"name": root.cluster.name, "config": cluster},
            "components": [{"type": c.type, "config": c.config} for c in components],
        }
        return ResolutionResult(
            state=ResolutionState.DONE,
            files=files,
            variables=resolved,
            cluster_name=root.cluster.name,
            cluster=cluster,
            components=components,
            diagnostics=diags,
            fingerprint=compute_config_hash(payload),
        )

    def _failed(
        self,
        ctx: ResolutionContext,
        state: ResolutionState,
        files: List[str],
        diags: Diagnostics,
    ) -> ResolutionResult:
        ctx.log(
            state=ResolutionState.FAILED.value,
            level="error",
            message="resolution failed",
            failed_at=state.value,
            diagnostics=len(diags.errors()),
        )
        return ResolutionResult(
            state=ResolutionState.FAILED,
            failed_at=state,
            files=files,
            diagnostics=diags,
        )


def resolve(
    *,
    settings: Optional[Dict[str, Any]] = None,
    registry: Optional[ComponentRegistry] = None,
) -> ResolutionResult:
    """Executa um pass de resolução com um contexto novo."""
    return ResolutionEngine(settings=settings, registry=registry).run()
