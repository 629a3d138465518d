# tests/conftest.py
"""
Fixtures compartilhados para testes do datcfg.

Este módulo define fixtures reutilizáveis que fornecem:
- um diretório de trabalho isolado para arquivos `.datcfg`
- um helper para escrever arquivos de configuração e de valores
- settings mínimos e determinísticos apontando para esse diretório

Decisões arquiteturais:
    - Todo I/O acontece sob `tmp_path` (isolado por teste)
    - Conteúdo HCL é escrito de forma explícita em cada teste
    - Imports do core são realizados de forma lazy nos próprios testes

Invariantes:
    - Nenhuma fixture executa um pass de resolução
    - Nenhuma fixture depende do diretório corrente do processo

Limites explícitos:
    - Não substituir testes de integração da CLI
    - Não conter lógica de domínio
"""

import textwrap
from pathlib import Path
from typing import Callable, Dict, Any

import pytest


@pytest.fixture
def workdir(tmp_path: Path) -> Path:
    """Diretório isolado que faz o papel do diretório de trabalho do datcfg."""
    return tmp_path


@pytest.fixture
def write_file(workdir: Path) -> Callable[[str, str], Path]:
    """
    Escreve um arquivo sob `workdir`, removendo a indentação comum.

    Uso:
        write_file("main.datcfg", '''
            cluster "c" { controller_count = 1
                          worker_count = 2 }
        ''')
    """

    def _write(name: str, content: str) -> Path:
        path = workdir / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(textwrap.dedent(content).lstrip(), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def settings_for(workdir: Path) -> Callable[..., Dict[str, Any]]:
    """Settings efetivos apontando para `workdir` (defaults do datcfg)."""

    def _settings(*, pattern: str = "*.datcfg", values: str = "dat.vars") -> Dict[str, Any]:
        return {
            "discovery": {"directory": str(workdir), "pattern": pattern},
            "values": {"path": values},
        }

    return _settings


@pytest.fixture
def cluster_hcl() -> str:
    """Cluster mínimo com contadores literais."""
    return textwrap.dedent(
        """
        cluster "main" {
          controller_count = 1
          worker_count     = 2
        }
        """
    )
