# src/datcfg/core/config/errors.py
"""
Exceções canônicas da camada de settings do datcfg.

Este módulo define a hierarquia oficial de exceções utilizadas durante
o carregamento e a resolução dos settings da própria ferramenta
(padrão de descoberta, arquivo de valores, política do engine).

Diferente dos diagnósticos da resolução de configuração, falhas de
settings acontecem antes de qualquer pass e são tratadas como fatais:
não existe agregação, a primeira violação interrompe o carregamento.

Invariantes:
    - Todas as exceções de settings herdam de `SettingsError`
    - Nenhuma exceção aqui representa erro de decode de `.datcfg`
"""


class SettingsError(Exception):
    """
    Exceção base para erros relacionados aos settings do datcfg.

    Permite captura genérica (ex.: pela CLI) e distinção clara entre
    falhas de settings e diagnósticos de resolução.
    """


class SettingsNotFoundError(SettingsError):
    """
    Exceção levantada quando um arquivo de settings explicitamente
    solicitado não existe.

    Decisões arquiteturais:
        - O arquivo local implícito (`datcfg.yaml`) é opcional
        - Um caminho passado explicitamente (ex.: `--settings`) é obrigatório
    """


class UnsupportedSettingsFormatError(SettingsError):
    """
    Exceção levantada quando o formato do arquivo de settings
    não é suportado pelo loader.

    Formatos suportados (v1):
        - YAML (.yaml, .yml)
        - JSON (.json)
    """


class InvalidSettingsRootTypeError(SettingsError):
    """
    Exceção levantada quando o conteúdo raiz do arquivo de settings
    não é um dicionário (`dict`).
    """


class SettingsTypeConflictError(SettingsError):
    """
    Exceção levantada quando ocorre conflito de tipos durante o deep-merge.

    Exemplo de conflito:
        - base:     {"engine": {"fail_fast": true}}
        - override: {"engine": "strict"}

    Invariantes:
        - Nenhum merge parcial é produzido em caso de conflito
    """
