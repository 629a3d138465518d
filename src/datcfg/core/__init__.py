# src/datcfg/core/__init__.py
"""
Core do datcfg.

Implementação canônica e independente de adapters (CLI) da resolução de
configuração declarativa: N arquivos `.datcfg` + arquivo de valores →
cluster e componentes tipados.

Componentes principais:
    - document   → descoberta, parsing (HCL) e merge lógico dos arquivos
    - values     → overrides de variáveis vindos do arquivo de valores
    - variables  → resolução override > default > ausente
    - expr       → contexto `var` e avaliação de expressões
    - schema     → decode do root e de corpos em dataclasses
    - components → registry de tipos de componente
    - engine     → máquina de estados de um pass de resolução
    - config     → settings da própria ferramenta

Princípios fundamentais:
    - Nenhuma decisão silenciosa: erros viram diagnósticos explícitos
    - Um pass não compartilha estado resolvido com outro
    - A mesma entrada produz sempre o mesmo resultado (e o mesmo fingerprint)
"""
