# src/aio_config/core/__init__.py
"""
Core do aio-config.

Componentes principais:
    - config → árvores de configuração (acesso, merge, leitura/escrita, caminhos)
    - dotenv → elevação do `.env` para o ambiente do processo
    - store  → ConfigStore, a visão mesclada das fontes global/local/env
    - pipe   → dados encaminhados via stdin

Princípios fundamentais:
    - Execução síncrona e single-thread
    - Estado de processo sempre explícito e injetável (DotenvState, PipedInputState)
"""
