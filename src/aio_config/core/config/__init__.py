# src/aio_config/core/config/__init__.py

"""
Camada de árvores de configuração do aio-config.

Este pacote contém as estruturas e utilitários responsáveis por acessar,
mesclar, ler e gravar árvores de configuração.

Responsabilidades do pacote:
    - Acesso por notação de ponto (`accessor`)
    - Deep-merge determinístico com precedência (`merge`)
    - Leitura/escrita nos formatos json (Hjson) e yaml (`loader`)
    - Resolução dos caminhos de arquivos (`locations`)
    - Hierarquia de exceções (`errors`)

Invariantes:
    - Árvores de configuração são dicionários puros (dict)
    - Nenhuma função deste pacote muta seus inputs

Limites explícitos:
    - Não lê variáveis de ambiente nem `.env` (ver `aio_config.core.store`)
    - Não mantém estado global
"""
