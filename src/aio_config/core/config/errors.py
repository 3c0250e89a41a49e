# src/aio_config/core/config/errors.py
"""
Exceções canônicas da camada de configuração do aio-config.

Este módulo define a hierarquia oficial de exceções utilizadas durante
a leitura, escrita e resolução das árvores de configuração.

Princípios fundamentais:
    - Exceções são tipadas e semânticas
    - Arquivos malformados interrompem o fluxo (nunca são descartados em silêncio)
    - Mensagens de erro são curtas e direcionadas ao usuário

Invariantes:
    - Todas as exceções de configuração herdam de `ConfigError`
    - Toda falha de parsing carrega o formato tentado

Limites explícitos:
    - Não representa falhas de I/O (essas chegam como `OSError`)
    - Não realiza fallback ou recovery
"""

from pathlib import Path
from typing import Optional, Union


class ConfigError(Exception):
    """
    Exceção base para erros relacionados à configuração do aio-config.

    Permite captura genérica de qualquer falha estrutural de configuração,
    distinta de erros de I/O do sistema operacional.
    """


class ParseError(ConfigError):
    """
    Exceção levantada quando o conteúdo de um arquivo não pode ser interpretado.

    Carrega o formato que foi tentado (`json` ou `yaml`) e, quando conhecido,
    o caminho do arquivo de origem.

    Decisões arquiteturais:
        - O formato é detectado antes do parsing e nunca trocado após falha
        - Nenhum dado parcial é retornado

    Exemplo:
        - conteúdo `{{{{{` → ParseError(format="json")
    """

    def __init__(
        self,
        fmt: str,
        path: Optional[Union[str, Path]] = None,
        reason: Optional[str] = None,
    ) -> None:
        self.format = str(fmt)
        self.path = Path(path) if path is not None else None
        self.reason = reason

        message = f"Cannot parse {self.format}"
        if self.path is not None:
            message += f" ({self.path})"
        if reason:
            message += f": {reason}"
        super().__init__(message)


class InvalidConfigRootTypeError(ParseError):
    """
    Exceção levantada quando o conteúdo raiz da configuração
    não é um dicionário (`dict`).

    Decisões arquiteturais:
        - Uma árvore de configuração é sempre um mapa chave-valor
        - Listas ou valores escalares no root são inválidos, tanto na leitura
          quanto na escrita

    Limites explícitos:
        - Não tenta normalizar ou encapsular estruturas inválidas
    """


class ConfigTypeConflictError(ConfigError):
    """
    Exceção levantada quando o deep-merge recebe um argumento que não é
    uma árvore de configuração.

    Exemplo de conflito:
        - deep_merge({"a": 1}, ["a"])

    Conflitos de tipo *dentro* das árvores não são erro: a política de merge
    resolve todos eles por substituição.
    """
