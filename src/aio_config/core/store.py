# src/aio_config/core/store.py
"""
ConfigStore — visão única de leitura/escrita sobre as fontes de configuração.

Fontes, em ordem crescente de precedência:
    - global → arquivo do usuário (`~/.config/aio` ou equivalente)
    - local  → arquivo do projeto (`<cwd>/.aio`)
    - env    → variáveis `AIO_*` do ambiente (após o `.env`)

A visão mesclada é sempre derivada: `set()` grava apenas o arquivo de uma
fonte e dispara um `reload()` completo.

Mapeamento de variáveis de ambiente:
    `AIO_<SEÇÃO>_<RESTO>` → `<seção>.<resto>` (minúsculas). Apenas a primeira
    sequência de underscores separa segmentos: `AIO_PGB_AUTH_TOKEN` vira
    `pgb.auth_token`. Valores são sempre strings.
"""

import logging
import os
import re
from copy import deepcopy
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Mapping, MutableMapping, Optional, Union

from .config.accessor import get_value, set_value
from .config.loader import DEFAULT_FORMAT, ConfigFormat, load_file, save_file
from .config.locations import ConfigPaths
from .config.merge import deep_merge
from .dotenv import DotenvState, load_dotenv

logger = logging.getLogger(__name__)

ENV_KEY_RE = re.compile(r"^AIO_(.+)$", re.IGNORECASE)
_FIRST_SEPARATOR_RE = re.compile(r"_+")


class Source(str, Enum):
    GLOBAL = "global"
    LOCAL = "local"
    ENV = "env"


@dataclass
class ConfigSource:
    """Fonte de configuração com arquivo: árvore, caminho e formato lembrado."""

    name: Source
    file: Path
    tree: Dict[str, Any] = field(default_factory=dict)
    format: ConfigFormat = DEFAULT_FORMAT


def env_key_to_path(name: str) -> Optional[str]:
    """
    Converte o nome de uma variável `AIO_*` em um caminho de ponto.

    Returns:
        O caminho, ou `None` se o nome não tiver o prefixo `AIO_`.
    """
    match = ENV_KEY_RE.match(name)
    if not match:
        return None
    return ".".join(_FIRST_SEPARATOR_RE.split(match.group(1).lower(), maxsplit=1))


def env_to_tree(environ: Mapping[str, Any]) -> Dict[str, Any]:
    """Constrói a árvore da fonte `env` a partir das variáveis `AIO_*`."""
    tree: Dict[str, Any] = {}
    for name in sorted(environ):
        path = env_key_to_path(name)
        if path is not None:
            tree = set_value(path, str(environ[name]), tree)
    return tree


def read_source(source: ConfigSource) -> ConfigSource:
    """
    Relê o arquivo de uma fonte, atualizando árvore e formato.

    Arquivo ausente resulta em árvore vazia no formato padrão; outras
    falhas de leitura são logadas e tratadas como árvore vazia. Falhas de
    parsing (`ParseError`) são propagadas.
    """
    logger.debug("reading config: %s", source.file)
    try:
        loaded = load_file(source.file)
    except FileNotFoundError:
        source.tree, source.format = {}, DEFAULT_FORMAT
    except (OSError, UnicodeDecodeError) as exc:
        logger.warning("cannot read config %s: %s", source.file, exc)
        source.tree, source.format = {}, DEFAULT_FORMAT
    else:
        source.tree, source.format = loaded.tree, loaded.format
    return source


class ConfigStore:
    """
    Orquestra as fontes global, local e env em uma visão mesclada.

    Args:
        paths: Caminhos dos arquivos (padrão: `ConfigPaths.resolve`).
        environ: Ambiente lido e alimentado pelo `.env` (padrão: `os.environ`).
        cwd: Diretório de trabalho para `.aio`/`.env` (padrão: `Path.cwd()`).
        dotenv_state: Marcador de idempotência do `.env`.

    Raises:
        ParseError: Se um arquivo de configuração estiver malformado.
    """

    def __init__(
        self,
        paths: Optional[ConfigPaths] = None,
        environ: Optional[MutableMapping[str, str]] = None,
        cwd: Optional[Union[str, Path]] = None,
        dotenv_state: Optional[DotenvState] = None,
    ) -> None:
        self._environ = os.environ if environ is None else environ
        self._cwd = cwd
        self._dotenv_state = dotenv_state
        self.paths = paths or ConfigPaths.resolve(environ=self._environ, cwd=cwd)

        self.global_source = ConfigSource(name=Source.GLOBAL, file=self.paths.global_file)
        self.local_source = ConfigSource(name=Source.LOCAL, file=self.paths.local_file)
        self.env_values: Dict[str, Any] = {}
        self._values: Dict[str, Any] = {}

        self.reload()

    @property
    def values(self) -> Dict[str, Any]:
        """Cópia da visão mesclada atual."""
        return deepcopy(self._values)

    def reload(self) -> "ConfigStore":
        load_dotenv(state=self._dotenv_state, cwd=self._cwd, environ=self._environ)

        read_source(self.global_source)
        read_source(self.local_source)

        self.env_values = env_to_tree(self._environ)
        if self.env_values:
            logger.debug("reading env variables: %s", ", ".join(sorted(self.env_values)))

        self._values = deep_merge(
            self.global_source.tree,
            self.local_source.tree,
            self.env_values,
        )
        return self

    def _tree_for(self, source: Optional[Union[str, Source]]) -> Dict[str, Any]:
        if source is None:
            return self._values

        try:
            source = Source(source)
        except ValueError:
            raise ValueError(
                f"Fonte desconhecida: {source!r} (use global, local ou env)"
            ) from None

        if source is Source.GLOBAL:
            return self.global_source.tree
        if source is Source.LOCAL:
            return self.local_source.tree
        return self.env_values

    def get(self, path: str = "", source: Optional[Union[str, Source]] = None) -> Any:
        """
        Lê um valor pela notação de ponto.

        Args:
            path: Caminho; vazio retorna a árvore inteira.
            source: `global`, `local`, `env` ou `None` (visão mesclada).

        Returns:
            Cópia profunda do valor, ou `None` se ausente.
        """
        logger.debug("reading config: %s", path or "<all>")
        value = get_value(self._tree_for(source), path)
        if value is None:
            return None
        return deepcopy(value)

    def set(self, path: str, value: Any, local: bool = False) -> "ConfigStore":
        """
        Grava um valor no arquivo global (padrão) ou local e recarrega.

        Um caminho vazio substitui todo o conteúdo do arquivo da fonte.
        """
        target = self.local_source if local else self.global_source
        tree = set_value(path, value, target.tree)

        logger.debug("writing config: %s at %s", path or "<all>", target.file)
        save_file(target.file, tree, target.format)
        return self.reload()

    def delete(self, path: str, local: bool = False) -> "ConfigStore":
        return self.set(path, None, local)
