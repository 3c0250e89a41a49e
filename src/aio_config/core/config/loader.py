# src/aio_config/core/config/loader.py
"""
Leitura e escrita canônica de arquivos de configuração do aio-config.

Formatos suportados (v1):
    - json → superset leniente de JSON (Hjson: comentários e chaves sem aspas)
    - yaml → YAML estruturado, editável por humanos

O formato é detectado pelo primeiro caractere não branco do arquivo
(`{` → json, qualquer outro → yaml) e acompanha a árvore carregada,
sendo reutilizado na próxima escrita da mesma fonte.

Princípios fundamentais:
    - Falhas de parsing são sempre explícitas (`ParseError`)
    - Arquivos vazios equivalem a árvores vazias
    - Árvores vazias são gravadas como arquivos vazios

Invariantes:
    - O retorno de leitura é sempre um dicionário puro (`dict`)
    - A serialização acontece antes da escrita: uma falha de serialização
      nunca corrompe o arquivo existente

Limites explícitos:
    - Não trata `FileNotFoundError` (responsabilidade do chamador)
    - Não realiza escrita atômica nem locking
"""

import logging
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Optional, Union

import hjson
import yaml  # PyYAML

from .errors import InvalidConfigRootTypeError, ParseError

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]

YAML_LINE_WIDTH = 1024


class ConfigFormat(str, Enum):
    """Formato textual de um arquivo de configuração."""

    JSON = "json"
    YAML = "yaml"


DEFAULT_FORMAT = ConfigFormat.JSON


@dataclass(frozen=True)
class LoadedConfig:
    """Árvore lida de um arquivo, acompanhada do formato detectado."""

    tree: Dict[str, Any]
    format: ConfigFormat = DEFAULT_FORMAT


def detect_format(text: str) -> ConfigFormat:
    if text.lstrip().startswith("{"):
        return ConfigFormat.JSON
    return ConfigFormat.YAML


def parse_text(text: str, source: Optional[PathLike] = None) -> LoadedConfig:
    """
    Interpreta o conteúdo textual de um arquivo de configuração.

    Decisões arquiteturais:
        - Texto vazio ou só com espaços → `{}` no formato padrão (json)
        - Um documento YAML nulo (ex.: só comentários) → `{}`
        - O root precisa ser um dicionário

    Args:
        text: Conteúdo do arquivo.
        source: Caminho de origem, usado apenas nas mensagens de erro.

    Returns:
        LoadedConfig: Árvore e formato detectado.

    Raises:
        ParseError: Se o conteúdo não puder ser interpretado no formato detectado.
        InvalidConfigRootTypeError: Se o root não for um dicionário.
    """
    if not text or not text.strip():
        return LoadedConfig(tree={}, format=DEFAULT_FORMAT)

    fmt = detect_format(text)

    if fmt is ConfigFormat.JSON:
        try:
            data = hjson.loads(text, object_pairs_hook=dict)
        except hjson.HjsonDecodeError as exc:
            raise ParseError(fmt.value, source, str(exc)) from exc
    else:
        try:
            data = yaml.safe_load(text)
        except yaml.YAMLError as exc:
            raise ParseError(fmt.value, source, str(exc)) from exc

    if data is None:
        data = {}

    if not isinstance(data, dict):
        raise InvalidConfigRootTypeError(
            fmt.value,
            source,
            f"Config root deve ser dict, recebido: {type(data).__name__}",
        )

    return LoadedConfig(tree=data, format=fmt)


def load_file(path: PathLike) -> LoadedConfig:
    """
    Carrega um arquivo de configuração do disco.

    Raises:
        FileNotFoundError: Se o arquivo não existir.
        OSError: Para outras falhas de leitura.
        ParseError: Se o conteúdo for malformado.
    """
    path = Path(path)
    text = path.read_text(encoding="utf-8")
    return parse_text(text, source=path)


def shake(tree: Any) -> Dict[str, Any]:
    """
    Remove folhas vazias de uma árvore, produzindo uma nova árvore.

    Entradas com valor `None` são removidas; mapas que ficam vazios após
    a poda também são removidos, de baixo para cima (a poda pode cascatear
    até a raiz). Listas são mantidas como estão.

    Args:
        tree: Árvore de configuração (ou `None`).

    Returns:
        Dict[str, Any]: Nova árvore podada (`{}` para `None`).
    """
    if tree is None:
        return {}

    result: Dict[str, Any] = {}
    for key, value in tree.items():
        if value is None:
            continue
        if isinstance(value, dict):
            value = shake(value)
            if not value:
                continue
        result[key] = value
    return result


def dump_text(tree: Any, fmt: ConfigFormat = DEFAULT_FORMAT) -> str:
    """
    Serializa uma árvore no formato informado, após a poda (`shake`).

    Uma árvore que fica vazia após a poda produz a string vazia,
    nunca `{}` ou `null`.

    Raises:
        InvalidConfigRootTypeError: Se `tree` não for dict nem None.
    """
    fmt = ConfigFormat(fmt)

    if tree is not None and not isinstance(tree, dict):
        raise InvalidConfigRootTypeError(
            fmt.value,
            reason=f"Config root deve ser dict, recebido: {type(tree).__name__}",
        )

    shaken = shake(tree)
    if not shaken:
        return ""

    if fmt is ConfigFormat.YAML:
        return yaml.safe_dump(
            shaken,
            sort_keys=True,
            default_flow_style=False,
            allow_unicode=True,
            width=YAML_LINE_WIDTH,
        )

    return hjson.dumpsJSON(shaken, ensure_ascii=False, separators=(",", ":"))


def ensure_parent_dir(path: PathLike) -> Path:
    """Cria os diretórios pais de `path` que ainda não existirem."""
    parent = Path(path).parent
    parent.mkdir(parents=True, exist_ok=True)
    return parent


def save_file(path: PathLike, tree: Any, fmt: ConfigFormat = DEFAULT_FORMAT) -> None:
    """
    Grava uma árvore de configuração em disco.

    Política de escrita (v1):
        - Diretórios pais ausentes são criados
        - A árvore é podada antes de ser serializada
        - Árvore vazia → arquivo vazio
        - Último escritor vence (sem escrita atômica)

    Args:
        path: Caminho do arquivo.
        tree: Árvore de configuração (ou `None`).
        fmt: Formato de escrita.

    Raises:
        InvalidConfigRootTypeError: Se `tree` não for dict nem None.
        OSError: Se a criação de diretórios ou a escrita falhar.
    """
    path = Path(path)
    text = dump_text(tree, fmt)
    ensure_parent_dir(path)
    logger.debug("writing %s config file: %s", ConfigFormat(fmt).value, path)
    path.write_text(text, encoding="utf-8")
