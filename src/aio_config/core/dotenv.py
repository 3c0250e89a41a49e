# src/aio_config/core/dotenv.py
"""
Carregamento de variáveis de ambiente a partir do `.env` do diretório de trabalho.

O `.env` é um arquivo `CHAVE=VALOR`, uma atribuição por linha. Três
padrões são tentados por linha, nesta ordem de precedência:
    - valor entre aspas simples   (`''` vira `'`)
    - valor entre aspas duplas    (`""` vira `"`)
    - valor sem aspas             (` # comentário` final removido, espaços aparados)

Princípios fundamentais:
    - O ambiente existente sempre vence: chaves já definidas nunca são sobrescritas
    - O carregamento é idempotente por caminho absoluto do `.env`
    - Ausência do arquivo não é erro

Estado:
    O marcador de "já carregado" é um objeto explícito (`DotenvState`).
    `DEFAULT_DOTENV_STATE` é a instância do processo; testes e stores podem
    injetar a sua própria.
"""

import logging
import os
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, MutableMapping, Optional, Union

from .config.locations import dotenv_path

logger = logging.getLogger(__name__)

_KEY = r"^\s*([^=#\s][^=]*?)\s*="
SINGLE_QUOTE_RE = re.compile(_KEY + r"\s*'((?:''|[^'])*)'")
DOUBLE_QUOTE_RE = re.compile(_KEY + r'\s*"((?:""|[^"])*)"')
NO_QUOTE_RE = re.compile(_KEY + r"\s*(?![\s'\"])(.*)$")
TRAILING_COMMENT_RE = re.compile(r" #.*$")


@dataclass
class DotenvState:
    """Marcador de idempotência: caminho do último `.env` processado."""

    loaded: Optional[Path] = None

    def reset(self) -> None:
        self.loaded = None


DEFAULT_DOTENV_STATE = DotenvState()


def _parse_line(line: str) -> Optional[tuple]:
    match = SINGLE_QUOTE_RE.match(line)
    if match:
        return match.group(1), match.group(2).replace("''", "'")

    match = DOUBLE_QUOTE_RE.match(line)
    if match:
        return match.group(1), match.group(2).replace('""', '"')

    match = NO_QUOTE_RE.match(line)
    if match:
        return match.group(1), TRAILING_COMMENT_RE.sub("", match.group(2)).strip()

    return None


def parse_dotenv(text: str) -> Dict[str, str]:
    """
    Interpreta o conteúdo de um `.env` como um mapa plano de strings.

    Linhas em branco, comentários (`# ...`) e linhas sem `=` são ignoradas.
    Uma chave repetida fica com o último valor.
    """
    result: Dict[str, str] = {}
    for line in text.splitlines():
        if not line.strip() or line.lstrip().startswith("#"):
            continue
        parsed = _parse_line(line)
        if parsed is not None:
            key, value = parsed
            result[key] = value
    return result


def load_dotenv(
    state: Optional[DotenvState] = None,
    cwd: Optional[Union[str, Path]] = None,
    environ: Optional[MutableMapping[str, str]] = None,
) -> List[str]:
    """
    Eleva as variáveis do `<cwd>/.env` para o ambiente do processo.

    Decisões arquiteturais:
        - Se `state.loaded` já aponta para o mesmo `.env`, nada é feito
        - Uma mudança de diretório de trabalho dispara nova leitura
        - Falhas de leitura (exceto arquivo ausente) são logadas e ignoradas
        - O marcador é atualizado em toda chamada, com sucesso ou falha

    Args:
        state: Marcador de idempotência (padrão: `DEFAULT_DOTENV_STATE`).
        cwd: Diretório de trabalho (padrão: `Path.cwd()`).
        environ: Ambiente alvo (padrão: `os.environ`).

    Returns:
        List[str]: Chaves adicionadas ao ambiente, em ordem alfabética.
    """
    state = DEFAULT_DOTENV_STATE if state is None else state
    env = os.environ if environ is None else environ
    file = dotenv_path(cwd)

    if state.loaded == file:
        return []

    added: List[str] = []
    try:
        values = parse_dotenv(file.read_text(encoding="utf-8"))
    except FileNotFoundError:
        values = {}
    except (OSError, UnicodeDecodeError) as exc:
        logger.warning("cannot read environment variables from %s: %s", file, exc)
        values = {}
    else:
        logger.debug("loading environment variables from %s", file)

    for key in sorted(values):
        if key not in env:
            env[key] = values[key]
            added.append(key)

    if added:
        logger.debug("added environment variables: %s", ", ".join(added))

    state.loaded = file
    return added
