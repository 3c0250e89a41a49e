# src/aio_config/core/pipe.py
"""
Leitura de dados encaminhados via stdin (ex.: `cat valores.yaml | aio config set chave`).

O conteúdo é lido uma única vez por processo e memorizado em um
`PipedInputState`. Quando o texto é YAML válido, o valor interpretado é
retornado; caso contrário, o texto bruto.
"""

import logging
import sys
from dataclasses import dataclass
from typing import IO, Any, Optional

import yaml  # PyYAML

logger = logging.getLogger(__name__)


@dataclass
class PipedInputState:
    consumed: bool = False
    value: Any = None

    def reset(self) -> None:
        self.consumed = False
        self.value = None


DEFAULT_PIPED_STATE = PipedInputState()


def _is_tty(stream: IO[str]) -> bool:
    isatty = getattr(stream, "isatty", None)
    return bool(isatty and isatty())


def get_piped_data(
    stream: Optional[IO[str]] = None,
    state: Optional[PipedInputState] = None,
) -> Any:
    """
    Retorna os dados encaminhados via stdin.

    Decisões arquiteturais:
        - Terminal interativo (TTY) → `None`, sem bloquear esperando entrada
        - Entrada vazia → `""`
        - Leituras seguintes retornam o valor memorizado

    Args:
        stream: Fluxo de entrada (padrão: `sys.stdin`).
        state: Memória do processo (padrão: `DEFAULT_PIPED_STATE`).
    """
    state = DEFAULT_PIPED_STATE if state is None else state
    if state.consumed:
        return state.value

    stream = sys.stdin if stream is None else stream
    if _is_tty(stream):
        return None

    data = stream.read()
    result: Any = data
    if data:
        try:
            result = yaml.safe_load(data)
        except yaml.YAMLError:
            logger.debug("piped data is not yaml, keeping raw text")
            result = data

    state.consumed = True
    state.value = result
    return result
