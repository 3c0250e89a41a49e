# src/aio_config/core/config/locations.py
"""
Resolução dos caminhos de arquivos usados pelo aio-config.

Ordem de resolução do arquivo global:
    1. `$AIO_CONFIG_FILE` (override explícito)
    2. `$XDG_CONFIG_HOME/aio`
    3. `~/.config/aio`

O arquivo local e o `.env` ficam sempre no diretório de trabalho.
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional, Union

CONFIG_FILE_ENV = "AIO_CONFIG_FILE"
XDG_CONFIG_HOME_ENV = "XDG_CONFIG_HOME"

GLOBAL_FILE_NAME = "aio"
LOCAL_FILE_NAME = ".aio"
DOTENV_FILE_NAME = ".env"


def dotenv_path(cwd: Optional[Union[str, Path]] = None) -> Path:
    """Caminho absoluto do `.env` para o diretório de trabalho informado."""
    base = Path(cwd) if cwd is not None else Path.cwd()
    return (base / DOTENV_FILE_NAME).resolve()


@dataclass(frozen=True)
class ConfigPaths:
    """Caminhos dos arquivos de configuração de um ConfigStore."""

    global_file: Path
    local_file: Path
    dotenv_file: Path

    @classmethod
    def resolve(
        cls,
        environ: Optional[Mapping[str, str]] = None,
        cwd: Optional[Union[str, Path]] = None,
        home: Optional[Union[str, Path]] = None,
    ) -> "ConfigPaths":
        env = os.environ if environ is None else environ
        base = Path(cwd) if cwd is not None else Path.cwd()

        explicit = env.get(CONFIG_FILE_ENV)
        if explicit:
            global_file = Path(explicit)
        else:
            xdg = env.get(XDG_CONFIG_HOME_ENV)
            if xdg:
                config_home = Path(xdg)
            else:
                config_home = (Path(home) if home is not None else Path.home()) / ".config"
            global_file = config_home / GLOBAL_FILE_NAME

        return cls(
            global_file=global_file,
            local_file=base / LOCAL_FILE_NAME,
            dotenv_file=dotenv_path(base),
        )
