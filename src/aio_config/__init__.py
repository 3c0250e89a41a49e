# src/aio_config/__init__.py
"""
aio-config — store de configuração em camadas.

Mescla, em ordem crescente de precedência, um arquivo global, um arquivo
local do projeto e variáveis de ambiente `AIO_*` (incluindo as vindas de um
`.env` opcional) em um único espaço de chaves endereçado por notação de ponto.

Uso típico:

    import aio_config

    config = aio_config.load()
    config.set("pgb.name", "my-app", local=True)
    config.get("pgb.name")
"""

from typing import Any

from .core.config.accessor import get_value, set_value
from .core.config.errors import ConfigError, ParseError
from .core.config.loader import ConfigFormat
from .core.config.merge import deep_merge
from .core.dotenv import load_dotenv
from .core.pipe import get_piped_data
from .core.store import ConfigStore, Source

__all__ = [
    "ConfigError",
    "ConfigFormat",
    "ConfigStore",
    "ParseError",
    "Source",
    "deep_merge",
    "get_piped_data",
    "get_value",
    "load",
    "load_dotenv",
    "set_value",
]


def load(**kwargs: Any) -> ConfigStore:
    """Cria um ConfigStore já carregado (ver `ConfigStore` para os argumentos)."""
    return ConfigStore(**kwargs)
