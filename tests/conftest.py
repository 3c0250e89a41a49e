# tests/conftest.py
"""
Fixtures compartilhados para testes do aio-config.

Este módulo define fixtures reutilizáveis que fornecem:
- um ambiente de variáveis isolado (dict), nunca o `os.environ` real
- diretórios temporários de home e de projeto
- uma factory de ConfigStore com estado de `.env` próprio por teste

Decisões arquiteturais:
    - O ambiente e o marcador do `.env` são injetados, nunca globais
    - Todo I/O acontece sob `tmp_path`
    - Imports do core são realizados de forma lazy para
      melhorar a clareza de erros durante falhas

Invariantes:
    - Nenhuma fixture lê ou grava a configuração real do usuário
    - Nenhuma fixture depende do diretório de trabalho do processo

Limites explícitos:
    - Não substituem testes de integração com `os.environ` real
"""

from pathlib import Path

import pytest


@pytest.fixture
def env() -> dict:
    """
    Fixture que fornece um ambiente de variáveis vazio e isolado.

    O dicionário é passado ao ConfigStore e ao loader do `.env` no lugar
    de `os.environ`, permitindo inspecionar o que foi adicionado.

    Returns:
        dict: Ambiente vazio.
    """
    return {}


@pytest.fixture
def home_dir(tmp_path: Path) -> Path:
    path = tmp_path / "home"
    path.mkdir()
    return path


@pytest.fixture
def project_dir(tmp_path: Path) -> Path:
    path = tmp_path / "project"
    path.mkdir()
    return path


@pytest.fixture
def make_store(env, home_dir, project_dir):
    """
    Fixture factory que constrói ConfigStores isolados.

    Cada store resolve seus caminhos contra `home_dir` (arquivo global em
    `home/.config/aio`) e `project_dir` (`.aio` e `.env`), usando o
    ambiente `env` e um DotenvState novo.

    Decisões arquiteturais:
        - O import do store é lazy
        - Kwargs extras sobrescrevem os defaults do fixture

    Returns:
        Callable[..., ConfigStore]: Factory de stores.
    """
    from aio_config.core.config.locations import ConfigPaths
    from aio_config.core.dotenv import DotenvState
    from aio_config.core.store import ConfigStore

    def _make(**kwargs):
        options = {
            "paths": ConfigPaths.resolve(environ=env, cwd=project_dir, home=home_dir),
            "environ": env,
            "cwd": project_dir,
            "dotenv_state": DotenvState(),
        }
        options.update(kwargs)
        return ConfigStore(**options)

    return _make


@pytest.fixture
def global_file(home_dir: Path) -> Path:
    return home_dir / ".config" / "aio"


@pytest.fixture
def local_file(project_dir: Path) -> Path:
    return project_dir / ".aio"
