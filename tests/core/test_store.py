# tests/core/test_store.py
"""
Testes do ConfigStore.

Este módulo valida a orquestração das fontes global, local e env:
- precedência (global < local < env)
- leitura por fonte e isolamento das cópias retornadas
- escrita com formato lembrado por fonte e recarga completa
- importação de variáveis `AIO_*` (inclusive via `.env`)
- tratamento de arquivos ausentes, ilegíveis e malformados

Decisões arquiteturais:
    - Todo store de teste usa ambiente, diretórios e DotenvState isolados
      (ver fixture `make_store` em conftest)
"""

import logging
from pathlib import Path

import pytest

from aio_config.core.config.errors import ParseError
from aio_config.core.config.loader import ConfigFormat
from aio_config.core.store import ConfigStore, Source, env_key_to_path, env_to_tree


def test_initialises_empty(make_store, global_file, local_file):
    store = make_store()
    assert store.values == {}
    assert store.get() == {}
    assert store.global_source.file == global_file
    assert store.global_source.tree == {}
    assert store.global_source.format is ConfigFormat.JSON
    assert store.local_source.file == local_file
    assert store.env_values == {}


def test_reload_returns_store(make_store):
    store = make_store()
    assert store.reload() is store


def test_get_blank_path_returns_everything(make_store, global_file):
    global_file.parent.mkdir(parents=True)
    global_file.write_text("a:\n  key: global\n", encoding="utf-8")
    store = make_store()
    expected = {"a": {"key": "global"}}
    assert store.get() == expected
    assert store.get("") == expected
    assert store.get("    ") == expected


def test_get_unknown_key_returns_none(make_store):
    assert make_store().get("unknown.key") is None


def test_get_by_source(make_store, global_file, local_file, env):
    global_file.parent.mkdir(parents=True)
    global_file.write_text("a:\n  key: global\n", encoding="utf-8")
    local_file.write_text('{ a: { key: "local" } }', encoding="utf-8")
    env["AIO_A_KEY"] = "env"

    store = make_store()

    assert store.get("a.key", "global") == "global"
    assert store.get("a.key", "local") == "local"
    assert store.get("a.key", "env") == "env"
    assert store.get("a.key", Source.LOCAL) == "local"
    assert store.get("a.key") == "env"


def test_get_unknown_source_raises(make_store):
    with pytest.raises(ValueError):
        make_store().get("a", "remote")


def test_get_returns_detached_copy(make_store):
    """
    Verifica que valores retornados não compartilham estado interno.

    Mutar o retorno de `get` não pode alterar a visão mesclada nem as fontes.
    """
    store = make_store()
    store.set("a.list", [1, 2])

    value = store.get("a")
    value["list"].append(3)
    value["new"] = True

    assert store.get("a") == {"list": [1, 2]}
    assert store.get("a", "global") == {"list": [1, 2]}


def test_set_empty_path_clears_global_file(make_store, global_file):
    store = make_store()
    store.set("a.key", "value")
    assert store.set("", None) is store
    assert global_file.read_text(encoding="utf-8") == ""
    assert store.get() == {}


def test_set_saves_to_global_file(make_store, global_file):
    store = make_store()
    assert store.set("a.key", "value1") is store
    assert global_file.read_text(encoding="utf-8") == '{"a":{"key":"value1"}}'
    assert store.get() == {"a": {"key": "value1"}}


def test_set_saves_to_local_file(make_store, local_file):
    store = make_store()
    assert store.set("a.key", "value3", True) is store
    assert local_file.read_text(encoding="utf-8") == '{"a":{"key":"value3"}}'
    assert store.get() == {"a": {"key": "value3"}}


def test_set_keeps_detected_yaml_format(make_store, local_file):
    local_file.write_text("a:\n  key: old\n", encoding="utf-8")
    store = make_store()
    assert store.local_source.format is ConfigFormat.YAML

    store.set("a.key", "local", local=True)

    assert local_file.read_text(encoding="utf-8") == "a:\n  key: local\n"
    assert store.local_source.format is ConfigFormat.YAML


def test_set_then_get_round_trip(make_store):
    store = make_store()
    value = {"nested": {"list": [1, "two", {"three": 3}], "flag": True}, "n": 1.5}
    store.set("x.y", value)
    assert store.get("x.y") == value


def test_local_values_have_priority(make_store, local_file, global_file):
    store = make_store()
    store.set("a.key", "local", True)
    store.set("a.key", "global", False)

    assert local_file.read_text(encoding="utf-8") == '{"a":{"key":"local"}}'
    assert global_file.read_text(encoding="utf-8") == '{"a":{"key":"global"}}'
    assert store.get("a.key") == "local"
    assert store.get("a.key", "global") == "global"


def test_env_values_have_priority(make_store, env):
    """
    Verifica a precedência completa: env > local > global.

    Antes da variável existir, o valor local vence; após defini-la e
    recarregar, o valor do ambiente vence.
    """
    store = make_store()
    store.set("pgb.name", "local", True)
    store.set("pgb.name", "global", False)
    assert store.get("pgb.name") == "local"

    env["AIO_PGB_NAME"] = "env"
    store.reload()

    assert store.get("pgb.name") == "env"
    assert store.get("pgb.name", "local") == "local"


def test_set_then_get_with_different_key_case(make_store, global_file):
    global_file.parent.mkdir(parents=True)
    global_file.write_text('{"pgb": {"name": "a"}}', encoding="utf-8")
    store = make_store()

    store.set("PGB.token", "t")

    assert store.get("PGB.token") == "t"
    assert store.get("pgb.name") == "a"
    assert global_file.read_text(encoding="utf-8") == '{"pgb":{"name":"a","token":"t"}}'


def test_env_wins_over_file_keys_in_other_case(make_store, global_file, env):
    global_file.parent.mkdir(parents=True)
    global_file.write_text("PGB:\n  NAME: global\n", encoding="utf-8")
    env["AIO_PGB_NAME"] = "env"

    store = make_store()

    assert store.get("pgb.name") == "env"
    assert store.get("PGB.NAME") == "env"
    assert store.get("pgb.name", "global") == "global"


def test_env_values_are_strings(make_store, env):
    env["AIO_PGB_AUTHTOKEN"] = "12"
    env["aio_lower_case"] = "yes"
    env["OTHER_VAR"] = "ignored"

    store = make_store()

    assert store.get("pgb.authtoken") == "12"
    assert store.get("lower.case") == "yes"
    assert store.get("other") is None


def test_env_key_to_path_splits_once():
    assert env_key_to_path("AIO_PGB_AUTH_TOKEN") == "pgb.auth_token"
    assert env_key_to_path("aio_pgb_authtoken") == "pgb.authtoken"
    assert env_key_to_path("AIO_PGB__AUTH") == "pgb.auth"
    assert env_key_to_path("AIO_SINGLE") == "single"
    assert env_key_to_path("PGB_AUTH") is None
    assert env_key_to_path("AIO_") is None


def test_env_to_tree():
    env = {"AIO_PGB_NAME": "a", "AIO_PGB_AUTH_TOKEN": "b", "HOME": "/home/x"}
    assert env_to_tree(env) == {"pgb": {"name": "a", "auth_token": "b"}}


def test_dotenv_values_are_imported(make_store, project_dir, env):
    (project_dir / ".env").write_text(
        "AIO_PGB_NAME='from-dotenv'\nAIO_PGB_TOKEN=abc\n", encoding="utf-8"
    )
    env["AIO_PGB_TOKEN"] = "from-env"

    store = make_store()

    assert store.get("pgb.name") == "from-dotenv"
    assert store.get("pgb.token") == "from-env"
    assert env["AIO_PGB_NAME"] == "from-dotenv"


def test_delete_removes_key(make_store, global_file):
    store = make_store()
    store.set("a.key", "value").set("a.other", 1)

    assert store.delete("a.key") is store

    assert store.get("a") == {"other": 1}
    assert global_file.read_text(encoding="utf-8") == '{"a":{"other":1}}'

    store.delete("a.other")
    assert store.get() == {}
    assert global_file.read_text(encoding="utf-8") == ""


def test_malformed_file_raises_parse_error(make_store, local_file):
    local_file.write_text("{{{{{", encoding="utf-8")
    with pytest.raises(ParseError) as exc_info:
        make_store()
    assert exc_info.value.format == "json"
    assert exc_info.value.path == local_file


def test_unreadable_file_is_logged_and_treated_as_empty(make_store, global_file, caplog):
    global_file.mkdir(parents=True)

    with caplog.at_level(logging.WARNING, logger="aio_config.core.store"):
        store = make_store()

    assert store.get() == {}
    assert "cannot read config" in caplog.text


def test_store_uses_explicit_config_file(env, project_dir, tmp_path: Path):
    from aio_config.core.dotenv import DotenvState

    custom = tmp_path / "custom" / "config.yaml"
    env["AIO_CONFIG_FILE"] = str(custom)

    store = ConfigStore(environ=env, cwd=project_dir, dotenv_state=DotenvState())
    store.set("a", 1)

    assert store.global_source.file == custom
    assert custom.read_text(encoding="utf-8") == '{"a":1}'
