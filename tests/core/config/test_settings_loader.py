# tests/core/config/test_settings_loader.py
"""
Testes do carregamento de settings e da criação de contextos de cenário.

Os testes asseguram que:
- defaults são aplicados quando nada é informado
- o arquivo de settings sobrescreve defaults
- variáveis de ambiente sobrescrevem o arquivo
- valores inválidos são rejeitados com InvalidSettingError
- `new_scenario_context` injeta ambiente, nível de log e metadados

Limites explícitos:
    - Não lê `os.environ` real (o mapeamento é injetado)
"""

from pathlib import Path

import pytest

from tagbind.core.config import (
    ConfigError,
    InvalidSettingError,
    Settings,
    UnsupportedConfigFormatError,
    load_settings,
    new_scenario_context,
)
from tagbind.core.pathmap import PathMap


def test_defaults_without_file_or_env():
    settings = load_settings(environ={})
    assert settings == Settings()
    assert settings.suite == "tagbind"
    assert settings.environment == "local"
    assert settings.environments_dir == "./environments"
    assert settings.log_level == "INFO"


def test_settings_file_overrides_defaults(tmp_path: Path):
    path = tmp_path / "tagbind.yml"
    path.write_text(
        "suite: checkout\n"
        "environment: staging\n"
        "dir:\n"
        "  environments: ./envs\n"
        "log:\n"
        "  level: debug\n",
        encoding="utf-8",
    )

    settings = load_settings(path=str(path), environ={})
    assert settings == Settings(
        suite="checkout",
        environment="staging",
        environments_dir="./envs",
        log_level="DEBUG",
    )


def test_environment_variables_override_file(tmp_path: Path):
    path = tmp_path / "tagbind.yml"
    path.write_text("environment: staging\nlog:\n  level: INFO\n", encoding="utf-8")

    settings = load_settings(
        path=str(path),
        environ={
            "ENVIRONMENT": "ci",
            "DIR_ENVIRONMENTS": "/opt/environments",
            "LOG_LEVEL": "warning",
            "SUITE": "",
        },
    )
    assert settings.environment == "ci"
    assert settings.environments_dir == "/opt/environments"
    assert settings.log_level == "WARNING"
    # variáveis vazias são ignoradas
    assert settings.suite == "tagbind"


def test_missing_settings_file_raises(tmp_path: Path):
    with pytest.raises(ConfigError):
        load_settings(path=str(tmp_path / "missing.yml"), environ={})


def test_unsupported_settings_format_raises(tmp_path: Path):
    path = tmp_path / "tagbind.toml"
    path.write_text("suite = 'x'\n", encoding="utf-8")
    with pytest.raises(UnsupportedConfigFormatError):
        load_settings(path=str(path), environ={})


@pytest.mark.parametrize(
    "environ",
    [
        {"LOG_LEVEL": "TRACE"},
        {"ENVIRONMENT": "   "},
    ],
)
def test_invalid_settings_raise(environ):
    with pytest.raises(InvalidSettingError):
        load_settings(environ=environ)


def test_invalid_settings_are_config_errors():
    assert issubclass(InvalidSettingError, ConfigError)


def test_settings_to_dict_is_nested():
    assert Settings().to_dict() == {
        "suite": "tagbind",
        "environment": "local",
        "dir": {"environments": "./environments"},
        "log": {"level": "INFO"},
    }


def test_new_scenario_context_with_injected_environment():
    settings = Settings(suite="checkout", environment="ci", log_level="DEBUG")
    env = PathMap.from_mapping({"minio": True})

    ctx = new_scenario_context(settings, environment=env, scenario_id="s-1")

    assert ctx.scenario_id == "s-1"
    assert ctx.environment is env
    assert ctx.log_level == "DEBUG"
    assert ctx.meta == {"suite": "checkout", "environment": "ci"}
    assert ctx.events[-1]["source"] == "config"
    assert ctx.events[-1]["message"] == "scenario context created"


def test_new_scenario_context_loads_environment_from_disk(tmp_path: Path, local_environment_yaml):
    (tmp_path / "local.yml").write_text(local_environment_yaml, encoding="utf-8")
    settings = Settings(environments_dir=str(tmp_path))

    ctx = new_scenario_context(settings)

    assert ctx.environment.get("minioEndpoint") == "http://miniomock:9000"
    assert ctx.scenario_id
    # nível INFO descarta o evento DEBUG de criação
    assert ctx.events == []
