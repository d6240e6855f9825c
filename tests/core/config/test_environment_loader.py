# tests/core/config/test_environment_loader.py
"""
Testes do carregador do documento de ambiente (load_environment).

Este módulo valida o comportamento do loader responsável por:
- carregar o arquivo obrigatório `{env}.yml`
- aplicar o overlay opcional `{env}-private.yml`
- rejeitar formatos e estruturas inválidas
- expor o ambiente resolvido como PathMap para as tags `[CONF:...]`

Decisões arquiteturais:
    - O ambiente é declarativo e baseado em arquivos
    - O overlay `-private` atua apenas como override explícito
    - Erros estruturais são tratados como falhas fatais

Invariantes:
    - O documento final é sempre um dicionário
    - A ausência do overlay nunca é erro

Limites explícitos:
    - Não valida semântica das chaves do ambiente
"""

import pytest
from pathlib import Path

try:
    from tagbind.core.config import Settings
    from tagbind.core.config.loader import load_environment, load_environment_map
    from tagbind.core.config.errors import (
        EnvironmentNotFoundError,
        InvalidConfigRootTypeError,
    )
except Exception as e:  # noqa: BLE001
    Settings = None
    load_environment = None
    load_environment_map = None
    EnvironmentNotFoundError = None
    InvalidConfigRootTypeError = None
    _IMPORT_ERR = e
else:
    _IMPORT_ERR = None


def _require_imports():
    """
    Garante que o loader de ambiente e suas exceções tipadas estejam disponíveis.
    """
    if _IMPORT_ERR is not None:
        pytest.fail(
            "Missing environment loader modules. Implement:\n"
            "- src/tagbind/core/config/loader.py (load_environment, load_environment_map)\n"
            "- src/tagbind/core/config/errors.py (EnvironmentNotFoundError, InvalidConfigRootTypeError)\n"
            f"Import error: {_IMPORT_ERR}"
        )


def test_missing_environment_raises(tmp_path: Path):
    """
    Verifica que a ausência do arquivo de ambiente obrigatório é fatal.
    """
    _require_imports()
    with pytest.raises(EnvironmentNotFoundError):
        load_environment(directory=str(tmp_path), name="local")


def test_missing_private_overlay_is_ok(tmp_path: Path, local_environment_yaml):
    """
    Verifica que o overlay `-private` é opcional.
    """
    _require_imports()
    (tmp_path / "local.yml").write_text(local_environment_yaml, encoding="utf-8")

    env = load_environment(directory=str(tmp_path), name="local")
    assert env == {
        "minio": True,
        "minioEndpoint": "http://miniomock:9000",
        "redis": {"host": "localhost", "port": 6379},
    }


def test_private_overlay_takes_precedence(
    tmp_path: Path, local_environment_yaml, private_environment_yaml
):
    """
    Verifica que o overlay `-private` sobrescreve e estende o ambiente base.

    Invariantes:
        - Chaves do overlay vencem
        - Dicionários aninhados são mesclados, não substituídos
    """
    _require_imports()
    (tmp_path / "local.yml").write_text(local_environment_yaml, encoding="utf-8")
    (tmp_path / "local-private.yml").write_text(private_environment_yaml, encoding="utf-8")

    env = load_environment(directory=str(tmp_path), name="local")
    assert env["minioEndpoint"] == "http://127.0.0.1:9000"
    assert env["minio"] is True
    assert env["redis"] == {"host": "localhost", "port": 6379, "password": "s3cr3t"}


def test_json_environment_is_supported(tmp_path: Path):
    _require_imports()
    (tmp_path / "ci.json").write_text('{"minio": false, "ports": [80, 443]}', encoding="utf-8")

    env = load_environment(directory=str(tmp_path), name="ci")
    assert env == {"minio": False, "ports": [80, 443]}


def test_empty_environment_file_is_empty_dict(tmp_path: Path):
    _require_imports()
    (tmp_path / "local.yml").write_text("# nothing here\n", encoding="utf-8")

    assert load_environment(directory=str(tmp_path), name="local") == {}


def test_invalid_root_type_raises(tmp_path: Path):
    """
    Verifica que um ambiente cujo root não é um dicionário é rejeitado.
    """
    _require_imports()
    (tmp_path / "local.yml").write_text("- just\n- a\n- list\n", encoding="utf-8")

    with pytest.raises(InvalidConfigRootTypeError):
        load_environment(directory=str(tmp_path), name="local")


def test_environment_map_exposes_conf_paths(
    tmp_path: Path, local_environment_yaml, private_environment_yaml
):
    """
    Verifica que o ambiente resolvido é exposto como PathMap.

    Invariantes:
        - Números são expostos como float
        - Objetos são expostos como texto JSON compacto
    """
    _require_imports()
    (tmp_path / "local.yml").write_text(local_environment_yaml, encoding="utf-8")
    (tmp_path / "local-private.yml").write_text(private_environment_yaml, encoding="utf-8")

    settings = Settings(environment="local", environments_dir=str(tmp_path))
    env = load_environment_map(settings)

    assert env.get("minio") is True
    assert env.get("minioEndpoint") == "http://127.0.0.1:9000"
    assert env.get("redis.port") == 6379.0
    assert env.get("redis.password") == "s3cr3t"
    assert env.get("redis") == '{"host":"localhost","port":6379,"password":"s3cr3t"}'
    assert env.get("missing") is None
