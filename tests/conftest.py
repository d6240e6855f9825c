# tests/conftest.py
"""
Fixtures compartilhados para testes do tagbind.

Este módulo define fixtures reutilizáveis que fornecem:
- documentos de ambiente mínimos e determinísticos
- conteúdos YAML de ambiente e de overlay `-private`
- contexto de cenário controlado (ScenarioContext)

Decisões arquiteturais:
    - Fixtures são mantidas simples e explícitas
    - Dados retornados são determinísticos e isolados
    - Imports do core são realizados de forma lazy para
      melhorar a clareza de erros durante falhas

Invariantes:
    - Nenhuma fixture realiza I/O (arquivos são criados pelos testes via tmp_path)
    - Todas as fixtures são seguras para execução em paralelo
"""

import pytest
from datetime import datetime, timezone


# =====================================================
# Ambiente (CONF)
# =====================================================

@pytest.fixture
def environment_document() -> dict:
    """
    Fixture que fornece um documento de ambiente já resolvido.

    Estrutura semelhante a um `environments/local.yml` real, com escalares,
    objetos aninhados e arrays homogêneos e heterogêneos.

    Returns:
        dict: Documento de ambiente para o PathMap do contexto.
    """
    return {
        "minio": True,
        "minioEndpoint": "http://miniomock:9000",
        "port": 8080,
        "ratio": 0.75,
        "redis": {"host": "localhost", "db": 0},
        "elasticsearch": {"addresses": ["http://es1:9200", "http://es2:9200"]},
        "flags": [True, False, True],
        "ports": [80, 443],
        "mixed": [1, "two", True],
        "alias": "[CTXT:user]",
        "hashed": "[SHA256:[CTXT:user]]",
    }


@pytest.fixture
def local_environment_yaml() -> str:
    """
    Fixture que fornece o YAML obrigatório do ambiente `local`.

    Returns:
        str: Conteúdo YAML representando `environments/local.yml`.
    """
    return """\
# Local
minio: true
minioEndpoint: http://miniomock:9000
redis:
  host: localhost
  port: 6379
"""


@pytest.fixture
def private_environment_yaml() -> str:
    """
    Fixture que fornece o overlay `-private` do ambiente `local`.

    Representa apenas overrides (segredos, endpoints locais), nunca o
    ambiente completo.

    Returns:
        str: Conteúdo YAML representando `environments/local-private.yml`.
    """
    return """\
# Private
minioEndpoint: http://127.0.0.1:9000
redis:
  password: s3cr3t
"""


# =====================================================
# Contexto de cenário
# =====================================================

@pytest.fixture
def scenario_ctx(environment_document):
    """
    Fixture que fornece um ScenarioContext determinístico para testes.

    - `scenario_id` e `created_at` são fixos
    - o ambiente é injetado explicitamente (sem leitura de disco)
    - o nível de log é DEBUG para que eventos do binder sejam observáveis

    Returns:
        ScenarioContext: Contexto de cenário isolado e previsível.
    """
    from tagbind.core.context import ScenarioContext
    from tagbind.core.pathmap import PathMap

    ctx = ScenarioContext(
        scenario_id="scenario-test-001",
        created_at=datetime(2026, 1, 16, 0, 0, 0, tzinfo=timezone.utc),
        environment=PathMap.from_mapping(environment_document),
        log_level="DEBUG",
        meta={"source": "pytest"},
    )
    ctx.put("user", "john")
    ctx.put("test", "contextTest")
    return ctx
