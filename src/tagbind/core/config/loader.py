# src/tagbind/core/config/loader.py
"""
Loader canônico de configuração do tagbind.

Este módulo é responsável por carregar:
    - as settings do processo (YAML opcional + variáveis de ambiente)
    - o documento de ambiente consultado pelas tags `[CONF:...]`

O documento de ambiente é resolvido a partir de:
    - `{environments_dir}/{environment}.yml` (obrigatório)
    - `{environments_dir}/{environment}-private.yml` (opcional)

Princípios fundamentais:
    - Configuração é declarativa e explícita
    - O overlay `-private` sempre tem precedência sobre o ambiente
    - Nenhum estado global é mantido: o chamador constrói o PathMap uma vez
      e o injeta nos contextos de cenário

Invariantes:
    - O arquivo de ambiente é obrigatório
    - O resultado é sempre um dicionário puro (`dict`)
    - O overlay nunca muta o ambiente base

Limites explícitos:
    - Não valida semântica das chaves do ambiente
    - Não persiste configuração
"""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import yaml  # PyYAML

from ..context import ScenarioContext
from ..pathmap import PathMap
from .errors import (
    ConfigError,
    EnvironmentNotFoundError,
    InvalidConfigRootTypeError,
    UnsupportedConfigFormatError,
)
from .merge import deep_merge
from .settings import ENV_VARS, Settings, settings_from_dict


PRIVATE_SUFFIX = "-private"
_EXTENSIONS = (".yml", ".yaml", ".json")


def _load_file(path: Path) -> Dict[str, Any]:
    """
    Carrega um arquivo de configuração e valida sua estrutura básica.

    Decisões arquiteturais:
        - O conteúdo raiz deve ser um dicionário (`dict`)
        - Arquivos vazios são interpretados como dicionários vazios
        - Formatos não suportados geram erro explícito

    Args:
        path (Path): Caminho para o arquivo (deve existir).

    Returns:
        Dict[str, Any]: Conteúdo do arquivo carregado como dicionário.

    Raises:
        UnsupportedConfigFormatError: Se o formato do arquivo não for suportado.
        InvalidConfigRootTypeError: Se o conteúdo raiz não for um dicionário.
    """
    suffix = path.suffix.lower()

    if suffix in {".yaml", ".yml"}:
        with path.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f)

    elif suffix == ".json":
        with path.open("r", encoding="utf-8") as f:
            data = json.load(f)

    else:
        raise UnsupportedConfigFormatError(f"Formato não suportado: {path.suffix}")

    if data is None:
        data = {}

    if not isinstance(data, dict):
        raise InvalidConfigRootTypeError(
            f"Config root deve ser dict, recebido: {type(data).__name__}"
        )

    return data


def _find_file(directory: Path, stem: str) -> Optional[Path]:
    for ext in _EXTENSIONS:
        candidate = directory / f"{stem}{ext}"
        if candidate.is_file():
            return candidate
    return None


def load_environment(*, directory: str, name: str) -> Dict[str, Any]:
    """
    Carrega e resolve o documento de ambiente `name`.

    Política de resolução:
        - `{name}.yml` (ou `.yaml`/`.json`) é obrigatório
        - `{name}-private.yml` é opcional e, quando presente, tem prioridade
        - A resolução utiliza `deep_merge`

    Args:
        directory (str): Diretório dos arquivos de ambiente.
        name (str): Nome do ambiente (ex.: "local").

    Returns:
        Dict[str, Any]: Documento de ambiente resolvido.

    Raises:
        EnvironmentNotFoundError: Se o arquivo obrigatório não existir.
        UnsupportedConfigFormatError: Se o formato do arquivo não for suportado.
        InvalidConfigRootTypeError: Se o conteúdo não for um dicionário.
        ConfigTypeConflictError: Se ocorrer conflito estrutural durante o merge.
    """
    base_dir = Path(directory)
    base_file = _find_file(base_dir, name)
    if base_file is None:
        raise EnvironmentNotFoundError(
            f"Arquivo de ambiente não encontrado: {base_dir / (name + '.yml')}"
        )

    effective = _load_file(base_file)

    private_file = _find_file(base_dir, f"{name}{PRIVATE_SUFFIX}")
    if private_file is not None:
        effective = deep_merge(effective, _load_file(private_file))

    return effective


def load_environment_map(settings: Settings) -> PathMap:
    """Carrega o ambiente ativo das settings e o expõe como PathMap."""
    return PathMap.from_mapping(
        load_environment(directory=settings.environments_dir, name=settings.environment)
    )


def load_settings(
    *,
    path: Optional[str] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> Settings:
    """
    Carrega as settings do processo.

    Ordem de precedência (a última vence):
        - defaults de `Settings`
        - arquivo YAML/JSON opcional em `path`
        - variáveis de ambiente (SUITE, ENVIRONMENT, DIR_ENVIRONMENTS, LOG_LEVEL)

    Raises:
        ConfigError: Se o arquivo informado não existir ou tiver estrutura inválida.
        InvalidSettingError: Se algum valor resultante for inválido.
    """
    data: Dict[str, Any] = Settings().to_dict()

    if path is not None:
        file = Path(path)
        if not file.is_file():
            raise ConfigError(f"Arquivo de settings não encontrado: {file}")
        data = deep_merge(data, _load_file(file))

    env = os.environ if environ is None else environ
    overrides: Dict[str, Any] = {}
    for var, (section, key) in ENV_VARS.items():
        value = env.get(var)
        if value is None or value == "":
            continue
        if section:
            overrides.setdefault(section, {})[key] = value
        else:
            overrides[key] = value
    if overrides:
        data = deep_merge(data, overrides)

    return settings_from_dict(data)


def new_scenario_context(
    settings: Settings,
    *,
    environment: Optional[PathMap] = None,
    scenario_id: Optional[str] = None,
) -> ScenarioContext:
    """
    Cria o contexto de um cenário a partir das settings.

    Quando `environment` não é informado, o documento de ambiente é carregado
    do disco; runners devem carregá-lo uma única vez via `load_environment_map`
    e reutilizá-lo entre cenários.
    """
    if environment is None:
        environment = load_environment_map(settings)
    ctx = ScenarioContext.create(
        environment=environment,
        scenario_id=scenario_id,
        log_level=settings.log_level,
        meta={"suite": settings.suite, "environment": settings.environment},
    )
    ctx.log(source="config", level="DEBUG", message="scenario context created")
    return ctx
