# src/tagbind/core/config/__init__.py

"""
Camada de configuração do tagbind.

Este pacote contém as estruturas e utilitários responsáveis por carregar
as settings do processo e o documento de ambiente consultado pelas tags
`[CONF:...]`.

Responsabilidades do pacote:
    - Carregamento de settings (defaults + YAML opcional + variáveis de ambiente)
    - Carregamento do ambiente (`{env}.yml` obrigatório + `{env}-private.yml` opcional)
    - Resolução do ambiente final via deep-merge determinístico
    - Criação de contextos de cenário a partir das settings

Invariantes:
    - O documento de ambiente final é um dicionário puro (dict)
    - Conflitos estruturais são tratados como erro

Limites explícitos:
    - Não resolve tags
    - Não valida semântica das chaves do ambiente
"""

from .errors import (
    ConfigError,
    ConfigTypeConflictError,
    EnvironmentNotFoundError,
    InvalidConfigRootTypeError,
    InvalidSettingError,
    UnsupportedConfigFormatError,
)
from .loader import load_environment, load_environment_map, load_settings, new_scenario_context
from .merge import deep_merge
from .settings import Settings

__all__ = [
    "ConfigError",
    "ConfigTypeConflictError",
    "EnvironmentNotFoundError",
    "InvalidConfigRootTypeError",
    "InvalidSettingError",
    "UnsupportedConfigFormatError",
    "Settings",
    "deep_merge",
    "load_environment",
    "load_environment_map",
    "load_settings",
    "new_scenario_context",
]
