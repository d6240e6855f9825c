# src/tagbind/core/config/settings.py
"""Settings de execução do tagbind (suite, ambiente ativo, diretórios, logging)."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Mapping

from ..context import LOG_LEVELS
from .errors import InvalidSettingError


DEFAULT_SUITE = "tagbind"
DEFAULT_ENVIRONMENT = "local"
DEFAULT_ENVIRONMENTS_DIR = "./environments"
DEFAULT_LOG_LEVEL = "INFO"

# variável de ambiente -> (seção no YAML, chave)
ENV_VARS: Dict[str, tuple] = {
    "SUITE": ("", "suite"),
    "ENVIRONMENT": ("", "environment"),
    "DIR_ENVIRONMENTS": ("dir", "environments"),
    "LOG_LEVEL": ("log", "level"),
}


@dataclass(frozen=True)
class Settings:
    """Configuração efetiva de um processo de testes.

    - suite: nome da suite
    - environment: nome do ambiente (arquivo `{environment}.yml`)
    - environments_dir: diretório dos arquivos de ambiente
    - log_level: nível mínimo dos eventos registrados nos contextos
    """

    suite: str = DEFAULT_SUITE
    environment: str = DEFAULT_ENVIRONMENT
    environments_dir: str = DEFAULT_ENVIRONMENTS_DIR
    log_level: str = DEFAULT_LOG_LEVEL

    def to_dict(self) -> Dict[str, Any]:
        return {
            "suite": self.suite,
            "environment": self.environment,
            "dir": {"environments": self.environments_dir},
            "log": {"level": self.log_level},
        }


def settings_from_dict(data: Mapping[str, Any]) -> Settings:
    """Materializa Settings a partir do formato aninhado (`dir.environments`, `log.level`)."""
    directories = data.get("dir") or {}
    log = data.get("log") or {}
    if not isinstance(directories, Mapping) or not isinstance(log, Mapping):
        raise InvalidSettingError("'dir' e 'log' devem ser mapeamentos")

    values = {
        "suite": data.get("suite", DEFAULT_SUITE),
        "environment": data.get("environment", DEFAULT_ENVIRONMENT),
        "environments_dir": directories.get("environments", DEFAULT_ENVIRONMENTS_DIR),
        "log_level": log.get("level", DEFAULT_LOG_LEVEL),
    }
    for name, value in values.items():
        if not isinstance(value, str) or not value.strip():
            raise InvalidSettingError(f"Setting '{name}' deve ser string não vazia, recebido: {value!r}")

    level = values["log_level"].strip().upper()
    if level not in LOG_LEVELS:
        raise InvalidSettingError(
            f"Nível de log inválido: {values['log_level']!r} (esperado um de {', '.join(LOG_LEVELS)})"
        )
    values["log_level"] = level
    return Settings(**values)
