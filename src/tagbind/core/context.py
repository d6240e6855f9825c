# src/tagbind/core/context.py
"""
Contexto de cenário compartilhado pelos steps.

Este módulo define o `ScenarioContext`, a estrutura canônica passada
explicitamente ao TagResolver e ao TableBinder durante a execução de um
cenário de teste.

O ScenarioContext atua como o único meio permitido de:
    - armazenar valores por chave ao longo do cenário (tags `[CTXT:...]`)
    - expor o documento de ambiente ativo (tags `[CONF:...]`)
    - registrar logs estruturados de execução
    - coletar warnings não fatais (ex.: tags não resolvidas)

Princípios fundamentais:
    - Isolamento por cenário (cada cenário possui seu próprio contexto)
    - Nenhum estado global de processo
    - Comunicação explícita e rastreável

Invariantes:
    - Valores são indexados por chave explícita
    - Logs sempre incluem `scenario_id` e `source`
    - Warnings são agrupados por `source`

Limites explícitos:
    - Não resolve tags
    - Não persiste dados automaticamente
    - Não integra com o runner BDD
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from .pathmap import PathMap


LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


def level_rank(level: str) -> int:
    try:
        return LOG_LEVELS.index(level.upper())
    except ValueError:
        raise ValueError(f"unknown log level: {level!r}") from None


@dataclass
class ScenarioContext:
    """
    Contexto de execução de um cenário.

    Campos canônicos:
    - scenario_id: identificador único do cenário
    - created_at: timestamp UTC de criação do contexto
    - environment: documento de ambiente ativo (PathMap)
    - log_level: nível mínimo dos eventos registrados
    - meta: metadados livres (ex.: suite, nome do ambiente)
    - events: log estruturado de eventos
    - warnings: warnings por source
    - _values: store chave/valor do cenário
    """

    scenario_id: str
    created_at: datetime
    environment: PathMap = field(default_factory=PathMap)
    log_level: str = "INFO"
    meta: Dict[str, Any] = field(default_factory=dict)

    _values: Dict[str, Any] = field(default_factory=dict, init=False, repr=False)
    events: List[Dict[str, Any]] = field(default_factory=list, init=False)
    warnings: Dict[str, List[str]] = field(default_factory=dict, init=False)

    @classmethod
    def create(
        cls,
        *,
        environment: Optional[PathMap] = None,
        scenario_id: Optional[str] = None,
        log_level: str = "INFO",
        meta: Optional[Dict[str, Any]] = None,
    ) -> "ScenarioContext":
        level_rank(log_level)
        return cls(
            scenario_id=scenario_id or str(uuid.uuid4()),
            created_at=datetime.now(timezone.utc),
            environment=environment if environment is not None else PathMap(),
            log_level=log_level.upper(),
            meta=dict(meta or {}),
        )

    # -----------------------------
    # Value store
    # -----------------------------
    def get(self, key: str) -> Any:
        """Retorna o valor armazenado ou None (ausência não é erro)."""
        return self._values.get(key)

    def put(self, key: str, value: Any) -> None:
        self._values[key] = value

    def has(self, key: str) -> bool:
        return key in self._values

    # -----------------------------
    # Logging & warnings
    # -----------------------------
    def log(self, *, source: str, level: str, message: str, **extra: Any) -> None:
        if level_rank(level) < level_rank(self.log_level):
            return
        event = {
            "scenario_id": self.scenario_id,
            "source": source,
            "level": level.upper(),
            "message": message,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }
        event.update(extra)
        self.events.append(event)

    def add_warning(self, *, source: str, message: str) -> None:
        if source not in self.warnings:
            self.warnings[source] = []
        self.warnings[source].append(message)
