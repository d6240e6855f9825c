"""
tagbind — Canonical Exceptions (v1)

Este módulo define as exceções tipadas da camada de binding do tagbind.

Objetivo:
- Permitir que o TableBinder e o FieldConverter levantem exceções semânticas tipadas
- Carregar contexto estruturado (campo, tipo destino, valor bruto) em `details`
- Evitar ValueError/TypeError genéricos na conversão de fixtures

Regras:
- O TagResolver não levanta estas exceções (tags não resolvidas degradam para texto).
- Exceções devem carregar apenas dados estruturados (serializáveis).
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class BindingException(Exception):
    """Base class para exceções de binding do tagbind.

    Importante:
    - Sempre carregar dados estruturados em `details`
    - Mensagem deve ser curta e humana
    """

    message: str
    details: Dict[str, Any] = field(default_factory=dict)
    hint: Optional[str] = None

    def __str__(self) -> str:  # pragma: no cover
        return self.message

    def with_context(self, *, field_name: str, target_type: str) -> "BindingException":
        """Retorna uma cópia do erro com o nome do campo e o tipo destino no contexto."""
        details = dict(self.details)
        details.setdefault("field", field_name)
        details["target_type"] = target_type
        return replace(
            self,
            message=(
                f"failed setting element '{field_name}' in struct of type "
                f"'{target_type}': {self.message}"
            ),
            details=details,
        )


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class TableShapeError(BindingException):
    """Tabela com número de linhas ou colunas incompatível com a conversão pedida."""


# ---------------------------------------------------------------------------
# Campos do alvo
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class FieldLookupError(BindingException):
    """Cabeçalho/chave não corresponde a nenhum campo público do alvo."""


@dataclass(frozen=True)
class FieldNotSettableError(BindingException):
    """Campo encontrado, mas privado, ClassVar ou pertencente a um alvo imutável."""


@dataclass(frozen=True)
class ParseError(BindingException):
    """Texto não pôde ser convertido para o tipo primitivo do campo destino."""
