# src/tagbind/core/binding/table.py
"""
TableBinder — conversão de fixtures tabulares em estruturas tipadas.

Este módulo converte tabelas de cenários (linhas de células texto) em:
    - dict (tabela de 2 colunas: chave / valor resolvido)
    - multimap (tabela de 2 colunas, chaves repetidas acumulam valores)
    - lista de objetos (primeira linha é cabeçalho com nomes de campos)
    - objeto único (cada linha é um par nome-do-campo / valor)

Cada célula de valor passa pelo TagResolver antes da conversão; a atribuição
tipada é delegada ao FieldConverter (`binding.fields`).

Invariantes:
    - Toda operação é total: em caso de erro nada é entregue ao chamador e
      alvos fornecidos pelo chamador permanecem intactos
    - A ordem das linhas é preservada
    - Erros de campo carregam nome do campo e tipo do alvo

Limites explícitos:
    - Não integra com o runner BDD (recebe apenas linhas de texto)
    - Não converte células em arrays literais; use tags CONF/CTXT para listas
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Sequence, Tuple, Type, TypeVar, Union

from ..context import ScenarioContext
from ..exceptions import TableShapeError
from ..values import resolve, resolve_as_string
from .fields import field_plan


LOG_SOURCE = "binding"

T = TypeVar("T")


@dataclass(frozen=True)
class Table:
    """Fixture tabular imutável: linhas ordenadas de células texto."""

    rows: Tuple[Tuple[str, ...], ...] = ()

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[str]]) -> "Table":
        return cls(rows=tuple(tuple(str(cell) for cell in row) for row in rows))

    def __len__(self) -> int:
        return len(self.rows)

    @property
    def header(self) -> Tuple[str, ...]:
        if not self.rows:
            raise TableShapeError(message="table has no header row", details={"rows": 0})
        return self.rows[0]


TableLike = Union[Table, Sequence[Sequence[str]]]


def as_table(table: TableLike) -> Table:
    if isinstance(table, Table):
        return table
    return Table.from_rows(table)


def _require_width(row: Sequence[str], width: int, index: int) -> None:
    if len(row) != width:
        raise TableShapeError(
            message=f"table must have {width} columns",
            details={"row": index, "cells": len(row), "expected": width},
        )


# -----------------------------
# Header handling
# -----------------------------

def remove_header(table: TableLike) -> Table:
    """Remove a linha de cabeçalho; exige cabeçalho e ao menos uma linha útil."""
    t = as_table(table)
    if len(t) < 2:
        raise TableShapeError(
            message="table must have at least one header and one useful row",
            details={"rows": len(t)},
        )
    return Table(rows=t.rows[1:])


def params_from_table(
    ctx: ScenarioContext,
    table: TableLike,
    convert: Callable[[ScenarioContext, Table], T],
) -> T:
    """Remove o cabeçalho de `table` e aplica `convert` sobre as linhas restantes."""
    try:
        body = remove_header(table)
    except TableShapeError as e:
        raise TableShapeError(
            message=f"failed removing headers from table: {e.message}",
            details=dict(e.details),
        ) from e
    return convert(ctx, body)


# -----------------------------
# Maps
# -----------------------------

def table_to_map(ctx: ScenarioContext, table: TableLike) -> Dict[str, Any]:
    """Converte uma tabela de 2 colunas em dict, resolvendo as tags de cada valor."""
    t = as_table(table)
    result: Dict[str, Any] = {}
    for index, row in enumerate(t.rows):
        _require_width(row, 2, index)
        key, value = row
        result[key] = resolve(ctx, value)
    return result


def table_to_multimap(ctx: ScenarioContext, table: TableLike) -> Dict[str, List[str]]:
    """Converte uma tabela de 2 colunas em multimap (ex.: headers HTTP repetidos).

    Chaves e valores são resolvidos como texto; valores de chaves repetidas
    são acumulados na ordem das linhas.
    """
    t = as_table(table)
    result: Dict[str, List[str]] = {}
    for index, row in enumerate(t.rows):
        _require_width(row, 2, index)
        key = resolve_as_string(ctx, row[0])
        value = resolve_as_string(ctx, row[1])
        result.setdefault(key, []).append(value)
    return result


def table_column_to_list(ctx: ScenarioContext, table: TableLike) -> List[str]:
    """Converte uma tabela de 1 coluna (com cabeçalho) em lista de células."""
    body = remove_header(table)
    values: List[str] = []
    for index, row in enumerate(body.rows):
        if len(row) > 1:
            raise TableShapeError(
                message="table must have 1 unique column",
                details={"row": index + 1, "cells": len(row)},
            )
        values.append(row[0] if row else "")
    return values


# -----------------------------
# Objects
# -----------------------------

def table_to_struct_list(
    ctx: ScenarioContext,
    table: TableLike,
    target: List[Any],
    item_type: Type[Any],
) -> None:
    """
    Converte uma tabela com cabeçalho em instâncias de `item_type`, anexadas a `target`.

    Cada coluna do cabeçalho nomeia um campo (case-insensitive). As
    instâncias só são anexadas depois que todas as linhas forem convertidas.

    Exemplo:
        | Name      | Value |
        | example 1 | 1     |
        | example 2 | 10    |

    equivale a `[Item(name="example 1", value=1), Item(name="example 2", value=10)]`.

    Raises:
        TableShapeError: tabela vazia ou linha com número de células diferente do cabeçalho.
        FieldLookupError / FieldNotSettableError / ParseError: falha em algum campo.
    """
    t = as_table(table)
    if len(t) == 0:
        raise TableShapeError(
            message="table requires at least 1 row with the header",
            details={"rows": 0},
        )
    if len(t) == 1:
        return

    plan = field_plan(item_type)
    header = t.header
    items: List[Any] = []
    for index, row in enumerate(t.rows[1:], start=1):
        _require_width(row, len(header), index)
        assignments = [
            plan.convert(name, resolve(ctx, cell)) for name, cell in zip(header, row)
        ]
        item = plan.new_instance()
        for slot, value in assignments:
            setattr(item, slot.name, value)
        items.append(item)

    target.extend(items)
    ctx.log(
        source=LOG_SOURCE,
        level="DEBUG",
        message="table bound to struct list",
        target_type=plan.type_name,
        rows=len(items),
    )


def table_to_struct(ctx: ScenarioContext, table: TableLike, target: Any) -> None:
    """
    Converte uma tabela sem cabeçalho de pares (campo, valor) no objeto `target`.

    Exemplo:
        | Name  | example 1 |
        | Value | 1         |

    Todos os valores são convertidos antes da primeira atribuição.
    """
    t = as_table(table)
    if len(t) == 0:
        return

    plan = field_plan(type(target))
    assignments = []
    for index, row in enumerate(t.rows):
        _require_width(row, 2, index)
        name, cell = row
        assignments.append(plan.convert(name, resolve(ctx, cell)))

    for slot, value in assignments:
        setattr(target, slot.name, value)
    ctx.log(
        source=LOG_SOURCE,
        level="DEBUG",
        message="table bound to struct",
        target_type=plan.type_name,
        rows=len(assignments),
    )
