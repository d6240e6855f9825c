# src/tagbind/__init__.py
"""
tagbind — resolução de valores e binding de fixtures para cenários BDD.

Este pacote raiz define o namespace público do tagbind: o motor que todo
step definition usa para transformar strings e tabelas de cenários em
valores nativos e objetos tipados.

Arquitetura em alto nível:
    - core.values   → expansão de tags em strings
    - core.pathmap  → navegação de documentos por dot-path
    - core.binding  → conversão de tabelas em dicts e objetos
    - core.context  → contexto por cenário
    - core.config   → settings e documento de ambiente
"""

from .core.binding import (
    Table,
    table_column_to_list,
    table_to_map,
    table_to_multimap,
    table_to_struct,
    table_to_struct_list,
)
from .core.context import ScenarioContext
from .core.pathmap import PathMap
from .core.values import resolve, resolve_as_int, resolve_as_string

__all__ = [
    "PathMap",
    "ScenarioContext",
    "Table",
    "resolve",
    "resolve_as_int",
    "resolve_as_string",
    "table_column_to_list",
    "table_to_map",
    "table_to_multimap",
    "table_to_struct",
    "table_to_struct_list",
]
