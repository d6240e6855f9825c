"""
Binding de fixtures tabulares em estruturas tipadas.

Componentes:
    - fields → FieldConverter (coerção por tipo primitivo) e FieldPlan
    - table  → TableBinder (dict, multimap, lista de objetos, objeto único)
"""

from .fields import (
    FieldKind,
    FieldPlan,
    FieldSlot,
    Int8,
    Int16,
    Int32,
    Int64,
    UInt,
    UInt8,
    UInt16,
    UInt32,
    UInt64,
    convert,
    field_plan,
)
from .table import (
    Table,
    as_table,
    params_from_table,
    remove_header,
    table_column_to_list,
    table_to_map,
    table_to_multimap,
    table_to_struct,
    table_to_struct_list,
)

__all__ = [
    "FieldKind",
    "FieldPlan",
    "FieldSlot",
    "Int8",
    "Int16",
    "Int32",
    "Int64",
    "UInt",
    "UInt8",
    "UInt16",
    "UInt32",
    "UInt64",
    "convert",
    "field_plan",
    "Table",
    "as_table",
    "params_from_table",
    "remove_header",
    "table_column_to_list",
    "table_to_map",
    "table_to_multimap",
    "table_to_struct",
    "table_to_struct_list",
]
