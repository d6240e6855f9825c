# src/tagbind/core/binding/fields.py
"""
FieldConverter — coerção de texto para o tipo primitivo de um campo.

Este módulo define as estratégias de conversão usadas pelo TableBinder para
atribuir valores resolvidos a campos de objetos alvo (dataclasses ou classes
com anotações de tipo).

Tipos suportados (v1):
    - bool                       → 1,t,T,TRUE,true,True,0,f,F,FALSE,false,False
    - int / Int8..Int64          → base 10, com checagem de faixa
    - UInt / UInt8..UInt64       → base 10 sem sinal, com checagem de faixa
    - float                      → notação decimal/científica, inf/nan
    - complex                    → `1+2i`, `(1+2i)`, `2i`, `3` (sufixo `j` também aceito)
    - str                        → forma textual sem escape
    - list / List[...]           → a partir de um array JSON
    - Optional[X]                → None atribuído diretamente, senão X
    - Any / sem anotação         → valor resolvido atribuído como está

Faixas inteiras:
    - `int` é limitado à faixa de 64 bits com sinal
    - Int8..Int64 e UInt..UInt64 verificam a faixa da largura declarada;
      valores fora dela levantam ParseError em vez de serem truncados
      (ex.: `200` num campo Int8 falha, não vira `-56`)

Política de listas (v1):
    - O tipo dos elementos é inferido do primeiro elemento do array de origem
      (booleano → bool, número → int, texto/null/objeto → str), e não do tipo
      declarado no campo
    - Todos os elementos devem pertencer à mesma família; caso contrário
      ParseError é levantado

Decisões arquiteturais:
    - Um `FieldPlan` é construído por classe a partir das anotações, mapeando
      nomes em minúsculas para slots tipados; o binding não inspeciona a classe
      novamente a cada célula
    - Cada conversor levanta ParseError com o tipo destino e o texto bruto

Limites explícitos:
    - Não converte objetos aninhados nem dicts
    - Não valida schema além da coerção primitiva
"""

from __future__ import annotations

import dataclasses
import json
import re
import sys
from dataclasses import dataclass
from enum import Enum
from functools import lru_cache
from typing import (
    Any,
    Callable,
    ClassVar,
    Dict,
    NewType,
    Optional,
    Tuple,
    Union,
    get_args,
    get_origin,
    get_type_hints,
)

from ..exceptions import FieldLookupError, FieldNotSettableError, ParseError
from ..values import to_text

if sys.version_info >= (3, 10):
    from types import UnionType
else:  # pragma: no cover
    UnionType = None


Int8 = NewType("Int8", int)
Int16 = NewType("Int16", int)
Int32 = NewType("Int32", int)
Int64 = NewType("Int64", int)
UInt = NewType("UInt", int)
UInt8 = NewType("UInt8", int)
UInt16 = NewType("UInt16", int)
UInt32 = NewType("UInt32", int)
UInt64 = NewType("UInt64", int)

_INT_BOUNDS: Dict[Any, Tuple[int, int]] = {
    int: (-(2 ** 63), 2 ** 63 - 1),
    Int8: (-(2 ** 7), 2 ** 7 - 1),
    Int16: (-(2 ** 15), 2 ** 15 - 1),
    Int32: (-(2 ** 31), 2 ** 31 - 1),
    Int64: (-(2 ** 63), 2 ** 63 - 1),
}
_UINT_BOUNDS: Dict[Any, Tuple[int, int]] = {
    UInt: (0, 2 ** 64 - 1),
    UInt8: (0, 2 ** 8 - 1),
    UInt16: (0, 2 ** 16 - 1),
    UInt32: (0, 2 ** 32 - 1),
    UInt64: (0, 2 ** 64 - 1),
}

_TRUE_TEXT = frozenset({"1", "t", "T", "TRUE", "true", "True"})
_FALSE_TEXT = frozenset({"0", "f", "F", "FALSE", "false", "False"})

_SIGNED = re.compile(r"[+-]?[0-9]+")
_UNSIGNED = re.compile(r"[0-9]+")


class FieldKind(str, Enum):
    """Família primitiva de um campo alvo."""

    BOOL = "bool"
    INT = "int"
    UINT = "uint"
    FLOAT = "float"
    COMPLEX = "complex"
    STRING = "string"
    LIST = "list"
    ANY = "any"


@dataclass(frozen=True)
class FieldSlot:
    """Slot tipado de um campo: nome real, família, opcionalidade e faixa."""

    name: str
    kind: Optional[FieldKind]
    type_name: str
    optional: bool = False
    settable: bool = True
    bounds: Optional[Tuple[int, int]] = None

    def zero_value(self) -> Any:
        if self.optional or self.kind is None:
            return None
        return _ZERO_VALUES[self.kind]()


_ZERO_VALUES: Dict[FieldKind, Callable[[], Any]] = {
    FieldKind.BOOL: lambda: False,
    FieldKind.INT: lambda: 0,
    FieldKind.UINT: lambda: 0,
    FieldKind.FLOAT: lambda: 0.0,
    FieldKind.COMPLEX: lambda: 0j,
    FieldKind.STRING: lambda: "",
    FieldKind.LIST: list,
    FieldKind.ANY: lambda: None,
}


# -----------------------------
# Conversion strategies
# -----------------------------

def _parse_error(slot: FieldSlot, what: str, text: str) -> ParseError:
    return ParseError(
        message=f"failed parsing to {what} '{text}' with destination '{slot.type_name}'",
        details={"field": slot.name, "kind": slot.kind.value if slot.kind else None, "value": text},
    )


def _check_bounds(slot: FieldSlot, number: int, text: str) -> int:
    if slot.bounds is not None:
        low, high = slot.bounds
        if number < low or number > high:
            raise ParseError(
                message=(
                    f"value '{text}' out of range [{low}, {high}] "
                    f"for destination '{slot.type_name}'"
                ),
                details={"field": slot.name, "kind": slot.kind.value, "value": text},
            )
    return number


def _bool_type(slot: FieldSlot, text: str, value: Any) -> Any:
    if text in _TRUE_TEXT:
        return True
    if text in _FALSE_TEXT:
        return False
    raise _parse_error(slot, "boolean", text)


def _int_type(slot: FieldSlot, text: str, value: Any) -> Any:
    if not _SIGNED.fullmatch(text):
        raise _parse_error(slot, "integer", text)
    return _check_bounds(slot, int(text), text)


def _uint_type(slot: FieldSlot, text: str, value: Any) -> Any:
    if not _UNSIGNED.fullmatch(text):
        raise _parse_error(slot, "unsigned integer", text)
    return _check_bounds(slot, int(text), text)


def _float_type(slot: FieldSlot, text: str, value: Any) -> Any:
    if not text or text != text.strip() or "_" in text:
        raise _parse_error(slot, "float", text)
    try:
        if "0x" in text.lower():
            number = float.fromhex(text)
        else:
            number = float(text)
    except ValueError:
        raise _parse_error(slot, "float", text) from None
    if number in (float("inf"), float("-inf")) and "inf" not in text.lower():
        raise _parse_error(slot, "float", text)
    return number


def _complex_type(slot: FieldSlot, text: str, value: Any) -> Any:
    body = text
    if body.startswith("(") and body.endswith(")"):
        body = body[1:-1]
    if not body or body != body.strip() or "_" in body or body in ("i", "j"):
        raise _parse_error(slot, "complex", text)
    if body.endswith("i"):
        body = body[:-1] + "j"
    try:
        return complex(body)
    except ValueError:
        raise _parse_error(slot, "complex", text) from None


def _string_type(slot: FieldSlot, text: str, value: Any) -> Any:
    return text


def _element_family(element: Any) -> str:
    if isinstance(element, bool):
        return "bool"
    if isinstance(element, (int, float)):
        return "number"
    return "string"


def _element_value(family: str, element: Any) -> Any:
    if family == "bool":
        return element
    if family == "number":
        return int(element)
    if element is None:
        return ""
    if isinstance(element, (dict, list)):
        return json.dumps(element, separators=(",", ":"), ensure_ascii=False)
    return str(element)


def _list_type(slot: FieldSlot, text: str, value: Any) -> Any:
    if not isinstance(value, (list, tuple)):
        raise ParseError(
            message=f"failed parsing destination '{text}', not a JSON array",
            details={"field": slot.name, "kind": FieldKind.LIST.value, "value": text},
        )
    if not value:
        return []
    family = _element_family(value[0])
    converted = []
    for index, element in enumerate(value):
        element_family = _element_family(element)
        if element_family != family:
            raise ParseError(
                message=(
                    f"element {index} of JSON array is a {element_family} "
                    f"but the list element type is {family}"
                ),
                details={"field": slot.name, "kind": FieldKind.LIST.value, "index": index},
            )
        converted.append(_element_value(family, element))
    return converted


STRATEGIES: Dict[FieldKind, Callable[[FieldSlot, str, Any], Any]] = {
    FieldKind.BOOL: _bool_type,
    FieldKind.INT: _int_type,
    FieldKind.UINT: _uint_type,
    FieldKind.FLOAT: _float_type,
    FieldKind.COMPLEX: _complex_type,
    FieldKind.STRING: _string_type,
    FieldKind.LIST: _list_type,
}


def convert(slot: FieldSlot, value: Any) -> Any:
    """Converte o valor resolvido `value` para o tipo do slot."""
    if slot.kind is FieldKind.ANY:
        return value
    if slot.optional and value is None:
        return None
    text = to_text(value)
    strategy = STRATEGIES.get(slot.kind) if slot.kind is not None else None
    if strategy is None:
        raise ParseError(
            message=f"unsupported destination type '{slot.type_name}' for value '{text}'",
            details={"field": slot.name, "value": text},
        )
    return strategy(slot, text, value)


# -----------------------------
# Field plans
# -----------------------------

def _type_name(hint: Any) -> str:
    if isinstance(hint, type) or hasattr(hint, "__supertype__"):
        return hint.__name__
    return str(hint).replace("typing.", "")


def _is_union(origin: Any) -> bool:
    return origin is Union or (UnionType is not None and origin is UnionType)


def _classify(hint: Any) -> Tuple[Optional[FieldKind], bool, Optional[Tuple[int, int]]]:
    """Retorna (kind, optional, bounds) para uma anotação."""
    if hint is Any:
        return FieldKind.ANY, False, None

    origin = get_origin(hint)
    if _is_union(origin):
        args = [a for a in get_args(hint) if a is not type(None)]
        if len(args) == 1 and len(get_args(hint)) == 2:
            kind, _, bounds = _classify(args[0])
            return kind, True, bounds
        return None, False, None

    if hint in _UINT_BOUNDS:
        return FieldKind.UINT, False, _UINT_BOUNDS[hint]
    if hint in _INT_BOUNDS:
        return FieldKind.INT, False, _INT_BOUNDS[hint]
    if hint is bool:
        return FieldKind.BOOL, False, None
    if hint is float:
        return FieldKind.FLOAT, False, None
    if hint is complex:
        return FieldKind.COMPLEX, False, None
    if hint is str:
        return FieldKind.STRING, False, None
    if hint is list or origin is list:
        return FieldKind.LIST, False, None
    return None, False, None


@dataclass(frozen=True)
class FieldPlan:
    """
    Mapa de campos de uma classe alvo, indexado por nome em minúsculas.

    Invariantes:
        - O casamento de nomes é por nome inteiro, case-insensitive
        - Em nomes ambíguos (ex.: `name` e `Name`) vence o primeiro declarado
        - Campos privados (prefixo `_`), ClassVar e campos de dataclasses
          congeladas existem no plano, mas não são atribuíveis
    """

    target_type: type
    slots: Dict[str, FieldSlot]

    @property
    def type_name(self) -> str:
        return self.target_type.__name__

    def slot_named(self, name: str) -> Optional[FieldSlot]:
        for slot in self.slots.values():
            if slot.name == name:
                return slot
        return None

    def lookup(self, name: str) -> FieldSlot:
        slot = self.slots.get(name.lower())
        if slot is None:
            raise FieldLookupError(
                message=f"field '{name}' is not valid",
                details={"field": name, "target_type": self.type_name},
            )
        if not slot.settable:
            raise FieldNotSettableError(
                message=f"field '{name}' cannot be set",
                details={"field": name, "target_type": self.type_name},
            )
        return slot

    def convert(self, name: str, value: Any) -> Tuple[FieldSlot, Any]:
        """Localiza o campo `name` e converte `value`, anexando contexto a erros."""
        try:
            slot = self.lookup(name)
            return slot, convert(slot, value)
        except (FieldLookupError, FieldNotSettableError, ParseError) as e:
            raise e.with_context(field_name=name, target_type=self.type_name) from e

    def new_instance(self) -> Any:
        """Cria uma instância com valores zero para campos sem default."""
        cls = self.target_type
        if not dataclasses.is_dataclass(cls):
            return cls()
        kwargs: Dict[str, Any] = {}
        for f in dataclasses.fields(cls):
            if not f.init:
                continue
            if f.default is dataclasses.MISSING and f.default_factory is dataclasses.MISSING:
                slot = self.slot_named(f.name)
                kwargs[f.name] = slot.zero_value() if slot is not None else None
        return cls(**kwargs)


@lru_cache(maxsize=None)
def field_plan(target_type: type) -> FieldPlan:
    """Constrói (uma vez por classe) o plano de campos de `target_type`."""
    if not isinstance(target_type, type):
        raise TypeError(f"target type must be a class, got {target_type!r}")
    hints = get_type_hints(target_type)
    frozen = dataclasses.is_dataclass(target_type) and target_type.__dataclass_params__.frozen

    slots: Dict[str, FieldSlot] = {}
    for name, hint in hints.items():
        key = name.lower()
        if key in slots:
            continue
        class_var = get_origin(hint) is ClassVar or hint is ClassVar
        kind, optional, bounds = _classify(hint)
        slots[key] = FieldSlot(
            name=name,
            kind=kind,
            type_name=_type_name(hint),
            optional=optional,
            settable=not (frozen or class_var or name.startswith("_")),
            bounds=bounds,
        )
    return FieldPlan(target_type=target_type, slots=slots)
