# src/tagbind/core/values.py
"""
TagResolver — expansão de tags em strings de fixtures.

Este módulo converte strings literais de cenários em valores vivos,
expandindo tags entre colchetes.

Sentinelas (apenas quando a string inteira é a tag):
    - [TRUE]  → True
    - [FALSE] → False
    - [NULL]  → None
    - [EMPTY] → ""
    - [NOW]   → timestamp unix atual (int)
    - [UUID]  → UUID4 aleatório (str)

Tags com valor, processadas nesta ordem fixa:
    - [CONF:path]      → documento de ambiente (PathMap)
    - [CTXT:key]       → store do cenário
    - [SHA256:text]    → digest hexadecimal SHA-256 do texto
    - [BASE64:text]    → texto codificado em base64
    - [NUMBER:1234.5]  → float
    - [NOW:{duration}:{format}] → timestamp deslocado; `unix` (int) ou padrão strftime

Política de resolução (v1):
    - Cada tipo de tag é expandido antes do próximo ser procurado, então um
      valor vindo de CONF que contenha `[CTXT:...]` é expandido na mesma chamada
    - Quando a string inteira é uma única tag, o valor nativo é preservado
    - Caso contrário, o valor é convertido em texto e substituído
    - Sentinelas dentro de strings maiores viram texto (`a[TRUE]b` → `atrueb`)
      apenas no texto literal; valores vindos de CONF/CTXT nunca são relidos
      como sentinelas
    - Tags sem `]` de fechamento permanecem como texto literal
    - CONF/CTXT não resolvidos viram o texto `<nil>` e geram warning no contexto

Formato de [NOW]:
    O formato é um padrão strftime, não um layout de referência Go:
    `[NOW:+24h:%Y-%m-%d]` em vez de `[NOW:+24h:2006-01-02]`. Um formato sem
    diretivas `%` é devolvido literalmente e gera warning no contexto.

Limites explícitos:
    - Não é um template engine (sem loops, condicionais ou funções)
    - Não persiste nem cacheia valores resolvidos
"""

from __future__ import annotations

import base64
import hashlib
import re
import time
import uuid
from datetime import datetime, timedelta
from typing import Any, Callable, List, Optional, Tuple

from .context import ScenarioContext


NIL_TEXT = "<nil>"
WARNING_SOURCE = "values"

_SENTINELS: dict = {
    "[TRUE]": lambda: True,
    "[FALSE]": lambda: False,
    "[NULL]": lambda: None,
    "[EMPTY]": lambda: "",
    "[NOW]": lambda: int(time.time()),
    "[UUID]": lambda: str(uuid.uuid4()),
}

_UNRESOLVED = object()

_DURATION_PART = re.compile(r"(\d+(?:\.\d*)?|\.\d+)(ns|us|µs|ms|s|m|h)")
_DURATION_UNITS = {
    "ns": 1e-9,
    "us": 1e-6,
    "µs": 1e-6,
    "ms": 1e-3,
    "s": 1.0,
    "m": 60.0,
    "h": 3600.0,
}


# -----------------------------
# Textual form
# -----------------------------

def to_text(value: Any) -> str:
    """Converte um valor resolvido para sua forma textual canônica.

    - None → "<nil>"
    - bool → "true" / "false"
    - float integral → sem casas decimais ("1" em vez de "1.0")
    - listas → "[a b c]"
    """
    if value is None:
        return NIL_TEXT
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        if value != value:
            return "NaN"
        if value in (float("inf"), float("-inf")):
            return "+Inf" if value > 0 else "-Inf"
        if value.is_integer() and abs(value) < 1e21:
            return str(int(value))
        return repr(value)
    if isinstance(value, complex):
        return f"({to_text(value.real)}{'+' if value.imag >= 0 else ''}{to_text(value.imag)}i)"
    if isinstance(value, (list, tuple)):
        return "[" + " ".join(to_text(v) for v in value) + "]"
    return str(value)


# -----------------------------
# Valued tag handlers
# -----------------------------

def _conf(ctx: ScenarioContext, name: str) -> Any:
    value = ctx.environment.get(name)
    if value is None:
        ctx.add_warning(source=WARNING_SOURCE, message=f"unresolved CONF tag '{name}'")
    return value


def _ctxt(ctx: ScenarioContext, name: str) -> Any:
    value = ctx.get(name)
    if value is None:
        ctx.add_warning(source=WARNING_SOURCE, message=f"unresolved CTXT tag '{name}'")
    return value


def _sha256(ctx: ScenarioContext, text: str) -> Any:
    return hashlib.sha256(text.encode("utf-8")).hexdigest()


def _base64(ctx: ScenarioContext, text: str) -> Any:
    return base64.b64encode(text.encode("utf-8")).decode("ascii")


def _number(ctx: ScenarioContext, text: str) -> Any:
    try:
        return float(text)
    except ValueError:
        return _UNRESOLVED


def _now(ctx: ScenarioContext, text: str) -> Any:
    duration, sep, fmt = text.partition(":")
    if not sep:
        return _UNRESOLVED
    offset = parse_duration(duration)
    if offset is None:
        return _UNRESOLVED
    now = datetime.now().astimezone() + offset
    if fmt == "unix":
        return int(now.timestamp())
    if "%" not in fmt:
        ctx.add_warning(
            source=WARNING_SOURCE,
            message=f"NOW format '{fmt}' has no strftime directives",
        )
    return now.strftime(fmt)


_VALUED_TAGS: Tuple[Tuple[str, Callable[[ScenarioContext, str], Any]], ...] = (
    ("CONF", _conf),
    ("CTXT", _ctxt),
    ("SHA256", _sha256),
    ("BASE64", _base64),
    ("NUMBER", _number),
    ("NOW", _now),
)


def parse_duration(text: str) -> Optional[timedelta]:
    """Interpreta durações como `+24h`, `-1h30m` ou `300ms`; vazio significa zero."""
    if text == "":
        return timedelta(0)
    sign = 1
    body = text
    if body[0] in "+-":
        sign = -1 if body[0] == "-" else 1
        body = body[1:]
    if body == "0":
        return timedelta(0)
    seconds = 0.0
    pos = 0
    while pos < len(body):
        m = _DURATION_PART.match(body, pos)
        if m is None:
            return None
        seconds += float(m.group(1)) * _DURATION_UNITS[m.group(2)]
        pos = m.end()
    if pos == 0:
        return None
    return timedelta(seconds=sign * seconds)


# -----------------------------
# Scanning
# -----------------------------

def find_tags(s: str, kind: str) -> List[Tuple[str, str]]:
    """Lista as ocorrências `[KIND:conteúdo]` em ordem, sem repetir tokens.

    O conteúdo vai até o próximo `]`; uma abertura sem fechamento encerra a busca.
    """
    prefix = f"[{kind}:"
    found: List[Tuple[str, str]] = []
    seen = set()
    start = s.find(prefix)
    while start != -1:
        end = s.find("]", start + len(prefix))
        if end == -1:
            break
        token = s[start:end + 1]
        if token not in seen:
            seen.add(token)
            found.append((token, s[start + len(prefix):end]))
        start = s.find(prefix, end + 1)
    return found


def _replace_sentinels(s: str) -> str:
    for token, factory in _SENTINELS.items():
        if token in s:
            s = s.replace(token, to_text(factory()))
    return s


# -----------------------------
# Public API
# -----------------------------

def resolve(ctx: ScenarioContext, s: str) -> Any:
    """Resolve as tags de `s`.

    Retorna o valor nativo quando `s` é exatamente uma sentinela ou uma única
    tag cujo valor não é texto; nos demais casos retorna `str`.
    """
    if s in _SENTINELS:
        return _SENTINELS[s]()

    # sentinelas só são lidas no texto literal, nunca em valores de tags
    value: Any = _replace_sentinels(s)
    for kind, handler in _VALUED_TAGS:
        if not isinstance(value, str):
            return value
        for token, content in find_tags(value, kind):
            resolved = handler(ctx, content)
            if resolved is _UNRESOLVED:
                continue
            if value == token:
                value = resolved
                break
            value = value.replace(token, to_text(resolved))
    return value


def resolve_as_string(ctx: ScenarioContext, s: str) -> str:
    """Resolve `s` e devolve sempre a forma textual do resultado."""
    return to_text(resolve(ctx, s))


def resolve_as_int(ctx: ScenarioContext, s: str) -> int:
    """Resolve `s` como inteiro.

    Números resolvidos (float) são truncados; caso contrário o texto original
    é interpretado com `int()`, levantando ValueError quando inválido.
    """
    value = resolve(ctx, s)
    if isinstance(value, float):
        return int(value)
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    return int(s)
