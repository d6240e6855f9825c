# src/tagbind/core/pathmap.py
"""
PathMap — visão somente-leitura de documentos JSON-like por dot-path.

Este módulo define o `PathMap`, a estrutura usada pelo tagbind para navegar
documentos já parseados (configuração de ambiente, respostas JSON, etc.)
através de caminhos com notação de ponto, como `a.b.0.c`.

Política de retorno (v1):
    - string       → str
    - null         → None
    - true/false   → bool
    - número       → float (sem distinção int/float)
    - array        → list (sequência crua, cópia)
    - objeto       → str (texto JSON compacto)
    - caminho ausente → None

Princípios fundamentais:
    - Ausência é representada como `None`, nunca como exceção
    - O documento de origem nunca é mutado
    - A mesma consulta sempre produz o mesmo resultado

Limites explícitos:
    - Não suporta queries, wildcards ou modificadores de caminho
    - Não valida schema do documento
"""

from __future__ import annotations

import json
from copy import deepcopy
from typing import Any, List, Mapping, Union


_MISSING = object()


def split_path(path: str) -> List[str]:
    """Divide um dot-path em segmentos, respeitando pontos escapados (`\\.`)."""
    segments: List[str] = []
    current: List[str] = []
    escaped = False
    for ch in path:
        if escaped:
            current.append(ch)
            escaped = False
        elif ch == "\\":
            escaped = True
        elif ch == ".":
            segments.append("".join(current))
            current = []
        else:
            current.append(ch)
    segments.append("".join(current))
    return segments


class PathMap:
    """
    Visão dot-path, somente-leitura, sobre um documento JSON-like.

    Decisões arquiteturais:
        - O documento é copiado na construção a partir de mapeamentos externos
        - Segmentos numéricos indexam listas; índices fora do range resultam em None
        - Objetos são devolvidos como texto JSON, listas como cópias

    Invariantes:
        - `get` nunca levanta exceção por chave ou índice ausente
        - Nenhuma chamada a `get` altera o documento

    Limites explícitos:
        - Não carrega arquivos (responsabilidade de `core.config`)
        - Não realiza coerção além de número → float
    """

    __slots__ = ("_document",)

    def __init__(self, document: Any = None) -> None:
        self._document = document

    @classmethod
    def from_json(cls, raw: Union[str, bytes]) -> "PathMap":
        """Cria um PathMap a partir de texto JSON.

        Texto vazio, inválido ou não-JSON resulta num mapa vazio (toda
        consulta devolve None), nunca em exceção.
        """
        try:
            if isinstance(raw, bytes):
                raw = raw.decode("utf-8")
            if not raw.strip():
                return cls(None)
            return cls(json.loads(raw))
        except ValueError:
            return cls(None)

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Any]) -> "PathMap":
        """Cria um PathMap a partir de um mapeamento (ex.: YAML carregado).

        Chaves não-string (ex.: inteiros em YAML) são normalizadas para texto,
        como aconteceria numa serialização JSON do mesmo documento.
        """
        return cls(_normalize_keys(mapping))

    def get(self, path: str) -> Any:
        if not path:
            return None
        node = self._document
        for segment in split_path(path):
            node = _descend(node, segment)
            if node is _MISSING:
                return None
        return _export(node)

    def __repr__(self) -> str:
        return f"PathMap({self._document!r})"


def _descend(node: Any, segment: str) -> Any:
    if isinstance(node, Mapping):
        return node.get(segment, _MISSING)
    if isinstance(node, list):
        if not (segment.isascii() and segment.isdigit()):
            return _MISSING
        index = int(segment)
        if index >= len(node):
            return _MISSING
        return node[index]
    return _MISSING


def _normalize_keys(node: Any) -> Any:
    if isinstance(node, Mapping):
        return {_key_text(k): _normalize_keys(v) for k, v in node.items()}
    if isinstance(node, (list, tuple)):
        return [_normalize_keys(v) for v in node]
    return deepcopy(node)


def _key_text(key: Any) -> str:
    if isinstance(key, bool):
        return "true" if key else "false"
    return str(key)


def _export(node: Any) -> Any:
    if node is None or isinstance(node, (bool, str)):
        return node
    if isinstance(node, (int, float)):
        return float(node)
    if isinstance(node, list):
        return deepcopy(node)
    if isinstance(node, Mapping):
        return json.dumps(node, separators=(",", ":"), ensure_ascii=False, default=str)
    # YAML pode materializar datas e outros escalares; expõe o texto
    return str(node)
