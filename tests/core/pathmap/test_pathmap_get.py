# tests/core/pathmap/test_pathmap_get.py
"""
Testes do PathMap (consulta por dot-path sobre documentos JSON-like).

Os testes asseguram que:
- escalares são devolvidos com o tipo nativo (números sempre como float)
- arrays são devolvidos como listas e objetos como texto JSON compacto
- caminhos ausentes resultam em None, nunca em exceção
- o documento de origem não é mutado por consultas
"""

import pytest

from tagbind.core.pathmap import PathMap, split_path


@pytest.fixture
def document_map() -> PathMap:
    return PathMap.from_mapping({"a": {"b": 1}, "c": [1, 2, 3]})


@pytest.mark.parametrize(
    "path, expected",
    [
        ("a.b", 1.0),
        ("c.1", 2.0),
        ("c", [1, 2, 3]),
        ("a", '{"b":1}'),
        ("a.x", None),
        ("c.9", None),
        ("c.x", None),
        ("a.b.c", None),
        ("", None),
    ],
)
def test_get_by_path(document_map, path, expected):
    assert document_map.get(path) == expected


def test_numbers_are_floats(document_map):
    assert isinstance(document_map.get("a.b"), float)
    assert isinstance(document_map.get("c.0"), float)


def test_scalar_types_are_preserved():
    m = PathMap.from_mapping({"flag": True, "off": False, "name": "minio", "nothing": None})
    assert m.get("flag") is True
    assert m.get("off") is False
    assert m.get("name") == "minio"
    assert m.get("nothing") is None


def test_from_json_parses_raw_text():
    m = PathMap.from_json('{"user": {"name": "john", "roles": ["admin", "dev"]}}')
    assert m.get("user.name") == "john"
    assert m.get("user.roles.1") == "dev"
    assert m.get("user.roles") == ["admin", "dev"]


def test_from_json_accepts_bytes_and_blank_input():
    assert PathMap.from_json(b'{"a": 1}').get("a") == 1.0
    assert PathMap.from_json("   ").get("a") is None


def test_empty_map_resolves_nothing():
    assert PathMap().get("any.path") is None


def test_escaped_dot_matches_literal_key():
    m = PathMap.from_mapping({"host.name": "localhost", "host": {"name": "other"}})
    assert m.get("host\\.name") == "localhost"
    assert m.get("host.name") == "other"


def test_non_string_keys_are_normalized():
    m = PathMap.from_mapping({"codes": {200: "ok", 404: "not found"}})
    assert m.get("codes.200") == "ok"
    assert m.get("codes") == '{"200":"ok","404":"not found"}'


def test_returned_lists_do_not_alias_the_document(document_map):
    first = document_map.get("c")
    first.append(4)
    assert document_map.get("c") == [1, 2, 3]


def test_from_mapping_copies_the_source():
    source = {"redis": {"host": "localhost"}}
    m = PathMap.from_mapping(source)
    source["redis"]["host"] = "changed"
    assert m.get("redis.host") == "localhost"


def test_split_path():
    assert split_path("a.b.0") == ["a", "b", "0"]
    assert split_path("a\\.b.c") == ["a.b", "c"]
    assert split_path("single") == ["single"]


@pytest.mark.parametrize(
    "raw",
    [
        '{"name":{"first":"John"},"age":47,"commiter":true,}',
        "<html>oops</html>",
        b"\xff\xfe not utf-8",
    ],
)
def test_from_json_with_invalid_document_resolves_nothing(raw):
    m = PathMap.from_json(raw)
    assert m.get("name.first") is None
    assert m.get("age") is None


def test_non_ascii_digit_segment_is_missing(document_map):
    assert document_map.get("c.²") is None
    assert document_map.get("c.١") is None
