from types import MappingProxyType

import pytest

from json_schema_validator import SchemaError, SchemaNotFoundError, SchemaStore
from json_schema_validator.schema.node import MISSING, SchemaNode


def test_load_from_file(test_schema_path):
    store = SchemaStore.from_file(test_schema_path)

    assert store.root.type == "object"
    assert store.name == str(test_schema_path)
    assert isinstance(store.root.properties["stringProp"], SchemaNode)


def test_schema_not_found_is_raised_before_parsing(tmp_path):
    with pytest.raises(SchemaNotFoundError):
        SchemaStore.from_file(tmp_path / "asdf")


def test_directory_is_not_a_schema_file(tmp_path):
    with pytest.raises(SchemaNotFoundError):
        SchemaStore.from_file(tmp_path)


def test_malformed_schema_file(mock_dir):
    with pytest.raises(SchemaError) as exc_info:
        SchemaStore.from_file(mock_dir / "invalid-schema.json")
    assert exc_info.value.kind == "malformed"


@pytest.mark.parametrize("text", ["", "   \n", "{not json", "[1, 2"])
def test_empty_or_invalid_text(text):
    with pytest.raises(SchemaError) as exc_info:
        SchemaStore.load(text)
    assert exc_info.value.kind == "malformed"


def test_root_must_be_an_object():
    with pytest.raises(SchemaError):
        SchemaStore.load("[]")


def test_bytes_source_is_decoded():
    store = SchemaStore.load(b'{"type": "string"}')
    assert store.root.type == "string"


def test_yaml_schema_file(mock_dir):
    store = SchemaStore.from_file(mock_dir / "car.yaml")

    assert store.root.type == "object"
    assert store.root.properties["year"].minimum == 1886


def test_defects_are_not_checked_at_load_time():
    # divisibleBy 0, a non-array enum and a bogus type name all load fine
    store = SchemaStore.load(
        '{"properties": {"a": {"divisibleBy": 0}, "b": {"enum": 5}, "c": {"type": "bogus"}}}'
    )
    assert store.root.properties["a"].divisible_by == 0
    assert store.root.properties["b"].enum == 5
    assert store.root.properties["c"].type == "bogus"


def test_schema_tree_is_read_only():
    store = SchemaStore.load('{"enum": [[1, 2], {"a": 1}], "properties": {"a": {"type": "string"}}}')

    assert store.root.enum == ((1, 2), MappingProxyType({"a": 1}))
    with pytest.raises(TypeError):
        store.root.properties["b"] = SchemaNode()
    with pytest.raises(TypeError):
        store.raw["type"] = "string"
    with pytest.raises(AttributeError):
        store.root.type = "string"


def test_node_keeps_malformed_children_verbatim():
    node = SchemaNode.from_raw({"items": [{"type": "string"}, 7], "extra": [1]})

    assert isinstance(node.items[0], SchemaNode)
    assert node.items[1] == 7
    assert node.extras["extra"] == (1,)
    assert node.format is MISSING
    assert list(node.declared_keywords()) == ["items"]


def test_undecodable_bytes_are_malformed():
    with pytest.raises(SchemaError) as exc_info:
        SchemaStore.load(b'{"type": "\xff"}')
    assert exc_info.value.kind == "malformed"


def test_undecodable_schema_file_is_malformed(tmp_path):
    path = tmp_path / "schema.json"
    path.write_bytes(b'{"type": "\xff"}')

    with pytest.raises(SchemaError) as exc_info:
        SchemaStore.from_file(path)
    assert exc_info.value.kind == "malformed"
