import threading

import pytest

from json_schema_validator import SchemaError, SchemaNode, ValidationEngine, ValidationError
from json_schema_validator.engine import JsonType, OutcomeKind


# ---- type dispatch -----------------------------------------------------------


def test_union_accepts_any_listed_type(make_engine):
    engine = make_engine({"type": ["string", "number"]})

    engine.validate("asdf")
    engine.validate(1234)
    engine.validate(12.5)
    with pytest.raises(ValidationError, match=r"Expected one of \[string, number\]"):
        engine.validate(None)


def test_union_with_inline_schema_option(make_engine):
    engine = make_engine({"type": ["null", {"type": "string", "maxLength": 2}]})

    engine.validate(None)
    engine.validate("ab")
    with pytest.raises(ValidationError):
        engine.validate("abc")


def test_missing_type_still_applies_structural_keywords(make_engine):
    engine = make_engine({"properties": {"a": {"type": "integer", "required": True}}})

    engine.validate({"a": 1})
    with pytest.raises(ValidationError) as exc_info:
        engine.validate({})
    assert exc_info.value.path == "root.a"
    # non-objects are not subject to object keywords
    engine.validate("not an object")


def test_unknown_type_name_is_a_schema_error(make_engine):
    engine = make_engine({"type": "bogus"})

    with pytest.raises(SchemaError) as exc_info:
        engine.validate(1)
    assert exc_info.value.kind == "type"


def test_any_type(make_engine):
    engine = make_engine({"type": "any"})
    for value in (None, True, 1, 1.5, "a", [], {}):
        engine.validate(value)


def test_integer_accepts_integral_float(make_engine):
    engine = make_engine({"type": "integer"})

    engine.validate(3)
    engine.validate(3.0)
    with pytest.raises(ValidationError):
        engine.validate(3.5)
    with pytest.raises(ValidationError):
        engine.validate(True)


def test_number_rejects_booleans(make_engine):
    engine = make_engine({"type": "number"})

    with pytest.raises(ValidationError):
        engine.validate(False)


def test_unsupported_python_value(make_engine):
    engine = make_engine({})

    with pytest.raises(ValidationError) as exc_info:
        engine.validate(object())
    assert exc_info.value.kind == "type"


# ---- disallow ----------------------------------------------------------------


def test_disallow_single_name(make_engine):
    engine = make_engine({"disallow": "string"})

    engine.validate(1)
    with pytest.raises(ValidationError) as exc_info:
        engine.validate("asdf")
    assert exc_info.value.kind == "disallow"


def test_disallow_rejects_otherwise_type_valid_value(make_engine):
    engine = make_engine({"type": "number", "disallow": ["integer"]})

    engine.validate(1.5)
    with pytest.raises(ValidationError) as exc_info:
        engine.validate(2)
    assert exc_info.value.kind == "disallow"


def test_disallow_inline_schema(make_engine):
    engine = make_engine({"disallow": [{"type": "string", "pattern": "^x"}]})

    engine.validate("abc")
    with pytest.raises(ValidationError):
        engine.validate("xyz")


# ---- object ------------------------------------------------------------------


def test_additional_properties_false(make_engine):
    engine = make_engine({
        "type": "object",
        "properties": {"a": {"type": "string"}},
        "additionalProperties": False,
    })

    engine.validate({"a": "x"})
    with pytest.raises(ValidationError) as exc_info:
        engine.validate({"a": "x", "b": 1})
    assert exc_info.value.path == "root.b"


def test_additional_properties_schema(make_engine):
    engine = make_engine({
        "properties": {"a": {"type": "string"}},
        "additionalProperties": {"type": "integer"},
    })

    engine.validate({"a": "x", "b": 1})
    with pytest.raises(ValidationError) as exc_info:
        engine.validate({"a": "x", "b": "y"})
    assert exc_info.value.path == "root.b"


def test_pattern_properties(make_engine):
    engine = make_engine({
        "properties": {"id": {"type": "string"}},
        "patternProperties": {"^x-": {"type": "integer"}},
        "additionalProperties": False,
    })

    engine.validate({"id": "a", "x-count": 3})
    with pytest.raises(ValidationError):
        engine.validate({"id": "a", "x-count": "3"})
    with pytest.raises(ValidationError) as exc_info:
        engine.validate({"id": "a", "other": 1})
    assert exc_info.value.kind == "additionalProperties"


def test_dependencies(make_engine):
    engine = make_engine({
        "dependencies": {
            "card": "billing",
            "coupon": {"properties": {"code": {"type": "string", "required": True}}},
        }
    })

    engine.validate({"name": "x"})
    engine.validate({"card": 1, "billing": "addr"})
    with pytest.raises(ValidationError) as exc_info:
        engine.validate({"card": 1})
    assert exc_info.value.kind == "dependencies"
    assert exc_info.value.path == "root.billing"
    with pytest.raises(ValidationError) as exc_info:
        engine.validate({"coupon": True})
    assert exc_info.value.path == "root.code"


def test_required_flag_must_be_boolean(make_engine):
    engine = make_engine({"properties": {"a": {"required": "yes"}}})

    with pytest.raises(SchemaError):
        engine.validate({})


def test_required_without_type_is_accepted(make_engine):
    engine = make_engine({"properties": {"a": {"required": True}}})

    engine.validate({"a": [1, "two"]})
    with pytest.raises(ValidationError):
        engine.validate({})


# ---- numbers -----------------------------------------------------------------


def test_minimum_and_maximum_are_inclusive(make_engine):
    engine = make_engine({"type": "number", "minimum": 0, "maximum": 10})

    engine.validate(0)
    engine.validate(10)
    with pytest.raises(ValidationError):
        engine.validate(-0.5)
    with pytest.raises(ValidationError):
        engine.validate(10.5)


def test_draft3_boolean_exclusive_bounds(make_engine):
    engine = make_engine({
        "type": "number",
        "minimum": 0,
        "exclusiveMinimum": True,
        "maximum": 10,
        "exclusiveMaximum": True,
    })

    engine.validate(5)
    with pytest.raises(ValidationError) as exc_info:
        engine.validate(0)
    assert exc_info.value.kind == "minimum"
    with pytest.raises(ValidationError) as exc_info:
        engine.validate(10)
    assert exc_info.value.kind == "maximum"


def test_numeric_exclusive_bounds(make_engine):
    engine = make_engine({"exclusiveMinimum": 1, "exclusiveMaximum": 3})

    engine.validate(2)
    with pytest.raises(ValidationError) as exc_info:
        engine.validate(1)
    assert exc_info.value.kind == "exclusiveMinimum"
    with pytest.raises(ValidationError) as exc_info:
        engine.validate(3)
    assert exc_info.value.kind == "exclusiveMaximum"


def test_divisible_by(make_engine):
    engine = make_engine({"type": "integer", "divisibleBy": 4})

    engine.validate(8)
    with pytest.raises(ValidationError) as exc_info:
        engine.validate(3)
    assert exc_info.value.kind == "divisibleBy"


def test_divisible_by_fraction(make_engine):
    engine = make_engine({"divisibleBy": 0.1})

    engine.validate(0.3)
    with pytest.raises(ValidationError):
        engine.validate(0.35)


@pytest.mark.parametrize("divisor", [0, "4", True])
def test_invalid_divisible_by_is_a_schema_error(make_engine, divisor):
    engine = make_engine({"type": "number", "divisibleBy": divisor})

    for value in (8, 3):
        with pytest.raises(SchemaError) as exc_info:
            engine.validate(value)
        assert exc_info.value.kind == "divisibleBy"


def test_non_numeric_bound_is_a_schema_error(make_engine):
    engine = make_engine({"minimum": "1"})

    with pytest.raises(SchemaError):
        engine.validate(2)


# ---- strings -----------------------------------------------------------------


def test_bad_pattern_is_a_schema_error(make_engine):
    engine = make_engine({"type": "string", "pattern": "(unclosed"})

    with pytest.raises(SchemaError) as exc_info:
        engine.validate("abc")
    assert exc_info.value.kind == "pattern"


def test_length_counts_characters(make_engine):
    engine = make_engine({"type": "string", "maxLength": 2})

    engine.validate("éé")


def test_negative_length_bound_is_a_schema_error(make_engine):
    engine = make_engine({"minLength": -1})

    with pytest.raises(SchemaError):
        engine.validate("a")


# ---- arrays ------------------------------------------------------------------


def test_items_single_schema_applies_to_every_element(make_engine):
    engine = make_engine({"type": "array", "items": {"type": "integer"}})

    engine.validate([1, 2, 3])
    with pytest.raises(ValidationError) as exc_info:
        engine.validate([1, "two", 3])
    assert exc_info.value.path == "root.1"


def test_tuple_typing_is_positional_and_tolerates_extra_elements(make_engine):
    engine = make_engine({"type": "array", "items": [{"type": "string"}, {"type": "integer"}]})

    engine.validate(["a", 1])
    engine.validate(["a", 1, None, {"x": 1}])
    engine.validate(["a"])
    with pytest.raises(ValidationError) as exc_info:
        engine.validate([1, "a"])
    assert exc_info.value.path == "root.0"


def test_tuple_typing_additional_items(make_engine):
    closed = make_engine({"items": [{"type": "string"}], "additionalItems": False})
    typed = make_engine({"items": [{"type": "string"}], "additionalItems": {"type": "boolean"}})

    closed.validate(["a"])
    with pytest.raises(ValidationError) as exc_info:
        closed.validate(["a", "b"])
    assert exc_info.value.kind == "additionalItems"
    typed.validate(["a", True, False])
    with pytest.raises(ValidationError):
        typed.validate(["a", 1])


def test_malformed_items_entry_is_reported_when_reached(make_engine):
    engine = make_engine({"items": [{"type": "string"}, "integer"]})

    engine.validate(["a"])
    with pytest.raises(SchemaError) as exc_info:
        engine.validate(["a", 1])
    assert exc_info.value.kind == "items"
    assert exc_info.value.path == "root.1"


def test_malformed_items_keyword(make_engine):
    engine = make_engine({"type": "array", "items": "string"})

    with pytest.raises(SchemaError):
        engine.validate([])


def test_unique_items(make_engine):
    engine = make_engine({"uniqueItems": True})

    engine.validate(["a", "b"])
    engine.validate([1, True])
    engine.validate([[1], [1, 2]])
    with pytest.raises(ValidationError):
        engine.validate(["a", "a"])
    with pytest.raises(ValidationError):
        engine.validate([1, 1.0])
    with pytest.raises(ValidationError):
        engine.validate([{"a": [1]}, {"a": [1]}])


# ---- enum --------------------------------------------------------------------


def test_enum_uses_exact_json_equality(make_engine):
    engine = make_engine({"enum": [1, "two", [3], {"four": 4}]})

    engine.validate(1)
    engine.validate(1.0)
    engine.validate([3])
    engine.validate({"four": 4})
    with pytest.raises(ValidationError):
        engine.validate(True)
    with pytest.raises(ValidationError):
        engine.validate("1")


def test_non_array_enum_is_a_schema_error(make_engine):
    engine = make_engine({"enum": "red"})

    with pytest.raises(SchemaError) as exc_info:
        engine.validate("red")
    assert exc_info.value.kind == "enum"


# ---- lazy schema defects -------------------------------------------------------


def test_defect_in_unreached_branch_is_not_reported(make_engine):
    engine = make_engine({
        "properties": {
            "a": {"type": "string"},
            "b": {"type": "number", "divisibleBy": 0},
        }
    })

    engine.validate({"a": "x"})
    with pytest.raises(SchemaError):
        engine.validate({"a": "x", "b": 4})


def test_non_object_property_schema(make_engine):
    engine = make_engine({"properties": {"a": "string"}})

    with pytest.raises(SchemaError):
        engine.validate({})
    with pytest.raises(SchemaError):
        engine.validate({"a": "x"})


def test_max_depth_guard(make_engine):
    schema = {"type": "array"}
    for _ in range(5):
        schema = {"type": "array", "items": schema}
    engine = ValidationEngine(make_engine(schema).store, max_depth=3)

    with pytest.raises(SchemaError) as exc_info:
        engine.validate([[[[[[]]]]]])
    assert exc_info.value.kind == "depth"


# ---- entry points --------------------------------------------------------------


def test_validate_against_explicit_subschema(engine, test_object):
    node = engine.store.root.properties["objectProp"]

    engine.validate(test_object["objectProp"], schema=node, path="root.objectProp")
    with pytest.raises(ValidationError) as exc_info:
        engine.validate({"foo": 1}, schema=node, path="root.objectProp")
    assert exc_info.value.path == "root.objectProp.foo"


def test_validate_against_raw_mapping(engine):
    engine.validate("abc", schema={"type": "string"})
    with pytest.raises(SchemaError):
        engine.validate("abc", schema=["string"])


def test_check_returns_tristate_outcome(make_engine):
    engine = make_engine({
        "properties": {"n": {"type": "integer"}, "bad": {"enum": 1}},
    })

    ok = engine.check({"n": 1})
    assert ok.valid and ok.kind == OutcomeKind.SUCCESS and bool(ok)

    invalid = engine.check({"n": "x"})
    assert invalid.kind == OutcomeKind.VALIDATION_ERROR
    assert invalid.path == "root.n"
    assert invalid.error_kind == "type"
    with pytest.raises(ValidationError):
        invalid.raise_for_outcome()

    broken = engine.check({"bad": 1})
    assert broken.kind == OutcomeKind.SCHEMA_ERROR
    assert not broken


def test_is_valid(make_engine):
    engine = make_engine({"type": "string"})

    assert engine.is_valid("a")
    assert not engine.is_valid(1)


def test_register_format_is_per_engine(make_engine):
    engine = make_engine({"format": "even"})
    other = make_engine({"format": "even"})
    engine.register_format("even", lambda v: v % 2 == 0, applies_to={JsonType.INTEGER})

    engine.validate(2)
    with pytest.raises(ValidationError):
        engine.validate(3)
    other.validate(3)


def test_concurrent_validation_on_one_engine(engine, test_object):
    errors = []

    def worker():
        try:
            for _ in range(50):
                engine.validate(test_object)
        except Exception as e:  # pragma: no cover
            errors.append(e)

    threads = [threading.Thread(target=worker) for _ in range(4)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    assert errors == []


def test_schema_node_instances_can_be_passed_directly(engine):
    engine.validate(None, schema=SchemaNode(type="null"))
