from schema_guard import MISSING, UNCONSTRAINED_SCHEMA
from schema_guard.validator.navigator import get_property_schema, get_schema_or_value_type


def test_effective_type_from_single_type() -> None:
    assert get_schema_or_value_type({"type": "object"}) == "object"
    assert get_schema_or_value_type({"type": "object"}, []) == "object"


def test_effective_type_from_type_list_needs_matching_value() -> None:
    schema = {"type": ["object", "array"]}
    assert get_schema_or_value_type(schema, []) == "array"
    assert get_schema_or_value_type(schema, {}) == "object"
    assert get_schema_or_value_type(schema, "x") is None
    assert get_schema_or_value_type(schema) is None


def test_effective_type_inferred_from_value() -> None:
    assert get_schema_or_value_type({}, {"a": 1}) == "object"
    assert get_schema_or_value_type({}, MISSING) is None


def test_object_properties() -> None:
    sub = {"type": "number"}
    schema = {"type": "object", "properties": {"a": sub}}
    assert get_property_schema(schema, "a") is sub
    assert get_property_schema(schema, "b") is UNCONSTRAINED_SCHEMA


def test_object_additional_properties() -> None:
    extra = {"type": "string"}
    assert get_property_schema({"type": "object", "additionalProperties": extra}, "x") is extra
    assert get_property_schema({"type": "object", "additionalProperties": False}, "x") is None


def test_non_schema_property_entry_falls_through() -> None:
    schema = {"type": "object", "properties": {"a": True}, "additionalProperties": False}
    assert get_property_schema(schema, "a") is None


def test_array_single_items_schema_applies_to_every_index() -> None:
    items = {"type": "number"}
    schema = {"type": "array", "items": items, "additionalItems": False}
    assert get_property_schema(schema, 0) is items
    assert get_property_schema(schema, 99) is items


def test_array_tuple_items() -> None:
    first, second, extra = {"const": 1}, {"const": 2}, {"type": "null"}
    schema = {"type": "array", "items": [first, second], "additionalItems": extra}
    assert get_property_schema(schema, 0) is first
    assert get_property_schema(schema, 1) is second
    assert get_property_schema(schema, 2) is extra
    assert get_property_schema(schema, -1) is extra

    closed = {"type": "array", "items": [first], "additionalItems": False}
    assert get_property_schema(closed, 1) is None
    assert get_property_schema({"type": "array", "items": [first]}, 1) is UNCONSTRAINED_SCHEMA


def test_primitive_types_disallow_keys() -> None:
    assert get_property_schema({"type": "string"}, "a") is None
    assert get_property_schema({"type": "integer"}, 0) is None
    assert get_property_schema({}, "a", "text") is None


def test_path_recording() -> None:
    sub = {"type": "number"}
    properties = {"a": sub}
    schema = {"type": "object", "properties": properties}
    path = []
    get_property_schema(schema, "a", None, path)
    assert path == [("properties", properties), ("a", sub)]

    path = []
    get_property_schema(schema, "b", None, path)
    assert path == [(None, UNCONSTRAINED_SCHEMA)]

    items = [sub]
    path = []
    get_property_schema({"type": "array", "items": items}, 0, None, path)
    assert path == [("items", items), (0, sub)]


def test_navigation_does_not_mutate_inputs() -> None:
    schema = {"type": "object", "properties": {"a": {"type": "number"}}}
    value = {"b": 1}
    get_property_schema(schema, "b", value)
    assert schema == {"type": "object", "properties": {"a": {"type": "number"}}}
    assert value == {"b": 1}
