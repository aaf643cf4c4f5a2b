import copy

from schema_guard import MISSING

NUMBER_WITH_DEFAULT = {
    "type": "object",
    "properties": {"a": {"type": "number", "default": 5}},
    "required": ["a"],
}

FIXED_ARRAY = {"type": "array", "items": {"type": "number"}, "minItems": 3, "maxItems": 3}


def test_missing_required_property_is_filled(validator) -> None:
    assert validator.get_valid_value_or_default(NUMBER_WITH_DEFAULT, {}) == {"a": 5}


def test_mistyped_property_is_replaced_by_default(validator) -> None:
    assert validator.get_valid_value_or_default(NUMBER_WITH_DEFAULT, {"a": "x"}) == {"a": 5}


def test_valid_property_is_kept(validator) -> None:
    assert validator.get_valid_value_or_default(NUMBER_WITH_DEFAULT, {"a": 7}) == {"a": 7}


def test_array_is_padded_to_min_items(validator) -> None:
    assert validator.get_valid_value_or_default(FIXED_ARRAY, [1]) == [1, 0, 0]


def test_array_is_truncated_to_max_items(validator) -> None:
    assert validator.get_valid_value_or_default(FIXED_ARRAY, [1, 2, 3, 4]) == [1, 2, 3]


def test_containers_are_repaired_in_place(validator) -> None:
    value = {"a": "x"}
    result = validator.get_valid_value_or_default(NUMBER_WITH_DEFAULT, value)
    assert result is value
    assert value == {"a": 5}


def test_missing_value_builds_from_type(validator) -> None:
    assert validator.get_valid_value_or_default(NUMBER_WITH_DEFAULT) == {"a": 5}
    assert validator.get_valid_value_or_default(NUMBER_WITH_DEFAULT, MISSING) == {"a": 5}
    assert validator.get_valid_value_or_default({"type": "string"}) == ""
    assert validator.get_valid_value_or_default({"type": "boolean"}) is False
    assert validator.get_valid_value_or_default({}) is None


def test_wrong_container_type_is_replaced(validator) -> None:
    assert validator.get_valid_value_or_default(NUMBER_WITH_DEFAULT, [1, 2]) == {"a": 5}
    assert validator.get_valid_value_or_default(FIXED_ARRAY, {"a": 1}) == [0, 0, 0]


def test_properties_without_schema_are_pruned(validator) -> None:
    schema = {
        "type": "object",
        "properties": {"a": {"type": "number"}},
        "additionalProperties": False,
    }
    assert validator.get_valid_value_or_default(schema, {"a": 1, "b": 2}) == {"a": 1}


def test_unknown_properties_survive_when_allowed(validator) -> None:
    schema = {"type": "object", "properties": {"a": {"type": "number"}}}
    assert validator.get_valid_value_or_default(schema, {"a": 1, "b": [1]}) == {"a": 1, "b": [1]}


def test_tuple_is_truncated_at_first_index_without_schema(validator) -> None:
    schema = {"type": "array", "items": [{"type": "string"}], "additionalItems": False}
    assert validator.get_valid_value_or_default(schema, ["a", "b", "c"]) == ["a"]
    assert validator.get_valid_value_or_default(schema, [1]) == [""]


def test_tuple_padding_stops_at_first_index_without_schema(validator) -> None:
    schema = {
        "type": "array",
        "items": [{"type": "string", "default": "x"}],
        "additionalItems": False,
        "minItems": 3,
    }
    assert validator.get_valid_value_or_default(schema, []) == ["x"]


def test_primitive_falls_back_to_valid_default(validator) -> None:
    schema = {"type": "number", "minimum": 10, "default": 12}
    assert validator.get_valid_value_or_default(schema, 3) == 12
    assert validator.get_valid_value_or_default(schema, 20) == 20
    assert validator.get_valid_value_or_default(schema, "x") == 12


def test_primitive_kept_when_default_is_also_invalid(validator) -> None:
    schema = {"type": "number", "minimum": 10}
    assert validator.get_valid_value_or_default(schema, 3) == 3


def test_mistyped_default_is_ignored(validator) -> None:
    schema = {"type": "number", "default": "five"}
    assert validator.get_valid_value_or_default(schema) == 0


def test_default_is_copied(validator) -> None:
    default = [1, 2]
    schema = {"type": "array", "default": default}
    result = validator.get_valid_value_or_default(schema)
    assert result == [1, 2]
    result.append(3)
    assert default == [1, 2]


def test_nested_structures_are_normalized(validator) -> None:
    schema = {
        "type": "object",
        "required": ["profiles"],
        "properties": {
            "profiles": {
                "type": "array",
                "items": {
                    "type": "object",
                    "required": ["name", "enabled"],
                    "properties": {
                        "name": {"type": "string", "default": "Default"},
                        "enabled": {"type": "boolean", "default": True},
                    },
                    "additionalProperties": False,
                },
            }
        },
    }
    data = {"profiles": [{"name": "Main", "legacy": 1}, {"enabled": "yes"}]}
    assert validator.get_valid_value_or_default(schema, data) == {
        "profiles": [
            {"name": "Main", "enabled": True},
            {"name": "Default", "enabled": True},
        ]
    }
    assert validator.get_valid_value_or_default(schema) == {"profiles": []}


def test_normalization_is_idempotent(validator) -> None:
    schema = {
        "type": "object",
        "required": ["a", "list"],
        "properties": {
            "a": {"type": "number", "default": 5},
            "list": FIXED_ARRAY,
        },
        "additionalProperties": False,
    }
    once = validator.get_valid_value_or_default(schema, {"a": "bad", "list": [9], "junk": True})
    snapshot = copy.deepcopy(once)
    twice = validator.get_valid_value_or_default(schema, once)
    assert twice == snapshot == {"a": 5, "list": [9, 0, 0]}


def test_normalized_value_validates(validator) -> None:
    schema = {
        "type": "object",
        "required": ["a", "list"],
        "properties": {"a": {"type": "number", "default": 5}, "list": FIXED_ARRAY},
    }
    result = validator.get_valid_value_or_default(schema, {"list": [1, 2, 3, 4, 5]})
    validator.validate(result, schema)
