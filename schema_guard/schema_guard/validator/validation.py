# Copyright 2026 TIER IV, inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Recursive validation of a value against a schema.

Each node is checked in a fixed order:

1. type, ``const`` and ``enum``
2. checks for the value's runtime type (number, string, array, object),
   recursing into array elements and object properties
3. ``if``/``then``/``else``
4. ``allOf``, ``anyOf``, ``oneOf`` and ``not``

Steps 1 and 2 raise on the first failure. The combinators in steps 3 and 4
try their member schemas and only raise a summarizing error when their own
condition is not met.
"""

import logging
import math
import re
from typing import Any, List, Mapping

from ..exceptions import PatternCompilationError, ValidationError
from ..models.schema_types import (
    get_type_constraint,
    get_value_type,
    is_number,
    is_schema,
    matches_type,
    values_are_equal,
    values_are_equal_any,
)
from ..models.traversal_info import PathPart, TraversalInfo
from ..utils.regex_cache import RegexCache
from .navigator import get_property_schema

logger = logging.getLogger(__name__)

Schema = Mapping[str, Any]


def _utf16_length(value: str) -> int:
    # Lone surrogates are valid JSON string content and count as one unit.
    return len(value.encode("utf-16-le", "surrogatepass")) // 2


def _is_multiple_of(value: float, multiple_of: float) -> bool:
    if multiple_of == 0:
        return False
    if isinstance(value, int) and isinstance(multiple_of, int):
        return value % multiple_of == 0
    try:
        quotient = value / multiple_of
    except OverflowError:
        return False
    if math.isfinite(quotient):
        quotient = math.floor(quotient)
    return quotient * multiple_of == value


class ValidationEngine:
    """Checks values against schemas, raising ValidationError on mismatch."""

    def __init__(self, regex_cache: RegexCache):
        self._regex_cache = regex_cache

    def validate(self, value: Any, schema: Schema) -> None:
        info = TraversalInfo(value, schema)
        self.validate_node(value, schema, info)

    def is_valid(self, value: Any, schema: Schema) -> bool:
        try:
            self.validate(value, schema)
            return True
        except ValidationError:
            return False
        except Exception as e:
            logger.debug(f"Validation aborted with {type(e).__name__}: {e}")
            return False

    def validate_node(self, value: Any, schema: Schema, info: TraversalInfo) -> None:
        self._validate_single_schema(value, schema, info)
        self._validate_conditional(value, schema, info)
        self._validate_all_of(value, schema, info)
        self._validate_any_of(value, schema, info)
        self._validate_one_of(value, schema, info)
        self._validate_none_of(value, schema, info)

    # Private

    def _fail(self, message: str, value: Any, schema: Schema, info: TraversalInfo,
              error_class=ValidationError) -> None:
        raise error_class(message, value, schema, info.snapshot())

    def _try_validate(self, value: Any, schema: Schema, info: TraversalInfo) -> bool:
        try:
            self.validate_node(value, schema, info)
        except ValidationError:
            return False
        except Exception as e:
            # Member schemas of a combinator count as not matching.
            logger.debug(f"Combinator member aborted with {type(e).__name__}: {e}")
            return False
        return True

    def _validate_conditional(self, value: Any, schema: Schema, info: TraversalInfo) -> None:
        if_schema = schema.get("if")
        if not is_schema(if_schema):
            return

        with info.schema_step("if", if_schema):
            okay = self._try_validate(value, if_schema, info)

        branch = "then" if okay else "else"
        next_schema = schema.get(branch)
        if is_schema(next_schema):
            with info.schema_step(branch, next_schema):
                self.validate_node(value, next_schema, info)

    def _validate_all_of(self, value: Any, schema: Schema, info: TraversalInfo) -> None:
        sub_schemas = schema.get("allOf")
        if not isinstance(sub_schemas, list):
            return

        with info.schema_step("allOf", sub_schemas):
            for i, sub_schema in enumerate(sub_schemas):
                with info.schema_step(i, sub_schema):
                    self.validate_node(value, sub_schema, info)

    def _validate_any_of(self, value: Any, schema: Schema, info: TraversalInfo) -> None:
        sub_schemas = schema.get("anyOf")
        if not isinstance(sub_schemas, list):
            return

        with info.schema_step("anyOf", sub_schemas):
            for i, sub_schema in enumerate(sub_schemas):
                with info.schema_step(i, sub_schema):
                    if self._try_validate(value, sub_schema, info):
                        return
            self._fail("0 anyOf schemas matched", value, schema, info)

    def _validate_one_of(self, value: Any, schema: Schema, info: TraversalInfo) -> None:
        sub_schemas = schema.get("oneOf")
        if not isinstance(sub_schemas, list):
            return

        with info.schema_step("oneOf", sub_schemas):
            count = 0
            for i, sub_schema in enumerate(sub_schemas):
                with info.schema_step(i, sub_schema):
                    if self._try_validate(value, sub_schema, info):
                        count += 1
            if count != 1:
                self._fail(f"{count} oneOf schemas matched", value, schema, info)

    def _validate_none_of(self, value: Any, schema: Schema, info: TraversalInfo) -> None:
        # "not" is a list here: every listed schema must fail to match.
        sub_schemas = schema.get("not")
        if not isinstance(sub_schemas, list):
            return

        with info.schema_step("not", sub_schemas):
            for i, sub_schema in enumerate(sub_schemas):
                with info.schema_step(i, sub_schema):
                    if self._try_validate(value, sub_schema, info):
                        self._fail(f"not[{i}] schema matched", value, schema, info)

    def _validate_single_schema(self, value: Any, schema: Schema, info: TraversalInfo) -> None:
        value_type = get_value_type(value)
        if not matches_type(value, get_type_constraint(schema), value_type):
            self._fail(
                f"Value type {value_type} does not match schema type {schema.get('type')}",
                value, schema, info,
            )

        if "const" in schema and not values_are_equal(value, schema["const"]):
            self._fail("Invalid constant value", value, schema, info)

        schema_enum = schema.get("enum")
        if isinstance(schema_enum, list) and not values_are_equal_any(value, schema_enum):
            self._fail("Invalid enum value", value, schema, info)

        if value_type == "number":
            self._validate_number(value, schema, info)
        elif value_type == "string":
            self._validate_string(value, schema, info)
        elif value_type == "array":
            self._validate_array(value, schema, info)
        elif value_type == "object":
            self._validate_object(value, schema, info)

    def _validate_number(self, value: float, schema: Schema, info: TraversalInfo) -> None:
        multiple_of = schema.get("multipleOf")
        if is_number(multiple_of) and not _is_multiple_of(value, multiple_of):
            self._fail(f"Number is not a multiple of {multiple_of}", value, schema, info)

        minimum = schema.get("minimum")
        if is_number(minimum) and value < minimum:
            self._fail(f"Number is less than {minimum}", value, schema, info)

        exclusive_minimum = schema.get("exclusiveMinimum")
        if is_number(exclusive_minimum) and value <= exclusive_minimum:
            self._fail(f"Number is less than or equal to {exclusive_minimum}", value, schema, info)

        maximum = schema.get("maximum")
        if is_number(maximum) and value > maximum:
            self._fail(f"Number is greater than {maximum}", value, schema, info)

        exclusive_maximum = schema.get("exclusiveMaximum")
        if is_number(exclusive_maximum) and value >= exclusive_maximum:
            self._fail(f"Number is greater than or equal to {exclusive_maximum}", value, schema, info)

    def _validate_string(self, value: str, schema: Schema, info: TraversalInfo) -> None:
        min_length = schema.get("minLength")
        if is_number(min_length) and _utf16_length(value) < min_length:
            self._fail("String length too short", value, schema, info)

        max_length = schema.get("maxLength")
        if is_number(max_length) and _utf16_length(value) > max_length:
            self._fail("String length too long", value, schema, info)

        pattern = schema.get("pattern")
        if isinstance(pattern, str):
            pattern_flags = schema.get("patternFlags")
            if not isinstance(pattern_flags, str):
                pattern_flags = ""

            try:
                regex = self._regex_cache.get_regex(pattern, pattern_flags)
            except (re.error, OverflowError, RecursionError) as e:
                self._fail(f"Pattern is invalid ({e})", value, schema, info, PatternCompilationError)

            if regex.search(value) is None:
                self._fail("Pattern match failed", value, schema, info)

    def _validate_array(self, value: List[Any], schema: Schema, info: TraversalInfo) -> None:
        min_items = schema.get("minItems")
        if is_number(min_items) and len(value) < min_items:
            self._fail("Array length too short", value, schema, info)

        max_items = schema.get("maxItems")
        if is_number(max_items) and len(value) > max_items:
            self._fail("Array length too long", value, schema, info)

        self._validate_array_contains(value, schema, info)

        for i, item in enumerate(value):
            schema_path: List[PathPart] = []
            item_schema = get_property_schema(schema, i, value, schema_path)
            if item_schema is None:
                self._fail(f"No schema found for array[{i}]", value, schema, info)

            with info.schema_steps(schema_path), info.value_step(i, item):
                self.validate_node(item, item_schema, info)

    def _validate_array_contains(self, value: List[Any], schema: Schema, info: TraversalInfo) -> None:
        contains_schema = schema.get("contains")
        if not is_schema(contains_schema):
            return

        with info.schema_step("contains", contains_schema):
            for i, item in enumerate(value):
                with info.value_step(i, item):
                    if self._try_validate(item, contains_schema, info):
                        return
            self._fail("contains schema didn't match", value, schema, info)

    def _validate_object(self, value: Mapping[Any, Any], schema: Schema, info: TraversalInfo) -> None:
        properties = list(value.keys())

        required = schema.get("required")
        if isinstance(required, list):
            for name in required:
                if name not in value:
                    self._fail(f"Missing property {name}", value, schema, info)

        min_properties = schema.get("minProperties")
        if is_number(min_properties) and len(properties) < min_properties:
            self._fail("Not enough object properties", value, schema, info)

        max_properties = schema.get("maxProperties")
        if is_number(max_properties) and len(properties) > max_properties:
            self._fail("Too many object properties", value, schema, info)

        for name in properties:
            schema_path: List[PathPart] = []
            property_schema = get_property_schema(schema, name, value, schema_path)
            if property_schema is None:
                self._fail(f"No schema found for {name}", value, schema, info)

            property_value = value[name]
            with info.schema_steps(schema_path), info.value_step(name, property_value):
                self.validate_node(property_value, property_schema, info)
