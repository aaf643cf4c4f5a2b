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

"""Computes schema-conforming values by filling in defaults and pruning data."""

import copy
import logging
from typing import Any, Dict, List, Mapping

from ..models.schema_types import (
    MISSING,
    get_default_type_value,
    get_type_constraint,
    is_number,
    matches_type,
)
from ..models.traversal_info import TraversalInfo
from .navigator import get_property_schema
from .validation import ValidationEngine

logger = logging.getLogger(__name__)

Schema = Mapping[str, Any]


class Normalizer:
    """Repairs values in place so that they fit a schema's shape."""

    def __init__(self, engine: ValidationEngine):
        self._engine = engine

    def get_valid_value_or_default(self, schema: Schema, value: Any = MISSING) -> Any:
        info = TraversalInfo(value, schema)
        return self._get_valid_value_or_default(schema, value, info)

    def get_default_schema_value(self, schema: Schema) -> Any:
        """The schema's ``default`` when it has the declared type, else the type's zero value."""
        constraint = get_type_constraint(schema)
        if "default" in schema:
            schema_default = schema["default"]
            if schema_default is not MISSING and matches_type(schema_default, constraint):
                return copy.deepcopy(schema_default)
        return get_default_type_value(constraint)

    # Private

    def _get_valid_value_or_default(self, schema: Schema, value: Any, info: TraversalInfo) -> Any:
        if value is MISSING or not matches_type(value, get_type_constraint(schema)):
            value = self.get_default_schema_value(schema)

        if isinstance(value, dict):
            return self._populate_object_defaults(value, schema, info)
        if isinstance(value, list):
            return self._populate_array_defaults(value, schema, info)

        if not self._engine.is_valid(value, schema):
            schema_default = self.get_default_schema_value(schema)
            if self._engine.is_valid(schema_default, schema):
                value = schema_default
        return value

    def _normalize_child(self, schema: Schema, key: Any, container: Any, child: Any, info: TraversalInfo) -> Any:
        with info.value_step(key, container), info.schema_step(key, schema):
            return self._get_valid_value_or_default(schema, child, info)

    def _populate_object_defaults(self, value: Dict[Any, Any], schema: Schema, info: TraversalInfo) -> Dict[Any, Any]:
        properties = list(value.keys())

        required = schema.get("required")
        if isinstance(required, list):
            for name in required:
                if name in properties:
                    properties.remove(name)

                property_schema = get_property_schema(schema, name, value)
                if property_schema is None:
                    continue
                value[name] = self._normalize_child(property_schema, name, value, value.get(name, MISSING), info)

        for name in properties:
            property_schema = get_property_schema(schema, name, value)
            if property_schema is None:
                logger.debug(f"Removing property without schema: {name}")
                del value[name]
            else:
                value[name] = self._normalize_child(property_schema, name, value, value[name], info)

        return value

    def _populate_array_defaults(self, value: List[Any], schema: Schema, info: TraversalInfo) -> List[Any]:
        for i in range(len(value)):
            item_schema = get_property_schema(schema, i, value)
            if item_schema is None:
                # Only reachable past a tuple with additionalItems: false.
                logger.debug(f"Truncating array without item schema at index {i}")
                del value[i:]
                break
            value[i] = self._normalize_child(item_schema, i, value, value[i], info)

        min_items = schema.get("minItems")
        if is_number(min_items):
            i = len(value)
            while i < min_items:
                item_schema = get_property_schema(schema, i, value)
                if item_schema is None:
                    break
                value.append(self._normalize_child(item_schema, i, value, MISSING, info))
                i += 1

        max_items = schema.get("maxItems")
        if is_number(max_items) and len(value) > max_items:
            del value[int(max_items):]

        return value
