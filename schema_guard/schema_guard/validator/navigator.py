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

"""Resolution of the sub-schema governing one property or array element."""

from typing import Any, List, Mapping, Optional

from ..models.schema_types import (
    MISSING,
    UNCONSTRAINED_SCHEMA,
    get_type_constraint,
    is_schema,
    resolve_effective_type,
)
from ..models.traversal_info import PathKey, PathPart

Schema = Mapping[str, Any]


def get_schema_or_value_type(schema: Schema, value: Any = MISSING) -> Optional[str]:
    """Return the type a schema governs ``value`` as, or None when undecidable."""
    return resolve_effective_type(get_type_constraint(schema), value)


def get_property_schema(
    schema: Schema,
    key: PathKey,
    value: Any = MISSING,
    path: Optional[List[PathPart]] = None,
) -> Optional[Schema]:
    """Resolve the sub-schema for ``key``.

    Args:
        schema: Schema of the containing object or array
        key: Property name or array index
        value: The containing value, used when the schema type is a list or absent
        path: When given, the (key, schema) steps taken are appended to it

    Returns:
        The sub-schema, the unconstrained schema when nothing restricts the key,
        or None when the key is structurally disallowed
    """
    schema_type = get_schema_or_value_type(schema, value)
    if schema_type == "object":
        return _get_object_property_schema(schema, key, path)
    if schema_type == "array":
        return _get_array_item_schema(schema, key, path)
    return None


def _get_object_property_schema(schema: Schema, key: PathKey, path: Optional[List[PathPart]]) -> Optional[Schema]:
    properties = schema.get("properties")
    if is_schema(properties):
        property_schema = properties.get(key)
        if is_schema(property_schema):
            if path is not None:
                path.extend((("properties", properties), (key, property_schema)))
            return property_schema

    return _get_additional_schema(schema, "additionalProperties", path)


def _get_array_item_schema(schema: Schema, key: PathKey, path: Optional[List[PathPart]]) -> Optional[Schema]:
    items = schema.get("items")
    if is_schema(items):
        if path is not None:
            path.append(("items", items))
        return items

    if isinstance(items, list) and isinstance(key, int) and not isinstance(key, bool):
        if 0 <= key < len(items):
            item_schema = items[key]
            if is_schema(item_schema):
                if path is not None:
                    path.extend((("items", items), (key, item_schema)))
                return item_schema

    return _get_additional_schema(schema, "additionalItems", path)


def _get_additional_schema(schema: Schema, name: str, path: Optional[List[PathPart]]) -> Optional[Schema]:
    additional = schema.get(name)
    if additional is False:
        return None
    if is_schema(additional):
        if path is not None:
            path.append((name, additional))
        return additional
    if path is not None:
        path.append((None, UNCONSTRAINED_SCHEMA))
    return UNCONSTRAINED_SCHEMA
