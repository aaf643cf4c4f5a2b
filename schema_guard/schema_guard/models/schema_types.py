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

"""Runtime value types and schema type constraints.

Values are JSON-like: ``None``, ``bool``, ``int``/``float``, ``str``, ``list``
and ``dict``. Their runtime type names follow the schema vocabulary
(``null``, ``boolean``, ``number``, ``string``, ``array``, ``object``).
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Mapping, Optional, Tuple, Union


class _Missing:
    """Marker for an absent value, distinct from ``None`` (JSON null)."""

    _instance: Optional["_Missing"] = None

    def __new__(cls) -> "_Missing":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False


MISSING = _Missing()

# Always-matching empty schema, shared by every resolution that has no constraint.
UNCONSTRAINED_SCHEMA: Mapping[str, Any] = MappingProxyType({})


def is_schema(value: Any) -> bool:
    return isinstance(value, Mapping)


def is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def get_value_type(value: Any) -> str:
    """Return the runtime type name of a JSON-like value."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if is_number(value):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, list):
        return "array"
    if isinstance(value, dict):
        return "object"
    if value is MISSING:
        return "undefined"
    return type(value).__name__


def is_integral(value: Any) -> bool:
    if not is_number(value):
        return False
    if isinstance(value, int):
        return True
    return math.isinf(value) or value.is_integer()


def is_value_type(value: Any, value_type: str, schema_type: str) -> bool:
    return value_type == schema_type or (schema_type == "integer" and is_integral(value))


def values_are_equal(value1: Any, value2: Any) -> bool:
    """Strict equality: identity for containers, type-strict equality for primitives."""
    type1 = get_value_type(value1)
    if type1 != get_value_type(value2):
        return False
    if type1 in ("null", "boolean", "number", "string"):
        return value1 == value2
    return value1 is value2


def values_are_equal_any(value: Any, candidates: Any) -> bool:
    return any(values_are_equal(value, candidate) for candidate in candidates)


# ---- type constraints ---------------------------------------------------------


@dataclass(frozen=True)
class AnyType:
    """No ``type`` key: every value matches."""


@dataclass(frozen=True)
class SingleType:
    name: str


@dataclass(frozen=True)
class TypeSet:
    names: Tuple[str, ...]


TypeConstraint = Union[AnyType, SingleType, TypeSet]

_ANY_TYPE = AnyType()


def get_type_constraint(schema: Mapping[str, Any]) -> TypeConstraint:
    schema_type = schema.get("type")
    if isinstance(schema_type, str):
        return SingleType(schema_type)
    if isinstance(schema_type, (list, tuple)):
        return TypeSet(tuple(schema_type))
    return _ANY_TYPE


def matches_type(value: Any, constraint: TypeConstraint, value_type: Optional[str] = None) -> bool:
    """Check a value against a type constraint."""
    if value_type is None:
        value_type = get_value_type(value)
    if isinstance(constraint, SingleType):
        return is_value_type(value, value_type, constraint.name)
    if isinstance(constraint, TypeSet):
        return any(is_value_type(value, value_type, name) for name in constraint.names)
    return True


def resolve_effective_type(constraint: TypeConstraint, value: Any = MISSING) -> Optional[str]:
    """Pick the type a schema governs a value as, or None when it cannot be decided."""
    if isinstance(constraint, SingleType):
        return constraint.name
    if value is MISSING:
        return None
    value_type = get_value_type(value)
    if isinstance(constraint, TypeSet):
        return value_type if value_type in constraint.names else None
    return value_type


def get_default_type_value(constraint: TypeConstraint) -> Any:
    """Canonical zero value for a single declared type."""
    if not isinstance(constraint, SingleType):
        return None
    name = constraint.name
    if name in ("number", "integer"):
        return 0
    if name == "boolean":
        return False
    if name == "string":
        return ""
    if name == "array":
        return []
    if name == "object":
        return {}
    return None
