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

"""Live views over a value that validate every write before committing it.

A view holds only its backing ``dict``/``list``, the governing schema and the
validator used to check writes. Nested containers are returned as new views,
so mutation at any depth goes through the same checks.
"""

from __future__ import annotations

import copy
import logging
from typing import TYPE_CHECKING, Any, Iterator, Mapping, Optional, Union

from ..exceptions import DisallowedDeletionError, UnsupportedMutationError
from ..models.schema_types import MISSING

if TYPE_CHECKING:
    from . import JsonSchemaValidator

logger = logging.getLogger(__name__)

Container = Union[dict, list]


class GuardedView:
    """Schema-guarded accessor over a ``dict`` or ``list``."""

    __slots__ = ("_target", "_schema", "_validator")

    def __init__(self, target: Container, schema: Mapping[str, Any], validator: "JsonSchemaValidator"):
        if not isinstance(target, (dict, list)):
            raise TypeError(f"Guarded views wrap a dict or list, got {type(target).__name__}")
        object.__setattr__(self, "_target", target)
        object.__setattr__(self, "_schema", schema)
        object.__setattr__(self, "_validator", validator)

    @property
    def schema(self) -> Mapping[str, Any]:
        return self._schema

    def get(self, key: Any, default: Any = None) -> Any:
        """Read ``key``; containers come back as guarded views."""
        value = self._read(key)
        return default if value is MISSING else value

    def set(self, key: Any, value: Any) -> None:
        """Validate a copy of ``value`` against the key's schema, then store it."""
        target = self._target
        if isinstance(target, list):
            key = self._check_index(key)
            if key > len(target):
                raise UnsupportedMutationError("Array index out of range")

        property_schema = self._validator.get_property_schema(self._schema, key, target)
        if property_schema is None:
            raise UnsupportedMutationError(f"Property {key} not supported")

        # The caller must not keep an alias into the guarded value.
        if isinstance(value, GuardedView):
            value = value.unwrap()
        else:
            value = copy.deepcopy(value)
        self._validator.validate(value, property_schema)

        if isinstance(target, list) and key == len(target):
            target.append(value)
        else:
            target[key] = value
        logger.debug(f"Committed guarded write to {key!r}")

    def delete(self, key: Any) -> None:
        required = self._schema.get("required")
        if isinstance(required, list) and key in required:
            raise DisallowedDeletionError(f"{key} cannot be deleted")
        target = self._target
        if isinstance(target, list):
            key = self._check_index(key)
        del target[key]

    def unwrap(self) -> Any:
        """Deep copy of the backing value, detached from the view."""
        return copy.deepcopy(self._target)

    # Container protocol

    def __getitem__(self, key: Any) -> Any:
        value = self._read(key)
        if value is MISSING:
            if isinstance(self._target, list):
                raise IndexError(key)
            raise KeyError(key)
        return value

    def __setitem__(self, key: Any, value: Any) -> None:
        self.set(key, value)

    def __delitem__(self, key: Any) -> None:
        self.delete(key)

    def __contains__(self, key: Any) -> bool:
        return self._read(key) is not MISSING

    def __len__(self) -> int:
        return len(self._target)

    def __iter__(self) -> Iterator[Any]:
        if isinstance(self._target, list):
            return (self[i] for i in range(len(self._target)))
        return iter(list(self._target.keys()))

    def __eq__(self, other: Any) -> bool:
        if isinstance(other, GuardedView):
            other = other._target
        return self._target == other

    __hash__ = None

    def __repr__(self) -> str:
        return f"GuardedView({self._target!r})"

    # Structural operations that would take the view outside schema control

    def __setattr__(self, name: str, value: Any) -> None:
        raise UnsupportedMutationError(f"Cannot set attribute '{name}' on a guarded view")

    def __delattr__(self, name: str) -> None:
        raise UnsupportedMutationError(f"Cannot delete attribute '{name}' on a guarded view")

    def __call__(self, *args: Any, **kwargs: Any) -> Any:
        raise UnsupportedMutationError("Guarded views are not callable")

    # Private

    def _check_index(self, key: Any) -> int:
        if isinstance(key, bool) or not isinstance(key, int):
            raise UnsupportedMutationError(f"Array index must be an integer, got {key!r}")
        if key < 0:
            key += len(self._target)
            if key < 0:
                raise UnsupportedMutationError("Array index out of range")
        return key

    def _read(self, key: Any) -> Any:
        target = self._target
        if isinstance(target, list):
            if isinstance(key, bool) or not isinstance(key, int):
                return MISSING
            if key < 0:
                key += len(target)
            if not 0 <= key < len(target):
                return MISSING

        property_schema: Optional[Mapping[str, Any]] = self._validator.get_property_schema(self._schema, key, target)
        if property_schema is None:
            return MISSING

        if isinstance(target, list):
            value = target[key]
        else:
            value = target.get(key, MISSING)

        if isinstance(value, (dict, list)):
            return self._validator.create_proxy(value, property_schema)
        return value
