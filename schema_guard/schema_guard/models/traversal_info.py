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

"""Traversal trails recorded while walking a value and its schema.

Both trails grow on descent and shrink on return. They exist only to describe
where a failure happened; no decision in the engine reads them.
"""

from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any, Iterable, Iterator, List, Optional, Tuple, Union

PathKey = Optional[Union[str, int]]
PathPart = Tuple[PathKey, Any]


@dataclass(frozen=True)
class TraversalSnapshot:
    """Frozen copy of the trails at the moment a failure was raised."""

    value_path: Tuple[PathPart, ...]
    schema_path: Tuple[PathPart, ...]


class TraversalInfo:
    """Mutable value/schema trails for one top-level validate or normalize call."""

    def __init__(self, value: Any, schema: Any):
        self.value_path: List[PathPart] = []
        self.schema_path: List[PathPart] = []
        self.value_push(None, value)
        self.schema_push(None, schema)

    def value_push(self, key: PathKey, value: Any) -> None:
        self.value_path.append((key, value))

    def value_pop(self) -> None:
        self.value_path.pop()

    def schema_push(self, key: PathKey, schema: Any) -> None:
        self.schema_path.append((key, schema))

    def schema_pop(self) -> None:
        self.schema_path.pop()

    @contextmanager
    def schema_step(self, key: PathKey, schema: Any) -> Iterator[None]:
        self.schema_push(key, schema)
        try:
            yield
        finally:
            self.schema_pop()

    @contextmanager
    def schema_steps(self, steps: Iterable[PathPart]) -> Iterator[None]:
        """Push every (key, schema) step, popping all of them on exit."""
        count = 0
        try:
            for key, schema in steps:
                self.schema_push(key, schema)
                count += 1
            yield
        finally:
            for _ in range(count):
                self.schema_pop()

    @contextmanager
    def value_step(self, key: PathKey, value: Any) -> Iterator[None]:
        self.value_push(key, value)
        try:
            yield
        finally:
            self.value_pop()

    def snapshot(self) -> TraversalSnapshot:
        # The lists keep changing while the stack unwinds, so copy them now.
        return TraversalSnapshot(tuple(self.value_path), tuple(self.schema_path))
