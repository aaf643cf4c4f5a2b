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

"""Custom exceptions for the schema_guard engine."""

from typing import Any, Mapping, Optional

from .models.traversal_info import TraversalSnapshot
from .utils.path_format import format_path, format_pointer


class SchemaGuardError(Exception):
    """Base exception for schema_guard related errors."""
    pass


class ValidationError(SchemaGuardError):
    """Exception raised when a value does not match a schema.

    Attributes:
        value: The offending value
        schema: The (sub)schema the value was checked against
        info: Snapshot of the traversal trails taken when the error was raised
    """

    def __init__(
        self,
        message: str,
        value: Any = None,
        schema: Optional[Mapping[str, Any]] = None,
        info: Optional[TraversalSnapshot] = None,
    ):
        super().__init__(message)
        self.message = message
        self.value = value
        self.schema = schema
        self.info = info if info is not None else TraversalSnapshot((), ())

    def value_path_string(self, base: str = "value") -> str:
        """Dotted/bracketed location of the offending value."""
        return format_path(self.info.value_path, base)

    def schema_path_string(self, base: str = "schema") -> str:
        """Dotted/bracketed location of the schema that rejected the value."""
        return format_path(self.info.schema_path, base)

    def value_pointer(self) -> str:
        """JSON pointer of the offending value."""
        return format_pointer(self.info.value_path)


class PatternCompilationError(ValidationError):
    """Exception raised when a schema ``pattern`` cannot be compiled."""
    pass


class UnsupportedMutationError(SchemaGuardError):
    """Exception raised for writes or structural operations a guarded view rejects."""
    pass


class DisallowedDeletionError(SchemaGuardError):
    """Exception raised when deleting a required property through a guarded view."""
    pass


class DocumentLoadError(SchemaGuardError):
    """Exception raised when a schema or data document cannot be loaded."""
    pass


class ConfigurationError(SchemaGuardError):
    """Exception raised for invalid configuration values."""
    pass
