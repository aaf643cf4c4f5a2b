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

"""Schema validation, normalization and guarded mutation for JSON-like data."""

from .exceptions import (
    DisallowedDeletionError,
    PatternCompilationError,
    SchemaGuardError,
    UnsupportedMutationError,
    ValidationError,
)
from .models.schema_types import MISSING, UNCONSTRAINED_SCHEMA
from .utils.regex_cache import RegexCache
from .validator import GuardedView, JsonSchemaValidator

__version__ = "0.1.0"

__all__ = [
    "JsonSchemaValidator",
    "GuardedView",
    "RegexCache",
    "MISSING",
    "UNCONSTRAINED_SCHEMA",
    "SchemaGuardError",
    "ValidationError",
    "PatternCompilationError",
    "UnsupportedMutationError",
    "DisallowedDeletionError",
]
