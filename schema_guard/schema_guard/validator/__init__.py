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

"""Public entry point tying together validation, normalization and guarded views."""

from typing import Any, Mapping, Optional

from ..config import ValidatorConfig, validator_config
from ..models.schema_types import MISSING, UNCONSTRAINED_SCHEMA
from ..utils.regex_cache import RegexCache
from .navigator import get_property_schema
from .normalization import Normalizer
from .proxy import GuardedView
from .validation import ValidationEngine

__all__ = ['JsonSchemaValidator', 'GuardedView']

Schema = Mapping[str, Any]


class JsonSchemaValidator:
    """Validates, normalizes and guards JSON-like values against schemas."""

    unconstrained_schema = UNCONSTRAINED_SCHEMA

    def __init__(self, regex_cache: Optional[RegexCache] = None, config: Optional[ValidatorConfig] = None):
        """Initialize the validator.

        Args:
            regex_cache: Cache of compiled patterns owned by this validator. If None,
                a new cache sized from ``config`` is created.
            config: Configuration to size the cache from. If None, uses global config.
        """
        if regex_cache is None:
            config = config if config is not None else validator_config
            regex_cache = RegexCache(config.regex_cache_size)
        self._regex_cache = regex_cache
        self._engine = ValidationEngine(regex_cache)
        self._normalizer = Normalizer(self._engine)

    def create_proxy(self, target: Any, schema: Schema) -> GuardedView:
        return GuardedView(target, schema, self)

    def is_valid(self, value: Any, schema: Schema) -> bool:
        return self._engine.is_valid(value, schema)

    def validate(self, value: Any, schema: Schema) -> None:
        """Check ``value`` against ``schema``.

        Raises:
            ValidationError: With the offending value, schema and path trails
        """
        self._engine.validate(value, schema)

    def get_valid_value_or_default(self, schema: Schema, value: Any = MISSING) -> Any:
        """Return ``value`` repaired in place to fit ``schema``, or a default for it."""
        return self._normalizer.get_valid_value_or_default(schema, value)

    def get_property_schema(self, schema: Schema, key: Any, value: Any = MISSING) -> Optional[Schema]:
        return get_property_schema(schema, key, value)

    def clear_cache(self) -> None:
        self._regex_cache.clear()
