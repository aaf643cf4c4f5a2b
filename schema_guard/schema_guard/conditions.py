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

"""Schemas built from user-authored profile conditions.

A profile is active when its context (popup depth, page URL, pressed modifier
keys) satisfies any of its condition groups, and a group is satisfied when all
of its conditions are. Both levels are compiled into one schema so that the
validator decides activation:

    conditionGroups = [
        {"conditions": [{"type": "popupLevel", "operator": "lessThan", "value": "2"}]},
        {"conditions": [{"type": "url", "operator": "matchDomain", "value": "example.com"}]},
    ]
"""

import logging
import math
import re
from typing import Any, Callable, Dict, Iterable, List, Mapping
from urllib.parse import urlsplit

logger = logging.getLogger(__name__)

Schema = Dict[str, Any]

_SPLIT_PATTERN = re.compile(r"[,;\s]+")

# Leading decimal number, ignoring whatever follows it ("2px" reads as 2).
_NUMBER_PREFIX_PATTERN = re.compile(r"\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)", re.ASCII)


def _split(value: str) -> List[str]:
    return _SPLIT_PATTERN.split(value)


def _string_to_number(value: Any) -> float:
    match = _NUMBER_PREFIX_PATTERN.match(str(value))
    if match is None:
        return 0
    number = float(match.group(1))
    return number if math.isfinite(number) else 0


def _depth_schema(depth_schema: Schema) -> Schema:
    return {
        "required": ["depth"],
        "properties": {
            "depth": depth_schema,
        },
    }


class ProfileConditions:
    """Compiles profile condition groups into schemas."""

    def __init__(self):
        self._descriptors: Dict[str, Dict[str, Callable[[str], Schema]]] = {
            "popupLevel": {
                "equal": self._create_schema_popup_level_equal,
                "notEqual": self._create_schema_popup_level_not_equal,
                "lessThan": self._create_schema_popup_level_less_than,
                "greaterThan": self._create_schema_popup_level_greater_than,
                "lessThanOrEqual": self._create_schema_popup_level_less_than_or_equal,
                "greaterThanOrEqual": self._create_schema_popup_level_greater_than_or_equal,
            },
            "url": {
                "matchDomain": self._create_schema_url_match_domain,
                "matchRegExp": self._create_schema_url_match_reg_exp,
            },
            "modifierKeys": {
                "are": self._create_schema_modifier_keys_are,
                "areNot": self._create_schema_modifier_keys_are_not,
                "include": self._create_schema_modifier_keys_include,
                "notInclude": self._create_schema_modifier_keys_not_include,
            },
        }

    def create_schema(self, condition_groups: Iterable[Mapping[str, Any]]) -> Schema:
        """Create one schema matching contexts that satisfy any condition group.

        Args:
            condition_groups: Groups of the form ``{"conditions": [{"type", "operator", "value"}, ...]}``

        Returns:
            The combined schema; ``{}`` (match everything) when no condition is usable
        """
        any_of: List[Schema] = []
        for group in condition_groups:
            all_of: List[Schema] = []
            for condition in group.get("conditions", []):
                operators = self._descriptors.get(condition.get("type"))
                if operators is None:
                    logger.debug(f"Skipping unknown condition type: {condition.get('type')}")
                    continue

                create_schema = operators.get(condition.get("operator"))
                if create_schema is None:
                    logger.debug(f"Skipping unknown condition operator: {condition.get('operator')}")
                    continue

                all_of.append(create_schema(condition.get("value", "")))

            if len(all_of) == 1:
                any_of.append(all_of[0])
            elif len(all_of) > 1:
                any_of.append({"allOf": all_of})

        if not any_of:
            return {}
        if len(any_of) == 1:
            return any_of[0]
        return {"anyOf": any_of}

    def normalize_context(self, context: Mapping[str, Any]) -> Dict[str, Any]:
        """Copy a context object, adding ``domain`` derived from ``url``."""
        normalized_context = dict(context)
        url = normalized_context.get("url")
        if isinstance(url, str):
            try:
                hostname = urlsplit(url).hostname
            except ValueError:
                hostname = None
            if hostname:
                normalized_context["domain"] = hostname
        return normalized_context

    # popupLevel

    def _create_schema_popup_level_equal(self, value: str) -> Schema:
        return _depth_schema({"const": _string_to_number(value)})

    def _create_schema_popup_level_not_equal(self, value: str) -> Schema:
        return {"not": [self._create_schema_popup_level_equal(value)]}

    def _create_schema_popup_level_less_than(self, value: str) -> Schema:
        return _depth_schema({"type": "number", "exclusiveMaximum": _string_to_number(value)})

    def _create_schema_popup_level_greater_than(self, value: str) -> Schema:
        return _depth_schema({"type": "number", "exclusiveMinimum": _string_to_number(value)})

    def _create_schema_popup_level_less_than_or_equal(self, value: str) -> Schema:
        return _depth_schema({"type": "number", "maximum": _string_to_number(value)})

    def _create_schema_popup_level_greater_than_or_equal(self, value: str) -> Schema:
        return _depth_schema({"type": "number", "minimum": _string_to_number(value)})

    # url

    def _create_schema_url_match_domain(self, value: str) -> Schema:
        one_of = [{"const": domain.lower()} for domain in _split(value) if domain]
        return {
            "required": ["domain"],
            "properties": {
                "domain": {"oneOf": one_of},
            },
        }

    def _create_schema_url_match_reg_exp(self, value: str) -> Schema:
        return {
            "required": ["url"],
            "properties": {
                "url": {"type": "string", "pattern": value, "patternFlags": "i"},
            },
        }

    # modifierKeys

    def _create_schema_modifier_keys_are(self, value: str) -> Schema:
        return self._create_schema_modifier_keys_generic(value, exact=True, none=False)

    def _create_schema_modifier_keys_are_not(self, value: str) -> Schema:
        return {"not": [self._create_schema_modifier_keys_generic(value, exact=True, none=False)]}

    def _create_schema_modifier_keys_include(self, value: str) -> Schema:
        return self._create_schema_modifier_keys_generic(value, exact=False, none=False)

    def _create_schema_modifier_keys_not_include(self, value: str) -> Schema:
        return self._create_schema_modifier_keys_generic(value, exact=False, none=True)

    def _create_schema_modifier_keys_generic(self, value: str, *, exact: bool, none: bool) -> Schema:
        contains_list = [{"contains": {"const": key}} for key in _split(value) if key]
        modifier_keys_schema: Schema = {"type": "array"}
        if exact:
            modifier_keys_schema["maxItems"] = len(contains_list)
        if none:
            if contains_list:
                modifier_keys_schema["not"] = contains_list
        else:
            modifier_keys_schema["minItems"] = len(contains_list)
            if contains_list:
                modifier_keys_schema["allOf"] = contains_list
        return {
            "required": ["modifierKeys"],
            "properties": {
                "modifierKeys": modifier_keys_schema,
            },
        }
