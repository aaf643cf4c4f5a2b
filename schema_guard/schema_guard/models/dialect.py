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

"""Well-formedness check of schema documents against the bundled dialect meta-schema."""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, List, Optional

import jsonschema

JsonPointer = str

_DIALECT_FILE = "dialect.json"

# Meta-schema cache to avoid reloading the file
_DIALECT_SCHEMA: Optional[dict] = None


@dataclass(frozen=True)
class SchemaIssue:
    message: str
    pointer: JsonPointer = ""


def _jp_escape(token: str) -> str:
    return token.replace("~", "~0").replace("/", "~1")


def get_dialect_schema_path() -> Path:
    """Get the path to the bundled dialect meta-schema."""
    return Path(__file__).parent.parent / "schema" / _DIALECT_FILE


def load_dialect_schema() -> dict:
    """Load the dialect meta-schema.

    Returns:
        Meta-schema dictionary

    Raises:
        FileNotFoundError: If the meta-schema file is missing
        json.JSONDecodeError: If the meta-schema file is invalid JSON
    """
    global _DIALECT_SCHEMA
    if _DIALECT_SCHEMA is not None:
        return _DIALECT_SCHEMA

    schema_path = get_dialect_schema_path()
    if not schema_path.exists():
        raise FileNotFoundError(f"Dialect meta-schema not found: {schema_path}")

    with open(schema_path, "r", encoding="utf-8") as f:
        _DIALECT_SCHEMA = json.load(f)
    return _DIALECT_SCHEMA


def check_schema_document(schema: Any) -> List[SchemaIssue]:
    """Check that ``schema`` is written in the dialect this engine understands.

    Unlike validation failures, which stop at the first mismatch, every issue in
    the document is reported.

    Args:
        schema: Parsed schema document

    Returns:
        List of SchemaIssue objects sorted by location (empty when well-formed)
    """
    validator = jsonschema.Draft7Validator(load_dialect_schema())
    issues: List[SchemaIssue] = []
    for error in validator.iter_errors(schema):
        tokens = [_jp_escape(str(p)) for p in error.absolute_path]
        pointer = "/" + "/".join(tokens) if tokens else ""
        issues.append(SchemaIssue(message=error.message, pointer=pointer))
    issues.sort(key=lambda issue: (issue.pointer, issue.message))
    return issues


def clear_cache() -> None:
    """Clear the meta-schema cache. Useful for testing."""
    global _DIALECT_SCHEMA
    _DIALECT_SCHEMA = None
