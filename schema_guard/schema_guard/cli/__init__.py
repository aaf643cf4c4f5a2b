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

"""Command-line validation of data documents against a schema document."""

import copy
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

from ..exceptions import DocumentLoadError, ValidationError
from ..loader import DocumentLoader, document_loader
from ..models.dialect import check_schema_document
from ..validator import JsonSchemaValidator
from .report import ValidationReport

__all__ = ['check_schema_file', 'validate_files', 'normalize_files', 'ValidationReport']


def check_schema_file(schema_path: Path, schema: Any) -> ValidationReport:
    """Report every dialect issue in a loaded schema document."""
    report = ValidationReport(schema_path)
    for issue in check_schema_document(schema):
        report.add_error(issue.message, pointer=issue.pointer)
    return report


def validate_files(
    schema: Mapping[str, Any],
    file_paths: List[Path],
    validator: Optional[JsonSchemaValidator] = None,
    loader: Optional[DocumentLoader] = None,
) -> List[ValidationReport]:
    """Validate data documents against a schema.

    Args:
        schema: Parsed schema document
        file_paths: List of data file paths
        validator: Validator to use; a new one is created if None
        loader: Document loader to use; the global loader if None

    Returns:
        List of ValidationReport objects, one per file
    """
    validator = validator if validator is not None else JsonSchemaValidator()
    loader = loader if loader is not None else document_loader

    results = []
    for file_path in file_paths:
        report = ValidationReport(file_path)
        try:
            data = loader.load(file_path)
            validator.validate(data, schema)
        except DocumentLoadError as e:
            report.add_error(str(e))
        except ValidationError as e:
            report.add_error(
                e.message,
                value_path=e.value_path_string('data'),
                schema_path=e.schema_path_string('schema'),
                pointer=e.value_pointer(),
            )
        results.append(report)

    return results


def normalize_files(
    schema: Mapping[str, Any],
    file_paths: List[Path],
    validator: Optional[JsonSchemaValidator] = None,
    loader: Optional[DocumentLoader] = None,
) -> Dict[str, Any]:
    """Normalize data documents against a schema.

    Returns:
        Mapping of file path to normalized document

    Raises:
        DocumentLoadError: If a data file cannot be loaded
    """
    validator = validator if validator is not None else JsonSchemaValidator()
    loader = loader if loader is not None else document_loader

    normalized = {}
    for file_path in file_paths:
        # Normalization works in place; keep cached documents untouched.
        data = copy.deepcopy(loader.load(file_path))
        normalized[str(file_path)] = validator.get_valid_value_or_default(schema, data)
    return normalized
