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

"""Result reporting for the command-line validator."""

from pathlib import Path
from typing import Any, Dict, List, Optional


class ValidationReport:
    """Container for validation results for a single file."""

    def __init__(self, file_path: Path):
        """Initialize the report.

        Args:
            file_path: Path to the file being validated
        """
        self.file_path = file_path
        self.errors: List[Dict[str, Any]] = []

    def add_error(
        self,
        message: str,
        value_path: Optional[str] = None,
        schema_path: Optional[str] = None,
        pointer: Optional[str] = None,
    ):
        """Add an error message.

        Args:
            message: Error message
            value_path: Dotted location of the offending value
            schema_path: Dotted location of the rejecting schema
            pointer: JSON pointer of the offending value
        """
        entry = {'message': message}
        if value_path is not None:
            entry['value_path'] = value_path
        if schema_path is not None:
            entry['schema_path'] = schema_path
        if pointer is not None:
            entry['pointer'] = pointer
        self.errors.append(entry)

    @property
    def ok(self) -> bool:
        return not self.errors

    def to_dict(self) -> Dict[str, Any]:
        return {
            'file': str(self.file_path),
            'errors': self.errors,
        }
