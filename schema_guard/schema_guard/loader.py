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

"""Schema and data document loader with caching support.

Documents are read with PyYAML's safe loader, which also accepts JSON.
"""

import yaml
import logging
from pathlib import Path
from typing import Any, Dict, Optional, Union

from .config import validator_config
from .exceptions import DocumentLoadError

logger = logging.getLogger(__name__)


class DocumentLoader:
    """JSON/YAML document loader with optional per-path caching."""

    def __init__(self, cache_enabled: Optional[bool] = None):
        """Initialize the loader.

        Args:
            cache_enabled: Whether to enable caching. If None, uses global config.
        """
        self.cache_enabled = cache_enabled if cache_enabled is not None else validator_config.cache_enabled
        self._cache: Dict[Path, Any] = {}

    def load(self, file_path: Union[str, Path]) -> Any:
        """Load a JSON or YAML document.

        Args:
            file_path: Path to the document

        Returns:
            Parsed content; an empty document yields None

        Raises:
            DocumentLoadError: If the file cannot be read or parsed
        """
        path = Path(file_path)

        if not path.exists():
            raise DocumentLoadError(f"Document not found: {path}")

        if not path.is_file():
            raise DocumentLoadError(f"Path is not a file: {path}")

        cache_key = path.resolve()
        if self.cache_enabled and cache_key in self._cache:
            logger.debug(f"Loading document from cache: {path}")
            return self._cache[cache_key]

        logger.debug(f"Loading document: {path}")
        try:
            with open(path, 'r', encoding='utf-8') as stream:
                document = yaml.safe_load(stream)
        except yaml.YAMLError as exc:
            raise DocumentLoadError(f"Failed to parse document {path}: {exc}") from exc
        except (OSError, UnicodeDecodeError) as exc:
            raise DocumentLoadError(f"Failed to read document {path}: {exc}") from exc

        if self.cache_enabled:
            self._cache[cache_key] = document

        return document

    def load_from_string(self, content: str) -> Any:
        """Load a JSON or YAML document from string content.

        Raises:
            DocumentLoadError: If content cannot be parsed
        """
        try:
            return yaml.safe_load(content)
        except yaml.YAMLError as exc:
            raise DocumentLoadError(f"Failed to parse document content: {exc}") from exc

    def clear_cache(self):
        """Clear the document cache."""
        self._cache.clear()
        logger.debug("Document cache cleared")


# Global loader instance
document_loader = DocumentLoader()
