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

"""Configuration management for schema_guard."""

import os
import logging
from dataclasses import dataclass

from .exceptions import ConfigurationError
from .utils.logging_utils import configure_split_stream_logging
from .utils.regex_cache import DEFAULT_CAPACITY


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name, str(default))
    try:
        return int(raw)
    except ValueError:
        raise ConfigurationError(f"Environment variable {name} must be an integer, got '{raw}'")


@dataclass
class ValidatorConfig:
    """Configuration class for the schema_guard engine and CLI."""
    regex_cache_size: int = DEFAULT_CAPACITY
    log_level: str = "INFO"
    print_level: str = "ERROR"
    cache_enabled: bool = True

    def __post_init__(self):
        if self.regex_cache_size < 1:
            raise ConfigurationError(f"regex_cache_size must be positive, got {self.regex_cache_size}")

    @classmethod
    def from_env(cls) -> 'ValidatorConfig':
        """Create configuration from environment variables."""
        return cls(
            regex_cache_size=_env_int('SCHEMA_GUARD_REGEX_CACHE_SIZE', DEFAULT_CAPACITY),
            log_level=os.getenv('SCHEMA_GUARD_LOG_LEVEL', 'INFO'),
            print_level=os.getenv('SCHEMA_GUARD_PRINT_LEVEL', 'ERROR'),
            cache_enabled=os.getenv('SCHEMA_GUARD_CACHE_ENABLED', 'true').lower() == 'true',
        )

    def set_logging(self) -> logging.Logger:
        """Setup logging based on configuration."""
        formatter = logging.Formatter('%(name)s - %(levelname)s - %(message)s')
        return configure_split_stream_logging(
            level=self.log_level,
            stderr_level=self.print_level,
            formatter=formatter,
        )


# Global configuration instance
validator_config = ValidatorConfig.from_env()
