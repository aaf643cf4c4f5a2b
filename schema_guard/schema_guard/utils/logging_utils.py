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

"""Logging setup shared by the command-line entry points."""

import logging
import sys
from typing import Optional, Union

LevelLike = Union[int, str]


class _MaxLevelFilter(logging.Filter):
    def __init__(self, max_level: int) -> None:
        super().__init__()
        self._max_level = max_level

    def filter(self, record: logging.LogRecord) -> bool:
        return record.levelno <= self._max_level


def resolve_level(level: LevelLike, fallback: int = logging.INFO) -> int:
    """Turn a level name such as ``"debug"`` (or a numeric level) into an int."""
    if isinstance(level, int):
        return level
    return getattr(logging, str(level).upper(), fallback)


def configure_split_stream_logging(
    *,
    level: LevelLike = logging.INFO,
    stderr_level: LevelLike = logging.WARNING,
    formatter: Optional[logging.Formatter] = None,
    logger_name: str = "schema_guard",
) -> logging.Logger:
    """Configure the schema_guard logger hierarchy:

    - records below ``stderr_level`` go to stdout
    - records at or above ``stderr_level`` go to stderr

    Validation reports are printed on stdout, so problems with the run itself
    stay visible even when that output is redirected.
    """

    level = resolve_level(level)
    stderr_level = max(resolve_level(stderr_level, logging.WARNING), logging.DEBUG)

    logger = logging.getLogger(logger_name)
    logger.handlers.clear()
    logger.setLevel(level)
    logger.propagate = False

    if formatter is None:
        formatter = logging.Formatter("%(name)s - %(levelname)s - %(message)s")

    stdout_handler = logging.StreamHandler(stream=sys.stdout)
    stdout_handler.setLevel(logging.DEBUG)
    stdout_handler.addFilter(_MaxLevelFilter(stderr_level - 1))
    stdout_handler.setFormatter(formatter)

    stderr_handler = logging.StreamHandler(stream=sys.stderr)
    stderr_handler.setLevel(stderr_level)
    stderr_handler.setFormatter(formatter)

    logger.addHandler(stdout_handler)
    logger.addHandler(stderr_handler)
    return logger
