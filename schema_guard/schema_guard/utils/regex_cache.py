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

"""Bounded cache of compiled ``pattern``/``patternFlags`` regular expressions."""

import logging
import re
import threading
from collections import OrderedDict
from typing import Callable, Optional, Pattern

logger = logging.getLogger(__name__)

DEFAULT_CAPACITY = 100

# patternFlags letters mapped onto ``re`` flags. "g", "y" and "u" only change
# how a pattern is iterated or decoded, not what a single search matches.
_FLAG_MAP = {
    "i": re.IGNORECASE,
    "m": re.MULTILINE,
    "s": re.DOTALL,
    "g": 0,
    "y": 0,
    "u": 0,
}

Compiler = Callable[[str, int], Pattern[str]]


def parse_pattern_flags(flags: str) -> int:
    """Translate a patternFlags string into ``re`` flags.

    Raises:
        re.error: If a flag is unknown or repeated
    """
    result = 0
    seen = set()
    for flag in flags:
        if flag not in _FLAG_MAP:
            raise re.error(f"invalid flag '{flag}'")
        if flag in seen:
            raise re.error(f"duplicate flag '{flag}'")
        seen.add(flag)
        result |= _FLAG_MAP[flag]
    return result


class RegexCache:
    """Least-recently-used cache of compiled patterns keyed by (flags, pattern)."""

    def __init__(self, capacity: int = DEFAULT_CAPACITY, compiler: Optional[Compiler] = None):
        """Initialize the cache.

        Args:
            capacity: Maximum number of compiled patterns kept
            compiler: Callable compiling ``(pattern, re_flags)``; defaults to ``re.compile``
        """
        if capacity < 1:
            raise ValueError(f"Regex cache capacity must be positive, got {capacity}")
        self.capacity = capacity
        self._compiler: Compiler = compiler if compiler is not None else re.compile
        self._entries: "OrderedDict[str, Pattern[str]]" = OrderedDict()
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def get_regex(self, pattern: str, flags: str = "") -> Pattern[str]:
        """Return the compiled pattern, compiling and caching it on a miss.

        Raises:
            re.error: If the pattern or its flags are invalid
        """
        key = f"{flags}:{pattern}"
        with self._lock:
            regex = self._entries.get(key)
            if regex is not None:
                self._entries.move_to_end(key)
                return regex

        # Compile outside the lock; a racing caller compiling the same key is harmless.
        regex = self._compiler(pattern, parse_pattern_flags(flags))

        with self._lock:
            self._entries[key] = regex
            self._entries.move_to_end(key)
            while len(self._entries) > self.capacity:
                evicted, _ = self._entries.popitem(last=False)
                logger.debug(f"Evicted regex from cache: {evicted}")
        return regex

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()
        logger.debug("Regex cache cleared")
