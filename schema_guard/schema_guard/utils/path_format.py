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

"""Render traversal trails as human-readable locations."""

from typing import Any, Iterable, Tuple


def _pointer_escape(token: str) -> str:
    # JSON Pointer escaping: "~" -> "~0", "/" -> "~1"
    return token.replace("~", "~0").replace("/", "~1")


def format_path(trail: Iterable[Tuple[Any, Any]], base: str = "") -> str:
    """Format a trail of (key, item) parts as ``base.key[0].other``.

    String keys are joined with dots, integer keys are rendered as brackets and
    ``None`` keys (the root, or unnamed schema steps) are skipped.
    """
    result = base
    for key, _ in trail:
        if isinstance(key, bool):
            continue
        if isinstance(key, str):
            if result:
                result += "."
            result += key
        elif isinstance(key, int):
            result += f"[{key}]"
    return result


def format_pointer(trail: Iterable[Tuple[Any, Any]]) -> str:
    """Format a trail as a JSON pointer (``/key/0``); the root is ``""``."""
    tokens = [
        _pointer_escape(str(key))
        for key, _ in trail
        if key is not None and not isinstance(key, bool)
    ]
    if not tokens:
        return ""
    return "/" + "/".join(tokens)
