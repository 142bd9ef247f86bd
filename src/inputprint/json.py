# Copyright 2025 CrownOps Engineering
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

"""JSON helpers for log records and fingerprint map output."""

from __future__ import annotations

import json
import os
from collections.abc import Mapping
from enum import Enum
from typing import TypeAlias, cast

from pydantic import JsonValue

__all__ = ["JSONValue", "dump_fingerprint_map", "normalize_enums_for_json"]

JSONValue: TypeAlias = JsonValue


def _json_key(key: object) -> str:
    return str(key.value) if isinstance(key, Enum) else str(key)


def normalize_enums_for_json(value: object) -> JSONValue:
    """Convert ``value`` into plain JSON data.

    Enum members become their values, path-like objects become strings, and
    sets are emitted as sorted lists so output is stable.

    Args:
        value: Arbitrary nesting of mappings, sequences, sets and scalars.

    Returns:
        JSON-compatible data built from dicts, lists and primitives.
    """
    if isinstance(value, Enum):
        return cast("JSONValue", value.value)
    if value is None or isinstance(value, (str, int, float, bool)):
        return value
    if isinstance(value, os.PathLike):
        return os.fspath(cast("os.PathLike[str]", value))
    if isinstance(value, Mapping):
        mapping = cast("Mapping[object, object]", value)
        return {_json_key(key): normalize_enums_for_json(item) for key, item in mapping.items()}
    if isinstance(value, (set, frozenset)):
        members = sorted(cast("set[object]", value), key=str)
        return [normalize_enums_for_json(item) for item in members]
    if isinstance(value, (list, tuple)):
        return [normalize_enums_for_json(item) for item in cast("list[object]", value)]
    return str(value)


def dump_fingerprint_map(fingerprints: Mapping[str, str], *, indent: int | None = 2) -> str:
    """Serialise a fingerprint map as a JSON object with sorted keys.

    Args:
        fingerprints: Mapping of resolved paths to hex digests.
        indent: Indentation passed to ``json.dumps``; ``None`` emits one line.

    Returns:
        JSON text terminated by a newline.
    """
    payload = {str(path): str(value) for path, value in fingerprints.items()}
    return json.dumps(payload, indent=indent, sort_keys=True) + "\n"
