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

"""Enumerations shared by the logging, CLI, and fingerprinting layers."""

from __future__ import annotations

from inputprint.compat import Self, StrEnum

__all__ = ["LogComponent", "LogFormat", "OutputFormat"]


class _ParsableEnum(StrEnum):
    """String enum that can be parsed case-insensitively from user input."""

    @classmethod
    def from_str(cls, raw: str) -> Self:
        value = raw.strip().lower()
        for member in cls:
            if member.value == value:
                return member
        message = f"Unknown {cls.__name__} value '{raw}'"
        raise ValueError(message)


class LogFormat(_ParsableEnum):
    TEXT = "text"
    JSON = "json"


class LogComponent(_ParsableEnum):
    """Pipeline stage or layer a log record originates from."""

    CLI = "cli"
    CONFIG = "config"
    MATCHER = "matcher"
    EXPANSION = "expansion"
    DIGEST = "digest"
    ASSEMBLER = "assembler"


class OutputFormat(_ParsableEnum):
    """Rendering used by ``inputprint fingerprint`` for the resulting map."""

    JSON = "json"
    TEXT = "text"
