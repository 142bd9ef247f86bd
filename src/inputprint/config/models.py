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

"""Configuration schema for inputprint.

The TOML table is validated by a pydantic model and then turned into the
slotted ``Config`` dataclass the rest of the package works with.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import ClassVar, Final

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from inputprint._internal.exceptions import InputprintValidationError

__all__ = [
    "CONFIG_VERSION",
    "Config",
    "ConfigFieldTypeError",
    "ConfigModel",
    "ConfigReadError",
    "ConfigValidationError",
    "InvalidConfigFileError",
    "UnsupportedConfigVersionError",
    "config_from_model",
]

CONFIG_VERSION: Final[int] = 0


class ConfigValidationError(InputprintValidationError):
    """Base class for problems with inputprint configuration."""


class ConfigFieldTypeError(ConfigValidationError):
    """A configuration key holds a value of the wrong shape."""

    def __init__(self, field: str, expected: str = "a non-empty string") -> None:
        self.field = field
        super().__init__(f"{field} must be {expected}")


class UnsupportedConfigVersionError(ConfigValidationError):
    """``config_version`` names a schema this release cannot read."""

    def __init__(self, provided: int, expected: int) -> None:
        self.provided = provided
        self.expected = expected
        super().__init__(f"Unsupported config_version {provided}; expected {expected}")


class ConfigReadError(ConfigValidationError):
    """A configuration file is missing, unreadable, or not valid TOML.

    Attributes:
        path: File that was being loaded.
        error: Exception raised while reading or parsing it.
    """

    def __init__(self, path: Path, error: Exception) -> None:
        self.path = path
        self.error = error
        super().__init__(f"Unable to load configuration from {path}: {error}")


class InvalidConfigFileError(ConfigValidationError):
    """A configuration file parsed but its content failed validation.

    Attributes:
        path: Offending file.
        error: Validation error describing the problem.
    """

    def __init__(self, path: Path, error: Exception) -> None:
        self.path = path
        self.error = error
        super().__init__(f"Invalid inputprint configuration in {path}: {error}")


class ConfigModel(BaseModel):
    """Validated content of an ``inputprint`` TOML table.

    Attributes:
        config_version: Schema version; only ``0`` is understood.
        patterns: Glob patterns whose files feed the fingerprint. A single
            string is accepted as a one-element list.
        root: Directory relative patterns are evaluated against. Relative
            values are taken from the directory holding the config file.
        concurrency: Ceiling on simultaneous filesystem operations per stage.
    """

    model_config: ClassVar[ConfigDict] = ConfigDict(extra="forbid")

    config_version: int = Field(default=CONFIG_VERSION)
    patterns: list[str] = Field(default_factory=list)
    root: Path | None = None
    concurrency: int | None = Field(default=None, ge=1)

    @field_validator("patterns", mode="before")
    @classmethod
    def _coerce_patterns(cls, value: object) -> list[str]:
        if value is None:
            return []
        items = [value] if isinstance(value, str) else value
        if not isinstance(items, (list, tuple)):
            raise ConfigFieldTypeError("patterns", "a list of glob strings")
        patterns: list[str] = []
        for item in items:
            if not isinstance(item, str) or not item.strip():
                raise ConfigFieldTypeError("patterns")
            patterns.append(item.strip())
        return patterns

    @model_validator(mode="after")
    def _require_known_version(self) -> ConfigModel:
        if self.config_version != CONFIG_VERSION:
            raise UnsupportedConfigVersionError(self.config_version, CONFIG_VERSION)
        return self


@dataclass(slots=True)
class Config:
    """Runtime fingerprinting configuration.

    Attributes:
        patterns: Glob patterns to fingerprint.
        root: Absolute directory relative patterns are evaluated against, or
            ``None`` to use the project root.
        concurrency: Explicit concurrency ceiling, or ``None`` for the default.
    """

    patterns: list[str] = field(default_factory=list)
    root: Path | None = None
    concurrency: int | None = None


def config_from_model(base_dir: Path, model: ConfigModel) -> Config:
    """Convert a validated model into a runtime ``Config``.

    Args:
        base_dir: Directory containing the configuration file.
        model: Validated configuration model.

    Returns:
        Runtime configuration with ``root`` resolved against ``base_dir``.
    """
    root = model.root
    if root is not None and not root.is_absolute():
        root = (base_dir / root).resolve()
    return Config(patterns=list(model.patterns), root=root, concurrency=model.concurrency)
