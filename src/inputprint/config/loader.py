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

"""Configuration discovery and loading for inputprint.

Configuration lives in ``inputprint.toml`` or ``.inputprint.toml`` (top-level
keys) or in ``pyproject.toml`` under ``[tool.inputprint]``. Standalone files
take precedence over ``pyproject.toml``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import cast

from pydantic import ValidationError

from inputprint._internal.logging_utils import structured_extra
from inputprint._internal.utils.paths import ROOT_MARKERS, resolve_project_root
from inputprint.compat import tomllib
from inputprint.core.model_types import LogComponent

from .models import (
    Config,
    ConfigModel,
    ConfigReadError,
    ConfigValidationError,
    InvalidConfigFileError,
    config_from_model,
)

__all__ = ["LoadedConfig", "load_config", "load_config_with_metadata"]

logger: logging.Logger = logging.getLogger("inputprint.config")


@dataclass(slots=True, frozen=True)
class LoadedConfig:
    """Container for a loaded configuration and its source path.

    Attributes:
        config: Parsed configuration instance.
        path: Filesystem path the configuration was loaded from, or None when
            defaults are used.
        base_dir: Directory the configuration applies to.
    """

    config: Config
    path: Path | None
    base_dir: Path


def load_config(explicit_path: Path | None = None, *, start: Path | None = None) -> Config:
    """Load inputprint configuration from a TOML file or use defaults.

    Args:
        explicit_path: Optional explicit path to a configuration file.
        start: Directory to begin project root discovery from.

    Returns:
        Runtime configuration.
    """
    return load_config_with_metadata(explicit_path, start=start).config


def load_config_with_metadata(
    explicit_path: Path | None = None,
    *,
    start: Path | None = None,
) -> LoadedConfig:
    """Load inputprint configuration with metadata about the source file.

    When ``explicit_path`` is given only that file is read and it must contain
    inputprint settings. Otherwise ``inputprint.toml``, ``.inputprint.toml``
    and ``pyproject.toml`` are tried in the detected project root, and the
    first file holding inputprint settings wins. Without any, defaults apply.

    Args:
        explicit_path: Optional explicit path to a configuration file.
        start: Directory to begin project root discovery from.

    Returns:
        LoadedConfig: Parsed configuration and the path it originated from.

    Raises:
        ConfigReadError: If a candidate file cannot be read or parsed.
        UnsupportedConfigVersionError: If ``config_version`` is not understood.
        ConfigFieldTypeError: If ``patterns`` is not a list of non-empty strings.
        InvalidConfigFileError: If a candidate file fails validation.
    """
    if explicit_path is not None:
        candidate = _resolve_candidate_path(explicit_path)
        loaded = _load_candidate_config(candidate, explicit=True)
        if loaded is None:  # pragma: no cover - explicit candidates raise instead
            raise InvalidConfigFileError(candidate, ValueError("no configuration found"))
        return loaded

    base_dir = resolve_project_root(start)
    for marker in ROOT_MARKERS:
        loaded = _load_candidate_config(base_dir / marker, explicit=False)
        if loaded is not None:
            return loaded

    logger.debug(
        "No inputprint configuration found; using defaults",
        extra=structured_extra(LogComponent.CONFIG, path=base_dir),
    )
    return LoadedConfig(config=Config(), path=None, base_dir=base_dir)


def _resolve_candidate_path(candidate: Path) -> Path:
    return candidate if candidate.is_absolute() else (Path.cwd() / candidate).resolve()


def _load_candidate_config(candidate: Path, *, explicit: bool) -> LoadedConfig | None:
    if not candidate.exists():
        if explicit:
            raise ConfigReadError(candidate, FileNotFoundError("file does not exist"))
        return None
    try:
        raw_map: dict[str, object] = tomllib.loads(candidate.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, tomllib.TOMLDecodeError) as exc:
        raise ConfigReadError(candidate, exc) from exc

    payload = _extract_payload(candidate, raw_map)
    if payload is None:
        if explicit:
            message = f"{candidate.name} does not define a [tool.inputprint] section"
            raise InvalidConfigFileError(candidate, ValueError(message))
        return None

    try:
        model = ConfigModel.model_validate(payload)
    except ValidationError as exc:
        specific = _config_error_from(exc)
        if specific is not None:
            raise specific from exc
        raise InvalidConfigFileError(candidate, exc) from exc

    base_dir = candidate.parent.resolve()
    logger.debug(
        "Loaded configuration from %s",
        candidate,
        extra=structured_extra(
            LogComponent.CONFIG,
            path=candidate,
            pattern_count=len(model.patterns),
        ),
    )
    return LoadedConfig(
        config=config_from_model(base_dir, model),
        path=candidate.resolve(),
        base_dir=base_dir,
    )


def _extract_payload(candidate: Path, raw_map: dict[str, object]) -> dict[str, object] | None:
    """Extract the inputprint payload from a parsed TOML document.

    Args:
        candidate: Source configuration path.
        raw_map: Data parsed from the TOML document.

    Returns:
        Mapping to validate, or None when a ``pyproject.toml`` has no
        inputprint section.

    Raises:
        InvalidConfigFileError: If ``[tool.inputprint]`` exists but is not a table.
    """
    if candidate.name != "pyproject.toml":
        return raw_map
    tool_section = raw_map.get("tool")
    if tool_section is None:
        return None
    if not isinstance(tool_section, dict):
        raise InvalidConfigFileError(candidate, ValueError("[tool] must be a TOML table"))
    section = cast("dict[str, object]", tool_section).get("inputprint")
    if section is None:
        return None
    if not isinstance(section, dict):
        raise InvalidConfigFileError(candidate, ValueError("[tool.inputprint] must be a TOML table"))
    return cast("dict[str, object]", section)


def _config_error_from(exc: ValidationError) -> ConfigValidationError | None:
    """Return the inputprint error a model validator raised, if any.

    pydantic wraps ``ValueError`` subclasses raised by validators and keeps
    the original under ``ctx["error"]``. Unwrapping it preserves the specific
    error code (for example an unsupported ``config_version``).
    """
    for err in exc.errors():
        original = err.get("ctx", {}).get("error")
        if isinstance(original, ConfigValidationError):
            return original
    return None
