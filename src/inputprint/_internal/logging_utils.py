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

"""Structured logging for the fingerprinting pipeline and the CLI.

Every inputprint logger hangs below ``inputprint``. ``configure_logging``
owns that root: it installs one stream handler with either a readable text
formatter or a one-object-per-line JSON formatter. Library callers that never
call it get standard ``logging`` propagation and see nothing unless their
own handlers are configured.

Records carry their structured fields as attributes set through
``structured_extra``; the JSON formatter copies those attributes verbatim.
"""

from __future__ import annotations

import json
import logging
import os
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from datetime import datetime
from typing import Final, Literal, cast

from inputprint.compat import UTC, TypedDict, Unpack, override
from inputprint.core.model_types import LogComponent, LogFormat
from inputprint.json import normalize_enums_for_json

ROOT_LOGGER_NAME: Final[str] = "inputprint"
LOG_FORMAT_ENV: Final[str] = "INPUTPRINT_LOG_FORMAT"
LOG_LEVEL_ENV: Final[str] = "INPUTPRINT_LOG_LEVEL"

_LEVELS_BY_NAME: Final[dict[str, int]] = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warning": logging.WARNING,
    "error": logging.ERROR,
}
LOG_FORMATS: Final[tuple[Literal["text", "json"], ...]] = ("text", "json")
LOG_LEVELS: Final[tuple[Literal["debug", "info", "warning", "error"], ...]] = (
    "debug",
    "info",
    "warning",
    "error",
)
CHILD_LOGGERS: Final[tuple[str, ...]] = (
    "inputprint.cli",
    "inputprint.config",
    "inputprint.fingerprint",
)


class _StructuredLogBase(TypedDict):
    component: LogComponent


class StructuredLogExtra(_StructuredLogBase, total=False):
    """Structured logging extras accepted by inputprint log records."""

    path: str
    pattern_count: int
    file_count: int
    concurrency: int
    duration_ms: float
    exit_code: int
    details: Mapping[str, object]


class _StructuredLogKwargs(TypedDict, total=False):
    path: str | os.PathLike[str]
    pattern_count: int
    file_count: int
    concurrency: int
    duration_ms: float
    exit_code: int
    details: Mapping[str, object]


def _as_path(value: object) -> object:
    return os.fspath(cast("str | os.PathLike[str]", value))


def _as_count(value: object) -> object:
    return int(cast("int", value))


def _as_millis(value: object) -> object:
    return round(float(cast("float", value)), 3)


def _as_details(value: object) -> object:
    if not isinstance(value, Mapping):
        return None
    details = dict(cast("Mapping[str, object]", value))
    return details or None


_FIELD_CONVERTERS: Final[dict[str, Callable[[object], object]]] = {
    "path": _as_path,
    "pattern_count": _as_count,
    "file_count": _as_count,
    "concurrency": _as_count,
    "duration_ms": _as_millis,
    "exit_code": _as_count,
    "details": _as_details,
}
STRUCTURED_FIELDS: Final[tuple[str, ...]] = ("component", *_FIELD_CONVERTERS)


@dataclass(slots=True, frozen=True)
class LogConfig:
    """Outcome of ``configure_logging``.

    Attributes:
        format: Formatter that was installed.
        level: Numeric level applied to the inputprint loggers.
        level_name: Lower-case name of ``level``.
    """

    format: LogFormat
    level: int
    level_name: str


class JSONLogFormatter(logging.Formatter):
    """Render each record as a single JSON object."""

    @override
    def format(self, record: logging.LogRecord) -> str:
        """Serialise ``record`` with its structured fields.

        Args:
            record: Log record to serialise.

        Returns:
            One line of JSON.
        """
        payload: dict[str, object] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=UTC).isoformat(),
            "level": record.levelname.lower(),
            "logger": record.name,
            "message": record.getMessage(),
            "thread": record.threadName,
        }
        payload.update(
            (field, getattr(record, field)) for field in STRUCTURED_FIELDS if hasattr(record, field)
        )
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(normalize_enums_for_json(payload), ensure_ascii=False)


class TextLogFormatter(logging.Formatter):
    """Single-line ``[LEVEL] message`` output for terminals."""

    def __init__(self) -> None:
        super().__init__("[%(levelname)s] %(message)s")


def _level_from_name(raw: str) -> int:
    return _LEVELS_BY_NAME.get(raw.strip().lower(), logging.INFO)


def _resolve_format(log_format: LogFormat | str | None) -> LogFormat:
    if isinstance(log_format, LogFormat):
        return log_format
    raw = log_format if log_format is not None else os.getenv(LOG_FORMAT_ENV)
    return LogFormat.from_str(raw) if raw else LogFormat.TEXT


def _resolve_level(log_level: str | int | None) -> int:
    if isinstance(log_level, int):
        return log_level
    raw = log_level if log_level is not None else os.getenv(LOG_LEVEL_ENV)
    return _level_from_name(raw) if raw else logging.INFO


def configure_logging(
    log_format: LogFormat | str | None = None,
    *,
    log_level: str | int | None = None,
) -> LogConfig:
    """Install the inputprint handler on the ``inputprint`` logger tree.

    Args:
        log_format: ``text`` or ``json``. ``None`` reads
            ``INPUTPRINT_LOG_FORMAT`` and falls back to ``text``.
        log_level: Level name or number. ``None`` reads
            ``INPUTPRINT_LOG_LEVEL`` and falls back to ``info``; unknown
            names also resolve to ``info``.

    Returns:
        The format and level that were applied.

    Raises:
        ValueError: If ``log_format`` names an unknown format.
    """
    selected_format = _resolve_format(log_format)
    level = _resolve_level(log_level)

    handler = logging.StreamHandler()
    handler.setFormatter(
        JSONLogFormatter() if selected_format is LogFormat.JSON else TextLogFormatter(),
    )
    root_logger = logging.getLogger(ROOT_LOGGER_NAME)
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(level)
    root_logger.propagate = False
    for child in CHILD_LOGGERS:
        logging.getLogger(child).setLevel(level)

    return LogConfig(
        format=selected_format,
        level=level,
        level_name=logging.getLevelName(level).lower(),
    )


def structured_extra(
    component: LogComponent,
    **kwargs: Unpack[_StructuredLogKwargs],
) -> StructuredLogExtra:
    """Build the ``extra=`` mapping for a log call.

    ``None`` values and empty ``details`` are dropped so records only carry
    the fields that apply.

    Args:
        component: Pipeline stage or layer emitting the record.
        **kwargs: Optional structured fields.

    Returns:
        Mapping suitable for the ``extra`` parameter of a logging call.
    """
    extra: dict[str, object] = {"component": component}
    supplied = cast("dict[str, object]", kwargs)
    for key, convert in _FIELD_CONVERTERS.items():
        value = supplied.get(key)
        if value is None:
            continue
        converted = convert(value)
        if converted is not None:
            extra[key] = converted
    return cast("StructuredLogExtra", extra)


__all__ = [
    "LOG_FORMATS",
    "LOG_LEVELS",
    "LogConfig",
    "StructuredLogExtra",
    "configure_logging",
    "structured_extra",
]
