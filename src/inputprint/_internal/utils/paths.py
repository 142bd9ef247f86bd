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

"""Filesystem helpers for locating the project root."""

from __future__ import annotations

import errno
import logging
import os
from pathlib import Path
from typing import Final, Literal, TypeAlias

from inputprint._internal.exceptions import FileAccessError
from inputprint._internal.logging_utils import structured_extra
from inputprint.core.model_types import LogComponent

logger: logging.Logger = logging.getLogger("inputprint.config")

__all__ = ["ROOT_MARKERS", "RootMarker", "resolve_project_root"]

RootMarker: TypeAlias = Literal["inputprint.toml", ".inputprint.toml", "pyproject.toml"]

ROOT_MARKERS: Final[tuple[RootMarker, RootMarker, RootMarker]] = (
    "inputprint.toml",
    ".inputprint.toml",
    "pyproject.toml",
)


def resolve_project_root(start: Path | None = None) -> Path:
    """Return the nearest directory (upwards from ``start``) holding a root marker.

    Args:
        start: Directory or file to start from; defaults to the working directory.

    Returns:
        The first ancestor containing a marker, or ``start`` itself when none does.

    Raises:
        FileAccessError: If an explicit ``start`` does not exist.
    """
    base = (start or Path.cwd()).resolve()
    if base.is_file():
        base = base.parent

    checked: list[Path] = []
    for candidate in (base, *base.parents):
        checked.append(candidate)
        for marker in ROOT_MARKERS:
            if (candidate / marker).exists():
                return candidate

    if start is not None:
        if not base.exists():
            missing = FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), os.fspath(start))
            raise FileAccessError(start, missing)
        logger.debug(
            "No project markers found; using provided path %s as project root",
            base,
            extra=structured_extra(LogComponent.CONFIG, path=base),
        )
        return base

    logger.debug(
        "No project markers found in %s; using current working directory as root",
        ", ".join(str(path) for path in checked),
        extra=structured_extra(
            LogComponent.CONFIG,
            details={"checked": [str(path) for path in checked]},
        ),
    )
    return base
