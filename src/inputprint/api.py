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

"""High-level entry points for computing build-cache input fingerprints."""

from __future__ import annotations

import logging
import os
import time
from typing import TYPE_CHECKING

from inputprint._internal.logging_utils import structured_extra
from inputprint._internal.utils.concurrency import resolve_concurrency
from inputprint.core.model_types import LogComponent
from inputprint.fingerprint.assembler import assemble
from inputprint.fingerprint.expansion import expand

if TYPE_CHECKING:
    from collections.abc import Sequence

    from inputprint.config.loader import LoadedConfig
    from inputprint.core.type_aliases import FingerprintMap

__all__ = ["fingerprint_project", "get_fingerprint_map"]

logger: logging.Logger = logging.getLogger("inputprint.fingerprint")


def get_fingerprint_map(
    patterns: Sequence[str],
    root_dir: str | os.PathLike[str],
    *,
    concurrency: int | None = None,
) -> FingerprintMap:
    """Resolve ``patterns`` under ``root_dir`` and digest every matched file.

    Expansion completes before any hashing starts. Both stages share one
    concurrency ceiling. Any failure aborts the call; a partial map is never
    returned.

    Args:
        patterns: Glob patterns, relative to ``root_dir`` or absolute.
        root_dir: Directory relative patterns and paths are resolved against.
        concurrency: Ceiling on simultaneous filesystem operations per stage.
            ``None`` uses ``INPUTPRINT_CONCURRENCY`` or the default of 10.

    Returns:
        Read-only mapping of matched path to SHA-1 hex digest.

    Raises:
        PatternExpansionError: If no pattern matched any file.
        FileAccessError: If the root or a matched file cannot be read.
        ConcurrencyValueError: If ``concurrency`` is not a positive integer.
    """
    started = time.perf_counter()
    limit = resolve_concurrency(concurrency)
    path_set = expand(patterns, root_dir, concurrency=limit)
    fingerprints = assemble(path_set, root_dir, concurrency=limit)
    duration_ms = (time.perf_counter() - started) * 1000
    logger.info(
        "Fingerprinted %d file(s) from %d pattern(s) in %.1f ms",
        len(fingerprints),
        len(patterns),
        duration_ms,
        extra=structured_extra(
            LogComponent.ASSEMBLER,
            path=root_dir,
            pattern_count=len(patterns),
            file_count=len(fingerprints),
            concurrency=limit,
            duration_ms=duration_ms,
        ),
    )
    return fingerprints


def fingerprint_project(
    loaded: LoadedConfig,
    *,
    patterns: Sequence[str] | None = None,
    root_dir: str | os.PathLike[str] | None = None,
    concurrency: int | None = None,
) -> FingerprintMap:
    """Fingerprint a project using its configuration plus explicit overrides.

    Explicit arguments win over configured values. The root defaults to the
    configured ``root`` and then to the directory the configuration applies to.

    Args:
        loaded: Configuration returned by ``load_config_with_metadata``.
        patterns: Patterns replacing the configured ones when non-empty.
        root_dir: Root directory override.
        concurrency: Concurrency override.

    Returns:
        Read-only mapping of matched path to digest.
    """
    config = loaded.config
    selected_patterns = list(patterns) if patterns else list(config.patterns)
    if root_dir is not None:
        selected_root: str | os.PathLike[str] = root_dir
    elif config.root is not None:
        selected_root = config.root
    else:
        selected_root = loaded.base_dir
    selected_concurrency = concurrency if concurrency is not None else config.concurrency
    return get_fingerprint_map(selected_patterns, selected_root, concurrency=selected_concurrency)
