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

"""Expand a collection of glob patterns into one duplicate-free path set."""

from __future__ import annotations

import logging
import os
from functools import partial
from typing import TYPE_CHECKING

from inputprint._internal.exceptions import InputprintValidationError, PatternExpansionError
from inputprint._internal.logging_utils import structured_extra
from inputprint._internal.utils.concurrency import bounded_map, resolve_concurrency
from inputprint.core.model_types import LogComponent
from inputprint.core.type_aliases import PathSet, ResolvedPath

from .matcher import GlobMatcher, default_matcher, ensure_listable

if TYPE_CHECKING:
    from collections.abc import Sequence

__all__ = ["expand"]

logger: logging.Logger = logging.getLogger("inputprint.fingerprint")


def expand(
    patterns: Sequence[str],
    root_dir: str | os.PathLike[str],
    *,
    concurrency: int | None = None,
    matcher: GlobMatcher | None = None,
) -> PathSet:
    """Resolve every pattern and merge the matches into a single set.

    Patterns are matched concurrently, at most ``concurrency`` at a time.
    A file matched by several patterns appears once.

    Args:
        patterns: Glob expressions; their order has no effect on the result.
        root_dir: Directory relative patterns are evaluated against.
        concurrency: Ceiling on simultaneous matches (defaults to the
            resolved process setting).
        matcher: Matcher to use instead of the shared default.

    Returns:
        Frozen set of matched paths.

    Raises:
        PatternExpansionError: If no pattern matched any file.
        InputprintValidationError: If ``patterns`` is a bare string.
        FileAccessError: If the root directory cannot be enumerated.
    """
    if isinstance(patterns, str):
        message = "patterns must be a sequence of glob strings, not a single string"
        raise InputprintValidationError(message)
    limit = resolve_concurrency(concurrency)
    active = matcher if matcher is not None else default_matcher()
    supplied = list(patterns)
    if any(not os.path.isabs(pattern) for pattern in supplied):
        ensure_listable(root_dir)
    match_one = partial(active.match, root_dir=root_dir, check_root=False)

    matched: set[ResolvedPath] = set()
    for _pattern, results in bounded_map(match_one, dict.fromkeys(supplied), limit=limit):
        matched.update(results)

    if not matched:
        raise PatternExpansionError(supplied)

    logger.debug(
        "Expanded %d pattern(s) into %d file(s)",
        len(supplied),
        len(matched),
        extra=structured_extra(
            LogComponent.EXPANSION,
            path=root_dir,
            pattern_count=len(supplied),
            file_count=len(matched),
            concurrency=limit,
        ),
    )
    return frozenset(matched)
