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

"""Hash every path in a path set and assemble the fingerprint map."""

from __future__ import annotations

import logging
import os
from functools import partial
from types import MappingProxyType
from typing import TYPE_CHECKING

from inputprint._internal.logging_utils import structured_extra
from inputprint._internal.utils.concurrency import bounded_map, resolve_concurrency
from inputprint.core.model_types import LogComponent

from .digester import digest

if TYPE_CHECKING:
    from collections.abc import Iterable

    from inputprint.core.type_aliases import Digest, FingerprintMap, ResolvedPath

__all__ = ["assemble"]

logger: logging.Logger = logging.getLogger("inputprint.fingerprint")


def assemble(
    path_set: Iterable[ResolvedPath],
    root_dir: str | os.PathLike[str],
    *,
    concurrency: int | None = None,
) -> FingerprintMap:
    """Digest every path concurrently and collect ``path -> digest`` pairs.

    Worker threads only compute digests; the calling thread is the single
    writer of the result mapping. The first unreadable file aborts the whole
    call and no partial mapping is returned.

    Args:
        path_set: Duplicate-free paths produced by expansion.
        root_dir: Directory relative paths are joined to.
        concurrency: Ceiling on simultaneous reads.

    Returns:
        Read-only mapping with keys in sorted order.

    Raises:
        FileAccessError: If any file cannot be read.
    """
    limit = resolve_concurrency(concurrency)
    digest_one = partial(digest, root_dir=root_dir)

    collected: dict[ResolvedPath, Digest] = {}
    for path, value in bounded_map(digest_one, path_set, limit=limit):
        collected[path] = value

    logger.debug(
        "Hashed %d file(s)",
        len(collected),
        extra=structured_extra(
            LogComponent.ASSEMBLER,
            path=root_dir,
            file_count=len(collected),
            concurrency=limit,
        ),
    )
    return MappingProxyType({path: collected[path] for path in sorted(collected)})
