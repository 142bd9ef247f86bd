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

"""Content digests for individual files.

The algorithm is fixed: SHA-1 over the raw file bytes, encoded as 40
lowercase hex characters. The digest is persisted inside cache keys, so
changing either the algorithm or the encoding invalidates every existing
key. It detects changes; it is not a tamper check.
"""

from __future__ import annotations

import hashlib
import logging
import os
from pathlib import Path
from typing import TYPE_CHECKING, Final

from inputprint._internal.exceptions import FileAccessError
from inputprint._internal.logging_utils import structured_extra
from inputprint.core.model_types import LogComponent
from inputprint.core.type_aliases import Digest

if TYPE_CHECKING:
    from collections.abc import Iterable

__all__ = [
    "DIGEST_ALGORITHM",
    "DIGEST_HEX_LENGTH",
    "digest",
    "digest_bytes",
    "resolve_location",
]

logger: logging.Logger = logging.getLogger("inputprint.fingerprint")

DIGEST_ALGORITHM: Final[str] = "sha1"
DIGEST_HEX_LENGTH: Final[int] = 40
_CHUNK_SIZE: Final[int] = 64 * 1024


def _new_hasher() -> hashlib._Hash:
    return hashlib.new(DIGEST_ALGORITHM, usedforsecurity=False)


def _digest_chunks(chunks: Iterable[bytes]) -> Digest:
    hasher = _new_hasher()
    for chunk in chunks:
        hasher.update(chunk)
    return Digest(hasher.hexdigest())


def digest_bytes(data: bytes) -> Digest:
    """Return the digest of an in-memory byte string."""
    return _digest_chunks((data,))


def resolve_location(path: str, root_dir: str | os.PathLike[str]) -> Path:
    """Return where ``path`` lives on disk: as-is when absolute, else under ``root_dir``."""
    candidate = Path(path)
    return candidate if candidate.is_absolute() else Path(root_dir) / candidate


def digest(path: str, root_dir: str | os.PathLike[str]) -> Digest:
    """Hash the complete content of one file.

    Args:
        path: Relative or absolute path as produced by pattern matching.
        root_dir: Directory relative paths are joined to.

    Returns:
        Hex digest of the file bytes.

    Raises:
        FileAccessError: If the file is missing or cannot be read.
    """
    location = resolve_location(path, root_dir)
    try:
        with location.open("rb") as handle:
            return _digest_chunks(iter(lambda: handle.read(_CHUNK_SIZE), b""))
    except OSError as exc:
        logger.debug(
            "Failed to read %s",
            location,
            extra=structured_extra(LogComponent.DIGEST, path=location),
        )
        raise FileAccessError(path, exc) from exc
