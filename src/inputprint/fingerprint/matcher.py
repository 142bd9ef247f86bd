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

"""Resolve a single glob pattern to the files it matches.

Matched paths keep the form of the pattern that produced them. A relative
pattern yields paths relative to the root directory and an absolute pattern
yields absolute paths. Nothing is passed through ``realpath``: these strings
feed a cache key, and a relative key must read the same on every machine
while an absolute key deliberately pins a machine-global file such as
``/etc/os-release``.

Patterns are walked one path segment at a time. ``**`` descends with
``os.walk(followlinks=False)`` and never enters a symlinked directory, so a
link back to an ancestor cannot multiply or loop the result. A symlinked
file is still matched under its link path, and a symlinked directory named
by a literal or single-level wildcard segment is still entered.
"""

from __future__ import annotations

import fnmatch
import glob
import logging
import os
from dataclasses import dataclass
from functools import lru_cache
from typing import TYPE_CHECKING

from inputprint._internal.exceptions import FileAccessError
from inputprint._internal.logging_utils import structured_extra
from inputprint.core.model_types import LogComponent
from inputprint.core.type_aliases import ResolvedPath

if TYPE_CHECKING:
    from collections.abc import Iterator

__all__ = ["GlobMatcher", "default_matcher", "match", "ensure_listable"]

logger: logging.Logger = logging.getLogger("inputprint.fingerprint")

_RECURSIVE_SEGMENT = "**"
_SEPARATORS = os.sep + (os.altsep or "")


@dataclass(frozen=True, slots=True)
class GlobMatcher:
    """Immutable segment-wise glob engine.

    Attributes:
        recursive: Whether ``**`` spans any number of directories.
    """

    recursive: bool = True

    def match(
        self,
        pattern: str,
        root_dir: str | os.PathLike[str],
        *,
        check_root: bool = True,
    ) -> list[ResolvedPath]:
        """Return the files matched by ``pattern`` under ``root_dir``.

        Directories are never returned. Hidden entries only match when the
        pattern component itself starts with a dot. An empty result is not
        an error.

        Args:
            pattern: Relative or absolute glob expression.
            root_dir: Directory relative patterns are evaluated against.
            check_root: Confirm ``root_dir`` can be listed before matching a
                relative pattern. Callers that already did so pass ``False``.

        Returns:
            Matched file paths in the same form as ``pattern``.

        Raises:
            FileAccessError: If ``root_dir`` cannot be enumerated for a
                relative pattern.
        """
        root = os.fspath(root_dir)
        absolute = os.path.isabs(pattern)
        if check_root and not absolute:
            ensure_listable(root)
        walk = _PatternWalk(root="" if absolute else root, recursive=self.recursive)
        anchor, segments = _split_pattern(pattern)
        entries = dict.fromkeys(walk.expand(anchor, segments))
        results = [
            ResolvedPath(entry if absolute else _portable(entry))
            for entry in entries
            if os.path.isfile(walk.location(entry))
        ]
        logger.debug(
            "Pattern %s matched %d file(s)",
            pattern,
            len(results),
            extra=structured_extra(
                LogComponent.MATCHER,
                path=root,
                file_count=len(results),
                details={"pattern": pattern},
            ),
        )
        return results


@dataclass(frozen=True, slots=True)
class _PatternWalk:
    # ``root`` is empty for absolute patterns, whose entries are already
    # filesystem locations.
    root: str
    recursive: bool

    def location(self, entry: str) -> str:
        if not self.root:
            return entry
        return os.path.join(self.root, entry) if entry else self.root

    def expand(self, current: str, segments: tuple[str, ...]) -> Iterator[str]:
        if not segments:
            yield current
            return
        head, rest = segments[0], segments[1:]
        if head == _RECURSIVE_SEGMENT and self.recursive:
            if rest:
                for directory in self._walk(current, include_files=False):
                    yield from self.expand(directory, rest)
            else:
                yield from self._walk(current, include_files=True)
            return
        if not glob.has_magic(head):
            candidate = _join(current, head)
            if not rest or os.path.isdir(self.location(candidate)):
                yield from self.expand(candidate, rest)
            return
        for name in self._list_matching(current, head):
            candidate = _join(current, name)
            if not rest or os.path.isdir(self.location(candidate)):
                yield from self.expand(candidate, rest)

    def _walk(self, current: str, *, include_files: bool) -> Iterator[str]:
        top = self.location(current)
        for dirpath, dirnames, filenames in os.walk(top, followlinks=False):
            dirnames[:] = sorted(
                d
                for d in dirnames
                if not _is_hidden(d) and not os.path.islink(os.path.join(dirpath, d))
            )
            relative = os.path.relpath(dirpath, top)
            here = current if relative == os.curdir else _join(current, relative)
            if include_files:
                for fname in sorted(filenames):
                    if not _is_hidden(fname):
                        yield _join(here, fname)
            else:
                yield here

    def _list_matching(self, current: str, segment: str) -> list[str]:
        try:
            with os.scandir(self.location(current)) as entries:
                names = [entry.name for entry in entries]
        except OSError:
            return []
        if not _is_hidden(segment):
            names = [name for name in names if not _is_hidden(name)]
        return sorted(fnmatch.filter(names, segment))


def _split_pattern(pattern: str) -> tuple[str, tuple[str, ...]]:
    drive, tail = os.path.splitdrive(pattern)
    body = tail.lstrip(_SEPARATORS)
    anchor = drive + tail[: len(tail) - len(body)]
    if os.altsep:
        body = body.replace(os.altsep, os.sep)
    segments = tuple(part for part in body.split(os.sep) if part not in ("", os.curdir))
    return anchor, segments


def _join(current: str, name: str) -> str:
    return os.path.join(current, name) if current else name


def _is_hidden(name: str) -> bool:
    return name.startswith(".")


def ensure_listable(root_dir: str | os.PathLike[str]) -> None:
    """Raise ``FileAccessError`` unless ``root_dir`` can be listed."""
    root = os.fspath(root_dir)
    try:
        with os.scandir(root) as entries:
            next(entries, None)
    except OSError as exc:
        raise FileAccessError(root, exc) from exc


def _portable(entry: str) -> str:
    return entry.replace(os.sep, "/") if os.sep != "/" else entry


@lru_cache(maxsize=1)
def default_matcher() -> GlobMatcher:
    """Return the process-wide matcher, building it on first use."""
    return GlobMatcher()


def match(pattern: str, root_dir: str | os.PathLike[str]) -> list[ResolvedPath]:
    """Match ``pattern`` under ``root_dir`` with the shared matcher."""
    return default_matcher().match(pattern, root_dir)
