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

"""Unit tests for multi-pattern expansion."""

from __future__ import annotations

import glob
import os
import threading
import time
from pathlib import Path
from typing import cast

import pytest

from inputprint.core.type_aliases import ResolvedPath
from inputprint.exceptions import InputprintValidationError, PatternExpansionError
from inputprint.exceptions import FileAccessError
from inputprint.fingerprint import GlobMatcher, expand
from inputprint.fingerprint import expansion as expansion_module

pytestmark = pytest.mark.unit


def _write(path: Path, content: str = "") -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    _ = path.write_text(content, encoding="utf-8")


class _TrackingMatcher:
    """Matcher stand-in that records how many matches run at the same time."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self.active = 0
        self.peak = 0
        self.calls = 0

    def match(
        self,
        pattern: str,
        root_dir: str | os.PathLike[str],
        *,
        check_root: bool = True,
    ) -> list[ResolvedPath]:
        del root_dir, check_root
        with self._lock:
            self.active += 1
            self.calls += 1
            self.peak = max(self.peak, self.active)
        try:
            time.sleep(0.005)
            return [ResolvedPath(f"{pattern}.out")]
        finally:
            with self._lock:
                self.active -= 1


def test_expand_merges_and_deduplicates(tmp_path: Path) -> None:
    _write(tmp_path / "a.txt")
    _write(tmp_path / "b.txt")
    _write(tmp_path / "c.md")

    result = expand(["*.txt", "a.*", "a.txt"], tmp_path)

    assert result == frozenset({"a.txt", "b.txt"})
    assert isinstance(result, frozenset)


def test_expand_result_ignores_pattern_order(tmp_path: Path) -> None:
    _write(tmp_path / "src" / "main.py")
    _write(tmp_path / "README.md")
    patterns = ["src/**/*.py", "*.md", "missing/*"]

    assert expand(patterns, tmp_path) == expand(list(reversed(patterns)), tmp_path)


def test_expand_tolerates_patterns_without_matches(tmp_path: Path) -> None:
    _write(tmp_path / "a.txt")

    assert expand(["*.txt", "*.none"], tmp_path) == frozenset({"a.txt"})


def test_expand_raises_when_nothing_matches(tmp_path: Path) -> None:
    _write(tmp_path / "a.txt")

    with pytest.raises(PatternExpansionError) as excinfo:
        _ = expand(["*.none", "other/*.none"], tmp_path)

    assert excinfo.value.patterns == ("*.none", "other/*.none")
    assert str(excinfo.value) == (
        'Couldn\'t find any files matching provided glob patterns: ["*.none", "other/*.none"].'
    )


def test_expand_empty_pattern_list_raises(tmp_path: Path) -> None:
    with pytest.raises(PatternExpansionError) as excinfo:
        _ = expand([], tmp_path)

    assert excinfo.value.patterns == ()


def test_expand_rejects_bare_string(tmp_path: Path) -> None:
    with pytest.raises(InputprintValidationError):
        _ = expand("*.txt", tmp_path)


def test_expand_bounds_simultaneous_matches(tmp_path: Path) -> None:
    tracker = _TrackingMatcher()
    patterns = [f"pattern-{index}" for index in range(60)]

    result = expand(patterns, tmp_path, concurrency=4, matcher=cast("GlobMatcher", tracker))

    assert len(result) == 60
    assert tracker.calls == 60
    assert 1 <= tracker.peak <= 4


def test_expand_matches_duplicate_patterns_once(tmp_path: Path) -> None:
    tracker = _TrackingMatcher()

    result = expand(["same", "same", "other"], tmp_path, matcher=cast("GlobMatcher", tracker))

    assert result == frozenset({"same.out", "other.out"})
    assert tracker.calls == 2


def test_expand_checks_root_once_for_many_patterns(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    _write(tmp_path / "a.txt")
    checked: list[str | os.PathLike[str]] = []
    real_check = expansion_module.ensure_listable

    def _counting_check(root_dir: str | os.PathLike[str]) -> None:
        checked.append(root_dir)
        real_check(root_dir)

    monkeypatch.setattr(expansion_module, "ensure_listable", _counting_check)

    result = expand(["*.txt", "a.*", "*.md", "sub/*", "**/*.txt"], tmp_path)

    assert result == frozenset({"a.txt"})
    assert checked == [tmp_path]


def test_expand_missing_root_raises_before_matching(tmp_path: Path) -> None:
    tracker = _TrackingMatcher()
    missing = tmp_path / "missing"

    with pytest.raises(FileAccessError) as excinfo:
        _ = expand(["a", "b", "c"], missing, matcher=cast("GlobMatcher", tracker))

    assert excinfo.value.path == str(missing)
    assert tracker.calls == 0


def test_expand_absolute_patterns_skip_root_check(tmp_path: Path) -> None:
    _write(tmp_path / "pinned.cfg")
    pattern = os.path.join(glob.escape(str(tmp_path)), "*.cfg")

    assert expand([pattern], tmp_path / "missing") == frozenset({str(tmp_path / "pinned.cfg")})
