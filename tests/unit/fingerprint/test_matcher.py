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

"""Unit tests for single-pattern glob matching."""

from __future__ import annotations

import dataclasses
import glob
import os
from pathlib import Path

import pytest

from inputprint.exceptions import FileAccessError
from inputprint.fingerprint import GlobMatcher, default_matcher, match

pytestmark = pytest.mark.unit


def _write(path: Path, content: str = "") -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    _ = path.write_text(content, encoding="utf-8")


def test_match_relative_pattern_returns_relative_paths(tmp_path: Path) -> None:
    _write(tmp_path / "a.txt", "a")
    _write(tmp_path / "b.md", "b")

    assert match("*.txt", tmp_path) == ["a.txt"]


def test_match_double_star_spans_directories(tmp_path: Path) -> None:
    _write(tmp_path / "a.txt")
    _write(tmp_path / "sub" / "b.txt")
    _write(tmp_path / "sub" / "deep" / "c.txt")

    assert sorted(match("**/*.txt", tmp_path)) == ["a.txt", "sub/b.txt", "sub/deep/c.txt"]


def test_match_excludes_directories(tmp_path: Path) -> None:
    _write(tmp_path / "real.txt")
    (tmp_path / "folder.txt").mkdir()

    assert match("*.txt", tmp_path) == ["real.txt"]


def test_match_absolute_pattern_returns_absolute_paths(tmp_path: Path) -> None:
    external = tmp_path / "external"
    project = tmp_path / "project"
    project.mkdir()
    _write(external / "os-release", "ID=test\n")
    pattern = os.path.join(glob.escape(str(external)), "os-*")

    results = match(pattern, project)

    assert results == [str(external / "os-release")]
    assert all(os.path.isabs(entry) for entry in results)


def test_match_absolute_pattern_ignores_missing_root(tmp_path: Path) -> None:
    _write(tmp_path / "pinned.cfg")
    pattern = os.path.join(glob.escape(str(tmp_path)), "*.cfg")

    assert match(pattern, tmp_path / "does-not-exist") == [str(tmp_path / "pinned.cfg")]


def test_match_skips_hidden_files_unless_pattern_has_dot(tmp_path: Path) -> None:
    _write(tmp_path / "visible.env")
    _write(tmp_path / ".hidden.env")

    assert match("*.env", tmp_path) == ["visible.env"]
    assert match(".*.env", tmp_path) == [".hidden.env"]


def test_match_without_hits_returns_empty_list(tmp_path: Path) -> None:
    _write(tmp_path / "a.txt")

    assert match("*.nothing", tmp_path) == []


def test_match_missing_root_raises_file_access_error(tmp_path: Path) -> None:
    missing = tmp_path / "missing"

    with pytest.raises(FileAccessError) as excinfo:
        _ = match("*.txt", missing)

    assert excinfo.value.path == str(missing)
    assert isinstance(excinfo.value.error, FileNotFoundError)


@pytest.mark.skipif(not hasattr(os, "symlink"), reason="symlinks unavailable")
def test_match_keeps_symlink_names_unresolved(tmp_path: Path) -> None:
    _write(tmp_path / "target.txt", "payload")
    (tmp_path / "alias.txt").symlink_to(tmp_path / "target.txt")

    assert sorted(match("*.txt", tmp_path)) == ["alias.txt", "target.txt"]


@pytest.mark.skipif(not hasattr(os, "symlink"), reason="symlinks unavailable")
def test_match_double_star_does_not_follow_directory_links(tmp_path: Path) -> None:
    _write(tmp_path / "src" / "a.txt", "a")
    (tmp_path / "src" / "loop").symlink_to(tmp_path, target_is_directory=True)
    (tmp_path / "src" / "again").symlink_to(tmp_path / "src", target_is_directory=True)

    assert match("**/*.txt", tmp_path) == ["src/a.txt"]
    assert match("src/**", tmp_path) == ["src/a.txt"]


@pytest.mark.skipif(not hasattr(os, "symlink"), reason="symlinks unavailable")
def test_match_enters_directory_link_named_explicitly(tmp_path: Path) -> None:
    _write(tmp_path / "shared" / "b.txt", "b")
    (tmp_path / "linked").symlink_to(tmp_path / "shared", target_is_directory=True)

    assert match("linked/*.txt", tmp_path) == ["linked/b.txt"]
    assert sorted(match("**/*.txt", tmp_path)) == ["shared/b.txt"]


def test_match_double_star_skips_hidden_directories(tmp_path: Path) -> None:
    _write(tmp_path / "src" / "a.py")
    _write(tmp_path / ".venv" / "lib" / "b.py")

    assert match("**/*.py", tmp_path) == ["src/a.py"]
    assert match(".venv/**/*.py", tmp_path) == [".venv/lib/b.py"]


def test_match_literal_segments_and_escaped_brackets(tmp_path: Path) -> None:
    _write(tmp_path / "conf" / "[prod].toml")
    _write(tmp_path / "conf" / "p.toml")

    assert match("conf/[[]prod].toml", tmp_path) == ["conf/[prod].toml"]
    assert match("./conf/p.toml", tmp_path) == ["conf/p.toml"]
    assert match("conf/missing.toml", tmp_path) == []


def test_non_recursive_matcher_treats_double_star_as_single_segment(tmp_path: Path) -> None:
    _write(tmp_path / "sub" / "b.txt")
    _write(tmp_path / "sub" / "deep" / "c.txt")

    assert GlobMatcher(recursive=False).match("**/*.txt", tmp_path) == ["sub/b.txt"]


def test_default_matcher_is_shared_and_frozen() -> None:
    matcher = default_matcher()

    assert default_matcher() is matcher
    assert matcher.recursive is True
    with pytest.raises(dataclasses.FrozenInstanceError):
        matcher.recursive = False  # pyright: ignore[reportAttributeAccessIssue]
