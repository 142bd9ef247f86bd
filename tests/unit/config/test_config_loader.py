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

"""Unit tests for configuration discovery, validation and loading."""

from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from inputprint.config import (
    Config,
    ConfigFieldTypeError,
    ConfigModel,
    ConfigReadError,
    InvalidConfigFileError,
    UnsupportedConfigVersionError,
    load_config,
    load_config_with_metadata,
)
from inputprint.exceptions import FileAccessError
from inputprint.runtime import resolve_project_root

pytestmark = pytest.mark.unit


def _write(path: Path, content: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    _ = path.write_text(content, encoding="utf-8")


def test_load_config_reads_standalone_file(tmp_path: Path) -> None:
    _write(
        tmp_path / "inputprint.toml",
        'config_version = 0\npatterns = ["src/**/*.py", "package.json"]\nconcurrency = 4\n',
    )

    loaded = load_config_with_metadata(start=tmp_path)

    assert loaded.path == tmp_path.resolve() / "inputprint.toml"
    assert loaded.base_dir == tmp_path.resolve()
    assert loaded.config.patterns == ["src/**/*.py", "package.json"]
    assert loaded.config.concurrency == 4
    assert loaded.config.root is None


def test_load_config_reads_pyproject_section(tmp_path: Path) -> None:
    _write(
        tmp_path / "pyproject.toml",
        '[project]\nname = "demo"\n\n[tool.inputprint]\npatterns = ["*.lock"]\n',
    )

    config = load_config(start=tmp_path)

    assert config.patterns == ["*.lock"]


def test_pyproject_without_section_uses_defaults(tmp_path: Path) -> None:
    _write(tmp_path / "pyproject.toml", '[project]\nname = "demo"\n')

    loaded = load_config_with_metadata(start=tmp_path)

    assert loaded.path is None
    assert loaded.config == Config()
    assert loaded.base_dir == tmp_path.resolve()


def test_standalone_file_wins_over_pyproject(tmp_path: Path) -> None:
    _write(tmp_path / "pyproject.toml", '[tool.inputprint]\npatterns = ["from-pyproject"]\n')
    _write(tmp_path / ".inputprint.toml", 'patterns = ["from-dotfile"]\n')

    loaded = load_config_with_metadata(start=tmp_path)

    assert loaded.config.patterns == ["from-dotfile"]
    assert loaded.path is not None and loaded.path.name == ".inputprint.toml"


def test_discovery_walks_up_from_nested_start(tmp_path: Path) -> None:
    _write(tmp_path / "inputprint.toml", 'patterns = ["*.txt"]\n')
    nested = tmp_path / "pkg" / "sub"
    nested.mkdir(parents=True)

    loaded = load_config_with_metadata(start=nested)

    assert loaded.base_dir == tmp_path.resolve()
    assert loaded.config.patterns == ["*.txt"]


def test_relative_root_resolves_against_config_directory(tmp_path: Path) -> None:
    _write(tmp_path / "inputprint.toml", 'root = "app"\npatterns = ["*"]\n')

    config = load_config(start=tmp_path)

    assert config.root == (tmp_path / "app").resolve()


def test_single_string_pattern_is_accepted(tmp_path: Path) -> None:
    _write(tmp_path / "inputprint.toml", 'patterns = "  Cargo.lock "\n')

    assert load_config(start=tmp_path).patterns == ["Cargo.lock"]


@pytest.mark.parametrize(
    "body",
    [
        "concurrency = 0\n",
        'unknown_key = "value"\n',
        'config_version = "seven"\n',
    ],
)
def test_invalid_values_raise_invalid_config_file_error(tmp_path: Path, body: str) -> None:
    _write(tmp_path / "inputprint.toml", body)

    with pytest.raises(InvalidConfigFileError) as excinfo:
        _ = load_config(start=tmp_path)

    assert excinfo.value.path == tmp_path.resolve() / "inputprint.toml"


def test_unsupported_version_keeps_its_own_error(tmp_path: Path) -> None:
    _write(tmp_path / "inputprint.toml", 'config_version = 7\npatterns = ["*.txt"]\n')

    with pytest.raises(UnsupportedConfigVersionError) as excinfo:
        _ = load_config(start=tmp_path)

    assert excinfo.value.provided == 7
    assert excinfo.value.expected == 0
    assert isinstance(excinfo.value.__cause__, ValidationError)


@pytest.mark.parametrize("body", ['patterns = ["ok", ""]\n', "patterns = [1, 2]\n", "patterns = 5\n"])
def test_malformed_patterns_keep_their_own_error(tmp_path: Path, body: str) -> None:
    _write(tmp_path / "inputprint.toml", body)

    with pytest.raises(ConfigFieldTypeError) as excinfo:
        _ = load_config(start=tmp_path)

    assert excinfo.value.field == "patterns"


def test_malformed_toml_raises_config_read_error(tmp_path: Path) -> None:
    _write(tmp_path / "inputprint.toml", "patterns = [\n")

    with pytest.raises(ConfigReadError):
        _ = load_config(start=tmp_path)


def test_explicit_missing_file_raises_config_read_error(tmp_path: Path) -> None:
    with pytest.raises(ConfigReadError):
        _ = load_config(tmp_path / "absent.toml")


def test_explicit_pyproject_without_section_is_invalid(tmp_path: Path) -> None:
    target = tmp_path / "pyproject.toml"
    _write(target, '[project]\nname = "demo"\n')

    with pytest.raises(InvalidConfigFileError):
        _ = load_config(target)


def test_pyproject_section_must_be_a_table(tmp_path: Path) -> None:
    _write(tmp_path / "pyproject.toml", '[tool]\ninputprint = "nope"\n')

    with pytest.raises(InvalidConfigFileError):
        _ = load_config(start=tmp_path)


def test_explicit_file_sets_base_dir_to_its_directory(tmp_path: Path) -> None:
    target = tmp_path / "configs" / "fingerprint.toml"
    _write(target, 'patterns = ["*.cfg"]\n')

    loaded = load_config_with_metadata(target)

    assert loaded.path == target
    assert loaded.base_dir == target.parent


def test_model_reports_unsupported_version() -> None:
    with pytest.raises(ValidationError) as excinfo:
        _ = ConfigModel.model_validate({"config_version": 3})

    assert "Unsupported config_version 3" in str(excinfo.value)


def test_resolve_project_root_missing_start_raises(tmp_path: Path) -> None:
    with pytest.raises(FileAccessError):
        _ = resolve_project_root(tmp_path / "nowhere")
