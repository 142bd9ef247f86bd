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

"""Unit tests for the bounded thread-pool helpers."""

from __future__ import annotations

import logging
import threading
import time

import pytest

from inputprint._internal.utils.concurrency import (
    CONCURRENCY_ENV,
    DEFAULT_CONCURRENCY,
    bounded_map,
    resolve_concurrency,
    validate_concurrency,
)
from inputprint.exceptions import ConcurrencyValueError

pytestmark = pytest.mark.unit


def test_bounded_map_yields_every_item_once() -> None:
    pairs = dict(bounded_map(lambda value: value * 2, range(50), limit=5))

    assert pairs == {value: value * 2 for value in range(50)}


def test_bounded_map_empty_input_yields_nothing() -> None:
    assert list(bounded_map(str, [], limit=3)) == []


def test_bounded_map_never_exceeds_limit() -> None:
    lock = threading.Lock()
    state = {"active": 0, "peak": 0}

    def work(value: int) -> int:
        with lock:
            state["active"] += 1
            state["peak"] = max(state["peak"], state["active"])
        time.sleep(0.002)
        with lock:
            state["active"] -= 1
        return value

    consumed = list(bounded_map(work, range(100), limit=7))

    assert len(consumed) == 100
    assert 1 <= state["peak"] <= 7


def test_bounded_map_propagates_first_error() -> None:
    def work(value: int) -> int:
        if value == 3:
            message = "boom"
            raise RuntimeError(message)
        return value

    with pytest.raises(RuntimeError, match="boom"):
        _ = list(bounded_map(work, range(10), limit=2))


@pytest.mark.parametrize("value", [0, -1, True, 2.5, "4", None])
def test_validate_concurrency_rejects_non_positive_integers(value: object) -> None:
    with pytest.raises(ConcurrencyValueError) as excinfo:
        _ = validate_concurrency(value)

    assert excinfo.value.value is value


def test_validate_concurrency_accepts_positive_integers() -> None:
    assert validate_concurrency(1) == 1
    assert validate_concurrency(64) == 64


def test_resolve_concurrency_defaults_to_ten() -> None:
    assert DEFAULT_CONCURRENCY == 10
    assert resolve_concurrency() == 10


def test_resolve_concurrency_prefers_explicit_value(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv(CONCURRENCY_ENV, "2")

    assert resolve_concurrency(5) == 5


def test_resolve_concurrency_reads_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv(CONCURRENCY_ENV, " 4 ")

    assert resolve_concurrency() == 4


@pytest.mark.parametrize("raw", ["zero", "0", "-3"])
def test_resolve_concurrency_ignores_invalid_environment(
    monkeypatch: pytest.MonkeyPatch,
    caplog: pytest.LogCaptureFixture,
    raw: str,
) -> None:
    monkeypatch.setenv(CONCURRENCY_ENV, raw)
    caplog.set_level(logging.WARNING, logger="inputprint.fingerprint")

    assert resolve_concurrency() == DEFAULT_CONCURRENCY
    assert any(CONCURRENCY_ENV in record.getMessage() for record in caplog.records)
