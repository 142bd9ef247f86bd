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

"""Bounded thread-pool execution shared by the expansion and hashing stages.

Both fingerprinting stages are I/O bound: every task blocks on a filesystem
call. Tasks run on a ``ThreadPoolExecutor`` sized to the concurrency ceiling,
so at most ``limit`` tasks are ever in flight and the rest wait in the
executor queue. Results are handed back to the calling thread one at a time
through ``as_completed``; the caller is the only writer of whatever
collection it builds from them.

Failure is fail-fast: the first task error cancels every task that has not
started, shuts the pool down without waiting for reads already in progress,
and re-raises in the caller.
"""

from __future__ import annotations

import logging
import os
from concurrent.futures import Future, ThreadPoolExecutor, as_completed
from typing import TYPE_CHECKING, Final, TypeVar

from inputprint._internal.exceptions import ConcurrencyValueError
from inputprint._internal.logging_utils import structured_extra
from inputprint.core.model_types import LogComponent

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable, Iterator

__all__ = [
    "CONCURRENCY_ENV",
    "DEFAULT_CONCURRENCY",
    "bounded_map",
    "resolve_concurrency",
    "validate_concurrency",
]

logger: logging.Logger = logging.getLogger("inputprint.fingerprint")

DEFAULT_CONCURRENCY: Final[int] = 10
CONCURRENCY_ENV: Final[str] = "INPUTPRINT_CONCURRENCY"

_T = TypeVar("_T")
_R = TypeVar("_R")


def validate_concurrency(value: object) -> int:
    """Return ``value`` when it is a usable concurrency ceiling.

    Args:
        value: Candidate ceiling.

    Returns:
        The validated integer.

    Raises:
        ConcurrencyValueError: If ``value`` is not an integer of at least one.
    """
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        raise ConcurrencyValueError(value)
    return value


def _concurrency_from_env() -> int | None:
    raw = os.getenv(CONCURRENCY_ENV)
    if raw is None or not raw.strip():
        return None
    try:
        parsed = int(raw.strip())
    except ValueError:
        parsed = 0
    if parsed < 1:
        logger.warning(
            "Ignoring invalid %s=%s value",
            CONCURRENCY_ENV,
            raw,
            extra=structured_extra(LogComponent.CONFIG, details={"env": CONCURRENCY_ENV}),
        )
        return None
    return parsed


def resolve_concurrency(value: int | None = None) -> int:
    """Resolve the effective concurrency ceiling.

    An explicit value wins; otherwise ``INPUTPRINT_CONCURRENCY`` is consulted,
    falling back to ``DEFAULT_CONCURRENCY``.

    Args:
        value: Explicit ceiling supplied by the caller or configuration.

    Returns:
        Positive integer ceiling.
    """
    if value is not None:
        return validate_concurrency(value)
    from_env = _concurrency_from_env()
    return from_env if from_env is not None else DEFAULT_CONCURRENCY


def bounded_map(
    func: Callable[[_T], _R],
    items: Iterable[_T],
    *,
    limit: int,
) -> Iterator[tuple[_T, _R]]:
    """Apply ``func`` to every item with at most ``limit`` calls in flight.

    Pairs are yielded in completion order, not input order.

    Args:
        func: Blocking callable executed on a worker thread.
        items: Inputs to process.
        limit: Maximum number of simultaneous calls.

    Yields:
        ``(item, result)`` tuples as tasks finish.
    """
    limit = validate_concurrency(limit)
    pending = list(items)
    if not pending:
        return
    executor = ThreadPoolExecutor(
        max_workers=min(limit, len(pending)),
        thread_name_prefix="inputprint",
    )
    try:
        future_map: dict[Future[_R], _T] = {executor.submit(func, item): item for item in pending}
        for future in as_completed(future_map):
            yield future_map[future], future.result()
    except BaseException:
        executor.shutdown(wait=False, cancel_futures=True)
        raise
    executor.shutdown(wait=True)
