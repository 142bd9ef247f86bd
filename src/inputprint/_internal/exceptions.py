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

"""Common exception hierarchy for inputprint."""

from __future__ import annotations

import os
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable

__all__ = [
    "ConcurrencyValueError",
    "FileAccessError",
    "InputprintError",
    "InputprintValidationError",
    "PatternExpansionError",
]


class InputprintError(Exception):
    """Base error for all inputprint exceptions."""


class InputprintValidationError(InputprintError, ValueError):
    """Raised when input data fails validation checks."""


class ConcurrencyValueError(InputprintValidationError):
    """Raised when a concurrency ceiling is not a positive integer."""

    def __init__(self, value: object) -> None:
        """Initialize the exception with the rejected value.

        Args:
            value: The concurrency value that failed validation.
        """
        self.value = value
        super().__init__(f"concurrency must be a positive integer, got {value!r}")


class PatternExpansionError(InputprintError):
    """Raised when no supplied pattern matched any file.

    Attributes:
        patterns: Every pattern that was supplied, in the order given.
    """

    def __init__(self, patterns: Iterable[str]) -> None:
        """Initialize the exception with the patterns that matched nothing.

        Args:
            patterns: All patterns supplied to the expansion.
        """
        self.patterns: tuple[str, ...] = tuple(patterns)
        joined = '", "'.join(self.patterns)
        super().__init__(f'Couldn\'t find any files matching provided glob patterns: ["{joined}"].')


class FileAccessError(InputprintError):
    """Raised when a matched file (or the root directory) cannot be read.

    Attributes:
        path: The path as it was requested (relative or absolute).
        error: The underlying operating system error, when one was raised.
    """

    def __init__(self, path: str | os.PathLike[str], error: OSError | None = None) -> None:
        """Initialize the exception with the unreadable path.

        Args:
            path: Path that could not be read.
            error: Underlying ``OSError`` raised by the filesystem.
        """
        self.path = os.fspath(path)
        self.error = error
        detail = f": {error.strerror or error}" if error is not None else ""
        super().__init__(f"Unable to read {self.path}{detail}")
