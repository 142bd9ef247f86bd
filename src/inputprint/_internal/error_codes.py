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

"""Stable ``IPnnn`` codes for inputprint exceptions.

Codes are looked up along the exception's MRO, so a subclass without its
own entry reports the code of its nearest registered ancestor. Codes are
part of the CLI contract and are never reassigned.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Final, NewType

from inputprint.config.models import (
    ConfigFieldTypeError,
    ConfigReadError,
    ConfigValidationError,
    InvalidConfigFileError,
    UnsupportedConfigVersionError,
)

from .exceptions import (
    ConcurrencyValueError,
    FileAccessError,
    InputprintError,
    InputprintValidationError,
    PatternExpansionError,
)

if TYPE_CHECKING:
    from collections.abc import Mapping

__all__ = ["ErrorCode", "error_code_catalog", "error_code_for"]

ErrorCode = NewType("ErrorCode", str)

FALLBACK_CODE: Final[ErrorCode] = ErrorCode("IP000")

# IP1xx: validation and configuration, IP2xx: expansion, IP3xx: file access.
_REGISTRY: Final[tuple[tuple[type[BaseException], ErrorCode], ...]] = (
    (InputprintError, FALLBACK_CODE),
    (InputprintValidationError, ErrorCode("IP100")),
    (ConcurrencyValueError, ErrorCode("IP101")),
    (ConfigValidationError, ErrorCode("IP110")),
    (ConfigFieldTypeError, ErrorCode("IP111")),
    (UnsupportedConfigVersionError, ErrorCode("IP112")),
    (ConfigReadError, ErrorCode("IP113")),
    (InvalidConfigFileError, ErrorCode("IP114")),
    (PatternExpansionError, ErrorCode("IP200")),
    (FileAccessError, ErrorCode("IP300")),
)
_CODES_BY_TYPE: Final[dict[type[BaseException], ErrorCode]] = dict(_REGISTRY)


def error_code_for(exc: BaseException) -> ErrorCode:
    """Return the code reported for ``exc``.

    Args:
        exc: Any exception; non-inputprint exceptions map to ``IP000``.

    Returns:
        Code of the closest registered class in ``type(exc).__mro__``.
    """
    return next(
        (_CODES_BY_TYPE[cls] for cls in type(exc).__mro__ if cls in _CODES_BY_TYPE),
        FALLBACK_CODE,
    )


def error_code_catalog() -> Mapping[str, ErrorCode]:
    """Return ``{"<module>.<ClassName>": code}`` for every registered exception."""
    return {f"{exc_type.__module__}.{exc_type.__name__}": code for exc_type, code in _REGISTRY}
