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

"""Argument parser helpers used across CLI commands."""

from __future__ import annotations

import argparse
from typing import Any, Protocol

from inputprint.runtime import consume


class ArgumentRegistrar(Protocol):
    """Parser-or-group interface used by ``register_argument``."""

    def add_argument(
        self,
        *args: Any,
        **kwargs: Any,
    ) -> argparse.Action:
        """Expose ``ArgumentParser.add_argument`` so helpers can operate generically."""
        ...  # pragma: no cover


def register_argument(
    registrar: ArgumentRegistrar,
    *args: Any,
    **kwargs: Any,
) -> None:
    """Register an argument on a parser/argument group, discarding the action handle.

    Args:
        registrar: Parser or argument group on which to register the option.
        *args: Positional flags and option strings forwarded to ``add_argument``.
        **kwargs: Keyword options forwarded to ``add_argument``.
    """
    consume(registrar.add_argument(*args, **kwargs))


def parse_positive_int(raw: str) -> int:
    """Parse a CLI token as an integer of at least one.

    Args:
        raw: Token supplied on the command line.

    Returns:
        The parsed integer.

    Raises:
        argparse.ArgumentTypeError: If the token is not a positive integer.
    """
    try:
        value = int(raw.strip())
    except ValueError as exc:
        msg = f"expected a positive integer, got '{raw}'"
        raise argparse.ArgumentTypeError(msg) from exc
    if value < 1:
        msg = f"expected a positive integer, got '{raw}'"
        raise argparse.ArgumentTypeError(msg)
    return value


__all__ = ["ArgumentRegistrar", "parse_positive_int", "register_argument"]
