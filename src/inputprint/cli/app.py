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

"""Argument parsing and dispatch for the ``inputprint`` command."""

from __future__ import annotations

import argparse
import logging
from typing import TYPE_CHECKING, Final

from inputprint import __version__
from inputprint.cli.commands import (
    execute_fingerprint,
    execute_init,
    register_fingerprint_command,
    register_init_command,
)
from inputprint.cli.helpers import echo, register_argument
from inputprint.core.model_types import LogComponent
from inputprint.error_codes import error_code_for
from inputprint.exceptions import InputprintError
from inputprint.logging import LOG_FORMATS, LOG_LEVELS, configure_logging, structured_extra

if TYPE_CHECKING:
    from collections.abc import Sequence

    from inputprint.cli.types import CommandHandler

logger: logging.Logger = logging.getLogger("inputprint.cli")

COMMAND_HANDLERS: Final[dict[str, CommandHandler]] = {
    "fingerprint": execute_fingerprint,
    "init": execute_init,
}


def main(argv: Sequence[str] | None = None) -> int:
    """Run the inputprint CLI.

    Inputprint failures are reported on stderr as ``[inputprint] CODE: message``
    and turn into exit status 1. Usage errors exit with status 2 through
    argparse.

    Args:
        argv: Arguments to parse instead of ``sys.argv[1:]``.

    Returns:
        Process exit status.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.version:
        echo(f"inputprint {__version__}")
        return 0
    if args.command is None:
        parser.error("a command is required")

    _ = configure_logging(args.log_format, log_level=args.log_level)
    handler = COMMAND_HANDLERS[args.command]
    try:
        return handler(args)
    except InputprintError as exc:
        code = error_code_for(exc)
        logger.debug(
            "%s failed with %s",
            args.command,
            code,
            exc_info=True,
            extra=structured_extra(LogComponent.CLI, exit_code=1, details={"code": code}),
        )
        echo(f"[inputprint] {code}: {exc}", err=True)
        return 1


def build_parser() -> argparse.ArgumentParser:
    """Return the top-level parser with global options and every subcommand."""
    parser = argparse.ArgumentParser(
        prog="inputprint",
        description="Fingerprint the files that feed a build cache key.",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    register_argument(
        parser,
        "--log-format",
        choices=LOG_FORMATS,
        default="text",
        help="Log output format.",
    )
    register_argument(
        parser,
        "--log-level",
        choices=LOG_LEVELS,
        default="info",
        help="Minimum severity of logged events.",
    )
    register_argument(
        parser,
        "--version",
        action="store_true",
        help="Print the inputprint version and exit.",
    )
    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")
    register_fingerprint_command(subparsers)
    register_init_command(subparsers)
    return parser


__all__ = ["build_parser", "main"]
