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

"""``inputprint init`` command: write a starter configuration file."""

from __future__ import annotations

import argparse
from pathlib import Path
from textwrap import dedent
from typing import TYPE_CHECKING, Final

from inputprint.cli.helpers import echo, register_argument
from inputprint.runtime import consume

if TYPE_CHECKING:
    from inputprint.cli.types import SubparserCollection

CONFIG_TEMPLATE: Final[str] = dedent(
    """\
    # inputprint configuration template
    # Save this file as inputprint.toml in the root of your project, or move
    # the keys below under [tool.inputprint] in pyproject.toml.
    config_version = 0

    # Files whose content feeds the build cache key. Relative patterns are
    # resolved against `root`; absolute patterns (e.g. "/etc/os-release")
    # pin machine-global files and are reported with absolute paths.
    patterns = [
        # "src/**/*.py",
        # "package.json",
    ]

    # Directory relative patterns are evaluated against. Relative values are
    # resolved from the directory holding this file.
    # root = "."

    # Maximum simultaneous filesystem operations per stage (default: 10).
    # concurrency = 10
    """,
)


def register_init_command(subparsers: SubparserCollection) -> None:
    """Add the ``init`` subcommand parser."""
    parser = subparsers.add_parser(
        "init",
        help="Write a starter inputprint.toml",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    register_argument(
        parser,
        "--path",
        type=Path,
        default=Path("inputprint.toml"),
        help="Destination for the configuration template.",
    )
    register_argument(
        parser,
        "--force",
        action="store_true",
        help="Overwrite the destination if it already exists.",
    )


def write_config_template(path: Path, *, force: bool) -> int:
    """Write ``CONFIG_TEMPLATE`` to ``path``.

    An existing file is left untouched unless ``force`` is set.

    Returns:
        ``0`` when the template was written, ``1`` when an existing file
        blocked it.
    """
    if path.exists() and not force:
        echo(f"[inputprint] Refusing to overwrite existing file: {path}", err=True)
        echo("[inputprint] Pass --force to replace it.", err=True)
        return 1
    path.parent.mkdir(parents=True, exist_ok=True)
    consume(path.write_text(CONFIG_TEMPLATE, encoding="utf-8"))
    echo(f"[inputprint] Wrote starter config to {path}")
    return 0


def execute_init(args: argparse.Namespace) -> int:
    """Execute the init subcommand."""
    return write_config_template(args.path, force=bool(args.force))


__all__ = ["CONFIG_TEMPLATE", "execute_init", "register_init_command", "write_config_template"]
