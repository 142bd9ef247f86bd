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

"""``inputprint fingerprint`` command."""

from __future__ import annotations

import argparse
from pathlib import Path
from typing import TYPE_CHECKING

from inputprint.api import fingerprint_project
from inputprint.cli.helpers import echo, parse_positive_int, register_argument
from inputprint.config import load_config_with_metadata
from inputprint.core.model_types import OutputFormat
from inputprint.json import dump_fingerprint_map
from inputprint.runtime import consume

if TYPE_CHECKING:
    from collections.abc import Mapping

    from inputprint.cli.types import SubparserCollection


def register_fingerprint_command(subparsers: SubparserCollection) -> None:
    """Attach the ``inputprint fingerprint`` command to the CLI.

    Args:
        subparsers: Top-level argparse subparser collection to register commands on.
    """
    parser = subparsers.add_parser(
        "fingerprint",
        help="Digest every file matched by the given glob patterns",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    register_argument(
        parser,
        "patterns",
        nargs="*",
        metavar="PATTERN",
        help="Glob patterns to fingerprint (default: patterns from configuration).",
    )
    register_argument(
        parser,
        "--root",
        type=Path,
        default=None,
        help="Directory relative patterns are resolved against (default: project root).",
    )
    register_argument(
        parser,
        "--config",
        type=Path,
        default=None,
        help="Explicit configuration file (default: auto-detected).",
    )
    register_argument(
        parser,
        "--concurrency",
        type=parse_positive_int,
        default=None,
        help="Maximum simultaneous filesystem operations per stage.",
    )
    register_argument(
        parser,
        "--format",
        dest="output_format",
        choices=[fmt.value for fmt in OutputFormat],
        default=OutputFormat.JSON.value,
        help="Output format for the fingerprint map.",
    )
    register_argument(
        parser,
        "--output",
        type=Path,
        default=None,
        help="Write the fingerprint map to this file instead of stdout.",
    )


def render_fingerprints(fingerprints: Mapping[str, str], output_format: OutputFormat) -> str:
    """Render a fingerprint map for display.

    Args:
        fingerprints: Mapping of path to digest.
        output_format: Target rendering.

    Returns:
        Rendered text terminated by a newline (empty for an empty map in text mode).
    """
    if output_format is OutputFormat.JSON:
        return dump_fingerprint_map(fingerprints)
    return "".join(f"{fingerprints[path]}  {path}\n" for path in sorted(fingerprints))


def execute_fingerprint(args: argparse.Namespace) -> int:
    """Execute the fingerprint subcommand.

    Args:
        args: Parsed CLI namespace.

    Returns:
        ``0`` when the fingerprint map was produced.
    """
    root: Path | None = args.root
    loaded = load_config_with_metadata(args.config, start=root)
    fingerprints = fingerprint_project(
        loaded,
        patterns=args.patterns,
        root_dir=root,
        concurrency=args.concurrency,
    )
    rendered = render_fingerprints(fingerprints, OutputFormat.from_str(args.output_format))
    output: Path | None = args.output
    if output is None:
        echo(rendered, newline=False)
        return 0
    output.parent.mkdir(parents=True, exist_ok=True)
    consume(output.write_text(rendered, encoding="utf-8"))
    echo(f"[inputprint] Wrote {len(fingerprints)} fingerprint(s) to {output}")
    return 0


__all__ = ["execute_fingerprint", "register_fingerprint_command", "render_fingerprints"]
