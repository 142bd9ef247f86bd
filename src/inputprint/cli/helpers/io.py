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

"""Terminal output for CLI commands."""

from __future__ import annotations

import sys

__all__ = ["echo"]


def echo(message: str, *, newline: bool = True, err: bool = False) -> None:
    """Print ``message`` to stdout, or to stderr when ``err`` is set."""
    print(message, end="\n" if newline else "", file=sys.stderr if err else sys.stdout)
