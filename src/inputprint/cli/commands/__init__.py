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

"""Subcommands of the inputprint CLI.

Each module exposes a ``register_<name>_command`` function that adds its
parser and an ``execute_<name>`` handler that returns the exit status.
"""

from __future__ import annotations

from .fingerprint import execute_fingerprint, register_fingerprint_command
from .init import execute_init, register_init_command

__all__ = [
    "execute_fingerprint",
    "execute_init",
    "register_fingerprint_command",
    "register_init_command",
]
