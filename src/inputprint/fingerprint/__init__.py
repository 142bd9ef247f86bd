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

"""Pattern matching, expansion, hashing, and assembly stages."""

from __future__ import annotations

from .assembler import assemble
from .digester import DIGEST_ALGORITHM, DIGEST_HEX_LENGTH, digest, digest_bytes, resolve_location
from .expansion import expand
from .matcher import GlobMatcher, default_matcher, match

__all__ = [
    "DIGEST_ALGORITHM",
    "DIGEST_HEX_LENGTH",
    "GlobMatcher",
    "assemble",
    "default_matcher",
    "digest",
    "digest_bytes",
    "expand",
    "match",
    "resolve_location",
]
