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

"""inputprint - deterministic file fingerprints for build cache keys.

Resolves glob patterns against a root directory and digests every matched
file, producing the ``path -> digest`` mapping a build cache folds into its
cache key.
"""

from __future__ import annotations

from inputprint._internal.exceptions import (
    ConcurrencyValueError,
    FileAccessError,
    InputprintError,
    InputprintValidationError,
    PatternExpansionError,
)

from .api import fingerprint_project, get_fingerprint_map
from .config import Config, LoadedConfig, load_config, load_config_with_metadata
from .core.type_aliases import Digest, FingerprintMap, PathSet, Pattern, ResolvedPath
from .fingerprint import DIGEST_ALGORITHM, assemble, digest, expand, match

__version__ = "0.1.0"

__all__ = [
    "DIGEST_ALGORITHM",
    "ConcurrencyValueError",
    "Config",
    "Digest",
    "FileAccessError",
    "FingerprintMap",
    "InputprintError",
    "InputprintValidationError",
    "LoadedConfig",
    "PathSet",
    "Pattern",
    "PatternExpansionError",
    "ResolvedPath",
    "__version__",
    "assemble",
    "digest",
    "expand",
    "fingerprint_project",
    "get_fingerprint_map",
    "load_config",
    "load_config_with_metadata",
    "match",
]
