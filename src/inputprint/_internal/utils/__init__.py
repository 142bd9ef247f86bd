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

"""Structured utility helpers used across inputprint internals."""

from __future__ import annotations

from .common import consume
from .concurrency import (
    CONCURRENCY_ENV,
    DEFAULT_CONCURRENCY,
    bounded_map,
    resolve_concurrency,
    validate_concurrency,
)
from .paths import ROOT_MARKERS, RootMarker, resolve_project_root

__all__ = [
    "CONCURRENCY_ENV",
    "DEFAULT_CONCURRENCY",
    "ROOT_MARKERS",
    "RootMarker",
    "bounded_map",
    "consume",
    "resolve_concurrency",
    "resolve_project_root",
    "validate_concurrency",
]
