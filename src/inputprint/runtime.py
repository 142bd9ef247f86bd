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

"""Public runtime helpers for inputprint layers above `_internal`."""

from __future__ import annotations

from inputprint._internal.utils import (
    CONCURRENCY_ENV,
    DEFAULT_CONCURRENCY,
    ROOT_MARKERS,
    RootMarker,
    consume,
    resolve_concurrency,
    resolve_project_root,
)

__all__ = [
    "CONCURRENCY_ENV",
    "DEFAULT_CONCURRENCY",
    "ROOT_MARKERS",
    "RootMarker",
    "consume",
    "resolve_concurrency",
    "resolve_project_root",
]
