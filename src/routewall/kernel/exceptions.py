# Copyright 2026 Firefly Software Solutions Inc.
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
"""Exception hierarchy for routewall.

Every error raised by the library derives from :class:`RouteWallException`,
which carries a machine-readable ``code`` and a ``context`` dict in the same
shape as the rest of the framework's exceptions.

Denials (401/403) are *not* exceptions: they are normal gate outcomes
reported through the failure handlers.
"""

from __future__ import annotations


class RouteWallException(Exception):
    """Base exception for all routewall errors.

    Args:
        message: Human-readable error description.
        code: Machine-readable error code (e.g. ``"ROUTE_PATH"``).
        context: Arbitrary key-value pairs for error context and debugging.
    """

    def __init__(
        self,
        message: str,
        code: str | None = None,
        context: dict | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.context: dict = context if context is not None else {}


class RouteConfigurationException(RouteWallException):
    """A route table entry is malformed; raised while building a gate.

    Codes:
        ``ROUTE_TYPE``: the entry is neither a mapping nor a RouteDescriptor.
        ``ROUTE_PATH``: the path is missing, empty, or not absolute.
        ``ROUTE_ACCESS``: the access value is missing or empty.
        ``ROUTE_METHOD``: the HTTP method is unknown.
        ``ROUTE_DUPLICATE``: two entries share the same (method, path).
    """
