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
"""Immutable dispatch table of per-route guards.

Each non-public route declaration becomes one :class:`RouteGuard` holding
its own copy of the required access value and a compiled path matcher.
The table is built once and only read afterwards, so it is shared by all
concurrent requests without locking.
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from dataclasses import dataclass

from starlette.routing import compile_path

from routewall.security.access import Decision, decide
from routewall.security.identity import Identity
from routewall.security.routes import RouteDescriptor


@dataclass(frozen=True)
class RouteGuard:
    """The decision function bound to a single route declaration."""

    route: RouteDescriptor
    path_regex: re.Pattern[str]
    methods: frozenset[str]

    @classmethod
    def for_route(cls, route: RouteDescriptor) -> RouteGuard:
        path_regex, _, _ = compile_path(route.path)
        methods = {route.method}
        # Starlette answers HEAD with the GET handler.
        if route.method == "GET":
            methods.add("HEAD")
        return cls(route=route, path_regex=path_regex, methods=frozenset(methods))

    @property
    def access(self) -> str:
        return self.route.access

    def matches(self, method: str, path: str) -> bool:
        return method.upper() in self.methods and self.path_regex.match(path) is not None

    def check(self, identity: Identity | None) -> Decision:
        return decide(self.route.access, identity)


@dataclass(frozen=True)
class DispatchTable:
    """Ordered, read-only collection of route guards."""

    guards: tuple[RouteGuard, ...] = ()

    @classmethod
    def build(cls, routes: Iterable[RouteDescriptor]) -> DispatchTable:
        """Create guards for every route except ``PUBLIC`` ones."""
        return cls(guards=tuple(RouteGuard.for_route(r) for r in routes if not r.is_public))

    def match(self, method: str, path: str) -> tuple[RouteGuard, ...]:
        """Return every guard registered for *method* and *path*, in table order."""
        return tuple(g for g in self.guards if g.matches(method, path))

    def __len__(self) -> int:
        return len(self.guards)
