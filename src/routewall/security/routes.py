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
"""Route descriptors — the declarative input of an authorization gate.

A route table is an ordered sequence of entries, each declaring a path, an
HTTP method (``GET`` when omitted) and the access it requires::

    routes = [
        {"path": "/admin", "access": "admin"},
        {"path": "/feed", "access": "PUBLIC"},
        {"path": "/profile", "method": "post", "access": "AUTHENTICATED"},
    ]

Entries are validated eagerly by :func:`parse_routes`; a malformed table
raises :class:`RouteConfigurationException` instead of producing a gate with
holes in it.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any

from routewall.kernel.exceptions import RouteConfigurationException
from routewall.security.access import PUBLIC

DEFAULT_METHOD = "GET"

HTTP_METHODS = frozenset({"GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS", "TRACE", "CONNECT"})


@dataclass(frozen=True)
class RouteDescriptor:
    """A single route declaration.

    Attributes:
        path: Starlette-style path template (``/users/{user_id}``).
        access: ``PUBLIC``, ``AUTHENTICATED`` or a role name.
        method: Upper-case HTTP method.
    """

    path: str
    access: str
    method: str = DEFAULT_METHOD

    @property
    def is_public(self) -> bool:
        return self.access == PUBLIC

    @property
    def key(self) -> tuple[str, str]:
        """The ``(method, path)`` pair this route is registered under."""
        return self.method, self.path


def parse_route(entry: RouteDescriptor | Mapping[str, Any], index: int = 0) -> RouteDescriptor:
    """Validate one route table entry and normalise it to a :class:`RouteDescriptor`."""
    if isinstance(entry, RouteDescriptor):
        path, method, access = entry.path, entry.method, entry.access
    elif isinstance(entry, Mapping):
        path, method, access = entry.get("path"), entry.get("method"), entry.get("access")
    else:
        raise RouteConfigurationException(
            f"Route #{index} must be a mapping or RouteDescriptor, got {type(entry).__name__}",
            code="ROUTE_TYPE",
            context={"index": index},
        )

    if not isinstance(path, str) or not path:
        raise RouteConfigurationException(
            f"Route #{index} has no path",
            code="ROUTE_PATH",
            context={"index": index, "path": path},
        )
    if not path.startswith("/"):
        raise RouteConfigurationException(
            f"Route #{index} path {path!r} must start with '/'",
            code="ROUTE_PATH",
            context={"index": index, "path": path},
        )

    if not isinstance(access, str) or not access:
        raise RouteConfigurationException(
            f"Route #{index} ({path}) must declare an access value",
            code="ROUTE_ACCESS",
            context={"index": index, "path": path, "access": access},
        )

    if method is None or method == "":
        method = DEFAULT_METHOD
    if not isinstance(method, str) or method.upper() not in HTTP_METHODS:
        raise RouteConfigurationException(
            f"Route #{index} ({path}) has unknown HTTP method {method!r}",
            code="ROUTE_METHOD",
            context={"index": index, "path": path, "method": method},
        )

    return RouteDescriptor(path=path, access=access, method=method.upper())


def parse_routes(entries: Iterable[RouteDescriptor | Mapping[str, Any]]) -> tuple[RouteDescriptor, ...]:
    """Validate a whole route table, rejecting duplicate ``(method, path)`` pairs."""
    if isinstance(entries, (str, bytes, Mapping)):
        raise RouteConfigurationException(
            "Route table must be a sequence of route entries",
            code="ROUTE_TYPE",
            context={"type": type(entries).__name__},
        )

    routes: list[RouteDescriptor] = []
    seen: dict[tuple[str, str], int] = {}
    for index, entry in enumerate(entries):
        route = parse_route(entry, index)
        if route.key in seen:
            raise RouteConfigurationException(
                f"Route #{index} duplicates route #{seen[route.key]}: {route.method} {route.path}",
                code="ROUTE_DUPLICATE",
                context={"index": index, "method": route.method, "path": route.path},
            )
        seen[route.key] = index
        routes.append(route)
    return tuple(routes)
