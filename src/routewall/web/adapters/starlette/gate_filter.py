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
"""AuthorizationGate — per-route authorization in front of the route handler.

The gate is a two-stage filter:

1. the identity resolver runs unconditionally and may set
   ``request.state.identity``;
2. every guard registered for the request's method and path decides
   whether the request may proceed.

A denial sets the response status (401 or 403) and hands the request to
exactly one failure handler; an allow calls the next stage exactly once.
"""

from __future__ import annotations

import inspect
import logging
from collections.abc import Iterable, Mapping
from typing import Any

from starlette._utils import get_route_path
from starlette.middleware import Middleware
from starlette.requests import Request
from starlette.responses import Response

from routewall.security.access import Decision
from routewall.security.identity import get_identity
from routewall.security.routes import RouteDescriptor, parse_routes
from routewall.web.adapters.starlette.dispatch import DispatchTable, RouteGuard
from routewall.web.adapters.starlette.problem import unauthenticated_problem, unauthorized_problem
from routewall.web.ports.filter import CallNext, FailureHandler, ResolverStep

logger = logging.getLogger(__name__)


def _resolver_step(identity_resolver: Any) -> ResolverStep:
    """Normalise a WebFilter-style resolver or a plain coroutine function."""
    do_filter = getattr(identity_resolver, "do_filter", None)
    if callable(do_filter):
        should_not_filter = getattr(identity_resolver, "should_not_filter", None)

        async def _step(request: Any, call_next: CallNext) -> Any:
            if should_not_filter is not None and should_not_filter(request):
                return await call_next(request)
            return await do_filter(request, call_next)

        return _step

    if callable(identity_resolver):
        return identity_resolver

    raise TypeError(
        f"identity_resolver must be a WebFilter or an async (request, call_next) callable, "
        f"got {type(identity_resolver).__name__}"
    )


class AuthorizationGate:
    """Request filter enforcing a route table's access declarations.

    Built via :func:`routewall.gate.create_gate` or directly.  Construction
    validates the whole route table and fails with
    :class:`~routewall.kernel.exceptions.RouteConfigurationException` on the
    first malformed entry.

    Args:
        routes: Route table entries (mappings or ``RouteDescriptor``).
        identity_resolver: Step that populates ``request.state.identity``.
        on_unauthenticated: Called when no identity was resolved (status 401).
        on_unauthorized: Called when the identity lacks approval or the
            required role (status 403).
    """

    def __init__(
        self,
        routes: Iterable[RouteDescriptor | Mapping[str, Any]],
        identity_resolver: Any,
        on_unauthenticated: FailureHandler | None = None,
        on_unauthorized: FailureHandler | None = None,
    ) -> None:
        self._routes = parse_routes(routes)
        self._table = DispatchTable.build(self._routes)
        self._resolve_identity = _resolver_step(identity_resolver)
        self._on_unauthenticated: FailureHandler = on_unauthenticated or unauthenticated_problem
        self._on_unauthorized: FailureHandler = on_unauthorized or unauthorized_problem

        logger.info(
            "Authorization gate built: %d routes, %d guarded, %d public",
            len(self._routes),
            len(self._table),
            len(self._routes) - len(self._table),
        )

    @property
    def routes(self) -> tuple[RouteDescriptor, ...]:
        return self._routes

    @property
    def dispatch_table(self) -> DispatchTable:
        return self._table

    def should_not_filter(self, request: Any) -> bool:
        return False

    async def do_filter(self, request: Request, call_next: CallNext) -> Any:
        async def _guarded(req: Request) -> Any:
            return await self._guard(req, call_next)

        return await self._resolve_identity(request, _guarded)

    def middleware(self) -> Middleware:
        """Return a Starlette ``Middleware`` entry mounting this gate."""
        from routewall.web.adapters.starlette.middleware import AuthorizationGateMiddleware

        return Middleware(AuthorizationGateMiddleware, gate=self)

    async def _guard(self, request: Request, call_next: CallNext) -> Any:
        # Under a Mount the router matches the path without root_path.
        route_path = get_route_path(request.scope) or "/"
        guards = self._table.match(request.method, route_path)
        if not guards:
            return await call_next(request)

        identity = get_identity(request)
        for guard in guards:
            decision = guard.check(identity)
            if decision is not Decision.ALLOW:
                return await self._deny(request, guard, decision)

        return await call_next(request)

    async def _deny(self, request: Request, guard: RouteGuard, decision: Decision) -> Response:
        logger.debug(
            "%s %s denied (%s) by route %s %s requiring %r",
            request.method,
            request.url.path,
            decision.name,
            guard.route.method,
            guard.route.path,
            guard.access,
        )
        handler = self._on_unauthenticated if decision is Decision.UNAUTHENTICATED else self._on_unauthorized

        response = Response(status_code=decision.status_code)
        result = handler(request, response)
        if inspect.isawaitable(result):
            result = await result
        return response if result is None else result
