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
"""Building authorization gates.

Usage::

    from routewall.gate import create_gate
    from routewall.security import Principal
    from routewall.web import IdentityResolverFilter

    async def resolve(request):
        user = await sessions.load(request.cookies.get("sid"))
        return Principal(user.id, roles=user.roles, approved=user.approved) if user else None

    gate = create_gate(
        routes=[
            {"path": "/admin", "access": "admin"},
            {"path": "/feed", "access": "PUBLIC"},
            {"path": "/profile", "access": "AUTHENTICATED"},
        ],
        identity_resolver=IdentityResolverFilter(resolve),
        on_unauthenticated=lambda request, response: RedirectResponse("/login"),
        on_unauthorized=render_forbidden_page,
    )

    app = Starlette(routes=[...], middleware=[gate.middleware()])
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

from routewall.core.config import Config
from routewall.core.routes import ROUTES_KEY, load_routes
from routewall.security.routes import RouteDescriptor
from routewall.web.adapters.starlette.gate_filter import AuthorizationGate
from routewall.web.ports.filter import FailureHandler


def create_gate(
    routes: Iterable[RouteDescriptor | Mapping[str, Any]],
    identity_resolver: Any,
    on_unauthenticated: FailureHandler | None = None,
    on_unauthorized: FailureHandler | None = None,
) -> AuthorizationGate:
    """Build an :class:`AuthorizationGate` for *routes*.

    Raises:
        RouteConfigurationException: If any route entry is malformed.
    """
    return AuthorizationGate(
        routes,
        identity_resolver,
        on_unauthenticated=on_unauthenticated,
        on_unauthorized=on_unauthorized,
    )


def create_gate_from_config(
    config: Config,
    identity_resolver: Any,
    on_unauthenticated: FailureHandler | None = None,
    on_unauthorized: FailureHandler | None = None,
    key: str = ROUTES_KEY,
) -> AuthorizationGate:
    """Build a gate from the route table stored in *config* under *key*."""
    return create_gate(
        load_routes(config, key),
        identity_resolver,
        on_unauthenticated=on_unauthenticated,
        on_unauthorized=on_unauthorized,
    )
