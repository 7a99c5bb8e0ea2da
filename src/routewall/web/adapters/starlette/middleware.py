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
"""AuthorizationGateMiddleware — pure ASGI middleware mounting an AuthorizationGate."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from starlette.requests import Request
from starlette.types import ASGIApp, Receive, Scope, Send

if TYPE_CHECKING:
    from routewall.web.adapters.starlette.gate_filter import AuthorizationGate


class AuthorizationGateMiddleware:
    """Runs an :class:`AuthorizationGate` ahead of the wrapped application.

    Allowed requests are streamed straight through to the downstream app;
    the gate's ``call_next`` returns ``None`` in that case.  Denied requests
    are answered with the response produced by the gate's failure handler.

    Uses raw ASGI protocol instead of ``BaseHTTPMiddleware`` so that
    ``request.state`` set by the identity resolver is shared with the
    downstream handlers through the ASGI scope.
    """

    def __init__(self, app: ASGIApp, gate: AuthorizationGate) -> None:
        self.app = app
        self.gate = gate

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        request = Request(scope, receive, send)

        async def _call_app(req: Any) -> None:
            await self.app(scope, receive, send)

        response = await self.gate.do_filter(request, _call_app)
        if response is not None:
            await response(scope, receive, send)
