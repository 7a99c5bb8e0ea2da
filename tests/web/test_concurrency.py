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
"""Concurrent requests through one gate resolve independently."""

from __future__ import annotations

import asyncio

import httpx
import pytest
from starlette.applications import Starlette
from starlette.requests import Request
from starlette.responses import PlainTextResponse
from starlette.routing import Route

from routewall.security.identity import Principal
from routewall.web.adapters.starlette.gate_filter import AuthorizationGate
from routewall.web.adapters.starlette.identity_filter import IdentityResolverFilter

USERS = {
    "alice": Principal(user_id="alice", roles=["billing"], approved=True),
    "bob": Principal(user_id="bob", roles=["support"], approved=True),
}


async def _ok(request: Request) -> PlainTextResponse:
    return PlainTextResponse("ok")


def _make_app(delays: dict[str, float]) -> Starlette:
    async def resolve(request):
        user = request.headers.get("x-user")
        # Interleave the two requests inside the resolver.
        await asyncio.sleep(delays.get(user, 0))
        return USERS.get(user)

    gate = AuthorizationGate(
        [
            {"path": "/billing", "access": "billing"},
            {"path": "/support", "access": "support"},
        ],
        IdentityResolverFilter(resolve),
    )
    return Starlette(
        routes=[Route("/billing", _ok), Route("/support", _ok)],
        middleware=[gate.middleware()],
    )


async def _fetch_pair(app: Starlette, first: tuple[str, str], second: tuple[str, str]) -> tuple[int, int]:
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as client:
        r1, r2 = await asyncio.gather(
            client.get(first[0], headers={"x-user": first[1]}),
            client.get(second[0], headers={"x-user": second[1]}),
        )
    return r1.status_code, r2.status_code


class TestConcurrentRequests:
    @pytest.mark.asyncio
    async def test_qualifying_and_non_qualifying_requests_do_not_cross_talk(self):
        app = _make_app({"alice": 0.05, "bob": 0.0})
        # alice qualifies for /billing, bob does not qualify for /billing.
        assert await _fetch_pair(app, ("/billing", "alice"), ("/billing", "bob")) == (200, 403)

    @pytest.mark.asyncio
    async def test_different_role_routes_resolve_independently(self):
        app = _make_app({"alice": 0.0, "bob": 0.05})
        assert await _fetch_pair(app, ("/billing", "alice"), ("/support", "alice")) == (200, 403)
        assert await _fetch_pair(app, ("/support", "bob"), ("/billing", "bob")) == (200, 403)

    @pytest.mark.asyncio
    async def test_anonymous_and_authenticated_interleaved(self):
        app = _make_app({"bob": 0.05})
        assert await _fetch_pair(app, ("/support", "bob"), ("/support", "nobody")) == (200, 401)
