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
"""Starlette adapter — the authorization gate and its ASGI mounting."""

from routewall.web.adapters.starlette.dispatch import DispatchTable, RouteGuard
from routewall.web.adapters.starlette.gate_filter import AuthorizationGate
from routewall.web.adapters.starlette.identity_filter import IdentityResolverFilter
from routewall.web.adapters.starlette.middleware import AuthorizationGateMiddleware
from routewall.web.adapters.starlette.problem import (
    problem_response,
    unauthenticated_problem,
    unauthorized_problem,
)

__all__ = [
    "AuthorizationGate",
    "AuthorizationGateMiddleware",
    "DispatchTable",
    "IdentityResolverFilter",
    "RouteGuard",
    "problem_response",
    "unauthenticated_problem",
    "unauthorized_problem",
]
