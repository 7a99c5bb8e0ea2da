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
"""routewall security — identities, route declarations and the decision engine."""

from routewall.security.access import AUTHENTICATED, PUBLIC, Decision, decide
from routewall.security.identity import Identity, Principal, get_identity, set_identity
from routewall.security.routes import RouteDescriptor, parse_route, parse_routes

__all__ = [
    "AUTHENTICATED",
    "PUBLIC",
    "Decision",
    "Identity",
    "Principal",
    "RouteDescriptor",
    "decide",
    "get_identity",
    "parse_route",
    "parse_routes",
    "set_identity",
]
