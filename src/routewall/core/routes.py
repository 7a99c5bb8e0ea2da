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
"""Loading route tables from configuration."""

from __future__ import annotations

from typing import Any

import yaml  # type: ignore[import-untyped]

from routewall.core.config import Config
from routewall.kernel.exceptions import RouteConfigurationException
from routewall.security.routes import RouteDescriptor, parse_routes

ROUTES_KEY = "routewall.gate.routes"


def load_routes(config: Config, key: str = ROUTES_KEY) -> tuple[RouteDescriptor, ...]:
    """Read and validate the route table stored under *key*.

    The value is normally a list of mappings.  A string (as supplied through
    an environment variable override) is parsed as a YAML/JSON flow sequence.
    """
    raw: Any = config.get(key)
    if raw is None:
        raise RouteConfigurationException(
            f"No route table configured under '{key}'",
            code="ROUTE_TYPE",
            context={"key": key},
        )

    if isinstance(raw, str):
        try:
            raw = yaml.safe_load(raw)
        except yaml.YAMLError as exc:
            raise RouteConfigurationException(
                f"Route table under '{key}' is not valid YAML: {exc}",
                code="ROUTE_TYPE",
                context={"key": key},
            ) from exc

    if not isinstance(raw, list):
        raise RouteConfigurationException(
            f"Route table under '{key}' must be a list, got {type(raw).__name__}",
            code="ROUTE_TYPE",
            context={"key": key},
        )

    return parse_routes(raw)
