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
"""Tests for loading route tables from configuration."""

from __future__ import annotations

from pathlib import Path

import pytest

from routewall.core.config import Config
from routewall.core.routes import load_routes
from routewall.kernel.exceptions import RouteConfigurationException
from routewall.security.routes import RouteDescriptor


class TestLoadRoutes:
    def test_from_yaml_file(self, tmp_path: Path):
        config_file = tmp_path / "routewall.yaml"
        config_file.write_text(
            "routewall:\n"
            "  gate:\n"
            "    routes:\n"
            "      - {path: /admin, access: admin}\n"
            "      - {path: /feed, access: PUBLIC}\n"
            "      - {path: /profile, method: post, access: AUTHENTICATED}\n"
        )
        routes = load_routes(Config.from_file(config_file))
        assert routes == (
            RouteDescriptor(path="/admin", access="admin"),
            RouteDescriptor(path="/feed", access="PUBLIC"),
            RouteDescriptor(path="/profile", access="AUTHENTICATED", method="POST"),
        )

    def test_from_env_override(self, monkeypatch):
        monkeypatch.setenv("ROUTEWALL_GATE_ROUTES", '[{"path": "/ops", "access": "ops"}]')
        assert load_routes(Config({})) == (RouteDescriptor(path="/ops", access="ops"),)

    def test_custom_key(self):
        config = Config({"app": {"routes": [{"path": "/a", "access": "x"}]}})
        assert len(load_routes(config, key="app.routes")) == 1

    def test_missing_table(self):
        with pytest.raises(RouteConfigurationException, match="No route table"):
            load_routes(Config({}))

    def test_non_list_table(self):
        with pytest.raises(RouteConfigurationException, match="must be a list"):
            load_routes(Config({"routewall": {"gate": {"routes": {"path": "/a"}}}}))

    def test_invalid_yaml_string(self, monkeypatch):
        monkeypatch.setenv("ROUTEWALL_GATE_ROUTES", "[{unclosed")
        with pytest.raises(RouteConfigurationException, match="not valid YAML"):
            load_routes(Config({}))

    def test_entries_are_validated(self):
        config = Config({"routewall": {"gate": {"routes": [{"path": "/a"}]}}})
        with pytest.raises(RouteConfigurationException) as exc_info:
            load_routes(config)
        assert exc_info.value.code == "ROUTE_ACCESS"


class TestRouteTablePlaceholders:
    def test_access_placeholder_uses_default(self, monkeypatch):
        monkeypatch.delenv("ADMIN_ROLE", raising=False)
        config = Config({"routewall": {"gate": {"routes": [{"path": "/admin", "access": "${ADMIN_ROLE:admin}"}]}}})
        assert load_routes(config)[0].access == "admin"

    def test_access_placeholder_from_environment(self, monkeypatch):
        monkeypatch.setenv("ADMIN_ROLE", "superuser")
        config = Config({"routewall": {"gate": {"routes": [{"path": "/admin", "access": "${ADMIN_ROLE:admin}"}]}}})
        assert load_routes(config)[0].access == "superuser"

    def test_path_placeholder_from_config_key(self):
        config = Config(
            {
                "app": {"prefix": "/internal"},
                "routewall": {"gate": {"routes": [{"path": "${app.prefix}/metrics", "access": "ops"}]}},
            }
        )
        assert load_routes(config)[0].path == "/internal/metrics"
