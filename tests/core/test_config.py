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
"""Tests for Config — file loading, env overrides, placeholders."""

from __future__ import annotations

from pathlib import Path

import pytest

from routewall.core.config import Config


class TestConfig:
    def test_get_nested_value(self):
        config = Config({"routewall": {"logging": {"format": "json"}}})
        assert config.get("routewall.logging.format") == "json"

    def test_get_with_default(self):
        assert Config({}).get("missing.key", "default") == "default"

    def test_get_section(self):
        config = Config({"routewall": {"logging": {"level": {"root": "DEBUG"}}}})
        assert config.get_section("routewall.logging.level") == {"root": "DEBUG"}
        assert config.get_section("routewall.missing") == {}

    def test_env_var_override(self, monkeypatch):
        monkeypatch.setenv("ROUTEWALL_LOGGING_FORMAT", "json")
        config = Config({"routewall": {"logging": {"format": "console"}}})
        assert config.get("routewall.logging.format") == "json"

    def test_placeholder_from_env_with_default(self, monkeypatch):
        monkeypatch.delenv("ADMIN_ROLE", raising=False)
        config = Config({"roles": {"admin": "${ADMIN_ROLE:admin}"}})
        assert config.get("roles.admin") == "admin"
        monkeypatch.setenv("ADMIN_ROLE", "superuser")
        assert config.get("roles.admin") == "superuser"

    def test_placeholder_from_config(self):
        config = Config({"roles": {"base": "staff", "ops": "${roles.base}"}})
        assert config.get("roles.ops") == "staff"

    def test_placeholders_resolved_inside_lists_and_mappings(self, monkeypatch):
        monkeypatch.setenv("OPS_ROLE", "operator")
        monkeypatch.delenv("MISSING_ROLE_X", raising=False)
        config = Config({"gate": {"items": [{"role": "${OPS_ROLE}"}, "${MISSING_ROLE_X:viewer}", 3]}})
        assert config.get("gate.items") == [{"role": "operator"}, "viewer", 3]
        assert config.get_section("gate") == {"items": [{"role": "operator"}, "viewer", 3]}

    def test_unresolvable_placeholder_raises(self, monkeypatch):
        monkeypatch.delenv("NOPE_NOT_SET", raising=False)
        with pytest.raises(ValueError, match="Cannot resolve placeholder"):
            Config({"a": "${NOPE_NOT_SET}"}).get("a")


class TestConfigFiles:
    def test_load_yaml(self, tmp_path: Path):
        config_file = tmp_path / "routewall.yaml"
        config_file.write_text("routewall:\n  logging:\n    format: json\n")
        config = Config.from_file(config_file)
        assert config.get("routewall.logging.format") == "json"
        assert config.loaded_sources == [str(config_file)]

    def test_load_toml(self, tmp_path: Path):
        config_file = tmp_path / "routewall.toml"
        config_file.write_text('[routewall.logging]\nformat = "json"\n')
        assert Config.from_file(config_file).get("routewall.logging.format") == "json"

    def test_profile_overlay_wins(self, tmp_path: Path):
        (tmp_path / "routewall.yaml").write_text("routewall:\n  logging:\n    format: console\n    x: 1\n")
        (tmp_path / "routewall-prod.yaml").write_text("routewall:\n  logging:\n    format: json\n")
        config = Config.from_file(tmp_path / "routewall.yaml", active_profiles=["prod"])
        assert config.get("routewall.logging.format") == "json"
        assert config.get("routewall.logging.x") == 1
        assert len(config.loaded_sources) == 2

    def test_missing_file_is_empty(self, tmp_path: Path):
        config = Config.from_file(tmp_path / "absent.yaml")
        assert config.get("routewall") is None
        assert config.loaded_sources == []
