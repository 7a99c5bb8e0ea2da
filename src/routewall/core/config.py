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
"""Configuration from YAML/TOML files with env var overrides.

A route table can live in configuration instead of code::

    # routewall.yaml
    routewall:
      gate:
        routes:
          - {path: /admin, access: "${ADMIN_ROLE:admin}"}
          - {path: /feed, access: PUBLIC}
          - {path: /profile, method: post, access: AUTHENTICATED}
      logging:
        level:
          root: INFO
          routewall.web: DEBUG
        format: json

``${NAME}`` / ``${NAME:default}`` placeholders are resolved from the
environment, then from other config keys, wherever they appear in a value,
including inside lists and mappings.
"""

from __future__ import annotations

import os
import re
import tomllib
from pathlib import Path
from typing import Any

import yaml  # type: ignore[import-untyped]

_PLACEHOLDER_RE = re.compile(r"\$\{([^}]+)\}")
_MAX_PLACEHOLDER_DEPTH = 10

ENV_PREFIX = "ROUTEWALL_"


class Config:
    """Nested configuration read with dot-notation keys.

    Priority (highest wins):
    1. Environment variables (``routewall.gate.routes`` -> ``ROUTEWALL_GATE_ROUTES``)
    2. Profile overlay files (``<name>-<profile>.<ext>``)
    3. The base configuration file or dict
    """

    def __init__(self, data: dict[str, Any] | None = None) -> None:
        self._data: dict[str, Any] = data or {}
        self._loaded_sources: list[str] = []

    @property
    def loaded_sources(self) -> list[str]:
        """Config file paths that were loaded, in merge order."""
        return list(self._loaded_sources)

    @classmethod
    def from_file(cls, path: str | Path, active_profiles: list[str] | None = None) -> Config:
        """Load a YAML or TOML file plus optional profile overlays.

        A missing base file yields an empty configuration.
        """
        path = Path(path)
        instance = cls()
        if not path.exists():
            return instance

        data = _read_file(path)
        instance._loaded_sources.append(str(path))
        for profile in active_profiles or []:
            overlay = path.parent / f"{path.stem}-{profile}{path.suffix}"
            if overlay.exists():
                data = _merge(data, _read_file(overlay))
                instance._loaded_sources.append(f"{overlay} (profile: {profile})")

        instance._data = data
        return instance

    def get(self, key: str, default: Any = None) -> Any:
        """Return the value at *key*, with placeholders resolved.

        An environment variable named after the key wins over file values and
        is returned as the raw string.
        """
        env_key = ENV_PREFIX + key.removeprefix("routewall.").upper().replace(".", "_").replace("-", "_")
        env_val = os.environ.get(env_key)
        if env_val is not None:
            return env_val

        value = self._lookup(key)
        if value is None:
            return default
        return self._resolve(value, 0)

    def get_section(self, prefix: str) -> dict[str, Any]:
        """Return the mapping under *prefix*, or an empty dict."""
        section = self.get(prefix)
        return section if isinstance(section, dict) else {}

    def _lookup(self, key: str) -> Any:
        current: Any = self._data
        for part in key.split("."):
            if not isinstance(current, dict):
                return None
            current = current.get(part)
        return current

    def _resolve(self, value: Any, depth: int) -> Any:
        if isinstance(value, str):
            return self._substitute(value, depth) if "${" in value else value
        if isinstance(value, list):
            return [self._resolve(item, depth) for item in value]
        if isinstance(value, dict):
            return {k: self._resolve(v, depth) for k, v in value.items()}
        return value

    def _substitute(self, value: str, depth: int) -> str:
        if depth > _MAX_PLACEHOLDER_DEPTH:
            raise ValueError(f"Placeholders in '{value}' nest too deeply; check for circular references")

        def _replace(match: re.Match[str]) -> str:
            name, _, fallback = match.group(1).partition(":")
            has_fallback = ":" in match.group(1)

            env_val = os.environ.get(name)
            if env_val is not None:
                return env_val

            referenced = self._lookup(name)
            if referenced is not None:
                return self._substitute(str(referenced), depth + 1)

            if has_fallback:
                return fallback
            raise ValueError(f"Cannot resolve placeholder '${{{match.group(1)}}}': not found in environment or config")

        return _PLACEHOLDER_RE.sub(_replace, value)


def _read_file(path: Path) -> dict[str, Any]:
    if path.suffix == ".toml":
        with open(path, "rb") as f:
            return tomllib.load(f) or {}
    with open(path) as f:
        return yaml.safe_load(f) or {}


def _merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Recursively merge *override* into *base*; override values win."""
    merged = dict(base)
    for key, value in override.items():
        if isinstance(merged.get(key), dict) and isinstance(value, dict):
            merged[key] = _merge(merged[key], value)
        else:
            merged[key] = value
    return merged
