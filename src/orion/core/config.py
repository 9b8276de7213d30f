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
"""Layered configuration: framework defaults, YAML/TOML files, env vars, dataclass binding."""

from __future__ import annotations

import dataclasses
import importlib.resources
import os
import re
import tomllib
from collections.abc import Callable, Iterable
from pathlib import Path
from typing import Any, TypeVar, get_type_hints

import yaml  # type: ignore[import-untyped]

T = TypeVar("T")

_PLACEHOLDER_RE = re.compile(r"\$\{([^}]+)\}")
_PREFIX_ATTR = "__orion_config_prefix__"
_MAX_PLACEHOLDER_DEPTH = 10
_DEFAULTS_SOURCE = "orion-defaults.yaml (framework defaults)"
_MISSING = object()


def config_properties(prefix: str) -> Callable[[type[T]], type[T]]:
    """Bind a dataclass to the configuration section at *prefix*.

    Example::

        @config_properties(prefix="orion.session")
        @dataclass
        class SessionProperties:
            ttl: int = 7200
    """

    def decorator(cls: type[T]) -> type[T]:
        setattr(cls, _PREFIX_ATTR, prefix)
        return cls

    return decorator


def deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Return *base* updated recursively with *override*; neither input is modified."""
    merged = dict(base)
    for key, value in override.items():
        current = merged.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            merged[key] = deep_merge(current, value)
        else:
            merged[key] = value
    return merged


def env_key(key: str) -> str:
    """Environment variable overriding *key*: ``orion.session.id-prefix`` -> ``ORION_SESSION_ID_PREFIX``."""
    return "ORION_" + key.removeprefix("orion.").upper().replace(".", "_").replace("-", "_")


def _read_file(path: Path) -> dict[str, Any]:
    if path.suffix == ".toml":
        with open(path, "rb") as f:
            return tomllib.load(f)
    with open(path, encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


def _lookup(data: Any, dotted: str) -> Any:
    for part in dotted.split("."):
        if not isinstance(data, dict) or data.get(part) is None:
            return _MISSING
        data = data[part]
    return data


def _coerce(raw: str, expected: Any) -> Any:
    if expected is bool:
        return raw.strip().lower() in ("true", "1", "yes", "on")
    if expected in (int, float):
        return expected(raw)
    if expected is list:
        return [item.strip() for item in raw.split(",") if item.strip()]
    return raw


class Config:
    """Nested configuration mapping read with dotted keys.

    Lookup order for ``get("orion.session.ttl")``:

    1. environment variable ``ORION_SESSION_TTL``
    2. the merged file data
    3. the caller's default

    String values may contain ``${NAME}``, ``${other.key}`` or
    ``${NAME:fallback}`` placeholders, resolved on read.
    """

    def __init__(self, data: dict[str, Any] | None = None) -> None:
        self._data: dict[str, Any] = data or {}
        self._loaded_sources: list[str] = []

    @property
    def loaded_sources(self) -> list[str]:
        """Files merged into this config, lowest precedence first."""
        return list(self._loaded_sources)

    def to_dict(self) -> dict[str, Any]:
        return dict(self._data)

    @staticmethod
    def load_framework_defaults() -> dict[str, Any]:
        """Defaults shipped in ``orion/resources/orion-defaults.yaml``."""
        resource = importlib.resources.files("orion.resources").joinpath("orion-defaults.yaml")
        return yaml.safe_load(resource.read_text(encoding="utf-8")) or {}

    @classmethod
    def from_sources(
        cls,
        base_dir: str | Path,
        active_profiles: list[str] | None = None,
        load_defaults: bool = True,
    ) -> Config:
        """Merge ``orion.yaml``/``orion.toml`` and profile overlays found under *base_dir*.

        For each name (``orion``, then ``orion-<profile>`` per active profile)
        ``<base_dir>/config/<name>`` is merged before ``<base_dir>/<name>``.
        """
        base_dir = Path(base_dir)
        names = ["orion", *(f"orion-{profile}" for profile in active_profiles or [])]
        candidates = (
            directory / f"{name}{ext}"
            for name in names
            for directory in (base_dir / "config", base_dir)
            for ext in (".yaml", ".toml")
        )
        return cls._merged(candidates, load_defaults)

    @classmethod
    def from_file(cls, path: str | Path, load_defaults: bool = True) -> Config:
        return cls._merged([Path(path)], load_defaults)

    @classmethod
    def _merged(cls, paths: Iterable[Path], load_defaults: bool) -> Config:
        data: dict[str, Any] = cls.load_framework_defaults() if load_defaults else {}
        sources = [_DEFAULTS_SOURCE] if load_defaults else []
        for path in paths:
            if path.is_file():
                data = deep_merge(data, _read_file(path))
                sources.append(str(path))
        config = cls(data)
        config._loaded_sources = sources
        return config

    def get(self, key: str, default: Any = None) -> Any:
        from_env = os.environ.get(env_key(key))
        if from_env is not None:
            return from_env

        value = _lookup(self._data, key)
        if value is _MISSING:
            return default
        if isinstance(value, str) and "${" in value:
            return self._resolve(value, depth=0)
        return value

    def get_section(self, prefix: str) -> dict[str, Any]:
        section = _lookup(self._data, prefix)
        return section if isinstance(section, dict) else {}

    def _resolve(self, value: str, depth: int) -> str:
        if depth > _MAX_PLACEHOLDER_DEPTH:
            raise ValueError(f"Placeholder nesting too deep in '{value}' (circular reference?)")

        def substitute(match: re.Match[str]) -> str:
            name, sep, fallback = match.group(1).partition(":")
            if name in os.environ:
                return os.environ[name]
            found = _lookup(self._data, name)
            if found is not _MISSING:
                text = str(found)
                return self._resolve(text, depth + 1) if "${" in text else text
            if sep:
                return fallback
            raise ValueError(f"Cannot resolve placeholder '${{{match.group(1)}}}'")

        return _PLACEHOLDER_RE.sub(substitute, value)

    def bind(self, config_cls: type[T]) -> T:
        """Instantiate a ``@config_properties`` dataclass from its section.

        A field ``id_prefix`` reads ``id_prefix`` or ``id-prefix``. Values
        coming from environment variables are converted to the field's
        ``int``, ``float``, ``bool`` or ``list`` (comma-separated) type.
        Missing keys keep the dataclass default.
        """
        prefix = getattr(config_cls, _PREFIX_ATTR, None)
        if prefix is None:
            raise ValueError(f"{config_cls.__name__} is not decorated with @config_properties")

        section = self.get_section(prefix)
        hints = get_type_hints(config_cls)
        values: dict[str, Any] = {}
        for f in dataclasses.fields(config_cls):  # type: ignore[arg-type]
            key = f.name if f.name in section else f.name.replace("_", "-")
            value = self.get(f"{prefix}.{key}")
            if value is None:
                continue
            values[f.name] = _coerce(value, hints.get(f.name)) if isinstance(value, str) else value
        return config_cls(**values)
