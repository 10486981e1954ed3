"""Configuration manager for skillbook."""

from __future__ import annotations

import json
import os
from pathlib import Path
from threading import Lock
from typing import Any, ClassVar

from skillbook.config.loader import YAMLConfigLoader
from skillbook.config.models import SkillbookConfig

ENV_PREFIX = "SKILLBOOK_"
# consumed directly, never part of the model
_RESERVED_ENV = {"SKILLBOOK_CONFIG", "SKILLBOOK_LOG_LEVEL"}


def _deep_merge(base: dict[str, Any], updates: dict[str, Any]) -> dict[str, Any]:
    merged: dict[str, Any] = dict(base)
    for key, value in updates.items():
        if key in merged and isinstance(merged[key], dict) and isinstance(value, dict):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def _coerce_env_value(raw: str) -> Any:
    value = raw.strip()
    lowered = value.lower()
    if lowered in {"true", "false"}:
        return lowered == "true"
    if lowered in {"null", "none"}:
        return None
    try:
        if "." in value:
            return float(value)
        return int(value)
    except ValueError:
        pass
    if value.startswith("[") or value.startswith("{"):
        try:
            return json.loads(value)
        except ValueError:
            return value
    return value


def _collect_env_overrides(prefix: str = ENV_PREFIX) -> dict[str, Any]:
    overrides: dict[str, Any] = {}
    for key, raw_value in os.environ.items():
        if not key.startswith(prefix) or key in _RESERVED_ENV:
            continue
        suffix = key[len(prefix) :]
        path = [p.strip().lower() for p in suffix.split("__") if p.strip()]
        if not path:
            continue
        cursor = overrides
        for part in path[:-1]:
            existing = cursor.get(part)
            if not isinstance(existing, dict):
                existing = {}
                cursor[part] = existing
            cursor = existing
        leaf = path[-1]
        # index/skill file names like "index.json" must stay strings
        cursor[leaf] = raw_value.strip() if leaf.endswith(("_dir", "_filename")) else _coerce_env_value(raw_value)
    return overrides


class ConfigManager:
    """Thread-safe singleton for typed configuration access."""

    _instance: ClassVar[ConfigManager | None] = None
    _class_lock: ClassVar[Lock] = Lock()

    def __init__(self) -> None:
        self._lock = Lock()
        self._config = SkillbookConfig.model_validate({})
        self._config_path: Path | None = None

    @classmethod
    def instance(cls) -> ConfigManager:
        """Get singleton instance."""
        if cls._instance is not None:
            return cls._instance
        with cls._class_lock:
            if cls._instance is None:
                cls._instance = cls()
        return cls._instance

    @classmethod
    def _reset_for_tests(cls) -> None:
        """Reset singleton state for isolated unit tests."""
        with cls._class_lock:
            cls._instance = None

    @classmethod
    def load(
        cls,
        config_path: str | None = None,
        overrides: dict[str, Any] | None = None,
    ) -> ConfigManager:
        """Load configuration from defaults + YAML + env + runtime overrides."""
        manager = cls.instance()
        target = YAMLConfigLoader.resolve_path(config_path)
        merged = _deep_merge(YAMLConfigLoader.load_dict(target), _collect_env_overrides())
        merged = _deep_merge(merged, overrides or {})
        new_config = SkillbookConfig.model_validate(merged)
        with manager._lock:
            manager._config = new_config
            manager._config_path = target
        return manager

    def get(self) -> SkillbookConfig:
        """Return current config snapshot."""
        with self._lock:
            return self._config

    @property
    def config_path(self) -> Path | None:
        """Path the current config was resolved from (may not exist)."""
        with self._lock:
            return self._config_path
