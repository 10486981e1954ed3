"""Locate and read skillbook.yaml."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

from skillbook.yaml_mapping import YAMLMappingError, load_mapping


class ConfigLoadError(ValueError):
    """skillbook.yaml exists but is not a usable YAML mapping."""


class YAMLConfigLoader:
    DEFAULT_FILENAME = "skillbook.yaml"
    ENV_VAR = "SKILLBOOK_CONFIG"

    @classmethod
    def resolve_path(cls, cli_path: str | None = None) -> Path:
        """SKILLBOOK_CONFIG wins over --config; otherwise ./skillbook.yaml."""
        for candidate in (os.environ.get(cls.ENV_VAR, ""), cli_path or ""):
            if candidate.strip():
                return Path(candidate.strip())
        return Path.cwd() / cls.DEFAULT_FILENAME

    @classmethod
    def load_dict(cls, path: str | Path | None = None) -> dict[str, Any]:
        """Read the config mapping; a missing or blank file means no settings."""
        target = Path(path) if path is not None else cls.resolve_path()
        if not target.is_file():
            return {}
        try:
            return load_mapping(target.read_text(encoding="utf-8"))
        except YAMLMappingError as exc:
            raise ConfigLoadError(f"{target}: {exc}") from exc
