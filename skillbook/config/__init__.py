"""Unified configuration system for skillbook."""

from skillbook.config.loader import ConfigLoadError, YAMLConfigLoader
from skillbook.config.manager import ConfigManager
from skillbook.config.models import CorpusConfig, LoggingConfig, SkillbookConfig, ValidationConfig

__all__ = [
    "ConfigLoadError",
    "ConfigManager",
    "CorpusConfig",
    "LoggingConfig",
    "SkillbookConfig",
    "ValidationConfig",
    "YAMLConfigLoader",
]
