"""Configuration models for skillbook."""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

_LOG_LEVELS = {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}


class CorpusConfig(BaseModel):
    """Where the corpus lives and how its files are named."""

    skills_dir: str = Field(default="skills", description="Directory holding one sub-directory per skill.")
    skill_filename: str = Field(default="SKILL.md", min_length=1)
    index_filename: str = Field(default="index.json", min_length=1)


class ValidationConfig(BaseModel):
    """Structural lint rules."""

    required_fields: list[str] = Field(default_factory=lambda: ["name", "description"])
    recommended_sections: list[str] = Field(
        default_factory=lambda: ["Overview", "Instructions", "Examples", "Guidelines"]
    )
    strict: bool = Field(default=False, description="Treat warnings as failures.")


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = Field(default="WARNING")

    @field_validator("level")
    @classmethod
    def _normalize_level(cls, value: str) -> str:
        normalized = value.strip().upper()
        if normalized not in _LOG_LEVELS:
            raise ValueError(f"level must be one of: {', '.join(sorted(_LOG_LEVELS))}")
        return normalized


class SkillbookConfig(BaseSettings):
    """Root configuration model for skillbook."""

    corpus: CorpusConfig = Field(default_factory=CorpusConfig)
    validation: ValidationConfig = Field(default_factory=ValidationConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    model_config = SettingsConfigDict(
        env_prefix="SKILLBOOK_",
        env_nested_delimiter="__",
        extra="ignore",
    )
