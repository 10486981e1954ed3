"""Custom exceptions for the skill corpus."""


class CorpusError(Exception):
    """Base exception for skill corpus errors."""


class FrontmatterError(CorpusError):
    """Raised when a SKILL.md front-matter block is missing or malformed."""

    def __init__(self, message: str, line: int | None = None, column: int | None = None) -> None:
        super().__init__(message)
        self.line = line
        self.column = column


class SkillNotFoundError(CorpusError):
    """Raised when a skill name is not present in the corpus."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Skill not found: {name}")
        self.name = name
