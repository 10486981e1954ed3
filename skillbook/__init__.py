"""Tooling for a corpus of SKILL.md instructional documents."""

from skillbook.corpus import CorpusLoader, SkillDocument, SkillValidator, build_index

__all__ = [
    "CorpusLoader",
    "SkillDocument",
    "SkillValidator",
    "build_index",
]
