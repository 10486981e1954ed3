"""Corpus loading: discover skill directories and read their front-matter.

The loader walks the immediate children of a skills directory in sorted
order. Each child holding a SKILL.md becomes one :class:`SkillDocument`;
only front-matter is parsed at scan time, bodies are read on demand.
"""

import logging
from pathlib import Path

from skillbook.corpus.exceptions import FrontmatterError, SkillNotFoundError
from skillbook.corpus.frontmatter import parse_frontmatter
from skillbook.corpus.models import SkillDocument

logger = logging.getLogger(__name__)

DEFAULT_SKILL_FILENAME = "SKILL.md"


def _clean_scalar(value: object) -> str:
    if isinstance(value, str):
        return value.strip()
    if value is None or isinstance(value, (dict, list)):
        return ""
    return str(value).strip()


def _fold_whitespace(text: str) -> str:
    return " ".join(text.split())


class CorpusLoader:
    """Discovers and loads SKILL.md documents from a skills directory."""

    def __init__(self, skills_dir: Path | str, skill_filename: str = DEFAULT_SKILL_FILENAME):
        if isinstance(skills_dir, str):
            normalized = skills_dir.strip()
            if not normalized:
                raise ValueError("skills_dir must be a non-empty path")
            self.skills_dir = Path(normalized)
        elif isinstance(skills_dir, Path):
            self.skills_dir = skills_dir
        else:
            raise ValueError("skills_dir must be a non-empty path")
        self.skill_filename = skill_filename
        self.skills: dict[str, SkillDocument] = {}

    def scan(self) -> list[SkillDocument]:
        """Scan skill directories and load front-matter metadata.

        Returns:
            Skills in slug order. Unreadable or malformed files, skills without
            a name, and duplicate names are logged and skipped.
        """
        self.skills.clear()
        if not self.skills_dir.exists() or not self.skills_dir.is_dir():
            logger.warning("Skills directory does not exist or is not a directory: %s", self.skills_dir)
            return []
        for skill_dir in sorted(self.skills_dir.iterdir(), key=lambda p: p.name):
            if not skill_dir.is_dir():
                continue
            skill_file = skill_dir / self.skill_filename
            if not skill_file.is_file():
                logger.debug("Skipping %s: no %s", skill_dir, self.skill_filename)
                continue
            skill = self.load_file(skill_file)
            if skill is None:
                continue
            if skill.name in self.skills:
                logger.warning(
                    "Duplicate skill name '%s' in %s (already loaded from %s); skipping",
                    skill.name,
                    skill_file,
                    self.skills[skill.name].file_path,
                )
                continue
            self.skills[skill.name] = skill
        logger.info("Loaded %d skills from %s", len(self.skills), self.skills_dir)
        return list(self.skills.values())

    def load_file(self, file_path: Path) -> SkillDocument | None:
        """Parse one SKILL.md file; returns None (after logging) when it is unusable."""
        try:
            content = file_path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            logger.warning("Failed to read skill file %s: %s", file_path, e)
            return None
        try:
            frontmatter, _body = parse_frontmatter(content)
        except FrontmatterError as e:
            logger.warning("Skill file %s has invalid frontmatter: %s", file_path, e)
            return None

        name = _clean_scalar(frontmatter.get("name"))
        if not name:
            logger.warning("Skill file %s missing name field", file_path)
            return None
        description = _fold_whitespace(_clean_scalar(frontmatter.get("description")))
        return SkillDocument(
            name=name,
            slug=file_path.parent.name,
            description=description,
            file_path=file_path,
            frontmatter=frontmatter,
        )

    def get_skill(self, name: str) -> SkillDocument | None:
        """Retrieve a skill by name."""
        if not isinstance(name, str):
            return None
        normalized = name.strip()
        if not normalized:
            return None
        return self.skills.get(normalized)

    def require_skill(self, name: str) -> SkillDocument:
        """Like get_skill(), but raises SkillNotFoundError for unknown names."""
        skill = self.get_skill(name)
        if skill is None:
            raise SkillNotFoundError(str(name))
        return skill

    def list_skills(self) -> list[SkillDocument]:
        """List all loaded skills."""
        return list(self.skills.values())

    def categories(self) -> list[str]:
        """Sorted, unique, non-empty categories of the loaded skills."""
        return sorted({skill.category for skill in self.skills.values() if skill.category})

    def filter(self, category: str | None = None, tag: str | None = None) -> list[SkillDocument]:
        """Return loaded skills matching a category and/or tag (case-insensitive)."""
        wanted_category = (category or "").strip().lower()
        wanted_tag = (tag or "").strip().lower()
        out: list[SkillDocument] = []
        for skill in self.skills.values():
            if wanted_category and skill.category.lower() != wanted_category:
                continue
            if wanted_tag and wanted_tag not in {t.lower() for t in skill.tags}:
                continue
            out.append(skill)
        return out

    def clear_body_cache(self) -> int:
        """Clear cached bodies of all loaded skills.

        Returns:
            Number of skills whose cache was cleared.
        """
        cleared = 0
        for skill in self.skills.values():
            skill.clear_body_cache()
            cleared += 1
        return cleared
