"""Core data models for the skill corpus."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any

from skillbook.corpus.body import CodeBlock, Section, parse_code_blocks, parse_sections
from skillbook.corpus.frontmatter import split_frontmatter


@dataclass
class ValidationError:
    """A single validation error (not an exception)."""

    field: str
    message: str
    severity: str  # "error" or "warning"


def _as_text(value: Any) -> str:
    if value is None or isinstance(value, (dict, list)):
        return ""
    return str(value).strip()


def normalize_tags(value: Any) -> list[str]:
    """Return tags as an ordered, de-duplicated list of non-blank strings."""
    if isinstance(value, str):
        value = [value]
    if not isinstance(value, list):
        return []
    out: list[str] = []
    seen: set[str] = set()
    for item in value:
        tag = _as_text(item)
        if not tag or tag in seen:
            continue
        seen.add(tag)
        out.append(tag)
    return out


class SkillDocument:
    """A SKILL.md document: front-matter metadata plus a lazily loaded body.

    Descriptive keys (category, tags, author, version, compatibility) are read
    from the top level of the front-matter first and from the nested
    ``metadata`` mapping second.

    Attributes:
        name: Unique identifier of the skill within the corpus
        slug: Directory name holding the SKILL.md file
        description: One-paragraph summary of the skill
        file_path: Path to the SKILL.md file
        frontmatter: The full parsed front-matter mapping
    """

    def __init__(
        self,
        name: str,
        slug: str,
        description: str,
        file_path: Path,
        frontmatter: dict[str, Any] | None = None,
        body: str | None = None,
    ):
        self.name = name
        self.slug = slug
        self.description = description
        self.file_path = Path(file_path)
        self.frontmatter = frontmatter or {}
        self._body = body
        self._is_loaded = body is not None

    @property
    def metadata(self) -> dict[str, Any]:
        raw = self.frontmatter.get("metadata", {})
        return dict(raw) if isinstance(raw, dict) else {}

    def _lookup(self, key: str) -> Any:
        if key in self.frontmatter:
            return self.frontmatter[key]
        return self.metadata.get(key)

    @property
    def category(self) -> str:
        return _as_text(self._lookup("category"))

    @property
    def tags(self) -> list[str]:
        return normalize_tags(self._lookup("tags"))

    @property
    def author(self) -> str:
        return _as_text(self._lookup("author"))

    @property
    def version(self) -> str:
        """Version as a string; YAML numbers such as ``1.0`` are stringified."""
        return _as_text(self._lookup("version"))

    @property
    def compatibility(self) -> list[str]:
        raw = self._lookup("compatibility")
        if isinstance(raw, list):
            return [text for text in (_as_text(item) for item in raw) if text]
        text = _as_text(raw)
        return [text] if text else []

    def load_body(self) -> str:
        """Load the markdown body from SKILL.md (cached after first read)."""
        if not self._is_loaded:
            content = self.file_path.read_text(encoding="utf-8")
            _raw, body = split_frontmatter(content)
            self._body = body.strip()
            self._is_loaded = True
        return self._body or ""

    def clear_body_cache(self) -> None:
        """Drop the cached body so the next read goes back to disk."""
        self._body = None
        self._is_loaded = False

    @property
    def sections(self) -> list[Section]:
        return parse_sections(self.load_body())

    @property
    def code_blocks(self) -> list[CodeBlock]:
        return parse_code_blocks(self.load_body())

    def to_dict(self) -> dict[str, Any]:
        """Serialize metadata to dict (excludes the body).

        Returns:
            Dictionary suitable for JSON serialization
        """
        return {
            "name": self.name,
            "slug": self.slug,
            "description": self.description,
            "category": self.category,
            "tags": self.tags,
            "author": self.author,
            "version": self.version,
            "compatibility": self.compatibility,
            "metadata": self.metadata,
            "file_path": str(self.file_path),
        }

    def __repr__(self) -> str:
        return f"SkillDocument(name={self.name!r}, slug={self.slug!r})"
