"""Skill validator — structural linting of SKILL.md documents."""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable
from pathlib import Path
from typing import Any

from skillbook.corpus.body import find_unterminated_fence, parse_sections
from skillbook.corpus.exceptions import FrontmatterError
from skillbook.corpus.frontmatter import parse_frontmatter
from skillbook.corpus.loader import DEFAULT_SKILL_FILENAME
from skillbook.corpus.models import ValidationError

logger = logging.getLogger(__name__)

SKILL_NAME_PATTERN = re.compile(r"^[a-z0-9]+(-[a-z0-9]+)*$")

DEFAULT_REQUIRED_FIELDS: tuple[str, ...] = ("name", "description")
DEFAULT_RECOMMENDED_SECTIONS: tuple[str, ...] = ("Overview", "Instructions", "Examples", "Guidelines")

# identity keys the loader reads from the top level only
TOP_LEVEL_FIELDS: tuple[str, ...] = ("name", "description")


def collect_skill_files(paths: Iterable[Path], skill_filename: str = DEFAULT_SKILL_FILENAME) -> list[Path]:
    """Resolve paths to a list of skill files (recursing into directories)."""
    files: list[Path] = []
    seen: set[Path] = set()
    for p in paths:
        resolved = Path(p).resolve()
        if not resolved.exists():
            continue
        if resolved.is_file():
            candidates = [resolved] if resolved.name == skill_filename else []
        else:
            candidates = sorted(resolved.rglob(skill_filename))
        for file_path in candidates:
            if file_path not in seen:
                seen.add(file_path)
                files.append(file_path)
    return files


def _lookup(frontmatter: dict[str, Any], key: str) -> tuple[bool, Any, str]:
    """Find a descriptive key at the top level, then under ``metadata``."""
    if key in frontmatter:
        return True, frontmatter[key], key
    metadata = frontmatter.get("metadata")
    if isinstance(metadata, dict) and key in metadata:
        return True, metadata[key], f"metadata.{key}"
    return False, None, key


class SkillValidator:
    """Validates SKILL.md files: front-matter shape and markdown structure."""

    def __init__(
        self,
        required_fields: Iterable[str] = DEFAULT_REQUIRED_FIELDS,
        recommended_sections: Iterable[str] = DEFAULT_RECOMMENDED_SECTIONS,
    ) -> None:
        self.required_fields = [f for f in required_fields if f]
        self.recommended_sections = [s for s in recommended_sections if s]

    def validate_skill_file(self, skill_path: Path) -> list[ValidationError]:
        """Validate one SKILL.md file.

        Args:
            skill_path: Path to the SKILL.md file.

        Returns:
            List of validation errors (empty if valid).
        """
        try:
            content = skill_path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            logger.warning("Cannot read skill file: path=%s, error=%s", skill_path, e)
            return [ValidationError(field="file", message=f"Cannot read file: {e}", severity="error")]

        try:
            frontmatter, body = parse_frontmatter(content)
        except FrontmatterError as e:
            return [ValidationError(field="frontmatter", message=f"Invalid frontmatter: {e}", severity="error")]

        errors: list[ValidationError] = []
        errors.extend(self._validate_frontmatter(frontmatter, skill_path.parent.name))
        errors.extend(self._validate_body(body))
        return errors

    def _validate_frontmatter(self, frontmatter: dict[str, Any], slug: str) -> list[ValidationError]:
        errors: list[ValidationError] = []
        for field in self.required_fields:
            found = field in frontmatter if field in TOP_LEVEL_FIELDS else _lookup(frontmatter, field)[0]
            if not found:
                errors.append(
                    ValidationError(field=field, message=f"Missing required field: {field}", severity="error")
                )

        if "name" in frontmatter:
            name = frontmatter["name"]
            if not isinstance(name, str) or not SKILL_NAME_PATTERN.match(name.strip()):
                errors.append(
                    ValidationError(
                        field="name",
                        message=f"Name must be in kebab-case format: {name!r}",
                        severity="error",
                    )
                )
            elif name.strip() != slug:
                errors.append(
                    ValidationError(
                        field="name",
                        message=f"Name {name.strip()!r} does not match directory {slug!r}",
                        severity="warning",
                    )
                )

        if "description" in frontmatter:
            description = frontmatter["description"]
            if not isinstance(description, str) or not description.strip():
                errors.append(
                    ValidationError(
                        field="description",
                        message="Description must be a non-empty string",
                        severity="error",
                    )
                )

        if "metadata" in frontmatter and not isinstance(frontmatter["metadata"], dict):
            errors.append(
                ValidationError(field="metadata", message="metadata must be a mapping/object", severity="error")
            )

        found, category, path = _lookup(frontmatter, "category")
        if category is not None and not isinstance(category, str):
            errors.append(ValidationError(field=path, message="Category must be a string", severity="error"))
        elif not found or not (category or "").strip():
            errors.append(ValidationError(field=path, message="Missing category", severity="warning"))

        found, author, path = _lookup(frontmatter, "author")
        if found and not isinstance(author, str):
            errors.append(ValidationError(field=path, message="Author must be a string", severity="error"))

        found, version, path = _lookup(frontmatter, "version")
        if found and not isinstance(version, str):
            errors.append(
                ValidationError(
                    field=path,
                    message=f"Version should be a quoted string, got {type(version).__name__}: {version!r}",
                    severity="warning",
                )
            )

        found, compatibility, path = _lookup(frontmatter, "compatibility")
        if found and not (
            isinstance(compatibility, str)
            or (isinstance(compatibility, list) and all(isinstance(item, str) for item in compatibility))
        ):
            errors.append(
                ValidationError(
                    field=path,
                    message="Compatibility must be a string or list of strings",
                    severity="error",
                )
            )

        found, tags, path = _lookup(frontmatter, "tags")
        if found:
            errors.extend(self._validate_tags(tags, path))
        return errors

    @staticmethod
    def _validate_tags(tags: Any, path: str) -> list[ValidationError]:
        if not isinstance(tags, list):
            return [ValidationError(field=path, message="Tags must be a list", severity="error")]
        errors: list[ValidationError] = []
        if any(isinstance(tag, (dict, list)) or tag is None or not str(tag).strip() for tag in tags):
            errors.append(
                ValidationError(field=path, message="Tag items must be non-empty strings", severity="error")
            )
        seen: set[str] = set()
        duplicates: list[str] = []
        for tag in tags:
            if isinstance(tag, (dict, list)) or tag is None:
                continue
            text = str(tag).strip()
            if text in seen and text not in duplicates:
                duplicates.append(text)
            seen.add(text)
        if duplicates:
            errors.append(
                ValidationError(
                    field=path,
                    message=f"Duplicate tags: {', '.join(duplicates)}",
                    severity="warning",
                )
            )
        return errors

    def _validate_body(self, body: str) -> list[ValidationError]:
        """Validate the markdown body."""
        errors: list[ValidationError] = []
        if not body.strip():
            errors.append(ValidationError(field="body", message="Body is empty", severity="error"))
            return errors

        fence_line = find_unterminated_fence(body)
        if fence_line is not None:
            errors.append(
                ValidationError(
                    field="body",
                    message=f"Unterminated code fence opened at body line {fence_line}",
                    severity="error",
                )
            )

        sections = parse_sections(body)
        if not sections:
            errors.append(
                ValidationError(field="body", message="Body should contain at least one heading", severity="warning")
            )
            return errors

        titles = [section.title.lower() for section in sections]
        for wanted in self.recommended_sections:
            if not any(title.startswith(wanted.lower()) for title in titles):
                errors.append(
                    ValidationError(
                        field="body.sections",
                        message=f"Missing recommended section: {wanted}",
                        severity="warning",
                    )
                )
        return errors

    def validate_corpus(self, skill_files: Iterable[Path]) -> dict[Path, list[ValidationError]]:
        """Validate many files and flag names shared by more than one file."""
        results: dict[Path, list[ValidationError]] = {}
        owners: dict[str, list[Path]] = {}
        for file_path in skill_files:
            results[file_path] = self.validate_skill_file(file_path)
            name = self._read_name(file_path)
            if name:
                owners.setdefault(name, []).append(file_path)

        for name, paths in owners.items():
            if len(paths) < 2:
                continue
            for file_path in paths:
                others = ", ".join(str(p) for p in paths if p != file_path)
                results[file_path].append(
                    ValidationError(
                        field="name",
                        message=f"Duplicate skill name {name!r} (also in {others})",
                        severity="error",
                    )
                )
        return results

    @staticmethod
    def _read_name(file_path: Path) -> str:
        try:
            frontmatter, _body = parse_frontmatter(file_path.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError, FrontmatterError):
            return ""
        name = frontmatter.get("name")
        return name.strip() if isinstance(name, str) else ""

    @staticmethod
    def report(results: dict[Path, list[ValidationError]]) -> str:
        """Return a human-readable report (empty if there are no issues)."""
        lines: list[str] = []
        for file_path, errors in results.items():
            if not errors:
                continue
            lines.append(f"{file_path}:")
            for e in errors:
                lines.append(f"  [{e.severity}] {e.field}: {e.message}")
        if not lines:
            return ""
        return "\n".join(["Validation report:", *lines])
