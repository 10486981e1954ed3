"""YAML front-matter handling for SKILL.md documents."""

from __future__ import annotations

from typing import Any

from skillbook.corpus.exceptions import FrontmatterError
from skillbook.yaml_mapping import YAMLMappingError, load_mapping

_DELIMITER = "---"


def _is_delimiter(line: str) -> bool:
    return line.rstrip("\r\n").rstrip() == _DELIMITER


def split_frontmatter(content: str) -> tuple[str, str]:
    """Split SKILL.md content into raw front-matter YAML and markdown body.

    Raises:
        FrontmatterError: if the document does not open with ``---`` or the
            block is never closed.
    """
    lines = content.lstrip("\ufeff").splitlines(keepends=True)
    if not lines or not _is_delimiter(lines[0]):
        raise FrontmatterError("Missing frontmatter block (document must start with '---')")
    for idx in range(1, len(lines)):
        if _is_delimiter(lines[idx]):
            return "".join(lines[1:idx]), "".join(lines[idx + 1 :])
    raise FrontmatterError("Frontmatter block is not closed with '---'")


def load_frontmatter_yaml(raw: str) -> dict[str, Any]:
    """Parse a raw front-matter block into a mapping."""
    try:
        # the opening delimiter occupies line 1 of the file
        return load_mapping(raw, line_offset=1)
    except YAMLMappingError as exc:
        raise FrontmatterError(str(exc), line=exc.line, column=exc.column) from exc


def parse_frontmatter(content: str) -> tuple[dict[str, Any], str]:
    """Parse SKILL.md content into a front-matter mapping and body string."""
    raw, body = split_frontmatter(content)
    return load_frontmatter_yaml(raw), body
