"""The index.json catalogue of every skill in the corpus."""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from skillbook.corpus.models import SkillDocument

logger = logging.getLogger(__name__)


def format_timestamp(moment: datetime) -> str:
    """UTC ISO-8601 with millisecond precision and a ``Z`` suffix."""
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    moment = moment.astimezone(timezone.utc)
    return moment.strftime("%Y-%m-%dT%H:%M:%S.") + f"{moment.microsecond // 1000:03d}Z"


def index_entry(skill: SkillDocument) -> dict[str, Any]:
    return {
        "name": skill.name,
        "slug": skill.slug,
        "description": skill.description,
        "category": skill.category,
        "tags": skill.tags,
    }


def build_index(skills: Iterable[SkillDocument], now: datetime | None = None) -> dict[str, Any]:
    """Build the index payload from loaded skills (kept in the given order)."""
    entries = [index_entry(skill) for skill in skills]
    categories = sorted({entry["category"] for entry in entries if entry["category"]})
    return {
        "skills": entries,
        "categories": categories,
        "updatedAt": format_timestamp(now or datetime.now(timezone.utc)),
    }


def dump_index(index: dict[str, Any]) -> str:
    return json.dumps(index, indent=2, ensure_ascii=False) + "\n"


def write_index(index: dict[str, Any], path: Path) -> Path:
    """Write the index as pretty-printed JSON with a trailing newline."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(dump_index(index), encoding="utf-8")
    logger.info("Wrote index with %d skills to %s", len(index.get("skills", [])), path)
    return path


def load_index(path: Path) -> dict[str, Any] | None:
    """Load an index file; returns None when it is missing or not valid JSON."""
    if not path.is_file():
        return None
    try:
        loaded = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        logger.warning("Cannot read index %s: %s", path, e)
        return None
    return loaded if isinstance(loaded, dict) else None


def index_is_current(index: dict[str, Any], path: Path) -> bool:
    """True when the index on disk lists the same skills and categories."""
    existing = load_index(path)
    if existing is None:
        return False
    return existing.get("skills") == index["skills"] and existing.get("categories") == index["categories"]
