"""Shared test fixtures for skillbook."""

from __future__ import annotations

import logging
from collections.abc import Callable
from pathlib import Path

import pytest

from skillbook.config import ConfigManager

SkillWriter = Callable[..., Path]

VALID_BODY = """
# Title

## Overview

What the tool is.

## Instructions

Steps.

## Examples

```bash
echo hello
```

## Guidelines

Rules.
"""


@pytest.fixture(autouse=True)
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    """Run every test from an empty cwd with a fresh config singleton."""
    for key in ("SKILLBOOK_CONFIG", "SKILLBOOK_LOG_LEVEL"):
        monkeypatch.delenv(key, raising=False)
    workdir = tmp_path / "cwd"
    workdir.mkdir()
    monkeypatch.chdir(workdir)
    ConfigManager._reset_for_tests()
    yield
    ConfigManager._reset_for_tests()
    logging.getLogger("skillbook").setLevel(logging.NOTSET)


@pytest.fixture
def skills_dir(tmp_path: Path) -> Path:
    path = tmp_path / "skills"
    path.mkdir()
    return path


@pytest.fixture
def write_skill(skills_dir: Path) -> SkillWriter:
    """Write <skills_dir>/<slug>/SKILL.md from front-matter text and a body."""

    def _write(slug: str, frontmatter: str | None = None, body: str = VALID_BODY) -> Path:
        if frontmatter is None:
            frontmatter = f"name: {slug}\ndescription: The {slug} skill.\ncategory: tools\n"
        if not frontmatter.endswith("\n"):
            frontmatter += "\n"
        skill_dir = skills_dir / slug
        skill_dir.mkdir(parents=True, exist_ok=True)
        skill_file = skill_dir / "SKILL.md"
        skill_file.write_text(f"---\n{frontmatter}---\n{body}", encoding="utf-8")
        return skill_file

    return _write
