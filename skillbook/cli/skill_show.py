"""skillbook show — print one skill's metadata and body outline as JSON."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import typer

from skillbook.config import ConfigManager
from skillbook.corpus.exceptions import FrontmatterError, SkillNotFoundError
from skillbook.corpus.loader import CorpusLoader
from skillbook.corpus.models import SkillDocument


def _collect_payload(skill: SkillDocument) -> dict[str, Any]:
    payload = skill.to_dict()
    payload["sections"] = [
        {"level": section.level, "title": section.title, "line": section.line} for section in skill.sections
    ]
    blocks = skill.code_blocks
    payload["code_blocks"] = len(blocks)
    payload["code_languages"] = sorted({block.language for block in blocks if block.language})
    return payload


def show_command(
    name: str = typer.Argument(..., help="Skill name (front-matter `name`)."),
    path: str = typer.Option("", "--path", "-p", help="Skills directory to scan."),
) -> None:
    """Show a skill's metadata, section outline and code-block languages."""
    cfg = ConfigManager.instance().get()
    base = Path(path or cfg.corpus.skills_dir).resolve()
    loader = CorpusLoader(base, skill_filename=cfg.corpus.skill_filename)
    loader.scan()
    try:
        skill = loader.require_skill(name)
        payload = _collect_payload(skill)
    except SkillNotFoundError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(2) from None
    except (OSError, FrontmatterError) as exc:
        typer.echo(f"Error: cannot read {name}: {exc}", err=True)
        raise typer.Exit(1) from None
    typer.echo(json.dumps(payload, ensure_ascii=False, indent=2, default=str))
