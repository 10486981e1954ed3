"""skillbook list — list skills in the corpus. skillbook categories — count skills per category."""

import json
from collections import Counter
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from skillbook.config import ConfigManager
from skillbook.corpus.loader import CorpusLoader

console = Console()

_MAX_DESC_LEN = 60


def _load_corpus(path: str) -> CorpusLoader:
    cfg = ConfigManager.instance().get()
    base = Path(path or cfg.corpus.skills_dir).resolve()
    if not base.is_dir():
        typer.echo(f"Error: path is not a directory: {base}", err=True)
        raise typer.Exit(2)
    loader = CorpusLoader(base, skill_filename=cfg.corpus.skill_filename)
    loader.scan()
    return loader


def list_command(
    path: Annotated[str, typer.Option("--path", "-p", help="Skills directory to scan.")] = "",
    category: Annotated[str, typer.Option("--category", "-c", help="Only skills in this category.")] = "",
    tag: Annotated[str, typer.Option("--tag", "-t", help="Only skills carrying this tag.")] = "",
    json_output: Annotated[bool, typer.Option("--json", help="Output in JSON format.")] = False,
) -> None:
    """List skills (name and description) found in the skills directory."""
    loader = _load_corpus(path)
    skills = loader.filter(category=category or None, tag=tag or None)
    if json_output:
        typer.echo(json.dumps([s.to_dict() for s in skills], indent=2, ensure_ascii=False, default=str))
        return
    if not skills:
        typer.echo("No skills found.")
        return
    for s in skills:
        desc = (s.description[:_MAX_DESC_LEN] + "…") if len(s.description) > _MAX_DESC_LEN else s.description
        typer.echo(f"  {s.name}: {desc}")


def categories_command(
    path: Annotated[str, typer.Option("--path", "-p", help="Skills directory to scan.")] = "",
) -> None:
    """Show each category with the number of skills in it."""
    loader = _load_corpus(path)
    counts = Counter(skill.category or "(none)" for skill in loader.list_skills())
    if not counts:
        typer.echo("No skills found.")
        return
    table = Table(title="Skill categories")
    table.add_column("Category")
    table.add_column("Skills", justify="right")
    for name in sorted(counts):
        table.add_row(escape(name), str(counts[name]))
    console.print(table)
