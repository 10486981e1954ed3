"""skillbook index — generate index.json from every SKILL.md in the corpus."""

from pathlib import Path

import typer
from rich.console import Console
from rich.markup import escape

from skillbook.config import ConfigManager
from skillbook.corpus.index import build_index, index_is_current, write_index
from skillbook.corpus.loader import CorpusLoader

console = Console()


def index_command(
    skills_dir: str = typer.Argument("", help="Skills directory (default: configured skills directory)."),
    output: str = typer.Option("", "--output", "-o", help="Index file path (default: <skills_dir>/index.json)."),
    check: bool = typer.Option(False, "--check", help="Only verify the index on disk is up to date."),
) -> None:
    """Generate the skills index (name, slug, description, category, tags)."""
    cfg = ConfigManager.instance().get()
    base = Path(skills_dir or cfg.corpus.skills_dir).resolve()
    if not base.is_dir():
        typer.echo(f"Error: path is not a directory: {base}", err=True)
        raise typer.Exit(2)
    out_path = Path(output).resolve() if output else base / cfg.corpus.index_filename

    loader = CorpusLoader(base, skill_filename=cfg.corpus.skill_filename)
    index = build_index(loader.scan())

    if check:
        if index_is_current(index, out_path):
            console.print(f"Index is up to date: {escape(str(out_path))}", soft_wrap=True)
            return
        typer.echo(f"Index is out of date: {out_path} (run `skillbook index`)", err=True)
        raise typer.Exit(1)

    write_index(index, out_path)
    console.print(
        f"[green]Generated[/green] {escape(out_path.name)} with {len(index['skills'])} skills "
        f"and {len(index['categories'])} categories",
        soft_wrap=True,
    )
