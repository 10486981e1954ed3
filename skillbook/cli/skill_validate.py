"""skillbook validate — check SKILL.md files for structural problems."""

from pathlib import Path

import typer

from skillbook.config import ConfigManager
from skillbook.corpus.models import ValidationError
from skillbook.corpus.validator import SkillValidator, collect_skill_files


def _print_results(
    results: dict[Path, list[ValidationError]],
    strict: bool,
    verbose: bool,
) -> list[Path]:
    """Echo per-file results; returns the files that failed."""
    failed: list[Path] = []
    for file_path, errs in results.items():
        has_error = any(e.severity == "error" for e in errs)
        has_warning = any(e.severity == "warning" for e in errs)
        if has_error or (strict and has_warning):
            failed.append(file_path)
            continue
        typer.echo(f"OK: {file_path}")
        for e in errs:
            if e.severity == "warning":
                typer.echo(f"  [warning] {e.field}: {e.message}")

    for file_path in failed:
        typer.echo(f"FAIL: {file_path}", err=True)
        for e in results[file_path]:
            if e.severity == "error" or strict:
                typer.echo(f"  [{e.severity}] {e.field}: {e.message}", err=True)
            elif verbose:
                typer.echo(f"  [warning] {e.field}: {e.message}", err=True)
    return failed


def validate_command(
    paths: list[str] | None = typer.Argument(  # noqa: B008
        None,
        help="SKILL.md files or directories containing them (default: configured skills directory).",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Also show warnings for failing files.",
        is_flag=True,
    ),
    strict: bool = typer.Option(
        False,
        "--strict",
        "-s",
        help="Treat warnings as failures (exit 1 if any warnings).",
        is_flag=True,
    ),
) -> None:
    """Validate SKILL.md files (frontmatter, required keys, markdown structure)."""
    cfg = ConfigManager.instance().get()
    skill_filename = cfg.corpus.skill_filename
    resolved_paths = [Path(p).resolve() for p in (paths or [cfg.corpus.skills_dir])]
    missing_paths = [p for p in resolved_paths if not p.exists()]
    if missing_paths:
        for p in missing_paths:
            typer.echo(f"Error: path not found: {p}", err=True)
        raise typer.Exit(2)
    invalid_files = [p for p in resolved_paths if p.is_file() and p.name != skill_filename]
    if invalid_files:
        for p in invalid_files:
            typer.echo(f"Error: file is not {skill_filename}: {p}", err=True)
        raise typer.Exit(2)

    skill_files = collect_skill_files(resolved_paths, skill_filename)
    if not skill_files:
        typer.echo(f"No {skill_filename} files found.", err=True)
        raise typer.Exit(1)

    validator = SkillValidator(
        required_fields=cfg.validation.required_fields,
        recommended_sections=cfg.validation.recommended_sections,
    )
    results = validator.validate_corpus(skill_files)
    failed = _print_results(results, strict=strict or cfg.validation.strict, verbose=verbose)
    passed = len(skill_files) - len(failed)

    typer.echo(f"\nValidated {len(skill_files)} file(s): {passed} passed, {len(failed)} failed.")
    if failed:
        raise typer.Exit(1)
