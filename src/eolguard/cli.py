"""eolguard CLI — Typer application with check, stat, install, uninstall and init."""

from __future__ import annotations

import time
from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.markup import escape

from eolguard import __version__

app = typer.Typer(
    name="eolguard",
    help="Reject commits that mix line endings or break per-extension EOL policies.",
    add_completion=False,
    no_args_is_help=True,
)

console = Console(stderr=True)


def _resolve_repo_root() -> Path:
    """Find the git repo root, exit 2 on failure."""
    from eolguard.git.adapter import GitError, get_repo_root

    try:
        return get_repo_root()
    except GitError as exc:
        console.print(f"[bold red]Error:[/bold red] {escape(str(exc))}")
        raise typer.Exit(code=2) from exc


# ── check ─────────────────────────────────────────────────────────────────────


@app.command()
def check(
    crlf: Optional[str] = typer.Option(None, "--crlf", help="Comma separated extensions that must use CRLF"),
    lf: Optional[str] = typer.Option(None, "--lf", help="Comma separated extensions that must use LF"),
    cr: Optional[str] = typer.Option(None, "--cr", help="Comma separated extensions that must use CR"),
    case_sensitive: bool = typer.Option(False, "--case-sensitive", "-s", help="Case sensitive extension checking"),
    config: Optional[str] = typer.Option(None, "--config", "-c", help="Path to .eolguard.toml"),
    format: Optional[str] = typer.Option(None, "--format", "-f", help="Output format: terminal | json"),
    from_ref: Optional[str] = typer.Option(None, "--from", help="Base commit (check a commit range)"),
    to_ref: Optional[str] = typer.Option(None, "--to", help="Head commit (defaults to HEAD)"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="List all file statuses"),
    debug: bool = typer.Option(False, "--debug", help="Debug output with timing"),
    dry_run: bool = typer.Option(False, "--dry-run", help="Show what would be checked without reading files"),
) -> None:
    """Check the line endings of staged files (or of a commit range)."""
    from eolguard.config.loader import ConfigError, load_config, split_list
    from eolguard.config.schema import OUTPUT_FORMATS
    from eolguard.git.adapter import GitError, get_range_records, get_staged_records
    from eolguard.git.diff_parser import DiffFormatError
    from eolguard.git.files import changed_files
    from eolguard.output import json_report, terminal
    from eolguard.policy.registry import build_registry
    from eolguard.scanner.engine import check_files

    repo_root = _resolve_repo_root()

    # --- Load config ---
    try:
        cfg = load_config(repo_root, config)
    except ConfigError as exc:
        console.print(f"[bold red]Config error:[/bold red] {escape(str(exc))}")
        raise typer.Exit(code=2) from exc

    # --- CLI overrides ---
    if format:
        if format not in OUTPUT_FORMATS:
            console.print(f"[bold red]Invalid format:[/bold red] {escape(format)}")
            raise typer.Exit(code=2)
        cfg.output.format = format  # type: ignore[assignment]
    if crlf:
        cfg.policies.crlf.extend(split_list(crlf))
    if lf:
        cfg.policies.lf.extend(split_list(lf))
    if cr:
        cfg.policies.cr.extend(split_list(cr))
    if case_sensitive:
        cfg.check.case_sensitive = True
    if verbose:
        cfg.output.verbose = True

    try:
        registry = build_registry(cfg, repo_root)
    except ConfigError as exc:
        console.print(f"[bold red]Config error:[/bold red] {escape(str(exc))}")
        raise typer.Exit(code=2) from exc

    if debug:
        console.print(f"[dim]Repo root: {escape(str(repo_root))}[/dim]")
        for policy in registry.enabled_policies():
            exts = escape(", ".join(policy.extensions))
            console.print(f"[dim]Policy {escape(policy.id)}: {policy.style.name} for {exts}[/dim]")

    # --- Discover changed files ---
    t0 = time.perf_counter()
    try:
        if from_ref:
            records = get_range_records(
                repo_root, from_ref, to_ref or "HEAD", detect_renames=cfg.check.detect_renames
            )
        else:
            records = get_staged_records(repo_root, detect_renames=cfg.check.detect_renames)
    except GitError as exc:
        console.print(f"[bold red]Git error:[/bold red] {escape(str(exc))}")
        raise typer.Exit(code=2) from exc
    except DiffFormatError as exc:
        console.print(f"[bold red]Unexpected git output:[/bold red] {escape(str(exc))}")
        raise typer.Exit(code=2) from exc

    files = changed_files(records, repo_root)
    if debug:
        console.print(
            f"[dim]Diff: {len(records)} record(s), {len(files)} file(s) to check "
            f"in {(time.perf_counter() - t0) * 1000:.0f}ms[/dim]"
        )

    if dry_run:
        console.print(f"[bold]Dry run — {len(files)} files would be checked:[/bold]")
        for f in files:
            console.print(f"  {escape(f.name)}")
        raise typer.Exit(code=0)

    # --- Run check ---
    result = check_files(files, registry, cfg)

    if debug:
        console.print(f"[dim]Check duration: {result.duration_ms:.0f}ms[/dim]")

    # --- Output ---
    if cfg.output.format == "json":
        print(json_report.render(result))
    else:
        terminal.render(result, verbose=cfg.output.verbose, console=console)

    if result.blocked:
        raise typer.Exit(code=1)
    raise typer.Exit(code=0)


# ── stat ──────────────────────────────────────────────────────────────────────


@app.command()
def stat(
    paths: List[Path] = typer.Argument(..., help="Files to classify"),
) -> None:
    """Print the line-ending classification of files on disk."""
    from eolguard.findings.models import FileReport
    from eolguard.git.files import LocalFile
    from eolguard.output.terminal import render_stats
    from eolguard.scanner.stream import EOLScanner

    scanner = EOLScanner()
    reports: List[FileReport] = []
    for path in paths:
        try:
            reports.append(FileReport(name=str(path), stat=scanner.scan_file(LocalFile(path))))
        except OSError as exc:
            reports.append(FileReport(name=str(path), error=exc.strerror or str(exc)))

    render_stats(reports)
    if any(r.is_error for r in reports):
        raise typer.Exit(code=1)


# ── install ───────────────────────────────────────────────────────────────────


@app.command()
def install(
    force: bool = typer.Option(False, "--force", help="Overwrite existing pre-commit hook"),
) -> None:
    """Install eolguard as a git pre-commit hook."""
    from eolguard.git.adapter import GitError
    from eolguard.hooks.installer import install_hook

    repo_root = _resolve_repo_root()
    try:
        success, msg = install_hook(repo_root, force=force)
    except GitError as exc:
        console.print(f"[bold red]Git error:[/bold red] {escape(str(exc))}")
        raise typer.Exit(code=2) from exc
    if success:
        console.print(f"[green]✓[/green] {escape(msg)}")
    else:
        console.print(f"[red]✗[/red] {escape(msg)}")
        raise typer.Exit(code=1)


# ── uninstall ─────────────────────────────────────────────────────────────────


@app.command()
def uninstall() -> None:
    """Remove the eolguard pre-commit hook."""
    from eolguard.git.adapter import GitError
    from eolguard.hooks.installer import uninstall_hook

    repo_root = _resolve_repo_root()
    try:
        success, msg = uninstall_hook(repo_root)
    except GitError as exc:
        console.print(f"[bold red]Git error:[/bold red] {escape(str(exc))}")
        raise typer.Exit(code=2) from exc
    if success:
        console.print(f"[green]✓[/green] {escape(msg)}")
    else:
        console.print(f"[red]✗[/red] {escape(msg)}")
        raise typer.Exit(code=1)


# ── init ──────────────────────────────────────────────────────────────────────


@app.command()
def init() -> None:
    """Generate a starter .eolguard.toml in the repo root."""
    from eolguard.config.defaults import DEFAULT_TOML
    from eolguard.config.loader import CONFIG_FILENAME

    repo_root = _resolve_repo_root()
    config_path = repo_root / CONFIG_FILENAME

    if config_path.exists():
        console.print(f"[yellow]⚠[/yellow]  {CONFIG_FILENAME} already exists at {escape(str(config_path))}")
        raise typer.Exit(code=1)

    config_path.write_text(DEFAULT_TOML, encoding="utf-8")
    console.print(f"[green]✓[/green] Created {escape(str(config_path))}")


# ── version ───────────────────────────────────────────────────────────────────


def _version_callback(value: bool) -> None:
    if value:
        print(f"eolguard {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        False, "--version", "-V", callback=_version_callback,
        is_eager=True, help="Show version and exit",
    ),
) -> None:
    """eolguard — keep line endings consistent in every commit."""
