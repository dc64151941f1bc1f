"""versioncheck CLI — Typer application with run, compare, and init commands."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler

from versioncheck import __version__

app = typer.Typer(
    name="versioncheck",
    help="Detect package manifest version changes in CI events.",
    add_completion=False,
    no_args_is_help=True,
)

console = Console(stderr=True)

EXIT_FAILURE = 1
EXIT_USAGE = 2
# Neutral: nothing to check, the pipeline should not fail
EXIT_NEUTRAL = 78

FORMATS = ("actions", "json", "terminal")


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_time=False, show_path=False, markup=False)],
        force=True,
    )


def _check_format(format: str) -> None:
    if format not in FORMATS:
        console.print(f"[bold red]Invalid format:[/bold red] {format}")
        raise typer.Exit(code=EXIT_USAGE)


def _emit(result, format: str, output_file: Optional[str]) -> None:
    from versioncheck.output import actions, json_report, terminal

    if format == "actions":
        actions.set_outputs(result, output_file=output_file)
    elif format == "json":
        print(json_report.render(result))
    else:
        terminal.render(result, console=console)


def _run_guarded(func):
    """Call *func*, mapping each failure class to its exit code."""
    from versioncheck.config.loader import ConfigError
    from versioncheck.git.adapter import GitError
    from versioncheck.github.client import FetchError
    from versioncheck.manifest import ManifestError, ManifestNotFound
    from versioncheck.runner import EventError

    try:
        return func()
    except ManifestNotFound as exc:
        console.print(f"[yellow]⚠[/yellow]  {exc}")
        raise typer.Exit(code=EXIT_NEUTRAL) from exc
    except (ConfigError, ManifestError, EventError) as exc:
        console.print(f"[bold red]Error:[/bold red] {exc}")
        raise typer.Exit(code=EXIT_FAILURE) from exc
    except FetchError as exc:
        console.print(f"[bold red]Fetch error:[/bold red] {exc}")
        raise typer.Exit(code=EXIT_FAILURE) from exc
    except GitError as exc:
        console.print(f"[bold red]Git error:[/bold red] {exc}")
        raise typer.Exit(code=EXIT_FAILURE) from exc


# ── run ───────────────────────────────────────────────────────────────────────


@app.command()
def run(
    config: Optional[str] = typer.Option(None, "--config", "-c", help="Path to .versioncheck.toml / .yml"),
    workspace: Optional[Path] = typer.Option(None, "--workspace", "-w", help="Checkout root (default: $GITHUB_WORKSPACE)"),
    file_name: Optional[str] = typer.Option(None, "--file-name", help="Manifest path relative to the workspace"),
    file_url: Optional[str] = typer.Option(None, "--file-url", help="Remote manifest to compare against, or ::before"),
    diff_search: Optional[bool] = typer.Option(None, "--diff-search/--no-diff-search", help="Fall back to scanning every commit's diff"),
    assume_same_version: Optional[str] = typer.Option(None, "--assume-same-version", help="old | new"),
    static_checking: Optional[str] = typer.Option(None, "--static-checking", help="localIsNew | remoteIsNew"),
    token: Optional[str] = typer.Option(None, "--token", help="GitHub token for API requests"),
    format: str = typer.Option("actions", "--format", "-f", help="Output format: actions | json | terminal"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose output"),
) -> None:
    """Check the CI event for a manifest version change and set step outputs."""
    from versioncheck.config.loader import load_config
    from versioncheck.output.actions import group
    from versioncheck.runner import VersionCheck, load_event

    _setup_logging(verbose)
    _check_format(format)

    overrides: Dict[str, Any] = {
        "file_name": file_name,
        "file_url": file_url,
        "diff_search": diff_search,
        "assume_same_version": assume_same_version,
        "static_checking": static_checking,
        "token": token,
    }

    def _check():
        cfg = load_config(workspace, config, overrides)
        event = load_event(cfg.github.event_path)
        check = VersionCheck(cfg, event)
        try:
            with group("Searching for version update"):
                return cfg, check.run()
        finally:
            check.close()

    cfg, result = _run_guarded(_check)
    _emit(result, format, cfg.github.output_file)


# ── compare ───────────────────────────────────────────────────────────────────


@app.command()
def compare(
    old: str = typer.Argument(..., help="Old manifest: path, URL, or git:<ref>"),
    new: str = typer.Argument(..., help="New manifest: path, URL, or git:<ref>"),
    file_name: str = typer.Option("package.json", "--file-name", help="Manifest path used for git:<ref> locators"),
    token: Optional[str] = typer.Option(None, "--token", help="Bearer token for URL locators"),
    format: str = typer.Option("terminal", "--format", "-f", help="Output format: actions | json | terminal"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose output"),
) -> None:
    """Compare the version field of two manifests."""
    from versioncheck.config.schema import CheckConfig, GitHubContext, VersionCheckConfig
    from versioncheck.runner import VersionCheck
    from versioncheck.scanner.refs import Locator, compare_refs

    _setup_logging(verbose)
    _check_format(format)

    cfg = VersionCheckConfig(check=CheckConfig(file_name=file_name, token=token), github=GitHubContext())
    check = VersionCheck(cfg, {})
    try:
        result = _run_guarded(lambda: compare_refs(Locator.parse(old), Locator.parse(new), check.read_manifest))
    finally:
        check.close()
    _emit(result, format, None)


# ── init ──────────────────────────────────────────────────────────────────────


@app.command()
def init() -> None:
    """Generate a starter .versioncheck.toml in the current directory."""
    from versioncheck.config.defaults import DEFAULT_TOML

    config_path = Path.cwd() / ".versioncheck.toml"

    if config_path.exists():
        console.print(f"[yellow]⚠[/yellow]  .versioncheck.toml already exists at {config_path}")
        raise typer.Exit(code=EXIT_FAILURE)

    config_path.write_text(DEFAULT_TOML, encoding="utf-8")
    console.print(f"[green]✓[/green] Created {config_path}")


# ── version ───────────────────────────────────────────────────────────────────


def _version_callback(value: bool) -> None:
    if value:
        print(f"versioncheck {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        False, "--version", "-V", callback=_version_callback,
        is_eager=True, help="Show version and exit",
    ),
) -> None:
    """versioncheck — Detect package manifest version changes in CI events."""
