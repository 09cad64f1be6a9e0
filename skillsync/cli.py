"""skillsync CLI — install and mirror skill and agent documents."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import NoReturn

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from skillsync import __version__
from skillsync.models.units import SyncAction, SyncReport
from skillsync.sync.errors import SyncError

console = Console()
err_console = Console(stderr=True)

ACTION_STYLES = {
    SyncAction.NEW: "blue",
    SyncAction.UPDATED: "yellow",
    SyncAction.UNCHANGED: "green",
    SyncAction.REMOVED: "red",
}


@click.group()
@click.version_option(version=__version__)
@click.option("--verbose", "-v", is_flag=True, help="Log every unit decision")
def main(verbose: bool):
    """skillsync — keep AI assistant skills and agents in sync.

    Copies skill directories and agent files from a repository checkout into
    assistant configuration directories, reporting what changed.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=err_console, show_path=False)],
    )


def _abort(error: SyncError) -> NoReturn:
    err_console.print(f"[red]Error:[/] {escape(str(error))}")
    raise SystemExit(1)


def _render_report(title: str, report: SyncReport) -> None:
    if not report.entries:
        console.print(f"[dim]{escape(title)}: nothing to sync[/]")
        return

    table = Table(title=escape(title), title_justify="left")
    table.add_column("Action", width=10)
    table.add_column("Unit", style="cyan")

    for entry in report.entries:
        style = ACTION_STYLES[entry.action]
        table.add_row(f"[{style}]{entry.action.tag}[/]", escape(entry.name))

    console.print(table)


def _render_total(changed: int, dry_run: bool) -> None:
    if changed == 0:
        console.print("\n[green]Everything in sync[/]")
    elif dry_run:
        console.print(f"\n[yellow]{changed} unit(s) would change (dry run)[/]")
    else:
        console.print(f"\n[yellow]{changed} unit(s) changed[/]")


def _load_config(config_path: str | None):
    from skillsync.config import InstallConfig, load_config

    return load_config(config_path) if config_path else InstallConfig()


def _render_install_summary(platforms, home: Path, units: dict[str, list[str]], dry_run: bool) -> None:
    if dry_run:
        console.print("\n[yellow]Dry run complete, nothing was written.[/]\n")
    else:
        console.print("\n[green]Installation complete![/]\n")

    for platform in platforms:
        console.print(f"{escape(platform.name)}:")
        console.print(f"  Skills: {escape(str(platform.skills_target(home)))}")
        console.print(f"  Agents: {escape(str(platform.agents_target(home)))}")

    for kind, names in units.items():
        console.print(f"\n{kind.capitalize()} installed:")
        if not names:
            console.print("  (none)")
        for name in names:
            console.print(f"  - {escape(name)}")

    console.print("\nRestart your AI coding assistant to use the new skills and agents.")


# ── Install ──────────────────────────────────────────────────────────


@main.command()
@click.option("--claude-only", "selection", flag_value="claude", help="Install only to Claude")
@click.option("--copilot-only", "selection", flag_value="copilot", help="Install only to Copilot")
@click.option("--all", "selection", flag_value="all", default=True, help="Install to every platform")
@click.option("--platform", "-p", multiple=True, help="Install to a configured platform by name")
@click.option("--repo", "-r", default=".", type=click.Path(file_okay=False), help="Repository root")
@click.option("--home", default=None, type=click.Path(file_okay=False), help="Home directory override")
@click.option("--config", "-c", "config_path", default=None, type=click.Path(dir_okay=False), help="YAML config file")
@click.option("--prune", is_flag=True, help="Remove installed units missing from the repo")
@click.option("--dry-run", is_flag=True, help="Show what would change without writing")
@click.option("--missing-ok", is_flag=True, help="Treat a missing skills/ or agents/ dir as empty")
def install(
    selection: str,
    platform: tuple,
    repo: str,
    home: str | None,
    config_path: str | None,
    prune: bool,
    dry_run: bool,
    missing_ok: bool,
):
    """Install skills and agents into assistant config directories."""
    from skillsync.installer import Installer

    console.print("\n[bold blue]skillsync[/] — Installing skills & agents\n")

    home_dir = Path(home) if home else Path.home()
    try:
        config = _load_config(config_path)
        if platform:
            names = list(platform)
        elif selection == "all":
            names = None
        else:
            names = [selection]
        platforms = config.select(names)

        installer = Installer(repo, config)
        results = installer.install(
            home=home_dir,
            platforms=platforms,
            remove_orphans=prune or config.remove_orphans,
            dry_run=dry_run,
            missing_ok=missing_ok,
        )
        units = installer.installed_units()
    except SyncError as e:
        _abort(e)

    for result in results:
        for kind, report in result.reports:
            _render_report(f"{result.platform} {kind} → {report.target_root}", report)

    _render_total(sum(r.changed_count for r in results), dry_run)
    _render_install_summary(platforms, home_dir, units, dry_run)


# ── Mirror ───────────────────────────────────────────────────────────


@main.command()
@click.option("--repo", "-r", default=".", type=click.Path(file_okay=False), help="Repository root")
@click.option("--config", "-c", "config_path", default=None, type=click.Path(dir_okay=False), help="YAML config file")
@click.option("--dry-run", is_flag=True, help="Show what would change without writing")
def mirror(repo: str, config_path: str | None, dry_run: bool):
    """Mirror skills/ and agents/ into the copilot/ tree, removing orphans."""
    from skillsync.installer import Installer

    console.print("\n[bold blue]skillsync[/] — Mirroring to copilot/\n")

    try:
        result = Installer(repo, _load_config(config_path)).mirror(dry_run=dry_run)
    except SyncError as e:
        _abort(e)

    for kind, report in result.reports:
        _render_report(kind, report)

    _render_total(result.changed_count, dry_run)
    if result.changed_count and not dry_run:
        console.print("Don't forget to stage the changes:\n  git add copilot/")


# ── Hooks ────────────────────────────────────────────────────────────


@main.command(name="install-hooks")
@click.option("--repo", "-r", default=".", type=click.Path(file_okay=False), help="Repository root")
@click.option("--command", "mirror_command", default=None, help="Command the hook runs to mirror")
def install_hooks(repo: str, mirror_command: str | None):
    """Install a pre-commit hook that mirrors skills on commit."""
    from skillsync.utils.git_ops import DEFAULT_MIRROR_COMMAND, install_pre_commit_hook

    try:
        hook_path = install_pre_commit_hook(repo, mirror_command or DEFAULT_MIRROR_COMMAND)
    except SyncError as e:
        _abort(e)

    console.print(f"[green]Pre-commit hook installed:[/] {escape(str(hook_path))}")
    console.print("Skills will be mirrored to copilot/ whenever you commit changes.")


# ── List ─────────────────────────────────────────────────────────────


@main.command(name="list")
@click.option("--repo", "-r", default=".", type=click.Path(file_okay=False), help="Repository root")
@click.option("--config", "-c", "config_path", default=None, type=click.Path(dir_okay=False), help="YAML config file")
def list_units(repo: str, config_path: str | None):
    """List the skills and agents a repository provides."""
    from skillsync.installer import Installer

    try:
        units = Installer(repo, _load_config(config_path)).installed_units()
    except SyncError as e:
        _abort(e)

    for kind, names in units.items():
        console.print(f"\n[bold]{kind.capitalize()}:[/]")
        if not names:
            console.print("  (none)")
        for name in names:
            console.print(f"  - {escape(name)}")


if __name__ == "__main__":
    main()
