"""Git operations — locate repositories and wire the pre-commit hook."""

from __future__ import annotations

import logging
import stat
from pathlib import Path

from git import InvalidGitRepositoryError, NoSuchPathError, Repo

from skillsync.config import AGENTS_DIR, MIRROR_DIR, SKILLS_DIR
from skillsync.sync.errors import HookInstallError

logger = logging.getLogger(__name__)

DEFAULT_MIRROR_COMMAND = "skillsync mirror"

PRE_COMMIT_TEMPLATE = """\
#!/bin/bash
#
# Pre-commit hook: mirror skills and agents into {mirror}/
#

REPO_ROOT="$(git rev-parse --show-toplevel)"

CHANGED=$(git diff --cached --name-only | grep -E '^({skills}|{agents})/' || true)

if [ -n "$CHANGED" ]; then
    echo "Skills/agents changed - mirroring to {mirror}/..."
    {command} --repo "$REPO_ROOT" || exit 1

    git add "$REPO_ROOT/{mirror}/"

    echo "{mirror}/ staged for commit."
fi

exit 0
"""


def open_repo(repo_path: str | Path) -> Repo:
    """Open the git repository containing ``repo_path``.

    Raises:
        HookInstallError: If the path does not exist or is not inside a repo.
    """
    try:
        return Repo(repo_path, search_parent_directories=True)
    except (InvalidGitRepositoryError, NoSuchPathError):
        raise HookInstallError(f"Not a Git repo: {repo_path}")


def render_pre_commit_hook(command: str = DEFAULT_MIRROR_COMMAND) -> str:
    return PRE_COMMIT_TEMPLATE.format(
        command=command,
        mirror=MIRROR_DIR,
        skills=SKILLS_DIR,
        agents=AGENTS_DIR,
    )


def install_pre_commit_hook(
    repo_path: str | Path,
    command: str = DEFAULT_MIRROR_COMMAND,
) -> Path:
    """Write an executable pre-commit hook that keeps the mirror in sync.

    An existing pre-commit hook is overwritten.

    Returns:
        Path to the installed hook.
    """
    repo = open_repo(repo_path)
    hooks_dir = Path(repo.git_dir) / "hooks"
    hook_path = hooks_dir / "pre-commit"

    try:
        hooks_dir.mkdir(parents=True, exist_ok=True)
        hook_path.write_text(render_pre_commit_hook(command))
        mode = hook_path.stat().st_mode
        hook_path.chmod(mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    except OSError as e:
        raise HookInstallError(f"Cannot write {hook_path}: {e}") from e

    logger.info("Installed pre-commit hook at %s", hook_path)
    return hook_path

