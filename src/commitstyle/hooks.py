"""Installing the git ``commit-msg`` hook that runs commitstyle."""

from __future__ import annotations

import stat
from pathlib import Path

from . import git
from .errors import IoFailedError, PolicyBlockedError

HOOK_NAME = "commit-msg"
HOOK_MARKER = "# installed by commitstyle"


def render_hook_script(command: str = "commitstyle") -> str:
    """Return the shell script used as the ``commit-msg`` hook."""
    return f'#!/bin/sh\n{HOOK_MARKER}\nexec {command} lint --message-file "$1"\n'


def install_commit_msg_hook(
    repo_dir: Path | None = None,
    *,
    force: bool = False,
    git_path: str | None = None,
    command: str = "commitstyle",
) -> Path:
    """Write an executable ``commit-msg`` hook into the repository.

    Args:
        repo_dir: Repository directory (default: current directory).
        force: Overwrite a hook that was not installed by commitstyle.
        git_path: Optional git executable path.
        command: Command the hook invokes.

    Returns:
        Path of the written hook.
    """
    directory = git.hooks_dir(repo_dir=repo_dir, git_path=git_path)
    path = directory / HOOK_NAME
    existing = None
    try:
        if path.exists() and not force:
            existing = path.read_text(encoding="utf-8", errors="replace")
    except OSError as exc:
        raise IoFailedError(f"failed to read {path}: {exc}") from exc
    if existing is not None and HOOK_MARKER not in existing:
        raise PolicyBlockedError(
            f"a {HOOK_NAME} hook already exists at {path}",
            recovery_hint="rerun with --force to replace it",
        )
    try:
        directory.mkdir(parents=True, exist_ok=True)
        path.write_text(render_hook_script(command), encoding="utf-8")
        mode = path.stat().st_mode
        path.chmod(mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    except OSError as exc:
        raise IoFailedError(f"failed to write {path}: {exc}") from exc
    return path
