"""Git helpers for locating the hooks directory of a repository."""

from __future__ import annotations

from pathlib import Path

from . import exec as exec_util
from .errors import DependencyMissingError, ExternalCommandFailedError

GIT_TIMEOUT_SECONDS = 30.0


def git_command(args: list[str], *, git_path: str | None = None) -> list[str]:
    """Build a git command using an optional executable path.

    Example:
        >>> git_command(["log"], git_path=" /usr/bin/git ")
        ['/usr/bin/git', 'log']
    """
    resolved = git_path.strip() if isinstance(git_path, str) else ""
    if not resolved:
        resolved = "git"
    return [resolved, *args]


def _run_git(
    args: list[str],
    *,
    repo_dir: Path | None = None,
    git_path: str | None = None,
    runner: exec_util.CommandRunner | None = None,
) -> str:
    request = exec_util.CommandRequest(
        argv=tuple(git_command(args, git_path=git_path)),
        cwd=repo_dir,
        timeout_seconds=GIT_TIMEOUT_SECONDS,
    )
    result = exec_util.run_with_runner(request, runner=runner)
    if result is None:
        raise DependencyMissingError(
            "missing required command: git",
            recovery_hint="install git and make sure it is on PATH",
        )
    if result.returncode != 0:
        raise ExternalCommandFailedError(exec_util.command_failure_detail(request, result))
    return result.stdout


def hooks_dir(
    *,
    repo_dir: Path | None = None,
    git_path: str | None = None,
    runner: exec_util.CommandRunner | None = None,
) -> Path:
    """Return the hooks directory of the repository at ``repo_dir``."""
    output = _run_git(
        ["rev-parse", "--git-path", "hooks"],
        repo_dir=repo_dir,
        git_path=git_path,
        runner=runner,
    ).strip()
    path = Path(output)
    if not path.is_absolute() and repo_dir is not None:
        path = repo_dir / path
    return path
