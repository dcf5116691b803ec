"""Command line interface for commitstyle."""

from enum import Enum
from pathlib import Path
from typing import Annotated, Optional

import typer

from . import __version__, hooks, sources
from . import log as commitstyle_log
from .config import load_config
from .engine import LintReport, RuleEngine
from .errors import CommitStyleError, ValidationFailedError
from .io import die, say
from .models import Severity

app = typer.Typer(
    name="commitstyle",
    help="Check commit messages against the house commit message style guide.",
    add_completion=False,
    no_args_is_help=True,
)


class LogLevelChoice(str, Enum):
    TRACE = "trace"
    DEBUG = "debug"
    INFO = "info"
    SUCCESS = "success"
    WARNING = "warning"
    ERROR = "error"


def _version_callback(value: bool) -> None:
    if value:
        say(f"commitstyle {__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    log_level: Annotated[
        Optional[LogLevelChoice],
        typer.Option("--log-level", case_sensitive=False, help="Minimum log level to print."),
    ] = None,
    no_color: Annotated[
        bool, typer.Option("--no-color", help="Disable colorized output.")
    ] = False,
    version: Annotated[
        bool,
        typer.Option(
            "--version", callback=_version_callback, is_eager=True, help="Show the version."
        ),
    ] = False,
) -> None:
    if log_level is not None:
        commitstyle_log.set_level(log_level.value)
    if no_color:
        commitstyle_log.set_no_color(True)


def _read_message(message: Optional[str], message_file: Optional[Path]) -> str:
    if message is not None and message_file is not None:
        raise ValidationFailedError(
            "choose a single commit message source (got MESSAGE, --message-file)"
        )
    if message is not None:
        return message
    if message_file is not None:
        return sources.read_message_file(message_file)
    return sources.read_stdin()


def _render_report(report: LintReport) -> None:
    if report.ignored:
        commitstyle_log.info("commit message matches an ignore pattern; not linted")
        return
    for outcome in report.failures:
        text = f"[{outcome.name.value}] {outcome.message}"
        if outcome.severity is Severity.ERROR:
            commitstyle_log.error(f"✖ {text}")
        else:
            commitstyle_log.warning(f"⚠ {text}")
    errors = len(report.errors)
    warnings = len(report.warnings)
    if errors:
        commitstyle_log.error(f"✖ found {errors} error(s), {warnings} warning(s)")
    elif warnings:
        commitstyle_log.warning(f"⚠ found 0 errors, {warnings} warning(s)")
    else:
        commitstyle_log.success("✔ commit message follows the style guide")


@app.command()
def lint(
    message: Annotated[
        Optional[str], typer.Argument(help="Commit message text (default: read stdin).")
    ] = None,
    message_file: Annotated[
        Optional[Path],
        typer.Option("--message-file", "-f", help="Commit message file, as passed to hooks."),
    ] = None,
    config_path: Annotated[
        Optional[Path], typer.Option("--config", help="Path to a .commitstyle.json file.")
    ] = None,
) -> None:
    """Lint a single commit message."""
    try:
        config = load_config(config_path)
        raw = _read_message(message, message_file)
    except CommitStyleError as exc:
        die(str(exc), hint=exc.recovery_hint)
        return
    report = RuleEngine(config).lint(raw)
    _render_report(report)
    raise typer.Exit(code=0 if report.passed else 1)


@app.command("rules")
def list_rules(
    config_path: Annotated[
        Optional[Path], typer.Option("--config", help="Path to a .commitstyle.json file.")
    ] = None,
) -> None:
    """Show the effective rule table."""
    try:
        config = load_config(config_path)
    except CommitStyleError as exc:
        die(str(exc), hint=exc.recovery_hint)
        return
    for name, setting in config.rules.items():
        value = "" if setting.value is None else str(setting.value)
        severity = setting.severity.name.lower()
        say(f"{name.value:<36} {severity:<8} {setting.when:<6} {value}".rstrip())


@app.command("install-hook")
def install_hook(
    force: Annotated[
        bool, typer.Option("--force", help="Replace an existing commit-msg hook.")
    ] = False,
) -> None:
    """Install a commit-msg hook running commitstyle in the current repository."""
    try:
        path = hooks.install_commit_msg_hook(Path.cwd(), force=force)
    except CommitStyleError as exc:
        die(str(exc), hint=exc.recovery_hint)
        return
    commitstyle_log.success(f"installed {hooks.HOOK_NAME} hook at {path}")


def main() -> None:
    app()


if __name__ == "__main__":
    main()
