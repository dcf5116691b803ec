import json
import tempfile
from pathlib import Path
from unittest.mock import patch

from typer.testing import CliRunner

import commitstyle.cli as cli
from commitstyle.errors import PolicyBlockedError

runner = CliRunner()


def test_lint_passing_message_exits_zero() -> None:
    result = runner.invoke(cli.app, ["lint", "area: add parser"])
    assert result.exit_code == 0
    assert "commit message follows the style guide" in result.output


def test_lint_failing_message_exits_one() -> None:
    result = runner.invoke(cli.app, ["lint", "wip"])
    assert result.exit_code == 1
    assert "[empty-wip]" in result.output
    assert "found 2 error(s)" in result.output


def test_lint_warnings_only_exits_zero() -> None:
    result = runner.invoke(cli.app, ["lint", "Add parser"])
    assert result.exit_code == 0
    assert "[type-empty]" in result.output


def test_lint_ignored_message_exits_zero() -> None:
    result = runner.invoke(cli.app, ["lint", "Merge branch 'main' into feature/parser"])
    assert result.exit_code == 0
    assert "ignore pattern" in result.output


def test_lint_reads_stdin_by_default() -> None:
    result = runner.invoke(cli.app, ["lint"], input="area: add parser\n\nParse it.\n")
    assert result.exit_code == 0


def test_lint_reads_message_file() -> None:
    with tempfile.TemporaryDirectory() as tmp:
        path = Path(tmp) / "COMMIT_EDITMSG"
        path.write_text("area: Add parser\n# Please enter the message\n", encoding="utf-8")
        result = runner.invoke(cli.app, ["lint", "--message-file", str(path)])
    assert result.exit_code == 1
    assert "[subject-lowercase]" in result.output


def test_lint_rejects_several_sources() -> None:
    with tempfile.TemporaryDirectory() as tmp:
        path = Path(tmp) / "COMMIT_EDITMSG"
        path.write_text("area: add parser\n", encoding="utf-8")
        result = runner.invoke(cli.app, ["lint", "area: add parser", "-f", str(path)])
    assert result.exit_code == 2
    assert "choose a single commit message source" in result.output


def test_lint_reports_missing_message_file() -> None:
    with tempfile.TemporaryDirectory() as tmp:
        result = runner.invoke(cli.app, ["lint", "-f", str(Path(tmp) / "missing")])
    assert result.exit_code == 2
    assert "failed to read commit message file" in result.output


def test_lint_uses_config_file() -> None:
    with tempfile.TemporaryDirectory() as tmp:
        path = Path(tmp) / ".commitstyle.json"
        payload = {"rules": {"empty-wip": [1, "always"], "title-uppercase": [0]}}
        path.write_text(json.dumps(payload), encoding="utf-8")
        result = runner.invoke(cli.app, ["lint", "--config", str(path), "wip"])
        assert result.exit_code == 0
        assert "[empty-wip]" in result.output
        path.write_text(json.dumps({"rules": {"no-such-rule": [2]}}), encoding="utf-8")
        result = runner.invoke(cli.app, ["lint", "--config", str(path), "wip: 1"])
    assert result.exit_code == 2
    assert "invalid commitstyle configuration" in result.output
    assert "hint:" in result.output


def test_rules_lists_effective_settings() -> None:
    result = runner.invoke(cli.app, ["rules"])
    assert result.exit_code == 0
    lines = result.output.splitlines()
    header_line = next(line for line in lines if line.startswith("header-max-length"))
    assert header_line.split() == ["header-max-length-with-suggestions", "error", "always", "50"]
    type_empty = next(line for line in lines if line.startswith("type-empty"))
    assert type_empty.split() == ["type-empty", "warning", "never"]


def test_log_level_option_sets_level() -> None:
    with patch("commitstyle.log.set_level") as set_level:
        result = runner.invoke(cli.app, ["--log-level", "DEBUG", "lint", "area: add parser"])
    assert result.exit_code == 0
    set_level.assert_called_once_with("debug")


def test_log_level_option_rejects_unknown_level() -> None:
    result = runner.invoke(cli.app, ["--log-level", "loud", "lint", "area: add parser"])
    assert result.exit_code == 2


def test_no_color_option() -> None:
    with patch("commitstyle.log.set_no_color") as set_no_color:
        result = runner.invoke(cli.app, ["--no-color", "lint", "area: add parser"])
    assert result.exit_code == 0
    set_no_color.assert_called_once_with(True)


def test_version_option() -> None:
    result = runner.invoke(cli.app, ["--version"])
    assert result.exit_code == 0
    assert result.output.startswith("commitstyle ")


def test_install_hook_reports_path() -> None:
    hook_path = Path("/repo/.git/hooks/commit-msg")
    with patch("commitstyle.hooks.install_commit_msg_hook", return_value=hook_path) as install:
        result = runner.invoke(cli.app, ["install-hook", "--force"])
    assert result.exit_code == 0
    assert str(hook_path) in result.output
    assert install.call_args.kwargs == {"force": True}


def test_install_hook_refusal_exits_two() -> None:
    failure = PolicyBlockedError(
        "a commit-msg hook already exists", recovery_hint="rerun with --force to replace it"
    )
    with patch("commitstyle.hooks.install_commit_msg_hook", side_effect=failure):
        result = runner.invoke(cli.app, ["install-hook"])
    assert result.exit_code == 2
    assert "already exists" in result.output
    assert "--force" in result.output


def test_lint_rejects_config_value_of_wrong_type() -> None:
    with tempfile.TemporaryDirectory() as tmp:
        path = Path(tmp) / ".commitstyle.json"
        payload = {"rules": {"body-soft-max-line-length": [2, "always", "wide"]}}
        path.write_text(json.dumps(payload), encoding="utf-8")
        result = runner.invoke(cli.app, ["lint", "--config", str(path), "area: add parser"])
    assert result.exit_code == 2
    assert "body-soft-max-line-length expects a positive integer" in result.output
