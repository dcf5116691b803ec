import json
import tempfile
from pathlib import Path

import pytest
from pydantic import ValidationError

import commitstyle.config as config
from commitstyle.errors import IoFailedError, ValidationFailedError
from commitstyle.models import LintConfig, RuleSetting, Severity
from commitstyle.rules import RuleName


def write_config(directory: Path, payload: object) -> Path:
    path = directory / config.CONFIG_FILENAME
    path.write_text(json.dumps(payload), encoding="utf-8")
    return path


@pytest.mark.parametrize(
    ("payload", "expected"),
    [
        ([2, "always", 72], RuleSetting(severity=Severity.ERROR, when="always", value=72)),
        ([1], RuleSetting(severity=Severity.WARNING)),
        ([0, "never"], RuleSetting(severity=Severity.DISABLED, when="never")),
        ({"severity": "warn", "when": "Never"}, RuleSetting(severity=1, when="never")),
        ({"severity": "error", "value": "."}, RuleSetting(severity=2, value=".")),
        ({"severity": "off"}, RuleSetting(severity=0)),
        ({"severity": "2"}, RuleSetting(severity=2)),
    ],
)
def test_rule_setting_accepts_list_and_mapping_forms(
    payload: object, expected: RuleSetting
) -> None:
    assert RuleSetting.model_validate(payload) == expected


@pytest.mark.parametrize(
    "payload",
    [[], [2, "always", 72, "extra"], [3], ["fatal"], [2, "sometimes"], {"when": "always"}],
)
def test_rule_setting_rejects_invalid_values(payload: object) -> None:
    with pytest.raises(ValidationError):
        RuleSetting.model_validate(payload)


def test_rule_setting_enabled() -> None:
    assert RuleSetting(severity=Severity.WARNING).enabled
    assert not RuleSetting(severity=Severity.DISABLED).enabled


def test_lint_config_rejects_unknown_rule_and_fields() -> None:
    with pytest.raises(ValidationError):
        LintConfig.model_validate({"rules": {"no-such-rule": [2, "always"]}})
    with pytest.raises(ValidationError):
        LintConfig.model_validate({"extends": ["@commitlint/config-conventional"]})


def test_lint_config_rejects_invalid_ignore_pattern() -> None:
    with pytest.raises(ValidationError, match="invalid ignore pattern"):
        LintConfig.model_validate({"ignores": ["("]})


def test_lint_config_normalizes_repository() -> None:
    assert LintConfig(repository=" /org/repo/ ").repository == "org/repo"
    assert LintConfig(repository="  ").repository is None


def test_default_config_enables_every_rule() -> None:
    defaults = config.default_config()
    assert set(defaults.rules) == set(RuleName)
    assert all(setting.enabled for setting in defaults.rules.values())
    assert defaults.rules[RuleName.BODY_SOFT_MAX_LINE_LENGTH].value == 64
    assert defaults.rules[RuleName.FOOTER_MAX_LINE_LENGTH].value == 150
    assert defaults.rules[RuleName.TYPE_EMPTY].severity is Severity.WARNING
    assert defaults.rules[RuleName.SUBJECT_FULL_STOP].when == "never"
    assert defaults.default_ignores


def test_build_config_merges_over_defaults() -> None:
    merged = config.build_config(
        {"rules": {"body-soft-max-line-length": [1, "always", 72]}, "ignores": ["^WIP"]}
    )
    setting = merged.rules[RuleName.BODY_SOFT_MAX_LINE_LENGTH]
    assert setting.severity is Severity.WARNING
    assert setting.value == 72
    assert merged.rules[RuleName.EMPTY_WIP] == config.DEFAULT_RULE_SETTINGS[RuleName.EMPTY_WIP]
    assert merged.ignores == ("^WIP",)


def test_build_config_wraps_validation_errors() -> None:
    with pytest.raises(ValidationFailedError) as excinfo:
        config.build_config({"rules": {"no-such-rule": [2, "always"]}})
    assert excinfo.value.code == "validation_failed"
    assert config.CONFIG_FILENAME in (excinfo.value.recovery_hint or "")


def test_load_json_rejects_invalid_payloads() -> None:
    with tempfile.TemporaryDirectory() as tmp:
        path = Path(tmp) / config.CONFIG_FILENAME
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(ValidationFailedError, match="invalid JSON"):
            config.load_json(path)
        path.write_text("[1, 2]", encoding="utf-8")
        with pytest.raises(ValidationFailedError, match="expected a JSON object"):
            config.load_json(path)


def test_load_config_discovers_file_in_parent_directory() -> None:
    with tempfile.TemporaryDirectory() as tmp:
        root = Path(tmp)
        write_config(root, {"rules": {"empty-wip": [0]}})
        nested = root / "src" / "pkg"
        nested.mkdir(parents=True)
        loaded = config.load_config(cwd=nested, environ={})
    assert not loaded.rules[RuleName.EMPTY_WIP].enabled


def test_load_config_without_file_uses_defaults() -> None:
    with tempfile.TemporaryDirectory() as tmp:
        loaded = config.load_config(cwd=Path(tmp), environ={})
    assert loaded.rules == config.default_config().rules
    assert loaded.repository is None


def test_load_config_explicit_path_must_exist() -> None:
    with tempfile.TemporaryDirectory() as tmp:
        with pytest.raises(IoFailedError, match="config file not found"):
            config.load_config(Path(tmp) / "missing.json", environ={})


def test_load_config_repository_falls_back_to_environment() -> None:
    with tempfile.TemporaryDirectory() as tmp:
        root = Path(tmp)
        from_env = config.load_config(cwd=root, environ={"GITHUB_REPOSITORY": "org/repo"})
        path = write_config(root, {"repository": "other/repo"})
        from_file = config.load_config(path, environ={"GITHUB_REPOSITORY": "org/repo"})
    assert from_env.repository == "org/repo"
    assert from_file.repository == "other/repo"


def test_load_config_reads_process_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("GITHUB_REPOSITORY", "org/repo")
    with tempfile.TemporaryDirectory() as tmp:
        loaded = config.load_config(cwd=Path(tmp))
    assert loaded.repository == "org/repo"


@pytest.mark.parametrize(
    ("rule", "value"),
    [
        ("header-max-length-with-suggestions", "long"),
        ("body-soft-max-line-length", "wide"),
        ("footer-max-line-length", 0),
        ("footer-max-line-length", -5),
        ("subject-full-stop", 1),
        ("subject-full-stop", ""),
    ],
)
def test_build_config_rejects_values_the_rule_cannot_use(rule: str, value: object) -> None:
    with pytest.raises(ValidationFailedError, match=f"rule {rule} expects") as excinfo:
        config.build_config({"rules": {rule: [2, "always", value]}})
    assert rule in (excinfo.value.recovery_hint or "")


def test_build_config_accepts_well_typed_values() -> None:
    built = config.build_config(
        {
            "rules": {
                "header-max-length-with-suggestions": [2, "always", 72],
                "subject-full-stop": [2, "never", "!"],
                "empty-wip": [2, "always", "unused"],
            }
        }
    )
    assert built.rules[RuleName.HEADER_MAX_LENGTH_WITH_SUGGESTIONS].value == 72
    assert built.rules[RuleName.SUBJECT_FULL_STOP].value == "!"
    assert built.rules[RuleName.EMPTY_WIP].value == "unused"
