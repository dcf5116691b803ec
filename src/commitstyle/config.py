"""Configuration helpers for commitstyle.

This module holds the default rule table, reads ``.commitstyle.json`` files,
validates them with the Pydantic models and merges them over the defaults.

Example:
    >>> config = default_config()
    >>> config.rules[RuleName.HEADER_MAX_LENGTH_WITH_SUGGESTIONS].value
    50
"""

from __future__ import annotations

import json
import os
from collections.abc import Mapping
from pathlib import Path

from pydantic import ValidationError

from .errors import IoFailedError, ValidationFailedError
from .models import LintConfig, RuleSetting, Severity
from .rules import (
    BODY_MAX_LINE_LENGTH,
    FOOTER_MAX_LINE_LENGTH,
    HEADER_MAX_LENGTH,
    RULES,
    RuleName,
)

CONFIG_FILENAME = ".commitstyle.json"
REPOSITORY_ENV_VAR = "GITHUB_REPOSITORY"


def _setting(
    severity: Severity, when: str = "always", value: int | str | None = None
) -> RuleSetting:
    return RuleSetting(severity=severity, when=when, value=value)


DEFAULT_RULE_SETTINGS: dict[RuleName, RuleSetting] = {
    RuleName.BODY_LEADING_BLANK: _setting(Severity.WARNING),
    RuleName.BODY_SOFT_MAX_LINE_LENGTH: _setting(Severity.ERROR, value=BODY_MAX_LINE_LENGTH),
    RuleName.EMPTY_WIP: _setting(Severity.ERROR),
    RuleName.FOOTER_LEADING_BLANK: _setting(Severity.WARNING),
    RuleName.FOOTER_MAX_LINE_LENGTH: _setting(Severity.ERROR, value=FOOTER_MAX_LINE_LENGTH),
    RuleName.FOOTER_NOTES_MISPLACEMENT: _setting(Severity.ERROR),
    RuleName.FOOTER_REFERENCES_EXISTENCE: _setting(Severity.ERROR),
    RuleName.HEADER_MAX_LENGTH_WITH_SUGGESTIONS: _setting(Severity.ERROR, value=HEADER_MAX_LENGTH),
    RuleName.SUBJECT_FULL_STOP: _setting(Severity.ERROR, "never", "."),
    RuleName.TYPE_EMPTY: _setting(Severity.WARNING, "never"),
    RuleName.TYPE_SPACE_AFTER_COLON: _setting(Severity.ERROR),
    RuleName.SUBJECT_LOWERCASE: _setting(Severity.ERROR),
    RuleName.BODY_PROSE: _setting(Severity.ERROR),
    RuleName.TYPE_SPACE_AFTER_COMMA: _setting(Severity.ERROR),
    RuleName.TRAILING_WHITESPACE: _setting(Severity.ERROR),
    RuleName.PREFER_SLASH_OVER_BACKSLASH: _setting(Severity.ERROR),
    RuleName.TYPE_SPACE_BEFORE_PAREN: _setting(Severity.ERROR),
    RuleName.TYPE_WITH_SQUARE_BRACKETS: _setting(Severity.ERROR),
    RuleName.PROPER_ISSUE_REFS: _setting(Severity.ERROR),
    RuleName.TOO_MANY_SPACES: _setting(Severity.ERROR),
    RuleName.COMMIT_HASH_ALONE: _setting(Severity.ERROR),
    RuleName.TITLE_UPPERCASE: _setting(Severity.ERROR),
}


def default_config() -> LintConfig:
    """Return the configuration used when no config file is present."""
    return LintConfig(rules=dict(DEFAULT_RULE_SETTINGS))


def load_json(path: Path) -> dict | None:
    """Load a JSON file if it exists.

    Args:
        path: Path to the JSON file.

    Returns:
        Parsed payload as a dict, or ``None`` if the file does not exist.

    Example:
        >>> from pathlib import Path
        >>> load_json(Path("missing.json")) is None
        True
    """
    if not path.exists():
        return None
    try:
        with path.open("r", encoding="utf-8") as fh:
            payload = json.load(fh)
    except json.JSONDecodeError as exc:
        raise ValidationFailedError(f"invalid JSON in {path}: {exc}") from exc
    except OSError as exc:
        raise IoFailedError(f"failed to read {path}: {exc}") from exc
    if not isinstance(payload, dict):
        raise ValidationFailedError(f"expected a JSON object in {path}")
    return payload


def find_config_file(start: Path) -> Path | None:
    """Return the nearest ``.commitstyle.json`` at or above ``start``."""
    current = start.resolve()
    for directory in (current, *current.parents):
        candidate = directory / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
    return None


def check_rule_values(rules: Mapping[RuleName, RuleSetting]) -> None:
    """Reject rule values the rule cannot use.

    Length rules need a positive integer and ``subject-full-stop`` a non-empty
    string. Values given to rules that take none are ignored.

    Raises:
        ValidationFailedError: A value does not fit its rule.
    """
    for name, setting in rules.items():
        spec = RULES.get(name)
        if spec is None or spec.value_type is None or setting.value is None:
            continue
        value = setting.value
        if spec.value_type is int:
            if isinstance(value, int) and not isinstance(value, bool) and value > 0:
                continue
            expected = "a positive integer"
        else:
            if isinstance(value, str) and value:
                continue
            expected = "a non-empty string"
        raise ValidationFailedError(
            f"rule {name.value} expects {expected} value (got {value!r})",
            recovery_hint=f"fix the value of {name.value} in {CONFIG_FILENAME}",
        )


def build_config(payload: Mapping[str, object]) -> LintConfig:
    """Validate a config payload and merge its rules over the defaults.

    Example:
        >>> config = build_config({"rules": {"empty-wip": [0, "always"]}})
        >>> config.rules[RuleName.EMPTY_WIP].enabled
        False
        >>> config.rules[RuleName.BODY_PROSE].severity
        <Severity.ERROR: 2>
    """
    try:
        parsed = LintConfig.model_validate(payload)
    except ValidationError as exc:
        raise ValidationFailedError(
            f"invalid commitstyle configuration: {exc}",
            recovery_hint=f"check the rule names and values in {CONFIG_FILENAME}",
        ) from exc
    check_rule_values(parsed.rules)
    rules = dict(DEFAULT_RULE_SETTINGS)
    rules.update(parsed.rules)
    return parsed.model_copy(update={"rules": rules})


def load_config(
    path: Path | None = None,
    *,
    cwd: Path | None = None,
    environ: Mapping[str, str] | None = None,
) -> LintConfig:
    """Load the effective configuration.

    Args:
        path: Explicit config file; it must exist.
        cwd: Directory where config discovery starts (default: current dir).
        environ: Environment used for the repository fallback.

    Returns:
        The merged configuration. The repository slug falls back to
        ``GITHUB_REPOSITORY`` when the file does not set one.
    """
    if path is not None:
        payload = load_json(path)
        if payload is None:
            raise IoFailedError(f"config file not found: {path}")
    else:
        discovered = find_config_file(cwd or Path.cwd())
        payload = load_json(discovered) if discovered is not None else None

    config = build_config(payload or {})
    if config.repository is None:
        env = os.environ if environ is None else environ
        repository = env.get(REPOSITORY_ENV_VAR, "").strip().strip("/")
        if repository:
            config = config.model_copy(update={"repository": repository})
    return config
