"""Pydantic models for commitstyle configuration data."""

from __future__ import annotations

import re
from enum import IntEnum

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from .rules import Applicability, RuleName


class Severity(IntEnum):
    DISABLED = 0
    WARNING = 1
    ERROR = 2


_SEVERITY_BY_NAME = {
    "disabled": Severity.DISABLED,
    "off": Severity.DISABLED,
    "warning": Severity.WARNING,
    "warn": Severity.WARNING,
    "error": Severity.ERROR,
}


class RuleSetting(BaseModel):
    """Configuration of a single rule.

    Accepts the compact ``[severity, applicability, value]`` list form as well
    as a mapping.

    Attributes:
        severity: Disabled (0), warning (1) or error (2).
        when: ``always`` or ``never``.
        value: Extra rule option, such as a maximum length.

    Example:
        >>> RuleSetting.model_validate([2, "always", 72])
        RuleSetting(severity=<Severity.ERROR: 2>, when='always', value=72)
        >>> RuleSetting.model_validate({"severity": "warning"}).severity
        <Severity.WARNING: 1>
    """

    model_config = ConfigDict(frozen=True)

    severity: Severity
    when: Applicability = "always"
    value: int | str | None = None

    @model_validator(mode="before")
    @classmethod
    def normalize_sequence(cls, value: object) -> object:
        if not isinstance(value, (list, tuple)):
            return value
        if not value or len(value) > 3:
            raise ValueError("expected [severity, applicability, value?]")
        payload: dict[str, object] = {"severity": value[0]}
        if len(value) > 1:
            payload["when"] = value[1]
        if len(value) > 2:
            payload["value"] = value[2]
        return payload

    @field_validator("severity", mode="before")
    @classmethod
    def normalize_severity(cls, value: object) -> object:
        if isinstance(value, str):
            normalized = value.strip().lower()
            if normalized in _SEVERITY_BY_NAME:
                return _SEVERITY_BY_NAME[normalized]
            if normalized.isdigit():
                return int(normalized)
        return value

    @field_validator("when", mode="before")
    @classmethod
    def normalize_when(cls, value: object) -> object:
        if isinstance(value, str):
            return value.strip().lower()
        return value

    @property
    def enabled(self) -> bool:
        return self.severity is not Severity.DISABLED


class LintConfig(BaseModel):
    """Effective linter configuration.

    Attributes:
        rules: Rule settings keyed by rule name; rules not listed do not run.
        default_ignores: Skip merge, revert, fixup and squash messages.
        ignores: Extra regular expressions; matching messages are skipped.
        repository: ``owner/name`` slug used by ``commit-hash-alone``.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    rules: dict[RuleName, RuleSetting] = Field(default_factory=dict)
    default_ignores: bool = True
    ignores: tuple[str, ...] = ()
    repository: str | None = None

    @field_validator("ignores", mode="after")
    @classmethod
    def validate_ignores(cls, value: tuple[str, ...]) -> tuple[str, ...]:
        for pattern in value:
            try:
                re.compile(pattern)
            except re.error as exc:
                raise ValueError(f"invalid ignore pattern {pattern!r}: {exc}") from exc
        return value

    @field_validator("repository", mode="before")
    @classmethod
    def normalize_repository(cls, value: object) -> object:
        if value is None:
            return None
        if isinstance(value, str):
            normalized = value.strip().strip("/")
            return normalized or None
        return value
