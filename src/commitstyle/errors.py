"""Operational failure contracts.

Style violations are never exceptions: rules report them as failing verdicts.
Expected operational failures (bad config, missing git, hook conflicts) raise
``CommitStyleError`` subclasses. Contract violations raise ``AssertionError``.
"""

from __future__ import annotations

from typing import Literal

FailureCode = Literal[
    "validation_failed",
    "dependency_missing",
    "policy_blocked",
    "external_command_failed",
    "io_failed",
]


class CommitStyleError(Exception):
    """Expected failure: validation, policy, or runtime error.

    Callers catch CommitStyleError and handle it per their interface (the CLI
    dies with a message). Use ``raise ... from exc`` to chain the cause.
    """

    def __init__(
        self,
        code: FailureCode,
        message: str,
        *,
        recovery_hint: str | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.recovery_hint = recovery_hint


class ValidationFailedError(CommitStyleError):
    """Validation failed (invalid configuration or input)."""

    def __init__(self, message: str, *, recovery_hint: str | None = None) -> None:
        super().__init__("validation_failed", message, recovery_hint=recovery_hint)


class DependencyMissingError(CommitStyleError):
    """Required dependency is missing or unavailable."""

    def __init__(self, message: str, *, recovery_hint: str | None = None) -> None:
        super().__init__("dependency_missing", message, recovery_hint=recovery_hint)


class PolicyBlockedError(CommitStyleError):
    """Policy gate blocked the operation."""

    def __init__(self, message: str, *, recovery_hint: str | None = None) -> None:
        super().__init__("policy_blocked", message, recovery_hint=recovery_hint)


class ExternalCommandFailedError(CommitStyleError):
    """External command (git) failed."""

    def __init__(self, message: str, *, recovery_hint: str | None = None) -> None:
        super().__init__("external_command_failed", message, recovery_hint=recovery_hint)


class IoFailedError(CommitStyleError):
    """I/O operation failed (read, write, config)."""

    def __init__(self, message: str, *, recovery_hint: str | None = None) -> None:
        super().__init__("io_failed", message, recovery_hint=recovery_hint)
