"""Rule evaluation over a single commit message."""

from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import dataclass

from . import log
from .config import default_config
from .message import CommitMessage
from .models import LintConfig, Severity
from .rules import RULES, RuleName, RuleOptions, RuleSpec
from .text import convert_any_to_string

DEFAULT_IGNORE_PATTERNS: tuple[re.Pattern[str], ...] = (
    re.compile(
        r"^((Merge pull request)|(Merge (.*?) into (.*?))|(Merge branch (.*?)))(?:\r?\n)*$",
        re.MULTILINE,
    ),
    re.compile(r"^(Merge tag (.*?))(?:\r?\n)*$", re.MULTILINE),
    re.compile(r"^(R|r)evert (.*)"),
    re.compile(r"^(amend|fixup|squash)! "),
    re.compile(r"^(Merged (.*?)(in|into) (.*)|Merged PR (.*): (.*))"),
    re.compile(r"^Merge remote-tracking branch(\s*)(.*)"),
    re.compile(r"^Automatic merge(.*)"),
    re.compile(r"^Auto-merged (.*?) into (.*)"),
)


@dataclass(frozen=True)
class RuleOutcome:
    """Verdict of one rule together with its configured severity."""

    name: RuleName
    severity: Severity
    passed: bool
    message: str


@dataclass(frozen=True)
class LintReport:
    """All rule outcomes for one commit message."""

    outcomes: tuple[RuleOutcome, ...]
    ignored: bool = False

    @property
    def failures(self) -> tuple[RuleOutcome, ...]:
        return tuple(outcome for outcome in self.outcomes if not outcome.passed)

    @property
    def errors(self) -> tuple[RuleOutcome, ...]:
        return tuple(o for o in self.failures if o.severity is Severity.ERROR)

    @property
    def warnings(self) -> tuple[RuleOutcome, ...]:
        return tuple(o for o in self.failures if o.severity is Severity.WARNING)

    @property
    def passed(self) -> bool:
        return not self.errors


class RuleEngine:
    """Evaluate every enabled rule of a configuration against a message.

    Args:
        config: Effective configuration; defaults to ``default_config()``.
        registry: Rule implementations keyed by name.

    Example:
        >>> report = RuleEngine().lint("wip")
        >>> [outcome.name.value for outcome in report.errors]
        ['empty-wip', 'title-uppercase']
    """

    def __init__(
        self,
        config: LintConfig | None = None,
        registry: Mapping[RuleName, RuleSpec] = RULES,
    ) -> None:
        self._config = config or default_config()
        self._registry = registry
        self._ignore_patterns = [re.compile(pattern) for pattern in self._config.ignores]
        missing = [name.value for name in self._config.rules if name not in registry]
        if missing:
            raise AssertionError(f"configured rules without implementation: {', '.join(missing)}")

    @property
    def config(self) -> LintConfig:
        return self._config

    def is_ignored(self, raw: str) -> bool:
        """Return whether ``raw`` is exempt from linting altogether."""
        text = raw.strip()
        if self._config.default_ignores and any(
            pattern.search(text) for pattern in DEFAULT_IGNORE_PATTERNS
        ):
            return True
        return any(pattern.search(raw) for pattern in self._ignore_patterns)

    def _options(self, spec: RuleSpec, when: str, value: object | None) -> RuleOptions:
        return RuleOptions(
            when=when,
            value=spec.default_value if value is None else value,
            repository=self._config.repository,
        )

    def lint(self, raw: object) -> LintReport:
        """Lint one raw commit message.

        Args:
            raw: Full commit message text. Non-string input raises
                ``AssertionError``.

        Returns:
            A report with one outcome per enabled rule, in registry order.
        """
        raw_text = convert_any_to_string(raw, "raw")
        if self.is_ignored(raw_text):
            log.debug("commit message matches an ignore pattern; skipping rules")
            return LintReport(outcomes=(), ignored=True)

        commit = CommitMessage(raw_text)
        outcomes: list[RuleOutcome] = []
        for name, spec in self._registry.items():
            setting = self._config.rules.get(name)
            if setting is None or not setting.enabled:
                log.trace(f"rule {name.value} disabled")
                continue
            result = spec.evaluate(commit, self._options(spec, setting.when, setting.value))
            log.trace(f"rule {name.value}: {'pass' if result.passed else 'fail'}")
            outcomes.append(
                RuleOutcome(
                    name=name,
                    severity=setting.severity,
                    passed=result.passed,
                    message=result.message,
                )
            )
        log.debug(
            f"evaluated {len(outcomes)} rules, "
            f"{sum(1 for outcome in outcomes if not outcome.passed)} failed"
        )
        return LintReport(outcomes=tuple(outcomes))
