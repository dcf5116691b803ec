"""Rule verdicts and their user-facing messages."""

from __future__ import annotations

from typing import NamedTuple

STYLE_GUIDE_URL = (
    "https://github.com/nblockchain/conventions/blob/master/docs/WorkflowGuidelines.md"
)
ERR_MESSAGE_SUFFIX = f"\nFor reference, here is our commit message style guide: {STYLE_GUIDE_URL}"


class Verdict(NamedTuple):
    """Outcome of one rule: whether it passed and what to tell the author."""

    passed: bool
    message: str


def verdict(passed: bool, message: str) -> Verdict:
    """Build a verdict, pointing failing messages at the style guide.

    Example:
        >>> verdict(True, "Looks fine.")
        Verdict(passed=True, message='Looks fine.')
        >>> verdict(False, "Nope.").message.startswith("Nope.\\nFor reference")
        True
    """
    if passed:
        return Verdict(True, message)
    return Verdict(False, message + ERR_MESSAGE_SUFFIX)
