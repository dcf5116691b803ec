"""Where commit messages come from: hook message files and stdin."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import TextIO

from .errors import IoFailedError

COMMENT_CHAR = "#"
SCISSORS_LINE = "# ------------------------ >8 ------------------------"


def clean_message(text: str) -> str:
    """Drop git comment lines and everything below the scissors line.

    Mirrors what ``git commit`` does with its default cleanup mode before
    recording the message.

    Example:
        >>> clean_message("fix: typo\\n# Please enter the commit message\\n\\nBody.\\n")
        'fix: typo\\n\\nBody.\\n'
    """
    kept: list[str] = []
    for line in text.splitlines(keepends=True):
        if line.rstrip("\r\n") == SCISSORS_LINE:
            break
        if line.startswith(COMMENT_CHAR):
            continue
        kept.append(line)
    return "".join(kept)


def read_message_file(path: Path) -> str:
    """Read a commit message file as handed to a ``commit-msg`` hook."""
    try:
        payload = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise IoFailedError(f"failed to read commit message file: {exc}") from exc
    return clean_message(payload)


def read_stdin(stream: TextIO | None = None) -> str:
    return (stream or sys.stdin).read()
