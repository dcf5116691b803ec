"""Commit message segmentation.

A ``CommitMessage`` wraps the raw text of one commit message and derives its
regions on demand: the header (first line), the body (everything after the
first line break), the body paragraphs and lines, and the trailing footer.
Nothing is stored besides the raw text; every view is recomputed from it.

Example:
    >>> message = CommitMessage("area: fix typo\\n\\nFix the typo in the docs.\\n\\nFixes #1")
    >>> message.header
    'area: fix typo'
    >>> [p.text for p in message.paragraphs()]
    ['Fix the typo in the docs.', 'Fixes #1']
    >>> message.footer_lines
    ('Fixes #1',)
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Iterator, Sequence
from dataclasses import dataclass
from functools import cached_property

from .classifiers import is_big_block_delimiter, is_footer_note, strip_code_blocks
from .text import convert_any_to_string, is_valid_url

_LINE_BREAK = re.compile(r"\r?\n")
_PARAGRAPH_BREAK = re.compile(r"\r?\n\r?\n")
_SENTENCE_TERMINATORS = frozenset(".:!?")
_CONVENTIONAL_HEADER = re.compile(r"^(\w*)(?:\((.*)\))?!?: (.*)$")


def split_lines(text: str) -> list[str]:
    """Split ``text`` on ``\\n`` or ``\\r\\n`` line breaks."""
    return _LINE_BREAK.split(text)


def has_valid_ending(paragraph: str) -> bool:
    """Return whether a paragraph ends like a finished sentence.

    A paragraph may end with a terminator (``.``, ``:``, ``!``, ``?``), with a
    URL as its last word, or with ``)`` when the single character before it
    passes this same check.

    Example:
        >>> has_valid_ending("Done."), has_valid_ending("(see above.)")
        (True, True)
        >>> has_valid_ending("(see above)"), has_valid_ending("see https://example.com")
        (False, True)
    """
    last_word = paragraph.split(" ")[-1]
    if is_valid_url(last_word):
        return True
    if not paragraph:
        return False
    ending_char = paragraph[-1]
    if ending_char in _SENTENCE_TERMINATORS:
        return True
    # Recurses on the preceding character only, so "foo.))" is not accepted.
    return ending_char == ")" and len(paragraph) > 1 and has_valid_ending(paragraph[-2])


def find_footer_start(lines: Sequence[str]) -> int | None:
    """Return the index where the trailing block of footer notes begins.

    Blank lines inside the block are skipped; ``None`` means no footer.

    Example:
        >>> find_footer_start(["Text.", "", "[1] https://example.com", "Fixes #2"])
        2
        >>> find_footer_start(["Fixes #2", "Text."]) is None
        True
    """
    start = None
    for index in range(len(lines) - 1, -1, -1):
        line = lines[index]
        if not line:
            continue
        if not is_footer_note(line):
            break
        start = index
    return start


@dataclass(frozen=True)
class ConventionalHeader:
    """Header parts in the ``type(scope)!: subject`` convention."""

    type: str
    scope: str | None
    subject: str


def parse_conventional_header(header: str) -> ConventionalHeader | None:
    """Split a conventional header, or return ``None`` when it does not match.

    Example:
        >>> parse_conventional_header("fix(parser): handle CRLF")
        ConventionalHeader(type='fix', scope='parser', subject='handle CRLF')
        >>> parse_conventional_header("Handle CRLF") is None
        True
    """
    match = _CONVENTIONAL_HEADER.match(header)
    if match is None:
        return None
    return ConventionalHeader(type=match.group(1), scope=match.group(2), subject=match.group(3))


@dataclass(frozen=True)
class Paragraph:
    """A blank-line separated run of body lines."""

    text: str

    @property
    def lines(self) -> list[str]:
        return split_lines(self.text)

    @property
    def first_char(self) -> str:
        return self.text[:1]

    @property
    def last_char(self) -> str:
        return self.text[-1:]

    @property
    def ends_with_valid_terminator(self) -> bool:
        return has_valid_ending(self.text)


@dataclass(frozen=True)
class CommitMessage:
    """Read-only segmented view over a raw commit message.

    Args:
        raw: Full commit message text, header included. Non-string values are
            a contract violation and raise ``AssertionError``.
    """

    raw: str

    def __post_init__(self) -> None:
        convert_any_to_string(self.raw, "raw")

    @cached_property
    def text(self) -> str:
        """The raw message trimmed of surrounding whitespace."""
        return self.raw.strip()

    @cached_property
    def _line_break_index(self) -> int:
        return self.text.find("\n")

    @cached_property
    def header(self) -> str:
        if self._line_break_index < 0:
            return self.text
        return self.text[: self._line_break_index].removesuffix("\r")

    @cached_property
    def raw_body(self) -> str:
        """Everything after the first line break, untrimmed."""
        if self._line_break_index < 0:
            return ""
        return self.text[self._line_break_index + 1 :]

    @cached_property
    def body(self) -> str:
        return self.raw_body.strip()

    @property
    def has_body(self) -> bool:
        return bool(self.body)

    def trimmed_body(self, *, strip_code: bool = False) -> str:
        """Return the trimmed body, optionally without fenced code."""
        if strip_code:
            return strip_code_blocks(self.raw_body).strip()
        return self.body

    def paragraphs(self, *, strip_code: bool = True) -> list[Paragraph]:
        """Return the non-empty body paragraphs."""
        body = self.trimmed_body(strip_code=strip_code)
        if not body:
            return []
        paragraphs: list[Paragraph] = []
        for chunk in _PARAGRAPH_BREAK.split(body):
            chunk = chunk.strip()
            if chunk:
                paragraphs.append(Paragraph(chunk))
        return paragraphs

    @cached_property
    def body_lines(self) -> tuple[str, ...]:
        if not self.body:
            return ()
        return tuple(split_lines(self.body))

    @cached_property
    def raw_lines(self) -> tuple[str, ...]:
        """Lines of the untrimmed raw message, header included."""
        return tuple(split_lines(self.raw))

    @cached_property
    def footer_lines(self) -> tuple[str, ...]:
        """The trailing block of footer notes, blank lines excluded."""
        start = find_footer_start(self.body_lines)
        if start is None:
            return ()
        return tuple(line for line in self.body_lines[start:] if line)

    @cached_property
    def conventional_header(self) -> ConventionalHeader | None:
        return parse_conventional_header(self.header)

    @cached_property
    def area(self) -> str | None:
        """The area/scope prefix before the first colon of the header."""
        colon_index = self.header.find(":")
        if colon_index < 0:
            return None
        return self.header[:colon_index]


def iter_unfenced_lines(lines: Iterable[str]) -> Iterator[str]:
    """Yield the lines outside fenced big blocks.

    Each delimiter line flips the inside-block flag and is never yielded.

    Example:
        >>> list(iter_unfenced_lines(["a", "```", "  b ", "```", "c"]))
        ['a', 'c']
    """
    in_big_block = False
    for line in lines:
        if is_big_block_delimiter(line):
            in_big_block = not in_big_block
            continue
        if in_big_block:
            continue
        yield line
