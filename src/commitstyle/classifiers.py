"""Line and word classifiers used by the commit message rules.

Every classifier is a pure predicate over a single line or word.

Example:
    >>> is_footer_note("Fixes https://example.com/issues/4")
    True
    >>> is_proper_noun("GitHub"), word_is_start_of_sentence("Add")
    (True, True)
"""

from __future__ import annotations

import re

from .text import assert_line, assert_word, is_big_block, is_lower_case, is_upper_case

FIXES_PREFIX = "Fixes "
CLOSES_PREFIX = "Closes "
CO_AUTHORED_BY_PREFIX = "Co-authored-by: "

_UPPER_CASE_LETTER = re.compile(r"[A-Z]")
_NON_ALPHABETIC = re.compile(r"[^a-zA-Z]")
_HASHTAG_REF = re.compile(r"#[0-9]+")
_CODE_BLOCK = re.compile(r"```.*```", re.DOTALL)
_BRACKET_REFERENCE = re.compile(r"(?<=\[)([0-9]+)(?=\])")


def is_footer_reference(line: str) -> bool:
    """Return whether ``line`` is a ``[n] ...`` reference note."""
    assert_line(line)
    return line.startswith("[") and line.find("] ") > 0


def is_fixes_or_closes_sentence(line: str) -> bool:
    assert_line(line)
    return line.startswith(FIXES_PREFIX) or line.startswith(CLOSES_PREFIX)


def is_co_authored_by_tag(line: str) -> bool:
    assert_line(line)
    return line.startswith(CO_AUTHORED_BY_PREFIX)


def is_footer_note(line: str) -> bool:
    """Return whether ``line`` is any kind of footer note.

    Example:
        >>> is_footer_note("[1] https://example.com")
        True
        >>> is_footer_note("Co-authored-by: Jane <jane@example.com>")
        True
        >>> is_footer_note("Fixing stuff")
        False
    """
    assert_line(line)
    return (
        is_footer_reference(line)
        or is_co_authored_by_tag(line)
        or is_fixes_or_closes_sentence(line)
    )


def _num_upper_case_letters(word: str) -> int:
    return len(_UPPER_CASE_LETTER.findall(word))


def _num_non_alphabetic_characters(word: str) -> int:
    return len(_NON_ALPHABETIC.findall(word))


def is_proper_noun(word: str) -> bool:
    """Return whether ``word`` looks like a name rather than a plain word.

    Mixed-case identifiers and words with digits or punctuation count as
    proper nouns, so ``iOS``, ``GitHub`` and ``v2`` all qualify.

    Example:
        >>> [is_proper_noun(w) for w in ("iOS", "GitHub", "v2", "Add", "add")]
        [True, True, True, False, False]
    """
    assert_word(word)
    num_upper_case = _num_upper_case_letters(word)
    return (
        _num_non_alphabetic_characters(word) > 0
        or (is_upper_case(word[0]) and num_upper_case > 1)
        or (is_lower_case(word[0]) and num_upper_case > 0)
    )


def word_is_start_of_sentence(word: str) -> bool:
    """Return whether ``word`` is a plain capitalized word.

    Example:
        >>> [word_is_start_of_sentence(w) for w in ("Add", "add", "README", "Add:")]
        [True, False, False, False]
    """
    assert_word(word)
    if not is_upper_case(word[0]):
        return False
    return _num_upper_case_letters(word) == 1 and _num_non_alphabetic_characters(word) == 0


def is_big_block_delimiter(line: str) -> bool:
    assert_line(line)
    return is_big_block(line)


def contains_hashtag_ref(text: str) -> bool:
    """Return whether ``text`` has a ``#123`` style issue shorthand."""
    return _HASHTAG_REF.search(text) is not None


def strip_code_blocks(text: str) -> str:
    """Remove the region from the first to the last triple-backtick fence.

    Example:
        >>> strip_code_blocks("Before.\\n```\\ncode\\n```\\nAfter.")
        'Before.\\n\\nAfter.'
    """
    return _CODE_BLOCK.sub("", text)


def extract_bracket_references(line: str) -> list[str]:
    """Return the numeric ``[n]`` references cited in ``line``.

    Example:
        >>> extract_bracket_references("as shown in [1] and [23], not [x]")
        ['1', '23']
    """
    return _BRACKET_REFERENCE.findall(line)
