"""String, case and URL primitives shared by the classifiers and rules.

These helpers carry the input contracts of the linter: a value that must be a
string, a line that must not span several lines, a word that must not contain
whitespace. Breaking a contract is a programming error and raises
``AssertionError``; it is never reported as a style violation.
"""

from __future__ import annotations

import re
from urllib.parse import urlparse

BIG_BLOCK_DELIMITER = "```"

_URL_PATTERN = re.compile(r"\bhttps?://\S+")
_WHITESPACE_PATTERN = re.compile(r"\s")


def convert_any_to_string(value: object, field_name: str) -> str:
    """Return ``value`` when it is a string, otherwise fail loudly.

    Args:
        value: Commit field handed over by the caller.
        field_name: Field name used in the failure message.

    Returns:
        The value itself.

    Example:
        >>> convert_any_to_string("fix: typo", "header")
        'fix: typo'
        >>> convert_any_to_string(None, "raw")
        Traceback (most recent call last):
        ...
        AssertionError: expected a string for 'raw' (got NoneType)
    """
    if not isinstance(value, str):
        raise AssertionError(f"expected a string for {field_name!r} (got {type(value).__name__})")
    return value


def assert_character(letter: str) -> None:
    if len(letter) != 1:
        raise AssertionError(f"expected a single character (got {letter!r})")


def assert_line(line: str) -> None:
    """Fail when ``line`` spans more than one line."""
    if "\n" in line or "\r" in line:
        raise AssertionError(f"expected a single line (got {line!r})")


def assert_word(word: str) -> None:
    """Fail when ``word`` is empty or contains a space or line break."""
    if not word or " " in word or "\n" in word or "\r" in word:
        raise AssertionError(f"expected a single word (got {word!r})")


def is_upper_case(letter: str) -> bool:
    """Return whether a single character is an upper-case letter.

    Example:
        >>> is_upper_case("A"), is_upper_case("a"), is_upper_case("1")
        (True, False, False)
    """
    assert_character(letter)
    return letter.upper() == letter and letter.lower() != letter


def is_lower_case(letter: str) -> bool:
    """Return whether a single character is a lower-case letter.

    Example:
        >>> is_lower_case("a"), is_lower_case("A"), is_lower_case("[")
        (True, False, False)
    """
    assert_character(letter)
    return letter.lower() == letter and letter.upper() != letter


def is_valid_url(text: str) -> bool:
    """Return whether ``text`` is a single absolute URL.

    Example:
        >>> is_valid_url("https://example.com/issues/123")
        True
        >>> is_valid_url("example.com")
        False
    """
    if not text or _WHITESPACE_PATTERN.search(text):
        return False
    parsed = urlparse(text)
    return bool(parsed.scheme) and parsed.scheme.isalpha() and bool(parsed.netloc)


def is_big_block(line: str) -> bool:
    """Return whether ``line`` opens or closes a fenced block.

    Example:
        >>> is_big_block("```python"), is_big_block("see ```x```")
        (True, False)
    """
    return line.startswith(BIG_BLOCK_DELIMITER)


def find_urls(text: str) -> list[str]:
    """Return the http(s) URLs found in ``text``, in order of appearance."""
    return _URL_PATTERN.findall(text)
