import pytest

from commitstyle import classifiers


def test_footer_reference_requires_bracket_then_space() -> None:
    assert classifiers.is_footer_reference("[1] https://example.com")
    assert classifiers.is_footer_reference("[bug] https://example.com")
    assert not classifiers.is_footer_reference("[1]https://example.com")
    assert not classifiers.is_footer_reference("As shown in [1] above.")


def test_fixes_or_closes_sentence_is_prefix_and_case_sensitive() -> None:
    assert classifiers.is_fixes_or_closes_sentence("Fixes https://example.com/issues/1")
    assert classifiers.is_fixes_or_closes_sentence("Closes https://example.com/issues/1")
    assert not classifiers.is_fixes_or_closes_sentence("fixes the bug")
    assert not classifiers.is_fixes_or_closes_sentence("Fixes")
    assert not classifiers.is_fixes_or_closes_sentence("This Fixes it")


def test_co_authored_by_tag() -> None:
    assert classifiers.is_co_authored_by_tag("Co-authored-by: Jane <jane@example.com>")
    assert not classifiers.is_co_authored_by_tag("Co-Authored-By: Jane <jane@example.com>")


def test_is_footer_note_is_union_of_kinds() -> None:
    assert classifiers.is_footer_note("[2] https://example.com")
    assert classifiers.is_footer_note("Fixes https://example.com/issues/2")
    assert classifiers.is_footer_note("Co-authored-by: Jane <jane@example.com>")
    assert not classifiers.is_footer_note("Plain prose.")


def test_line_classifiers_reject_multiline_input() -> None:
    with pytest.raises(AssertionError):
        classifiers.is_footer_note("Fixes x\nmore")


@pytest.mark.parametrize(
    ("word", "expected"),
    [
        ("iOS", True),
        ("GitHub", True),
        ("macOS", True),
        ("C#", True),
        ("v1.2", True),
        ("README", True),
        ("Add", False),
        ("add", False),
    ],
)
def test_is_proper_noun(word: str, expected: bool) -> None:
    assert classifiers.is_proper_noun(word) is expected


@pytest.mark.parametrize(
    ("word", "expected"),
    [
        ("Add", True),
        ("Fix", True),
        ("add", False),
        ("GitHub", False),
        ("Add,", False),
        ("Build2", False),
        ("(Add", False),
    ],
)
def test_word_is_start_of_sentence(word: str, expected: bool) -> None:
    assert classifiers.word_is_start_of_sentence(word) is expected


def test_big_block_delimiter() -> None:
    assert classifiers.is_big_block_delimiter("```")
    assert classifiers.is_big_block_delimiter("```fsharp")
    assert not classifiers.is_big_block_delimiter(" ```")


def test_contains_hashtag_ref() -> None:
    assert classifiers.contains_hashtag_ref("See #123 for details.")
    assert classifiers.contains_hashtag_ref("x#9")
    assert not classifiers.contains_hashtag_ref("See # 123 or #abc.")


def test_strip_code_blocks_spans_first_to_last_fence() -> None:
    text = "A.\n```\none\n```\nB.\n```\ntwo\n```\nC."
    assert classifiers.strip_code_blocks(text) == "A.\n\nC."


def test_strip_code_blocks_is_idempotent_for_single_block() -> None:
    for text in ("No code here.", "Before.\n```\nx = 1  # #12\n```\nAfter."):
        once = classifiers.strip_code_blocks(text)
        assert classifiers.strip_code_blocks(once) == once


def test_strip_code_blocks_keeps_unterminated_fence() -> None:
    text = "Before.\n```\nnever closed"
    assert classifiers.strip_code_blocks(text) == text


def test_extract_bracket_references_ignores_named_references() -> None:
    assert classifiers.extract_bracket_references("[1] and [bug] and [22]") == ["1", "22"]
