"""Commit message style rules.

Each rule is a pure function from a segmented ``CommitMessage`` and its
``RuleOptions`` to a ``Verdict``. Rules never depend on each other and never
raise for a style problem; a missing region (no body, no area in the title)
passes. ``RULES`` maps every ``RuleName`` to its implementation.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Literal

from .abbreviations import ABBREVIATIONS
from .classifiers import (
    contains_hashtag_ref,
    extract_bracket_references,
    is_footer_note,
    is_footer_reference,
    is_proper_noun,
    strip_code_blocks,
    word_is_start_of_sentence,
)
from .diagnostics import Verdict, verdict
from .message import CommitMessage, find_footer_start, iter_unfenced_lines, split_lines
from .text import find_urls, is_lower_case, is_valid_url

Applicability = Literal["always", "never"]

HEADER_MAX_LENGTH = 50
BODY_MAX_LINE_LENGTH = 64
FOOTER_MAX_LINE_LENGTH = 150

_TOO_MANY_SPACES = re.compile(r"[^.]  ")
_SQUARE_BRACKET_AREA = re.compile(r"^\[.*\]")
_COMMIT_URL = re.compile(r"/commit/[0-9a-fA-F]{7,40}\b")


class RuleName(str, Enum):
    BODY_LEADING_BLANK = "body-leading-blank"
    BODY_PROSE = "body-prose"
    BODY_SOFT_MAX_LINE_LENGTH = "body-soft-max-line-length"
    COMMIT_HASH_ALONE = "commit-hash-alone"
    EMPTY_WIP = "empty-wip"
    FOOTER_LEADING_BLANK = "footer-leading-blank"
    FOOTER_MAX_LINE_LENGTH = "footer-max-line-length"
    FOOTER_NOTES_MISPLACEMENT = "footer-notes-misplacement"
    FOOTER_REFERENCES_EXISTENCE = "footer-references-existence"
    HEADER_MAX_LENGTH_WITH_SUGGESTIONS = "header-max-length-with-suggestions"
    PREFER_SLASH_OVER_BACKSLASH = "prefer-slash-over-backslash"
    PROPER_ISSUE_REFS = "proper-issue-refs"
    SUBJECT_FULL_STOP = "subject-full-stop"
    SUBJECT_LOWERCASE = "subject-lowercase"
    TITLE_UPPERCASE = "title-uppercase"
    TOO_MANY_SPACES = "too-many-spaces"
    TRAILING_WHITESPACE = "trailing-whitespace"
    TYPE_EMPTY = "type-empty"
    TYPE_SPACE_AFTER_COLON = "type-space-after-colon"
    TYPE_SPACE_AFTER_COMMA = "type-space-after-comma"
    TYPE_SPACE_BEFORE_PAREN = "type-space-before-paren"
    TYPE_WITH_SQUARE_BRACKETS = "type-with-square-brackets"


@dataclass(frozen=True)
class RuleOptions:
    """Per-invocation options handed to a rule.

    Attributes:
        when: ``always`` or ``never``; only the built-in rules honour ``never``.
        value: The rule's extra option (a length, a character), if any.
        repository: ``owner/name`` slug of the repository being linted.
    """

    when: Applicability = "always"
    value: object | None = None
    repository: str | None = None


RuleFunction = Callable[[CommitMessage, RuleOptions], Verdict]


@dataclass(frozen=True)
class RuleSpec:
    name: RuleName
    evaluate: RuleFunction
    default_value: object | None = None
    # Type the configured value must have; None when the rule takes no value.
    value_type: type | None = None


def _applies(condition: bool, when: Applicability) -> bool:
    return condition if when == "always" else not condition


def _int_value(options: RuleOptions, default: int) -> int:
    if options.value is None:
        return default
    return int(options.value)


def body_prose(commit: CommitMessage, options: RuleOptions) -> Verdict:
    offence = False
    for paragraph in commit.paragraphs(strip_code=True):
        lines = paragraph.lines
        if is_lower_case(paragraph.first_char):
            if not (len(lines) == 1 and is_valid_url(lines[0])):
                offence = True

        last_line = lines[-1]
        if (
            not paragraph.ends_with_valid_terminator
            and not is_valid_url(last_line)
            and not is_footer_note(last_line)
        ):
            offence = True

    return verdict(
        not offence,
        "Please begin a paragraph with uppercase letter and end it with a dot.",
    )


def commit_hash_alone(commit: CommitMessage, options: RuleOptions) -> Verdict:
    offence = False
    repository = (options.repository or "").strip().strip("/").lower()
    if repository:
        for url in find_urls(commit.raw):
            if _COMMIT_URL.search(url) and f"/{repository}/commit/" in url.lower():
                offence = True
                break
    return verdict(not offence, "Please use the commit hash instead of the commit full URL.")


def empty_wip(commit: CommitMessage, options: RuleOptions) -> Verdict:
    offence = commit.header.lower() == "wip"
    return verdict(not offence, "Please add a number or description after the WIP prefix.")


def suggest_abbreviations(
    title: str, abbreviations: Mapping[str, str] = ABBREVIATIONS
) -> list[tuple[str, str]]:
    """Return ``(word, replacement)`` pairs for the words found in ``title``.

    Example:
        >>> suggest_abbreviations(": improve the configuration of the repository")
        [('configuration', 'config'), ('repository', 'repo')]
    """
    lowered = title.lower()
    suggestions: list[tuple[str, str]] = []
    for key, replacement in abbreviations.items():
        if re.search(rf"\b({re.escape(key)})\b", lowered):
            suggestions.append((key, replacement))
    return suggestions


def header_max_length_with_suggestions(commit: CommitMessage, options: RuleOptions) -> Verdict:
    max_length = _int_value(options, HEADER_MAX_LENGTH)
    header = commit.header
    header_length = len(header)
    message = f"Please do not exceed {max_length} characters in title (found {header_length})."
    if header.startswith("Merge ") or header_length <= max_length:
        return verdict(True, message)

    colon_index = header.find(":")
    title_without_area = header[colon_index:] if colon_index > 0 else header
    suggestions = suggest_abbreviations(title_without_area)
    if suggestions:
        message += " The following replacement(s) in your commit title are recommended:\n"
        message += "\n".join(f'"{key}" -> "{value}"' for key, value in suggestions)
    return verdict(False, message)


def footer_notes_misplacement(commit: CommitMessage, options: RuleOptions) -> Verdict:
    offence = False
    seen_footer = False
    for line in commit.body_lines:
        if not line:
            continue
        line_is_footer_note = is_footer_note(line)
        if seen_footer and not line_is_footer_note:
            offence = True
            break
        seen_footer = seen_footer or line_is_footer_note

    return verdict(
        not offence,
        "Footer messages must be placed after body paragraphs, please move any message "
        'that starts with "Fixes", "Closes" or "[i]" to the end of the commit message.',
    )


def footer_references_existence(commit: CommitMessage, options: RuleOptions) -> Verdict:
    body_references: set[str] = set()
    footer_references: set[str] = set()
    for line in commit.body_lines:
        references = extract_bracket_references(line)
        if not references:
            continue
        if is_footer_reference(line):
            footer_references.update(references)
        else:
            body_references.update(references)

    offence = body_references != footer_references
    return verdict(
        not offence,
        "All references in the body must be mentioned in the footer, and vice versa.",
    )


def prefer_slash_over_backslash(commit: CommitMessage, options: RuleOptions) -> Verdict:
    offence = commit.area is not None and "\\" in commit.area
    return verdict(
        not offence,
        "Please use slash instead of backslash in the area/scope/sub-area section of the title.",
    )


def proper_issue_refs(commit: CommitMessage, options: RuleOptions) -> Verdict:
    offence = contains_hashtag_ref(commit.trimmed_body(strip_code=True))
    return verdict(not offence, "Please use full URLs instead of #XYZ refs.")


def title_uppercase(commit: CommitMessage, options: RuleOptions) -> Verdict:
    header = commit.header
    first_word = header.split(" ")[0]
    offence = (
        ":" not in header
        and bool(first_word)
        and not word_is_start_of_sentence(first_word)
        and not is_proper_noun(first_word)
    )
    return verdict(
        not offence,
        "Please start the title with an upper-case letter if there is no area in the title.",
    )


def too_many_spaces(commit: CommitMessage, options: RuleOptions) -> Verdict:
    offence = _TOO_MANY_SPACES.search(strip_code_blocks(commit.raw)) is not None
    return verdict(not offence, "Please watch out for too many whitespaces in the text.")


def type_space_after_colon(commit: CommitMessage, options: RuleOptions) -> Verdict:
    header = commit.header
    colon_index = header.find(":")
    offence = 0 < colon_index < len(header) - 1 and header[colon_index + 1] != " "
    return verdict(
        not offence,
        "Please place a space after the first colon character in your commit message title.",
    )


def type_with_square_brackets(commit: CommitMessage, options: RuleOptions) -> Verdict:
    offence = _SQUARE_BRACKET_AREA.match(commit.header) is not None
    return verdict(
        not offence,
        'Please use "area/scope: subject" or "area(scope): subject" style instead of wrapping '
        "area/scope under square brackets in your commit message title.",
    )


def subject_lowercase(commit: CommitMessage, options: RuleOptions) -> Verdict:
    # Reads the header rather than a parsed subject: areas like "foo/bar"
    # or "foo,bar" never parse as a conventional type.
    header = commit.header
    offence = False
    colon_index = header.find(":")
    if colon_index > 0:
        subject = header[colon_index + 1 :].strip()
        if len(subject) > 1:
            offence = word_is_start_of_sentence(subject.split(" ")[0])

    return verdict(
        not offence,
        "Please use lowercase as the first letter for your subject, i.e. the text after "
        "your area/scope.",
    )


def type_space_after_comma(commit: CommitMessage, options: RuleOptions) -> Verdict:
    area = commit.area or ""
    offence = any(
        char == "," and area[index + 1 : index + 2] == " " for index, char in enumerate(area)
    )
    return verdict(
        not offence,
        "No need to use space after comma in the area/scope (so that commit title can be shorter).",
    )


def _fmt_command(fmt_option: str, width: int) -> str:
    option = f" {fmt_option}" if fmt_option else ""
    return (
        'git log --format=%B -n 1 $(git log -1 --pretty=format:"%h") | cat - > log.txt ; '
        f"fmt -w 1111 -s log.txt > ulog.txt && fmt -w {width} -s{option} ulog.txt > wlog.txt "
        "&& git commit --amend -F wlog.txt"
    )


def body_soft_max_line_length(commit: CommitMessage, options: RuleOptions) -> Verdict:
    max_length = _int_value(options, BODY_MAX_LINE_LENGTH)
    offence = False
    body = commit.trimmed_body(strip_code=True)
    if body:
        for line in iter_unfenced_lines(split_lines(body)):
            if len(line) > max_length and not is_valid_url(line) and not is_footer_note(line):
                offence = True
                break

    return verdict(
        not offence,
        f"Please do not exceed {max_length} characters in the lines of the commit message's "
        "body; we recommend this unix command (for editing the last commit message): \n"
        f"For Linux users: {_fmt_command('-u', max_length)}\n"
        f"For macOS users: {_fmt_command('', max_length)}",
    )


def trailing_whitespace(commit: CommitMessage, options: RuleOptions) -> Verdict:
    offence = False
    for line in iter_unfenced_lines(commit.raw_lines):
        if line[:1] in (" ", "\t") or line[-1:] in (" ", "\t"):
            offence = True
            break
    return verdict(not offence, "Please watch out for leading or ending trailing whitespace.")


def type_space_before_paren(commit: CommitMessage, options: RuleOptions) -> Verdict:
    area = commit.area or ""
    offence = any(
        char == "(" and index >= 1 and area[index - 1] == " " for index, char in enumerate(area)
    )
    return verdict(
        not offence,
        "No need to use space before parentheses in the area/scope/sub-area section of the title.",
    )


def body_leading_blank(commit: CommitMessage, options: RuleOptions) -> Verdict:
    lines = split_lines(commit.text)
    if len(lines) < 2:
        return verdict(True, "")
    has_leading_blank = lines[1].strip() == ""
    if options.when == "always":
        message = "Please separate the title from the body with a blank line."
    else:
        message = "Please do not leave a blank line between the title and the body."
    return verdict(_applies(has_leading_blank, options.when), message)


def footer_leading_blank(commit: CommitMessage, options: RuleOptions) -> Verdict:
    lines = split_lines(commit.text)
    start = find_footer_start(lines[1:])
    if start is None:
        return verdict(True, "")
    has_leading_blank = lines[start].strip() == ""
    if options.when == "always":
        message = "Please separate the footer notes from the body with a blank line."
    else:
        message = "Please do not leave a blank line before the footer notes."
    return verdict(_applies(has_leading_blank, options.when), message)


def footer_max_line_length(commit: CommitMessage, options: RuleOptions) -> Verdict:
    max_length = _int_value(options, FOOTER_MAX_LINE_LENGTH)
    offence = any(len(line) > max_length for line in commit.footer_lines)
    return verdict(
        not offence,
        f"Please do not exceed {max_length} characters in the lines of the footer.",
    )


def subject_full_stop(commit: CommitMessage, options: RuleOptions) -> Verdict:
    stop = "." if options.value is None else str(options.value)
    parsed = commit.conventional_header
    if parsed is None or not parsed.subject:
        return verdict(True, "")
    has_stop = parsed.subject.endswith(stop)
    if options.when == "always":
        message = f"Please end the title with {stop!r}."
    else:
        message = f"Please do not end the title with {stop!r}."
    return verdict(_applies(has_stop, options.when), message)


def type_empty(commit: CommitMessage, options: RuleOptions) -> Verdict:
    parsed = commit.conventional_header
    is_empty = parsed is None or not parsed.type
    if options.when == "always":
        message = "Please do not start the title with an area/scope."
    else:
        message = 'Please start the title with an area/scope, as in "area: subject".'
    return verdict(_applies(is_empty, options.when), message)


RULES: dict[RuleName, RuleSpec] = {
    spec.name: spec
    for spec in (
        RuleSpec(RuleName.BODY_LEADING_BLANK, body_leading_blank),
        RuleSpec(
            RuleName.BODY_SOFT_MAX_LINE_LENGTH,
            body_soft_max_line_length,
            BODY_MAX_LINE_LENGTH,
            value_type=int,
        ),
        RuleSpec(RuleName.EMPTY_WIP, empty_wip),
        RuleSpec(RuleName.FOOTER_LEADING_BLANK, footer_leading_blank),
        RuleSpec(
            RuleName.FOOTER_MAX_LINE_LENGTH,
            footer_max_line_length,
            FOOTER_MAX_LINE_LENGTH,
            value_type=int,
        ),
        RuleSpec(RuleName.FOOTER_NOTES_MISPLACEMENT, footer_notes_misplacement),
        RuleSpec(RuleName.FOOTER_REFERENCES_EXISTENCE, footer_references_existence),
        RuleSpec(
            RuleName.HEADER_MAX_LENGTH_WITH_SUGGESTIONS,
            header_max_length_with_suggestions,
            HEADER_MAX_LENGTH,
            value_type=int,
        ),
        RuleSpec(RuleName.SUBJECT_FULL_STOP, subject_full_stop, ".", value_type=str),
        RuleSpec(RuleName.TYPE_EMPTY, type_empty),
        RuleSpec(RuleName.TYPE_SPACE_AFTER_COLON, type_space_after_colon),
        RuleSpec(RuleName.SUBJECT_LOWERCASE, subject_lowercase),
        RuleSpec(RuleName.BODY_PROSE, body_prose),
        RuleSpec(RuleName.TYPE_SPACE_AFTER_COMMA, type_space_after_comma),
        RuleSpec(RuleName.TRAILING_WHITESPACE, trailing_whitespace),
        RuleSpec(RuleName.PREFER_SLASH_OVER_BACKSLASH, prefer_slash_over_backslash),
        RuleSpec(RuleName.TYPE_SPACE_BEFORE_PAREN, type_space_before_paren),
        RuleSpec(RuleName.TYPE_WITH_SQUARE_BRACKETS, type_with_square_brackets),
        RuleSpec(RuleName.PROPER_ISSUE_REFS, proper_issue_refs),
        RuleSpec(RuleName.TOO_MANY_SPACES, too_many_spaces),
        RuleSpec(RuleName.COMMIT_HASH_ALONE, commit_hash_alone),
        RuleSpec(RuleName.TITLE_UPPERCASE, title_uppercase),
    )
}
