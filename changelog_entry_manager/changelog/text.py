"""Derives changelog text from pull request titles and bodies."""

import re
import textwrap
from dataclasses import dataclass
from functools import lru_cache

from changelog_entry_manager.changelog.facts import PullRequestFacts
from changelog_entry_manager.configuration.models import ChangelogConfiguration
from changelog_entry_manager.utils.constants import (
    CAMEL_CASE_TOKEN_PATTERN,
    IDENTIFIER_TOKEN_PATTERN,
    ISSUE_PREFIX_PATTERN,
    PR_REFERENCE_SUFFIX_PATTERN,
    WRAP_WIDTH,
)


@lru_cache(maxsize=8)
def _area_tag_patterns(title_area_codes: tuple[str, ...]) -> tuple[re.Pattern[str], re.Pattern[str]]:
    codes = "|".join(re.escape(code) for code in title_area_codes)
    bracketed = re.compile(rf"^\[(?:{codes})\]\s+", re.IGNORECASE)
    colon_suffixed = re.compile(rf"^(?:{codes}):\s+", re.IGNORECASE)
    return bracketed, colon_suffixed


def quote_code_token(token: str) -> str:
    """Wrap a camelCase or dotted/underscored identifier in backticks."""
    if CAMEL_CASE_TOKEN_PATTERN.fullmatch(token) or IDENTIFIER_TOKEN_PATTERN.fullmatch(token):
        return f"`{token}`"
    return token


def normalize_summary(title: str | None, configuration: ChangelogConfiguration) -> str:
    """Transform a pull request title into a changelog summary.

    This mostly involves removing text: a leading area tag such as '[ML]' or
    'docs:', a leading '#123:' issue number and trailing '(#123)' references.
    The result is capitalized, loses one trailing period, and has identifiers
    quoted as code.
    """
    if not title:
        return ""
    bracketed, colon_suffixed = _area_tag_patterns(configuration.title_area_codes)
    summary = title.strip()
    summary = bracketed.sub("", summary, count=1)
    summary = colon_suffixed.sub("", summary, count=1)
    summary = ISSUE_PREFIX_PATTERN.sub("", summary, count=1)
    summary = PR_REFERENCE_SUFFIX_PATTERN.sub("", summary, count=1)
    summary = summary.strip()
    if not summary:
        return ""

    summary = summary[0].upper() + summary[1:]
    if summary.endswith("."):
        summary = summary[:-1]

    return " ".join(quote_code_token(token) for token in summary.split())


def wrap_text(text: str | None, width: int = WRAP_WIDTH) -> str:
    """Wrap free text at the given column without reordering or splitting words.

    Existing line breaks are kept; only lines longer than the width are reflowed.
    """
    if not text:
        return ""
    wrapped_lines: list[str] = []
    for line in text.splitlines():
        if len(line) <= width:
            wrapped_lines.append(line)
            continue
        wrapped_lines.extend(
            textwrap.wrap(
                line,
                width=width,
                break_long_words=False,
                break_on_hyphens=False,
                expand_tabs=False,
                replace_whitespace=False,
            )
        )
    return "\n".join(wrapped_lines)


def extract_issue_references(body: str | None, repository: str) -> frozenset[int]:
    """Find the issues and pull requests referenced in a pull request body.

    Both '#123' and '<owner>/<repo>/issues/123' forms are recognized for the
    pull request's own repository.
    """
    if not body:
        return frozenset()
    pattern = re.compile(rf"(?:#|(?<![\w.-]){re.escape(repository)}/issues/)(\d+)")
    return frozenset(int(match.group(1)) for match in pattern.finditer(body))


@dataclass(frozen=True)
class NormalizedText:
    """Changelog text derived from a pull request."""

    summary: str
    body: str
    issues: frozenset[int]


def normalize_pull_request_text(facts: PullRequestFacts, configuration: ChangelogConfiguration) -> NormalizedText:
    """Derive the summary, wrapped body and referenced issues of a pull request."""
    return NormalizedText(
        summary=normalize_summary(facts.title, configuration),
        body=wrap_text(facts.body),
        issues=extract_issue_references(facts.body, facts.repository),
    )
