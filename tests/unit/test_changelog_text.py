"""Unit tests for the changelog.text module."""

import pytest

from changelog_entry_manager.changelog.facts import PullRequestFacts
from changelog_entry_manager.changelog.text import (
    extract_issue_references,
    normalize_pull_request_text,
    normalize_summary,
    quote_code_token,
    wrap_text,
)
from changelog_entry_manager.configuration.models import default_changelog_configuration

CONFIGURATION = default_changelog_configuration()


@pytest.mark.parametrize(
    "title,expected",
    [
        pytest.param("[ML] Fix thing (#1234)", "Fix thing", id="bracketed area tag and pr reference"),
        pytest.param("[ml] add feature X (#99)", "Add feature X", id="lowercase tag and capitalization"),
        pytest.param("docs: Update the guide", "Update the guide", id="colon area tag"),
        pytest.param("SQL: Fix null handling", "Fix null handling", id="uppercase colon area tag"),
        pytest.param("#123: Fix flaky test", "Fix flaky test", id="leading issue number"),
        pytest.param("Fix thing (#1) (#2)", "Fix thing", id="several pr references"),
        pytest.param("Fix thing.", "Fix thing", id="trailing period dropped"),
        pytest.param("Add getFieldMapping API", "Add `getFieldMapping` API", id="camel case quoted"),
        pytest.param("Deprecate index.number_of_replicas", "Deprecate `index.number_of_replicas`", id="dotted identifier quoted"),
        pytest.param("[Search] Fix thing", "[Search] Fix thing", id="unknown area tag kept"),
        pytest.param("", "", id="empty title"),
        pytest.param("[ML] (#12)", "", id="nothing left"),
    ],
)
def test_normalize_summary(title: str, expected: str) -> None:
    """Test that pull request titles are turned into changelog summaries."""
    assert normalize_summary(title, CONFIGURATION) == expected


def test_normalize_summary_none() -> None:
    """Test that a missing title yields an empty summary."""
    assert normalize_summary(None, CONFIGURATION) == ""


@pytest.mark.parametrize(
    "token,expected",
    [
        pytest.param("camelCase", "`camelCase`", id="camel case"),
        pytest.param("snake_case", "`snake_case`", id="snake case"),
        pytest.param("index.mode", "`index.mode`", id="dotted"),
        pytest.param("Search", "Search", id="plain word"),
        pytest.param("API", "API", id="acronym"),
    ],
)
def test_quote_code_token(token: str, expected: str) -> None:
    """Test that identifiers are quoted as code."""
    assert quote_code_token(token) == expected


def test_wrap_text_wraps_long_lines() -> None:
    """Test that long lines are wrapped at 72 columns without splitting words."""
    text = " ".join(["word"] * 30)
    wrapped = wrap_text(text)
    assert all(len(line) <= 72 for line in wrapped.splitlines())
    assert wrapped.replace("\n", " ") == text


def test_wrap_text_keeps_short_lines_and_breaks() -> None:
    """Test that existing line breaks and short lines are kept as they are."""
    text = "First line\n\nSecond line"
    assert wrap_text(text) == text


def test_wrap_text_keeps_long_words() -> None:
    """Test that words longer than the width are never split."""
    long_word = "x" * 100
    assert wrap_text(f"see {long_word}") == f"see\n{long_word}"


def test_wrap_text_keeps_tabs() -> None:
    """Test that tabs in reflowed lines are kept rather than expanded to spaces."""
    line = "\tTabbed line " + " ".join(["word"] * 20)
    wrapped = wrap_text(line)
    assert wrapped.startswith("\tTabbed line word")
    assert "        " not in wrapped
    assert wrapped.replace("\n", " ") == line


@pytest.mark.parametrize("text", [None, ""])
def test_wrap_text_empty(text: str | None) -> None:
    """Test that empty text wraps to an empty string."""
    assert wrap_text(text) == ""


@pytest.mark.parametrize(
    "body,expected",
    [
        pytest.param("Fixes #42 and owner/repo/issues/99", frozenset({42, 99}), id="both reference forms"),
        pytest.param("Relates to #1, #2 and #1", frozenset({1, 2}), id="duplicates collapse"),
        pytest.param("See other/repo/issues/7", frozenset(), id="other repository ignored"),
        pytest.param("See evilowner/repo/issues/9", frozenset(), id="longer owner name ignored"),
        pytest.param("See https://github.com/owner/repo/issues/3", frozenset({3}), id="issue URL"),
        pytest.param("No references", frozenset(), id="no references"),
        pytest.param("", frozenset(), id="empty body"),
        pytest.param(None, frozenset(), id="missing body"),
    ],
)
def test_extract_issue_references(body: str | None, expected: frozenset[int]) -> None:
    """Test that issue references are extracted for the pull request's repository."""
    assert extract_issue_references(body, "owner/repo") == expected


def test_normalize_pull_request_text() -> None:
    """Test that summary, body and issues are derived together."""
    facts = PullRequestFacts(
        number=100,
        title="[ml] add feature X (#99)",
        body="Closes #5",
        labels=frozenset(),
        repository="owner/repo",
    )
    text = normalize_pull_request_text(facts, CONFIGURATION)
    assert text.summary == "Add feature X"
    assert text.body == "Closes #5"
    assert text.issues == frozenset({5})
