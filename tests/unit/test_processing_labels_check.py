"""Unit tests for the processing.labels_check module."""

from dataclasses import replace

import pytest

from changelog_entry_manager.changelog.facts import PullRequestFacts
from changelog_entry_manager.processing.labels_check import check_pull_request_labels, suggest_labels

FACTS = PullRequestFacts(
    number=42,
    title="Fix thing",
    body="",
    labels=frozenset({">bug", ":Search/Search", "v8.1.0"}),
    repository="owner/repo",
)


def test_check_pull_request_labels_valid() -> None:
    """Test that a fully labelled pull request passes the check."""
    result = check_pull_request_labels(FACTS)
    assert result.skipped is False
    assert result.problems == ()
    assert result.labels_to_add == ()


@pytest.mark.parametrize(
    "overrides",
    [
        pytest.param({"draft": True}, id="draft"),
        pytest.param({"labels": frozenset({"WIP"})}, id="work in progress"),
    ],
)
def test_check_pull_request_labels_skipped(overrides: dict) -> None:
    """Test that drafts and work in progress are not checked."""
    result = check_pull_request_labels(replace(FACTS, **overrides))
    assert result.skipped is True
    assert result.problems == ()


def test_check_pull_request_labels_problems() -> None:
    """Test that missing labels are reported and formatted for a CI log."""
    result = check_pull_request_labels(replace(FACTS, labels=frozenset({">bug"})))
    assert result.problems == (
        "At least one version label is required",
        "At least one team label (starting with ':') is required",
    )
    assert result.format_problems() == (
        "There are problems with PR #42\n"
        "  - At least one version label is required\n"
        "  - At least one team label (starting with ':') is required"
    )


@pytest.mark.parametrize(
    "labels,expected",
    [
        pytest.param({"release highlight"}, [">docs"], id="highlight without docs"),
        pytest.param({"release highlight", ">docs"}, [], id="highlight with docs"),
        pytest.param({">bug"}, [], id="no highlight"),
    ],
)
def test_suggest_labels(labels: set[str], expected: list[str]) -> None:
    """Test that release highlights are expected to carry the docs label."""
    assert suggest_labels(frozenset(labels)) == expected


def test_check_pull_request_labels_suggests_docs() -> None:
    """Test that the check suggests labels alongside any problems."""
    result = check_pull_request_labels(replace(FACTS, labels=FACTS.labels | {"release highlight"}))
    assert result.labels_to_add == (">docs",)
    assert result.problems == ()


@pytest.mark.parametrize(
    "labels,expected",
    [
        pytest.param({">bug"}, ["contributor"], id="outside author"),
        pytest.param({">bug", "contributor"}, [], id="already labelled"),
        pytest.param({"release highlight"}, [">docs", "contributor"], id="highlight from outside author"),
    ],
)
def test_suggest_labels_for_authors_outside_the_team(labels: set[str], expected: list[str]) -> None:
    """Test that pull requests from authors outside the team are marked as contributions."""
    assert suggest_labels(frozenset(labels), author_is_team_member=False) == expected


def test_check_pull_request_labels_suggests_contributor() -> None:
    """Test that the check suggests the contributor label for authors outside the team."""
    result = check_pull_request_labels(replace(FACTS, author="octocat"), author_is_team_member=False)
    assert result.labels_to_add == ("contributor",)
    assert result.problems == ()
