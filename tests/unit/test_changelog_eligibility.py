"""Unit tests for the changelog.eligibility module."""

from dataclasses import replace

import pytest

from changelog_entry_manager.changelog.eligibility import check_eligibility, is_eligible
from changelog_entry_manager.changelog.facts import PullRequestFacts
from changelog_entry_manager.configuration.models import ChangelogConfiguration, default_changelog_configuration

CONFIGURATION = default_changelog_configuration()

ELIGIBLE_FACTS = PullRequestFacts(
    number=100,
    title="Fix thing",
    body="",
    labels=frozenset({">bug", ":Search/Search", "v8.1.0"}),
    repository="owner/repo",
)


def test_eligible_pull_request() -> None:
    """Test that an open, fully labelled pull request is eligible."""
    result = check_eligibility(ELIGIBLE_FACTS, CONFIGURATION)
    assert result.eligible is True
    assert result.reasons == ()
    assert is_eligible(ELIGIBLE_FACTS, CONFIGURATION) is True


@pytest.mark.parametrize(
    "overrides,expected_reason",
    [
        pytest.param({"draft": True}, "Pull request is a draft", id="draft"),
        pytest.param({"locked": True}, "Pull request is locked", id="locked"),
        pytest.param({"closed": True}, "Pull request is closed", id="closed"),
        pytest.param(
            {"labels": ELIGIBLE_FACTS.labels | {">non-issue"}},
            "Pull request is labelled [>non-issue]",
            id="exclusion label",
        ),
        pytest.param(
            {"labels": frozenset({">bug", ":Search/Search"})},
            "At least one version label is required",
            id="no version label",
        ),
    ],
)
def test_ineligible_pull_request(overrides: dict, expected_reason: str) -> None:
    """Test that each reason to skip a pull request is reported."""
    result = check_eligibility(replace(ELIGIBLE_FACTS, **overrides), CONFIGURATION)
    assert result.eligible is False
    assert expected_reason in result.reasons


def test_ineligible_collects_every_reason() -> None:
    """Test that all reasons are reported, not just the first one."""
    facts = replace(ELIGIBLE_FACTS, draft=True, labels=frozenset({"WIP"}))
    result = check_eligibility(facts, CONFIGURATION)
    assert result.reasons == (
        "Pull request is a draft",
        "Pull request is labelled [WIP]",
        "At least one version label is required",
        "At least one team label (starting with ':') is required",
        "At least one change type label (starting with '>') is required",
    )


def test_exclusion_labels_from_configuration() -> None:
    """Test that exclusion labels come from the configuration passed in."""
    configuration = ChangelogConfiguration(exclusion_labels=frozenset({">bug"}))
    assert is_eligible(ELIGIBLE_FACTS, configuration) is False
    labels = frozenset({">enhancement", ">non-issue", ":Search/Search", "v8.1.0"})
    assert is_eligible(replace(ELIGIBLE_FACTS, labels=labels), configuration) is True
