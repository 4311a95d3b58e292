"""Checks that a pull request carries the labels a changelog entry depends on."""

from dataclasses import dataclass

import structlog

from changelog_entry_manager.changelog.facts import PullRequestFacts
from changelog_entry_manager.changelog.labels import find_label_issues
from changelog_entry_manager.utils.constants import CONTRIBUTOR_LABEL, DOCS_LABEL, RELEASE_HIGHLIGHT_LABEL

logger: structlog.stdlib.BoundLogger = structlog.get_logger(__name__)

LABEL_CHECK_EXCLUSION_LABELS = frozenset({"WIP"})
"""Labels that skip the label check entirely."""


@dataclass(frozen=True)
class LabelCheckResult:
    """Outcome of checking a pull request's labels."""

    pr_number: int
    skipped: bool
    problems: tuple[str, ...] = ()
    labels_to_add: tuple[str, ...] = ()

    def format_problems(self) -> str:
        """Format the problems as a message suitable for a CI log."""
        lines = [f"There are problems with PR #{self.pr_number}"]
        lines.extend(f"  - {problem}" for problem in self.problems)
        return "\n".join(lines)


def suggest_labels(labels: frozenset[str], author_is_team_member: bool = True) -> list[str]:
    """Suggest labels that should be added.

    Release highlights need documentation, and pull requests from authors outside
    the team are marked as contributions.
    """
    labels_to_add: list[str] = []
    if RELEASE_HIGHLIGHT_LABEL in labels and DOCS_LABEL not in labels:
        labels_to_add.append(DOCS_LABEL)
    if not author_is_team_member and CONTRIBUTOR_LABEL not in labels:
        labels_to_add.append(CONTRIBUTOR_LABEL)
    return labels_to_add


def check_pull_request_labels(facts: PullRequestFacts, author_is_team_member: bool = True) -> LabelCheckResult:
    """Check a pull request's labels, skipping drafts and work in progress."""
    if facts.draft:
        logger.info("Pull request is a draft, skipping label check", pr_number=facts.number)
        return LabelCheckResult(pr_number=facts.number, skipped=True)
    excluded_labels = sorted(facts.labels & LABEL_CHECK_EXCLUSION_LABELS)
    if excluded_labels:
        logger.info("Pull request has an exclusion label, skipping label check", pr_number=facts.number, labels=excluded_labels)
        return LabelCheckResult(pr_number=facts.number, skipped=True)

    result = LabelCheckResult(
        pr_number=facts.number,
        skipped=False,
        problems=tuple(find_label_issues(facts.labels)),
        labels_to_add=tuple(suggest_labels(facts.labels, author_is_team_member)),
    )
    if result.problems:
        logger.warning("Pull request has label problems", pr_number=facts.number, problems=list(result.problems))
    return result
