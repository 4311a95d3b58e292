"""Decides whether a pull request should have a changelog entry at all."""

from dataclasses import dataclass

import structlog

from changelog_entry_manager.changelog.facts import PullRequestFacts
from changelog_entry_manager.changelog.labels import find_label_issues
from changelog_entry_manager.configuration.models import ChangelogConfiguration

logger: structlog.stdlib.BoundLogger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class EligibilityResult:
    """Outcome of the eligibility check, with every reason a pull request was skipped."""

    eligible: bool
    reasons: tuple[str, ...] = ()


def check_eligibility(facts: PullRequestFacts, configuration: ChangelogConfiguration) -> EligibilityResult:
    """Check whether a pull request's current state warrants a changelog entry.

    Draft, locked and closed pull requests are skipped, as are pull requests
    carrying an exclusion label or labels that fail the well-formedness check.
    """
    reasons: list[str] = []
    if facts.draft:
        reasons.append("Pull request is a draft")
    if facts.locked:
        reasons.append("Pull request is locked")
    if facts.closed:
        reasons.append("Pull request is closed")
    for label in sorted(facts.labels & configuration.exclusion_labels):
        reasons.append(f"Pull request is labelled [{label}]")
    reasons.extend(find_label_issues(facts.labels))

    if reasons:
        logger.info("Pull request is not eligible for a changelog entry, skipping", pr_number=facts.number, reasons=reasons)
        return EligibilityResult(eligible=False, reasons=tuple(reasons))
    return EligibilityResult(eligible=True)


def is_eligible(facts: PullRequestFacts, configuration: ChangelogConfiguration) -> bool:
    """Predicate form of check_eligibility."""
    return check_eligibility(facts, configuration).eligible
