"""Runs the full changelog entry pipeline for a single pull request."""

from dataclasses import dataclass
from enum import Enum

import structlog
from structlog.contextvars import bound_contextvars

from changelog_entry_manager.changelog.eligibility import check_eligibility
from changelog_entry_manager.changelog.facts import PullRequestFacts
from changelog_entry_manager.changelog.labels import classify_labels
from changelog_entry_manager.changelog.reconcile import reconcile_changelog_record
from changelog_entry_manager.changelog.synthesize import synthesize_changelog_record
from changelog_entry_manager.changelog.text import normalize_pull_request_text
from changelog_entry_manager.configuration.models import ChangelogConfiguration
from changelog_entry_manager.schemas.changelog import ChangelogRecord

logger: structlog.stdlib.BoundLogger = structlog.get_logger(__name__)


class ChangelogDecision(str, Enum):
    """What happened to the changelog entry of a pull request."""

    SKIP = "skip"
    CREATE = "create"
    UPDATE = "update"
    NOOP = "noop"


@dataclass(frozen=True)
class ChangelogEntryResult:
    """Result of processing a pull request.

    `record` is None only when the pull request was skipped and had no entry.
    """

    decision: ChangelogDecision
    record: ChangelogRecord | None
    reasons: tuple[str, ...] = ()
    changed_fields: tuple[str, ...] = ()

    @property
    def needs_write(self) -> bool:
        """Whether the entry must be persisted."""
        return self.decision in (ChangelogDecision.CREATE, ChangelogDecision.UPDATE)


def process_pull_request(
    facts: PullRequestFacts,
    existing: ChangelogRecord | None,
    configuration: ChangelogConfiguration,
) -> ChangelogEntryResult:
    """Create or reconcile the changelog entry of a pull request.

    Ineligible pull requests short-circuit without touching the existing entry.
    """
    with bound_contextvars(pr_number=facts.number):
        eligibility = check_eligibility(facts, configuration)
        if not eligibility.eligible:
            return ChangelogEntryResult(decision=ChangelogDecision.SKIP, record=existing, reasons=eligibility.reasons)

        classification = classify_labels(facts.labels, configuration)
        text = normalize_pull_request_text(facts, configuration)

        if existing is None:
            record = synthesize_changelog_record(facts, classification, text)
            return ChangelogEntryResult(decision=ChangelogDecision.CREATE, record=record, changed_fields=tuple(record.to_document()))

        if existing.pr != facts.number:
            logger.warning("Existing changelog entry belongs to a different pull request", entry_pr=existing.pr)

        reconciliation = reconcile_changelog_record(existing, classification, text)
        if not reconciliation.changed:
            return ChangelogEntryResult(decision=ChangelogDecision.NOOP, record=reconciliation.record)
        return ChangelogEntryResult(
            decision=ChangelogDecision.UPDATE,
            record=reconciliation.record,
            changed_fields=reconciliation.changed_fields,
        )
