"""Merges fresh pull request facts into an existing, possibly hand-edited, changelog entry."""

from dataclasses import dataclass
from typing import Any

import structlog

from changelog_entry_manager.changelog.labels import LabelClassification
from changelog_entry_manager.changelog.synthesize import build_breaking, build_deprecation, build_highlight
from changelog_entry_manager.changelog.text import NormalizedText
from changelog_entry_manager.schemas.changelog import ChangelogRecord

logger: structlog.stdlib.BoundLogger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class ReconciliationResult:
    """The reconciled entry and the names of the fields that changed."""

    record: ChangelogRecord
    changed_fields: tuple[str, ...]

    @property
    def changed(self) -> bool:
        """Whether reconciliation changed anything."""
        return bool(self.changed_fields)


def reconcile_changelog_record(
    existing: ChangelogRecord, classification: LabelClassification, text: NormalizedText
) -> ReconciliationResult:
    """Update an existing changelog entry from the current state of its pull request.

    Only some fields are updated, since the author may have edited the file:

    - `type`, `versions` and `issues` always track the current labels and body.
    - `area` and `summary` are only filled in when missing. A PR may be labelled
      for more than one team to get a broader review, in which case the author
      picks the most relevant area and it must not be overwritten.
    - highlight, breaking and deprecation blocks are only added when the
      corresponding marker is set and the block is absent. Existing blocks are
      never touched or removed.

    The existing entry is not modified; applying the result again with the
    same inputs changes nothing.
    """
    updates: dict[str, Any] = {}

    if existing.type != classification.type:
        updates["type"] = classification.type
    if existing.versions != classification.versions:
        updates["versions"] = set(classification.versions)
    if existing.issues != text.issues:
        updates["issues"] = set(text.issues)

    if existing.area is None and classification.area is not None:
        updates["area"] = classification.area
    if existing.summary is None and text.summary:
        updates["summary"] = text.summary

    if classification.highlight and existing.highlight is None:
        updates["highlight"] = build_highlight(text)
    if classification.breaking and existing.breaking is None:
        updates["breaking"] = build_breaking(classification, text)
    if classification.deprecation and existing.deprecation is None:
        updates["deprecation"] = build_deprecation(classification, text)

    if not updates:
        logger.info("Changelog entry is up to date", pr_number=existing.pr)
        return ReconciliationResult(record=existing, changed_fields=())

    changed_fields = tuple(field for field in ChangelogRecord.model_fields if field in updates)
    logger.info("Updating changelog entry", pr_number=existing.pr, changed_fields=list(changed_fields))
    # model_copy skips validation, so rebuild the record to keep field types intact.
    record = ChangelogRecord.model_validate({**dict(existing), **updates})
    return ReconciliationResult(record=record, changed_fields=changed_fields)
