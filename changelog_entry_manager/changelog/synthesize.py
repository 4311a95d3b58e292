"""Builds a brand-new changelog entry for a pull request."""

import structlog

from changelog_entry_manager.changelog.facts import PullRequestFacts
from changelog_entry_manager.changelog.labels import LabelClassification
from changelog_entry_manager.changelog.text import NormalizedText
from changelog_entry_manager.schemas.changelog import BreakingModel, ChangelogRecord, DeprecationModel, HighlightModel
from changelog_entry_manager.utils.constants import BREAKING_IMPACT_PLACEHOLDER

logger: structlog.stdlib.BoundLogger = structlog.get_logger(__name__)


def build_highlight(text: NormalizedText) -> HighlightModel:
    """Build a release highlight block from the pull request text."""
    return HighlightModel(title=text.summary, body=text.body or None)


def build_breaking(classification: LabelClassification, text: NormalizedText) -> BreakingModel:
    """Build a breaking change block from the pull request text.

    The impact cannot be derived from the pull request, so a placeholder asks
    the author to describe it. `notable` controls whether the breaking change
    is listed in the notable section; release highlights are a good guide.
    """
    return BreakingModel(
        area=classification.area,
        title=text.summary,
        details=text.body or None,
        impact=BREAKING_IMPACT_PLACEHOLDER,
        notable=classification.highlight,
    )


def build_deprecation(classification: LabelClassification, text: NormalizedText) -> DeprecationModel:
    """Build a deprecation block from the pull request text."""
    return DeprecationModel(area=classification.area, title=text.summary, body=text.body or None)


def synthesize_changelog_record(facts: PullRequestFacts, classification: LabelClassification, text: NormalizedText) -> ChangelogRecord:
    """Create a new changelog entry for a pull request that does not have one yet."""
    record = ChangelogRecord(
        pr=facts.number,
        issues=set(text.issues),
        area=classification.area,
        type=classification.type,
        summary=text.summary,
        highlight=build_highlight(text) if classification.highlight else None,
        breaking=build_breaking(classification, text) if classification.breaking else None,
        deprecation=build_deprecation(classification, text) if classification.deprecation else None,
        versions=set(classification.versions),
    )
    logger.info(
        "Created changelog entry",
        pr_number=record.pr,
        type=record.type,
        area=record.area,
        versions=sorted(record.versions),
    )
    return record
