"""Generates Markdown release notes from the changelog entries of a version."""

from dataclasses import dataclass
from pathlib import Path

import structlog

from changelog_entry_manager.processing.validation import split_joined_value
from changelog_entry_manager.schemas.changelog import ChangelogRecord
from changelog_entry_manager.utils.templates import TEMPLATES_DIR, construct_jinja2_template_from_file, render_template
from changelog_entry_manager.utils.yaml import list_changelog_files, load_changelog_record

logger: structlog.stdlib.BoundLogger = structlog.get_logger(__name__)

RELEASE_NOTES_TEMPLATE = TEMPLATES_DIR / "release_notes.md.j2"

# Order in which change types are listed; breaking changes and deprecations
# get dedicated sections of their own.
TYPE_HEADINGS = {
    "feature": "New features",
    "new-aggregation": "New aggregations",
    "enhancement": "Enhancements",
    "bug": "Bug fixes",
    "regression": "Regressions",
    "security": "Security updates",
    "upgrade": "Upgrades",
    "known-issue": "Known issues",
}


@dataclass
class AreaGroup:
    """Changelog entries of one area within a release notes section."""

    name: str
    entries: list[ChangelogRecord]


@dataclass
class ReleaseNotesSection:
    """A release notes section listing every entry of one change type."""

    heading: str
    areas: list[AreaGroup]


def load_changelog_records_for_version(changelog_dir: Path, version: str) -> list[ChangelogRecord]:
    """Load every changelog entry that applies to a version, sorted by pull request number."""
    version = version.removeprefix("v")
    records = [load_changelog_record(path) for path in list_changelog_files(changelog_dir)]
    matching = sorted((record for record in records if version in record.versions), key=lambda record: record.pr)
    logger.info("Loaded changelog entries for version", version=version, total=len(records), matching=len(matching))
    return matching


def group_records(records: list[ChangelogRecord]) -> list[ReleaseNotesSection]:
    """Group entries into sections by change type, then by area.

    An entry with several types or areas is listed under each of them.
    """
    sections: list[ReleaseNotesSection] = []
    for change_type, heading in TYPE_HEADINGS.items():
        by_area: dict[str, list[ChangelogRecord]] = {}
        for record in records:
            if change_type not in split_joined_value(record.type or ""):
                continue
            for area in split_joined_value(record.area or "") or ["Other"]:
                by_area.setdefault(area, []).append(record)
        if by_area:
            areas = [AreaGroup(name=area, entries=by_area[area]) for area in sorted(by_area)]
            sections.append(ReleaseNotesSection(heading=heading, areas=areas))
    return sections


def render_release_notes(version: str, records: list[ChangelogRecord], repository: str) -> str:
    """Render Markdown release notes for a version from its changelog entries."""
    template = construct_jinja2_template_from_file(RELEASE_NOTES_TEMPLATE)
    context = {
        "version": version.removeprefix("v"),
        "highlights": [record.highlight for record in records if record.highlight is not None],
        "breaking_changes": [record for record in records if record.breaking is not None],
        "deprecations": [record for record in records if record.deprecation is not None],
        "sections": group_records(records),
        "pull_url": f"https://github.com/{repository}/pull",
        "issues_url": f"https://github.com/{repository}/issues",
    }
    return render_template(template, context)
