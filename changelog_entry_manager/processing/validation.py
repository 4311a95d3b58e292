"""Validates changelog entries against the label taxonomy.

Comma-joined `type` and `area` values (used when a pull request spans several
types or teams) are valid when every component belongs to the taxonomy.
"""

from pathlib import Path

import structlog

from changelog_entry_manager.changelog.exceptions import ChangelogRecordLoadError, ChangelogTaxonomyError
from changelog_entry_manager.configuration.models import ChangelogConfiguration
from changelog_entry_manager.schemas.changelog import ChangelogRecord
from changelog_entry_manager.utils.yaml import list_changelog_files, load_changelog_record

logger: structlog.stdlib.BoundLogger = structlog.get_logger(__name__)


def split_joined_value(value: str) -> list[str]:
    """Split a ', ' joined taxonomy value into its components."""
    return [part.strip() for part in value.split(",") if part.strip()]


def _unknown_components(value: str, known: frozenset[str]) -> list[str]:
    return [part for part in split_joined_value(value) if part not in known]


def find_record_problems(record: ChangelogRecord, configuration: ChangelogConfiguration) -> list[str]:
    """Return every taxonomy or completeness problem of a changelog entry."""
    problems: list[str] = []

    if not record.type:
        problems.append("type is required")
    else:
        for unknown in _unknown_components(record.type, configuration.change_types):
            problems.append(f"type [{unknown}] is not a known change type")

    if not record.area:
        problems.append("area is required")
    else:
        for unknown in _unknown_components(record.area, configuration.known_areas):
            problems.append(f"area [{unknown}] is not a known area")

    if not record.summary:
        problems.append("summary is required")

    if not record.is_complete:
        problems.append("at least one version is required")

    for block_name in ("breaking", "deprecation"):
        block = getattr(record, block_name)
        if block is not None and block.area:
            for unknown in _unknown_components(block.area, configuration.known_areas):
                problems.append(f"{block_name} area [{unknown}] is not a known area")

    return problems


def validate_changelog_record(record: ChangelogRecord, configuration: ChangelogConfiguration) -> None:
    """Validate a changelog entry.

    Raises:
        ChangelogTaxonomyError: If the entry uses values outside the taxonomy or has no versions.
    """
    problems = find_record_problems(record, configuration)
    if problems:
        raise ChangelogTaxonomyError(record.pr, problems)


def validate_changelog_directory(changelog_dir: Path, configuration: ChangelogConfiguration) -> dict[Path, list[str]]:
    """Validate every changelog file in a directory.

    Returns:
        A mapping of file path to problems, containing only files with problems.
    """
    results: dict[Path, list[str]] = {}
    changelog_files = list_changelog_files(changelog_dir)
    for path in changelog_files:
        try:
            record = load_changelog_record(path)
        except ChangelogRecordLoadError as exc:
            results[path] = [exc.reason]
            continue
        problems = find_record_problems(record, configuration)
        if path.stem != str(record.pr):
            problems.append(f"file name does not match pr number {record.pr}")
        if problems:
            results[path] = problems
    logger.info("Validated changelog files", file_count=len(changelog_files), invalid_file_count=len(results))
    return results
