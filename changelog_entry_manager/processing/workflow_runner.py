"""Orchestrates generating changelog entries from pull request payloads."""

import json
import time
from pathlib import Path
from typing import Any

import structlog

from changelog_entry_manager.changelog.engine import ChangelogEntryResult, process_pull_request
from changelog_entry_manager.changelog.exceptions import PullRequestPayloadError
from changelog_entry_manager.changelog.facts import extract_pull_request_facts
from changelog_entry_manager.configuration.models import ChangelogConfiguration
from changelog_entry_manager.github.adapter import GitHubKitAdapter
from changelog_entry_manager.utils.yaml import changelog_path, load_existing_changelog_record, write_changelog_record

logger: structlog.stdlib.BoundLogger = structlog.get_logger(__name__)


def load_event_payload(event_payload_path: Path) -> dict[str, Any]:
    """Load a GitHub event payload from a JSON file.

    Raises:
        FileNotFoundError: If the path does not exist or is not a regular file.
        PullRequestPayloadError: If the file is not a JSON object.
    """
    if not event_payload_path.exists():
        raise FileNotFoundError(f"Invalid event payload [{event_payload_path}]: does not exist")
    if not event_payload_path.is_file():
        raise FileNotFoundError(f"Invalid event payload [{event_payload_path}]: not a regular file")
    try:
        payload = json.loads(event_payload_path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise PullRequestPayloadError("payload", f"not valid JSON: {exc}") from exc
    if not isinstance(payload, dict):
        raise PullRequestPayloadError("payload", "expected a JSON object")
    return payload


def run_generate_changelog_entry(
    payload: dict[str, Any],
    changelog_dir: Path,
    configuration: ChangelogConfiguration,
    dry_run: bool = False,
) -> ChangelogEntryResult:
    """Create or update the changelog file for the pull request described by a payload."""
    start_time = time.time()
    facts = extract_pull_request_facts(payload)
    existing = load_existing_changelog_record(changelog_dir, facts.number)
    result = process_pull_request(facts, existing, configuration)

    if result.needs_write and result.record is not None:
        path = changelog_path(changelog_dir, facts.number)
        if dry_run:
            logger.info("Dry run, not writing changelog entry", path=str(path), decision=result.decision.value)
        else:
            write_changelog_record(result.record, path)

    logger.info(
        "Processed pull request",
        pr_number=facts.number,
        decision=result.decision.value,
        changed_fields=list(result.changed_fields),
        duration=round(time.time() - start_time, 2),
    )
    return result


async def run_generate_changelog_entry_from_github(
    repo: str,
    pr_number: int,
    github_token: str,
    github_api_url: str,
    changelog_dir: Path,
    configuration: ChangelogConfiguration,
    dry_run: bool = False,
) -> ChangelogEntryResult:
    """Fetch a pull request from GitHub and create or update its changelog file."""
    github_adapter = await GitHubKitAdapter.create(repo=repo, github_token=github_token, github_api_url=github_api_url)
    payload = await github_adapter.get_pull_request_payload(pr_number)
    return run_generate_changelog_entry(payload, changelog_dir, configuration, dry_run=dry_run)
