"""Normalizes a raw pull request payload into an immutable set of facts."""

from dataclasses import dataclass
from typing import Any

import structlog
from pydantic import ValidationError

from changelog_entry_manager.changelog.exceptions import MissingPullRequestFieldError, PullRequestPayloadError
from changelog_entry_manager.schemas.pull_request import PullRequestEventModel

logger: structlog.stdlib.BoundLogger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class PullRequestFacts:
    """Everything the changelog engine needs to know about a pull request."""

    number: int
    title: str
    body: str
    labels: frozenset[str]
    repository: str
    draft: bool = False
    locked: bool = False
    closed: bool = False
    author: str | None = None


def _field_name(location: tuple[int | str, ...]) -> str:
    return ".".join(str(part) for part in location)


def extract_pull_request_facts(payload: dict[str, Any]) -> PullRequestFacts:
    """Extract pull request facts from a 'pull_request' event payload.

    A bare pull request object (as returned by the REST API) is accepted too
    and treated as the 'pull_request' member of an event. The pull request
    number is taken from the event, falling back to the pull request itself.

    Raises:
        MissingPullRequestFieldError: If a required field such as the title is absent.
        PullRequestPayloadError: If a field is present but malformed.
    """
    if not isinstance(payload, dict):
        raise PullRequestPayloadError("payload", f"expected a mapping, got {type(payload).__name__}")
    if "pull_request" not in payload and "title" in payload:
        payload = {"number": payload.get("number"), "pull_request": payload}

    try:
        event = PullRequestEventModel.model_validate(payload)
    except ValidationError as exc:
        error = exc.errors()[0]
        field = _field_name(error["loc"])
        logger.error("Pull request payload failed validation", field=field, error=error["msg"])
        if error["type"] == "missing":
            raise MissingPullRequestFieldError(field) from exc
        raise PullRequestPayloadError(field, error["msg"]) from exc

    pull_request = event.pull_request
    number = event.number if event.number is not None else pull_request.number
    if number is None:
        raise MissingPullRequestFieldError("number")
    if number <= 0:
        raise PullRequestPayloadError("number", "must be a positive integer")

    facts = PullRequestFacts(
        number=number,
        title=pull_request.title,
        body=pull_request.body or "",
        labels=frozenset(label.name for label in pull_request.labels),
        repository=pull_request.head.repo.full_name,
        draft=pull_request.draft,
        locked=pull_request.locked,
        closed=pull_request.state == "closed",
        author=pull_request.user.login if pull_request.user is not None else None,
    )
    logger.debug("Extracted pull request facts", pr_number=facts.number, labels=sorted(facts.labels))
    return facts
