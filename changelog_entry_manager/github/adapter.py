"""GitHub client adapter for the githubkit library."""

from functools import wraps
from typing import Any, Awaitable, Callable, Self, TypeVar

import structlog
from githubkit.exception import RequestFailed

from changelog_entry_manager.changelog.exceptions import PullRequestPayloadError
from changelog_entry_manager.utils.github import split_repository

from .client import GitHubClient, get_github_client

logger = structlog.get_logger(__name__)

F = TypeVar("F", bound=Callable[..., Awaitable[Any]])


def handle_github_404(func: F) -> F:
    """Decorator to turn GitHub 404 Not Found errors into a payload error naming the missing pull request."""

    @wraps(func)
    async def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return await func(*args, **kwargs)
        except RequestFailed as exc:
            if exc.response.status_code == 404:
                logger.error(
                    "GitHub 404 Not Found",
                    function=func.__name__,
                    url=getattr(exc.response, "url", None),
                    status_code=404,
                )
                raise PullRequestPayloadError("number", f"pull request not found ({getattr(exc.response, 'url', None)})") from exc
            raise

    return wrapper  # type: ignore


class GitHubKitAdapter:
    """Fetches pull request data needed for changelog entries through githubkit."""

    def __init__(self, client: GitHubClient, owner: str, repo_name: str) -> None:
        """Initialize the GitHub client adapter with an already-initialized client."""
        self.client = client
        self.owner = owner
        self.repo_name = repo_name

    @property
    def full_name(self) -> str:
        """Repository in 'owner/repo' format."""
        return f"{self.owner}/{self.repo_name}"

    @classmethod
    async def create(cls, repo: str, github_token: str, github_api_url: str = "https://api.github.com") -> Self:
        """Create a new GitHub client adapter.

        Args:
            repo: Repository in 'owner/repo' format
            github_token: Personal access token
            github_api_url: GitHub API URL (defaults to https://api.github.com)

        Raises:
            ValueError: If the repository is not in 'owner/repo' format
        """
        owner, repo_name = split_repository(repo)
        logger.info(
            "Creating client for GitHub instance and repository",
            github_api_url=github_api_url,
            owner=owner,
            repo_name=repo_name,
        )
        client = await get_github_client(github_token=github_token, github_api_url=github_api_url)
        return cls(client, owner, repo_name)

    @handle_github_404
    async def get_pull_request_payload(self, pull_request_number: int) -> dict[str, Any]:
        """Fetch a pull request and return it in the shape of a 'pull_request' event payload."""
        response = await self.client.rest.pulls.async_get(owner=self.owner, repo=self.repo_name, pull_number=pull_request_number)
        pull_request: dict[str, Any] = response.json()
        logger.debug("Fetched pull request", pr_number=pull_request_number, title=pull_request.get("title"))
        return {"number": pull_request.get("number", pull_request_number), "pull_request": pull_request}

    @handle_github_404
    async def add_labels_to_pull_request(self, pull_request_number: int, labels: list[str]) -> None:
        """Add labels to a pull request (GitHub considers pull requests issues for label purposes)."""
        if not labels:
            return
        logger.info("Adding labels to pull request", pr_number=pull_request_number, labels=labels)
        await self.client.rest.issues.async_add_labels(
            owner=self.owner,
            repo=self.repo_name,
            issue_number=pull_request_number,
            labels=labels,
        )

    async def is_member_of_team(self, org: str, team_slug: str, username: str) -> bool:
        """Check whether a user is an active member of an organization team.

        GitHub answers 404 for users who are not members, which is reported as False.
        """
        try:
            response = await self.client.rest.teams.async_get_membership_for_user_in_org(
                org=org,
                team_slug=team_slug,
                username=username,
            )
        except RequestFailed as exc:
            if exc.response.status_code == 404:
                logger.debug("User is not a member of the team", org=org, team_slug=team_slug, username=username)
                return False
            raise
        membership: dict[str, Any] = response.json()
        is_member = membership.get("state") == "active"
        logger.debug("Checked team membership", org=org, team_slug=team_slug, username=username, is_member=is_member)
        return is_member
