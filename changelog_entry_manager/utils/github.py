"""Contains utility functions for GitHub interactions."""

from changelog_entry_manager.configuration.exceptions import GitHubRefError
from changelog_entry_manager.utils.constants import GITHUB_REF_PATTERN


def split_repository(repo: str | None) -> tuple[str, str]:
    """Splits an 'owner/repo' string into owner and repository."""
    if repo is None:
        raise ValueError("A repository in the format 'owner/repo' is required.")
    repo = repo.strip().strip("/")
    parts = repo.split("/")
    if len(parts) != 2 or not all(parts):
        raise ValueError("Repository must be in the format 'owner/repo' with no leading/trailing slashes or extra parts.")
    owner, repository = parts
    return owner, repository


def get_pr_number_from_github_ref(github_ref: str | None) -> int:
    """Extract the pull request number from a GITHUB_REF such as 'refs/pull/123/merge'."""
    if github_ref is None:
        raise GitHubRefError(None)
    match = GITHUB_REF_PATTERN.match(github_ref)
    if match is None:
        raise GitHubRefError(github_ref)
    return int(match.group(1))
