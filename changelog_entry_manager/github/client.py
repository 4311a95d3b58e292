"""Sets up the authenticated githubkit client."""

from pathlib import Path
from typing import TypeAlias

import structlog
from githubkit import GitHub
from githubkit.auth import TokenAuthStrategy

from changelog_entry_manager.configuration.exceptions import GitHubTokenUndefinedError
from changelog_entry_manager.utils.constants import GITHUB_TOKEN_PATTERN

logger: structlog.stdlib.BoundLogger = structlog.get_logger(__name__)

GitHubClient: TypeAlias = GitHub[TokenAuthStrategy]

DEFAULT_GITHUB_TOKEN_FILE = Path.home() / ".config" / "changelog-entry-manager" / "github.token"


def resolve_github_token(github_token: str | None, github_token_file: Path | None = None) -> str:
    """Find the GitHub token to use.

    An explicit token (usually from the GITHUB_TOKEN environment variable)
    wins; otherwise the token is read from a token file.

    Raises:
        GitHubTokenUndefinedError: If no token is configured or the token file is invalid.
    """
    if github_token is not None and github_token.strip():
        logger.debug("Using GitHub token from configuration")
        return github_token.strip()

    token_path = github_token_file or DEFAULT_GITHUB_TOKEN_FILE
    logger.debug("Attempting to load GitHub token from file", path=str(token_path))
    if not token_path.exists():
        raise GitHubTokenUndefinedError(
            f"File {token_path} doesn't exist. Set GITHUB_TOKEN or generate a Personal Access Token at https://github.com/settings/tokens"
        )

    token = token_path.read_text(encoding="utf-8").strip()
    if not GITHUB_TOKEN_PATTERN.match(token):
        raise GitHubTokenUndefinedError(f"Invalid GitHub token in {token_path}")
    return token


async def get_github_client(github_token: str, github_api_url: str) -> GitHubClient:
    """Returns an authenticated GitHub client using a personal access token."""
    if not github_token:
        raise GitHubTokenUndefinedError("GitHub authentication requires a token.")
    # Disable HTTP caching to always get fresh label state
    return GitHub(auth=TokenAuthStrategy(github_token), base_url=github_api_url, http_cache=False)
