"""Unit tests for GitHub token resolution and client construction."""

from pathlib import Path

import pytest
from githubkit import GitHub

from changelog_entry_manager.configuration.exceptions import GitHubTokenUndefinedError
from changelog_entry_manager.github.client import get_github_client, resolve_github_token

CLASSIC_TOKEN = "0123456789abcdef0123456789abcdef01234567"


def test_resolve_github_token_explicit(tmp_path: Path) -> None:
    """Test that an explicit token wins over the token file."""
    token_file = tmp_path / "github.token"
    token_file.write_text(CLASSIC_TOKEN)
    assert resolve_github_token("  explicit-token  ", token_file) == "explicit-token"


@pytest.mark.parametrize(
    "token",
    [
        pytest.param(CLASSIC_TOKEN, id="classic hex token"),
        pytest.param("ghp_" + "a" * 36, id="prefixed token"),
    ],
)
def test_resolve_github_token_from_file(tmp_path: Path, token: str) -> None:
    """Test that the token is read from the token file when none is given."""
    token_file = tmp_path / "github.token"
    token_file.write_text(f"{token}\n")
    assert resolve_github_token(None, token_file) == token


def test_resolve_github_token_blank_falls_back_to_file(tmp_path: Path) -> None:
    """Test that a blank token is treated as missing."""
    token_file = tmp_path / "github.token"
    token_file.write_text(CLASSIC_TOKEN)
    assert resolve_github_token("   ", token_file) == CLASSIC_TOKEN


def test_resolve_github_token_missing_file(tmp_path: Path) -> None:
    """Test that a missing token file is reported."""
    with pytest.raises(GitHubTokenUndefinedError, match="doesn't exist"):
        resolve_github_token(None, tmp_path / "github.token")


def test_resolve_github_token_invalid_file(tmp_path: Path) -> None:
    """Test that a token file with an invalid token is reported."""
    token_file = tmp_path / "github.token"
    token_file.write_text("not-a-token")
    with pytest.raises(GitHubTokenUndefinedError, match="Invalid GitHub token"):
        resolve_github_token(None, token_file)


@pytest.mark.asyncio
async def test_get_github_client() -> None:
    """Test that a token-authenticated client is built."""
    client = await get_github_client(CLASSIC_TOKEN, "https://api.github.com")
    assert isinstance(client, GitHub)


@pytest.mark.asyncio
async def test_get_github_client_requires_token() -> None:
    """Test that an empty token is rejected."""
    with pytest.raises(GitHubTokenUndefinedError):
        await get_github_client("", "https://api.github.com")
