"""Contains exceptions raised when loading application configuration."""

from changelog_entry_manager.changelog.exceptions import ChangelogError


class ChangelogConfigurationError(ChangelogError):
    """Raised when a changelog configuration file is invalid."""

    pass


class GitHubTokenUndefinedError(ChangelogError):
    """Raised when no usable GitHub token can be found."""

    pass


class GitHubRefError(ChangelogError):
    """Raised when GITHUB_REF does not identify a pull request."""

    def __init__(self, github_ref: str | None) -> None:
        """Initializes the exception with the rejected reference."""
        if github_ref is None:
            message = "GITHUB_REF not defined in environment"
        else:
            message = f"Expected GITHUB_REF to match regex [^refs/pull/\\d+/merge$] but was [{github_ref}]"
        super().__init__(message)
        self.github_ref = github_ref
