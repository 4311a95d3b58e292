"""Custom exceptions for changelog entry handling."""

from pathlib import Path


class ChangelogError(Exception):
    """Base class for all errors raised by the changelog entry manager."""

    pass


class PullRequestPayloadError(ChangelogError):
    """Raised when a pull request payload cannot be turned into facts."""

    def __init__(self, field: str, reason: str) -> None:
        """Initializes the exception with the offending field and the reason it was rejected."""
        super().__init__(f"Invalid pull request payload field '{field}': {reason}")
        self.field = field
        self.reason = reason


class MissingPullRequestFieldError(PullRequestPayloadError):
    """Raised when a required pull request payload field is missing."""

    def __init__(self, field: str) -> None:
        """Initializes the exception with the name of the missing field."""
        super().__init__(field, "field is required")


class ChangelogTaxonomyError(ChangelogError):
    """Raised when a changelog record uses values outside the label taxonomy."""

    def __init__(self, pr: int, problems: list[str]) -> None:
        """Initializes the exception with the pull request number and every problem found."""
        super().__init__(f"Changelog entry for PR #{pr} is invalid: " + "; ".join(problems))
        self.pr = pr
        self.problems = problems


class ChangelogRecordLoadError(ChangelogError):
    """Raised when an existing changelog file cannot be parsed."""

    def __init__(self, path: Path, reason: str) -> None:
        """Initializes the exception with the file path and the parse failure."""
        super().__init__(f"Unable to load changelog entry {path}: {reason}")
        self.path = path
        self.reason = reason
