"""Pydantic schema for the pull request event payload sent by GitHub."""

from pydantic import BaseModel


class LabelModel(BaseModel):
    """Pydantic model for a GitHub label."""

    name: str


class RepositoryModel(BaseModel):
    """Pydantic model for the repository a pull request head lives in."""

    full_name: str


class UserModel(BaseModel):
    """Pydantic model for the GitHub user who opened a pull request."""

    login: str


class HeadModel(BaseModel):
    """Pydantic model for the head of a pull request."""

    repo: RepositoryModel


class PullRequestModel(BaseModel):
    """Pydantic model for the pull request object of an event payload."""

    number: int | None = None
    title: str
    body: str | None = None
    labels: list[LabelModel] = []
    head: HeadModel
    user: UserModel | None = None
    locked: bool = False
    state: str = "open"
    draft: bool = False


class PullRequestEventModel(BaseModel):
    """Pydantic model for a 'pull_request' event payload."""

    number: int | None = None
    pull_request: PullRequestModel
