"""Pytest configuration for integration tests."""

import json
from pathlib import Path
from typing import Any, Callable, Generator

import pytest
import structlog

ENVIRONMENT_VARIABLES = [
    "CHANGELOG_CONFIG",
    "CHANGELOG_DIR",
    "GITHUB_EVENT_PATH",
    "GITHUB_REF",
    "GITHUB_REPOSITORY",
    "GITHUB_TEAM",
    "GITHUB_TEAM_ORG",
    "GITHUB_TOKEN",
    "GITHUB_TOKEN_FILE",
]


@pytest.fixture(autouse=True)
def isolate_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep GitHub Actions and changelog environment variables out of CLI invocations."""
    for name in ENVIRONMENT_VARIABLES:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture(autouse=True)
def reset_structlog() -> Generator[None, None, None]:
    """Undo the logging configuration applied by each CLI invocation."""
    yield
    structlog.reset_defaults()


@pytest.fixture
def write_event_payload(tmp_path: Path) -> Callable[..., Path]:
    """Return a function that writes a 'pull_request' event payload and returns its path."""

    def write(labels: list[str], number: int = 100, draft: bool = False) -> Path:
        payload: dict[str, Any] = {
            "number": number,
            "pull_request": {
                "title": "[ml] add feature X (#99)",
                "body": "Closes #5",
                "labels": [{"name": label} for label in labels],
                "head": {"repo": {"full_name": "owner/repo"}},
                "draft": draft,
            },
        }
        path = tmp_path / "event.json"
        path.write_text(json.dumps(payload))
        return path

    return write
