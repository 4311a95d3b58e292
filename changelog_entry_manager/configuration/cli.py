"""Defines the Command Line Interface (CLI) using Typer."""

import asyncio
import logging
import sys
from pathlib import Path

import structlog
import typer
from dotenv import load_dotenv
from typer import Argument, Option
from typing_extensions import Annotated

from changelog_entry_manager.changelog.exceptions import ChangelogError
from changelog_entry_manager.changelog.facts import extract_pull_request_facts
from changelog_entry_manager.configuration.env import settings
from changelog_entry_manager.configuration.loader import load_changelog_configuration
from changelog_entry_manager.configuration.models import ChangelogConfiguration
from changelog_entry_manager.github.adapter import GitHubKitAdapter
from changelog_entry_manager.github.client import resolve_github_token
from changelog_entry_manager.processing.labels_check import check_pull_request_labels
from changelog_entry_manager.processing.validation import validate_changelog_directory
from changelog_entry_manager.processing.workflow_runner import (
    load_event_payload,
    run_generate_changelog_entry,
    run_generate_changelog_entry_from_github,
)
from changelog_entry_manager.release_notes import load_changelog_records_for_version, render_release_notes
from changelog_entry_manager.utils.github import get_pr_number_from_github_ref

load_dotenv()

typer_app = typer.Typer(pretty_exceptions_show_locals=False)


def configure_logging(debug: bool) -> None:
    """Configure structlog to emit events at INFO level, or DEBUG when debugging."""
    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(logging.DEBUG if debug else logging.INFO),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=False,
    )


def load_configuration_or_exit(config_path: Path | None) -> ChangelogConfiguration:
    """Load the changelog configuration, exiting with an error message when it is invalid."""
    try:
        return load_changelog_configuration(config_path)
    except (ChangelogError, FileNotFoundError) as exc:
        typer.echo(f"Error loading changelog configuration: {exc}", err=True)
        raise typer.Exit(1) from exc


@typer_app.callback()
def main_callback(
    debug: Annotated[bool, Option(envvar="DEBUG", help="Enable debug mode.")] = settings.DEBUG,
) -> None:
    """Create and maintain changelog entries for pull requests."""
    configure_logging(debug)


@typer_app.command(name="generate-entry")
def generate_entry_cli(
    event_payload: Annotated[
        Path | None, Option(envvar="GITHUB_EVENT_PATH", help="Path to the pull request event payload (JSON).")
    ] = settings.GITHUB_EVENT_PATH,
    changelog_dir: Annotated[Path, Option(envvar="CHANGELOG_DIR", help="Directory holding changelog YAML files.")] = settings.CHANGELOG_DIR,
    config: Annotated[Path | None, Option(envvar="CHANGELOG_CONFIG", help="Path to a changelog configuration YAML file.")] = settings.CHANGELOG_CONFIG,
    dry_run: Annotated[bool, Option(help="Report the decision without writing any file.")] = False,
) -> None:
    """Create or update the changelog entry for the pull request in an event payload."""
    if event_payload is None:
        typer.echo("No event payload given. Pass --event-payload or set GITHUB_EVENT_PATH.", err=True)
        raise typer.Exit(1)
    configuration = load_configuration_or_exit(config)

    try:
        payload = load_event_payload(event_payload)
        result = run_generate_changelog_entry(payload, changelog_dir, configuration, dry_run=dry_run)
    except (ChangelogError, FileNotFoundError) as exc:
        typer.echo(f"Error generating changelog entry: {exc}", err=True)
        raise typer.Exit(1) from exc

    typer.echo(f"Decision: {result.decision.value}")
    for reason in result.reasons:
        typer.echo(f"  - {reason}")
    if result.changed_fields:
        typer.echo(f"Changed fields: {', '.join(result.changed_fields)}")


@typer_app.command(name="check-labels")
def check_labels_cli(
    event_payload: Annotated[
        Path | None, Option(envvar="GITHUB_EVENT_PATH", help="Path to the pull request event payload (JSON).")
    ] = settings.GITHUB_EVENT_PATH,
) -> None:
    """Check that a pull request carries version, team and change type labels."""
    if event_payload is None:
        typer.echo("No event payload given. Pass --event-payload or set GITHUB_EVENT_PATH.", err=True)
        raise typer.Exit(1)

    try:
        facts = extract_pull_request_facts(load_event_payload(event_payload))
    except (ChangelogError, FileNotFoundError) as exc:
        typer.echo(f"Error reading event payload: {exc}", err=True)
        raise typer.Exit(1) from exc

    result = check_pull_request_labels(facts)
    if result.skipped:
        typer.echo(f"Skipping label check for PR #{result.pr_number}")
        return
    for label in result.labels_to_add:
        typer.echo(f"Suggested label: {label}")
    if result.problems:
        typer.echo(result.format_problems(), err=True)
        raise typer.Exit(1)
    typer.echo(f"Labels of PR #{result.pr_number} are valid")


@typer_app.command(name="validate")
def validate_cli(
    changelog_dir: Annotated[Path, Option(envvar="CHANGELOG_DIR", help="Directory holding changelog YAML files.")] = settings.CHANGELOG_DIR,
    config: Annotated[Path | None, Option(envvar="CHANGELOG_CONFIG", help="Path to a changelog configuration YAML file.")] = settings.CHANGELOG_CONFIG,
) -> None:
    """Validate every changelog file in a directory."""
    if not changelog_dir.is_dir():
        typer.echo(f"Changelog directory not found: {changelog_dir.absolute()}", err=True)
        raise typer.Exit(1)
    configuration = load_configuration_or_exit(config)

    problems = validate_changelog_directory(changelog_dir, configuration)
    if problems:
        for path, path_problems in problems.items():
            typer.echo(f"{path}:", err=True)
            for problem in path_problems:
                typer.echo(f"  - {problem}", err=True)
        typer.echo(f"Found problems in {len(problems)} changelog file(s)", err=True)
        raise typer.Exit(1)
    typer.echo(f"All changelog files in {changelog_dir} are valid")


@typer_app.command(name="release-notes")
def release_notes_cli(
    version: Annotated[str, Argument(help="Version to generate release notes for, e.g. 8.1.0.")],
    repository: Annotated[
        str | None, Option(envvar="GITHUB_REPOSITORY", help="Repository (owner/repo) that pull request links point at.")
    ] = settings.GITHUB_REPOSITORY,
    changelog_dir: Annotated[Path, Option(envvar="CHANGELOG_DIR", help="Directory holding changelog YAML files.")] = settings.CHANGELOG_DIR,
    output: Annotated[Path | None, Option(help="File to write the release notes to; defaults to stdout.")] = None,
) -> None:
    """Generate Markdown release notes for a version."""
    if repository is None:
        typer.echo("No repository given. Pass --repository or set GITHUB_REPOSITORY.", err=True)
        raise typer.Exit(1)
    if not changelog_dir.is_dir():
        typer.echo(f"Changelog directory not found: {changelog_dir.absolute()}", err=True)
        raise typer.Exit(1)

    try:
        records = load_changelog_records_for_version(changelog_dir, version)
    except ChangelogError as exc:
        typer.echo(f"Error loading changelog entries: {exc}", err=True)
        raise typer.Exit(1) from exc
    notes = render_release_notes(version, records, repository)

    if output is None:
        typer.echo(notes, nl=False)
        return
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(notes, encoding="utf-8")
    typer.echo(f"Wrote release notes for {len(records)} changelog entries to {output}")


# --- Commands that talk to the GitHub API for a repository ---
repo_app = typer.Typer(help="Repository-related commands")


def repo_callback(
    ctx: typer.Context,
    repo: Annotated[str, Argument(help="Repository name (owner/repo).")],
    github_api_url: Annotated[str, Option(envvar="GITHUB_API_URL", help="GitHub API URL.")] = settings.GITHUB_API_URL,
    github_token: Annotated[str | None, Option(envvar="GITHUB_TOKEN", help="GitHub Personal Access Token.")] = None,
    github_token_file: Annotated[Path | None, Option(envvar="GITHUB_TOKEN_FILE", help="File holding a GitHub Personal Access Token.")] = None,
) -> None:
    """Set the repository for the current context."""
    ctx.ensure_object(dict)
    ctx.obj["repo"] = repo
    ctx.obj["github_api_url"] = github_api_url
    try:
        ctx.obj["github_token"] = resolve_github_token(github_token, github_token_file)
    except ChangelogError as exc:
        typer.echo(f"Error resolving GitHub token: {exc}", err=True)
        raise typer.Exit(1) from exc


repo_app.callback()(repo_callback)


def resolve_pr_number_or_exit(pr_number: int | None, github_ref: str | None) -> int:
    """Use the given pull request number, or take it from GITHUB_REF."""
    if pr_number is not None:
        return pr_number
    try:
        return get_pr_number_from_github_ref(github_ref)
    except ChangelogError as exc:
        typer.echo(f"No pull request number given and {exc}", err=True)
        raise typer.Exit(1) from exc


@repo_app.command(name="generate-entry")
def repo_generate_entry_cli(
    ctx: typer.Context,
    pr_number: Annotated[int | None, Argument(help="Pull request number; defaults to the one in GITHUB_REF.")] = None,
    github_ref: Annotated[str | None, Option(envvar="GITHUB_REF", help="Git ref of the workflow run.")] = settings.GITHUB_REF,
    changelog_dir: Annotated[Path, Option(envvar="CHANGELOG_DIR", help="Directory holding changelog YAML files.")] = settings.CHANGELOG_DIR,
    config: Annotated[Path | None, Option(envvar="CHANGELOG_CONFIG", help="Path to a changelog configuration YAML file.")] = settings.CHANGELOG_CONFIG,
    dry_run: Annotated[bool, Option(help="Report the decision without writing any file.")] = False,
) -> None:
    """Fetch a pull request from GitHub and create or update its changelog entry."""
    repo: str = ctx.obj["repo"]
    github_api_url: str = ctx.obj["github_api_url"]
    github_token: str = ctx.obj["github_token"]
    number = resolve_pr_number_or_exit(pr_number, github_ref)
    configuration = load_configuration_or_exit(config)

    try:
        result = asyncio.run(
            run_generate_changelog_entry_from_github(
                repo=repo,
                pr_number=number,
                github_token=github_token,
                github_api_url=github_api_url,
                changelog_dir=changelog_dir,
                configuration=configuration,
                dry_run=dry_run,
            )
        )
    except (ChangelogError, ValueError) as exc:
        typer.echo(f"Error generating changelog entry for PR #{number}: {exc}", err=True)
        raise typer.Exit(1) from exc

    typer.echo(f"Decision: {result.decision.value}")
    for reason in result.reasons:
        typer.echo(f"  - {reason}")


@repo_app.command(name="check-labels")
def repo_check_labels_cli(
    ctx: typer.Context,
    pr_number: Annotated[int | None, Argument(help="Pull request number; defaults to the one in GITHUB_REF.")] = None,
    github_ref: Annotated[str | None, Option(envvar="GITHUB_REF", help="Git ref of the workflow run.")] = settings.GITHUB_REF,
    add_suggested: Annotated[bool, Option(help="Add suggested labels to the pull request.")] = False,
    team_org: Annotated[
        str | None, Option(envvar="GITHUB_TEAM_ORG", help="Organization of the team whose members are not contributors.")
    ] = settings.GITHUB_TEAM_ORG,
    team: Annotated[str | None, Option(envvar="GITHUB_TEAM", help="Slug of the team whose members are not contributors.")] = settings.GITHUB_TEAM,
) -> None:
    """Check the labels of a pull request fetched from GitHub.

    When a team is configured, pull requests from authors outside it get a
    suggested 'contributor' label.
    """
    repo: str = ctx.obj["repo"]
    github_api_url: str = ctx.obj["github_api_url"]
    github_token: str = ctx.obj["github_token"]
    number = resolve_pr_number_or_exit(pr_number, github_ref)

    async def check() -> bool:
        github_adapter = await GitHubKitAdapter.create(repo=repo, github_token=github_token, github_api_url=github_api_url)
        facts = extract_pull_request_facts(await github_adapter.get_pull_request_payload(number))
        author_is_team_member = True
        if team_org and team and facts.author:
            author_is_team_member = await github_adapter.is_member_of_team(team_org, team, facts.author)
        result = check_pull_request_labels(facts, author_is_team_member)
        if result.skipped:
            typer.echo(f"Skipping label check for PR #{number}")
            return True
        if result.labels_to_add:
            if add_suggested:
                await github_adapter.add_labels_to_pull_request(number, list(result.labels_to_add))
                typer.echo(f"Added labels: {', '.join(result.labels_to_add)}")
            else:
                typer.echo(f"Suggested labels: {', '.join(result.labels_to_add)}")
        if result.problems:
            typer.echo(result.format_problems(), err=True)
            return False
        typer.echo(f"Labels of PR #{number} are valid")
        return True

    try:
        valid = asyncio.run(check())
    except (ChangelogError, ValueError) as exc:
        typer.echo(f"Error checking labels of PR #{number}: {exc}", err=True)
        raise typer.Exit(1) from exc
    if not valid:
        raise typer.Exit(1)


# --- Register the repo_app as a sub-app of the main Typer app ---
typer_app.add_typer(repo_app, name="repo")


if __name__ == "__main__":
    typer_app()
