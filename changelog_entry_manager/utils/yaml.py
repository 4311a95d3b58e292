"""Contains utility functions for reading and writing changelog YAML files."""

import io
from pathlib import Path
from typing import Any

import structlog
from pydantic import ValidationError
from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from changelog_entry_manager.changelog.exceptions import ChangelogRecordLoadError
from changelog_entry_manager.schemas.changelog import ChangelogRecord
from changelog_entry_manager.utils.constants import CHANGELOG_FILE_SUFFIX

logger: structlog.stdlib.BoundLogger = structlog.get_logger(__name__)

yaml = YAML(typ="safe")


def changelog_path(changelog_dir: Path, pr_number: int) -> Path:
    """Return the path of the changelog file for a pull request."""
    return changelog_dir / f"{pr_number}{CHANGELOG_FILE_SUFFIX}"


def list_changelog_files(changelog_dir: Path) -> list[Path]:
    """List every changelog file in a directory, sorted for deterministic processing."""
    yaml_files: list[Path] = []
    for extension in ["*.yaml", "*.yml"]:
        yaml_files.extend(changelog_dir.glob(extension))
    return sorted(yaml_files)


def load_yaml_file(path: Path) -> Any:
    """Loads a YAML file and returns its content."""
    with open(path, encoding="utf-8") as f:
        return yaml.load(f)


def load_changelog_record(path: Path) -> ChangelogRecord:
    """Load and validate a changelog entry from disk.

    Raises:
        ChangelogRecordLoadError: If the file is not valid YAML or not a valid entry.
    """
    try:
        data = load_yaml_file(path)
    except (OSError, YAMLError) as exc:
        logger.error("Failed to parse changelog file", path=str(path), error=str(exc))
        raise ChangelogRecordLoadError(path, str(exc)) from exc
    if not isinstance(data, dict):
        logger.error("Changelog file is not a mapping", path=str(path))
        raise ChangelogRecordLoadError(path, "changelog file must contain a mapping")
    try:
        return ChangelogRecord.model_validate(data)
    except ValidationError as exc:
        logger.error("Changelog file failed validation", path=str(path), error=exc.errors())
        raise ChangelogRecordLoadError(path, str(exc)) from exc


def load_existing_changelog_record(changelog_dir: Path, pr_number: int) -> ChangelogRecord | None:
    """Load the changelog entry for a pull request, or None if there is none yet."""
    path = changelog_path(changelog_dir, pr_number)
    if not path.exists():
        return None
    return load_changelog_record(path)


def create_yaml_dumper() -> YAML:
    """Creates a YAML object for dumping changelog entries with multiline string support."""
    yaml_dumper = YAML()
    yaml_dumper.default_flow_style = False
    yaml_dumper.explicit_start = False
    yaml_dumper.indent(mapping=2, sequence=4, offset=2)
    yaml_dumper.width = 4096  # Prevent line wrapping for long lines

    def represent_str(dumper: Any, data: str) -> Any:
        """Custom string representer that uses literal scalar style for multiline strings."""
        if "\n" in data:
            return dumper.represent_scalar("tag:yaml.org,2002:str", data, style="|")
        return dumper.represent_scalar("tag:yaml.org,2002:str", data)

    yaml_dumper.representer.add_representer(str, represent_str)

    return yaml_dumper


def dump_changelog_record(record: ChangelogRecord) -> str:
    """Serialize a changelog entry to YAML, omitting undetermined fields."""
    stream = io.StringIO()
    create_yaml_dumper().dump(record.to_document(), stream)
    return stream.getvalue()


def write_changelog_record(record: ChangelogRecord, path: Path) -> None:
    """Write a changelog entry to disk, creating parent directories as needed."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(dump_changelog_record(record), encoding="utf-8")
    logger.info("Wrote changelog entry", path=str(path), pr_number=record.pr)
