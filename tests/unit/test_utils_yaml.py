"""Unit tests for the utils.yaml module."""

from pathlib import Path

import pytest

from changelog_entry_manager.changelog.exceptions import ChangelogRecordLoadError
from changelog_entry_manager.schemas.changelog import BreakingModel, ChangelogRecord, HighlightModel
from changelog_entry_manager.utils.yaml import (
    changelog_path,
    dump_changelog_record,
    list_changelog_files,
    load_changelog_record,
    load_existing_changelog_record,
    write_changelog_record,
)


def test_changelog_path() -> None:
    """Test that changelog files are named after the pull request number."""
    assert changelog_path(Path("docs/changelog"), 1234) == Path("docs/changelog/1234.yaml")


def test_dump_changelog_record_field_order_and_omissions() -> None:
    """Test that fields are written in schema order, undetermined fields omitted and sets sorted."""
    record = ChangelogRecord(pr=100, issues={99, 5}, area="Search", type="bug", summary="Fix thing", versions={"8.1.0", "7.17.1"})
    assert dump_changelog_record(record) == (
        "pr: 100\n"
        "issues:\n"
        "  - 5\n"
        "  - 99\n"
        "area: Search\n"
        "type: bug\n"
        "summary: Fix thing\n"
        "versions:\n"
        "  - 7.17.1\n"
        "  - 8.1.0\n"
    )


def test_dump_changelog_record_multiline_literal_block() -> None:
    """Test that multi-line text is written as a literal block and anchors are not stored."""
    record = ChangelogRecord(
        pr=100,
        type="breaking",
        breaking=BreakingModel(title="Remove the thing", details="First line\nSecond line", notable=False),
        versions={"8.0.0"},
    )
    dumped = dump_changelog_record(record)
    assert "details: |-\n    First line\n    Second line\n" in dumped
    assert "anchor" not in dumped
    assert not dumped.startswith("---")


def test_write_and_load_changelog_record(tmp_path: Path) -> None:
    """Test that a written entry loads back equal, creating the directory as needed."""
    record = ChangelogRecord(
        pr=100,
        issues={5},
        area="Machine Learning",
        type="feature",
        summary="Add feature X",
        highlight=HighlightModel(title="Add feature X", body="Closes #5"),
        versions={"8.1.0"},
    )
    path = changelog_path(tmp_path / "docs" / "changelog", 100)
    write_changelog_record(record, path)
    assert path.exists()
    assert load_changelog_record(path) == record


def test_load_changelog_record_ignores_stored_anchor(tmp_path: Path) -> None:
    """Test that a stored anchor is ignored in favour of the title."""
    path = tmp_path / "7.yaml"
    path.write_text("pr: 7\ntype: deprecation\ndeprecation:\n  title: Deprecate the thing\n  anchor: old\nversions:\n  - 8.1.0\n")
    record = load_changelog_record(path)
    assert record.deprecation is not None
    assert record.deprecation.anchor == "deprecate-thing"


@pytest.mark.parametrize(
    "content",
    [
        pytest.param("pr: [unterminated\n", id="invalid yaml"),
        pytest.param("- just\n- a list\n", id="not a mapping"),
        pytest.param("pr: -4\n", id="invalid pr number"),
        pytest.param("type: bug\n", id="missing pr number"),
    ],
)
def test_load_changelog_record_invalid(tmp_path: Path, content: str) -> None:
    """Test that unparseable changelog files raise a load error naming the file."""
    path = tmp_path / "1.yaml"
    path.write_text(content)
    with pytest.raises(ChangelogRecordLoadError) as exc_info:
        load_changelog_record(path)
    assert exc_info.value.path == path


def test_load_existing_changelog_record_missing(tmp_path: Path) -> None:
    """Test that a pull request without a changelog file has no existing entry."""
    assert load_existing_changelog_record(tmp_path, 100) is None


def test_list_changelog_files(tmp_path: Path) -> None:
    """Test that only YAML files are listed, in sorted order."""
    for name in ["2.yaml", "1.yml", "notes.txt", "10.yaml"]:
        (tmp_path / name).write_text("pr: 1\n")
    assert [path.name for path in list_changelog_files(tmp_path)] == ["1.yml", "10.yaml", "2.yaml"]
