"""Release notes generation module."""

from .generator import (
    AreaGroup,
    ReleaseNotesSection,
    group_records,
    load_changelog_records_for_version,
    render_release_notes,
)

__all__ = [
    "AreaGroup",
    "ReleaseNotesSection",
    "group_records",
    "load_changelog_records_for_version",
    "render_release_notes",
]
