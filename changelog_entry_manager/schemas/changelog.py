"""Pydantic schema for a changelog entry YAML file."""

from typing import ClassVar

from pydantic import BaseModel, ConfigDict, Field, PositiveInt, computed_field, field_serializer

from changelog_entry_manager.changelog.anchors import generate_anchor
from changelog_entry_manager.utils.constants import CHANGELOG_SCHEMA_VERSION

_COMPUTED_ANCHORS = {"breaking": {"anchor"}, "deprecation": {"anchor"}}


class HighlightModel(BaseModel):
    """Pydantic model for the release highlight block of a changelog entry."""

    model_config = ConfigDict(frozen=True)

    notable: bool | None = None
    title: str
    body: str | None = None


class BreakingModel(BaseModel):
    """Pydantic model for the breaking change block of a changelog entry.

    The anchor is computed from the title; any anchor present in a loaded file
    is ignored.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    area: str | None = None
    title: str
    details: str | None = None
    impact: str | None = None
    notable: bool | None = None

    @computed_field  # type: ignore[prop-decorator]
    @property
    def anchor(self) -> str:
        """Anchor linking to this breaking change."""
        return generate_anchor(self.title)


class DeprecationModel(BaseModel):
    """Pydantic model for the deprecation block of a changelog entry."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    area: str | None = None
    title: str
    body: str | None = None

    @computed_field  # type: ignore[prop-decorator]
    @property
    def anchor(self) -> str:
        """Anchor linking to this deprecation."""
        return generate_anchor(self.title)


class ChangelogRecord(BaseModel):
    """Pydantic model for the changelog entry of a single pull request.

    Field order is the order in which fields are written to YAML. A field that
    is None has not been determined yet and is omitted from the file.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    schema_version: ClassVar[int] = CHANGELOG_SCHEMA_VERSION

    pr: PositiveInt
    issues: set[int] = Field(default_factory=set)
    area: str | None = None
    type: str | None = None
    summary: str | None = None
    highlight: HighlightModel | None = None
    breaking: BreakingModel | None = None
    deprecation: DeprecationModel | None = None
    versions: set[str] = Field(default_factory=set)

    @field_serializer("issues")
    def _serialize_issues(self, issues: set[int]) -> list[int]:
        return sorted(issues)

    @field_serializer("versions")
    def _serialize_versions(self, versions: set[str]) -> list[str]:
        return sorted(versions)

    @property
    def is_complete(self) -> bool:
        """Whether the entry names at least one version it applies to."""
        return bool(self.versions)

    def to_document(self) -> dict:
        """Return the entry as a plain dict, omitting undetermined fields and computed anchors."""
        return self.model_dump(mode="json", exclude_none=True, exclude=_COMPUTED_ANCHORS)
