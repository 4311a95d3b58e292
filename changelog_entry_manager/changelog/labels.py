"""Parses pull request labels and classifies them into changelog taxonomy dimensions.

Labels follow prefix conventions: '>' marks a change type, ':' marks a team or
area, labels such as 'v8.1.0' mark the versions a change ships in, and the
literal 'release highlight' label marks a highlight. Parsing turns each raw
label into exactly one tagged variant; classification then works on variants
instead of sniffing string prefixes.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Iterable

import structlog

from changelog_entry_manager.configuration.models import ChangelogConfiguration
from changelog_entry_manager.utils.constants import (
    AREA_LABEL_PREFIX,
    AREA_SEGMENT_PATTERN,
    BREAKING_TYPES,
    DEPRECATION_TYPE,
    QUERY_LANGUAGES_AREA,
    QUERY_LANGUAGES_AREAS,
    RELEASE_HIGHLIGHT_LABEL,
    TYPE_LABEL_PREFIX,
    UNKNOWN_TYPE,
    VERSION_LABEL_PATTERN,
    VERSION_LIKE_PATTERN,
)

logger: structlog.stdlib.BoundLogger = structlog.get_logger(__name__)


class Marker(str, Enum):
    """Structural markers a pull request can carry."""

    HIGHLIGHT = "highlight"
    BREAKING = "breaking"
    DEPRECATION = "deprecation"


@dataclass(frozen=True)
class TypeLabel:
    """A '>' change type label, stored without its prefix."""

    raw: str
    value: str


@dataclass(frozen=True)
class AreaLabel:
    """A ':' team/area label, stored without its prefix and first segment."""

    raw: str
    value: str


@dataclass(frozen=True)
class VersionLabel:
    """A version label, stored without a leading 'v'."""

    raw: str
    version: str


@dataclass(frozen=True)
class MarkerLabel:
    """A literal label that only carries a marker."""

    raw: str
    marker: Marker


@dataclass(frozen=True)
class UnrecognizedLabel:
    """Any other label."""

    raw: str


ParsedLabel = TypeLabel | AreaLabel | VersionLabel | MarkerLabel | UnrecognizedLabel


def parse_label(label: str) -> ParsedLabel:
    """Parse a raw label into its tagged variant."""
    if label.startswith(TYPE_LABEL_PREFIX):
        return TypeLabel(raw=label, value=label[len(TYPE_LABEL_PREFIX) :])
    if label.startswith(AREA_LABEL_PREFIX):
        return AreaLabel(raw=label, value=AREA_SEGMENT_PATTERN.sub("", label, count=1))
    version_match = VERSION_LABEL_PATTERN.match(label)
    if version_match:
        return VersionLabel(raw=label, version=version_match.group(1))
    if label == RELEASE_HIGHLIGHT_LABEL:
        return MarkerLabel(raw=label, marker=Marker.HIGHLIGHT)
    return UnrecognizedLabel(raw=label)


def parse_labels(labels: Iterable[str]) -> list[ParsedLabel]:
    """Parse every label, in sorted order so results are deterministic."""
    return [parse_label(label) for label in sorted(set(labels))]


@dataclass(frozen=True)
class LabelClassification:
    """Taxonomy dimensions derived from a pull request's labels."""

    type: str
    area: str | None
    versions: frozenset[str]
    markers: frozenset[Marker]

    @property
    def highlight(self) -> bool:
        """Whether the pull request is a release highlight."""
        return Marker.HIGHLIGHT in self.markers

    @property
    def breaking(self) -> bool:
        """Whether the pull request is a breaking change."""
        return Marker.BREAKING in self.markers

    @property
    def deprecation(self) -> bool:
        """Whether the pull request deprecates something."""
        return Marker.DEPRECATION in self.markers


def classify_type(parsed_labels: list[ParsedLabel], configuration: ChangelogConfiguration) -> str:
    """Join the change types of a pull request, or return the 'unknown' sentinel."""
    types = sorted(
        {label.value for label in parsed_labels if isinstance(label, TypeLabel) and label.raw not in configuration.ignored_type_labels}
    )
    if not types:
        return UNKNOWN_TYPE
    return ", ".join(types)


def classify_area(parsed_labels: list[ParsedLabel], configuration: ChangelogConfiguration) -> str | None:
    """Find the (team) area of a pull request.

    Ideally there is only one area, but pull requests are sometimes labelled
    for the attention of several teams; all areas are then joined by ", " and
    the author is expected to narrow the choice down in the changelog file.
    """
    areas = {configuration.area_overrides.get(label.value, label.value) for label in parsed_labels if isinstance(label, AreaLabel)}
    if not areas:
        return None
    if areas == QUERY_LANGUAGES_AREAS:
        return QUERY_LANGUAGES_AREA
    return ", ".join(sorted(areas))


def classify_versions(parsed_labels: list[ParsedLabel]) -> frozenset[str]:
    """Collect the versions a pull request is labelled for."""
    return frozenset(label.version for label in parsed_labels if isinstance(label, VersionLabel))


def classify_markers(parsed_labels: list[ParsedLabel]) -> frozenset[Marker]:
    """Collect the structural markers of a pull request.

    Breaking and deprecation markers are change type labels as well, so they
    also contribute to the change type.
    """
    markers: set[Marker] = set()
    for label in parsed_labels:
        if isinstance(label, MarkerLabel):
            markers.add(label.marker)
        elif isinstance(label, TypeLabel):
            if label.value in BREAKING_TYPES:
                markers.add(Marker.BREAKING)
            elif label.value == DEPRECATION_TYPE:
                markers.add(Marker.DEPRECATION)
    return frozenset(markers)


def classify_labels(labels: Iterable[str], configuration: ChangelogConfiguration) -> LabelClassification:
    """Classify a set of raw labels. Never raises; missing labels yield empty or sentinel values."""
    parsed_labels = parse_labels(labels)
    classification = LabelClassification(
        type=classify_type(parsed_labels, configuration),
        area=classify_area(parsed_labels, configuration),
        versions=classify_versions(parsed_labels),
        markers=classify_markers(parsed_labels),
    )
    logger.debug(
        "Classified labels",
        type=classification.type,
        area=classification.area,
        versions=sorted(classification.versions),
        markers=sorted(marker.value for marker in classification.markers),
    )
    return classification


def find_label_issues(labels: Iterable[str]) -> list[str]:
    """Check that a pull request's labels are well-formed enough to trust classification.

    Returns:
        A human readable description of each problem; empty when the labels are fine.
    """
    parsed_labels = parse_labels(labels)
    problems: list[str] = []

    if not any(isinstance(label, VersionLabel) for label in parsed_labels):
        problems.append("At least one version label is required")

    if not any(isinstance(label, AreaLabel) for label in parsed_labels):
        problems.append(f"At least one team label (starting with '{AREA_LABEL_PREFIX}') is required")

    if not any(isinstance(label, TypeLabel) for label in parsed_labels):
        problems.append(f"At least one change type label (starting with '{TYPE_LABEL_PREFIX}') is required")

    for label in parsed_labels:
        if isinstance(label, UnrecognizedLabel) and VERSION_LIKE_PATTERN.search(label.raw):
            problems.append(f"Label [{label.raw}] contains a version but is not a valid version label")

    return problems
