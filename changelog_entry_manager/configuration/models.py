"""Immutable classification tables shared by every changelog operation."""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping

DEFAULT_CHANGE_TYPES = frozenset(
    {
        "breaking",
        "breaking-java",
        "bug",
        "deprecation",
        "enhancement",
        "feature",
        "known-issue",
        "new-aggregation",
        "regression",
        "security",
        "upgrade",
    }
)

DEFAULT_AREAS = frozenset(
    {
        "Aggregations",
        "Allocation",
        "Analysis",
        "Audit",
        "Authentication",
        "Authorization",
        "Autoscaling",
        "CCR",
        "CRUD",
        "Client",
        "Cluster Coordination",
        "Discovery-Plugins",
        "Distributed",
        "EQL",
        "Engine",
        "FIPS",
        "Features/CAT APIs",
        "Features/Data streams",
        "Features/Features",
        "Features/ILM+SLM",
        "Features/Indices APIs",
        "Features/Ingest",
        "Features/Java High Level REST Client",
        "Features/Java Low Level REST Client",
        "Features/Monitoring",
        "Features/Stats",
        "Features/Watcher",
        "Geo",
        "Graph",
        "Highlighting",
        "ILM+SLM",
        "IdentityProvider",
        "Indices APIs",
        "Infra/CLI",
        "Infra/Circuit Breakers",
        "Infra/Core",
        "Infra/Logging",
        "Infra/Node Lifecycle",
        "Infra/Plugins",
        "Infra/REST API",
        "Infra/Resiliency",
        "Infra/Scripting",
        "Infra/Settings",
        "Infra/Transport API",
        "Ingest",
        "License",
        "Machine Learning",
        "Mapping",
        "Network",
        "Packaging",
        "Percolator",
        "Performance",
        "Query Languages",
        "Ranking",
        "Recovery",
        "Reindex",
        "Rollup",
        "SQL",
        "Search",
        "Security",
        "Snapshot/Restore",
        "Store",
        "Suggesters",
        "TLS",
        "Task Management",
        "Transform",
        "Watcher",
    }
)

DEFAULT_AREA_OVERRIDES: Mapping[str, str] = MappingProxyType(
    {
        "ml": "Machine Learning",
        "Beats": "Beats Plugin",
        "Docs": "Docs Infrastructure",
    }
)

DEFAULT_EXCLUSION_LABELS = frozenset(
    {
        ">non-issue",
        ">refactoring",
        ">docs",
        ">test",
        ">test-failure",
        ">test-mute",
        ":Delivery/Build",
        ":Delivery/Cloud",
        ":Delivery/Tooling",
        "backport",
        "WIP",
    }
)

DEFAULT_IGNORED_TYPE_LABELS = frozenset({">new-field-mapper"})

DEFAULT_TITLE_AREA_CODES = ("ml", "beats", "docs", "transform", "sql", "eql", "ql")


@dataclass(frozen=True)
class ChangelogConfiguration:
    """Taxonomy and classification tables for changelog entries.

    Built once at start-up and passed explicitly to the functions that need it.
    The area override values are part of the area taxonomy.
    """

    change_types: frozenset[str] = DEFAULT_CHANGE_TYPES
    areas: frozenset[str] = DEFAULT_AREAS
    area_overrides: Mapping[str, str] = field(default_factory=lambda: DEFAULT_AREA_OVERRIDES)
    exclusion_labels: frozenset[str] = DEFAULT_EXCLUSION_LABELS
    ignored_type_labels: frozenset[str] = DEFAULT_IGNORED_TYPE_LABELS
    title_area_codes: tuple[str, ...] = DEFAULT_TITLE_AREA_CODES

    @property
    def known_areas(self) -> frozenset[str]:
        """All area names a changelog record may use."""
        return self.areas | frozenset(self.area_overrides.values())


def default_changelog_configuration() -> ChangelogConfiguration:
    """Return the built-in changelog configuration."""
    return ChangelogConfiguration()
