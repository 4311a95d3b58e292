"""Shared constants used across the application."""

import re

# Changelog Record Constants
# --------------------------

CHANGELOG_SCHEMA_VERSION = 1
"""Version of the changelog record schema produced and consumed by this tool."""

DEFAULT_CHANGELOG_DIR = "docs/changelog"
"""Default directory holding one YAML changelog file per pull request."""

CHANGELOG_FILE_SUFFIX = ".yaml"
"""Suffix of changelog files; the stem is the pull request number."""

UNKNOWN_TYPE = "unknown"
"""Sentinel emitted when no change type label survives classification."""

BREAKING_IMPACT_PLACEHOLDER = "Please describe the impact of this change to users"
"""Placeholder for the impact of a breaking change, which cannot be derived from labels."""

WRAP_WIDTH = 72
"""Column at which free text from pull request bodies is wrapped."""

# Label Constants
# ---------------

TYPE_LABEL_PREFIX = ">"
"""Prefix of change type labels, e.g. '>bug'."""

AREA_LABEL_PREFIX = ":"
"""Prefix of team/area labels, e.g. ':Search/Search'."""

RELEASE_HIGHLIGHT_LABEL = "release highlight"
"""Label marking a pull request as a release highlight."""

BREAKING_TYPES = frozenset({"breaking", "breaking-java"})
"""Change types that mark a pull request as a breaking change."""

DEPRECATION_TYPE = "deprecation"
"""Change type that marks a pull request as a deprecation."""

DOCS_LABEL = ">docs"
"""Label that release highlights are expected to carry."""

CONTRIBUTOR_LABEL = "contributor"
"""Label for pull requests opened by someone outside the configured team."""

QUERY_LANGUAGES_AREAS = frozenset({"SQL", "EQL"})
"""Area set that collapses into a single 'Query Languages' area."""

QUERY_LANGUAGES_AREA = "Query Languages"
"""Combined area for pull requests labelled for both SQL and EQL."""

# Regex Patterns
VERSION_LABEL_PATTERN = re.compile(r"^v?(\d+\.\d+\.\d+(?:-(?:alpha|beta|rc)\d+)?(?:-SNAPSHOT)?)$", re.IGNORECASE)
"""Pattern for a version label (e.g. v8.1.0, 8.0.0-rc1, v8.2.0-SNAPSHOT); group 1 is the bare version."""

VERSION_LIKE_PATTERN = re.compile(r"\d+\.\d+\.\d+", re.IGNORECASE)
"""Pattern for anything that merely contains a version number."""

AREA_SEGMENT_PATTERN = re.compile(r"^:(?:[^/]+/)?")
"""Pattern for the ':' prefix of an area label plus its first 'segment/'."""

ISSUE_PREFIX_PATTERN = re.compile(r"^#\d+:?\s+")
"""Pattern for a leading '#123:' issue number on a pull request title."""

PR_REFERENCE_SUFFIX_PATTERN = re.compile(r"(?:\s*\(#\d+\))+\s*$")
"""Pattern for trailing '(#123)' references on a pull request title."""

CAMEL_CASE_TOKEN_PATTERN = re.compile(r"[A-Z]?[a-z]+[A-Z][a-z]+.*")
"""Pattern for camelCase tokens that should be quoted as code."""

IDENTIFIER_TOKEN_PATTERN = re.compile(r"[a-z]*(?:[._][a-z]+)+")
"""Pattern for dotted or underscored identifiers that should be quoted as code."""

GITHUB_REF_PATTERN = re.compile(r"^refs/pull/(\d+)/merge$")
"""Pattern of the GITHUB_REF environment variable for pull request workflows."""

GITHUB_TOKEN_PATTERN = re.compile(r"^(?:[0-9a-fA-F]{40}|gh[pousr]_[A-Za-z0-9_]{36,})$")
"""Pattern for a GitHub token stored in a token file (classic hex or prefixed token)."""
