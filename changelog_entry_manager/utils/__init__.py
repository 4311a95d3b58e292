"""Utility modules for shared functionality."""

from .constants import (
    CHANGELOG_SCHEMA_VERSION,
    DEFAULT_CHANGELOG_DIR,
    UNKNOWN_TYPE,
    VERSION_LABEL_PATTERN,
)

__all__ = [
    "CHANGELOG_SCHEMA_VERSION",
    "DEFAULT_CHANGELOG_DIR",
    "UNKNOWN_TYPE",
    "VERSION_LABEL_PATTERN",
]
