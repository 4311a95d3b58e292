"""Loads changelog configuration overrides from a YAML file."""

from pathlib import Path
from types import MappingProxyType
from typing import Any

import structlog
from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from changelog_entry_manager.configuration.exceptions import ChangelogConfigurationError
from changelog_entry_manager.configuration.models import ChangelogConfiguration, default_changelog_configuration

logger: structlog.stdlib.BoundLogger = structlog.get_logger(__name__)

yaml = YAML(typ="safe")

_SET_FIELDS = ("change_types", "areas", "exclusion_labels", "ignored_type_labels")


def _as_string_list(key: str, value: Any) -> list[str]:
    if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
        raise ChangelogConfigurationError(f"Configuration key '{key}' must be a list of strings")
    return value


def build_changelog_configuration(data: dict[str, Any]) -> ChangelogConfiguration:
    """Build a configuration from a mapping of overrides.

    Keys that are absent keep their default value. Unknown keys are rejected so
    that a typo does not silently fall back to a default table.

    Raises:
        ChangelogConfigurationError: If a key is unknown or has the wrong type.
    """
    defaults = default_changelog_configuration()
    known_keys = set(_SET_FIELDS) | {"area_overrides", "title_area_codes"}
    unknown_keys = set(data) - known_keys
    if unknown_keys:
        raise ChangelogConfigurationError(f"Unknown configuration keys: {', '.join(sorted(unknown_keys))}")

    overrides: dict[str, Any] = {}
    for key in _SET_FIELDS:
        if key in data:
            overrides[key] = frozenset(_as_string_list(key, data[key]))
    if "title_area_codes" in data:
        overrides["title_area_codes"] = tuple(_as_string_list("title_area_codes", data["title_area_codes"]))
    if "area_overrides" in data:
        area_overrides = data["area_overrides"]
        if not isinstance(area_overrides, dict) or not all(isinstance(k, str) and isinstance(v, str) for k, v in area_overrides.items()):
            raise ChangelogConfigurationError("Configuration key 'area_overrides' must be a mapping of strings to strings")
        overrides["area_overrides"] = MappingProxyType(dict(area_overrides))

    return ChangelogConfiguration(
        change_types=overrides.get("change_types", defaults.change_types),
        areas=overrides.get("areas", defaults.areas),
        area_overrides=overrides.get("area_overrides", defaults.area_overrides),
        exclusion_labels=overrides.get("exclusion_labels", defaults.exclusion_labels),
        ignored_type_labels=overrides.get("ignored_type_labels", defaults.ignored_type_labels),
        title_area_codes=overrides.get("title_area_codes", defaults.title_area_codes),
    )


def load_changelog_configuration(path: Path | None) -> ChangelogConfiguration:
    """Load the changelog configuration, falling back to defaults when no path is given."""
    if path is None:
        return default_changelog_configuration()
    if not path.is_file():
        raise ChangelogConfigurationError(f"Configuration file not found: {path.absolute()}")
    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.load(f)
    except YAMLError as exc:
        raise ChangelogConfigurationError(f"Failed to parse configuration file {path}: {exc}") from exc
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ChangelogConfigurationError(f"Configuration file {path} must contain a mapping")
    logger.debug("Loaded changelog configuration overrides", path=str(path), keys=sorted(data))
    return build_changelog_configuration(data)
