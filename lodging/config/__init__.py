"""
Placement and ledger configuration.

``ConfigLoader`` resolves typed keys from the environment, PocketBase or the
schema defaults; ``PlacementSettings`` is what the engine and validator read.

    from lodging.config import ConfigLoader, default_settings

    settings = ConfigLoader.initialize().load_placement_settings()
    settings = default_settings()  # no configuration source at all
"""

from __future__ import annotations

from .errors import ConfigError, DatabaseUnavailableError, MissingKeyError, UnknownKeyError, ValidationError
from .loader import ConfigLoader, env_var_for, record_filter
from .schema import CONFIG_SCHEMA, CRITERIA_DEFAULTS, WARNING_KINDS, get_all_required_keys, get_schema_key, validate_key
from .settings import (
    DEFAULT_SETTINGS,
    AutoPlacementSettings,
    PlacementPriority,
    PlacementSettings,
    WarningSettings,
    default_settings,
    merge_settings,
)
from .types import ConfigKey, ConfigType

__all__ = [
    "AutoPlacementSettings",
    "CONFIG_SCHEMA",
    "CRITERIA_DEFAULTS",
    "ConfigError",
    "ConfigKey",
    "ConfigLoader",
    "ConfigType",
    "DEFAULT_SETTINGS",
    "DatabaseUnavailableError",
    "MissingKeyError",
    "PlacementPriority",
    "PlacementSettings",
    "UnknownKeyError",
    "ValidationError",
    "WARNING_KINDS",
    "WarningSettings",
    "default_settings",
    "env_var_for",
    "get_all_required_keys",
    "get_schema_key",
    "merge_settings",
    "record_filter",
    "validate_key",
]
