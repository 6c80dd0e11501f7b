"""Registry of every configuration key the loader will accept."""

from __future__ import annotations

from typing import Any

from .types import ConfigKey, ConfigType

# (criterion, default weight, enabled by default, label), in evaluation order
CRITERIA_DEFAULTS: list[tuple[str, float, bool, str]] = [
    ("gender", 10, True, "Gender Matching"),
    ("gendered_room", 9, True, "Prefer Gendered Rooms over Co-ed"),
    ("families", 8, True, "Keep Families Together"),
    ("minimize_buildings", 5, True, "Fill Up As Few Dorms As Possible"),
    ("bunk_preference", 6, True, "Bunk Preferences"),
    ("age_compatibility", 4, False, "Age Compatibility"),
]

WARNING_KINDS: list[str] = [
    "gender_mismatch",
    "bunk_preference",
    "family_separation",
    "room_availability",
]

MAX_PRIORITY_WEIGHT = 100
MAX_HISTORY_SIZE = 500


def _flag(key: str, default: bool, description: str) -> ConfigKey:
    return ConfigKey(key=key, config_type=ConfigType.BOOL, default=default, description=description)


def _build_schema() -> dict[str, ConfigKey]:
    keys = [
        _flag("placement.enabled", True, "Run the placement engine at all"),
        _flag(
            "placement.allow_constraint_relaxation",
            True,
            "Run the relaxed and emergency passes after the strict pass",
        ),
        ConfigKey(
            key="ledger.history_size",
            config_type=ConfigType.INT,
            default=10,
            description="Number of undo snapshots kept",
            min_value=1,
            max_value=MAX_HISTORY_SIZE,
        ),
    ]
    for name, weight, enabled, label in CRITERIA_DEFAULTS:
        keys.append(
            ConfigKey(
                key=f"priority.{name}.weight",
                config_type=ConfigType.FLOAT,
                default=float(weight),
                description=f"Weight of '{label}'",
                min_value=0,
                max_value=MAX_PRIORITY_WEIGHT,
            )
        )
        keys.append(_flag(f"priority.{name}.enabled", enabled, f"Whether '{label}' contributes to scores"))
    for kind in WARNING_KINDS:
        keys.append(_flag(f"warnings.{kind}.enabled", True, f"Report {kind.replace('_', ' ')} warnings"))
    return {entry.key: entry for entry in keys}


CONFIG_SCHEMA: dict[str, ConfigKey] = _build_schema()


def get_schema_key(key: str) -> ConfigKey | None:
    return CONFIG_SCHEMA.get(key)


def get_all_required_keys() -> list[str]:
    """Keys with no default; these must come from the environment or PocketBase."""
    return [key for key, entry in CONFIG_SCHEMA.items() if entry.required]


def validate_key(key: str, value: Any) -> str | None:
    """Problem with ``value`` for ``key``, or None when it is acceptable."""
    entry = CONFIG_SCHEMA.get(key)
    return f"Unknown config key: {key}" if entry is None else entry.validate(value)
