"""
Placement settings - the priority configuration read by the scoring engine.

An ordered list of named, weighted, toggle-able criteria plus the two
auto-placement switches, and the warning toggles used by the validator.
"""

from __future__ import annotations

import logging
import math
from typing import Any

from pydantic import BaseModel, Field

from .schema import CRITERIA_DEFAULTS, WARNING_KINDS

logger = logging.getLogger(__name__)

SETTINGS_VERSION = "1.0"

# Names used by saved settings from the browser app.
LEGACY_CRITERION_NAMES: dict[str, str] = {
    "genderedRoomPreference": "gendered_room",
    "minimizeBuildings": "minimize_buildings",
    "bunkPreference": "bunk_preference",
    "ageCompatibility": "age_compatibility",
}

LEGACY_WARNING_NAMES: dict[str, str] = {
    "genderMismatch": "gender_mismatch",
    "bunkPreference": "bunk_preference",
    "familySeparation": "family_separation",
    "roomAvailability": "room_availability",
}


class PlacementPriority(BaseModel):
    name: str
    weight: float = 0.0
    enabled: bool = True
    label: str = ""

    @property
    def is_usable(self) -> bool:
        """Enabled with a finite numeric weight."""
        return self.enabled and math.isfinite(self.weight)


class AutoPlacementSettings(BaseModel):
    enabled: bool = True
    priorities: list[PlacementPriority] = Field(default_factory=list)
    allow_constraint_relaxation: bool = True


class WarningSettings(BaseModel):
    gender_mismatch: bool = True
    bunk_preference: bool = True
    family_separation: bool = True
    room_availability: bool = True


class PlacementSettings(BaseModel):
    warnings: WarningSettings = Field(default_factory=WarningSettings)
    auto_placement: AutoPlacementSettings = Field(default_factory=AutoPlacementSettings)
    version: str = SETTINGS_VERSION

    def get_priority(self, name: str) -> PlacementPriority | None:
        """Look up a criterion; None means the criterion is disabled."""
        for priority in self.auto_placement.priorities:
            if priority.name == name:
                return priority
        return None

    def weight_for(self, name: str) -> float | None:
        """Weight of an enabled, well-formed criterion, else None."""
        priority = self.get_priority(name)
        if priority is None or not priority.is_usable:
            return None
        return priority.weight


def default_priorities() -> list[PlacementPriority]:
    return [
        PlacementPriority(name=name, weight=float(weight), enabled=enabled, label=label)
        for name, weight, enabled, label in CRITERIA_DEFAULTS
    ]


def default_settings() -> PlacementSettings:
    return PlacementSettings(auto_placement=AutoPlacementSettings(priorities=default_priorities()))


DEFAULT_SETTINGS = default_settings()


def _canonical(name: Any, aliases: dict[str, str]) -> str | None:
    if not isinstance(name, str):
        return None
    return aliases.get(name, name)


def merge_settings(saved: Any) -> PlacementSettings:
    """Merge previously saved settings onto the defaults.

    Each field is taken from ``saved`` only when it has the right type.
    Saved priorities are matched to defaults by name; unknown names are
    dropped and defaults missing from ``saved`` are kept.
    """
    merged = default_settings()
    if not isinstance(saved, dict):
        return merged

    warnings = saved.get("warnings")
    if isinstance(warnings, dict):
        for raw_key, value in warnings.items():
            key = _canonical(raw_key, LEGACY_WARNING_NAMES)
            if key in WARNING_KINDS and isinstance(value, bool):
                setattr(merged.warnings, key, value)

    auto = saved.get("auto_placement", saved.get("autoPlacement"))
    if isinstance(auto, dict):
        if isinstance(auto.get("enabled"), bool):
            merged.auto_placement.enabled = auto["enabled"]
        relax = auto.get("allow_constraint_relaxation", auto.get("allowConstraintRelaxation"))
        if isinstance(relax, bool):
            merged.auto_placement.allow_constraint_relaxation = relax

        saved_priorities = auto.get("priorities")
        if isinstance(saved_priorities, list):
            by_name: dict[str, dict[str, Any]] = {}
            for entry in saved_priorities:
                if isinstance(entry, dict):
                    name = _canonical(entry.get("name"), LEGACY_CRITERION_NAMES)
                    if name:
                        by_name[name] = entry

            for priority in merged.auto_placement.priorities:
                entry = by_name.get(priority.name)
                if entry is None:
                    continue
                weight = entry.get("weight")
                if isinstance(weight, int | float) and not isinstance(weight, bool):
                    priority.weight = float(weight)
                if isinstance(entry.get("enabled"), bool):
                    priority.enabled = entry["enabled"]

            dropped = set(by_name) - {p.name for p in merged.auto_placement.priorities}
            if dropped:
                logger.debug(f"Ignoring unknown saved priorities: {sorted(dropped)}")

    return merged
