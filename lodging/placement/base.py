"""
Base types and context for the scoring criteria.

Provides the ScoringContext that holds everything a criterion may read, and
the PassConfig describing which criteria a placement pass relaxes.
"""

from __future__ import annotations

import math
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from lodging.config.settings import PlacementSettings
    from lodging.inventory import Inventory
    from lodging.models import Bed, Guest, Room

FORBIDDEN = -math.inf


@dataclass(frozen=True)
class PassConfig:
    """One sweep of the engine under a fixed relaxation state."""

    name: str
    allow_relaxation: bool = False
    relax_bunk_preference: bool = False
    relax_age: bool = False

    def relaxes(self, criterion: str) -> bool:
        if criterion == "bunk_preference":
            return self.relax_bunk_preference
        if criterion == "age_compatibility":
            return self.relax_age
        return False


STRICT_PASS = PassConfig(name="strict")
RELAXED_PASS = PassConfig(name="relaxed", allow_relaxation=True, relax_bunk_preference=True)
EMERGENCY_PASS = PassConfig(name="emergency", allow_relaxation=True, relax_bunk_preference=True, relax_age=True)

PASSES: tuple[PassConfig, ...] = (STRICT_PASS, RELAXED_PASS, EMERGENCY_PASS)


@dataclass
class ScoringContext:
    """
    Shared, read-mostly state passed to every criterion.

    ``assignments`` is the committed guest -> bed map owned by the ledger;
    ``suggestions`` holds the proposals made so far in the current run and
    grows as the engine places guests.
    """

    inventory: Inventory
    settings: PlacementSettings
    assignments: Mapping[str, str]
    suggestions: dict[str, str] = field(default_factory=dict)
    # bed_id -> guest_id for suggestions, kept in step with ``suggestions``
    _suggested_beds: dict[str, str] = field(default_factory=dict, repr=False)

    def __post_init__(self) -> None:
        self._suggested_beds = {bed_id: guest_id for guest_id, bed_id in self.suggestions.items()}

    def record_suggestion(self, guest_id: str, bed_id: str) -> None:
        self.suggestions[guest_id] = bed_id
        self._suggested_beds[bed_id] = guest_id

    def is_bed_suggested(self, bed_id: str) -> bool:
        return bed_id in self._suggested_beds

    def occupant_of(self, bed: Bed) -> str | None:
        """Committed occupant of a bed, else the guest suggested for it."""
        if bed.assigned_guest_id:
            return bed.assigned_guest_id
        return self._suggested_beds.get(bed.bed_id)

    def placed_bed_id(self, guest_id: str) -> str | None:
        """Bed a guest holds, committed first, then suggested."""
        return self.assignments.get(guest_id) or self.suggestions.get(guest_id)


class Criterion(Protocol):
    """A scoring function: (ctx, guest, bed, room) -> score in about [-1, 1]."""

    def __call__(self, ctx: ScoringContext, guest: Guest, bed: Bed, room: Room) -> float: ...
