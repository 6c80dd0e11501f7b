"""
Placement Engine - multi-pass weighted scoring with progressive relaxation.

For every unplaced guest, in input order, the engine scores each candidate
bed and suggests the best one when its score is positive. Up to three passes
run: strict, relaxed (bunk preference skipped) and emergency (bunk preference
and age skipped). The engine only returns proposals; it never touches beds.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping

from lodging.config.settings import PlacementSettings
from lodging.inventory import Inventory
from lodging.models import Bed, Guest, Room

from .base import FORBIDDEN, PASSES, PassConfig, ScoringContext
from .bed_ordering import order_beds
from .logging import PlacementLogger
from .scorer import calculate_placement_score

logger = logging.getLogger(__name__)


def _committed_from_beds(inventory: Inventory) -> dict[str, str]:
    return {
        bed.assigned_guest_id: bed.bed_id
        for bed in inventory.all_beds(active_only=False)
        if bed.assigned_guest_id
    }


class PlacementEngine:
    """Suggests beds for unassigned guests.

    Args:
        inventory: Guests and dormitory tree, read only.
        settings: Priority configuration.
        assignments: Committed guest -> bed map. Defaults to the map implied
            by the beds' back-references.
        debug_mode: Log every hard exclusion.
    """

    def __init__(
        self,
        inventory: Inventory,
        settings: PlacementSettings,
        assignments: Mapping[str, str] | None = None,
        debug_mode: bool = False,
    ) -> None:
        self.inventory = inventory
        self.settings = settings
        self._assignments = assignments
        self.debug_mode = debug_mode
        self.last_log: PlacementLogger | None = None

    @property
    def assignments(self) -> Mapping[str, str]:
        if self._assignments is None:
            return _committed_from_beds(self.inventory)
        return self._assignments

    @property
    def last_summary(self) -> dict[str, int]:
        """Pass name -> guests placed, for the most recent run."""
        if self.last_log is None:
            return {}
        return dict(self.last_log.placed_per_pass)

    def unassigned_guests(self) -> list[Guest]:
        committed = self.assignments
        return [guest for guest in self.inventory.guests if guest.id not in committed]

    def place_all(
        self,
        guests: list[Guest] | None = None,
        beds: list[Bed] | None = None,
    ) -> dict[str, str]:
        """Suggest beds for ``guests`` (default: every unassigned guest)."""
        if guests is None:
            guests = self.unassigned_guests()
        if beds is None:
            beds = self.inventory.available_beds()
        return self._run(guests, beds)

    def place_in_room(
        self,
        room: Room,
        guests: list[Guest] | None = None,
        existing: Mapping[str, str] | None = None,
    ) -> dict[str, str]:
        """Same passes, with candidates limited to the free beds of one room.

        ``existing`` suggestions stay in force: their guests are not placed
        again, their beds are not offered, and they count as occupants while
        scoring. Only the new suggestions are returned.
        """
        if guests is None:
            guests = self.unassigned_guests()
        beds = [bed for bed in room.beds if bed.active and not bed.assigned_guest_id]
        return self._run(guests, beds, stop_when_full=True, existing=existing)

    def _run(
        self,
        guests: list[Guest],
        beds: list[Bed],
        stop_when_full: bool = False,
        existing: Mapping[str, str] | None = None,
    ) -> dict[str, str]:
        placement_log = PlacementLogger(debug_mode=self.debug_mode)
        self.last_log = placement_log
        auto = self.settings.auto_placement

        if not auto.enabled:
            logger.info("Auto-placement disabled; no passes run")
            return {}

        committed = self.assignments
        seed = dict(existing or {})
        ctx = ScoringContext(
            inventory=self.inventory,
            settings=self.settings,
            assignments=committed,
            suggestions=dict(seed),
        )

        candidates = order_beds(
            [bed for bed in beds if not bed.assigned_guest_id and not ctx.is_bed_suggested(bed.bed_id)]
        )
        remaining = [guest for guest in guests if guest.id not in committed and guest.id not in seed]

        if not remaining or not candidates:
            placement_log.log_unplaced([guest.id for guest in remaining])
            return {}

        logger.info(f"Auto-placing {len(remaining)} guest(s) over {len(candidates)} bed(s)")

        for pass_config in PASSES:
            if pass_config.allow_relaxation and not auto.allow_constraint_relaxation:
                break

            placed = self._placement_pass(ctx, remaining, candidates, pass_config, placement_log)
            remaining = [guest for guest in remaining if guest.id not in ctx.suggestions]
            placement_log.log_pass(pass_config.name, placed, len(remaining))

            if not remaining:
                break
            if stop_when_full and len(ctx.suggestions) - len(seed) >= len(candidates):
                break

        placement_log.log_unplaced([guest.id for guest in remaining])
        return {guest_id: bed_id for guest_id, bed_id in ctx.suggestions.items() if guest_id not in seed}

    def _placement_pass(
        self,
        ctx: ScoringContext,
        guests: list[Guest],
        beds: list[Bed],
        pass_config: PassConfig,
        placement_log: PlacementLogger,
    ) -> int:
        placed = 0
        for guest in guests:
            if guest.id in ctx.suggestions:
                continue

            best_score = FORBIDDEN
            best_bed: Bed | None = None
            for bed in beds:
                if bed.assigned_guest_id or ctx.is_bed_suggested(bed.bed_id):
                    continue

                score = calculate_placement_score(ctx, guest, bed, pass_config)
                if score == FORBIDDEN:
                    placement_log.log_exclusion(guest.id, bed.bed_id, "gender mismatch")
                    continue
                if best_bed is None or score > best_score:
                    best_score = score
                    best_bed = bed

            if best_bed is not None and best_score > 0:
                ctx.record_suggestion(guest.id, best_bed.bed_id)
                placed += 1
                placement_log.log_progress(
                    f"{pass_config.name}: {guest.id} -> {best_bed.bed_id} (score {best_score:.2f})"
                )

        return placed
