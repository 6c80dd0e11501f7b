"""Building consolidation: fill occupied dormitories before opening new ones."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from lodging.models import Bed, Guest, Room

    from ..base import ScoringContext


def score_minimize_buildings(ctx: ScoringContext, guest: Guest, bed: Bed, room: Room) -> float:
    """Occupancy rate (committed + suggested) of the bed's dormitory, 0..1."""
    dormitory = ctx.inventory.dormitory_by_bed_id(bed.bed_id)
    if dormitory is None:
        return 0.0

    occupied = 0
    total = 0
    for dorm_room in dormitory.rooms:
        if not dorm_room.active:
            continue
        for dorm_bed in dorm_room.beds:
            if not dorm_bed.active:
                continue
            total += 1
            if ctx.occupant_of(dorm_bed):
                occupied += 1

    if total == 0:
        return 0.0
    return occupied / total
