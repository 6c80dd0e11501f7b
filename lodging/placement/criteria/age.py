"""Age compatibility with the room's current (and suggested) occupants."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from lodging.models import Bed, Guest, Room

    from ..base import ScoringContext


def roommate_ages(ctx: ScoringContext, room: Room) -> list[int]:
    ages: list[int] = []
    for room_bed in room.beds:
        occupant_id = ctx.occupant_of(room_bed)
        if not occupant_id:
            continue
        roommate = ctx.inventory.guest_by_id(occupant_id)
        if roommate is None:
            continue
        age = roommate.parsed_age
        if age is not None:
            ages.append(age)
    return ages


def score_age_compatibility(ctx: ScoringContext, guest: Guest, bed: Bed, room: Room) -> float:
    """Smaller gap to the roommates' average age scores higher."""
    guest_age = guest.parsed_age
    if guest_age is None:
        return 0.0

    ages = roommate_ages(ctx, room)
    if not ages:
        return 0.0

    gap = abs(guest_age - sum(ages) / len(ages))
    if gap < 5:
        return 1.0
    if gap < 10:
        return 0.5
    if gap < 20:
        return 0.0
    return -0.3
