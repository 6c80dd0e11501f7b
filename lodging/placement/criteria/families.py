"""Family/group cohesion: reward rooms where the group already sleeps."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from lodging.models import Bed, Guest, Room

    from ..base import ScoringContext


def score_family_grouping(ctx: ScoringContext, guest: Guest, bed: Bed, room: Room) -> float:
    """1.0 if a group member is in this room, -0.5 if only elsewhere, else 0."""
    if not guest.group_name:
        return 0.0

    in_room = 0
    elsewhere = 0
    for member in ctx.inventory.group_members(guest):
        member_bed_id = ctx.placed_bed_id(member.id)
        if not member_bed_id:
            continue
        member_room = ctx.inventory.room_by_bed_id(member_bed_id)
        if member_room is room:
            in_room += 1
        else:
            elsewhere += 1

    if in_room > 0:
        return 1.0
    if elsewhere > 0:
        return -0.5
    return 0.0
