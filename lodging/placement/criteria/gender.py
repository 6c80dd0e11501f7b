"""
Gender criteria.

Gender match is the hard constraint: a gendered room (M/F) never takes a
guest of another gender. It is never relaxed by a pass.

Gendered-room preference is soft: same-gender parties prefer a matching
gendered room over co-ed, mixed-gender parties prefer co-ed.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from ..base import FORBIDDEN

if TYPE_CHECKING:
    from lodging.models import Bed, Guest, Room

    from ..base import ScoringContext


def _norm(gender: str | None) -> str:
    return (gender or "").strip().upper()


def score_gender_match(ctx: ScoringContext, guest: Guest, bed: Bed, room: Room) -> float:
    """1.0 for co-ed or matching rooms, 0 for unknown gender, FORBIDDEN on mismatch."""
    if room.is_coed:
        return 1.0

    guest_gender = _norm(guest.gender)
    if not guest_gender:
        return 0.0

    if guest_gender == _norm(room.gender.value):
        return 1.0

    return FORBIDDEN


def group_gender_profile(ctx: ScoringContext, guest: Guest) -> list[str]:
    """The guest's own gender followed by the known genders of their group."""
    genders = [_norm(guest.gender)]
    for member in ctx.inventory.group_members(guest):
        member_gender = _norm(member.gender)
        if member_gender:
            genders.append(member_gender)
    return genders


def score_gendered_room_preference(ctx: ScoringContext, guest: Guest, bed: Bed, room: Room) -> float:
    guest_gender = _norm(guest.gender)
    if not guest_gender:
        return 0.0

    profile = group_gender_profile(ctx, guest)
    # A guest alone (no group, or no group member with a known gender)
    if len(profile) < 2:
        return 0.0

    if all(g == guest_gender for g in profile):
        if not room.is_coed and _norm(room.gender.value) == guest_gender:
            return 1.0
        if room.is_coed:
            return 0.5
        # Wrong gendered room, already excluded by the hard constraint
        return 0.0

    if room.is_coed:
        return 1.0
    return -0.3
