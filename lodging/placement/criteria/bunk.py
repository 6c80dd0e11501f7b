"""Bunk preference: guests needing a lower bunk avoid upper bunks."""

from __future__ import annotations

from typing import TYPE_CHECKING

from lodging.models import BedType

if TYPE_CHECKING:
    from lodging.models import Bed, Guest, Room

    from ..base import ScoringContext


def score_bunk_preference(ctx: ScoringContext, guest: Guest, bed: Bed, room: Room) -> float:
    if not guest.lower_bunk:
        return 0.0
    if bed.bed_type in (BedType.LOWER, BedType.SINGLE):
        return 1.0
    if bed.bed_type == BedType.UPPER:
        return -0.5
    return 0.0
