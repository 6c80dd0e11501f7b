"""Weighted placement score for a (guest, bed) pair."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from lodging.logging_config import TRACE

from .base import FORBIDDEN, PassConfig, ScoringContext
from .criteria import CRITERIA

if TYPE_CHECKING:
    from lodging.models import Bed, Guest

logger = logging.getLogger(__name__)


def calculate_placement_score(
    ctx: ScoringContext,
    guest: Guest,
    bed: Bed,
    pass_config: PassConfig,
) -> float:
    """Sum of weight * score over the enabled criteria this pass evaluates.

    Criteria missing from the settings, disabled, or with a non-finite weight
    are skipped. A forbidden gender match makes the whole score FORBIDDEN.
    """
    room = ctx.inventory.room_by_bed_id(bed.bed_id)
    if room is None:
        return FORBIDDEN

    total = 0.0
    for name, criterion in CRITERIA.items():
        weight = ctx.settings.weight_for(name)
        if weight is None or pass_config.relaxes(name):
            continue

        score = criterion(ctx, guest, bed, room)
        if score == FORBIDDEN:
            return FORBIDDEN
        total += score * weight

    if logger.isEnabledFor(TRACE):
        logger.log(TRACE, f"score {guest.id} -> {bed.bed_id} [{pass_config.name}]: {total:.2f}")
    return total


def score_breakdown(
    ctx: ScoringContext,
    guest: Guest,
    bed: Bed,
    pass_config: PassConfig,
) -> dict[str, float]:
    """Per-criterion raw scores, for diagnostics. Skipped criteria are absent."""
    room = ctx.inventory.room_by_bed_id(bed.bed_id)
    if room is None:
        return {}
    breakdown: dict[str, float] = {}
    for name, criterion in CRITERIA.items():
        if ctx.settings.weight_for(name) is None or pass_config.relaxes(name):
            continue
        breakdown[name] = criterion(ctx, guest, bed, room)
    return breakdown
