"""
Scoring criteria for the placement engine.

Each criterion is a pure function (ctx, guest, bed, room) -> float. The
registry order is the evaluation order; the gender match comes first so a
forbidden bed short-circuits the rest.
"""

from __future__ import annotations

from ..base import Criterion
from .age import score_age_compatibility
from .buildings import score_minimize_buildings
from .bunk import score_bunk_preference
from .families import score_family_grouping
from .gender import score_gender_match, score_gendered_room_preference

CRITERIA: dict[str, Criterion] = {
    "gender": score_gender_match,
    "gendered_room": score_gendered_room_preference,
    "families": score_family_grouping,
    "minimize_buildings": score_minimize_buildings,
    "bunk_preference": score_bunk_preference,
    "age_compatibility": score_age_compatibility,
}

__all__ = [
    "CRITERIA",
    "score_age_compatibility",
    "score_bunk_preference",
    "score_family_grouping",
    "score_gender_match",
    "score_gendered_room_preference",
    "score_minimize_buildings",
]
