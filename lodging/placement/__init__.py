"""
Placement - weighted-scoring bed allocator.

This package contains:
- PlacementEngine: multi-pass allocator with progressive constraint relaxation
- Scoring criteria: one pure function per criterion (see ``criteria``)
- PlacementLogger: per-run pass progress and exclusions
"""

from .base import EMERGENCY_PASS, FORBIDDEN, PASSES, RELAXED_PASS, STRICT_PASS, PassConfig, ScoringContext
from .bed_ordering import bed_sort_key, order_beds
from .engine import PlacementEngine
from .logging import PlacementLogger
from .scorer import calculate_placement_score, score_breakdown

__all__ = [
    "EMERGENCY_PASS",
    "FORBIDDEN",
    "PASSES",
    "PassConfig",
    "PlacementEngine",
    "PlacementLogger",
    "RELAXED_PASS",
    "STRICT_PASS",
    "ScoringContext",
    "bed_sort_key",
    "calculate_placement_score",
    "order_beds",
    "score_breakdown",
]
