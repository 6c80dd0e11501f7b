"""
Placement Logger - tracks what each engine run did.

Records per-pass progress, hard exclusions and the final summary, and mirrors
them to the module logger.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from typing import Any

logger = logging.getLogger(__name__)


class PlacementLogger:
    """Collects pass progress and exclusions during one placement run."""

    def __init__(self, debug_mode: bool = False) -> None:
        self.debug_mode = debug_mode
        self.placed_per_pass: dict[str, int] = {}
        self.exclusions: dict[str, list[str]] = defaultdict(list)
        self.unplaced: list[str] = []
        self.progress: list[str] = []

    def log_exclusion(self, guest_id: str, bed_id: str, reason: str) -> None:
        """A bed ruled out for a guest by a hard constraint."""
        self.exclusions[guest_id].append(bed_id)
        if self.debug_mode:
            logger.debug(f"[EXCLUDED] {guest_id} -> {bed_id}: {reason}")

    def log_pass(self, pass_name: str, placed: int, remaining: int) -> None:
        self.placed_per_pass[pass_name] = placed
        message = f"Pass '{pass_name}' placed {placed} guest(s), {remaining} remaining"
        self.progress.append(message)
        logger.info(message)

    def log_progress(self, message: str) -> None:
        self.progress.append(message)
        if self.debug_mode:
            logger.debug(f"[PLACEMENT] {message}")

    def log_unplaced(self, guest_ids: list[str]) -> None:
        self.unplaced = list(guest_ids)
        if guest_ids:
            logger.info(f"{len(guest_ids)} guest(s) could not be placed")

    @property
    def total_placed(self) -> int:
        return sum(self.placed_per_pass.values())

    def get_summary(self) -> dict[str, Any]:
        return {
            "placed_per_pass": dict(self.placed_per_pass),
            "total_placed": self.total_placed,
            "unplaced": list(self.unplaced),
            "progress": list(self.progress),
        }
