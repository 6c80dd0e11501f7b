"""
Shared dependencies for the Lodging API.

The service holds a single in-process workspace: the inventory, the
assignment ledger over it and the placement settings. Routers reach it
through the ``get_workspace`` dependency so tests can swap it out with
``app.dependency_overrides``.
"""

from __future__ import annotations

import logging

from fastapi import HTTPException

from lodging.config import ConfigError, ConfigLoader, PlacementSettings, default_settings
from lodging.inventory import Inventory, default_dormitories
from lodging.ledger import AssignmentLedger
from lodging.models import HISTORY_SIZE, Dormitory, Guest
from lodging.placement import PlacementEngine
from lodging.validator import AssignmentValidator

from .settings import get_settings

logger = logging.getLogger(__name__)


class Workspace:
    """Inventory, ledger and settings for one planning session."""

    def __init__(
        self,
        inventory: Inventory | None = None,
        settings: PlacementSettings | None = None,
        history_size: int = HISTORY_SIZE,
    ) -> None:
        self.inventory = inventory or Inventory()
        self.settings = settings or default_settings()
        self.ledger = AssignmentLedger(self.inventory, history_size=history_size)

    def engine(self, debug_mode: bool = False) -> PlacementEngine:
        return PlacementEngine(
            self.inventory,
            self.settings,
            assignments=self.ledger.assignments,
            debug_mode=debug_mode,
        )

    def validator(self) -> AssignmentValidator:
        return AssignmentValidator(self.inventory, self.ledger, self.settings)

    def replace_guests(self, guests: list[Guest]) -> None:
        self.inventory.import_guests(guests)
        self.ledger.reset()

    def replace_dormitories(self, dormitories: list[Dormitory]) -> None:
        self.inventory.import_dormitories(dormitories)
        self.ledger.reset()

    # ------------------------------------------------------------------
    # Lookups that turn unknown ids into 404s before the ledger sees them
    # ------------------------------------------------------------------

    def require_guest(self, guest_id: str) -> Guest:
        guest = self.inventory.guest_by_id(guest_id)
        if guest is None:
            raise HTTPException(status_code=404, detail=f"Guest {guest_id} not found")
        return guest

    def require_bed(self, bed_id: str) -> None:
        if self.inventory.bed_by_id(bed_id) is None:
            raise HTTPException(status_code=404, detail=f"Bed {bed_id} not found")

    def require_room(self, room_name: str) -> None:
        if self.inventory.room_by_name(room_name) is None:
            raise HTTPException(status_code=404, detail=f"Room {room_name} not found")


def load_placement_config() -> tuple[PlacementSettings, int]:
    """Placement settings and history size from ConfigLoader, or defaults."""
    settings = get_settings()
    try:
        loader = ConfigLoader.initialize(pocketbase_url=settings.pocketbase_url or None)
        return loader.load_placement_settings(), loader.get_int("ledger.history_size")
    except ConfigError as e:
        logger.warning(f"Using default placement settings: {e}")
        return default_settings(), HISTORY_SIZE


def create_workspace() -> Workspace:
    placement_settings, history_size = load_placement_config()
    dormitories = default_dormitories() if get_settings().seed_default_layout else []
    return Workspace(
        inventory=Inventory(dormitories=dormitories),
        settings=placement_settings,
        history_size=history_size,
    )


_workspace: Workspace | None = None


def get_workspace() -> Workspace:
    """FastAPI dependency returning the process-wide workspace."""
    global _workspace
    if _workspace is None:
        _workspace = create_workspace()
    return _workspace


def reset_workspace() -> None:
    global _workspace
    _workspace = None


__all__ = [
    "Workspace",
    "create_workspace",
    "get_workspace",
    "load_placement_config",
    "reset_workspace",
]
