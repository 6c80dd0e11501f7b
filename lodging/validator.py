"""
Assignment validation - warnings about committed placements.

Warnings never block an assignment; they flag placements a coordinator may
want to revisit. Each kind can be switched off through ``WarningSettings``.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field

from .config.settings import PlacementSettings, default_settings
from .inventory import Inventory
from .ledger import AssignmentLedger
from .models import NON_BINARY, Bed, BedType, Guest, Room

logger = logging.getLogger(__name__)


class ValidationSeverity(str, Enum):
    ERROR = "error"
    WARNING = "warning"
    INFO = "info"


class ValidationIssue(BaseModel):
    """Single warning about a guest's placement."""

    severity: ValidationSeverity = ValidationSeverity.WARNING
    type: str
    message: str
    details: dict[str, Any] = Field(default_factory=dict)
    affected_ids: list[str] = Field(default_factory=list)


def _room_accepts(room: Room, guest: Guest) -> bool:
    return guest.gender == NON_BINARY or room.is_coed or room.gender.value == guest.gender


class AssignmentValidator:
    """Computes warnings from the inventory and the ledger's committed map."""

    def __init__(
        self,
        inventory: Inventory,
        ledger: AssignmentLedger,
        settings: PlacementSettings | None = None,
    ) -> None:
        self.inventory = inventory
        self.ledger = ledger
        self.settings = settings or default_settings()

    def warnings_for_bed(self, bed_id: str) -> list[ValidationIssue]:
        guest_id = self.ledger.guest_for_bed(bed_id)
        if not guest_id:
            return []
        guest = self.inventory.guest_by_id(guest_id)
        bed = self.inventory.bed_by_id(bed_id)
        room = self.inventory.room_by_bed_id(bed_id)
        if guest is None or bed is None or room is None:
            return []
        return self._assignment_warnings(guest, bed, room)

    def warnings_for_guest(self, guest_id: str) -> list[ValidationIssue]:
        bed_id = self.ledger.assignment_for_guest(guest_id)
        if not bed_id:
            return self._unassigned_warnings(guest_id)
        return self.warnings_for_bed(bed_id)

    def all_warnings(self) -> dict[str, list[ValidationIssue]]:
        """bed_id -> warnings, for every committed assignment that has any."""
        warnings: dict[str, list[ValidationIssue]] = {}
        for bed_id in self.ledger.assignments.values():
            bed_warnings = self.warnings_for_bed(bed_id)
            if bed_warnings:
                warnings[bed_id] = bed_warnings
        return warnings

    def _assignment_warnings(self, guest: Guest, bed: Bed, room: Room) -> list[ValidationIssue]:
        toggles = self.settings.warnings
        issues: list[ValidationIssue] = []

        # Non-binary and unknown genders never trigger this one
        if (
            toggles.gender_mismatch
            and guest.gender
            and guest.gender != NON_BINARY
            and not room.is_coed
            and guest.gender != room.gender.value
        ):
            issues.append(
                ValidationIssue(
                    type="gender_mismatch",
                    message=f"{guest.gender} guest in {room.gender.value} room",
                    details={"guest_gender": guest.gender, "room_gender": room.gender.value},
                    affected_ids=[guest.id],
                )
            )

        if toggles.bunk_preference and guest.lower_bunk and bed.bed_type == BedType.UPPER:
            issues.append(
                ValidationIssue(
                    type="bunk_preference",
                    message="Needs Lower Bunk",
                    details={"bed_type": bed.bed_type.value},
                    affected_ids=[guest.id],
                )
            )

        if toggles.family_separation and guest.group_name:
            separated = self._separated_members(guest, room)
            if separated:
                issues.append(
                    ValidationIssue(
                        type="family_separation",
                        message=f"{len(separated)} group member(s) in other room(s)",
                        details={"group_name": guest.group_name, "count": len(separated)},
                        affected_ids=separated,
                    )
                )

        return issues

    def _separated_members(self, guest: Guest, room: Room) -> list[str]:
        separated: list[str] = []
        for member in self.inventory.group_members(guest):
            member_bed_id = self.ledger.assignment_for_guest(member.id)
            if not member_bed_id:
                continue
            member_room = self.inventory.room_by_bed_id(member_bed_id)
            if member_room is not None and member_room.name != room.name:
                separated.append(member.id)
        return separated

    def _unassigned_warnings(self, guest_id: str) -> list[ValidationIssue]:
        if not self.settings.warnings.room_availability:
            return []
        guest = self.inventory.guest_by_id(guest_id)
        if guest is None:
            return []

        issues: list[ValidationIssue] = []
        compatible = [room for room in self.inventory.all_rooms() if _room_accepts(room, guest)]
        free_beds = [bed for room in compatible for bed in room.beds if bed.active and not bed.assigned_guest_id]

        if not free_beds:
            issues.append(
                ValidationIssue(
                    type="room_availability",
                    message="No compatible rooms available",
                    affected_ids=[guest.id],
                )
            )

        if guest.lower_bunk and not any(bed.bed_type != BedType.UPPER for bed in free_beds):
            issues.append(
                ValidationIssue(
                    type="room_availability",
                    message="No lower/single bunks available in compatible rooms",
                    affected_ids=[guest.id],
                )
            )

        return issues
