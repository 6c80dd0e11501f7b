"""
Inventory - guest records and the dormitory/room/bed tree.

The placement engine and the assignment ledger read from here; the ledger is
the only writer of ``Bed.assigned_guest_id``. Lookups never raise for unknown
ids, they return None.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from typing import Any

from .models import Bed, BedType, Dormitory, Guest, Room, RoomGender

logger = logging.getLogger(__name__)


class Inventory:
    """Guests plus dormitories, with the lookup helpers the core relies on."""

    def __init__(
        self,
        guests: list[Guest] | None = None,
        dormitories: list[Dormitory] | None = None,
    ) -> None:
        self.guests: list[Guest] = list(guests or [])
        self.dormitories: list[Dormitory] = list(dormitories or [])

    # ------------------------------------------------------------------
    # Guests
    # ------------------------------------------------------------------

    def guest_by_id(self, guest_id: str) -> Guest | None:
        for guest in self.guests:
            if guest.id == guest_id:
                return guest
        return None

    def guests_by_group(self) -> dict[str, list[Guest]]:
        """Group name -> members, for every non-blank group name."""
        groups: dict[str, list[Guest]] = {}
        for guest in self.guests:
            if guest.group_name and guest.group_name.strip():
                groups.setdefault(guest.group_name, []).append(guest)
        return groups

    def group_members(self, guest: Guest) -> list[Guest]:
        """Other guests sharing this guest's (non-blank) group name."""
        if not guest.group_name:
            return []
        return [g for g in self.guests if g.group_name == guest.group_name and g.id != guest.id]

    def add_guest(self, guest: Guest) -> Guest:
        self.guests.append(guest)
        return guest

    def update_guest(self, guest_id: str, updates: dict[str, Any]) -> Guest | None:
        for index, guest in enumerate(self.guests):
            if guest.id == guest_id:
                merged = guest.model_dump()
                merged.update(updates)
                merged["id"] = guest_id
                self.guests[index] = Guest.model_validate(merged)
                return self.guests[index]
        logger.debug(f"update_guest: unknown guest {guest_id}")
        return None

    def remove_guest(self, guest_id: str) -> bool:
        for index, guest in enumerate(self.guests):
            if guest.id == guest_id:
                del self.guests[index]
                return True
        return False

    def import_guests(self, guests: list[Guest]) -> None:
        self.guests = list(guests)
        logger.info(f"Imported {len(self.guests)} guests")

    # ------------------------------------------------------------------
    # Dormitory tree
    # ------------------------------------------------------------------

    def _iter_beds(self) -> Iterator[tuple[Dormitory, Room, Bed]]:
        for dormitory in self.dormitories:
            for room in dormitory.rooms:
                for bed in room.beds:
                    yield dormitory, room, bed

    def bed_by_id(self, bed_id: str) -> Bed | None:
        for _, _, bed in self._iter_beds():
            if bed.bed_id == bed_id:
                return bed
        return None

    def room_by_bed_id(self, bed_id: str) -> Room | None:
        for _, room, bed in self._iter_beds():
            if bed.bed_id == bed_id:
                return room
        return None

    def dormitory_by_bed_id(self, bed_id: str) -> Dormitory | None:
        for dormitory, _, bed in self._iter_beds():
            if bed.bed_id == bed_id:
                return dormitory
        return None

    def room_by_name(self, room_name: str) -> Room | None:
        for dormitory in self.dormitories:
            for room in dormitory.rooms:
                if room.name == room_name:
                    return room
        return None

    def all_rooms(self, active_only: bool = True) -> list[Room]:
        rooms: list[Room] = []
        for dormitory in self.dormitories:
            if active_only and not dormitory.active:
                continue
            for room in dormitory.rooms:
                if active_only and not room.active:
                    continue
                rooms.append(room)
        return rooms

    def all_beds(self, active_only: bool = True) -> list[Bed]:
        beds: list[Bed] = []
        for room in self.all_rooms(active_only=active_only):
            beds.extend(bed for bed in room.beds if bed.active or not active_only)
        return beds

    def available_beds(self) -> list[Bed]:
        """Active, unoccupied beds in active rooms of active dormitories."""
        return [bed for bed in self.all_beds(active_only=True) if not bed.assigned_guest_id]

    def bed_ids_for_room(self, room: Room) -> list[str]:
        return [bed.bed_id for bed in room.beds]

    def bed_ids_for_dormitory(self, dormitory: Dormitory) -> list[str]:
        return [bed.bed_id for room in dormitory.rooms for bed in room.beds]

    def add_dormitory(self, dormitory: Dormitory) -> Dormitory:
        self.dormitories.append(dormitory)
        return dormitory

    def add_room(self, dormitory_index: int, room: Room) -> Room | None:
        if 0 <= dormitory_index < len(self.dormitories):
            self.dormitories[dormitory_index].rooms.append(room)
            return room
        return None

    def add_bed(self, dormitory_index: int, room_index: int, bed: Bed) -> Bed | None:
        if 0 <= dormitory_index < len(self.dormitories):
            rooms = self.dormitories[dormitory_index].rooms
            if 0 <= room_index < len(rooms):
                rooms[room_index].beds.append(bed)
                return bed
        return None

    def import_dormitories(self, dormitories: list[Dormitory]) -> None:
        self.dormitories = list(dormitories)
        logger.info(f"Imported {len(self.dormitories)} dormitories")

    def replace_dormitories(self, dormitories: list[Dormitory]) -> None:
        """Swap in a restored tree (undo/redo). Caller owns consistency."""
        self.dormitories = dormitories


def _beds(prefix: str, types: list[BedType]) -> list[Bed]:
    return [Bed(bed_id=f"{prefix}{i}", bed_type=t, position=i) for i, t in enumerate(types, start=1)]


def default_dormitories() -> list[Dormitory]:
    """Stock layout used when a workspace starts without an imported one."""
    bunk_pairs = [BedType.LOWER, BedType.UPPER, BedType.LOWER, BedType.UPPER]
    large = bunk_pairs + [BedType.SINGLE, BedType.SINGLE]
    return [
        Dormitory(
            name="Main Building",
            rooms=[
                Room(name="Men's Dorm A", gender=RoomGender.MALE, beds=_beds("MA", large)),
                Room(name="Men's Dorm B", gender=RoomGender.MALE, beds=_beds("MB", bunk_pairs)),
                Room(name="Women's Dorm A", gender=RoomGender.FEMALE, beds=_beds("WA", large)),
                Room(name="Women's Dorm B", gender=RoomGender.FEMALE, beds=_beds("WB", bunk_pairs)),
            ],
        ),
        Dormitory(
            name="Family Building",
            rooms=[
                Room(name="Family Room", gender=RoomGender.COED, beds=_beds("FR", [BedType.SINGLE] * 4)),
            ],
        ),
    ]
