"""
Domain models for dormitory bed placement.

Guests come from the registration import; dormitories, rooms and beds make up
the lodging inventory. Beds carry a weak back-reference to the guest sleeping
in them (``assigned_guest_id``), which the assignment ledger keeps in sync
with its own guest -> bed map.
"""

from __future__ import annotations

import re
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field, field_validator

HISTORY_SIZE = 10

DEFAULT_DORMITORY_COLOR = "#f8f9fa"


class BedType(str, Enum):
    UPPER = "upper"
    LOWER = "lower"
    SINGLE = "single"


class RoomGender(str, Enum):
    MALE = "M"
    FEMALE = "F"
    COED = "Coed"


BED_TYPES: list[str] = [t.value for t in BedType]
ROOM_GENDERS: list[str] = [g.value for g in RoomGender]

NON_BINARY = "Non-binary/Other"

_GENDER_ALIASES = {
    "m": "M",
    "male": "M",
    "man": "M",
    "f": "F",
    "female": "F",
    "woman": "F",
    "non-binary/other": NON_BINARY,
    "non-binary": NON_BINARY,
    "nonbinary": NON_BINARY,
    "other": NON_BINARY,
}

_TRUTHY = {"yes", "y", "true", "1"}


class Guest(BaseModel):
    """A retreat guest waiting for (or holding) a bed."""

    id: str
    first_name: str = ""
    last_name: str = ""
    preferred_name: str | None = None
    gender: str = ""  # 'M', 'F', 'Non-binary/Other' or blank when unknown
    age: int | str | None = None
    group_name: str | None = None
    lower_bunk: bool = False
    arrival: str | None = None
    departure: str | None = None
    notes: str | None = None

    @field_validator("gender", mode="before")
    @classmethod
    def normalize_gender(cls, v: Any) -> str:
        if v is None:
            return ""
        text = str(v).strip()
        if not text:
            return ""
        return _GENDER_ALIASES.get(text.lower(), text)

    @field_validator("lower_bunk", mode="before")
    @classmethod
    def parse_lower_bunk(cls, v: Any) -> bool:
        if isinstance(v, bool):
            return v
        if v is None:
            return False
        return str(v).strip().lower() in _TRUTHY

    @field_validator("age", mode="before")
    @classmethod
    def coerce_float_age(cls, v: Any) -> Any:
        if isinstance(v, float):
            return int(v)
        return v

    @field_validator("group_name", mode="before")
    @classmethod
    def blank_group_is_none(cls, v: Any) -> str | None:
        if v is None:
            return None
        text = str(v)
        return text if text.strip() else None

    @property
    def parsed_age(self) -> int | None:
        """Age as an integer, or None when missing or unparseable."""
        if self.age is None or isinstance(self.age, bool):
            return None
        if isinstance(self.age, int):
            return self.age
        match = re.match(r"^\s*(-?\d+)", str(self.age))
        return int(match.group(1)) if match else None

    @property
    def display_name(self) -> str:
        first = self.preferred_name or self.first_name
        return f"{first} {self.last_name}".strip() or self.id


class Bed(BaseModel):
    """Smallest assignable unit. Belongs to exactly one room."""

    bed_id: str
    bed_type: BedType = BedType.SINGLE
    position: int = 0
    active: bool = True
    assigned_guest_id: str | None = None

    def clone(self) -> Bed:
        return Bed(
            bed_id=self.bed_id,
            bed_type=self.bed_type,
            position=self.position,
            active=self.active,
            assigned_guest_id=self.assigned_guest_id,
        )


class Room(BaseModel):
    name: str
    gender: RoomGender = RoomGender.COED
    active: bool = True
    beds: list[Bed] = Field(default_factory=list)

    @property
    def is_coed(self) -> bool:
        return self.gender == RoomGender.COED

    def clone(self) -> Room:
        return Room(
            name=self.name,
            gender=self.gender,
            active=self.active,
            beds=[bed.clone() for bed in self.beds],
        )


class Dormitory(BaseModel):
    """A building. Color is display-only."""

    name: str
    active: bool = True
    color: str = DEFAULT_DORMITORY_COLOR
    rooms: list[Room] = Field(default_factory=list)

    def clone(self) -> Dormitory:
        return Dormitory(
            name=self.name,
            active=self.active,
            color=self.color,
            rooms=[room.clone() for room in self.rooms],
        )


def clone_dormitories(dormitories: list[Dormitory]) -> list[Dormitory]:
    """Structural copy of a dormitory tree; nothing is shared with the input."""
    return [dormitory.clone() for dormitory in dormitories]
