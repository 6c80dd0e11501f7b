"""
Pydantic schemas for inventory endpoints.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from lodging.models import Dormitory, Guest


class GuestImport(BaseModel):
    """Replace the guest list; clears assignments and history."""

    guests: list[Guest] = Field(default_factory=list)


class DormitoryImport(BaseModel):
    """Replace the dormitory tree; clears assignments and history."""

    dormitories: list[Dormitory] = Field(default_factory=list)


class InventoryResponse(BaseModel):
    guests: list[Guest]
    dormitories: list[Dormitory]


class LinkGuestsRequest(BaseModel):
    """Merge two guests, and anyone already grouped with either, into one group."""

    source_id: str
    target_id: str


class UnlinkGuestRequest(BaseModel):
    guest_id: str


class GroupResponse(BaseModel):
    changed: bool
    group_name: str | None = None
    guests: list[Guest]
