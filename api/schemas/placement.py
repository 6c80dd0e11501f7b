"""
Pydantic schemas for suggestion / auto-placement endpoints.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from .assignments import LedgerState


class AutoPlaceRequest(BaseModel):
    room_name: str | None = None  # limit placement to one room
    debug_mode: bool = False


class AutoPlaceResponse(BaseModel):
    suggestions: dict[str, str]
    placed_count: int
    unplaced_count: int
    summary: dict[str, Any] = Field(default_factory=dict)


class SuggestRequest(BaseModel):
    guest_id: str
    bed_id: str


class AcceptRequest(BaseModel):
    guest_id: str


class AcceptRoomRequest(BaseModel):
    room_name: str


class AcceptResponse(BaseModel):
    accepted: int
    state: LedgerState
