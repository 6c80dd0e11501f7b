"""
Pydantic schemas for the Lodging API.

Re-exports all schemas for convenient importing.
"""

from __future__ import annotations

from .assignments import (
    AssignRequest,
    LedgerState,
    MutationResponse,
    SwapRequest,
    UnassignRequest,
    ledger_state,
)
from .inventory import (
    DormitoryImport,
    GroupResponse,
    GuestImport,
    InventoryResponse,
    LinkGuestsRequest,
    UnlinkGuestRequest,
)
from .placement import (
    AcceptRequest,
    AcceptResponse,
    AcceptRoomRequest,
    AutoPlaceRequest,
    AutoPlaceResponse,
    SuggestRequest,
)
from .validation import GuestWarningsResponse, WarningsResponse

__all__ = [
    # Assignments
    "AssignRequest",
    "LedgerState",
    "MutationResponse",
    "SwapRequest",
    "UnassignRequest",
    "ledger_state",
    # Inventory
    "DormitoryImport",
    "GuestImport",
    "InventoryResponse",
    "GroupResponse",
    "LinkGuestsRequest",
    "UnlinkGuestRequest",
    # Placement
    "AcceptRequest",
    "AcceptResponse",
    "AcceptRoomRequest",
    "AutoPlaceRequest",
    "AutoPlaceResponse",
    "SuggestRequest",
    # Validation
    "GuestWarningsResponse",
    "WarningsResponse",
]
