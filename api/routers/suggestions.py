"""
Suggestions Router - auto-placement and the suggestion overlay.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends

from ..dependencies import Workspace, get_workspace
from ..schemas import (
    AcceptRequest,
    AcceptResponse,
    AcceptRoomRequest,
    AutoPlaceRequest,
    AutoPlaceResponse,
    LedgerState,
    MutationResponse,
    SuggestRequest,
    ledger_state,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/suggestions", tags=["suggestions"])


@router.post("/auto-place")
async def auto_place(request: AutoPlaceRequest, workspace: Workspace = Depends(get_workspace)) -> AutoPlaceResponse:
    """Run the placement engine and install its suggestions."""
    engine = workspace.engine(debug_mode=request.debug_mode)
    if request.room_name:
        workspace.require_room(request.room_name)
        suggestions = workspace.ledger.auto_place_room(engine, request.room_name)
    else:
        suggestions = workspace.ledger.auto_place(engine)

    suggested = workspace.ledger.suggested_assignments
    unplaced = sum(1 for guest_id in workspace.ledger.unassigned_guest_ids() if guest_id not in suggested)
    return AutoPlaceResponse(
        suggestions=suggestions,
        placed_count=len(suggestions),
        unplaced_count=unplaced,
        summary=engine.last_log.get_summary() if engine.last_log else {},
    )


@router.post("/suggest")
async def suggest(request: SuggestRequest, workspace: Workspace = Depends(get_workspace)) -> MutationResponse:
    workspace.require_guest(request.guest_id)
    workspace.require_bed(request.bed_id)
    changed = workspace.ledger.suggest(request.guest_id, request.bed_id)
    return MutationResponse(changed=changed, state=ledger_state(workspace.ledger))


@router.post("/accept")
async def accept_suggestion(request: AcceptRequest, workspace: Workspace = Depends(get_workspace)) -> AcceptResponse:
    workspace.require_guest(request.guest_id)
    accepted = 1 if workspace.ledger.accept_suggestion(request.guest_id) else 0
    return AcceptResponse(accepted=accepted, state=ledger_state(workspace.ledger))


@router.post("/accept-all")
async def accept_all(workspace: Workspace = Depends(get_workspace)) -> AcceptResponse:
    accepted = workspace.ledger.accept_all()
    return AcceptResponse(accepted=accepted, state=ledger_state(workspace.ledger))


@router.post("/accept-room")
async def accept_room(request: AcceptRoomRequest, workspace: Workspace = Depends(get_workspace)) -> AcceptResponse:
    workspace.require_room(request.room_name)
    accepted = workspace.ledger.accept_suggestions_for_room(request.room_name)
    return AcceptResponse(accepted=accepted, state=ledger_state(workspace.ledger))


@router.delete("")
async def clear_suggestions(workspace: Workspace = Depends(get_workspace)) -> LedgerState:
    workspace.ledger.clear_suggestions()
    return ledger_state(workspace.ledger)
