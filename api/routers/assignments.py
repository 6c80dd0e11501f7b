"""
Assignments Router - committed guest/bed mapping and undo/redo.

Unknown guest or bed ids are rejected with 404 here; the ledger itself
would silently ignore them.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException

from ..dependencies import Workspace, get_workspace
from ..schemas import AssignRequest, LedgerState, MutationResponse, SwapRequest, UnassignRequest, ledger_state

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/assignments", tags=["assignments"])


def _response(workspace: Workspace, changed: bool) -> MutationResponse:
    return MutationResponse(changed=changed, state=ledger_state(workspace.ledger))


@router.get("")
async def get_assignments(workspace: Workspace = Depends(get_workspace)) -> LedgerState:
    return ledger_state(workspace.ledger)


@router.post("/assign")
async def assign_guest(request: AssignRequest, workspace: Workspace = Depends(get_workspace)) -> MutationResponse:
    workspace.require_guest(request.guest_id)
    workspace.require_bed(request.bed_id)
    return _response(workspace, workspace.ledger.assign(request.guest_id, request.bed_id))


@router.post("/unassign")
async def unassign_guest(request: UnassignRequest, workspace: Workspace = Depends(get_workspace)) -> MutationResponse:
    if request.guest_id:
        workspace.require_guest(request.guest_id)
        return _response(workspace, workspace.ledger.unassign(request.guest_id))
    if not request.bed_ids:
        raise HTTPException(status_code=400, detail="Provide guest_id or bed_ids")
    for bed_id in request.bed_ids:
        workspace.require_bed(bed_id)
    return _response(workspace, workspace.ledger.unassign_from_beds(request.bed_ids) > 0)


@router.post("/swap")
async def swap_guests(request: SwapRequest, workspace: Workspace = Depends(get_workspace)) -> MutationResponse:
    workspace.require_guest(request.guest_id_1)
    workspace.require_guest(request.guest_id_2)
    return _response(workspace, workspace.ledger.swap(request.guest_id_1, request.guest_id_2))


@router.post("/clear")
async def clear_assignments(workspace: Workspace = Depends(get_workspace)) -> MutationResponse:
    return _response(workspace, workspace.ledger.clear_all())


@router.post("/undo")
async def undo(workspace: Workspace = Depends(get_workspace)) -> MutationResponse:
    return _response(workspace, workspace.ledger.undo())


@router.post("/redo")
async def redo(workspace: Workspace = Depends(get_workspace)) -> MutationResponse:
    return _response(workspace, workspace.ledger.redo())
