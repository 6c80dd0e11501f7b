"""
Validation Router - warnings for committed placements.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends

from ..dependencies import Workspace, get_workspace
from ..schemas import GuestWarningsResponse, WarningsResponse

router = APIRouter(prefix="/api/validation", tags=["validation"])


@router.get("")
async def get_warnings(workspace: Workspace = Depends(get_workspace)) -> WarningsResponse:
    warnings = workspace.validator().all_warnings()
    return WarningsResponse(warnings=warnings, total=sum(len(w) for w in warnings.values()))


@router.get("/guests/{guest_id}")
async def get_guest_warnings(guest_id: str, workspace: Workspace = Depends(get_workspace)) -> GuestWarningsResponse:
    workspace.require_guest(guest_id)
    return GuestWarningsResponse(guest_id=guest_id, warnings=workspace.validator().warnings_for_guest(guest_id))
