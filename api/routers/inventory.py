"""
Inventory Router - guest list and dormitory layout.

Replacing either wholesale clears assignments, suggestions and history.
Group links edit guests in place and leave the ledger alone.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends

from lodging.groups import link_guests, unlink_guest

from ..dependencies import Workspace, get_workspace
from ..schemas import (
    DormitoryImport,
    GroupResponse,
    GuestImport,
    InventoryResponse,
    LinkGuestsRequest,
    UnlinkGuestRequest,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/inventory", tags=["inventory"])


def _inventory_response(workspace: Workspace) -> InventoryResponse:
    return InventoryResponse(
        guests=workspace.inventory.guests,
        dormitories=workspace.inventory.dormitories,
    )


@router.get("")
async def get_inventory(workspace: Workspace = Depends(get_workspace)) -> InventoryResponse:
    return _inventory_response(workspace)


@router.put("/guests")
async def replace_guests(
    payload: GuestImport,
    workspace: Workspace = Depends(get_workspace),
) -> InventoryResponse:
    workspace.replace_guests(payload.guests)
    logger.info(f"Guest list replaced ({len(payload.guests)} guests)")
    return _inventory_response(workspace)


@router.put("/dormitories")
async def replace_dormitories(
    payload: DormitoryImport,
    workspace: Workspace = Depends(get_workspace),
) -> InventoryResponse:
    workspace.replace_dormitories(payload.dormitories)
    logger.info(f"Dormitory layout replaced ({len(payload.dormitories)} dormitories)")
    return _inventory_response(workspace)


@router.post("/groups/link")
async def link_group(request: LinkGuestsRequest, workspace: Workspace = Depends(get_workspace)) -> GroupResponse:
    workspace.require_guest(request.source_id)
    workspace.require_guest(request.target_id)
    group_name = link_guests(workspace.inventory, request.source_id, request.target_id)
    return GroupResponse(changed=group_name is not None, group_name=group_name, guests=workspace.inventory.guests)


@router.post("/groups/unlink")
async def unlink_group(request: UnlinkGuestRequest, workspace: Workspace = Depends(get_workspace)) -> GroupResponse:
    workspace.require_guest(request.guest_id)
    changed = unlink_guest(workspace.inventory, request.guest_id)
    return GroupResponse(changed=changed, guests=workspace.inventory.guests)
