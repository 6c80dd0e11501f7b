"""Linking guests into families/groups by a shared group name."""

from __future__ import annotations

import logging

from .inventory import Inventory

logger = logging.getLogger(__name__)


def generate_group_name(last_names: list[str]) -> str:
    unique: dict[str, str] = {}
    for name in last_names:
        text = (name or "").strip()
        if text and text.lower() not in unique:
            unique[text.lower()] = text

    names = list(unique.values())
    if not names:
        return "Group"
    if len(names) == 1:
        return f"{names[0]} Family"
    return f"{'-'.join(sorted(names, key=str.lower))} Group"


def link_guests(inventory: Inventory, source_id: str, target_id: str) -> str | None:
    """Put two guests, and everyone already grouped with either, in one group.

    Returns the new group name, or None when the ids are equal or unknown.
    """
    if source_id == target_id:
        return None
    source = inventory.guest_by_id(source_id)
    target = inventory.guest_by_id(target_id)
    if source is None or target is None:
        return None

    member_ids = {source_id, target_id}
    for anchor in (source, target):
        member_ids.update(member.id for member in inventory.group_members(anchor))

    members = [guest for guest in inventory.guests if guest.id in member_ids]
    group_name = generate_group_name([guest.last_name for guest in members])
    for guest in members:
        inventory.update_guest(guest.id, {"group_name": group_name})

    logger.debug(f"Linked {len(members)} guest(s) as '{group_name}'")
    return group_name


def unlink_guest(inventory: Inventory, guest_id: str) -> bool:
    """Remove a guest from their group; a lone remaining member is ungrouped too."""
    guest = inventory.guest_by_id(guest_id)
    if guest is None or not guest.group_name:
        return False

    remaining = inventory.group_members(guest)
    inventory.update_guest(guest_id, {"group_name": None})
    if len(remaining) == 1:
        inventory.update_guest(remaining[0].id, {"group_name": None})
    return True
