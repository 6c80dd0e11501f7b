"""
Lodging - dormitory bed placement and assignment tracking.

This package contains:
- models / inventory: guests and the dormitory -> room -> bed tree
- placement: multi-pass weighted scoring engine
- ledger: committed assignments, suggestions, undo/redo
- validator: placement warnings
- groups: linking guests into families/groups
- config: typed configuration and placement settings
"""

from lodging.groups import generate_group_name, link_guests, unlink_guest
from lodging.inventory import Inventory, default_dormitories
from lodging.ledger import AssignmentLedger
from lodging.models import HISTORY_SIZE, Bed, BedType, Dormitory, Guest, Room, RoomGender
from lodging.placement import PlacementEngine
from lodging.validator import AssignmentValidator, ValidationIssue

__all__ = [
    "HISTORY_SIZE",
    "AssignmentLedger",
    "AssignmentValidator",
    "Bed",
    "BedType",
    "Dormitory",
    "Guest",
    "Inventory",
    "PlacementEngine",
    "Room",
    "RoomGender",
    "ValidationIssue",
    "default_dormitories",
    "generate_group_name",
    "link_guests",
    "unlink_guest",
]
