"""
Root test configuration and fixtures for the lodging project.

Provides guests, a small dormitory layout, and a ledger over them. External
services (PocketBase) are mocked for every test.
"""

from __future__ import annotations

import os
from collections.abc import Callable, Iterator
from typing import Any
from unittest.mock import Mock, patch

import pytest

from lodging.config import ConfigLoader, PlacementSettings, default_settings
from lodging.inventory import Inventory
from lodging.ledger import AssignmentLedger
from lodging.models import Bed, BedType, Dormitory, Guest, Room, RoomGender


class RecordNotFound(Exception):
    status = 404


def create_mock_pocketbase() -> Mock:
    """Mock PocketBase whose ``config`` collection has no records."""
    mock_pb = Mock()

    mock_collection = Mock()
    mock_collection.get_first_list_item = Mock(side_effect=RecordNotFound("not found"))
    mock_collection.auth_with_password = Mock(return_value=True)
    mock_collection.get_full_list = Mock(return_value=[])
    mock_collection.get_list = Mock(return_value=Mock(items=[], total_items=0))
    mock_collection.create = Mock(return_value=Mock(id="mock-id"))
    mock_collection.update = Mock()

    mock_pb.collection = Mock(return_value=mock_collection)
    return mock_pb


@pytest.fixture
def mock_pocketbase() -> Mock:
    return create_mock_pocketbase()


@pytest.fixture(autouse=True)
def isolate_config() -> Iterator[None]:
    """No real PocketBase, no leaked CONFIG_* overrides, fresh loader singleton."""
    saved = {k: v for k, v in os.environ.items() if k.startswith("CONFIG_") or k == "POCKETBASE_URL"}
    for key in saved:
        del os.environ[key]
    ConfigLoader.reset()

    with patch("lodging.config.loader.PocketBase", return_value=create_mock_pocketbase()):
        yield

    ConfigLoader.reset()
    for key in [k for k in os.environ if k.startswith("CONFIG_") or k == "POCKETBASE_URL"]:
        del os.environ[key]
    os.environ.update(saved)


def make_guest(guest_id: str, **fields: Any) -> Guest:
    data: dict[str, Any] = {"id": guest_id, "first_name": guest_id.title(), "last_name": "Guest"}
    data.update(fields)
    return Guest(**data)


def make_room(name: str, gender: RoomGender, bed_ids: list[str], bed_type: BedType = BedType.SINGLE) -> Room:
    return Room(
        name=name,
        gender=gender,
        beds=[Bed(bed_id=bed_id, bed_type=bed_type, position=i) for i, bed_id in enumerate(bed_ids, start=1)],
    )


@pytest.fixture
def guest_factory() -> Callable[..., Guest]:
    return make_guest


@pytest.fixture
def small_dormitories() -> list[Dormitory]:
    """Two buildings: M and F rooms in North, a co-ed room in South."""
    return [
        Dormitory(
            name="North",
            rooms=[
                make_room("North M", RoomGender.MALE, ["N1", "N2"]),
                make_room("North F", RoomGender.FEMALE, ["N3", "N4"]),
            ],
        ),
        Dormitory(
            name="South",
            rooms=[make_room("South Coed", RoomGender.COED, ["S1", "S2"])],
        ),
    ]


@pytest.fixture
def guests() -> list[Guest]:
    return [
        make_guest("g1", gender="M"),
        make_guest("g2", gender="M"),
        make_guest("g3", gender="F"),
        make_guest("g4", gender="F"),
    ]


@pytest.fixture
def inventory(guests: list[Guest], small_dormitories: list[Dormitory]) -> Inventory:
    return Inventory(guests=guests, dormitories=small_dormitories)


@pytest.fixture
def ledger(inventory: Inventory) -> AssignmentLedger:
    return AssignmentLedger(inventory)


@pytest.fixture
def settings() -> PlacementSettings:
    return default_settings()
