"""Tests for linking guests into groups."""

from __future__ import annotations

import pytest

from lodging.groups import generate_group_name, link_guests, unlink_guest


class TestGenerateGroupName:
    @pytest.mark.parametrize(
        "names, expected",
        [
            (["Smith"], "Smith Family"),
            (["Smith", "smith"], "Smith Family"),
            (["Smith", "Jones"], "Jones-Smith Group"),
            (["", "  "], "Group"),
            ([], "Group"),
        ],
    )
    def test_names(self, names, expected):
        assert generate_group_name(names) == expected


class TestLinking:
    def test_link_two_guests(self, inventory):
        inventory.update_guest("g1", {"last_name": "Smith"})
        inventory.update_guest("g2", {"last_name": "Smith"})

        assert link_guests(inventory, "g1", "g2") == "Smith Family"
        assert inventory.guest_by_id("g2").group_name == "Smith Family"

    def test_link_merges_existing_groups(self, inventory):
        inventory.update_guest("g1", {"last_name": "Smith", "group_name": "A"})
        inventory.update_guest("g2", {"last_name": "Smith", "group_name": "A"})
        inventory.update_guest("g3", {"last_name": "Jones"})

        name = link_guests(inventory, "g3", "g1")

        assert name == "Jones-Smith Group"
        assert [g.group_name for g in inventory.guests[:3]] == [name, name, name]

    def test_link_self_or_unknown(self, inventory):
        assert link_guests(inventory, "g1", "g1") is None
        assert link_guests(inventory, "g1", "ghost") is None

    def test_unlink_dissolves_pair(self, inventory):
        link_guests(inventory, "g1", "g2")

        assert unlink_guest(inventory, "g1") is True

        assert inventory.guest_by_id("g1").group_name is None
        assert inventory.guest_by_id("g2").group_name is None

    def test_unlink_keeps_larger_group(self, inventory):
        link_guests(inventory, "g1", "g2")
        link_guests(inventory, "g1", "g3")

        unlink_guest(inventory, "g1")

        assert inventory.guest_by_id("g2").group_name is not None
        assert inventory.guest_by_id("g2").group_name == inventory.guest_by_id("g3").group_name

    def test_unlink_ungrouped(self, inventory):
        assert unlink_guest(inventory, "g1") is False
