"""Tests for the plain-data form of the ledger."""

from __future__ import annotations

import json

from lodging.ledger import (
    AssignmentLedger,
    assignments_to_pairs,
    dump_ledger,
    history_from_dicts,
    load_ledger,
    pairs_to_assignments,
)


class TestPairs:
    def test_assignments_become_pairs(self):
        assert assignments_to_pairs({"g1": "N1", "g2": "N2"}) == [["g1", "N1"], ["g2", "N2"]]

    def test_malformed_pairs_are_skipped(self):
        raw = [["g1", "N1"], ["g2"], "g3", ["g4", 5], ("g5", "N5")]
        assert pairs_to_assignments(raw) == {"g1": "N1", "g5": "N5"}

    def test_none_is_empty(self):
        assert pairs_to_assignments(None) == {}


class TestLedgerDump:
    def test_dump_is_json_safe(self, ledger):
        ledger.assign("g1", "N1")
        ledger.assign("g3", "N3")

        data = json.loads(json.dumps(dump_ledger(ledger)))

        assert data["assignments"] == [["g1", "N1"], ["g3", "N3"]]
        assert len(data["assignment_history"]) == 2
        assert data["assignment_history"][1]["assignments"] == [["g1", "N1"]]
        assert data["assignment_history"][0]["dormitories"][0]["name"] == "North"

    def test_load_restores_map_and_history(self, ledger, inventory):
        ledger.assign("g1", "N1")
        ledger.assign("g3", "N3")
        data = json.loads(json.dumps(dump_ledger(ledger)))

        restored = AssignmentLedger(inventory)
        load_ledger(restored, data)

        assert restored.assignments == {"g1": "N1", "g3": "N3"}
        assert restored.history_depth == 2
        assert restored.check_invariants() == []

        restored.undo()
        assert restored.assignments == {"g1": "N1"}
        assert restored.check_invariants() == []

    def test_history_from_dicts_rebuilds_tree(self, ledger):
        ledger.assign("g1", "N1")
        ledger.assign("g2", "N2")
        data = json.loads(json.dumps(dump_ledger(ledger)))

        states = history_from_dicts(data["assignment_history"])

        assert states[1].assignment_map() == {"g1": "N1"}
        assert states[1].dormitories[0].rooms[0].beds[0].assigned_guest_id == "g1"

    def test_load_keeps_only_recent_history(self, inventory):
        source = AssignmentLedger(inventory)
        for bed_id in ["N1", "N2", "S1", "S2"]:
            source.assign("g1", bed_id)
        data = dump_ledger(source)

        target = AssignmentLedger(inventory, history_size=2)
        load_ledger(target, data)

        assert target.history_depth == 2
