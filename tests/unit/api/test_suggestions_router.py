"""Tests for auto-placement and suggestion endpoints."""

from __future__ import annotations

from fastapi.testclient import TestClient

from api.dependencies import Workspace

MALE_BEDS = {"N1", "N2", "S1", "S2"}
FEMALE_BEDS = {"N3", "N4", "S1", "S2"}


class TestAutoPlace:
    def test_auto_place_respects_room_gender(self, client: TestClient):
        response = client.post("/api/suggestions/auto-place", json={})

        assert response.status_code == 200
        body = response.json()
        suggestions = body["suggestions"]
        assert body["placed_count"] == len(suggestions)
        assert body["placed_count"] + body["unplaced_count"] == 4
        for guest_id in ("g1", "g2"):
            if guest_id in suggestions:
                assert suggestions[guest_id] in MALE_BEDS
        for guest_id in ("g3", "g4"):
            if guest_id in suggestions:
                assert suggestions[guest_id] in FEMALE_BEDS
        assert len(set(suggestions.values())) == len(suggestions)
        assert "placed_per_pass" in body["summary"]

    def test_auto_place_leaves_committed_untouched(self, client: TestClient, workspace: Workspace):
        client.post("/api/assignments/assign", json={"guest_id": "g1", "bed_id": "N1"})

        suggestions = client.post("/api/suggestions/auto-place", json={}).json()["suggestions"]

        assert "g1" not in suggestions
        assert "N1" not in suggestions.values()
        assert workspace.ledger.assignments == {"g1": "N1"}

    def test_auto_place_single_room(self, client: TestClient):
        response = client.post("/api/suggestions/auto-place", json={"room_name": "North F"})

        suggestions = response.json()["suggestions"]
        assert set(suggestions.values()) <= {"N3", "N4"}
        assert set(suggestions) <= {"g3", "g4"}

    def test_auto_place_unknown_room_is_404(self, client: TestClient):
        response = client.post("/api/suggestions/auto-place", json={"room_name": "Attic"})
        assert response.status_code == 404


class TestSuggestAndAccept:
    def test_suggest_then_accept(self, client: TestClient):
        suggested = client.post("/api/suggestions/suggest", json={"guest_id": "g3", "bed_id": "N3"}).json()
        assert suggested["changed"] is True
        assert suggested["state"]["suggestions"] == {"g3": "N3"}
        assert suggested["state"]["can_undo"] is False

        accepted = client.post("/api/suggestions/accept", json={"guest_id": "g3"}).json()

        assert accepted["accepted"] == 1
        assert accepted["state"]["assignments"] == {"g3": "N3"}
        assert accepted["state"]["suggestions"] == {}
        assert accepted["state"]["can_undo"] is True

    def test_accept_without_suggestion(self, client: TestClient):
        response = client.post("/api/suggestions/accept", json={"guest_id": "g3"})

        assert response.status_code == 200
        assert response.json()["accepted"] == 0

    def test_suggest_unknown_bed_is_404(self, client: TestClient):
        response = client.post("/api/suggestions/suggest", json={"guest_id": "g3", "bed_id": "Z9"})
        assert response.status_code == 404

    def test_accept_all_is_one_undo_step(self, client: TestClient):
        client.post("/api/suggestions/suggest", json={"guest_id": "g1", "bed_id": "N1"})
        client.post("/api/suggestions/suggest", json={"guest_id": "g3", "bed_id": "N3"})

        accepted = client.post("/api/suggestions/accept-all").json()
        assert accepted["accepted"] == 2
        assert accepted["state"]["history_depth"] == 1

        undone = client.post("/api/assignments/undo").json()
        assert undone["state"]["assignments"] == {}

    def test_accept_room(self, client: TestClient):
        client.post("/api/suggestions/suggest", json={"guest_id": "g1", "bed_id": "N1"})
        client.post("/api/suggestions/suggest", json={"guest_id": "g3", "bed_id": "N3"})

        body = client.post("/api/suggestions/accept-room", json={"room_name": "North F"}).json()

        assert body["accepted"] == 1
        assert body["state"]["assignments"] == {"g3": "N3"}
        assert body["state"]["suggestions"] == {"g1": "N1"}

    def test_accept_unknown_room_is_404(self, client: TestClient):
        response = client.post("/api/suggestions/accept-room", json={"room_name": "Attic"})
        assert response.status_code == 404

    def test_clear_suggestions(self, client: TestClient):
        client.post("/api/suggestions/suggest", json={"guest_id": "g1", "bed_id": "N1"})

        state = client.delete("/api/suggestions").json()

        assert state["suggestions"] == {}
        assert state["assignments"] == {}
