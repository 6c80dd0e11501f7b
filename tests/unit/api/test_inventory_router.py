"""Tests for the /api/inventory endpoints."""

from __future__ import annotations

from fastapi.testclient import TestClient


class TestInventoryRouter:
    def test_get_inventory(self, client: TestClient):
        body = client.get("/api/inventory").json()

        assert [g["id"] for g in body["guests"]] == ["g1", "g2", "g3", "g4"]
        assert [d["name"] for d in body["dormitories"]] == ["North", "South"]

    def test_replace_guests_clears_ledger(self, client: TestClient):
        client.post("/api/assignments/assign", json={"guest_id": "g1", "bed_id": "N1"})

        response = client.put(
            "/api/inventory/guests",
            json={"guests": [{"id": "h1", "first_name": "Hana", "gender": "F", "lower_bunk": True}]},
        )

        assert response.status_code == 200
        assert [g["id"] for g in response.json()["guests"]] == ["h1"]
        state = client.get("/api/assignments").json()
        assert state["assignments"] == {}
        assert state["can_undo"] is False

    def test_replace_dormitories(self, client: TestClient):
        layout = {
            "dormitories": [
                {
                    "name": "Annex",
                    "rooms": [
                        {
                            "name": "Annex 1",
                            "gender": "Coed",
                            "beds": [{"bed_id": "A1", "bed_type": "lower"}, {"bed_id": "A2", "bed_type": "upper"}],
                        }
                    ],
                }
            ]
        }

        body = client.put("/api/inventory/dormitories", json=layout).json()

        assert [d["name"] for d in body["dormitories"]] == ["Annex"]
        assert client.post("/api/assignments/assign", json={"guest_id": "g1", "bed_id": "A1"}).status_code == 200
        assert client.post("/api/assignments/assign", json={"guest_id": "g1", "bed_id": "N1"}).status_code == 404

    def test_invalid_guest_payload_is_422(self, client: TestClient):
        response = client.put("/api/inventory/guests", json={"guests": [{"first_name": "No Id"}]})
        assert response.status_code == 422


class TestGroupLinking:
    def test_link_guests(self, client: TestClient):
        body = client.post("/api/inventory/groups/link", json={"source_id": "g1", "target_id": "g3"}).json()

        assert body["changed"] is True
        assert body["group_name"] == "Guest Family"
        grouped = {g["id"]: g["group_name"] for g in body["guests"]}
        assert grouped["g1"] == grouped["g3"] == "Guest Family"
        assert grouped["g2"] is None

    def test_link_same_guest_is_unchanged(self, client: TestClient):
        body = client.post("/api/inventory/groups/link", json={"source_id": "g1", "target_id": "g1"}).json()

        assert body["changed"] is False
        assert body["group_name"] is None

    def test_link_unknown_guest_is_404(self, client: TestClient):
        response = client.post("/api/inventory/groups/link", json={"source_id": "g1", "target_id": "nobody"})
        assert response.status_code == 404

    def test_unlink_dissolves_pair(self, client: TestClient):
        client.post("/api/inventory/groups/link", json={"source_id": "g1", "target_id": "g3"})

        body = client.post("/api/inventory/groups/unlink", json={"guest_id": "g1"}).json()

        assert body["changed"] is True
        assert all(g["group_name"] is None for g in body["guests"])

    def test_unlink_ungrouped_guest(self, client: TestClient):
        assert client.post("/api/inventory/groups/unlink", json={"guest_id": "g2"}).json()["changed"] is False

    def test_linking_leaves_assignments_alone(self, client: TestClient):
        client.post("/api/assignments/assign", json={"guest_id": "g1", "bed_id": "N1"})

        client.post("/api/inventory/groups/link", json={"source_id": "g1", "target_id": "g2"})

        state = client.get("/api/assignments").json()
        assert state["assignments"] == {"g1": "N1"}
        assert state["can_undo"] is True
