"""
Tests for the clients REST API backed by MongoEngine (mongomock).
"""
import pytest
from fastapi.testclient import TestClient

from floral_crm.fastapi_app import fastapi_app

pytestmark = pytest.mark.integration


@pytest.fixture
def api(mongo):
    return TestClient(fastapi_app)


def _create(api, **fields):
    body = {"firstName": "Ana", "lastName": "Li", "status": "prospect", **fields}
    response = api.post("/api/clients/", json=body)
    assert response.status_code == 201, response.text
    return response.json()["data"]


class TestClientsApi:

    def test_list_empty(self, api):
        response = api.get("/api/clients/")
        assert response.status_code == 200
        assert response.json() == {"success": True, "data": []}

    def test_create_assigns_identity_and_timestamps(self, api):
        data = _create(api, eventType="wedding", eventDate="2025-06-14", budget=1500)

        assert len(data["_id"]) == 24
        assert data["eventDate"] == "2025-06-14"
        assert data["contactDate"] is None
        assert data["budget"] == 1500
        assert data["createdAt"] and data["updatedAt"]

    def test_list_is_ordered_by_last_name(self, api):
        _create(api, firstName="Zoe", lastName="Young")
        _create(api, firstName="Ben", lastName="Adams")

        names = [c["lastName"] for c in api.get("/api/clients/").json()["data"]]
        assert names == ["Adams", "Young"]

    def test_create_rejects_invalid_body(self, api):
        response = api.post("/api/clients/", json={"firstName": "Ana", "status": "prospect"})
        assert response.status_code == 422

        response = api.post(
            "/api/clients/",
            json={"firstName": "Ana", "lastName": "Li", "status": "prospect", "eventDate": "06/14/2025"},
        )
        assert response.status_code == 422
        assert api.get("/api/clients/").json()["data"] == []

    @pytest.mark.parametrize("budget", ["inf", "1e400", "nan"])
    def test_non_finite_budget_is_rejected(self, api, budget):
        response = api.post(
            "/api/clients/",
            json={"firstName": "Ana", "lastName": "Li", "status": "prospect", "budget": budget},
        )
        assert response.status_code == 422

        listing = api.get("/api/clients/")
        assert listing.status_code == 200
        assert listing.json()["data"] == []

    def test_get_client(self, api):
        created = _create(api)
        response = api.get(f"/api/clients/{created['_id']}")
        assert response.status_code == 200
        assert response.json()["data"]["firstName"] == "Ana"

    def test_update_replaces_editable_fields(self, api):
        created = _create(api, notes="Likes tulips", eventType="birthday")

        response = api.put(
            f"/api/clients/{created['_id']}",
            json={"firstName": "Ana", "lastName": "Li", "status": "booked", "eventDate": "2025-06-14"},
        )

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["_id"] == created["_id"]
        assert data["status"] == "booked"
        assert data["eventDate"] == "2025-06-14"
        assert data["notes"] is None
        assert data["eventType"] is None

    def test_update_unknown_id(self, api):
        body = {"firstName": "Ana", "lastName": "Li", "status": "booked"}
        assert api.put("/api/clients/65f0c0ffee0000000000beef", json=body).status_code == 404
        assert api.put("/api/clients/not-an-id", json=body).status_code == 404

    def test_delete(self, api):
        created = _create(api)
        kept = _create(api, firstName="Tom", lastName="Baker")

        response = api.delete(f"/api/clients/{created['_id']}")
        assert response.status_code == 200
        assert response.json() == {"success": True, "data": None}

        ids = [c["_id"] for c in api.get("/api/clients/").json()["data"]]
        assert ids == [kept["_id"]]
        assert api.delete(f"/api/clients/{created['_id']}").status_code == 404

    def test_health(self, api):
        assert api.get("/api/clients/health/status").json()["status"] == "ok"
        assert api.get("/api/health").json()["status"] == "ok"
