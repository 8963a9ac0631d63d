import pytest
from fastapi.testclient import TestClient

from ticket_fixtures import TICKET_ENDPOINT, TICKET_FILLABLE

PREFIX = "/api/v1/blueprint"


@pytest.mark.integration
class TestSchemaEndpoints:

    def test_list_schemas(self, client: TestClient):
        """Test listing every registered schema."""
        response = client.get(f"{PREFIX}/schemas")

        assert response.status_code == 200
        data = {item["key"]: item for item in response.json()["data"]}
        assert set(data) == {"ticket", "ticket_reply", "orphan"}
        assert data["ticket"]["table"] == "tickets"
        assert data["ticket"]["field_count"] == len(TICKET_FILLABLE)
        assert data["orphan"]["degraded"] is True

    def test_get_schema(self, client: TestClient):
        """Test getting one resolved schema."""
        response = client.get(f"{PREFIX}/schemas/ticket")

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["key"] == "ticket"
        assert list(data["fields"]) == TICKET_FILLABLE
        assert data["fields"]["title"]["required"] is True
        assert data["collection"]["routes"]["endpoint"] == TICKET_ENDPOINT
        assert data["collection"]["model"]["fillable"] == TICKET_FILLABLE

    def test_get_schema_is_idempotent(self, client: TestClient):
        first = client.get(f"{PREFIX}/schemas/ticket").json()
        second = client.get(f"{PREFIX}/schemas/ticket").json()

        assert first == second

    def test_unknown_schema(self, client: TestClient):
        """Test that an unregistered key answers 404."""
        response = client.get(f"{PREFIX}/schemas/bogus")

        assert response.status_code == 404
        assert response.json() == {"error": "Schema not found"}

    @pytest.mark.parametrize("key", ["Ticket", "ticket-1", "ticket2", "ticket%0A"])
    def test_malformed_key(self, client: TestClient, key):
        response = client.get(f"{PREFIX}/schemas/{key}")

        assert response.status_code == 404
        assert response.json() == {"error": "Schema not found"}

    def test_missing_schema_class(self, client: TestClient, schema_registry):
        schema_registry.register("ghost", "ticket_fixtures.GhostSchema")

        response = client.get(f"{PREFIX}/schemas/ghost")

        assert response.status_code == 404
        assert response.json() == {"error": "Schema class does not exist"}

    def test_degraded_schema(self, client: TestClient):
        response = client.get(f"{PREFIX}/schemas/orphan")

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["degraded"] is True
        assert data["fields"] == {"note": {"type": "textarea", "label": "Note"}}

    def test_token_required_when_configured(self, client: TestClient, admin_token):
        """Test the elevated permission check."""
        missing = client.get(f"{PREFIX}/schemas")
        wrong = client.get(f"{PREFIX}/schemas", headers={"Authorization": "Bearer nope"})
        right = client.get(f"{PREFIX}/schemas", headers={"Authorization": f"Bearer {admin_token}"})

        assert missing.status_code == 401
        assert missing.json()["detail"] == "Missing or invalid Authorization header"
        assert wrong.status_code == 403
        assert wrong.json()["detail"] == "Sorry, you are not allowed to do that."
        assert right.status_code == 200

    def test_health(self, client: TestClient):
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"
        assert "X-Request-ID" in response.headers
