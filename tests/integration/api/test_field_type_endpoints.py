import pytest
from fastapi.testclient import TestClient

from field_types.kinds import FieldKind

PREFIX = "/api/v1/blueprint/field-types"


@pytest.mark.integration
class TestFieldTypeEndpoints:

    def test_list_field_types(self, client: TestClient):
        """Test that every built-in field type is listed, grouped by category."""
        response = client.get(PREFIX)

        assert response.status_code == 200
        data = response.json()
        assert {item["handle"] for item in data} == {kind.value for kind in FieldKind}
        categories = [item["category"] for item in data]
        assert categories == sorted(categories)

    def test_get_field_type(self, client: TestClient):
        response = client.get(f"{PREFIX}/textarea")

        assert response.status_code == 200
        data = response.json()
        assert data["handle"] == "textarea"
        assert data["column_type"] == "TEXT"
        assert data["ui_component"] == "TextareaField"

    def test_virtual_field_type_has_no_column(self, client: TestClient):
        response = client.get(f"{PREFIX}/sortable_children")

        assert response.json()["column_type"] is None

    def test_unknown_field_type(self, client: TestClient):
        response = client.get(f"{PREFIX}/signature")

        assert response.status_code == 404
        assert response.json() == {"error": "Field type not found"}
