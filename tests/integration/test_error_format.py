"""Integration tests for the error envelope outside the resource handlers."""

import pytest

pytestmark = pytest.mark.integration


class TestStandardizedErrors:
    def test_auth_error_has_envelope(self, api_client):
        response = api_client.post("/api/products", {}, format="json")
        data = response.json()
        assert data["success"] is False
        assert isinstance(data["error"], str)
        assert data["message"]

    def test_malformed_json_is_a_validation_error(self, auth_client):
        response = auth_client.post(
            "/api/products", data="{", content_type="application/json"
        )
        assert response.status_code == 400
        data = response.json()
        assert data["success"] is False
        assert data["error"] == "ValidationError"
        assert data["validationErrors"][0]["field"] == "body"

    def test_unsupported_media_type(self, auth_client):
        response = auth_client.post(
            "/api/products", data="name=x", content_type="text/plain"
        )
        assert response.status_code == 415
        data = response.json()
        assert data["success"] is False
        assert data["error"] == "UnsupportedMediaType"

    def test_unknown_route_returns_envelope(self, client):
        response = client.get("/api/unknown")
        assert response.status_code == 404
        assert response.json() == {
            "success": False,
            "error": "RouteNotFound",
            "message": "Route not found.",
        }
