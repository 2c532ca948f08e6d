"""Tests for Adeline API endpoints.

Note: Fixtures for client, orchestrator, and mock_adapter are provided by
conftest.py
"""

from adeline.genui.adapter import AdapterError


class TestRootEndpoints:
    """Test root and health endpoints."""

    def test_root(self, client):
        """Test root endpoint."""
        response = client.get("/")
        assert response.status_code == 200
        data = response.json()
        assert data["message"] == "Adeline GenUI API"
        assert "version" in data

    def test_health(self, client):
        """Test health endpoint."""
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json()["status"] == "healthy"


class TestComposeEndpoint:
    """Test page composition endpoint."""

    def test_compose_returns_ai_page(self, client, mock_adapter):
        """Test AI page is returned in camelCase wire shape."""
        response = client.post(
            "/api/genui/compose",
            json={
                "message": "I want to learn fractions",
                "context": {
                    "userId": "u1",
                    "currentInterests": ["pizza"],
                    "recentActivity": [],
                },
            },
        )
        assert response.status_code == 200
        data = response.json()
        assert data["dialogue"] == "Welcome to the marketplace!"
        assert data["components"][0]["type"] == "dynamicLedger"
        assert data["nextActions"] == []

        prompt = mock_adapter.generate_content.await_args.args[0]
        assert "pizza" in prompt

    def test_compose_falls_back_on_failure(self, client, mock_adapter):
        """Test adapter failure still yields a usable page."""
        mock_adapter.generate_content.side_effect = AdapterError("Gemini API key not configured")

        response = client.post(
            "/api/genui/compose",
            json={"message": "I want to learn about money"},
        )
        assert response.status_code == 200
        data = response.json()
        assert len(data["components"]) >= 1
        assert any(c["type"] == "dynamicLedger" for c in data["components"])
        assert len(data["nextActions"]) >= 1

    def test_compose_strict_surfaces_failure(self, client, mock_adapter):
        """Test strict mode maps AI failures to 502."""
        mock_adapter.generate_content.return_value = "Invalid JSON response"

        response = client.post(
            "/api/genui/compose",
            json={"message": "Test", "strict": True},
        )
        assert response.status_code == 502
        assert "Failed to compose UI experience" in response.json()["detail"]

    def test_compose_strict_success(self, client):
        """Test strict mode returns the AI page when it is valid."""
        response = client.post(
            "/api/genui/compose",
            json={"message": "Test", "strict": True},
        )
        assert response.status_code == 200
        assert response.json()["dialogue"] == "Welcome to the marketplace!"

    def test_compose_rejects_empty_message(self, client):
        """Test empty message fails request validation."""
        response = client.post("/api/genui/compose", json={"message": ""})
        assert response.status_code == 422


class TestComponentsEndpoint:
    """Test component allow-list endpoint."""

    def test_list_component_types(self, client):
        """Test allow-list is exposed to the renderer."""
        response = client.get("/api/genui/components")
        assert response.status_code == 200
        assert response.json()["componentTypes"] == [
            "handDrawnIllustration",
            "dynamicLedger",
            "guidingQuestion",
        ]


class TestInteractionsEndpoint:
    """Test interaction event endpoint."""

    def test_acknowledgement(self, client):
        """Test a strong margin discovery is acknowledged."""
        response = client.post(
            "/api/genui/interactions",
            json={
                "event": {
                    "componentType": "dynamicLedger",
                    "action": "slider_change",
                    "data": {"newPrice": 10, "newProfit": 6},
                    "timestamp": 1718000000000,
                },
                "context": {"userId": "u1"},
            },
        )
        assert response.status_code == 200
        data = response.json()["response"]
        assert data["responseType"] == "acknowledgement"
        assert data["content"]["dialogue"]

    def test_no_response(self, client):
        """Test unmatched events return a null response."""
        response = client.post(
            "/api/genui/interactions",
            json={
                "event": {
                    "componentType": "unknownComponent",
                    "action": "unknown_action",
                    "data": {},
                    "timestamp": 1718000000000,
                },
            },
        )
        assert response.status_code == 200
        assert response.json()["response"] is None
