"""Common test fixtures for Adeline tests."""

import json
from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi.testclient import TestClient

from adeline.api.deps import get_orchestrator
from adeline.api.main import app
from adeline.core.config import get_settings
from adeline.genui.models import StudentContext
from adeline.genui.orchestrator import GenUIOrchestrator
from adeline.genui.schema import ComponentRegistry


def make_page_json(
    dialogue: str = "Welcome to the marketplace!",
    components: list[dict] | None = None,
    next_actions: list[dict] | None = None,
) -> str:
    """Create a model response describing a composed page."""
    return json.dumps({
        "dialogue": dialogue,
        "components": components if components is not None else [
            {
                "type": "dynamicLedger",
                "props": {
                    "scenario": "Pizza shop",
                    "items": [{"name": "Pizza", "wholesalePrice": 5, "retailPrice": 10}],
                    "learningGoal": "Learn fractions",
                },
            }
        ],
        "nextActions": next_actions if next_actions is not None else [],
    })


@pytest.fixture
def student_context():
    """Create an empty student context."""
    return StudentContext(user_id="test-user-123")


@pytest.fixture
def mock_adapter():
    """Create mock AI adapter with an async generate_content."""
    adapter = MagicMock()
    adapter.generate_content = AsyncMock(return_value=make_page_json())
    return adapter


@pytest.fixture
def orchestrator(mock_adapter):
    """Create orchestrator with mock adapter and default registry."""
    return GenUIOrchestrator(mock_adapter, registry=ComponentRegistry())


@pytest.fixture
def mock_settings(monkeypatch):
    """Isolate settings from the developer's environment."""
    monkeypatch.delenv("GOOGLE_API_KEY", raising=False)
    monkeypatch.delenv("ADELINE_GENUI_COMPONENT_TYPES", raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def client(orchestrator):
    """Create test client with overridden orchestrator."""
    app.dependency_overrides[get_orchestrator] = lambda: orchestrator
    yield TestClient(app)
    app.dependency_overrides.clear()
