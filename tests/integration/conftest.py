"""Integration test fixtures (API client and loaded classifier contexts).

API tests never run the application startup hook: the classifier
dependency is overridden with a context built from a synthetic bundle.
"""

import asyncio

import pytest
from fastapi.testclient import TestClient

from bounce_classifier.api.dependencies import get_classifier, get_settings
from bounce_classifier.classifier import ClassifierContext
from bounce_classifier.main import app


@pytest.fixture
def ready_context(test_settings) -> ClassifierContext:
    """Context with the signal bundle already loaded."""
    context = ClassifierContext(settings=test_settings)
    asyncio.run(context.initialize())
    return context


@pytest.fixture
def api_client(ready_context, test_settings):
    """TestClient wired to the loaded context.

    Usage:
        def test_something(api_client):
            response = api_client.post("/classify", json={"message": "..."})
    """
    app.dependency_overrides[get_classifier] = lambda: ready_context
    app.dependency_overrides[get_settings] = lambda: test_settings
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def client_for():
    """Factory fixture for a TestClient over an arbitrary context."""
    def _create(context: ClassifierContext, settings=None) -> TestClient:
        app.dependency_overrides[get_classifier] = lambda: context
        if settings is not None:
            app.dependency_overrides[get_settings] = lambda: settings
        return TestClient(app)

    yield _create
    app.dependency_overrides.clear()
