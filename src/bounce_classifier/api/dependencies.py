"""
FastAPI dependency injection for the bounce classifier service.

The classifier context is the process-wide default one, so the API and
library callers in the same process share a single loaded model.
"""

from functools import lru_cache

from bounce_classifier.classifier import ClassifierContext
from bounce_classifier.config import Settings, settings
from bounce_classifier.default import get_default_context


@lru_cache()
def get_settings() -> Settings:
    """
    Get settings singleton.

    Returns:
        Settings instance
    """
    return settings


def get_classifier() -> ClassifierContext:
    """
    Get the shared classifier context.

    Tests override this with app.dependency_overrides to point the API at
    a context holding a synthetic bundle.
    """
    return get_default_context()
