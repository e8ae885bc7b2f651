"""
FastAPI API routes and endpoints.

- routes.py: POST /classify, POST /classify/batch, GET /labels, GET /health, GET /version
- dependencies.py: Dependency injection for settings and the classifier context
- models.py: API-specific request/response models
- error_handlers.py: Exception handlers for structured error responses
- middleware.py: Request id tracing
"""

from bounce_classifier.api import dependencies, error_handlers, models
from bounce_classifier.api.routes import router

__all__ = [
    "router",
    "dependencies",
    "error_handlers",
    "models",
]
