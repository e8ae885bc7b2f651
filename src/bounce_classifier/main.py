"""
FastAPI application entry point for the bounce classifier service.
"""

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from prometheus_fastapi_instrumentator import Instrumentator

from bounce_classifier.api.dependencies import get_classifier
from bounce_classifier.api.error_handlers import EXCEPTION_HANDLERS
from bounce_classifier.api.middleware import RequestTracingMiddleware
from bounce_classifier.api.routes import router
from bounce_classifier.config import settings
from bounce_classifier.exceptions import BounceClassifierError
from bounce_classifier.logging_config import configure_logging

# Configure structured logging before anything logs
configure_logging(settings.LOG_LEVEL, settings.ENVIRONMENT, settings.LOG_JSON)
logger = structlog.get_logger(__name__)

app = FastAPI(
    title=settings.APP_NAME,
    description="SMTP bounce message classification with recommended actions",
    version=settings.APP_VERSION,
    docs_url="/docs",
    redoc_url="/redoc",
)

app.add_middleware(RequestTracingMiddleware)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ALLOW_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST"],
    allow_headers=["*"],
)

for exc_class, handler in EXCEPTION_HANDLERS.items():
    app.add_exception_handler(exc_class, handler)

app.include_router(router, tags=["classification"])


@app.on_event("startup")
async def startup():
    """Preload the model bundle so the first request does not pay for it."""
    logger.info(
        "Application startup",
        version=settings.APP_VERSION,
        environment=settings.ENVIRONMENT,
        model_path=settings.MODEL_PATH,
        preload=settings.PRELOAD_MODEL,
    )

    if settings.PRELOAD_MODEL:
        try:
            await get_classifier().initialize()
        except BounceClassifierError as e:
            # Service stays up; /health reports unhealthy and requests retry the load
            logger.error("Model preload failed", error_type=type(e).__name__, error=e.message)

    logger.info("Application startup complete")


@app.on_event("shutdown")
async def shutdown():
    logger.info("Application shutdown")


if settings.PROMETHEUS_ENABLED:
    Instrumentator().instrument(app).expose(app)


@app.get("/")
async def root():
    """Root endpoint with API documentation links."""
    return {
        "service": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "docs": "/docs",
        "health": "/health",
        "metrics": "/metrics" if settings.PROMETHEUS_ENABLED else None,
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "bounce_classifier.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.DEBUG,
    )
