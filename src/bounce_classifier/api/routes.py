"""
HTTP routes for bounce classification.

Classification itself is synchronous CPU work in the microsecond-to-
millisecond range, so endpoints call the classifier directly.
"""

import time

import structlog
from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from bounce_classifier.api.dependencies import get_classifier, get_settings
from bounce_classifier.api.models import (
    BatchClassifyRequest,
    BatchClassifyResponse,
    ClassifyRequest,
    ClassifyResponse,
    HealthResponse,
    LabelsResponse,
    VersionResponse,
)
from bounce_classifier.classifier import ClassifierContext
from bounce_classifier.config import Settings
from bounce_classifier.exceptions import InvalidInputError
from bounce_classifier.rules.tables import CODE_FALLBACK_THRESHOLD, get_action

logger = structlog.get_logger(__name__)

router = APIRouter()


@router.post(
    "/classify",
    response_model=ClassifyResponse,
    response_model_exclude_none=True,
    status_code=status.HTTP_200_OK,
    summary="Classify a single bounce message",
    description="""
    Classify one SMTP bounce/error message.

    Returns the label, the model's confidence, the recommended action and
    the score of every label. retry_after_seconds and blocklist are only
    present when found in the message.
    """,
    responses={
        200: {"description": "Classification completed"},
        400: {"description": "Empty or invalid message"},
        503: {"description": "Model bundle could not be loaded"},
    },
)
async def classify_message(
    request: ClassifyRequest,
    classifier: ClassifierContext = Depends(get_classifier),
) -> ClassifyResponse:
    start_time = time.perf_counter()
    result = await classifier.classify(request.message)

    logger.info(
        "Message classified",
        label=result.label,
        confidence=round(result.confidence, 4),
        used_fallback=result.used_fallback,
        duration_ms=round((time.perf_counter() - start_time) * 1000, 2),
    )
    return ClassifyResponse(result=result)


@router.post(
    "/classify/batch",
    response_model=BatchClassifyResponse,
    response_model_exclude_none=True,
    status_code=status.HTTP_200_OK,
    summary="Classify several bounce messages",
    description="""
    Classify a list of bounce messages in one vectorized pass.

    Results keep the order of the submitted messages. One invalid
    message rejects the whole batch.
    """,
    responses={
        200: {"description": "Batch classified"},
        400: {"description": "Invalid request format, invalid message or batch too large"},
        503: {"description": "Model bundle could not be loaded"},
    },
)
async def classify_batch(
    request: BatchClassifyRequest,
    classifier: ClassifierContext = Depends(get_classifier),
    settings: Settings = Depends(get_settings),
) -> BatchClassifyResponse:
    if len(request.messages) > settings.BATCH_MAX_SIZE:
        raise InvalidInputError(
            "Batch size exceeds maximum",
            {"max": settings.BATCH_MAX_SIZE, "count": len(request.messages)},
        )

    results = await classifier.classify_batch(request.messages)
    logger.info(
        "Batch classified",
        batch_size=len(results),
        fallback_count=sum(1 for result in results if result.used_fallback),
    )
    return BatchClassifyResponse(count=len(results), results=results)


@router.get(
    "/labels",
    response_model=LabelsResponse,
    summary="List all labels and their actions",
)
async def list_labels(
    classifier: ClassifierContext = Depends(get_classifier),
) -> LabelsResponse:
    labels = await classifier.get_labels()
    return LabelsResponse(labels=labels, actions={label: get_action(label) for label in labels})


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health check",
    description="Healthy once the model bundle is loaded; 503 before that.",
    responses={
        200: {"description": "Model loaded"},
        503: {"description": "Model not loaded yet or load failed"},
    },
)
async def health_check(
    classifier: ClassifierContext = Depends(get_classifier),
    settings: Settings = Depends(get_settings),
):
    ready = classifier.is_ready()
    response = HealthResponse(
        status="healthy" if ready else "unhealthy",
        version=settings.APP_VERSION,
        model_loaded=ready,
        bundle_location=classifier.model_path,
    )
    return JSONResponse(
        status_code=status.HTTP_200_OK if ready else status.HTTP_503_SERVICE_UNAVAILABLE,
        content=response.model_dump(mode="json"),
    )


@router.get(
    "/version",
    response_model=VersionResponse,
    summary="Get service and model information",
)
async def get_version(
    classifier: ClassifierContext = Depends(get_classifier),
    settings: Settings = Depends(get_settings),
) -> VersionResponse:
    return VersionResponse(
        service_version=settings.APP_VERSION,
        bundle_location=classifier.model_path,
        vocab_size=classifier.vocab_size,
        confidence_threshold=CODE_FALLBACK_THRESHOLD,
        max_message_length=classifier.max_message_length,
    )
