"""
API-specific request and response models for FastAPI endpoints.

These models wrap the core ClassificationResult with API-specific
metadata and status information.
"""

from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from bounce_classifier.models.output_models import ClassificationResult


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ClassifyRequest(BaseModel):
    """Request for single message classification."""

    message: str = Field(
        description="Bounce/error message text",
        examples=["550 5.1.1 <user@example.com>: Recipient address rejected: User unknown"],
    )


class ClassifyResponse(BaseModel):
    """Response for single message classification."""

    status: str = Field(
        default="success",
        description="Request status",
        examples=["success"],
    )
    result: ClassificationResult = Field(
        description="Classification with action, scores and extracted metadata"
    )


class BatchClassifyRequest(BaseModel):
    """Request for batch classification."""

    messages: list[str] = Field(
        description="Bounce messages to classify",
        min_length=1,
    )


class BatchClassifyResponse(BaseModel):
    """Response for batch classification endpoint."""

    status: str = Field(default="success", description="Request status")
    count: int = Field(description="Number of results", ge=0)
    results: list[ClassificationResult] = Field(
        description="Results in the same order as the submitted messages"
    )


class LabelsResponse(BaseModel):
    """All labels the loaded model can produce, in class-index order."""

    labels: list[str]
    actions: dict[str, str] = Field(description="Recommended action per label")


class HealthResponse(BaseModel):
    """Response for health check endpoint."""

    model_config = ConfigDict(protected_namespaces=())

    status: str = Field(
        description="Overall health status",
        examples=["healthy", "unhealthy"],
    )
    version: str = Field(description="Service version", examples=["0.1.0"])
    model_loaded: bool = Field(description="Whether the model bundle is loaded")
    bundle_location: Optional[str] = Field(
        default=None,
        description="Directory or URL the bundle was loaded from",
    )
    timestamp: datetime = Field(
        default_factory=_utcnow,
        description="Health check timestamp (UTC)",
    )


class VersionResponse(BaseModel):
    """Response for version info endpoint."""

    service_version: str = Field(description="Application version")
    bundle_location: Optional[str] = Field(default=None, description="Loaded bundle location")
    vocab_size: Optional[int] = Field(default=None, description="Loaded vocabulary size")
    confidence_threshold: float = Field(description="Fallback threshold")
    max_message_length: int = Field(description="Messages are truncated to this many characters")


class ErrorResponse(BaseModel):
    """Standard error response format."""

    error: str = Field(
        description="Error code or type",
        examples=["invalid_input", "model_unavailable", "internal_error"],
    )
    message: str = Field(description="Human-readable error message")
    details: Optional[dict] = Field(
        default=None,
        description="Additional error details",
    )
    timestamp: datetime = Field(
        default_factory=_utcnow,
        description="Error timestamp (UTC)",
    )
