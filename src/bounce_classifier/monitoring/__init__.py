"""Monitoring and metrics for the bounce classifier."""

from bounce_classifier.monitoring.metrics import (
    classifications_total,
    fallback_matches_total,
    inference_duration_seconds,
    model_load_duration_seconds,
    model_loads_total,
)

__all__ = [
    "classifications_total",
    "fallback_matches_total",
    "inference_duration_seconds",
    "model_load_duration_seconds",
    "model_loads_total",
]
