"""Custom Prometheus metrics for the bounce classifier.

These metrics are exposed at /metrics endpoint and should be scraped by Prometheus.
Alert rules worth configuring:
- classifications_total{source="fallback"} ratio (model drift or OOV-heavy traffic)
- model_loads_total{status="error"} (bundle unreachable or malformed)
"""

from prometheus_client import Counter, Histogram

# === Classification Metrics ===

classifications_total = Counter(
    "bounce_classifications_total",
    "Total classifications by final label and decision source",
    ["label", "source"],
)
"""
Labels:
- label: final bounce category (user_unknown, mailbox_full, ...)
- source: model (confident prediction) or fallback (rule override)
"""

fallback_matches_total = Counter(
    "bounce_fallback_matches_total",
    "Fallback cascade outcomes for low-confidence predictions",
    ["tier"],
)
"""
Labels:
- tier: text, extended_code, main_code, none
"""

inference_duration_seconds = Histogram(
    "bounce_inference_duration_seconds",
    "Time spent classifying (tokenize + forward pass + rules)",
    ["mode"],
    buckets=(0.0005, 0.001, 0.0025, 0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0),
)
"""
Labels:
- mode: single, batch
"""

# === Model Loading Metrics ===

model_loads_total = Counter(
    "bounce_model_loads_total",
    "Model bundle load attempts by outcome",
    ["status"],
)

model_load_duration_seconds = Histogram(
    "bounce_model_load_duration_seconds",
    "Model bundle load duration in seconds",
)
