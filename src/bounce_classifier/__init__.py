"""
SMTP bounce classifier.

Classifies free-text SMTP bounce/error messages into one of 16 categories
and recommends a delivery action:
- Feed-forward text model evaluated directly from raw float32 weights (numpy)
- Text-pattern and SMTP status-code fallback for low-confidence predictions
- Retry timing and blocklist extraction

Architecture: ClassifierContext (explicit model state) + rule tables +
optional FastAPI service layer
"""

__version__ = "0.1.0"

from bounce_classifier.classifier import ClassifierContext, FallbackOverridden, Scored
from bounce_classifier.default import (
    classify,
    classify_batch,
    get_default_context,
    get_labels,
    initialize,
    is_ready,
    reset,
)
from bounce_classifier.exceptions import (
    BounceClassifierError,
    ConfigurationError,
    InvalidInputError,
    MalformedModelError,
    ModelLoadError,
    ModelNotReadyError,
)
from bounce_classifier.models import BlocklistInfo, ClassificationResult, SmtpCodes
from bounce_classifier.rules.extractors import extract_retry_timing, identify_blocklist
from bounce_classifier.rules.fallback import (
    extract_smtp_codes,
    get_code_based_fallback,
    get_text_based_fallback,
)
from bounce_classifier.rules.tables import (
    ACTION_MAP,
    BLOCKLIST_PATTERNS,
    CODE_FALLBACK_THRESHOLD,
    SMTP_CODE_MAP,
    SMTP_MAIN_CODE_MAP,
    get_action,
)

__all__ = [
    # Context + default wrapper
    "ClassifierContext",
    "Scored",
    "FallbackOverridden",
    "initialize",
    "classify",
    "classify_batch",
    "get_labels",
    "is_ready",
    "reset",
    "get_default_context",
    # Helpers
    "extract_smtp_codes",
    "extract_retry_timing",
    "identify_blocklist",
    "get_action",
    "get_text_based_fallback",
    "get_code_based_fallback",
    # Tables
    "ACTION_MAP",
    "BLOCKLIST_PATTERNS",
    "CODE_FALLBACK_THRESHOLD",
    "SMTP_CODE_MAP",
    "SMTP_MAIN_CODE_MAP",
    # Models
    "BlocklistInfo",
    "ClassificationResult",
    "SmtpCodes",
    # Errors
    "BounceClassifierError",
    "ConfigurationError",
    "InvalidInputError",
    "MalformedModelError",
    "ModelLoadError",
    "ModelNotReadyError",
]
