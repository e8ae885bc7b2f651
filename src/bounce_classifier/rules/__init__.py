"""
Deterministic rule layer: static tables, fallback cascade, extractors.
"""

from bounce_classifier.rules.extractors import extract_retry_timing, identify_blocklist
from bounce_classifier.rules.fallback import (
    FallbackMatch,
    extract_smtp_codes,
    get_code_based_fallback,
    get_text_based_fallback,
    resolve_fallback,
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
    "ACTION_MAP",
    "BLOCKLIST_PATTERNS",
    "CODE_FALLBACK_THRESHOLD",
    "SMTP_CODE_MAP",
    "SMTP_MAIN_CODE_MAP",
    "FallbackMatch",
    "extract_retry_timing",
    "extract_smtp_codes",
    "get_action",
    "get_code_based_fallback",
    "get_text_based_fallback",
    "identify_blocklist",
    "resolve_fallback",
]
