"""
Rule-based fallback classification.

Derives a label from the message text alone, independently of the model.
The cascade is ordered and the order is part of the contract:

1. Text patterns (most specific, first match in list order wins)
2. RFC 3463 enhanced status code found anywhere in the message
3. 3-digit reply code at the very start of the message
4. Nothing matched -> None

Wildcard spans in the patterns are bounded so matching stays linear on
long inputs.
"""

import re
from dataclasses import dataclass
from typing import Optional

import structlog

from bounce_classifier.models.output_models import SmtpCodes
from bounce_classifier.rules.tables import SMTP_CODE_MAP, SMTP_MAIN_CODE_MAP

logger = structlog.get_logger(__name__)

MAIN_CODE_PATTERN = re.compile(r"^(\d{3})[\s\-]", re.ASCII)
EXTENDED_CODE_PATTERN = re.compile(r"\b([245])\.(\d{1,3})\.(\d{1,3})\b", re.ASCII)

TEXT_PATTERN_FALLBACKS: tuple[tuple[re.Pattern, str], ...] = tuple(
    (re.compile(pattern, re.IGNORECASE | re.ASCII), label)
    for pattern, label in (
        (r"doesn't have a .{0,100} account", "user_unknown"),
        (r"user doesn't have .{0,100} account", "user_unknown"),
        (r"not a valid recipient", "user_unknown"),
        (r"no such user", "user_unknown"),
        (r"user unknown", "user_unknown"),
        (r"mailbox not found", "user_unknown"),
        (r"recipient rejected", "user_unknown"),
        (r"sender is unauthenticated", "auth_failure"),
        (r"requires .{0,100} authenticate", "auth_failure"),
    )
)


@dataclass(frozen=True)
class FallbackMatch:
    """Fallback label plus the cascade tier that produced it."""

    label: str
    tier: str  # "text", "extended_code" or "main_code"


def extract_smtp_codes(message: str) -> SmtpCodes:
    """
    Extract SMTP codes from a bounce message.

    The main code only counts at the very start of the message, followed by
    a space or hyphen. The extended code is the first word-delimited
    `[245].x.y` anywhere in the message.

    Examples:
        >>> extract_smtp_codes("550 5.1.1 User unknown")
        SmtpCodes(main_code='550', extended_code='5.1.1')
        >>> extract_smtp_codes("Connection refused")
        SmtpCodes(main_code=None, extended_code=None)
    """
    main_code = None
    extended_code = None

    main_match = MAIN_CODE_PATTERN.match(message)
    if main_match:
        main_code = main_match.group(1)

    ext_match = EXTENDED_CODE_PATTERN.search(message)
    if ext_match:
        extended_code = ".".join(ext_match.groups())

    return SmtpCodes(main_code=main_code, extended_code=extended_code)


def get_text_based_fallback(message: str) -> Optional[str]:
    """Return the label of the first text pattern that matches, or None."""
    for pattern, label in TEXT_PATTERN_FALLBACKS:
        if pattern.search(message):
            return label
    return None


def resolve_fallback(message: str) -> Optional[FallbackMatch]:
    """
    Run the full fallback cascade and report which tier matched.

    Returns:
        FallbackMatch, or None when no rule applies (normal outcome)
    """
    text_label = get_text_based_fallback(message)
    if text_label:
        return FallbackMatch(label=text_label, tier="text")

    codes = extract_smtp_codes(message)
    if codes.extended_code and codes.extended_code in SMTP_CODE_MAP:
        return FallbackMatch(label=SMTP_CODE_MAP[codes.extended_code], tier="extended_code")
    if codes.main_code and codes.main_code in SMTP_MAIN_CODE_MAP:
        return FallbackMatch(label=SMTP_MAIN_CODE_MAP[codes.main_code], tier="main_code")

    logger.debug("No fallback rule matched", main_code=codes.main_code, extended_code=codes.extended_code)
    return None


def get_code_based_fallback(message: str) -> Optional[str]:
    """
    Get a fallback label: text patterns first, then SMTP codes.

    Examples:
        >>> get_code_based_fallback("550 No such user here")
        'user_unknown'
        >>> get_code_based_fallback("552 Message too large")
        'mailbox_full'
        >>> get_code_based_fallback("Something went wrong") is None
        True
    """
    match = resolve_fallback(message)
    return match.label if match else None
