"""
Auxiliary extractions attached to every classification result.

- extract_retry_timing: "try again in 5 minutes" -> 300
- identify_blocklist: "listed at zen.spamhaus.org" -> Spamhaus ZEN
"""

import re
from typing import Optional, Union

from bounce_classifier.models.output_models import BlocklistInfo
from bounce_classifier.rules.tables import BLOCKLIST_PATTERNS

MIN_RETRY_SECONDS = 1
MAX_RETRY_SECONDS = 86400

# Long forms may take a plural "s"; single letters may not, so "10 ms" is no unit
_UNIT = r"((?:second|minute|hour|min|sec|hr)s?|[smh])\b"

RETRY_PATTERNS: tuple[re.Pattern, ...] = tuple(
    re.compile(pattern, re.IGNORECASE | re.ASCII)
    for pattern in (
        r"try\s+again\s+in\s+(\d+)\s*" + _UNIT,
        r"retry\s+in\s+(\d+)\s*" + _UNIT,
        r"wait\s+(\d+)\s*" + _UNIT,
        r"greylisted?\s+(?:for\s+)?(\d+)\s*" + _UNIT,
        r"delayed?\s+(?:for\s+)?(\d+)\s*" + _UNIT,
        r"come\s+back\s+in\s+(\d+)\s*" + _UNIT,
        r"after\s+(\d+)\s*" + _UNIT,
        r"\b(\d+)\s*(second|minute|hour)s?\b",
        r"too\s+many.{0,200}?(\d+)\s*" + _UNIT,
        r"greylist.{0,200}?(\d+)\s*" + _UNIT,
    )
)

# More significant digits than this is out of range whatever the unit
_MAX_RETRY_DIGITS = len(str(MAX_RETRY_SECONDS))


def to_seconds(value: str, unit: str) -> Optional[int]:
    """
    Convert a captured (number, unit) pair to seconds.

    Returns None for numbers too long to ever fall within range.
    """
    if len(value.lstrip("0")) > _MAX_RETRY_DIGITS:
        return None
    number = int(value)
    unit = unit.lower()
    if unit.startswith("s"):
        return number
    if unit.startswith("m"):
        return number * 60
    if unit.startswith("h"):
        return number * 3600
    return number


def extract_retry_timing(message: str) -> Optional[int]:
    """
    Extract a retry delay in seconds from a bounce message.

    Patterns are tried in order; the first match of a pattern is used and
    accepted only if it falls within [1, 86400] seconds, otherwise the scan
    moves to the next pattern.

    Examples:
        >>> extract_retry_timing("Retry in 5 minutes")
        300
        >>> extract_retry_timing("Wait 100000 seconds") is None
        True
    """
    for pattern in RETRY_PATTERNS:
        match = pattern.search(message)
        if match is None:
            continue
        seconds = to_seconds(match.group(1), match.group(2))
        if seconds is not None and MIN_RETRY_SECONDS <= seconds <= MAX_RETRY_SECONDS:
            return seconds
    return None


def identify_blocklist(message: str) -> Optional[Union[BlocklistInfo, list[BlocklistInfo]]]:
    """
    Identify blocklists mentioned in a bounce message.

    Matches are de-duplicated by name, keeping first-match order.

    Returns:
        - None when no signature matches
        - the single entry when exactly one specific list matched
        - a list of entries when several specific lists matched
        - the first generic entry (RBL, DNSBL, Blocklist) when only
          generic signatures matched
    """
    found: list[BlocklistInfo] = []
    seen: set[str] = set()
    generic: list[BlocklistInfo] = []

    for signature in BLOCKLIST_PATTERNS:
        if signature.name in seen or not signature.pattern.search(message):
            continue
        seen.add(signature.name)
        entry = BlocklistInfo(name=signature.name, type=signature.type)
        if signature.is_generic:
            generic.append(entry)
        else:
            found.append(entry)

    if len(found) == 1:
        return found[0]
    if found:
        return found
    if generic:
        return generic[0]
    return None
