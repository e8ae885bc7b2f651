"""
Static lookup tables for bounce classification.

These tables are part of the public contract: the action for every label,
the RFC 3463 enhanced status code map, the main reply code map, the known
blocklist signatures and the confidence threshold below which the rule
fallback overrides the model.
"""

import re
from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType

from bounce_classifier.models.enums import BlocklistType, BounceAction

CODE_FALLBACK_THRESHOLD = 0.5

ACTION_MAP: Mapping[str, str] = MappingProxyType({
    # Permanent failures - remove from list
    "user_unknown": BounceAction.REMOVE.value,
    "invalid_address": BounceAction.REMOVE.value,
    "mailbox_disabled": BounceAction.REMOVE.value,
    # Temporary failures - retry later
    "greylisting": BounceAction.RETRY.value,
    "rate_limited": BounceAction.RETRY.value,
    "server_error": BounceAction.RETRY.value,
    "mailbox_full": BounceAction.RETRY.value,
    # IP/domain reputation
    "ip_blacklisted": BounceAction.RETRY_DIFFERENT_IP.value,
    "domain_blacklisted": BounceAction.FIX_CONFIGURATION.value,
    # Sender configuration
    "auth_failure": BounceAction.FIX_CONFIGURATION.value,
    # Content/policy
    "spam_blocked": BounceAction.REVIEW.value,
    "policy_blocked": BounceAction.REVIEW.value,
    "virus_detected": BounceAction.REMOVE_CONTENT.value,
    "geo_blocked": BounceAction.RETRY_DIFFERENT_IP.value,
    "relay_denied": BounceAction.FIX_CONFIGURATION.value,
    "unknown": BounceAction.REVIEW.value,
})

DEFAULT_ACTION = BounceAction.REVIEW.value


class ReplyCodeTable(Mapping):
    """Read-only reply code table that accepts 550 as well as "550" as key."""

    def __init__(self, codes: dict[str, str]):
        self._codes = dict(codes)

    def __getitem__(self, code) -> str:
        return self._codes[str(code)]

    def __iter__(self):
        return iter(self._codes)

    def __len__(self) -> int:
        return len(self._codes)

    def __repr__(self) -> str:
        return f"ReplyCodeTable({self._codes!r})"


# RFC 3463 enhanced status codes
SMTP_CODE_MAP: Mapping[str, str] = MappingProxyType({
    "5.1.1": "user_unknown",
    "5.1.2": "invalid_address",
    "5.1.3": "invalid_address",
    "5.1.6": "invalid_address",
    "4.1.1": "user_unknown",
    "5.2.0": "user_unknown",
    "5.2.1": "mailbox_disabled",
    "5.2.2": "mailbox_full",
    "5.2.3": "rate_limited",
    "4.2.0": "greylisting",
    "4.2.1": "rate_limited",
    "4.2.2": "mailbox_full",
    "5.3.0": "server_error",
    "5.3.1": "server_error",
    "5.3.2": "server_error",
    "4.3.0": "server_error",
    "4.3.1": "server_error",
    "4.3.2": "server_error",
    "5.4.1": "user_unknown",
    "5.4.4": "server_error",
    "4.4.1": "server_error",
    "4.4.2": "server_error",
    "5.5.0": "user_unknown",
    "5.5.1": "invalid_address",
    "5.5.2": "invalid_address",
    "5.6.1": "policy_blocked",
    "5.6.2": "policy_blocked",
    "5.7.0": "virus_detected",
    "5.7.1": "policy_blocked",
    "5.7.2": "relay_denied",
    "5.7.8": "auth_failure",
    "5.7.9": "auth_failure",
    "5.7.23": "auth_failure",
    "5.7.25": "auth_failure",
    "5.7.26": "auth_failure",
    "4.7.0": "rate_limited",
    "4.7.1": "rate_limited",
    "4.7.3": "rate_limited",
    "4.7.28": "rate_limited",
    "4.7.32": "rate_limited",
    "4.7.650": "rate_limited",
    "4.7.651": "rate_limited",
    "5.2.121": "rate_limited",
    "5.2.122": "rate_limited",
})

SMTP_MAIN_CODE_MAP: Mapping[str, str] = ReplyCodeTable({
    "421": "greylisting",
    "450": "greylisting",
    "451": "server_error",
    "452": "server_error",
    "500": "invalid_address",
    "501": "invalid_address",
    "502": "server_error",
    "503": "server_error",
    "504": "server_error",
    "550": "user_unknown",
    "551": "relay_denied",
    "552": "mailbox_full",
    "553": "invalid_address",
    "554": "policy_blocked",
    "571": "spam_blocked",
})


@dataclass(frozen=True)
class BlocklistSignature:
    """A compiled pattern that identifies a blocklist by name."""

    pattern: re.Pattern
    name: str
    type: BlocklistType

    @property
    def is_generic(self) -> bool:
        return self.name in GENERIC_BLOCKLISTS


def _signature(pattern: str, name: str, list_type: BlocklistType) -> BlocklistSignature:
    return BlocklistSignature(re.compile(pattern, re.IGNORECASE | re.ASCII), name, list_type)


# Names that only say "some list" without identifying the operator
GENERIC_BLOCKLISTS = frozenset({"RBL", "DNSBL", "Blocklist"})

BLOCKLIST_PATTERNS: tuple[BlocklistSignature, ...] = (
    # Spamhaus
    _signature(r"spamhaus\.org", "Spamhaus", BlocklistType.IP),
    _signature(r"\bsbl\b", "Spamhaus SBL", BlocklistType.IP),
    _signature(r"\bxbl\b", "Spamhaus XBL", BlocklistType.IP),
    _signature(r"\bpbl\b", "Spamhaus PBL", BlocklistType.IP),
    _signature(r"\bdbl\.spamhaus", "Spamhaus DBL", BlocklistType.DOMAIN),
    _signature(r"\bzen\.spamhaus", "Spamhaus ZEN", BlocklistType.IP),
    # Barracuda
    _signature(r"barracuda", "Barracuda", BlocklistType.IP),
    _signature(r"b\.barracudacentral", "Barracuda", BlocklistType.IP),
    # SORBS
    _signature(r"sorbs\.net", "SORBS", BlocklistType.IP),
    _signature(r"dnsbl\.sorbs", "SORBS", BlocklistType.IP),
    # SpamCop
    _signature(r"spamcop\.net", "SpamCop", BlocklistType.IP),
    # URIBL
    _signature(r"uribl\.com", "URIBL", BlocklistType.URI),
    _signature(r"multi\.uribl", "URIBL", BlocklistType.URI),
    # Commercial filters
    _signature(r"cloudmark", "Cloudmark", BlocklistType.IP),
    _signature(r"proofpoint", "Proofpoint", BlocklistType.IP),
    _signature(r"mimecast", "Mimecast", BlocklistType.IP),
    _signature(r"\bS3150\b", "Microsoft Blocklist", BlocklistType.IP),
    _signature(r"invaluement", "Invaluement", BlocklistType.IP),
    _signature(r"hostkarma", "Hostkarma", BlocklistType.IP),
    _signature(r"trend\s*micro", "Trend Micro", BlocklistType.IP),
    # Generic
    _signature(r"\brbl\b", "RBL", BlocklistType.IP),
    _signature(r"\bdnsbl\b", "DNSBL", BlocklistType.IP),
    _signature(r"blacklist", "Blocklist", BlocklistType.IP),
    _signature(r"blocklist", "Blocklist", BlocklistType.IP),
)


def get_action(category: str | None) -> str:
    """
    Get the recommended action for a bounce category.

    Unknown or missing categories map to "review".

    Examples:
        >>> get_action("user_unknown")
        'remove'
        >>> get_action("nonexistent")
        'review'
    """
    if not isinstance(category, str):
        return DEFAULT_ACTION
    return ACTION_MAP.get(category, DEFAULT_ACTION)
