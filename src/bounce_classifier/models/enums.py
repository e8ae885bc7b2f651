"""
Enumerations for bounce classifier data models.

BounceLabel is the closed taxonomy the shipped model was trained on.
The loaded labels file is still the source of truth for class order.
"""

from enum import Enum


class BounceLabel(str, Enum):
    """
    Closed taxonomy of bounce categories (16 labels).
    """

    AUTH_FAILURE = "auth_failure"
    DOMAIN_BLACKLISTED = "domain_blacklisted"
    GEO_BLOCKED = "geo_blocked"
    GREYLISTING = "greylisting"
    INVALID_ADDRESS = "invalid_address"
    IP_BLACKLISTED = "ip_blacklisted"
    MAILBOX_DISABLED = "mailbox_disabled"
    MAILBOX_FULL = "mailbox_full"
    POLICY_BLOCKED = "policy_blocked"
    RATE_LIMITED = "rate_limited"
    RELAY_DENIED = "relay_denied"
    SERVER_ERROR = "server_error"
    SPAM_BLOCKED = "spam_blocked"
    UNKNOWN = "unknown"
    USER_UNKNOWN = "user_unknown"
    VIRUS_DETECTED = "virus_detected"


class BounceAction(str, Enum):
    """
    Recommended action for a bounce category.
    """

    REMOVE = "remove"  # Permanent failure - remove from list
    RETRY = "retry"  # Temporary failure - retry later
    RETRY_DIFFERENT_IP = "retry_different_ip"  # IP blocked - try different IP
    FIX_CONFIGURATION = "fix_configuration"  # Sender setup issue
    REVIEW = "review"  # Needs manual review
    REMOVE_CONTENT = "remove_content"  # Content issue


class BlocklistType(str, Enum):
    """What a blocklist lists."""

    IP = "ip"
    DOMAIN = "domain"
    URI = "uri"
