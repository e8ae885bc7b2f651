"""
Output data models for the bounce classifier.

ClassificationResult is what classify() returns and what the API
serializes. Optional fields stay None when nothing was found; the API
omits them from the JSON body.
"""

from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from bounce_classifier.models.enums import BlocklistType


class BlocklistInfo(BaseModel):
    """A blocklist identified in a bounce message."""

    model_config = ConfigDict(frozen=True, use_enum_values=True)

    name: str = Field(..., description="Blocklist name, e.g. 'Spamhaus ZEN', 'Barracuda'")
    type: BlocklistType = Field(..., description="What the list covers: ip, domain or uri")


class SmtpCodes(BaseModel):
    """SMTP codes extracted from a bounce message."""

    model_config = ConfigDict(frozen=True)

    main_code: Optional[str] = Field(
        default=None,
        description="3-digit reply code at the very start of the message (e.g. '550')",
    )
    extended_code: Optional[str] = Field(
        default=None,
        description="RFC 3463 enhanced status code found anywhere (e.g. '5.1.1')",
    )


class ClassificationResult(BaseModel):
    """
    Classification of a single bounce message.

    confidence is always the model's highest score, even when the label
    was overridden by the rule fallback (used_fallback=True).
    """

    model_config = ConfigDict(frozen=True)

    label: str = Field(..., description="Predicted bounce category")
    confidence: float = Field(..., ge=0.0, le=1.0, description="Highest model score")
    action: str = Field(..., description="Recommended action for the label")
    scores: dict[str, float] = Field(..., description="Model score per label, in class order")
    used_fallback: bool = Field(
        default=False,
        description="True when the rule fallback replaced a low-confidence model label",
    )
    retry_after_seconds: Optional[int] = Field(
        default=None,
        ge=1,
        le=86400,
        description="Retry delay found in the message, in seconds",
    )
    blocklist: Optional[Union[BlocklistInfo, list[BlocklistInfo]]] = Field(
        default=None,
        description="Single blocklist, or all specific blocklists when several matched",
    )
