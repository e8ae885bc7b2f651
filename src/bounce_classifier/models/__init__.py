"""
Pydantic data models for the bounce classifier.

Includes:
- Enums (BounceLabel, BounceAction, BlocklistType)
- Output models (ClassificationResult, BlocklistInfo, SmtpCodes)
- Input models (InitializeOptions)
"""

from bounce_classifier.models.enums import BlocklistType, BounceAction, BounceLabel
from bounce_classifier.models.input_models import InitializeOptions
from bounce_classifier.models.output_models import (
    BlocklistInfo,
    ClassificationResult,
    SmtpCodes,
)

__all__ = [
    # Enums
    "BounceLabel",
    "BounceAction",
    "BlocklistType",
    # Input models
    "InitializeOptions",
    # Output models
    "BlocklistInfo",
    "ClassificationResult",
    "SmtpCodes",
]
