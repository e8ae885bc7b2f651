"""
Module-level default classifier.

Thin wrapper around one process-wide ClassifierContext for callers that
do not want to manage a context themselves:

    import bounce_classifier

    result = await bounce_classifier.classify("552 5.2.2 Mailbox quota exceeded")
    result.label   # "mailbox_full"
"""

from typing import Any, Sequence

from bounce_classifier.classifier import ClassifierContext
from bounce_classifier.models.output_models import ClassificationResult

_default_context = ClassifierContext()


def get_default_context() -> ClassifierContext:
    """The process-wide context used by the module-level functions."""
    return _default_context


async def initialize(options: Any = None) -> None:
    await _default_context.initialize(options)


async def classify(message: str) -> ClassificationResult:
    return await _default_context.classify(message)


async def classify_batch(messages: Sequence[str]) -> list[ClassificationResult]:
    return await _default_context.classify_batch(messages)


async def get_labels() -> list[str]:
    return await _default_context.get_labels()


def is_ready() -> bool:
    return _default_context.is_ready()


def reset() -> None:
    _default_context.reset()
