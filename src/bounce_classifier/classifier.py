"""
Decision orchestrator for bounce classification.

ClassifierContext owns the loaded model bundle and combines:
1. Model prediction (tokenize -> forward pass -> argmax)
2. Rule fallback when the model's top score is below CODE_FALLBACK_THRESHOLD
3. Retry timing and blocklist extraction
4. Static label -> action lookup

Usage:
    context = ClassifierContext()
    await context.initialize({"model_path": "/srv/models/bounce"})
    result = await context.classify("550 5.1.1 User unknown")

Initialization is the only phase that writes state. Concurrent initialize()
calls join one in-flight load; a failed load leaves the context unready so
the next call starts over.
"""

import asyncio
import time
from dataclasses import dataclass
from typing import Any, Mapping, Optional, Sequence, Union

import numpy as np
import structlog
from pydantic import ValidationError as PydanticValidationError

from bounce_classifier.config import Settings, settings as default_settings
from bounce_classifier.exceptions import (
    ConfigurationError,
    InvalidInputError,
    ModelNotReadyError,
)
from bounce_classifier.inference.bundle import ModelBundle
from bounce_classifier.inference.engine import forward, forward_batch
from bounce_classifier.inference.tokenizer import tokenize, tokenize_batch
from bounce_classifier.loaders import BaseModelLoader, resolve_loader
from bounce_classifier.models.input_models import InitializeOptions
from bounce_classifier.models.output_models import ClassificationResult
from bounce_classifier.monitoring.metrics import (
    classifications_total,
    fallback_matches_total,
    inference_duration_seconds,
    model_load_duration_seconds,
    model_loads_total,
)
from bounce_classifier.rules.extractors import extract_retry_timing, identify_blocklist
from bounce_classifier.rules.fallback import resolve_fallback
from bounce_classifier.rules.tables import CODE_FALLBACK_THRESHOLD, get_action

logger = structlog.get_logger(__name__)

MAX_MESSAGE_LENGTH = 10000


@dataclass(frozen=True)
class Scored:
    """The model's own top label, confidence at or above the threshold or no rule applied."""

    label: str
    confidence: float
    scores: dict[str, float]


@dataclass(frozen=True)
class FallbackOverridden:
    """A low-confidence model label replaced by the rule fallback."""

    label: str
    model_label: str
    confidence: float
    scores: dict[str, float]
    tier: str


Decision = Union[Scored, FallbackOverridden]


def decide(message: str, scores: np.ndarray, labels: Sequence[str]) -> Decision:
    """
    Pick the final label for one message.

    Ties in the score vector resolve to the lowest class index. The
    reported confidence stays the model's top score even when the label
    is overridden.
    """
    index = int(np.argmax(scores))
    confidence = float(scores[index])
    score_map = {label: float(score) for label, score in zip(labels, scores)}
    model_label = labels[index]

    if confidence < CODE_FALLBACK_THRESHOLD:
        match = resolve_fallback(message)
        fallback_matches_total.labels(tier=match.tier if match else "none").inc()
        if match is not None:
            logger.debug(
                "Fallback overrode model label",
                model_label=model_label,
                fallback_label=match.label,
                tier=match.tier,
                confidence=round(confidence, 4),
            )
            return FallbackOverridden(
                label=match.label,
                model_label=model_label,
                confidence=confidence,
                scores=score_map,
                tier=match.tier,
            )

    return Scored(label=model_label, confidence=confidence, scores=score_map)


def build_result(message: str, decision: Decision) -> ClassificationResult:
    """Attach action, retry timing and blocklist to a decision."""
    used_fallback = isinstance(decision, FallbackOverridden)
    classifications_total.labels(
        label=decision.label,
        source="fallback" if used_fallback else "model",
    ).inc()
    return ClassificationResult(
        label=decision.label,
        confidence=decision.confidence,
        action=get_action(decision.label),
        scores=decision.scores,
        used_fallback=used_fallback,
        retry_after_seconds=extract_retry_timing(message),
        blocklist=identify_blocklist(message),
    )


def _parse_options(options: Any) -> InitializeOptions:
    if options is None:
        return InitializeOptions()
    if isinstance(options, InitializeOptions):
        return options
    if not isinstance(options, Mapping):
        raise ConfigurationError(
            "Initialization options must be a mapping",
            {"type": type(options).__name__},
        )
    try:
        return InitializeOptions.model_validate(dict(options))
    except PydanticValidationError as e:
        raise ConfigurationError(
            "Invalid initialization options",
            {"errors": e.errors(include_url=False, include_context=False)},
        ) from e


class ClassifierContext:
    """
    Explicitly owned classifier state (vocabulary, labels, weights).

    Attributes:
        settings: Settings used for defaults (model path, limits)
        max_message_length: Messages are truncated to this many characters
            before tokenization, pattern matching and code extraction
        model_path: Location of the loaded bundle, None until ready
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        loader: Optional[BaseModelLoader] = None,
    ):
        self.settings = settings or default_settings
        self.max_message_length = self.settings.MAX_MESSAGE_LENGTH or MAX_MESSAGE_LENGTH
        self.model_path: Optional[str] = None
        self._loader = loader
        self._bundle: Optional[ModelBundle] = None
        self._init_task: Optional[asyncio.Task] = None
        self._generation = 0

    # === Lifecycle ===

    def is_ready(self) -> bool:
        return self._bundle is not None

    @property
    def vocab_size(self) -> Optional[int]:
        return len(self._bundle.vocabulary) if self._bundle is not None else None

    async def initialize(self, options: Any = None) -> None:
        """
        Load the model bundle once.

        Args:
            options: None, a mapping with model_path / modelPath, or
                InitializeOptions. Ignored when already initialized.

        Raises:
            ConfigurationError: malformed options
            ModelLoadError: bundle unreachable
            MalformedModelError: bundle content invalid
        """
        parsed = _parse_options(options)

        while self._bundle is None:
            task = self._init_task
            if task is None:
                task = asyncio.ensure_future(self._load(parsed, self._generation))
                self._init_task = task
            try:
                await asyncio.shield(task)
            except Exception:
                if self._init_task is task:
                    self._init_task = None
                raise
            if self._init_task is task and self._bundle is None:
                # Finished after a reset() and was discarded, start a fresh load
                self._init_task = None

    async def _load(self, options: InitializeOptions, generation: int) -> None:
        if options.model_path is not None:
            loader = resolve_loader(options.model_path, timeout=self.settings.MODEL_LOAD_TIMEOUT)
            owns_loader = True
        elif self._loader is not None:
            loader = self._loader
            owns_loader = False
        else:
            loader = resolve_loader(self.settings.MODEL_PATH, timeout=self.settings.MODEL_LOAD_TIMEOUT)
            owns_loader = True

        logger.info("Loading model bundle", location=loader.location)
        start_time = time.perf_counter()
        try:
            bundle = await loader.load_bundle()
        except Exception as e:
            model_loads_total.labels(status="error").inc()
            logger.error(
                "Model bundle load failed",
                location=loader.location,
                error_type=type(e).__name__,
                error=str(e),
            )
            raise
        finally:
            if owns_loader:
                await loader.aclose()

        duration = time.perf_counter() - start_time
        model_load_duration_seconds.observe(duration)

        if generation != self._generation:
            logger.info("Discarding model bundle loaded before reset", location=loader.location)
            return

        self._bundle = bundle
        self.model_path = loader.location
        model_loads_total.labels(status="success").inc()
        logger.info(
            "Model bundle loaded",
            location=loader.location,
            vocab_size=len(bundle.vocabulary),
            num_labels=len(bundle.labels),
            duration_ms=round(duration * 1000, 2),
        )

    def reset(self) -> None:
        """Drop all model state; the next classification re-initializes."""
        self._bundle = None
        self._init_task = None
        self.model_path = None
        self._generation += 1
        logger.info("Classifier state reset")

    # === Classification ===

    def _require_bundle(self) -> ModelBundle:
        bundle = self._bundle
        if bundle is None:
            raise ModelNotReadyError("Classifier is not initialized; call initialize() first")
        return bundle

    def _prepare(self, message: Any) -> str:
        if not isinstance(message, str):
            raise InvalidInputError(
                "Message must be a non-empty string",
                {"type": type(message).__name__},
            )
        if not message.strip():
            raise InvalidInputError("Message must be a non-empty string")
        return message[: self.max_message_length]

    def _validate_batch(self, messages: Any) -> list[str]:
        if not isinstance(messages, (list, tuple)):
            raise InvalidInputError(
                "Messages must be a list",
                {"type": type(messages).__name__},
            )
        return [self._prepare(message) for message in messages]

    def predict(self, message: str) -> ClassificationResult:
        """Classify one message on an initialized context (synchronous)."""
        bundle = self._require_bundle()
        text = self._prepare(message)

        start_time = time.perf_counter()
        scores = forward(tokenize(text, bundle.vocabulary), bundle.weights)
        result = build_result(text, decide(text, scores, bundle.labels))
        inference_duration_seconds.labels(mode="single").observe(time.perf_counter() - start_time)
        return result

    def predict_batch(self, messages: Sequence[str]) -> list[ClassificationResult]:
        """
        Classify several messages with one vectorized forward pass.

        Results keep input order. Any invalid message fails the whole batch.
        """
        bundle = self._require_bundle()
        texts = self._validate_batch(messages)
        if not texts:
            return []

        start_time = time.perf_counter()
        score_matrix = forward_batch(tokenize_batch(texts, bundle.vocabulary), bundle.weights)
        results = [
            build_result(text, decide(text, scores, bundle.labels))
            for text, scores in zip(texts, score_matrix)
        ]
        inference_duration_seconds.labels(mode="batch").observe(time.perf_counter() - start_time)
        logger.debug("Batch classified", batch_size=len(texts))
        return results

    async def classify(self, message: str) -> ClassificationResult:
        """Classify one message, initializing with defaults if needed."""
        self._prepare(message)
        await self.initialize()
        return self.predict(message)

    async def classify_batch(self, messages: Sequence[str]) -> list[ClassificationResult]:
        """Classify several messages, initializing with defaults if needed."""
        self._validate_batch(messages)
        await self.initialize()
        return self.predict_batch(messages)

    async def get_labels(self) -> list[str]:
        """All label names in class-index order."""
        await self.initialize()
        return list(self._require_bundle().labels)
