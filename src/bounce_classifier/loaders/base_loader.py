"""
Abstract base loader for model bundles.

The classifier core only needs two capabilities from its environment:
read a named JSON document and read a named binary blob. Concrete loaders
(local directory, HTTP) implement those; the core never branches on where
the bundle lives.
"""

import json
from abc import ABC, abstractmethod
from typing import Any

import structlog

from bounce_classifier.exceptions import ModelLoadError
from bounce_classifier.inference.bundle import (
    LABELS_FILE,
    VOCAB_FILE,
    WEIGHTS_FILE,
    ModelBundle,
    build_bundle,
)

logger = structlog.get_logger(__name__)


class BaseModelLoader(ABC):
    """
    Abstract base class for model bundle loaders.

    Responsibilities:
    - Fetch raw bytes for a file name relative to the bundle location
    - Decode JSON documents
    - Raise ModelLoadError on I/O failures

    Does NOT handle:
    - Validation of the bundle content (that's build_bundle's job)
    - Caching or retries (callers retry initialization themselves)
    """

    def __init__(self, location: str):
        self.location = location

    @abstractmethod
    async def load_bytes(self, name: str) -> bytes:
        """
        Read a file of the bundle as raw bytes.

        Raises:
            ModelLoadError: file missing or unreachable
        """
        pass

    async def load_json(self, name: str) -> Any:
        """Read a file of the bundle and decode it as JSON."""
        raw = await self.load_bytes(name)
        try:
            return json.loads(raw.decode("utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError) as e:
            raise ModelLoadError(
                f"Invalid JSON in {name}",
                source=self.describe(name),
                details={"error": str(e)},
            ) from e

    def describe(self, name: str) -> str:
        """Human-readable location of a bundle file, for logs and errors."""
        return f"{self.location.rstrip('/')}/{name}"

    async def load_bundle(self) -> ModelBundle:
        """Load and validate vocab.json, labels.json and weights.bin."""
        logger.debug("Loading model bundle", loader=self.__class__.__name__, location=self.location)
        vocab_data = await self.load_json(VOCAB_FILE)
        labels_data = await self.load_json(LABELS_FILE)
        weight_bytes = await self.load_bytes(WEIGHTS_FILE)
        return build_bundle(vocab_data, labels_data, weight_bytes)

    async def aclose(self) -> None:
        """Release resources held by the loader (no-op by default)."""
        return None
