"""Unit test fixtures (instrumented loaders).

Loaders here wrap a real bundle directory and record how often a full
bundle load was attempted, so initialization sharing can be asserted.
"""

import asyncio
from pathlib import Path
from typing import Optional

import pytest

from bounce_classifier.classifier import ClassifierContext
from bounce_classifier.exceptions import ModelLoadError
from bounce_classifier.inference.bundle import ModelBundle
from bounce_classifier.loaders import BaseModelLoader, FileSystemModelLoader


class CountingLoader(BaseModelLoader):
    """Directory loader that counts bundle loads and can be held at a gate.

    Args:
        directory: Bundle directory
        failures: Number of initial load_bundle() calls that raise ModelLoadError
        gate: Optional event every load waits on before reading files
    """

    def __init__(self, directory: Path, failures: int = 0, gate: Optional[asyncio.Event] = None):
        super().__init__(str(directory))
        self._files = FileSystemModelLoader(directory)
        self.failures = failures
        self.gate = gate
        self.bundle_loads = 0

    async def load_bytes(self, name: str) -> bytes:
        return await self._files.load_bytes(name)

    async def load_bundle(self) -> ModelBundle:
        self.bundle_loads += 1
        if self.gate is not None:
            await self.gate.wait()
        else:
            await asyncio.sleep(0.01)
        if self.bundle_loads <= self.failures:
            raise ModelLoadError("Simulated outage", source=self.location)
        return await super().load_bundle()


@pytest.fixture
def counting_loader(bundle_dir: Path):
    """Factory fixture for CountingLoader over the signal bundle.

    Usage:
        def test_something(counting_loader):
            loader = counting_loader(failures=1)
    """
    def _create(failures: int = 0, gate: Optional[asyncio.Event] = None) -> CountingLoader:
        return CountingLoader(bundle_dir, failures=failures, gate=gate)

    return _create


@pytest.fixture
def context(test_settings) -> ClassifierContext:
    """Uninitialized context whose default model path is the signal bundle."""
    return ClassifierContext(settings=test_settings)
