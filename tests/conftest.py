"""Shared test fixtures and configuration for all tests.

This conftest.py builds small synthetic model bundles on disk so the
classifier can be exercised end to end without the trained artifacts.

The "signal" bundle maps a handful of words to one label each with a huge
logit, so messages containing them are classified confidently by the
model; any other message scores exactly 1/16 for every label and goes
through the rule fallback.
"""

import json
from pathlib import Path
from typing import Callable, Optional

import numpy as np
import pytest

from bounce_classifier.config import Settings
from bounce_classifier.inference.weights import EMBEDDING_DIM, HIDDEN_UNITS
from bounce_classifier.models.enums import BounceLabel

BUNDLE_VOCAB = [
    "<PAD>",
    "<OOV>",
    "mailbox",
    "full",
    "spamhaus",
    "greylisted",
    "user",
    "unknown",
    "quota",
    "exceeded",
]

BUNDLE_LABELS = [label.value for label in BounceLabel]

# word -> label the model predicts confidently when the word is present
SIGNAL_WORDS = {
    "mailbox": "mailbox_full",
    "spamhaus": "ip_blacklisted",
    "greylisted": "greylisting",
}


def build_weights(
    vocab: list[str],
    labels: list[str],
    signal_words: Optional[dict[str, str]] = None,
) -> np.ndarray:
    """Flat float32 weights in file order (k1, b1, k2, b2, embedding).

    Each signal word gets its own embedding dimension set to 100, so one
    occurrence pools to exactly 1.0; dense1 is the identity and dense2 maps
    that dimension to a logit of 20 on the word's label.
    """
    num_labels = len(labels)
    dense1_kernel = np.eye(EMBEDDING_DIM, HIDDEN_UNITS, dtype=np.float32)
    dense1_bias = np.zeros(HIDDEN_UNITS, dtype=np.float32)
    dense2_kernel = np.zeros((HIDDEN_UNITS, num_labels), dtype=np.float32)
    dense2_bias = np.zeros(num_labels, dtype=np.float32)
    embedding = np.zeros((len(vocab), EMBEDDING_DIM), dtype=np.float32)

    for dim, (word, label) in enumerate((signal_words or {}).items()):
        embedding[vocab.index(word), dim] = 100.0
        dense2_kernel[dim, labels.index(label)] = 20.0

    return np.concatenate([
        dense1_kernel.ravel(),
        dense1_bias,
        dense2_kernel.ravel(),
        dense2_bias,
        embedding.ravel(),
    ]).astype("<f4")


@pytest.fixture
def weights_builder() -> Callable[..., np.ndarray]:
    """The build_weights helper, for tests that need raw weight arrays."""
    return build_weights


@pytest.fixture
def bundle_vocab() -> list[str]:
    return list(BUNDLE_VOCAB)


@pytest.fixture
def bundle_labels() -> list[str]:
    return list(BUNDLE_LABELS)


@pytest.fixture
def write_bundle(tmp_path: Path) -> Callable[..., Path]:
    """Factory fixture writing vocab.json, labels.json and weights.bin.

    Usage:
        def test_something(write_bundle):
            directory = write_bundle(signal_words={})
            broken = write_bundle("broken", weights=b"\\x00" * 12)
    """
    def _write(
        name: str = "model",
        vocab: Optional[list] = None,
        labels: Optional[object] = None,
        weights: Optional[bytes] = None,
        signal_words: Optional[dict[str, str]] = None,
    ) -> Path:
        vocab = list(BUNDLE_VOCAB) if vocab is None else vocab
        if labels is None:
            labels = {"id_to_label": {str(i): label for i, label in enumerate(BUNDLE_LABELS)}}
        if weights is None:
            signal = SIGNAL_WORDS if signal_words is None else signal_words
            weights = build_weights(vocab, BUNDLE_LABELS, signal).tobytes()

        directory = tmp_path / name
        directory.mkdir(parents=True, exist_ok=True)
        (directory / "vocab.json").write_text(json.dumps(vocab), encoding="utf-8")
        (directory / "labels.json").write_text(json.dumps(labels), encoding="utf-8")
        (directory / "weights.bin").write_bytes(weights)
        return directory

    return _write


@pytest.fixture
def bundle_dir(write_bundle) -> Path:
    """Bundle with the signal words wired to confident labels."""
    return write_bundle()


@pytest.fixture
def uniform_bundle_dir(write_bundle) -> Path:
    """All-zero weights: every message scores 1/16 for every label."""
    return write_bundle("uniform", signal_words={})


@pytest.fixture
def test_settings(bundle_dir: Path) -> Settings:
    """Test settings pointing at the signal bundle.

    Override specific settings in individual tests as needed:
        def test_something(test_settings):
            settings = test_settings.model_copy(update={"MAX_MESSAGE_LENGTH": 20})
    """
    return Settings(
        # === Application ===
        APP_NAME="Bounce Classifier (Test)",
        APP_VERSION="0.1.0",
        DEBUG=True,
        LOG_LEVEL="DEBUG",
        ENVIRONMENT="development",

        # === Model Bundle ===
        MODEL_PATH=str(bundle_dir),
        MODEL_LOAD_TIMEOUT=5.0,
        PRELOAD_MODEL=False,

        # === Input Processing ===
        MAX_MESSAGE_LENGTH=10000,
        BATCH_MAX_SIZE=1000,

        # === Monitoring ===
        PROMETHEUS_ENABLED=False,
    )

