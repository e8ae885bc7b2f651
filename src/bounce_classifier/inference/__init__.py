"""
Model inference core: tokenizer, weight store, forward pass, bundle.

No ML runtime is involved; the fixed architecture is evaluated with numpy
straight from the float32 weights file.
"""

from bounce_classifier.inference.bundle import ModelBundle, build_bundle
from bounce_classifier.inference.engine import forward, forward_batch, softmax
from bounce_classifier.inference.tokenizer import (
    OOV_ID,
    PAD_ID,
    SEQUENCE_LENGTH,
    Vocabulary,
    tokenize,
    tokenize_batch,
)
from bounce_classifier.inference.weights import (
    EMBEDDING_DIM,
    HIDDEN_UNITS,
    NUM_LABELS,
    WeightTensors,
    expected_float_count,
    parse_weights,
)

__all__ = [
    "ModelBundle",
    "build_bundle",
    "forward",
    "forward_batch",
    "softmax",
    "Vocabulary",
    "tokenize",
    "tokenize_batch",
    "SEQUENCE_LENGTH",
    "PAD_ID",
    "OOV_ID",
    "EMBEDDING_DIM",
    "HIDDEN_UNITS",
    "NUM_LABELS",
    "WeightTensors",
    "expected_float_count",
    "parse_weights",
]
