"""
Forward pass of the bounce model in plain numpy.

Embedding -> average pooling over all SEQUENCE_LENGTH positions
(padding included) -> dense 64 + ReLU -> dense NUM_LABELS -> softmax.

Pooling divides by the constant sequence length, never by the number of
real words, to match the GlobalAveragePooling layer the model was trained
with. Short messages are therefore diluted by padding rows.
"""

import numpy as np

from bounce_classifier.inference.tokenizer import SEQUENCE_LENGTH
from bounce_classifier.inference.weights import WeightTensors


def softmax(logits: np.ndarray) -> np.ndarray:
    """Numerically stable softmax over the last axis."""
    shifted = logits - np.max(logits, axis=-1, keepdims=True)
    exps = np.exp(shifted)
    return exps / np.sum(exps, axis=-1, keepdims=True)


def forward_batch(token_matrix: np.ndarray, weights: WeightTensors) -> np.ndarray:
    """
    Score a batch of token sequences.

    Args:
        token_matrix: int array of shape (n, SEQUENCE_LENGTH)
        weights: Parsed model tensors

    Returns:
        float64 array of shape (n, num_labels); every row sums to 1
    """
    token_matrix = np.asarray(token_matrix)
    if token_matrix.ndim != 2 or token_matrix.shape[1] != SEQUENCE_LENGTH:
        raise ValueError(
            f"Expected token matrix of shape (n, {SEQUENCE_LENGTH}), got {token_matrix.shape}"
        )

    embedded = weights.embedding[token_matrix].astype(np.float64)  # (n, L, 64)
    pooled = embedded.sum(axis=1) / SEQUENCE_LENGTH

    # kernel[input, output] layout, so a plain matmul is sum_j x[j] * k[j, i]
    hidden = np.maximum(pooled @ weights.dense1_kernel + weights.dense1_bias, 0.0)
    logits = hidden @ weights.dense2_kernel + weights.dense2_bias
    return softmax(logits)


def forward(tokens: np.ndarray, weights: WeightTensors) -> np.ndarray:
    """Score a single TokenSequence; returns a ScoreVector of num_labels floats."""
    return forward_batch(np.asarray(tokens).reshape(1, -1), weights)[0]
