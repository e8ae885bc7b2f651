"""
Weight store for the fixed bounce model architecture.

The weights file is a flat run of little-endian float32 values in this
exact order:

    dense1 kernel  [64, 64]          4096 floats
    dense1 bias    [64]                64 floats
    dense2 kernel  [64, NUM_LABELS]  1024 floats
    dense2 bias    [NUM_LABELS]        16 floats
    embedding      [vocab_size, 64]  remainder

The embedding comes last because its size depends on the vocabulary,
which is only known once vocab.json is loaded. Tensors are read-only
views over the source buffer, no copies.
"""

from dataclasses import dataclass
from typing import Sequence, Union

import numpy as np

from bounce_classifier.exceptions import MalformedModelError

EMBEDDING_DIM = 64
HIDDEN_UNITS = 64
NUM_LABELS = 16

FLOAT_DTYPE = np.dtype("<f4")

WeightBuffer = Union[bytes, bytearray, memoryview, np.ndarray, Sequence[float]]


@dataclass(frozen=True)
class WeightTensors:
    """Named read-only tensors of the model."""

    embedding: np.ndarray  # [vocab_size, EMBEDDING_DIM]
    dense1_kernel: np.ndarray  # [EMBEDDING_DIM, HIDDEN_UNITS], input-major
    dense1_bias: np.ndarray  # [HIDDEN_UNITS]
    dense2_kernel: np.ndarray  # [HIDDEN_UNITS, NUM_LABELS], input-major
    dense2_bias: np.ndarray  # [NUM_LABELS]

    @property
    def vocab_size(self) -> int:
        return self.embedding.shape[0]

    @property
    def num_labels(self) -> int:
        return self.dense2_bias.shape[0]


def expected_float_count(vocab_size: int, num_labels: int = NUM_LABELS) -> int:
    """Total float count for a given vocabulary size."""
    return (
        EMBEDDING_DIM * HIDDEN_UNITS
        + HIDDEN_UNITS
        + HIDDEN_UNITS * num_labels
        + num_labels
        + vocab_size * EMBEDDING_DIM
    )


def _as_float_array(buffer: WeightBuffer) -> np.ndarray:
    if isinstance(buffer, (bytes, bytearray, memoryview)):
        byte_length = len(memoryview(buffer).cast("B"))
        if byte_length % FLOAT_DTYPE.itemsize:
            raise MalformedModelError(
                "Weights byte length is not a multiple of 4",
                {"byte_length": byte_length},
            )
        return np.frombuffer(buffer, dtype=FLOAT_DTYPE)
    array = np.asarray(buffer, dtype=np.float32)
    if array.ndim != 1:
        raise MalformedModelError("Weights must be a flat buffer", {"shape": list(array.shape)})
    # Work on a view so the caller's array flags stay untouched
    return array.view()


def parse_weights(
    buffer: WeightBuffer,
    vocab_size: int,
    num_labels: int = NUM_LABELS,
) -> WeightTensors:
    """
    Slice a flat float buffer into the model tensors.

    Args:
        buffer: Raw little-endian float32 bytes, or a flat float sequence
        vocab_size: Number of vocabulary entries (embedding rows)
        num_labels: Number of output classes

    Returns:
        WeightTensors with read-only views into the buffer

    Raises:
        MalformedModelError: if the float count does not match exactly
    """
    flat = _as_float_array(buffer)
    expected = expected_float_count(vocab_size, num_labels)
    if flat.size != expected:
        raise MalformedModelError(
            "Weights length does not match model architecture",
            {
                "expected_floats": expected,
                "actual_floats": int(flat.size),
                "vocab_size": vocab_size,
                "num_labels": num_labels,
            },
        )
    flat.flags.writeable = False

    offset = 0

    def take(count: int, shape: tuple[int, ...]) -> np.ndarray:
        nonlocal offset
        tensor = flat[offset:offset + count].reshape(shape)
        offset += count
        return tensor

    dense1_kernel = take(EMBEDDING_DIM * HIDDEN_UNITS, (EMBEDDING_DIM, HIDDEN_UNITS))
    dense1_bias = take(HIDDEN_UNITS, (HIDDEN_UNITS,))
    dense2_kernel = take(HIDDEN_UNITS * num_labels, (HIDDEN_UNITS, num_labels))
    dense2_bias = take(num_labels, (num_labels,))
    embedding = take(vocab_size * EMBEDDING_DIM, (vocab_size, EMBEDDING_DIM))

    return WeightTensors(
        embedding=embedding,
        dense1_kernel=dense1_kernel,
        dense1_bias=dense1_bias,
        dense2_kernel=dense2_kernel,
        dense2_bias=dense2_bias,
    )
