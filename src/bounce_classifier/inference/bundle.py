"""
Model bundle: vocabulary + labels + weights, validated together.

The bundle is built from the already-decoded contents of the three model
files, so it does not care where they came from (local directory, HTTP,
test fixture).
"""

from dataclasses import dataclass
from typing import Any, Mapping

from bounce_classifier.exceptions import MalformedModelError
from bounce_classifier.inference.tokenizer import Vocabulary
from bounce_classifier.inference.weights import (
    NUM_LABELS,
    WeightBuffer,
    WeightTensors,
    parse_weights,
)

VOCAB_FILE = "vocab.json"
LABELS_FILE = "labels.json"
WEIGHTS_FILE = "weights.bin"


@dataclass(frozen=True)
class ModelBundle:
    """Everything the classifier needs, loaded once and never mutated."""

    vocabulary: Vocabulary
    labels: tuple[str, ...]
    weights: WeightTensors


def parse_vocabulary(data: Any) -> Vocabulary:
    """Validate decoded vocab.json (a JSON array of strings)."""
    if not isinstance(data, list):
        raise MalformedModelError(
            "Vocabulary file must contain a JSON array",
            {"type": type(data).__name__},
        )
    return Vocabulary(data)


def parse_labels(data: Any, num_labels: int = NUM_LABELS) -> tuple[str, ...]:
    """
    Validate decoded labels.json.

    Accepts either {"id_to_label": {"0": "...", ...}} or the bare
    {"0": "...", ...} mapping. Keys must cover exactly 0..num_labels-1.
    """
    if isinstance(data, Mapping) and "id_to_label" in data:
        data = data["id_to_label"]
    if not isinstance(data, Mapping):
        raise MalformedModelError(
            "Labels file must contain an index -> label mapping",
            {"type": type(data).__name__},
        )

    expected_keys = {str(index) for index in range(num_labels)}
    actual_keys = {str(key) for key in data}
    if actual_keys != expected_keys:
        raise MalformedModelError(
            f"Labels must cover exactly indices 0-{num_labels - 1}",
            {
                "missing": sorted(expected_keys - actual_keys, key=_sort_key),
                "unexpected": sorted(actual_keys - expected_keys, key=_sort_key),
            },
        )

    by_index = {str(key): value for key, value in data.items()}
    labels = []
    for index in range(num_labels):
        name = by_index[str(index)]
        if not isinstance(name, str) or not name:
            raise MalformedModelError("Label names must be non-empty strings", {"index": index})
        labels.append(name)
    if len(set(labels)) != len(labels):
        raise MalformedModelError("Label names must be distinct", {"labels": labels})
    return tuple(labels)


def _sort_key(key: str) -> tuple[int, str]:
    return (int(key), key) if key.isdigit() else (10**9, key)


def build_bundle(vocab_data: Any, labels_data: Any, weight_buffer: WeightBuffer) -> ModelBundle:
    """
    Validate and assemble a ModelBundle from decoded file contents.

    Raises:
        MalformedModelError: on any shape or content mismatch
    """
    vocabulary = parse_vocabulary(vocab_data)
    labels = parse_labels(labels_data)
    weights = parse_weights(weight_buffer, vocab_size=len(vocabulary), num_labels=len(labels))
    return ModelBundle(vocabulary=vocabulary, labels=labels, weights=weights)
