"""
Word-level tokenizer for the bounce model.

Maps raw text to a fixed-length sequence of token ids:
- lower-case, replace anything that is not [A-Za-z0-9_] or whitespace
  with a space, collapse whitespace, trim
- split on single spaces
- first 100 words -> vocabulary id, or 1 (OOV) when unknown
- remaining positions stay 0 (padding)

No stemming, number or diacritic normalization: lookup is word-for-word,
matching how the vocabulary was built at training time.
"""

import re
from typing import Iterable

import numpy as np

from bounce_classifier.exceptions import MalformedModelError

SEQUENCE_LENGTH = 100
PAD_ID = 0
OOV_ID = 1

_NON_WORD = re.compile(r"[^A-Za-z0-9_\s]")
_WHITESPACE = re.compile(r"\s+")


class Vocabulary:
    """
    Immutable word -> id lookup; position in the source list is the id.

    Ids 0 (padding) and 1 (out-of-vocabulary) are reserved, so a valid
    vocabulary holds at least two entries.
    """

    __slots__ = ("_words", "_index")

    def __init__(self, words: Iterable[str]):
        words = tuple(words)
        if len(words) < 2:
            raise MalformedModelError(
                "Vocabulary must contain the reserved padding and OOV entries",
                {"vocab_size": len(words)},
            )
        for position, word in enumerate(words):
            if not isinstance(word, str):
                raise MalformedModelError(
                    "Vocabulary entries must be strings",
                    {"index": position, "type": type(word).__name__},
                )
        self._words = words
        # Later duplicates win, same as building the map in list order
        self._index = {word: position for position, word in enumerate(words)}

    def __len__(self) -> int:
        return len(self._words)

    def __contains__(self, word: object) -> bool:
        return word in self._index

    def lookup(self, word: str) -> int:
        return self._index.get(word, OOV_ID)

    @property
    def words(self) -> tuple[str, ...]:
        return self._words


def preprocess_text(text: str) -> str:
    """Normalize text the way the training pipeline did."""
    text = _NON_WORD.sub(" ", text.lower())
    return _WHITESPACE.sub(" ", text).strip()


def tokenize(text: str, vocabulary: Vocabulary) -> np.ndarray:
    """
    Convert text to a TokenSequence of SEQUENCE_LENGTH int32 ids.

    Args:
        text: Raw message text
        vocabulary: Loaded vocabulary

    Returns:
        Read-only int32 array of shape (SEQUENCE_LENGTH,)
    """
    words = preprocess_text(text).split(" ")
    tokens = np.full(SEQUENCE_LENGTH, PAD_ID, dtype=np.int32)
    for position, word in enumerate(words[:SEQUENCE_LENGTH]):
        tokens[position] = vocabulary.lookup(word)
    tokens.flags.writeable = False
    return tokens


def tokenize_batch(texts: Iterable[str], vocabulary: Vocabulary) -> np.ndarray:
    """Tokenize several texts into a (n, SEQUENCE_LENGTH) int32 matrix."""
    rows = [tokenize(text, vocabulary) for text in texts]
    if not rows:
        return np.zeros((0, SEQUENCE_LENGTH), dtype=np.int32)
    return np.stack(rows)
