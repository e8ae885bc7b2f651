"""Unit tests for the word-level tokenizer."""

import numpy as np
import pytest

from bounce_classifier.exceptions import MalformedModelError
from bounce_classifier.inference.tokenizer import (
    OOV_ID,
    PAD_ID,
    SEQUENCE_LENGTH,
    Vocabulary,
    preprocess_text,
    tokenize,
    tokenize_batch,
)


@pytest.fixture
def vocabulary(bundle_vocab) -> Vocabulary:
    return Vocabulary(bundle_vocab)


class TestPreprocessText:
    """Test text normalization."""

    def test_lowercases_and_strips_punctuation(self):
        text = "550 5.1.1 <User@Example.COM>: Unknown!"
        assert preprocess_text(text) == "550 5 1 1 user example com unknown"

    def test_collapses_whitespace(self):
        assert preprocess_text("  mailbox \t\n  full  ") == "mailbox full"

    def test_keeps_underscores_and_digits(self):
        assert preprocess_text("rate_limit 421") == "rate_limit 421"

    def test_non_ascii_letters_are_separators(self):
        assert preprocess_text("café olé") == "caf ol"

    def test_punctuation_only_becomes_empty(self):
        assert preprocess_text("!!! ...") == ""


class TestVocabulary:
    """Test vocabulary construction and lookup."""

    def test_position_is_id(self, vocabulary):
        assert vocabulary.lookup("mailbox") == 2
        assert vocabulary.lookup("exceeded") == 9

    def test_unknown_word_is_oov(self, vocabulary):
        assert vocabulary.lookup("nonexistent") == OOV_ID

    def test_len_and_contains(self, vocabulary, bundle_vocab):
        assert len(vocabulary) == len(bundle_vocab)
        assert "quota" in vocabulary
        assert "nonexistent" not in vocabulary

    def test_later_duplicate_wins(self):
        vocabulary = Vocabulary(["<PAD>", "<OOV>", "full", "full"])
        assert vocabulary.lookup("full") == 3

    def test_too_small_vocabulary_rejected(self):
        with pytest.raises(MalformedModelError):
            Vocabulary(["<PAD>"])

    def test_non_string_entry_rejected(self):
        with pytest.raises(MalformedModelError) as exc_info:
            Vocabulary(["<PAD>", "<OOV>", 42])
        assert exc_info.value.details["index"] == 2


class TestTokenize:
    """Test fixed-length token sequences."""

    def test_known_words_and_padding(self, vocabulary):
        tokens = tokenize("Mailbox FULL", vocabulary)

        assert tokens.shape == (SEQUENCE_LENGTH,)
        assert tokens.dtype == np.int32
        assert tokens[:2].tolist() == [2, 3]
        assert (tokens[2:] == PAD_ID).all()

    def test_unknown_words_map_to_oov(self, vocabulary):
        tokens = tokenize("550 mailbox unavailable", vocabulary)
        assert tokens[:3].tolist() == [OOV_ID, 2, OOV_ID]

    def test_truncates_to_sequence_length(self, vocabulary):
        text = " ".join(["quota"] * 150)
        tokens = tokenize(text, vocabulary)

        assert tokens.shape == (SEQUENCE_LENGTH,)
        assert (tokens == 8).all()

    def test_exactly_sequence_length_words(self, vocabulary):
        text = " ".join(["user"] * (SEQUENCE_LENGTH - 1) + ["unknown"])
        tokens = tokenize(text, vocabulary)
        assert tokens[-1] == 7

    def test_empty_after_cleaning_yields_single_oov(self, vocabulary):
        # "" is still one word after splitting, and it is not in the vocabulary
        tokens = tokenize("!!!", vocabulary)
        assert tokens[0] == OOV_ID
        assert (tokens[1:] == PAD_ID).all()

    def test_result_is_read_only(self, vocabulary):
        tokens = tokenize("mailbox", vocabulary)
        with pytest.raises(ValueError):
            tokens[0] = 5

    def test_deterministic(self, vocabulary):
        first = tokenize("Mailbox quota exceeded", vocabulary)
        second = tokenize("Mailbox quota exceeded", vocabulary)
        assert np.array_equal(first, second)


class TestTokenizeBatch:
    """Test batch tokenization."""

    def test_stacks_rows_in_order(self, vocabulary):
        matrix = tokenize_batch(["mailbox", "quota exceeded"], vocabulary)

        assert matrix.shape == (2, SEQUENCE_LENGTH)
        assert matrix[0, 0] == 2
        assert matrix[1, :2].tolist() == [8, 9]

    def test_empty_batch(self, vocabulary):
        matrix = tokenize_batch([], vocabulary)
        assert matrix.shape == (0, SEQUENCE_LENGTH)
