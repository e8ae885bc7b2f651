"""
Custom exceptions for the bounce classifier.

All errors raised by the classifier inherit from BounceClassifierError so
callers (and the API exception handlers) can catch the whole family with a
single except clause, while still distinguishing caller mistakes
(InvalidInputError, ConfigurationError) from model bundle problems
(MalformedModelError, ModelLoadError).

A fallback lookup that finds nothing is NOT an error: those functions
return None.
"""

from typing import Any


class BounceClassifierError(Exception):
    """
    Base exception for all bounce classifier errors.
    """

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class InvalidInputError(BounceClassifierError):
    """
    Raised when a message is not a non-empty, non-whitespace string,
    or when a batch is not a list of such messages.
    """
    pass


class ConfigurationError(BounceClassifierError):
    """
    Raised when initialization options are malformed.

    Examples:
    - options is not a mapping
    - unknown option key
    - model_path of the wrong type
    """
    pass


class ModelNotReadyError(ConfigurationError):
    """
    Raised when a synchronous prediction is requested on a context that
    has not been initialized (use the async API to auto-initialize).
    """
    pass


class MalformedModelError(BounceClassifierError):
    """
    Raised when the model bundle content is invalid.

    Examples:
    - weight buffer length does not match the fixed architecture
    - vocabulary is not a list of strings
    - label mapping does not cover exactly indices 0-15
    """
    pass


class ModelLoadError(BounceClassifierError):
    """
    Raised when the model bundle cannot be read at all
    (missing file, HTTP error, timeout, invalid JSON).
    """

    def __init__(self, message: str, source: str | None = None, details: dict[str, Any] | None = None):
        details = dict(details or {})
        if source:
            details["source"] = source
        super().__init__(message, details)
        self.source = source
