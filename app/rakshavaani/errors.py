"""Error taxonomy for the inference orchestration layer.

Only `AuthError` and `ValidationError` reach the HTTP caller as-is. Model
failures are absorbed by the fallback chain, and `ExhaustionError` is always
converted into a degraded or offline result by the services.
"""

from __future__ import annotations


class RakshaVaaniError(Exception):
    """Base class for all expected errors."""


class AuthError(RakshaVaaniError):
    """Missing or unknown API key."""


class ValidationError(RakshaVaaniError):
    """Required request fields are absent."""


class ModelError(RakshaVaaniError):
    """A single remote model call failed."""

    def __init__(self, message: str, *, model: str | None = None, status_code: int | None = None):
        super().__init__(message)
        self.model = model
        self.status_code = status_code


class ModelTransientError(ModelError):
    """Timeout, quota or generic remote failure. Worth a same-model retry."""


class ModelPermanentError(ModelError):
    """The model identifier is invalid or unsupported. Never retried."""


class ParseError(RakshaVaaniError):
    """The model answered, but the payload is not a usable result."""

    def __init__(self, message: str, *, raw_text: str | None = None):
        super().__init__(message)
        self.raw_text = raw_text


class ExhaustionError(RakshaVaaniError):
    """Every candidate model failed."""

    def __init__(self, tried: list[str], last_error: BaseException | None):
        detail = f"{type(last_error).__name__}: {last_error}" if last_error else "no candidates"
        super().__init__(f"All {len(tried)} model candidate(s) failed; last error {detail}")
        self.tried = tried
        self.last_error = last_error


_NOT_FOUND_MARKERS = ("404", "not found", "is not supported", "unsupported model")


def is_permanent_failure(error: BaseException) -> bool:
    """True when retrying the same model identifier cannot help."""
    if isinstance(error, ModelPermanentError):
        return True
    if isinstance(error, (ModelTransientError, ParseError)):
        return False
    message = str(error).lower()
    return any(marker in message for marker in _NOT_FOUND_MARKERS)
