"""Error taxonomy shared by the scoring core and the suggestion pipeline."""

import asyncio
from enum import Enum


class ErrorCode(str, Enum):
    VALIDATION_ERROR = "VALIDATION_ERROR"
    LLM_TIMEOUT = "LLM_TIMEOUT"
    LLM_ERROR = "LLM_ERROR"
    RATE_LIMITED = "RATE_LIMITED"


USER_MESSAGES: dict[ErrorCode, str] = {
    ErrorCode.VALIDATION_ERROR: "Invalid input. Please check your resume and job description.",
    ErrorCode.LLM_TIMEOUT: "Request timed out after 60 seconds. Please try again.",
    ErrorCode.LLM_ERROR: "AI service is temporarily unavailable. Please try again.",
    ErrorCode.RATE_LIMITED: "Too many requests. Please wait a moment and try again.",
}


class OptimizerError(Exception):
    """Base error carrying a taxonomy code and, optionally, the failing section."""

    code: ErrorCode = ErrorCode.LLM_ERROR

    def __init__(self, message: str = "", *, section: str | None = None):
        super().__init__(message or USER_MESSAGES[self.code])
        self.message = message or USER_MESSAGES[self.code]
        self.section = section

    def to_payload(self) -> dict:
        payload = {"code": self.code.value, "message": self.message}
        if self.section:
            payload["section"] = self.section
        return payload


class ValidationError(OptimizerError):
    code = ErrorCode.VALIDATION_ERROR


class InvalidInputError(ValidationError):
    """Raised by the keyword matcher for structurally invalid input."""


class LLMTimeoutError(OptimizerError):
    code = ErrorCode.LLM_TIMEOUT


class LLMError(OptimizerError):
    code = ErrorCode.LLM_ERROR


class RateLimitedError(OptimizerError):
    code = ErrorCode.RATE_LIMITED


_ERROR_TYPES: dict[ErrorCode, type[OptimizerError]] = {
    ErrorCode.VALIDATION_ERROR: ValidationError,
    ErrorCode.LLM_TIMEOUT: LLMTimeoutError,
    ErrorCode.LLM_ERROR: LLMError,
    ErrorCode.RATE_LIMITED: RateLimitedError,
}


class SectionGenerationError(OptimizerError):
    """One or more suggestion sections failed.

    ``section`` and ``code`` describe the first failing section in
    summary → skills → experience order; ``failures`` holds every one.
    """

    def __init__(self, section: str, failures: dict[str, OptimizerError]):
        first = failures[section]
        self.code = first.code
        super().__init__(first.message, section=section)
        self.failures = failures

    def to_payload(self) -> dict:
        payload = super().to_payload()
        payload["failed_sections"] = {
            name: err.code.value for name, err in self.failures.items()
        }
        return payload


def classify_error(exc: BaseException) -> ErrorCode:
    """Map an arbitrary exception raised by an LLM call onto the taxonomy."""
    if isinstance(exc, OptimizerError):
        return exc.code
    if isinstance(exc, (asyncio.TimeoutError, TimeoutError)):
        return ErrorCode.LLM_TIMEOUT

    status = getattr(exc, "code", None) or getattr(exc, "status_code", None)
    if status == 429:
        return ErrorCode.RATE_LIMITED

    message = str(exc).lower()
    if "rate limit" in message or "429" in message or "resource exhausted" in message:
        return ErrorCode.RATE_LIMITED
    if "timeout" in message or "timed out" in message:
        return ErrorCode.LLM_TIMEOUT
    return ErrorCode.LLM_ERROR


def to_optimizer_error(exc: BaseException, section: str | None = None) -> OptimizerError:
    """Wrap any exception as the matching ``OptimizerError`` subclass."""
    if isinstance(exc, OptimizerError):
        if section and exc.section is None:
            exc.section = section
        return exc
    code = classify_error(exc)
    detail = str(exc) if code == ErrorCode.LLM_ERROR and str(exc) else ""
    return _ERROR_TYPES[code](detail, section=section)
