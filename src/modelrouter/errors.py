"""Invocation error taxonomy.

Every failure the engine can surface is one of five kinds. Callers catch
``InvocationError`` and branch on ``error.kind``; the router does the same
when deciding whether to retry.

Errors are frozen once constructed. Retry bookkeeping lives in the router,
never on the error.
"""
from __future__ import annotations

from enum import Enum
from typing import Any, Dict, Optional

DEFAULT_RETRY_AFTER_SECONDS = 60

class ErrorKind(str, Enum):
    RATE_LIMITED = "rate_limit"
    INVALID_STRUCTURED_OUTPUT = "invalid_json"
    TIMED_OUT = "timeout"
    MISSING_CREDENTIAL = "missing_api_key"
    PROVIDER_ERROR = "provider_error"

class InvocationError(Exception):
    kind: ErrorKind = ErrorKind.PROVIDER_ERROR

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message
        self._frozen = True

    def __setattr__(self, name: str, value: Any) -> None:
        # __traceback__/__context__/__cause__ are written by the interpreter while raising
        if getattr(self, "_frozen", False) and not name.startswith("__"):
            raise AttributeError(f"{type(self).__name__} is immutable")
        super().__setattr__(name, value)

    def to_dict(self) -> Dict[str, Any]:
        return {"error": self.message, "errorType": self.kind.value}

class RateLimited(InvocationError):
    kind = ErrorKind.RATE_LIMITED

    def __init__(self, message: str, retry_after_seconds: Optional[float] = None):
        if retry_after_seconds is None:
            retry_after_seconds = DEFAULT_RETRY_AFTER_SECONDS
        self.retry_after_seconds = retry_after_seconds
        super().__init__(message)

    def to_dict(self) -> Dict[str, Any]:
        out = super().to_dict()
        out["retryAfter"] = self.retry_after_seconds
        return out

class InvalidStructuredOutput(InvocationError):
    kind = ErrorKind.INVALID_STRUCTURED_OUTPUT

    def __init__(self, message: str, raw_output: str):
        self.raw_output = raw_output
        super().__init__(message)

class TimedOut(InvocationError):
    kind = ErrorKind.TIMED_OUT

class MissingCredential(InvocationError):
    kind = ErrorKind.MISSING_CREDENTIAL

    def __init__(self, model: str):
        self.model = model
        super().__init__(f"API key not found for model: {model}")

class ProviderError(InvocationError):
    kind = ErrorKind.PROVIDER_ERROR
