"""Invocation observers.

The router reports what happened; observers decide where it goes.
LoggingObserver is the default. Tests pass their own recorder or NullObserver.
"""
from __future__ import annotations

from typing import Protocol

from .errors import ErrorKind, InvocationError
from .logging_util import get_logger
from .types import InvocationResult

logger = get_logger("modelrouter.llm")

class InvocationObserver(Protocol):
    def on_retry(self, model: str, attempt: int, max_attempts: int, error: InvocationError, delay_seconds: float) -> None:
        ...

    def on_parse_failure(self, model: str, error: InvocationError) -> None:
        ...

    def on_success(self, model: str, result: InvocationResult, attempts: int) -> None:
        ...

    def on_failure(self, model: str, error: InvocationError, attempts: int, duration_ms: int) -> None:
        ...

class NullObserver:
    def on_retry(self, model, attempt, max_attempts, error, delay_seconds):
        pass

    def on_parse_failure(self, model, error):
        pass

    def on_success(self, model, result, attempts):
        pass

    def on_failure(self, model, error, attempts, duration_ms):
        pass

class LoggingObserver:
    def on_retry(self, model, attempt, max_attempts, error, delay_seconds):
        if error.kind is ErrorKind.RATE_LIMITED:
            logger.warning(
                "Rate limit hit on %s, waiting %ss before retry %d/%d",
                model, delay_seconds, attempt + 1, max_attempts,
            )
            return
        logger.warning(
            "Error on attempt %d/%d for %s, retrying in %dms: %s",
            attempt + 1, max_attempts, model, int(delay_seconds * 1000), error.message,
        )

    def on_parse_failure(self, model, error):
        logger.warning("JSON parsing failed for %s, returning raw content: %s", model, error.message)

    def on_success(self, model, result, attempts):
        logger.info(
            "%s completed in %dms: %d tokens, $%.4f (attempts=%d)",
            model, result.duration_ms, result.token_usage.total, result.cost, attempts,
        )

    def on_failure(self, model, error, attempts, duration_ms):
        logger.error(
            "%s failed after %d attempt(s) in %dms: [%s] %s",
            model, attempts, duration_ms, error.kind.value, error.message,
        )
