"""ModelRouter: single-shot LLM invocation with retry.

One invoke() is one logical unit of work:

  1. resolve the model (provider, credential, default max tokens, price)
  2. assemble the system/user messages
  3. call the provider adapter, up to MAX_ATTEMPTS times, strictly in sequence
  4. optionally recover structured JSON from the completion text
  5. account tokens, cost and wall-clock duration

Retry policy by error kind:
- missing_api_key, invalid_json: never retried
- rate_limit: wait for the provider's hint (clamped), else backoff
- timeout, provider_error: exponential backoff (1s, 2s, 4s, ...)
- any kind on the final attempt: raised

A JSON parse failure after a successful call is not an error. The caller gets
{"raw": text, "parseError": message} instead.

The router keeps no state between invocations, so one instance may be shared
by concurrent callers.
"""
from __future__ import annotations

import math
import os
import threading
import time
from typing import Callable, Mapping, Optional

from .adapters import AnthropicAdapter, BaseChatAdapter, OpenAIStyleAdapter
from .adapters.openai_style import OPENAI_ENDPOINT
from .coerce import recover
from .errors import ErrorKind, InvocationError, MissingCredential, ProviderError
from .prompt_layers import create_messages
from .registry import ModelRegistry
from .telemetry import InvocationObserver, LoggingObserver
from .types import (
    DEFAULT_TEMPERATURE,
    ChatPayload,
    Completion,
    InvocationRequest,
    InvocationResult,
    ProviderId,
)

MAX_ATTEMPTS = 3
BASE_DELAY_SECONDS = 1.0
# Upper bound on a provider-supplied retry-after hint
MAX_RETRY_AFTER_SECONDS = 120.0

_NON_RETRYABLE = frozenset({ErrorKind.MISSING_CREDENTIAL, ErrorKind.INVALID_STRUCTURED_OUTPUT})

class ModelRouter:
    def __init__(
        self,
        registry: Optional[ModelRegistry] = None,
        adapters: Optional[Mapping[ProviderId, BaseChatAdapter]] = None,
        observer: Optional[InvocationObserver] = None,
        sleep: Callable[[float], None] = time.sleep,
        clock: Callable[[], float] = time.monotonic,
        max_attempts: int = MAX_ATTEMPTS,
        base_delay: float = BASE_DELAY_SECONDS,
    ):
        self.registry = registry or ModelRegistry()
        self.adapters = dict(adapters) if adapters is not None else self._default_adapters()
        self.observer = observer or LoggingObserver()
        self.max_attempts = max_attempts
        self.base_delay = base_delay
        self._sleep = sleep
        self._clock = clock

    def _default_adapters(self) -> dict:
        endpoint = (
            os.environ.get("OPENAI_ENDPOINT")
            or self.registry.endpoint(ProviderId.OPENAI)
            or OPENAI_ENDPOINT
        ).strip()
        return {
            ProviderId.OPENAI: OpenAIStyleAdapter(endpoint=endpoint),
            ProviderId.ANTHROPIC: AnthropicAdapter(),
        }

    def retry_delay(self, error: InvocationError, attempt: int) -> float:
        backoff = self.base_delay * (2 ** attempt)
        if error.kind is ErrorKind.RATE_LIMITED:
            hinted = getattr(error, "retry_after_seconds", None)
            try:
                hinted = float(hinted)
            except (TypeError, ValueError):
                hinted = 0.0
            if math.isfinite(hinted) and hinted > 0:
                return min(hinted, MAX_RETRY_AFTER_SECONDS)
        return backoff

    def _wait(self, seconds: float, cancel: Optional[threading.Event]) -> bool:
        """Sleep between attempts. Returns True if the caller cancelled."""
        if cancel is None:
            self._sleep(seconds)
            return False
        return cancel.wait(seconds)

    def _elapsed_ms(self, started: float) -> int:
        return int((self._clock() - started) * 1000)

    def _fail(self, model: str, error: InvocationError, attempts: int, started: float) -> InvocationError:
        self.observer.on_failure(model, error, attempts, self._elapsed_ms(started))
        return error

    def invoke(self, request: InvocationRequest, cancel: Optional[threading.Event] = None) -> InvocationResult:
        started = self._clock()
        model = request.model

        config = self.registry.model_config(model)
        if not config.api_key:
            raise self._fail(model, MissingCredential(model), 0, started)

        adapter = self.adapters.get(config.provider)
        if adapter is None:
            raise self._fail(model, ProviderError(f"Unsupported model provider: {config.provider.value}"), 0, started)

        payload = ChatPayload(
            model=model,
            messages=create_messages(request.system_text, request.user_text),
            temperature=DEFAULT_TEMPERATURE if request.temperature is None else request.temperature,
            max_output_tokens=request.max_output_tokens or config.max_tokens,
            structured_output=request.structured_output,
        )

        completion: Optional[Completion] = None
        last_error: Optional[InvocationError] = None
        attempts = 0

        for attempt in range(self.max_attempts):
            if cancel is not None and cancel.is_set():
                break

            attempts = attempt + 1
            try:
                completion = adapter.complete(config.api_key, payload)
                break
            except InvocationError as e:
                last_error = e

            if last_error.kind in _NON_RETRYABLE or attempt == self.max_attempts - 1:
                raise self._fail(model, last_error, attempts, started)

            delay = self.retry_delay(last_error, attempt)
            self.observer.on_retry(model, attempt, self.max_attempts, last_error, delay)
            if self._wait(delay, cancel):
                raise self._fail(model, last_error, attempts, started)

        if completion is None:
            error = last_error or ProviderError("Failed to get response from LLM")
            raise self._fail(model, error, attempts, started)

        if request.structured_output:
            output, parse_error = recover(completion.text, structured=True)
            if parse_error is not None:
                self.observer.on_parse_failure(model, parse_error)
                output = {"raw": completion.text, "parseError": parse_error.message}
        else:
            output = completion.text

        usage = completion.usage
        result = InvocationResult(
            output=output,
            token_usage=usage,
            cost=self.registry.cost(model, usage.input, usage.output),
            duration_ms=self._elapsed_ms(started),
        )
        self.observer.on_success(model, result, attempts)
        return result

_default_router: Optional[ModelRouter] = None

def get_router() -> ModelRouter:
    global _default_router
    if _default_router is None:
        _default_router = ModelRouter()
    return _default_router

def call_llm(
    model: str,
    system: str = "",
    user: str = "",
    json_output: bool = False,
    temperature: Optional[float] = None,
    max_tokens: Optional[int] = None,
    cancel: Optional[threading.Event] = None,
) -> InvocationResult:
    request = InvocationRequest(
        model=model,
        system_text=system,
        user_text=user,
        structured_output=json_output,
        temperature=temperature,
        max_output_tokens=max_tokens,
    )
    return get_router().invoke(request, cancel=cancel)
