"""OpenAI-style chat.completions adapter.

The whole exchange (connect, headers, body) runs on a worker thread and is
bounded by one wall-clock deadline. The requests timeout alone only bounds
each individual read.
"""
from __future__ import annotations

import math
import requests
from concurrent.futures import ThreadPoolExecutor, TimeoutError as FutureTimeout
from typing import Any, Dict, Optional

from ..errors import DEFAULT_RETRY_AFTER_SECONDS, MissingCredential, ProviderError, RateLimited, TimedOut
from ..prompt_layers import with_json_instruction
from ..types import ChatPayload, Completion, TokenUsage
from .base import BaseChatAdapter, DEFAULT_TIMEOUT_SECONDS

OPENAI_ENDPOINT = "https://api.openai.com/v1/chat/completions"

def _error_body(r: requests.Response) -> Dict[str, Any]:
    try:
        data = r.json()
    except ValueError:
        return {}
    return data if isinstance(data, dict) else {}

def _retry_after(r: requests.Response, body: Dict[str, Any]) -> float:
    hint: Optional[Any] = r.headers.get("retry-after")
    if hint is None:
        err = body.get("error") if isinstance(body.get("error"), dict) else {}
        hint = err.get("retry_after") or body.get("retry_after")
    try:
        seconds = float(hint) if hint is not None else DEFAULT_RETRY_AFTER_SECONDS
    except (TypeError, ValueError):
        return DEFAULT_RETRY_AFTER_SECONDS
    if not math.isfinite(seconds) or seconds < 0:
        return DEFAULT_RETRY_AFTER_SECONDS
    return seconds

def _malformed(detail: str) -> ProviderError:
    return ProviderError(f"OpenAI API returned a malformed body: {detail}")

def _extract_text(data: Dict[str, Any]) -> str:
    choices = data.get("choices")
    if choices is None:
        return ""
    if not isinstance(choices, list):
        raise _malformed("choices is not a list")
    if not choices:
        return ""
    first = choices[0] or {}
    if not isinstance(first, dict):
        raise _malformed("choice is not an object")
    msg = first.get("message") or {}
    if not isinstance(msg, dict):
        raise _malformed("message is not an object")
    return str(msg.get("content") or "").strip()

def _extract_usage(data: Dict[str, Any]) -> TokenUsage:
    usage = data.get("usage")
    if usage is None:
        usage = {}
    if not isinstance(usage, dict):
        raise _malformed("usage is not an object")
    try:
        return TokenUsage.from_counts(
            usage.get("prompt_tokens"),
            usage.get("completion_tokens"),
            usage.get("total_tokens"),
        )
    except (TypeError, ValueError) as e:
        raise _malformed(f"bad token counts ({e})") from e

class OpenAIStyleAdapter(BaseChatAdapter):
    def __init__(self, endpoint: str = OPENAI_ENDPOINT, timeout: float = DEFAULT_TIMEOUT_SECONDS):
        self.endpoint = endpoint
        self.timeout = timeout

    def build_body(self, payload: ChatPayload) -> Dict[str, Any]:
        messages = payload.messages
        body: Dict[str, Any] = {
            "model": payload.model,
            "temperature": payload.temperature,
            "max_tokens": payload.max_output_tokens,
        }

        if payload.structured_output:
            body["response_format"] = {"type": "json_object"}
            messages = with_json_instruction(messages)

        body["messages"] = messages
        return body

    def _post(self, headers: Dict[str, str], body: Dict[str, Any]) -> requests.Response:
        r = requests.post(self.endpoint, headers=headers, json=body, timeout=self.timeout)
        # force the body read onto this thread so the deadline covers it
        r.content
        return r

    def complete(self, api_key: str, payload: ChatPayload) -> Completion:
        headers = {
            "Authorization": f"Bearer {api_key}",
            "Content-Type": "application/json",
        }
        body = self.build_body(payload)

        pool = ThreadPoolExecutor(max_workers=1)
        try:
            r = pool.submit(self._post, headers, body).result(timeout=self.timeout)
        except (FutureTimeout, requests.Timeout) as e:
            raise TimedOut(f"Request timeout after {int(self.timeout * 1000)}ms") from e
        except requests.RequestException as e:
            raise ProviderError(f"OpenAI request failed: {e}") from e
        finally:
            # an overrun request is abandoned; its read timeout ends the worker
            pool.shutdown(wait=False)

        if not r.ok:
            err_body = _error_body(r)

            if r.status_code == 401:
                raise MissingCredential(payload.model)

            if r.status_code == 429:
                raise RateLimited(
                    f"Rate limit exceeded for {payload.model}. Please try again later.",
                    _retry_after(r, err_body),
                )

            err = err_body.get("error") if isinstance(err_body.get("error"), dict) else {}
            detail = err.get("message") or r.reason or ""
            raise ProviderError(f"OpenAI API error: {r.status_code} {detail}".rstrip())

        try:
            data = r.json()
        except ValueError as e:
            raise _malformed(str(e)) from e
        if not isinstance(data, dict):
            raise _malformed("expected a JSON object")

        return Completion(text=_extract_text(data), usage=_extract_usage(data))
