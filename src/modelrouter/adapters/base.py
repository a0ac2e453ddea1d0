"""Adapter interface for LLM providers.

An adapter makes exactly one provider call per complete(). It owns nothing
beyond that in-flight request; retries and backoff belong to the router.
Failures are raised as members of the InvocationError family.
"""
from __future__ import annotations

from ..types import ChatPayload, Completion

DEFAULT_TIMEOUT_SECONDS = 60

class BaseChatAdapter:
    def complete(self, api_key: str, payload: ChatPayload) -> Completion:
        raise NotImplementedError
