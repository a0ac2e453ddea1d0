"""Anthropic Messages adapter slot.

Not wired to the network yet. Routing claude-* models here fails closed so
callers get a ProviderError instead of a silent fallback to another vendor.
"""
from __future__ import annotations

from ..errors import ProviderError
from ..types import ChatPayload, Completion
from .base import BaseChatAdapter

class AnthropicAdapter(BaseChatAdapter):
    def complete(self, api_key: str, payload: ChatPayload) -> Completion:
        raise ProviderError("Anthropic API not yet implemented")
