"""Shared types and lightweight data containers.

We avoid heavy frameworks here. The goal is:
- keep the engine portable (no web framework, no SDK types leak out)
- keep typing clear but not over-abstract
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

DEFAULT_TEMPERATURE = 0.3
DEFAULT_MAX_OUTPUT_TOKENS = 4096

Message = Dict[str, str]

class ProviderId(str, Enum):
    OPENAI = "openai"
    ANTHROPIC = "anthropic"
    UNKNOWN = "unknown"

@dataclass(frozen=True)
class InvocationRequest:
    model: str
    system_text: str = ""
    user_text: str = ""
    structured_output: bool = False
    temperature: Optional[float] = None
    # None -> the model's configured default
    max_output_tokens: Optional[int] = None

@dataclass(frozen=True)
class TokenUsage:
    input: int = 0
    output: int = 0
    total: int = 0

    @classmethod
    def from_counts(cls, input: Optional[int], output: Optional[int], total: Optional[int] = None) -> "TokenUsage":
        i = int(input or 0)
        o = int(output or 0)
        return cls(input=i, output=o, total=int(total or (i + o)))

    def to_dict(self) -> Dict[str, int]:
        return {"input": self.input, "output": self.output, "total": self.total}

@dataclass(frozen=True)
class Completion:
    """What a provider adapter hands back for one successful call."""
    text: str
    usage: TokenUsage = field(default_factory=TokenUsage)

@dataclass(frozen=True)
class InvocationResult:
    output: Any
    token_usage: TokenUsage
    cost: float
    duration_ms: int

@dataclass(frozen=True)
class ModelPricing:
    # USD per 1M tokens
    input: float
    output: float

@dataclass(frozen=True)
class ModelConfig:
    name: str
    provider: ProviderId
    api_key: Optional[str]
    pricing: Optional[ModelPricing]
    max_tokens: int = DEFAULT_MAX_OUTPUT_TOKENS

@dataclass(frozen=True)
class ChatPayload:
    """Provider-neutral request handed to an adapter."""
    model: str
    messages: List[Message]
    temperature: float = DEFAULT_TEMPERATURE
    max_output_tokens: int = DEFAULT_MAX_OUTPUT_TOKENS
    structured_output: bool = False
