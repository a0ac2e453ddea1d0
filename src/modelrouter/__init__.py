"""Single-shot LLM invocation with retry, JSON recovery and cost accounting.

  from modelrouter import call_llm

  result = call_llm("gpt-4o-mini", system="Summarize.", user=article, json_output=True)
  result.output        # parsed dict, or {"raw": ..., "parseError": ...}
  result.token_usage   # TokenUsage(input, output, total)
  result.cost          # USD
"""
from .errors import (
    ErrorKind,
    InvalidStructuredOutput,
    InvocationError,
    MissingCredential,
    ProviderError,
    RateLimited,
    TimedOut,
)
from .registry import ModelRegistry
from .router import ModelRouter, call_llm
from .types import InvocationRequest, InvocationResult, ProviderId, TokenUsage

__all__ = [
    "ErrorKind",
    "InvalidStructuredOutput",
    "InvocationError",
    "MissingCredential",
    "ProviderError",
    "RateLimited",
    "TimedOut",
    "ModelRegistry",
    "ModelRouter",
    "call_llm",
    "InvocationRequest",
    "InvocationResult",
    "ProviderId",
    "TokenUsage",
]
