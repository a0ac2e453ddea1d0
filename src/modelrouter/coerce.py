"""Structured-output recovery.

Decisions:
- Providers do not reliably emit pure JSON even in JSON mode, so recovery is
  permissive: strip one markdown fence, then fall back to the span between the
  first '{' and the last '}'.
- Recovery never raises. It returns (value, error) and the router decides
  what a failure means for the caller.
- Without structured output requested, anything goes: unparseable text comes
  back as {"raw": text}.

This file implements:
- recover(text, structured) -> (value_or_none, InvalidStructuredOutput_or_none)
"""
from __future__ import annotations

import json
import re
from typing import Any, Optional, Tuple

from .errors import InvalidStructuredOutput

_FENCE_OPEN = re.compile(r"^```(?:json)?[ \t]*\n?", flags=re.IGNORECASE)
_FENCE_CLOSE = re.compile(r"\n?[ \t]*```$")
_OBJECT_SPAN = re.compile(r"\{.*\}", flags=re.DOTALL)

def strip_code_fence(text: str) -> str:
    s = text.strip()
    if not s.startswith("```"):
        return s
    s = _FENCE_OPEN.sub("", s, count=1)
    s = _FENCE_CLOSE.sub("", s, count=1)
    return s.strip()

def _extract_object_span(text: str) -> str:
    if text.startswith("{") and text.endswith("}"):
        return text

    m = _OBJECT_SPAN.search(text)
    if not m:
        return text
    return m.group(0)

def _candidate(text: str) -> str:
    s = strip_code_fence(text or "")
    return _extract_object_span(s)

def recover(text: str, structured: bool) -> Tuple[Any, Optional[InvalidStructuredOutput]]:
    if not structured:
        try:
            return json.loads(text), None
        except (TypeError, ValueError):
            return {"raw": text}, None

    try:
        return json.loads(_candidate(text)), None
    except (TypeError, ValueError) as e:
        return None, InvalidStructuredOutput(f"Failed to parse JSON output: {e}", raw_output=text)
