"""Prompt layer assembly.

Rules:
- Only system and user layers; the caller has already rendered both.
- Empty layers are dropped.
- Nothing here mutates its input. Each step returns a new message list, so
  the JSON instruction is always applied to the final caller prompt.
"""
from __future__ import annotations

from typing import List

from .types import Message

JSON_INSTRUCTION = "You must respond with valid JSON only. Do not include any text outside the JSON object."
JSON_INSTRUCTION_SUFFIX = "\n\nIMPORTANT: " + JSON_INSTRUCTION

def create_messages(system_text: str, user_text: str) -> List[Message]:
    messages: List[Message] = []

    if system_text and system_text.strip():
        messages.append({"role": "system", "content": system_text.strip()})

    if user_text and user_text.strip():
        messages.append({"role": "user", "content": user_text.strip()})

    return messages

def with_json_instruction(messages: List[Message]) -> List[Message]:
    """Return a copy of messages whose system layer demands JSON-only output.

    A system message that already mentions JSON is left alone; one that does
    not gets the instruction appended; with no system message at all, a
    synthetic one is put first.
    """
    out = [dict(m) for m in messages]

    sys_idx = next((i for i, m in enumerate(out) if m.get("role") == "system"), None)
    if sys_idx is None:
        return [{"role": "system", "content": JSON_INSTRUCTION}] + out

    content = out[sys_idx].get("content") or ""
    if "JSON" not in content:
        out[sys_idx]["content"] = content + JSON_INSTRUCTION_SUFFIX
    return out
