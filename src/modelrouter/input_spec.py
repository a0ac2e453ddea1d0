"""Input specification parsing.

Goals:
- Accept a single JSON dict (CLI argument, HTTP body) as the input.
- Support file references using '@path/to/file.txt' for prompt fields, only when the
  caller opts in. The CLI does; HTTP-facing entrypoints must not.
- Accept the short keys (system/user) and the long ones (system_prompt/user_prompt).
- Structured output is requested by json_output, return_json, or any truthy jsonSchema.

Invalid input raises ValueError; nothing here touches the network.
"""
from __future__ import annotations

from dataclasses import asdict
from pathlib import Path
from typing import Any, Dict, Optional

from .types import InvocationRequest
from .logging_util import get_logger

logger = get_logger(__name__)

def _read_text_ref(v: Any, project_root: Path, allow_file_refs: bool) -> Optional[str]:
    if not v:
        return None
    if not isinstance(v, str):
        raise ValueError(f"Prompt fields must be strings, got {type(v).__name__}")
    if v.startswith("@"):
        if not allow_file_refs:
            raise ValueError(f"File references are not accepted here: {v}")
        path = Path(v[1:])
        if not path.is_absolute():
            path = (project_root / path).resolve()
        try:
            return path.read_text(encoding="utf-8")
        except OSError as e:
            raise ValueError(f"Failed to read file reference: {v} ({e})")
    return v

def _to_bool(v: Any, default: bool = False) -> bool:
    if v is None:
        return default
    if isinstance(v, bool):
        return v
    s = str(v).strip().lower()
    if s in ("1", "true", "y", "yes"):
        return True
    if s in ("0", "false", "n", "no"):
        return False
    return default

def _to_int(field: str, v: Any) -> Optional[int]:
    if v is None:
        return None
    try:
        return int(v)
    except (TypeError, ValueError):
        raise ValueError(f"{field} must be an integer, got {v!r}")

def _to_float(field: str, v: Any) -> Optional[float]:
    if v is None:
        return None
    try:
        return float(v)
    except (TypeError, ValueError):
        raise ValueError(f"{field} must be a number, got {v!r}")

def _first(req: Dict[str, Any], *keys: str) -> Any:
    for k in keys:
        if req.get(k) is not None:
            return req[k]
    return None

def parse_input(req: Dict[str, Any], project_root: Path, allow_file_refs: bool = False) -> InvocationRequest:
    if not isinstance(req, dict):
        raise ValueError("Request must be a JSON object")

    model = str(req.get("model") or "").strip()
    if not model:
        raise ValueError("Model is required")

    system_text = _read_text_ref(_first(req, "system", "system_prompt"), project_root, allow_file_refs) or ""
    user_text = _read_text_ref(_first(req, "user", "user_prompt"), project_root, allow_file_refs) or ""
    if not system_text.strip() and not user_text.strip():
        raise ValueError("Either system or user prompt is required")

    structured = _to_bool(_first(req, "json_output", "return_json"), False) or bool(req.get("jsonSchema"))

    spec = InvocationRequest(
        model=model,
        system_text=system_text,
        user_text=user_text,
        structured_output=structured,
        temperature=_to_float("temperature", req.get("temperature")),
        max_output_tokens=_to_int("max_tokens", _first(req, "max_tokens", "maxTokens")),
    )

    logger.debug("Parsed InvocationRequest: %s", asdict(spec))
    return spec
