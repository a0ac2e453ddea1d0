"""LLMClient: dict-in, dict-out front door over ModelRouter."""
from __future__ import annotations

import time
from pathlib import Path
from typing import Any, Dict, Optional

from .errors import InvocationError
from .input_spec import parse_input
from .logging_util import get_logger, log_step
from .router import ModelRouter

logger = get_logger(__name__)

class LLMClient:
    def __init__(
        self,
        project_root: Optional[Path] = None,
        router: Optional[ModelRouter] = None,
        allow_file_refs: bool = False,
    ):
        # Auto-detect root:
        # <root>/src/modelrouter/client.py -> parents[2] == <root>
        self.project_root = project_root or Path(__file__).resolve().parents[2]
        self.router = router or ModelRouter()
        # @file prompts are read from local disk
        self.allow_file_refs = allow_file_refs

    def run(self, req: Dict[str, Any], request_id: Optional[str] = None) -> Dict[str, Any]:
        meta: Dict[str, Any] = {"request_id": request_id, "steps": {}, "where": None}
        t0 = time.time()

        try:
            log_step(logger, "1", "parse input")
            spec = parse_input(req, project_root=self.project_root, allow_file_refs=self.allow_file_refs)
            meta["steps"]["parse_input_ms"] = int((time.time() - t0) * 1000)
        except ValueError as e:
            meta["where"] = "parse_input"
            meta["steps"]["total_ms"] = int((time.time() - t0) * 1000)
            return {"success": False, "error": str(e), "errorType": "invalid_input", "meta": meta}

        try:
            log_step(logger, "2", f"invoke {spec.model}")
            result = self.router.invoke(spec)
        except InvocationError as e:
            meta["where"] = "invoke"
            meta["steps"]["total_ms"] = int((time.time() - t0) * 1000)
            out: Dict[str, Any] = {"success": False, "retryAfter": None}
            out.update(e.to_dict())
            out["meta"] = meta
            return out

        log_step(logger, "3", "build response")
        meta["steps"]["total_ms"] = int((time.time() - t0) * 1000)
        return {
            "success": True,
            "output": result.output,
            "tokens": result.token_usage.to_dict(),
            "cost": result.cost,
            "duration": result.duration_ms,
            "meta": meta,
        }
