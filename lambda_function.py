"""AWS Lambda entrypoint.

Design goals:
- Keep this file small and stable.
- Delegate all real logic to src/modelrouter so the same code serves the CLI and Lambda.

Expected event shapes (minimal):
1) API Gateway (body is a JSON string):
   {"body": "{\"model\":\"gpt-4o-mini\",\"user\":\"hi\"}"}

2) Direct invoke / local test (event itself is the JSON dict):
   {"model":"gpt-4o-mini","system":"Be brief.","user":"hi","json_output":false}

Return:
- statusCode: 200 on success, 400 on invalid input, 500 when the invocation failed
- body: JSON string of the LLMClient.run envelope
"""
import json
from typing import Any, Dict

from modelrouter.client import LLMClient
from modelrouter.logging_util import get_logger

logger = get_logger(__name__)

_client = None

def _get_client() -> LLMClient:
    global _client
    if _client is None:
        _client = LLMClient(allow_file_refs=False)
    return _client

def _safe_json_loads(s: Any):
    if isinstance(s, dict):
        return s
    if not isinstance(s, str):
        return {}
    s = s.strip()
    if not s:
        return {}
    try:
        return json.loads(s)
    except ValueError:
        return {}

def _status_for(result: Dict[str, Any]) -> int:
    if result.get("success"):
        return 200
    if result.get("errorType") == "invalid_input":
        return 400
    return 500

def lambda_handler(event: Dict[str, Any], context: Any):
    body = event.get("body", event)
    req = _safe_json_loads(body)

    result = _get_client().run(req, request_id=getattr(context, "aws_request_id", None))
    return {"statusCode": _status_for(result), "body": json.dumps(result, ensure_ascii=False)}
