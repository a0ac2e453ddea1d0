"""Simple CLI for the model router.

Usage examples:
- JSON string input:
  python cli.py "{\"model\":\"gpt-4o-mini\",\"user\":\"hi\"}"

- JSON file input (prefix with @):
  python cli.py @request.json

- Structured output, pretty printed:
  python cli.py "{\"model\":\"gpt-4o-mini\",\"user\":\"List 3 colors\",\"json_output\":true}" --pretty

Notes:
- This CLI does not manage multi-turn or fallback. It is strictly a single call executor.
- Exit status is 0 on success, 1 when the invocation failed, 2 on unreadable input.
"""
import argparse
import json
import sys
from pathlib import Path
from typing import Any, Dict

from modelrouter.client import LLMClient
from modelrouter.logging_util import get_logger

logger = get_logger(__name__)

def _load_input(spec: str) -> Dict[str, Any]:
    if spec.startswith("@"):
        p = Path(spec[1:])
        data = p.read_text(encoding="utf-8")
        return json.loads(data)

    return json.loads(spec)

def main() -> int:
    ap = argparse.ArgumentParser()
    ap.add_argument("input", help="JSON string or @path/to/json")
    ap.add_argument("--pretty", action="store_true", help="Pretty print the output JSON")
    args = ap.parse_args()

    try:
        req = _load_input(args.input)
    except (OSError, ValueError) as e:
        logger.error("Failed to parse input: %s", e)
        return 2

    client = LLMClient(allow_file_refs=True)
    out = client.run(req, request_id="CLI")

    if args.pretty:
        print(json.dumps(out, ensure_ascii=False, indent=2))
    else:
        print(json.dumps(out, ensure_ascii=False))
    return 0 if out.get("success") else 1

if __name__ == "__main__":
    sys.exit(main())
