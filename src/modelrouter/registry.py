"""Model registry: provider routing, credentials, token defaults and pricing.

Design:
- The model table is YAML (configs/models.yaml by default). Point
  MODELROUTER_MODELS_FILE at another file to replace it wholesale.
- A model's provider is picked by name prefix ("gpt-" -> openai, ...).
  Unmatched models resolve to ProviderId.UNKNOWN, which has no credential.
- Credentials are read from the environment at lookup time, never cached.

models.yaml supports:
- providers:
    openai:
      api_key_env: OPENAI_API_KEY
      endpoint: https://api.openai.com/v1/chat/completions
      max_tokens: 4096
      prefixes: ["gpt-"]
- pricing:
    gpt-4o-mini: {input: 0.15, output: 0.60}   # USD per 1M tokens
- defaults:
    dev: gpt-4o-mini
    prod: gpt-4o
"""
from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import yaml

from .logging_util import get_logger
from .types import DEFAULT_MAX_OUTPUT_TOKENS, ModelConfig, ModelPricing, ProviderId

logger = get_logger(__name__)

DEFAULT_MODELS_FILE = Path(__file__).resolve().parent / "configs" / "models.yaml"

def _load_yaml(path: Path) -> Dict:
    if not path.exists():
        return {}
    try:
        return yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except Exception as e:
        logger.error("Failed to load YAML: %s (%s)", path, e)
        return {}

def load_model_table(path: Optional[Path] = None) -> Dict:
    if path is None:
        override = os.environ.get("MODELROUTER_MODELS_FILE", "").strip()
        path = Path(override) if override else DEFAULT_MODELS_FILE

    table = _load_yaml(path)
    if not table and path != DEFAULT_MODELS_FILE:
        logger.error("Model table %s is missing or empty, using %s", path, DEFAULT_MODELS_FILE)
        table = _load_yaml(DEFAULT_MODELS_FILE)
    return table

def sanitize_api_key(raw: Optional[str]) -> str:
    k = (raw or "").strip()
    k = k.strip(' "\'`')
    k = k.strip("“”‘’")
    return k

class ModelRegistry:
    def __init__(self, table: Optional[Dict[str, Any]] = None, environ: Optional[Mapping[str, str]] = None):
        self._table = table if table is not None else load_model_table()
        self._environ = environ if environ is not None else os.environ

    def _provider_cfg(self, provider: ProviderId) -> Dict[str, Any]:
        return (self._table.get("providers") or {}).get(provider.value) or {}

    def resolve_provider(self, model: str) -> ProviderId:
        name = (model or "").strip()
        for pid in (ProviderId.OPENAI, ProviderId.ANTHROPIC):
            prefixes = self._provider_cfg(pid).get("prefixes") or []
            if any(name.startswith(p) for p in prefixes):
                return pid
        return ProviderId.UNKNOWN

    def resolve_credential(self, model: str) -> Optional[str]:
        env_name = self._provider_cfg(self.resolve_provider(model)).get("api_key_env")
        if not env_name:
            return None
        return sanitize_api_key(self._environ.get(env_name)) or None

    def resolve_default_max_tokens(self, model: str) -> int:
        v = self._provider_cfg(self.resolve_provider(model)).get("max_tokens")
        return int(v) if v else DEFAULT_MAX_OUTPUT_TOKENS

    def endpoint(self, provider: ProviderId) -> Optional[str]:
        return self._provider_cfg(provider).get("endpoint")

    def pricing(self, model: str) -> Optional[ModelPricing]:
        p = (self._table.get("pricing") or {}).get(model)
        if not p:
            return None
        return ModelPricing(input=float(p.get("input", 0.0)), output=float(p.get("output", 0.0)))

    def cost(self, model: str, input_tokens: int, output_tokens: int) -> float:
        """USD for one call. Models without a price entry cost 0.0."""
        pricing = self.pricing(model)
        if pricing is None:
            return 0.0
        return (input_tokens / 1_000_000) * pricing.input + (output_tokens / 1_000_000) * pricing.output

    def default_model(self, env: str = "prod") -> str:
        defaults = self._table.get("defaults") or {}
        if env == "dev":
            return defaults.get("dev") or "gpt-4o-mini"
        return defaults.get("prod") or "gpt-4o"

    def model_config(self, model: str) -> ModelConfig:
        return ModelConfig(
            name=model,
            provider=self.resolve_provider(model),
            api_key=self.resolve_credential(model),
            pricing=self.pricing(model),
            max_tokens=self.resolve_default_max_tokens(model),
        )
