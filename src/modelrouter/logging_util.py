"""Logging utilities for the router.

- Module loggers live under the "modelrouter" namespace; telemetry.LoggingObserver
  writes retry, JSON-fallback and completion lines to "modelrouter.llm".
- MODELROUTER_LOG_LEVEL sets the level (default INFO).
- A logger that already has handlers (host app configured it) is left untouched.
- log_step numbers the stages of LLMClient.run so a failed request is easy to place.
"""
from __future__ import annotations

import logging
import os

_DEFAULT_LEVEL = os.environ.get("MODELROUTER_LOG_LEVEL", "INFO").upper()

def get_logger(name: str) -> logging.Logger:
    logger = logging.getLogger(name)

    # If already configured elsewhere, do not attach handlers again.
    if logger.handlers:
        return logger

    logger.setLevel(_DEFAULT_LEVEL)

    h = logging.StreamHandler()
    fmt = logging.Formatter("[%(levelname)s] %(name)s:%(lineno)d - %(message)s")
    h.setFormatter(fmt)
    logger.addHandler(h)

    return logger

def log_step(logger: logging.Logger, step: str, msg: str):
    logger.info("[STEP %s] %s", step, msg)
