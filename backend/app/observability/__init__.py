from __future__ import annotations

from .request_id import get_request_id
from .logging import LOGGING_CONFIG, logging_config, structured_log, safe_redact

__all__ = [
    "get_request_id",
    "LOGGING_CONFIG",
    "logging_config",
    "structured_log",
    "safe_redact",
]
