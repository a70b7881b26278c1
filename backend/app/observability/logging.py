from __future__ import annotations

import json
import logging
from typing import Any, Dict

from backend.app.config.redaction import safe_dict

logger = logging.getLogger(__name__)

LOGGING_CONFIG: Dict[str, Any] = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "default": {
            "format": "%(asctime)s %(levelname)s %(name)s %(message)s",
        }
    },
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": "default",
        }
    },
    "root": {
        "level": "INFO",
        "handlers": ["console"],
    },
}


def logging_config(level: str = "INFO") -> Dict[str, Any]:
    config = json.loads(json.dumps(LOGGING_CONFIG))
    config["root"]["level"] = (level or "INFO").upper()
    return config


def safe_redact(event: Dict[str, Any]) -> Dict[str, Any]:
    # Drops credentials and user content; lengths and timings stay.
    return safe_dict(event)


def structured_log(event: Dict[str, Any]) -> None:
    try:
        safe_event = safe_redact(event)
        logger.info(json.dumps(safe_event, separators=(",", ":"), default=str))
    except Exception:
        # logging must never break the request path
        return


__all__ = ["LOGGING_CONFIG", "logging_config", "structured_log", "safe_redact"]
